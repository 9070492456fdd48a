import logging
import os
from typing import Optional, Union

PACKAGE_LOGGER = "satchel"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: Union[int, str, None], default: int) -> int:
    if isinstance(level, int):
        return level
    if level:
        resolved = logging.getLevelName(level.upper())
        if isinstance(resolved, int):
            return resolved
    return default


def configure_logging(level: Union[int, str, None] = None, stream=None) -> logging.Logger:
    """Attach one handler to the ``satchel`` logger and set its level.

    SATCHEL_LOG_LEVEL wins over ``level``; unknown names fall back to WARNING.
    The root logger is left alone, and repeated calls reuse the same handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_resolve_level(os.getenv("SATCHEL_LOG_LEVEL") or level, logging.WARNING))

    handler: Optional[logging.Handler] = next(
        (h for h in logger.handlers if getattr(h, "_satchel_handler", False)), None
    )
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler._satchel_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    elif stream is not None and isinstance(handler, logging.StreamHandler):
        handler.setStream(stream)
    return logger
