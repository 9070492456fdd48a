import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _item_validator() -> Draft202012Validator:
    """Validator for the item schema shipped alongside this package, built once."""
    text = resources.files('satchel.items').joinpath('item.schema.json').read_text(encoding='utf-8')
    schema = json.loads(text)
    Draft202012Validator.check_schema(schema)
    logger.debug('Loaded item schema resource')
    return Draft202012Validator(schema)


def item_errors(data: Any) -> List[str]:
    """Return one ``field: message`` line per schema violation in ``data``."""
    messages = []
    for err in _item_validator().iter_errors(data):
        where = '.'.join(str(p) for p in err.path) or '<item>'
        messages.append(f'{where}: {err.message}')
    return sorted(messages)


def validate_item_dict(data: Dict[str, Any]) -> None:
    """
    Validate a single item dictionary against the item JSON schema.

    Every violation is logged under the item's id; the most relevant one is raised.

    Raises:
        jsonschema.ValidationError if the data is invalid.
    """
    error = best_match(_item_validator().iter_errors(data))
    if error is None:
        return
    label = data.get('id', '<unnamed>') if isinstance(data, dict) else repr(data)
    for message in item_errors(data):
        logger.error('Invalid item %s: %s', label, message)
    raise error


__all__ = [
    'item_errors',
    'validate_item_dict',
]
