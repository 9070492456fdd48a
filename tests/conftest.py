import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture
def empty_grid():
    """Factory for a rows x cols grid of empty-slot items."""
    from satchel.items import EMPTY

    def _factory(rows, cols):
        return [[EMPTY] * cols for _ in range(rows)]

    return _factory
