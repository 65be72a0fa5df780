# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sixgrid" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sixgrid.engine import Grid  # noqa: E402
from sixgrid.storage import MoveLog  # noqa: E402


def snapshot(grid):
    """Values and candidates of every cell, for before/after comparisons."""
    return [(c.row, c.col, c.value, frozenset(c.candidates)) for c in grid.cells()]


@pytest.fixture
def grid():
    return Grid()


@pytest.fixture
def moves_path(tmp_path):
    return str(tmp_path / "moves.txt")


@pytest.fixture
def logged_grid(moves_path):
    g = Grid(move_log=MoveLog(moves_path))
    yield g
    g.move_log.close()
