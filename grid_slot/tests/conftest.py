import logging

import pytest

from grid_slot.config import load_game_config


class FixedGridGenerator:
    """Stands in for SymbolGenerator: hands out the rows of prepared grids in order."""

    def __init__(self, *grids):
        self.rows = [list(row) for grid in grids for row in grid]
        self.position = 0
        self.seed = 0

    def draw_many(self, count):
        row = self.rows[self.position % len(self.rows)]
        self.position += 1
        assert len(row) == count
        return list(row)


def make_filler_grid(rows=10, columns=10, symbols=('A', 'B')):
    """Checkerboard of two standard symbols: no row or column pays."""
    return [[symbols[(r + c) % 2] for c in range(columns)] for r in range(rows)]


@pytest.fixture
def game_config():
    return load_game_config()


@pytest.fixture
def filler_grid():
    return make_filler_grid()


@pytest.fixture
def fixed_generator():
    return FixedGridGenerator


@pytest.fixture(autouse=True)
def reset_grid_slot_logger():
    """CLI runs attach a handler to a per-invocation stream; drop it afterwards."""
    yield
    logger = logging.getLogger('grid_slot')
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
