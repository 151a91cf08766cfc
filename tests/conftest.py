"""Shared point sets for the test suites."""

import numpy as np
import pytest

# A 26 x 30 lattice with offset rows is within 0.1% of a hexagonal lattice
# and tiles the unit torus exactly.
HEX_COLUMNS = 26
HEX_ROWS = 30


def hexagonal_lattice(columns: int = HEX_COLUMNS, rows: int = HEX_ROWS) -> np.ndarray:
    """Triangular lattice on the unit torus; ``rows`` must be even."""
    i, j = np.meshgrid(np.arange(columns), np.arange(rows))
    x = (i + 0.5 * (j % 2)) / columns
    y = j / rows
    return np.column_stack([x.ravel(), y.ravel()])


@pytest.fixture
def hex_lattice():
    return hexagonal_lattice()


@pytest.fixture
def random_points():
    rng = np.random.default_rng(42)
    return rng.random((256, 2))
