"""
Pytest configuration and shared fixtures for hexworld tests.
"""

import pytest

from hexworld.map.grid import RadialShape, RectangularShape, generate_grid
from hexworld.map.hexes import HexCoord
from hexworld.map.paint import Brush
from hexworld.map.world_map import NewMap
from hexworld.storage.store import InMemoryMapStore


@pytest.fixture
def radial_tiles():
    """Radius 2 grid (19 tiles), all default."""
    return generate_grid(RadialShape(radius=2))


@pytest.fixture
def rect_tiles():
    """4 x 3 rectangular grid, all default."""
    return generate_grid(RectangularShape(width=4, height=3))


@pytest.fixture
def origin():
    """The center cell."""
    return HexCoord.at(0, 0)


@pytest.fixture
def red_home_brush():
    """Brush painting red with the Home icon."""
    return Brush(color="#FF0000", icon="Home")


@pytest.fixture
def blue_brush():
    """Brush painting blue without an icon."""
    return Brush(mode="bucket", color="#0000FF")


@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemoryMapStore()


@pytest.fixture
def new_radial_map():
    """Unsaved radius 2 map."""
    return NewMap.generate("Westmarch", RadialShape(radius=2))
