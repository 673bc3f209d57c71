"""
Tests for grid generation and resizing.
"""

import pytest

from hexworld.map.grid import (
    ConfigurationError,
    RadialShape,
    RectangularShape,
    dropped_tiles,
    generate_grid,
    generate_radial,
    generate_rectangular,
    resize_grid,
)
from hexworld.map.hexes import HexCoord, axial_to_pixel
from hexworld.map.paint import paint_tile
from hexworld.map.tiles import DEFAULT_TILE_DATA, LinkKind, find_tile, set_tile_links


class TestGenerate:
    """Generation for both shapes."""

    @pytest.mark.parametrize("radius", [1, 2, 5, 12])
    def test_radial_count(self, radius):
        """A disk of radius N has 3N(N+1)+1 cells."""
        tiles = generate_radial(radius)
        assert len(tiles) == 3 * radius * (radius + 1) + 1
        assert all(t.hex.q + t.hex.r + t.hex.s == 0 for t in tiles)
        assert all(t.hex.vector_length <= radius for t in tiles)

    @pytest.mark.parametrize("width,height", [(1, 1), (4, 3), (7, 10), (30, 20)])
    def test_rectangular_count(self, width, height):
        """A block has width*height distinct cells."""
        tiles = generate_rectangular(width, height)
        assert len(tiles) == width * height
        assert len({t.key for t in tiles}) == width * height

    def test_rectangular_rows_line_up(self):
        """Every row spans the same x range (give or take half a cell)."""
        tiles = generate_rectangular(6, 5)
        rows: dict[int, list[float]] = {}
        for t in tiles:
            rows.setdefault(t.hex.r, []).append(axial_to_pixel(t.hex, 1).x)
        lefts = [min(xs) for xs in rows.values()]
        step = 3**0.5
        assert max(lefts) - min(lefts) <= step / 2 + 1e-9

    def test_default_data(self):
        """Fresh tiles have nothing set."""
        assert all(t.data == DEFAULT_TILE_DATA for t in generate_radial(3))

    @pytest.mark.parametrize(
        "shape",
        [
            RadialShape(radius=0),
            RadialShape(radius=101),
            RectangularShape(width=0, height=5),
            RectangularShape(width=5, height=201),
        ],
    )
    def test_out_of_bounds(self, shape):
        """Bad sizes are rejected, not clamped."""
        with pytest.raises(ConfigurationError):
            generate_grid(shape)


class TestResize:
    """Resizing keeps what fits."""

    def test_preserves_overlap(self, radial_tiles, red_home_brush):
        """Cells in both grids keep their data; new ones are default."""
        center = HexCoord.at(0, 0)
        edge = HexCoord.at(2, 0)
        tiles = paint_tile(radial_tiles, center, red_home_brush)
        tiles = set_tile_links(tiles, edge, LinkKind.DUNGEON, ["d1"])

        bigger = resize_grid(tiles, RadialShape(radius=4))
        assert len(bigger) == 61
        assert find_tile(bigger, center).data.color == "#FF0000"
        assert find_tile(bigger, edge).data.dungeon_ids == {"d1"}
        assert find_tile(bigger, HexCoord.at(4, 0)).data == DEFAULT_TILE_DATA

    def test_drops_outside(self, radial_tiles):
        """Shrinking drops the outer cells, links included."""
        edge = HexCoord.at(2, 0)
        tiles = set_tile_links(radial_tiles, edge, LinkKind.CITY, ["c1"])
        smaller = resize_grid(tiles, RadialShape(radius=1))
        assert len(smaller) == 7
        assert find_tile(smaller, edge) is None
        assert [t.hex for t in dropped_tiles(tiles, RadialShape(radius=1))].count(edge) == 1

    def test_idempotent(self, radial_tiles, red_home_brush):
        """Resizing twice to the same shape changes nothing more."""
        tiles = paint_tile(radial_tiles, HexCoord.at(1, 0), red_home_brush)
        shape = RectangularShape(width=5, height=4)
        once = resize_grid(tiles, shape)
        assert resize_grid(once, shape) == once

    def test_shape_change(self, radial_tiles, red_home_brush):
        """Radial to rectangular keeps the shared cells."""
        tiles = paint_tile(radial_tiles, HexCoord.at(0, 0), red_home_brush)
        rect = resize_grid(tiles, RectangularShape(width=3, height=3))
        assert len(rect) == 9
        assert find_tile(rect, HexCoord.at(0, 0)).data.icon == "Home"

    def test_input_untouched(self, radial_tiles):
        """The input list isn't changed."""
        before = list(radial_tiles)
        resize_grid(radial_tiles, RadialShape(radius=1))
        assert radial_tiles == before

    def test_bad_shape(self, radial_tiles):
        """Resize validates like generate."""
        with pytest.raises(ConfigurationError):
            resize_grid(radial_tiles, RadialShape(radius=500))
