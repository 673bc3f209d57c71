"""
Tests for tile data and the linking policy.
"""

import pytest

from hexworld.map.hexes import HexCoord
from hexworld.map.tiles import (
    NEUTRAL_FILL,
    LinkKind,
    TileData,
    build_link_index,
    find_tile,
    set_tile_links,
    update_tile_data,
)


class TestTileData:
    """The payload model."""

    def test_defaults(self):
        """No color, no icon, no links."""
        data = TileData()
        assert data.color is None
        assert data.fill == NEUTRAL_FILL
        assert not data.has_links
        assert data.links(LinkKind.FACTION) == frozenset()

    def test_appearance(self):
        """Flood fill matches on displayed color and icon."""
        assert TileData(icon="Skull").appearance == (NEUTRAL_FILL, "Skull")
        assert TileData(color="#123456").appearance == ("#123456", None)


class TestLinks:
    """Replacing link sets and indexing them."""

    def test_set_links(self, radial_tiles):
        """Only the chosen kind on the chosen tile changes."""
        h = HexCoord.at(1, -1)
        tiles = set_tile_links(radial_tiles, h, LinkKind.FACTION, ["f1", "f2"])
        tile = find_tile(tiles, h)
        assert tile.data.faction_ids == {"f1", "f2"}
        assert tile.data.dungeon_ids == frozenset()
        others = [t for t in tiles if t.hex != h]
        assert all(not t.data.has_links for t in others)

    def test_replace_not_merge(self, radial_tiles):
        """Setting links replaces the previous set."""
        h = HexCoord.at(0, 0)
        tiles = set_tile_links(radial_tiles, h, LinkKind.CITY, ["a", "b"])
        tiles = set_tile_links(tiles, h, LinkKind.CITY, ["c"])
        assert find_tile(tiles, h).data.city_ids == {"c"}

    def test_off_grid_is_noop(self, radial_tiles):
        """Unknown cells leave the grid as it was."""
        tiles = set_tile_links(radial_tiles, HexCoord.at(9, 9), LinkKind.CITY, ["x"])
        assert tiles == radial_tiles

    def test_input_untouched(self, radial_tiles):
        """The input list keeps its tiles."""
        before = list(radial_tiles)
        set_tile_links(radial_tiles, HexCoord.at(0, 0), LinkKind.DUNGEON, ["d"])
        assert radial_tiles == before

    def test_link_index(self, radial_tiles):
        """Reverse lookup lists every linking cell."""
        a, b = HexCoord.at(0, 0), HexCoord.at(1, 0)
        tiles = set_tile_links(radial_tiles, a, LinkKind.DUNGEON, ["d1", "d2"])
        tiles = set_tile_links(tiles, b, LinkKind.DUNGEON, ["d1"])
        index = build_link_index(tiles, LinkKind.DUNGEON)
        assert set(index) == {"d1", "d2"}
        assert set(index["d1"]) == {a, b}
        assert index["d2"] == [a]
        assert build_link_index(tiles, LinkKind.CITY) == {}


class TestUpdateTileData:
    """Partial edits of a tile."""

    def test_partial_update(self, radial_tiles):
        """Other fields are kept."""
        h = HexCoord.at(0, 1)
        tiles = update_tile_data(radial_tiles, h, color="#00FF00", dungeon_ids=["d"])
        tiles = update_tile_data(tiles, h, icon="Tent")
        data = find_tile(tiles, h).data
        assert (data.color, data.icon) == ("#00FF00", "Tent")
        assert data.dungeon_ids == {"d"}

    def test_unknown_field(self, radial_tiles):
        """Typos are errors, not silent no-ops."""
        with pytest.raises(ValueError):
            update_tile_data(radial_tiles, HexCoord.at(0, 0), colour="#000000")

    def test_bad_color(self, radial_tiles):
        """Colors must be hex colors."""
        with pytest.raises(ValueError):
            update_tile_data(radial_tiles, HexCoord.at(0, 0), color="blue")
        with pytest.raises(ValueError):
            update_tile_data(radial_tiles, HexCoord.at(0, 0), icon_color="#GGGGGG")
