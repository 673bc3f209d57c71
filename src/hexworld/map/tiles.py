"""Tile payloads and the tile-to-entity linking policy.

Tiles own their links one-directionally: a tile stores the ids of the
dungeons, factions and cities it points at, and nothing points back.
Reverse lookups (entity -> tiles) are built by indexing on demand with
`build_link_index`.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any

from typing_extensions import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from .hexes import HexCoord

EntityID = str

COLOR_PATTERN = r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


def normalize_color(value: str) -> str:
    """Canonical "#RRGGBB" form: upper case, short "#RGB" expanded."""
    raw = value[1:]
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    return f"#{raw.upper()}"


Color = Annotated[str, Field(pattern=COLOR_PATTERN), AfterValidator(normalize_color)]
"""Hex color string, stored in canonical form so equal colors compare equal."""

NEUTRAL_FILL = "#CCCCCC"
"""Fill the renderer uses for tiles without a color."""


class LinkKind(str, Enum):
    """Kind of entity a tile can link to."""

    DUNGEON = "dungeon"
    FACTION = "faction"
    CITY = "city"

    @property
    def field_name(self) -> str:
        """Name of the `TileData` field holding this kind of link."""
        return f"{self.value}_ids"


class TileData(BaseModel):
    """Per-tile payload: appearance plus links to other entities."""

    model_config = ConfigDict(frozen=True)

    color: Color | None = None
    icon: str | None = None
    icon_color: Color | None = None
    dungeon_ids: frozenset[EntityID] = frozenset()
    faction_ids: frozenset[EntityID] = frozenset()
    city_ids: frozenset[EntityID] = frozenset()

    @property
    def fill(self) -> str:
        """Color as displayed, with the neutral fill for unset colors."""
        return self.color or NEUTRAL_FILL

    @property
    def appearance(self) -> tuple[str, str | None]:
        """The (displayed color, icon) pair that flood fill matches on."""
        return (self.fill, self.icon)

    def links(self, kind: LinkKind) -> frozenset[EntityID]:
        """Get the link set for some kind of entity."""
        return getattr(self, kind.field_name)

    @property
    def has_links(self) -> bool:
        """Whether any entity is linked to this tile."""
        return any(self.links(kind) for kind in LinkKind)


DEFAULT_TILE_DATA = TileData()


class HexTile(BaseModel):
    """A cell of the grid with its data. Identity is the coordinate."""

    model_config = ConfigDict(frozen=True)

    hex: HexCoord
    data: TileData = DEFAULT_TILE_DATA

    @property
    def key(self) -> str:
        """Canonical key of the cell."""
        return self.hex.key


def tiles_by_key(tiles: Iterable[HexTile]) -> dict[str, HexTile]:
    """Index tiles by canonical coordinate key."""
    return {tile.key: tile for tile in tiles}


def find_tile(tiles: Iterable[HexTile], hexcoord: HexCoord) -> HexTile | None:
    """Find the tile at a coordinate, if it is on the grid."""
    for tile in tiles:
        if tile.hex == hexcoord:
            return tile
    return None


def replace_tile_data(
    tiles: list[HexTile], hexcoord: HexCoord, data: TileData
) -> list[HexTile]:
    """Return new tiles with the data of a single cell replaced.

    Unknown coordinates leave the grid as it was.
    """
    res: list[HexTile] = []
    for tile in tiles:
        if tile.hex == hexcoord:
            tile = tile.model_copy(update=dict(data=data))
        res.append(tile)
    return res


def update_tile_data(
    tiles: list[HexTile], hexcoord: HexCoord, **updates: Any
) -> list[HexTile]:
    """Return new tiles with some data fields of a single cell changed."""
    tile = find_tile(tiles, hexcoord)
    if tile is None:
        return list(tiles)
    bad = set(updates) - set(TileData.model_fields)
    if bad:
        raise ValueError(f"Unknown tile data fields: {sorted(bad)}")
    # Re-validate, so that lists of ids become frozensets
    new_data = TileData.model_validate({**tile.data.model_dump(), **updates})
    return replace_tile_data(tiles, hexcoord, new_data)


def set_tile_links(
    tiles: list[HexTile],
    hexcoord: HexCoord,
    kind: LinkKind,
    ids: Iterable[EntityID],
) -> list[HexTile]:
    """Replace the link set for one kind of entity on one tile."""
    return update_tile_data(tiles, hexcoord, **{kind.field_name: frozenset(ids)})


def build_link_index(
    tiles: Iterable[HexTile], kind: LinkKind
) -> dict[EntityID, list[HexCoord]]:
    """Reverse lookup: which cells link to each entity (of one kind)."""
    res: dict[EntityID, list[HexCoord]] = {}
    for tile in tiles:
        for ent_id in sorted(tile.data.links(kind)):
            res.setdefault(ent_id, []).append(tile.hex)
    return res
