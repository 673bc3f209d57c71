"""Data models."""

from pydantic import BaseModel, model_validator

from hexworld.map.hexes import HexCoord
from hexworld.map.tiles import Color


class TerrainColor(BaseModel):
    """Named paint color."""

    name: str
    color: Color


class Presets(BaseModel):
    """Palette offered by the paint tools."""

    terrain_colors: list[TerrainColor]
    icons: list[str]

    def get_color(self, name: str) -> str:
        """Get a terrain color by name."""
        for tc in self.terrain_colors:
            if tc.name.lower() == name.lower():
                return tc.color
        raise ValueError(f"No terrain color exists for name: {name}")

    @model_validator(mode="after")
    def _chk_unique(self) -> "Presets":
        """Ensure names aren't repeated."""
        names = [tc.name for tc in self.terrain_colors]
        if len(names) != len(set(names)) or len(self.icons) != len(set(self.icons)):
            raise ValueError("Duplicate preset names.")
        return self


class LinkedEntity(BaseModel):
    """Something a tile can link to (dungeon, faction, city).

    Supplied by the other parts of the compendium; maps only keep the id.
    """

    id: str
    name: str


class EventLocation(BaseModel):
    """Where a calendar event happens."""

    map_id: str
    hex: HexCoord


class CalendarEvent(BaseModel):
    """Calendar event, possibly placed on a map cell."""

    id: str
    name: str
    location: EventLocation | None = None


def events_at_tile(
    events: list[CalendarEvent], map_id: str, hexcoord: HexCoord
) -> list[CalendarEvent]:
    """Events placed on a given cell of a given map."""
    return [
        ev
        for ev in events
        if ev.location is not None
        and ev.location.map_id == map_id
        and ev.location.hex == hexcoord
    ]
