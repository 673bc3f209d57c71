"""The map document: grid, shape settings and paths."""

import logging
from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

from .grid import (
    ConfigurationError,
    RadialShape,
    RectangularShape,
    generate_grid,
    resize_grid,
    shape_coords,
)
from .paths import Path
from .tiles import HexTile

logger = logging.getLogger(__name__)

MapID = str


def check_name(name: str) -> str:
    """Clean up a map name, rejecting empty ones."""
    name = name.strip()
    if not name:
        raise ConfigurationError("Map name cannot be empty.")
    return name


class NewMap(BaseModel):
    """A map that hasn't been stored yet (so has no id)."""

    model_config = ConfigDict(frozen=True)

    name: str
    shape: Literal["radial", "rectangular"] = "radial"
    radius: int | None = None
    width: int | None = None
    height: int | None = None
    tiles: list[HexTile]
    paths: list[Path] = []

    @model_validator(mode="after")
    def _check_layout(self) -> "NewMap":
        """Check the size fields and that tiles match the shape."""
        if not self.name.strip():
            raise ValueError("Map name cannot be empty.")
        if self.shape == "radial":
            if self.radius is None or self.width is not None or self.height is not None:
                raise ValueError("Radial maps need a radius and no width/height.")
        else:
            if self.width is None or self.height is None or self.radius is not None:
                raise ValueError("Rectangular maps need width/height and no radius.")

        # Tiles must cover exactly the cells of the shape
        expected = {c.key for c in shape_coords(self.shape_params)}
        keys = [t.key for t in self.tiles]
        if len(keys) != len(set(keys)):
            raise ValueError("Duplicate tiles in map.")
        if set(keys) != expected:
            missing = len(expected - set(keys))
            extra = len(set(keys) - expected)
            raise ValueError(
                f"Tiles don't match the map shape: {missing} missing, {extra} extra"
            )
        return self

    @property
    def shape_params(self) -> RadialShape | RectangularShape:
        """Shape settings as a single object."""
        if self.shape == "radial":
            return RadialShape(radius=self.radius)
        return RectangularShape(width=self.width, height=self.height)

    @classmethod
    def generate(cls, name: str, shape: RadialShape | RectangularShape) -> "NewMap":
        """Create a new map with a freshly generated grid."""
        name = check_name(name)
        tiles = generate_grid(shape)
        return cls(name=name, tiles=tiles, paths=[], **_shape_fields(shape))

    def with_id(self, map_id: MapID) -> "WorldMap":
        """Attach an id, after storing."""
        return WorldMap(id=map_id, **dict(self))


def _shape_fields(shape: RadialShape | RectangularShape) -> dict:
    if isinstance(shape, RadialShape):
        return dict(shape="radial", radius=shape.radius, width=None, height=None)
    return dict(
        shape="rectangular", radius=None, width=shape.width, height=shape.height
    )


class WorldMap(NewMap):
    """A stored map."""

    id: MapID

    def with_tiles(self, tiles: list[HexTile]) -> "WorldMap":
        """Copy with different tiles (for the same shape)."""
        return self.model_copy(update=dict(tiles=list(tiles)))

    def with_paths(self, paths: list[Path]) -> "WorldMap":
        """Copy with different paths."""
        return self.model_copy(update=dict(paths=list(paths)))

    def renamed(self, name: str) -> "WorldMap":
        """Copy with a new name."""
        return self.model_copy(update=dict(name=check_name(name)))

    def resized(self, shape: RadialShape | RectangularShape) -> "WorldMap":
        """Copy fitted to a new shape. Tiles outside it are lost."""
        tiles = resize_grid(self.tiles, shape)
        logger.info(f"Map {self.id!r} resized to {shape!r}")
        return self.model_copy(update=dict(tiles=tiles, **_shape_fields(shape)))
