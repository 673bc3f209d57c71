"""Grid generation and resizing."""

import logging
from typing import Literal

from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field

from .hexes import HexCoord
from .tiles import DEFAULT_TILE_DATA, HexTile, tiles_by_key

logger = logging.getLogger(__name__)

RADIUS_BOUNDS = (1, 100)
SIDE_BOUNDS = (1, 200)


class ConfigurationError(ValueError):
    """Map settings are invalid (shown to the user as a validation message)."""


class RadialShape(BaseModel):
    """Hexagonal disk around the origin."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["radial"] = "radial"
    radius: int


class RectangularShape(BaseModel):
    """Block of `width` columns and `height` rows."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rectangular"] = "rectangular"
    width: int
    height: int


GridShape = Annotated[RadialShape | RectangularShape, Field(discriminator="kind")]


def _check_bound(name: str, value: int, bounds: tuple[int, int]) -> None:
    lo, hi = bounds
    if not (lo <= value <= hi):
        raise ConfigurationError(f"{name} must be between {lo} and {hi}, got: {value}")


def check_shape(shape: RadialShape | RectangularShape) -> None:
    """Reject shape parameters outside the supported bounds."""
    if isinstance(shape, RadialShape):
        _check_bound("Radius", shape.radius, RADIUS_BOUNDS)
    elif isinstance(shape, RectangularShape):
        _check_bound("Width", shape.width, SIDE_BOUNDS)
        _check_bound("Height", shape.height, SIDE_BOUNDS)
    else:
        raise TypeError(f"Unknown shape passed: {shape!r}")


def radial_coords(radius: int) -> list[HexCoord]:
    """Cells at most `radius` steps away from the origin."""
    N = radius
    res: list[HexCoord] = []
    for q in range(-N, N + 1):
        for r in range(max(-N, -q - N), min(N, -q + N) + 1):
            res.append(HexCoord(root=(q, r, -q - r)))
    return res


def rectangular_coords(width: int, height: int) -> list[HexCoord]:
    """Cells of a `width` x `height` block, centered on the origin.

    Rows use "odd-r" offsets, so that every other row is shifted by half a
    cell and the block renders as a rectangle in the pointy-top layout.

    https://www.redblobgames.com/grids/hexagons/#conversions-offset
    """
    res: list[HexCoord] = []
    for row in range(-(height // 2), height - height // 2):
        for col in range(-(width // 2), width - width // 2):
            q = col - (row - (row & 1)) // 2
            res.append(HexCoord.at(q, row))
    return res


def shape_coords(shape: RadialShape | RectangularShape) -> list[HexCoord]:
    """Coordinates covered by a shape."""
    check_shape(shape)
    if isinstance(shape, RadialShape):
        return radial_coords(shape.radius)
    return rectangular_coords(shape.width, shape.height)


def generate_grid(shape: RadialShape | RectangularShape) -> list[HexTile]:
    """Create fresh tiles for a shape, all with default data."""
    res = [HexTile(hex=coord, data=DEFAULT_TILE_DATA) for coord in shape_coords(shape)]
    logger.debug(f"Generated {len(res)} tiles for {shape!r}")
    return res


def generate_radial(radius: int) -> list[HexTile]:
    """Create a radial grid."""
    return generate_grid(RadialShape(radius=radius))


def generate_rectangular(width: int, height: int) -> list[HexTile]:
    """Create a rectangular grid."""
    return generate_grid(RectangularShape(width=width, height=height))


def resize_grid(
    tiles: list[HexTile], shape: RadialShape | RectangularShape
) -> list[HexTile]:
    """Fit existing tiles to a new shape.

    Cells present before and after keep their data. New cells get default
    data. Cells outside the new shape are dropped along with their links,
    so this can't be undone from the result alone.
    """
    old = tiles_by_key(tiles)
    res: list[HexTile] = []
    kept = 0
    for coord in shape_coords(shape):
        prev = old.get(coord.key)
        if prev is not None:
            res.append(prev)
            kept += 1
        else:
            res.append(HexTile(hex=coord, data=DEFAULT_TILE_DATA))
    logger.debug(
        f"Resized grid to {shape!r}: kept {kept}, added {len(res) - kept}, "
        f"dropped {len(old) - kept}"
    )
    return res


def dropped_tiles(
    tiles: list[HexTile], shape: RadialShape | RectangularShape
) -> list[HexTile]:
    """Tiles that a resize to `shape` would discard."""
    new_keys = {coord.key for coord in shape_coords(shape)}
    return [tile for tile in tiles if tile.key not in new_keys]
