"""Paint tools: brush, bucket (flood fill), erase and eyedropper.

Every tool takes the current tiles and returns new ones; the input list is
never changed. A target cell that isn't on the grid (which happens all the
time while dragging) makes the tool a no-op.
"""

import logging
from collections import deque
from typing import Literal

from pydantic import BaseModel, ConfigDict

from .hexes import HexCoord
from .tiles import Color, HexTile, find_tile, tiles_by_key

logger = logging.getLogger(__name__)

PaintMode = Literal["brush", "bucket", "erase"]

DEFAULT_BRUSH_COLOR = "#8A2BE2"
LIGHT_ICON = "#FFFFFF"
DARK_ICON = "#000000"


def relative_luminance(color: str) -> float:
    """Luminance of a "#RRGGBB" color, from 0 (black) to 1 (white)."""
    raw = color.lstrip("#")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6:
        raise ValueError(f"Expected a '#RRGGBB' color, got: {color!r}")
    r, g, b = (int(raw[i : i + 2], 16) for i in (0, 2, 4))
    return (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255


def contrast_icon_color(color: str) -> str:
    """Icon color that stays readable on top of `color`."""
    return DARK_ICON if relative_luminance(color) > 0.5 else LIGHT_ICON


class Brush(BaseModel):
    """Paint settings of the editing session (not persisted with the map)."""

    model_config = ConfigDict(frozen=True)

    mode: PaintMode = "brush"
    color: Color = DEFAULT_BRUSH_COLOR
    icon: str | None = None
    manual_icon_color: Color | None = None

    @property
    def is_icon_color_auto(self) -> bool:
        """Whether the icon color follows the paint color."""
        return self.manual_icon_color is None

    @property
    def icon_color(self) -> str:
        """Icon color that gets painted."""
        if self.manual_icon_color is not None:
            return self.manual_icon_color
        return contrast_icon_color(self.color)

    @property
    def appearance(self) -> tuple[str, str | None]:
        """The (color, icon) pair this brush paints."""
        return (self.color, self.icon)


def effective_mode(brush: Brush, ctrl: bool = False, shift: bool = False) -> PaintMode:
    """Mode after modifier keys: shift erases and ctrl fills, in brush mode only."""
    if brush.mode == "brush":
        if shift:
            return "erase"
        if ctrl:
            return "bucket"
    return brush.mode


def _paint(tile: HexTile, brush: Brush) -> HexTile:
    data = tile.data.model_copy(
        update=dict(color=brush.color, icon=brush.icon, icon_color=brush.icon_color)
    )
    return tile.model_copy(update=dict(data=data))


def paint_tile(tiles: list[HexTile], target: HexCoord, brush: Brush) -> list[HexTile]:
    """Paint a single cell with the brush's color, icon and icon color."""
    return [_paint(t, brush) if t.hex == target else t for t in tiles]


def erase_tile(tiles: list[HexTile], target: HexCoord) -> list[HexTile]:
    """Clear the appearance of a single cell. Links are kept."""
    res: list[HexTile] = []
    for tile in tiles:
        if tile.hex == target:
            data = tile.data.model_copy(
                update=dict(color=None, icon=None, icon_color=None)
            )
            tile = tile.model_copy(update=dict(data=data))
        res.append(tile)
    return res


def bucket_fill(tiles: list[HexTile], target: HexCoord, brush: Brush) -> list[HexTile]:
    """Flood fill the 6-connected region of cells that look like the target.

    A cell joins the region if its (color, icon) pair equals the target's
    pair from before the fill. If the target already looks like the brush,
    nothing changes.
    """
    by_key = tiles_by_key(tiles)
    start = by_key.get(target.key)
    if start is None:
        return list(tiles)
    if start.data.appearance == brush.appearance:
        return list(tiles)

    match = start.data.appearance
    visited = {start.key}
    queue = deque([start.hex])
    while queue:
        current = queue.popleft()
        for nb in current.neighbors:
            if nb.key in visited:
                continue
            nb_tile = by_key.get(nb.key)
            if nb_tile is not None and nb_tile.data.appearance == match:
                visited.add(nb.key)
                queue.append(nb)

    logger.debug(f"Bucket fill from {target.key} covers {len(visited)} tiles")
    return [_paint(t, brush) if t.key in visited else t for t in tiles]


def eyedropper(tiles: list[HexTile], target: HexCoord, brush: Brush) -> Brush:
    """Copy a cell's color, icon and icon color into the brush.

    The grid isn't touched. A cell without an icon color leaves the icon
    color automatic; a cell without a color gives the default brush color.
    """
    tile = find_tile(tiles, target)
    if tile is None:
        return brush
    return brush.model_copy(
        update=dict(
            color=tile.data.color or DEFAULT_BRUSH_COLOR,
            icon=tile.data.icon,
            manual_icon_color=tile.data.icon_color,
        )
    )


def apply_paint(
    tiles: list[HexTile],
    target: HexCoord,
    brush: Brush,
    mode: PaintMode | None = None,
) -> list[HexTile]:
    """Apply the brush at a cell, using `mode` or the brush's own mode."""
    mode = mode or brush.mode
    if mode == "brush":
        return paint_tile(tiles, target, brush)
    elif mode == "bucket":
        return bucket_fill(tiles, target, brush)
    elif mode == "erase":
        return erase_tile(tiles, target)
    raise ValueError(f"Unknown paint mode: {mode!r}")
