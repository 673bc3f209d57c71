"""Editing session: the current map, paint tools and debounced autosave.

The session is the single writer of its map. Each edit swaps in a new
`WorldMap` value and restarts the autosave timer, so a burst of edits
(one per pointer-drag frame) ends up as one write of the latest value.
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from hexworld.config import EngineSettings
from hexworld.data import presets
from hexworld.data.models import CalendarEvent, LinkedEntity, events_at_tile
from hexworld.map.grid import RadialShape, RectangularShape
from hexworld.map.hexes import HexCoord, Point, pixel_to_hex
from hexworld.map.paint import (
    Brush,
    PaintMode,
    apply_paint,
    effective_mode,
    eyedropper,
)
from hexworld.map.paths import Path
from hexworld.map import paths as path_ops
from hexworld.map.tiles import (
    EntityID,
    HexTile,
    LinkKind,
    find_tile,
    set_tile_links,
    update_tile_data,
)
from hexworld.map.world_map import MapID, WorldMap, check_name
from hexworld.storage.store import MapNotFoundError, MapStore

logger = logging.getLogger(__name__)


class AutosaveFailed(BaseModel):
    """Notice that the latest edits are not stored yet."""

    map_id: MapID
    error: str
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EditingSession:
    """Edits one map and keeps it saved."""

    def __init__(
        self,
        store: MapStore,
        world_map: WorldMap,
        settings: EngineSettings | None = None,
        brush: Brush | None = None,
    ):
        self.store = store
        self.settings = settings or EngineSettings()
        self.current = world_map
        self.brush = brush or Brush(color=self.settings.default_brush_color)
        self.selected: HexCoord | None = None
        self.drawing_path_id: str | None = None
        self.notices: list[AutosaveFailed] = []

        self._dirty = False
        self._timer: asyncio.TimerHandle | None = None
        self._writes: set[asyncio.Task] = set()
        self._writing = False

    @classmethod
    async def open(
        cls, store: MapStore, map_id: MapID, settings: EngineSettings | None = None
    ) -> "EditingSession":
        """Start editing a stored map."""
        world_map = await store.get_map(map_id)
        if world_map is None:
            raise MapNotFoundError(map_id)
        return cls(store, world_map, settings=settings)

    # Saving

    @property
    def has_unsaved_changes(self) -> bool:
        """Whether the current map differs from the last write."""
        return self._dirty

    def commit(self, world_map: WorldMap) -> None:
        """Make `world_map` the current value and schedule a save."""
        self.current = world_map
        self._dirty = True
        self._schedule_save()

    def _schedule_save(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: the edit waits for an explicit flush()
            return
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.settings.autosave_delay, self._fire)

    def _fire(self) -> None:
        self._timer = None
        if self._writing:
            # The running write loop picks up the newer map
            return
        task = asyncio.get_running_loop().create_task(self._write_current())
        self._writes.add(task)
        task.add_done_callback(self._writes.discard)

    async def _write_current(self) -> None:
        """Write the current map until the stored one is up to date.

        Only one write runs at a time, so an older map can never land on top
        of a newer one. Edits made while a write is in flight go out in the
        next round.
        """
        if self._writing:
            return
        self._writing = True
        try:
            while self._dirty:
                world_map = self.current
                try:
                    await self.store.replace_map(world_map)
                except Exception as exc:
                    # Keep the edit in memory; it goes out with the next save
                    logger.warning(f"Autosave failed for map {world_map.id}: {exc!r}")
                    self.notices.append(
                        AutosaveFailed(map_id=world_map.id, error=str(exc))
                    )
                    return
                if world_map is self.current:
                    self._dirty = False
        finally:
            self._writing = False

    async def flush(self) -> None:
        """Write pending edits now, instead of waiting for the timer."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        while self._writes:
            await asyncio.gather(*self._writes)
        if self._dirty:
            await self._write_current()

    # Brush

    def _update_brush(self, **updates: Any) -> Brush:
        # Validate the result, since model_copy doesn't
        self.brush = Brush.model_validate({**self.brush.model_dump(), **updates})
        return self.brush

    def set_mode(self, mode: PaintMode) -> Brush:
        """Pick brush, bucket or erase."""
        return self._update_brush(mode=mode)

    def set_color(self, color: str) -> Brush:
        """Set the paint color."""
        return self._update_brush(color=color)

    def choose_terrain(self, name: str) -> Brush:
        """Set the paint color from a terrain preset."""
        return self.set_color(presets.get_color(name))

    def toggle_icon(self, icon: str) -> Brush:
        """Select an icon, or clear it if it's already selected."""
        if icon not in presets.icons:
            raise ValueError(f"Unknown icon: {icon!r}")
        new_icon = None if self.brush.icon == icon else icon
        return self._update_brush(icon=new_icon)

    def set_icon_color(self, color: str | None) -> Brush:
        """Set a manual icon color, or None to go back to automatic."""
        return self._update_brush(manual_icon_color=color)

    # Painting

    def paint_at(self, hexcoord: HexCoord, ctrl: bool = False, shift: bool = False) -> bool:
        """Use the current paint tool on a cell. Returns whether anything changed."""
        mode = effective_mode(self.brush, ctrl=ctrl, shift=shift)
        old_tiles = self.current.tiles
        new_tiles = apply_paint(old_tiles, hexcoord, self.brush, mode=mode)
        if new_tiles == old_tiles:
            return False
        self.commit(self.current.with_tiles(new_tiles))
        return True

    def paint_at_point(self, point: Point, ctrl: bool = False, shift: bool = False) -> bool:
        """Use the current paint tool under a pointer position."""
        return self.paint_at(
            pixel_to_hex(point, self.settings.hex_size), ctrl=ctrl, shift=shift
        )

    def pick_at(self, hexcoord: HexCoord) -> Brush:
        """Eyedropper: copy a cell's look into the brush."""
        self.brush = eyedropper(self.current.tiles, hexcoord, self.brush)
        return self.brush

    # Tile data

    def select(self, hexcoord: HexCoord | None) -> HexTile | None:
        """Select a cell for the data panel (None, or off-grid, clears it)."""
        tile = None if hexcoord is None else find_tile(self.current.tiles, hexcoord)
        self.selected = None if tile is None else tile.hex
        return tile

    @property
    def selected_tile(self) -> HexTile | None:
        """The selected cell."""
        if self.selected is None:
            return None
        return find_tile(self.current.tiles, self.selected)

    def update_tile(self, hexcoord: HexCoord, **updates: Any) -> None:
        """Change data fields of a cell."""
        tiles = update_tile_data(self.current.tiles, hexcoord, **updates)
        self.commit(self.current.with_tiles(tiles))

    def set_links(
        self, hexcoord: HexCoord, kind: LinkKind, ids: Iterable[EntityID]
    ) -> None:
        """Replace the links of one kind on a cell."""
        tiles = set_tile_links(self.current.tiles, hexcoord, kind, ids)
        self.commit(self.current.with_tiles(tiles))

    def linked(
        self, hexcoord: HexCoord, kind: LinkKind, entities: list[LinkedEntity]
    ) -> list[LinkedEntity]:
        """Entities of one kind linked from a cell (ids with no entity are skipped)."""
        tile = find_tile(self.current.tiles, hexcoord)
        if tile is None:
            return []
        ids = tile.data.links(kind)
        return [ent for ent in entities if ent.id in ids]

    def events_at(
        self, hexcoord: HexCoord, events: list[CalendarEvent]
    ) -> list[CalendarEvent]:
        """Calendar events placed on a cell of this map."""
        return events_at_tile(events, self.current.id, hexcoord)

    # Paths

    def add_path(self) -> Path:
        """Create a new path and start drawing it."""
        path, paths = path_ops.create_path(
            self.current.paths,
            color=self.settings.default_path_color,
            stroke_width=self.settings.default_path_width,
        )
        self.commit(self.current.with_paths(paths))
        self.drawing_path_id = path.id
        return path

    def toggle_drawing(self, path_id: str) -> str | None:
        """Start drawing a path, or stop if it's the one being drawn."""
        if self.drawing_path_id == path_id:
            self.drawing_path_id = None
        elif any(p.id == path_id for p in self.current.paths):
            self.drawing_path_id = path_id
        return self.drawing_path_id

    def _commit_paths(self, paths: list[Path]) -> bool:
        if paths == self.current.paths:
            return False
        self.commit(self.current.with_paths(paths))
        return True

    def add_point(self, point: Point) -> bool:
        """Add a point to the path being drawn (if any)."""
        if self.drawing_path_id is None:
            return False
        paths = path_ops.append_point(self.current.paths, self.drawing_path_id, point)
        return self._commit_paths(paths)

    def remove_last_point(self, path_id: str) -> bool:
        """Undo the last point of a path."""
        return self._commit_paths(path_ops.remove_last_point(self.current.paths, path_id))

    def update_path(self, path_id: str, **updates: Any) -> bool:
        """Change a path's name, color or stroke width."""
        return self._commit_paths(
            path_ops.update_path(self.current.paths, path_id, **updates)
        )

    def delete_path(self, path_id: str) -> bool:
        """Remove a path."""
        if self.drawing_path_id == path_id:
            self.drawing_path_id = None
        return self._commit_paths(path_ops.delete_path(self.current.paths, path_id))

    # Settings

    async def save_settings(
        self, name: str, shape: RadialShape | RectangularShape
    ) -> WorldMap:
        """Rename and resize the map, then store it right away.

        Resizing drops the cells (and their links) outside the new shape.
        Store errors are raised, and the session keeps the previous map.
        """
        name = check_name(name)
        updated = self.current.resized(shape).renamed(name)
        await self.flush()
        await self.store.replace_map(updated)
        self.current = updated
        self._dirty = False
        if self.selected is not None and self.selected_tile is None:
            self.selected = None
        logger.info(f"Saved settings of map {updated.id}")
        return updated
