"""Managing the maps of a world: create, list, rename, delete."""

import logging

from hexworld.map.grid import RadialShape, RectangularShape
from hexworld.map.world_map import MapID, NewMap, WorldMap, check_name
from hexworld.storage.store import MapNotFoundError, MapStore

logger = logging.getLogger(__name__)


class MapCatalog:
    """All maps of a world, on top of a store."""

    def __init__(self, store: MapStore):
        self.store = store

    async def list(self) -> list[WorldMap]:
        """All maps, sorted by name."""
        maps = await self.store.list_maps()
        return sorted(maps, key=lambda m: m.name.lower())

    async def create(
        self, name: str, shape: RadialShape | RectangularShape
    ) -> WorldMap:
        """Generate a new map and store it."""
        new_map = NewMap.generate(name, shape)
        map_id = await self.store.create_map(new_map)
        logger.info(f"Map {new_map.name!r} created with {len(new_map.tiles)} tiles")
        return new_map.with_id(map_id)

    async def open(self, map_id: MapID) -> WorldMap:
        """Get a map that must exist."""
        world_map = await self.store.get_map(map_id)
        if world_map is None:
            raise MapNotFoundError(map_id)
        return world_map

    async def rename(self, map_id: MapID, name: str) -> WorldMap:
        """Rename a map."""
        name = check_name(name)
        world_map = (await self.open(map_id)).renamed(name)
        await self.store.replace_map(world_map)
        return world_map

    async def delete(self, map_id: MapID) -> None:
        """Delete a map.

        Links from other entities (e.g. calendar events placed on its cells)
        are left alone; cleaning those up is up to their owners.
        """
        await self.store.delete_map(map_id)
