"""Map persistence: a small async CRUD interface and two implementations."""

import logging
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from pydantic_yaml import parse_yaml_file_as, to_yaml_file

from hexworld.map.world_map import MapID, NewMap, WorldMap

logger = logging.getLogger(__name__)


class MapNotFoundError(KeyError):
    """No map is stored under the given id."""


class MapStore(Protocol):
    """Storage for the maps of one world."""

    async def list_maps(self) -> list[WorldMap]:
        """Get all maps."""

    async def get_map(self, map_id: MapID) -> WorldMap | None:
        """Get a map, or None if it doesn't exist."""

    async def create_map(self, new_map: NewMap) -> MapID:
        """Store a new map, returning its id."""

    async def replace_map(self, world_map: WorldMap) -> None:
        """Overwrite an existing map."""

    async def delete_map(self, map_id: MapID) -> None:
        """Delete a map."""


def generate_id() -> MapID:
    """Create a new map id."""
    return uuid4().hex


class InMemoryMapStore:
    """Map store that keeps everything in a dict."""

    def __init__(self, maps: dict[MapID, WorldMap] | None = None):
        self.maps = dict(maps or {})

    async def list_maps(self) -> list[WorldMap]:
        return list(self.maps.values())

    async def get_map(self, map_id: MapID) -> WorldMap | None:
        return self.maps.get(map_id)

    async def create_map(self, new_map: NewMap) -> MapID:
        map_id = generate_id()
        self.maps[map_id] = new_map.with_id(map_id)
        return map_id

    async def replace_map(self, world_map: WorldMap) -> None:
        if world_map.id not in self.maps:
            raise MapNotFoundError(world_map.id)
        self.maps[world_map.id] = world_map

    async def delete_map(self, map_id: MapID) -> None:
        if map_id not in self.maps:
            raise MapNotFoundError(map_id)
        del self.maps[map_id]


class YamlMapStore:
    """Map store with one YAML file per map, in a per-world directory."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _file(self, map_id: MapID) -> Path:
        return self.path / f"{map_id}.yaml"

    async def list_maps(self) -> list[WorldMap]:
        if not self.path.exists():
            return []
        res: list[WorldMap] = []
        for yml_path in sorted(self.path.glob("*.yaml")):
            try:
                res.append(parse_yaml_file_as(WorldMap, yml_path))
            except Exception:
                logger.warning(f"Failed to load file as map: {yml_path!s}")
        return res

    async def get_map(self, map_id: MapID) -> WorldMap | None:
        fp = self._file(map_id)
        if not fp.exists():
            return None
        return parse_yaml_file_as(WorldMap, fp)

    async def create_map(self, new_map: NewMap) -> MapID:
        map_id = generate_id()
        self.path.mkdir(parents=True, exist_ok=True)
        to_yaml_file(self._file(map_id), new_map.with_id(map_id))
        logger.info(f"Created map {new_map.name!r} as {map_id}")
        return map_id

    async def replace_map(self, world_map: WorldMap) -> None:
        fp = self._file(world_map.id)
        if not fp.exists():
            raise MapNotFoundError(world_map.id)
        to_yaml_file(fp, world_map)
        logger.debug(f"Saved map {world_map.id}")

    async def delete_map(self, map_id: MapID) -> None:
        fp = self._file(map_id)
        if not fp.exists():
            raise MapNotFoundError(map_id)
        fp.unlink()
        logger.info(f"Deleted map {map_id}")
