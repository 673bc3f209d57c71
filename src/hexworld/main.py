"""Command line for managing the maps of a world."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from hexworld.config import EngineSettings, load_settings
from hexworld.data import presets
from hexworld.map.grid import (
    ConfigurationError,
    RadialShape,
    RectangularShape,
    dropped_tiles,
)
from hexworld.map.tiles import DEFAULT_TILE_DATA, LinkKind, build_link_index
from hexworld.state.catalog import MapCatalog
from hexworld.storage.store import MapNotFoundError, YamlMapStore

logger = logging.getLogger(__name__)


def _add_shape_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--radius", type=int, help="Radius of a radial map.")
    parser.add_argument("--width", type=int, help="Columns of a rectangular map.")
    parser.add_argument("--height", type=int, help="Rows of a rectangular map.")


def _shape_from_args(args: argparse.Namespace) -> RadialShape | RectangularShape:
    if args.radius is not None:
        if args.width is not None or args.height is not None:
            raise ConfigurationError("Give either --radius or --width/--height.")
        return RadialShape(radius=args.radius)
    if args.width is None or args.height is None:
        raise ConfigurationError("Rectangular maps need both --width and --height.")
    return RectangularShape(width=args.width, height=args.height)


def make_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="hexworld", description=__doc__)
    parser.add_argument("--settings", type=Path, default=None, help="Settings YAML.")
    parser.add_argument("--world", default=None, help="World to work on.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_new = sub.add_parser("new", help="Create a map.")
    p_new.add_argument("name")
    _add_shape_args(p_new)

    sub.add_parser("list", help="List maps.")

    p_show = sub.add_parser("show", help="Describe a map.")
    p_show.add_argument("map_id")

    p_resize = sub.add_parser("resize", help="Change the shape or size of a map.")
    p_resize.add_argument("map_id")
    _add_shape_args(p_resize)
    p_resize.add_argument(
        "--yes", action="store_true", help="Drop edited tiles without asking."
    )

    p_rename = sub.add_parser("rename", help="Rename a map.")
    p_rename.add_argument("map_id")
    p_rename.add_argument("name")

    p_delete = sub.add_parser("delete", help="Delete a map.")
    p_delete.add_argument("map_id")

    sub.add_parser("palette", help="Show terrain colors and icons.")
    return parser


async def run(args: argparse.Namespace, settings: EngineSettings) -> int:
    """Run a parsed command."""
    catalog = MapCatalog(YamlMapStore(settings.world_path))

    if args.command == "new":
        world_map = await catalog.create(args.name, _shape_from_args(args))
        print(f"{world_map.id}\t{world_map.name}\t{len(world_map.tiles)} tiles")
    elif args.command == "list":
        for world_map in await catalog.list():
            print(f"{world_map.id}\t{world_map.name}\t{world_map.shape}")
    elif args.command == "show":
        world_map = await catalog.open(args.map_id)
        painted = [t for t in world_map.tiles if t.data != DEFAULT_TILE_DATA]
        print(f"Name:   {world_map.name}")
        print(f"Shape:  {world_map.shape_params!r}")
        print(f"Tiles:  {len(world_map.tiles)} ({len(painted)} edited)")
        print(f"Paths:  {len(world_map.paths)}")
        for kind in LinkKind:
            index = build_link_index(world_map.tiles, kind)
            print(f"Linked {kind.value}s: {len(index)}")
    elif args.command == "resize":
        shape = _shape_from_args(args)
        world_map = await catalog.open(args.map_id)
        lost = [
            t for t in dropped_tiles(world_map.tiles, shape) if t.data != DEFAULT_TILE_DATA
        ]
        if lost and not args.yes:
            print(
                f"Resizing drops {len(lost)} edited tiles (with their links). "
                "Run again with --yes to go ahead.",
                file=sys.stderr,
            )
            return 1
        resized = world_map.resized(shape)
        await catalog.store.replace_map(resized)
        print(f"{resized.id}\t{resized.name}\t{len(resized.tiles)} tiles")
    elif args.command == "rename":
        world_map = await catalog.rename(args.map_id, args.name)
        print(f"{world_map.id}\t{world_map.name}")
    elif args.command == "delete":
        await catalog.delete(args.map_id)
    elif args.command == "palette":
        for tc in presets.terrain_colors:
            print(f"{tc.name}\t{tc.color}")
        print("Icons: " + ", ".join(presets.icons))
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = make_parser().parse_args(argv)
    settings = load_settings(args.settings)
    if args.world is not None:
        settings = settings.model_copy(update=dict(world=args.world))
    try:
        return asyncio.run(run(args, settings))
    except ConfigurationError as err:
        print(f"Validation error: {err}", file=sys.stderr)
        return 2
    except MapNotFoundError as err:
        print(f"No such map: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
