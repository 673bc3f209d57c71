"""Settings for the map engine and editing session."""

import logging
from pathlib import Path

from typing_extensions import Annotated
from pydantic import BaseModel, Field
from pydantic_yaml import parse_yaml_file_as

from hexworld.map.paint import DEFAULT_BRUSH_COLOR
from hexworld.map.paths import DEFAULT_PATH_COLOR, DEFAULT_STROKE_WIDTH
from hexworld.map.tiles import Color

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path("hexworld.yaml")


class EngineSettings(BaseModel):
    """Engine settings, usually read from YAML."""

    hex_size: Annotated[float, Field(gt=0, description="Hex size in pixels.")] = 25
    autosave_delay: Annotated[
        float, Field(ge=0.2, le=1.0, description="Autosave debounce, in seconds.")
    ] = 1.0
    default_brush_color: Color = DEFAULT_BRUSH_COLOR
    default_path_color: Color = DEFAULT_PATH_COLOR
    default_path_width: Annotated[float, Field(gt=0)] = DEFAULT_STROKE_WIDTH
    store_path: Path = Path("worlds")
    world: str = "default"

    @property
    def world_path(self) -> Path:
        """Directory with the maps of the current world."""
        return self.store_path / self.world


def load_settings(path: Path | None = None) -> EngineSettings:
    """Load settings from a YAML file, or use the defaults."""
    path = DEFAULT_SETTINGS_PATH if path is None else Path(path)
    if not path.exists():
        logger.warning(f"Settings file not found, using defaults: {path!s}")
        return EngineSettings()
    return parse_yaml_file_as(EngineSettings, path)
