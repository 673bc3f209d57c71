"""Set up the data."""

from pathlib import Path

from pydantic_yaml import parse_yaml_file_as

from .models import Presets

__all__ = ["data_path", "presets"]

data_path = Path(__file__).parent

presets = parse_yaml_file_as(Presets, data_path / "presets.yaml")
