"""Path annotations: free-form polylines drawn over the map."""

from typing import Any
from uuid import uuid4

from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field

from .hexes import Point
from .tiles import Color

DEFAULT_PATH_COLOR = "#FFD700"
DEFAULT_STROKE_WIDTH = 3


def new_id() -> str:
    """Create a new random id."""
    return uuid4().hex


class Path(BaseModel):
    """Ordered polyline in layout space.

    Points are not snapped to cells, so paths stay put when the grid is
    resized.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    color: Color = DEFAULT_PATH_COLOR
    stroke_width: Annotated[float, Field(gt=0)] = DEFAULT_STROKE_WIDTH
    points: tuple[Point, ...] = ()


def create_path(
    paths: list[Path],
    color: str = DEFAULT_PATH_COLOR,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
) -> tuple[Path, list[Path]]:
    """Create an empty path, prepended so that the newest comes first."""
    path = Path(name=f"Path {len(paths) + 1}", color=color, stroke_width=stroke_width)
    return path, [path] + list(paths)


def append_point(paths: list[Path], path_id: str, point: Point) -> list[Path]:
    """Add a point to the end of a path."""
    res: list[Path] = []
    for p in paths:
        if p.id == path_id:
            p = p.model_copy(update=dict(points=p.points + (point,)))
        res.append(p)
    return res


def remove_last_point(paths: list[Path], path_id: str) -> list[Path]:
    """Drop the last point of a path (if it has any)."""
    res: list[Path] = []
    for p in paths:
        if p.id == path_id and p.points:
            p = p.model_copy(update=dict(points=p.points[:-1]))
        res.append(p)
    return res


def update_path(paths: list[Path], path_id: str, **updates: Any) -> list[Path]:
    """Change attributes of a path (name, color, stroke width, points)."""
    if "id" in updates:
        raise ValueError("Path ids can't be changed.")
    found = [p for p in paths if p.id == path_id]
    if not found:
        return list(paths)
    # Validate the result, since model_copy doesn't
    updated = Path.model_validate({**found[0].model_dump(), **updates})
    return [updated if p.id == path_id else p for p in paths]


def delete_path(paths: list[Path], path_id: str) -> list[Path]:
    """Remove a path."""
    return [p for p in paths if p.id != path_id]
