"""Hexagonal coordinates and the pointy-top pixel layout."""

from math import cos, radians, sin, sqrt
from typing import Any

from pydantic import BaseModel, ConfigDict, RootModel, model_validator


class HexCoord(RootModel[tuple[int, int, int]]):
    """Hex coordinate definition, using cube coordinates.

    https://www.redblobgames.com/grids/hexagons/#coordinates
    """

    model_config = {"frozen": True}

    root: tuple[int, int, int]

    @property
    def q(self) -> int:
        """First 'q' coordinate."""
        return self.root[0]

    @property
    def r(self) -> int:
        """Second 'r' coordinate."""
        return self.root[1]

    @property
    def s(self) -> int:
        """Third 's' coordinate."""
        return self.root[2]

    @model_validator(mode="before")
    @classmethod
    def _set_third_coord(cls, data: Any) -> Any:
        """Set third coordinate if only given two."""
        if isinstance(data, (list, tuple)):
            if len(data) == 2:
                q, r = data
                return (q, r, -(q + r))
        return data

    @model_validator(mode="after")
    def _check_values(self) -> "HexCoord":
        """Check that coordinate values are okay."""
        q, r, s = self.q, self.r, self.s
        if q + r + s != 0:
            raise ValueError(f"Imbalanced hex coords: sum({q}, {r}, {s}) != 0")
        return self

    @classmethod
    def at(cls, q: int, r: int) -> "HexCoord":
        """Coordinate from axial 'q' and 'r'."""
        return cls(root=(q, r, -(q + r)))

    # Keys

    @property
    def key(self) -> str:
        """Canonical string key, "q,r"."""
        return f"{self.q},{self.r}"

    @classmethod
    def from_key(cls, key: str) -> "HexCoord":
        """Parse a canonical "q,r" key."""
        q_str, r_str = key.split(",")
        return cls.at(int(q_str), int(r_str))

    # Comparison operations

    def __eq__(self, rhs: object) -> bool:
        if isinstance(rhs, HexCoord):
            return self.root == rhs.root
        return NotImplemented

    def __ne__(self, rhs: object) -> bool:
        if isinstance(rhs, HexCoord):
            return self.root != rhs.root
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.root)

    # Vector operations

    def __add__(self, rhs: "HexCoord") -> "HexCoord":
        """Add this delta to a coordinate (or another delta)."""
        if isinstance(rhs, HexCoord):
            return HexCoord(root=(self.q + rhs.q, self.r + rhs.r, self.s + rhs.s))
        return NotImplemented

    def __sub__(self, rhs: "HexCoord") -> "HexCoord":
        """Subtract a delta from this coordinate."""
        if isinstance(rhs, HexCoord):
            return HexCoord(root=(self.q - rhs.q, self.r - rhs.r, self.s - rhs.s))
        return NotImplemented

    # Neighbors

    @property
    def neighbors(self) -> list["HexCoord"]:
        """Get direct neighbors of this cell, in `HEX_UNIT_VECTORS` order.

        https://www.redblobgames.com/grids/hexagons/#neighbors
        """
        return [self + vec for vec in HEX_UNIT_VECTORS]

    @property
    def vector_length(self) -> int:
        """Length of the coord as a vector (i.e. distance from center).

        https://www.redblobgames.com/grids/hexagons/#distances
        """
        return max(abs(self.q), abs(self.r), abs(self.s))

    def distance_to(self, other: "HexCoord") -> int:
        """Number of steps between two cells."""
        return (self - other).vector_length

    @classmethod
    def nearest_hex(cls, qf: float, rf: float, sf: float) -> "HexCoord":
        """Nearest coordinates.

        https://www.redblobgames.com/grids/hexagons/#rounding
        """
        q = round(qf)
        r = round(rf)
        s = round(sf)

        qd = abs(q - qf)
        rd = abs(r - rf)
        sd = abs(s - sf)

        if (qd > rd) and (qd > sd):
            q = -(r + s)
        elif rd > sd:
            r = -(q + s)
        else:
            s = -(q + r)
        return cls(root=(q, r, s))


HEX_UNIT_VECTORS = tuple(
    HexCoord(root=_tup)
    for _tup in [(1, 0, -1), (1, -1, 0), (0, -1, 1), (-1, 0, 1), (-1, 1, 0), (0, 1, -1)]
)
"""Vector directions in 'cube' coordinates for hexes."""


def neighbors(hexcoord: HexCoord) -> list[HexCoord]:
    """The six neighbors of a cell."""
    return hexcoord.neighbors


def distance(a: HexCoord, b: HexCoord) -> int:
    """Hex distance between two cells."""
    return a.distance_to(b)


class Point(BaseModel):
    """A point in layout (pixel) space."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


def _check_size(size: float) -> None:
    if size <= 0:
        raise ValueError(f"Hex size must be positive, got: {size!r}")


def axial_to_pixel(hexcoord: HexCoord, size: float) -> Point:
    """Center of a cell in the pointy-top layout.

    https://www.redblobgames.com/grids/hexagons/#hex-to-pixel
    """
    _check_size(size)
    x = size * sqrt(3) * (hexcoord.q + hexcoord.r / 2)
    y = size * 1.5 * hexcoord.r
    return Point(x=x, y=y)


def pixel_to_hex(point: Point, size: float) -> HexCoord:
    """Cell containing a point in the pointy-top layout.

    https://www.redblobgames.com/grids/hexagons/#pixel-to-hex
    """
    _check_size(size)
    qf = (sqrt(3) / 3 * point.x - 1.0 / 3 * point.y) / size
    rf = (2.0 / 3 * point.y) / size
    return HexCoord.nearest_hex(qf, rf, -(qf + rf))


def hex_corners(hexcoord: HexCoord, size: float) -> list[Point]:
    """Corners of a pointy-top cell, clockwise from the lower right."""
    center = axial_to_pixel(hexcoord, size)
    res: list[Point] = []
    for i in range(6):
        angle = radians(60 * i - 30)
        res.append(Point(x=center.x + size * cos(angle), y=center.y + size * sin(angle)))
    return res
