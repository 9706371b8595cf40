"""
Static arena entities and shared enums
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .utils import Vec2, clamp_position, point_in_rect


class Facing(str, Enum):
    LEFT = "left"
    RIGHT = "right"


def facing_from_x(x: float, current: Facing) -> Facing:
    """Facing follows the sign of x, zero keeps the current facing"""
    if x > 0.0:
        return Facing.RIGHT
    if x < 0.0:
        return Facing.LEFT
    return current


@dataclass(frozen=True)
class Arena:
    """Playfield bounds, origin at the top-left corner"""
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Arena extents must be positive, got {self.width}x{self.height}")

    @property
    def bounds(self) -> Vec2:
        return (self.width, self.height)

    def clamp_position(self, pos: Vec2, half_extent: Vec2, strict: bool) -> Vec2:
        return clamp_position(pos, half_extent, self.bounds, strict)

    def contains(self, point: Vec2) -> bool:
        return 0.0 <= point[0] <= self.width and 0.0 <= point[1] <= self.height


@dataclass(frozen=True)
class Pen:
    """Goal rectangle cats must be herded into"""
    position: Vec2  # center
    size: Vec2 = (60.0, 60.0)

    def __post_init__(self):
        if self.size[0] <= 0 or self.size[1] <= 0:
            raise ValueError(f"Pen size must be positive, got {self.size}")

    @property
    def half_extent(self) -> Tuple[float, float]:
        return (self.size[0] * 0.5, self.size[1] * 0.5)

    def contains(self, point: Vec2) -> bool:
        return point_in_rect(point, self.position, self.size)

    def fits_in(self, arena: Arena) -> bool:
        hx, hy = self.half_extent
        x, y = self.position
        return hx <= x <= arena.width - hx and hy <= y <= arena.height - hy
