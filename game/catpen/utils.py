"""
Vector and arena geometry helpers
"""

from __future__ import annotations
import math
from typing import Tuple

Vec2 = Tuple[float, float]


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length, zero vectors stay zero"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def rotate(x: float, y: float, theta: float) -> Tuple[float, float]:
    """Rotate a vector counter-clockwise by theta radians"""
    c = math.cos(theta)
    s = math.sin(theta)
    return c * x - s * y, s * x + c * y


def distance(a: Vec2, b: Vec2) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def clamp_position(pos: Vec2, half_extent: Vec2, bounds: Vec2, strict: bool) -> Vec2:
    """
    Clamp a center position into the arena.

    strict keeps the whole box inside [half, bound - half] (cats); the loose
    clamp only keeps the center inside [0, bound] (the dog may overhang).
    """
    if strict:
        hx, hy = half_extent
    else:
        hx, hy = 0.0, 0.0
    return (
        clamp(pos[0], hx, bounds[0] - hx),
        clamp(pos[1], hy, bounds[1] - hy),
    )


def rects_overlap(pos_a: Vec2, size_a: Vec2, pos_b: Vec2, size_b: Vec2) -> bool:
    """Center based AABB test, touching edges count as overlap"""
    if abs(pos_a[0] - pos_b[0]) > (size_a[0] + size_b[0]) * 0.5:
        return False
    if abs(pos_a[1] - pos_b[1]) > (size_a[1] + size_b[1]) * 0.5:
        return False
    return True


def point_in_rect(point: Vec2, center: Vec2, size: Vec2) -> bool:
    """Inclusive test of point against center +/- size / 2"""
    hx = size[0] * 0.5
    hy = size[1] * 0.5
    return (center[0] - hx <= point[0] <= center[0] + hx
            and center[1] - hy <= point[1] <= center[1] + hy)
