"""Plane vectors, vertices, bounding boxes and the geometric helpers used by collision."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import overload

EPSILON = 1e-6


def _ieee_div(num: float, den: float) -> float:
    """Divide following IEEE-754 rules instead of raising on a zero divisor."""
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


@dataclass(frozen=True, slots=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    @overload
    def __mul__(self, factor: Vec2) -> float: ...

    @overload
    def __mul__(self, factor: float) -> Vec2: ...

    def __mul__(self, factor):
        """Scale by a number, or take the dot product with another vector."""
        if isinstance(factor, Vec2):
            return self.dot(factor)
        if isinstance(factor, (int, float)):
            return Vec2(self.x * factor, self.y * factor)
        return NotImplemented

    def __rmul__(self, factor):
        if isinstance(factor, (int, float)):
            return Vec2(self.x * factor, self.y * factor)
        return NotImplemented

    def __truediv__(self, factor: float) -> Vec2:
        return Vec2(self.x / factor, self.y / factor)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y


@dataclass(slots=True)
class Vertex:
    """A coloured vertex as stored in the render buffers."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def xy(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass(slots=True)
class AABB:
    """An axis-aligned bounding box spanning (x0, y0) to (x1, y1)."""

    x0: float = 0.0
    y0: float = 0.0
    x1: float = 0.0
    y1: float = 0.0

    def enlarge(self, w: float) -> AABB:
        """Grow the box by ``w`` on every side."""
        self.x0 -= w
        self.y0 -= w
        self.x1 += w
        self.y1 += w
        return self

    def merge(self, other: AABB) -> AABB:
        """Grow the box to also cover ``other``."""
        self.x0 = min(self.x0, other.x0)
        self.y0 = min(self.y0, other.y0)
        self.x1 = max(self.x1, other.x1)
        self.y1 = max(self.y1, other.y1)
        return self

    def include(self, point: Vec2) -> AABB:
        """Grow the box to also cover ``point``."""
        self.x0 = min(self.x0, point.x)
        self.y0 = min(self.y0, point.y)
        self.x1 = max(self.x1, point.x)
        self.y1 = max(self.y1, point.y)
        return self

    def overlaps(self, other: AABB) -> bool:
        """True when the boxes intersect; touching edges count as overlap."""
        return not (self.x1 < other.x0 or other.x1 < self.x0) and not (
            self.y1 < other.y0 or other.y1 < self.y0
        )


def dcmp(x: float) -> int:
    """Sign of ``x`` with values within 1e-6 of zero treated as zero."""
    if abs(x) < EPSILON:
        return 0
    return -1 if x < 0 else 1


def cross(a: Vec2, b: Vec2) -> float:
    """The z component of the cross product of ``a`` and ``b``."""
    return a.x * b.y - a.y * b.x


def dot(a: Vec2, b: Vec2) -> float:
    return a.x * b.x + a.y * b.y


def on_segment(p1: Vec2, p2: Vec2, q: Vec2) -> bool:
    """True when ``q`` lies on the segment from ``p1`` to ``p2``."""
    u, v = p1 - q, p2 - q
    return dcmp(cross(u, v)) == 0 and dcmp(dot(u, v)) <= 0


def scale(a: float, v: Vec2) -> Vec2:
    """The vector ``v`` scaled by ``a``."""
    return Vec2(v.x * a, v.y * a)


def perp_scale(a: float, v: Vec2) -> Vec2:
    """The cross product of the scalar ``a`` (as a z vector) with ``v``."""
    return Vec2(-v.y * a, v.x * a)


def reverse(a: Vec2) -> Vec2:
    return Vec2(-a.x, -a.y)


def length(a: Vec2) -> float:
    return math.sqrt(a.x * a.x + a.y * a.y)


def normalize(a: Vec2) -> Vec2:
    """Unit vector along ``a``; a zero vector gives NaN components."""
    size = length(a)
    return Vec2(_ieee_div(a.x, size), _ieee_div(a.y, size))


def sqr(a: float) -> float:
    return a * a


def triple_product(a: Vec2, b: Vec2, c: Vec2) -> Vec2:
    """Perpendicular of ``c`` turned toward the side given by the sign of a x b."""
    return perp_scale(float(dcmp(cross(a, b))), c)


def is_in_polygon(simplex: list[Vec2], direction: Vec2) -> tuple[bool, Vec2]:
    """Advance a GJK simplex toward the origin.

    Returns whether the simplex encloses the origin, together with the next
    search direction. ``simplex`` is reduced in place when a point is dropped.
    """
    if len(simplex) < 2:
        raise ValueError("a simplex needs at least two points")
    origin = Vec2(0.0, 0.0)
    if len(simplex) == 2:
        first, second = simplex
        if on_segment(first, second, origin):
            return True, direction
        edge = second - first
        return False, triple_product(edge, origin - first, edge)

    a, b, c = simplex[0], simplex[1], simplex[2]
    ca = a - c
    cb = b - c
    co = origin - c
    ca_perp = triple_product(cb, ca, ca)
    cb_perp = triple_product(ca, cb, cb)
    if dcmp(dot(ca_perp, co)) >= 0:
        del simplex[1]
        return False, ca_perp
    if dcmp(dot(cb_perp, co)) >= 0:
        del simplex[0]
        return False, cb_perp
    return True, direction


def foot_of_perpendicular(point: Vec2, a: Vec2, b: Vec2) -> Vec2:
    """Projection of ``point`` onto the line through ``a`` and ``b``."""
    ab = b - a
    t = _ieee_div(dot(point - a, ab), dot(ab, ab))
    return Vec2(a.x + ab.x * t, a.y + ab.y * t)