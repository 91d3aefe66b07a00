"""Rigid bodies: rectangles and circles with mass, velocity and spin."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import ClassVar

from rigidsim.geometry import AABB, Vec2, Vertex, cross, perp_scale, scale, sqr
from rigidsim.render import CircleData, RenderBuffers

GRAVITY = 9.18
PI = 3.1415926


class ShapeType(IntEnum):
    RECTANGLE = 1
    CIRCLE = 2
    TRIANGLE = 3


def screen_to_world(x: float, y: float, width: int, height: int) -> Vec2:
    """Map window pixel coordinates to world coordinates centred on the window, y up."""
    return Vec2(x - width // 2, height // 2 - y)


def _half(extent: int) -> int:
    """Half of a window extent, truncated toward zero."""
    return int(extent / 2)


class Shape(ABC):
    """A rigid body whose outline lives in a set of render buffers."""

    shape_type: ClassVar[ShapeType]

    def __init__(self, position: Vec2 = Vec2()) -> None:
        self.id = 0
        self.mass = 0.0
        self.inv_mass = 0.0
        self.inertia = 0.0
        self.inv_inertia = 0.0
        self.speed = Vec2()
        self.ang_speed = 0.0
        self.core = position
        self.force = Vec2()
        self.index = 0
        self.active = True
        self.awake = True
        self.angle = 0.0

    @abstractmethod
    def draw(self, buffers: RenderBuffers):
        """Register the shape's outline in ``buffers``."""

    @abstractmethod
    def vertices(self, buffers: RenderBuffers) -> list[Vertex]:
        """The shape's live vertices inside ``buffers``."""

    @abstractmethod
    def gravity_move(self, buffers: RenderBuffers, t: float, width: int, height: int) -> None:
        """Advance the shape under gravity alone."""

    @abstractmethod
    def keep_inside(self, buffers: RenderBuffers, t: float, width: int, height: int) -> None:
        """Push the shape back when it leaves the window."""

    @abstractmethod
    def aabb(self, buffers: RenderBuffers) -> AABB:
        """The shape's axis-aligned bounding box."""

    def move(self, vertices: list[Vertex], offset: Vec2) -> None:
        """Translate ``vertices`` in place by ``offset``."""
        for v in vertices:
            v.x += offset.x
            v.y += offset.y

    def rotate(self, vertices: list[Vertex], angle: float) -> None:
        """Rotate ``vertices`` in place by ``angle`` radians about the shape's centre."""
        cosa = math.cos(angle)
        sina = math.sin(angle)
        cx, cy = self.core.x, self.core.y
        for v in vertices:
            dx, dy = v.x - cx, v.y - cy
            v.x = dx * cosa - dy * sina + cx
            v.y = dx * sina + dy * cosa + cy

    def process(self, buffers: RenderBuffers, t: float) -> None:
        """Integrate position and angle over ``t`` and update the stored vertices."""
        offset = self.speed * t
        ang_offset = self.ang_speed * t
        self.core = self.core + offset
        self.angle += ang_offset
        data = self.vertices(buffers)
        self.move(data, offset)
        if self.shape_type is ShapeType.CIRCLE:
            return
        self.rotate(data, ang_offset)

    def point_velocity(self, p: Vec2) -> Vec2:
        """Velocity of the body point at world position ``p``."""
        return self.speed + perp_scale(self.ang_speed, p - self.core)

    def support(self, buffers: RenderBuffers, direction: Vec2) -> Vec2:
        """The vertex furthest along ``direction``."""
        best = Vec2()
        max_dot = -math.inf
        for v in self.vertices(buffers):
            point = v.xy()
            d = point.dot(direction)
            if d > max_dot + 1e-6:
                max_dot = d
                best = point
        return best

    def apply_gravity(self, t: float) -> None:
        self.apply_impulse(Vec2(0.0, 0.0), Vec2(0.0, -GRAVITY) * self.mass * t)

    def apply_impulse(self, r: Vec2, impulse: Vec2) -> None:
        """Apply ``impulse`` at offset ``r`` from the centre."""
        self.speed = self.speed + impulse * self.inv_mass
        self.apply_torque(cross(r, impulse))

    def apply_torque(self, torque: float) -> None:
        self.ang_speed += torque * self.inv_inertia


class Triangle(Shape):
    """An equilateral triangle that has no collision outline and no mass."""

    shape_type = ShapeType.TRIANGLE

    def __init__(self, position: Vec2 = Vec2()) -> None:
        super().__init__(position)
        self.edge = 0.1
        self.speed = Vec2(20.0, self.speed.y)

    def draw(self, buffers: RenderBuffers) -> list[Vertex]:
        """Return the triangle's corners; they are not stored in ``buffers``."""
        x, y = self.core.x, self.core.y
        half = self.edge / 2
        top = y + half * math.sqrt(3)
        return [Vertex(x - half, y), Vertex(x + half, y), Vertex(x, top)]

    def vertices(self, buffers: RenderBuffers) -> list[Vertex]:
        return []

    def gravity_move(self, buffers: RenderBuffers, t: float, width: int, height: int) -> None:
        dx = self.speed.x * t * 2.0 / width
        dy = (self.speed.y * t + GRAVITY * t * t / 2) * 2.0 / height
        self.speed = Vec2(self.speed.x, self.speed.y + GRAVITY * t)
        self.core = Vec2(self.core.x + dx, self.core.y + dy)

    def keep_inside(self, buffers: RenderBuffers, t: float, width: int, height: int) -> None:
        """Triangles are not held inside the window."""
        return None

    def aabb(self, buffers: RenderBuffers) -> AABB:
        return AABB()


class Rectangle(Shape):
    """A 60 x 30 box of unit mass."""

    shape_type = ShapeType.RECTANGLE

    def __init__(self, position: Vec2 = Vec2()) -> None:
        super().__init__(position)
        self.width = 60.0
        self.height = 30.0
        self.npoints = 0
        self.mass = 1.0
        self.inv_mass = 1 / self.mass
        self.inertia = self.mass * (sqr(self.width) + sqr(self.height)) / 12
        self.inv_inertia = 1 / self.inertia

    def draw(self, buffers: RenderBuffers) -> None:
        x, y = self.core.x, self.core.y
        left, right = x - self.width / 2, x + self.width / 2
        top, bottom = y + self.height / 2, y - self.height / 2
        data = [
            Vertex(left, top, 0.0, 0.0, 1.0, 0.0),
            Vertex(right, top, 0.0, 0.0, 1.0, 0.0),
            Vertex(right, bottom, 0.0, 0.0, 1.0, 0.0),
            Vertex(left, bottom, 0.0, 0.0, 1.0, 0.0),
        ]
        self.rotate(data, self.angle)
        self.npoints = len(data)
        buffers.add_vertices(data)
        self.index = buffers.index_count()
        buffers.add_indices(self.npoints)

    def vertices(self, buffers: RenderBuffers) -> list[Vertex]:
        start = buffers.indices[self.index]
        return buffers.vertices[start : start + self.npoints]

    def gravity_move(self, buffers: RenderBuffers, t: float, width: int, height: int) -> None:
        """Rectangles are moved by ``process``; there is no separate gravity step."""
        return None

    def keep_inside(self, buffers: RenderBuffers, t: float, width: int, height: int) -> None:
        """Apply a floor impulse at every corner that is beyond the top or bottom edge."""
        half_height = _half(height)
        normal = Vec2(0.0, 1.0)
        for v in self.vertices(buffers)[:4]:
            point = v.xy()
            if point.y <= -half_height or point.y >= half_height:
                r = point - self.core
                offset_y = -half_height - point.y
                effect_mass = 1 / (self.inv_mass + sqr(cross(r, normal)) * self.inv_inertia)
                relative = (self.speed + perp_scale(self.ang_speed, r)).dot(normal)
                constraint = -relative + 0.1 * max(offset_y - 0.1, 0.0) / t
                impulse = effect_mass * constraint
                if impulse > 0:
                    self.apply_impulse(r, scale(impulse, normal))

    def aabb(self, buffers: RenderBuffers) -> AABB:
        x0, x1 = self.projection(buffers, Vec2(1.0, 0.0))
        y0, y1 = self.projection(buffers, Vec2(0.0, 1.0))
        return AABB(x0, y0, x1, y1)

    def projection(self, buffers: RenderBuffers, n: Vec2) -> tuple[float, float]:
        """The (min, max) interval of the corners projected on ``n``."""
        products = [v.xy().dot(n) for v in self.vertices(buffers)]
        return min(products), max(products)


class Circle(Shape):
    """A disc of radius 30 and unit mass."""

    shape_type = ShapeType.CIRCLE

    def __init__(self, position: Vec2 = Vec2()) -> None:
        super().__init__(position)
        self.radius = 30.0
        self.mass = 1.0
        self.inertia = sqr(sqr(self.radius)) * PI / 2
        self.inv_mass = 1 / self.mass
        self.inv_inertia = 1 / self.inertia

    def draw(self, buffers: RenderBuffers) -> None:
        circle = CircleData(Vertex(self.core.x, self.core.y, 0.0, 0.0, 0.0, 1.0), self.radius)
        self.index = buffers.circle_count()
        buffers.add_circle(circle)

    def vertices(self, buffers: RenderBuffers) -> list[Vertex]:
        return [buffers.circles[self.index].v]

    def gravity_move(self, buffers: RenderBuffers, t: float, width: int, height: int) -> None:
        dy = (self.speed.y * t + GRAVITY * t * t / 2) * 2.0 / height
        self.speed = Vec2(self.speed.x, self.speed.y + GRAVITY * t)
        self.core = Vec2(self.core.x, self.core.y + dy)

    def keep_inside(self, buffers: RenderBuffers, t: float, width: int, height: int) -> None:
        """Apply a floor impulse when the disc crosses the top or bottom edge."""
        half_height = _half(height)
        if self.core.y - self.radius < -half_height or self.core.y + self.radius > half_height:
            normal = Vec2(0.0, 1.0)
            r = Vec2(self.core.x, self.core.y - self.radius) - self.core
            offset_y = -half_height - (self.core.y - self.radius)
            effect_mass = 1 / (self.inv_mass + sqr(cross(r, normal)) * self.inv_inertia)
            relative = (self.speed + perp_scale(self.ang_speed, r)).dot(normal)
            constraint = -relative + 0.5 * offset_y / t
            self.apply_impulse(r, scale(effect_mass * constraint, normal))

    def aabb(self, buffers: RenderBuffers) -> AABB:
        return AABB(
            self.core.x - self.radius,
            self.core.y - self.radius,
            self.core.x + self.radius,
            self.core.y + self.radius,
        )

    def projection(self, buffers: RenderBuffers, n: Vec2) -> tuple[float, float]:
        """The (min, max) interval of the disc projected on ``n``."""
        centre = self.core.dot(n)
        return centre - self.radius, centre + self.radius

    def contains_point(self, p: Vec2) -> bool:
        d = p - self.core
        return d.dot(d) <= sqr(self.radius)