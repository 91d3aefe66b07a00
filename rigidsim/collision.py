"""Contact detection between shapes and the impulse constraints that resolve contacts."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from rigidsim.geometry import (
    Vec2,
    cross,
    dcmp,
    dot,
    foot_of_perpendicular,
    is_in_polygon,
    length,
    normalize,
    perp_scale,
    reverse,
    sqr,
)
from rigidsim.render import RenderBuffers
from rigidsim.shapes import Circle, Rectangle, Shape, ShapeType

GJK_MAX_ITERATIONS = 20
EPA_MAX_ITERATIONS = 50
RESTITUTION = 0.2
FRICTION = 0.3
POSITION_SLOP = 0.1
POSITION_BIAS = 0.01


@dataclass(slots=True)
class Edge:
    """A directed segment from ``a`` to ``b``."""

    a: Vec2 = field(default_factory=Vec2)
    b: Vec2 = field(default_factory=Vec2)

    def normal(self) -> Vec2:
        """Unit vector perpendicular to the edge, turned left of its direction."""
        return normalize(perp_scale(1.0, self.b - self.a))


@dataclass
class ContactConstraint:
    """A contact at ``p`` pushing ``b`` away from ``a`` along ``normal``."""

    a: Shape
    b: Shape
    p: Vec2
    normal: Vec2
    penetration: float

    def process_velocity(self) -> None:
        """Apply the bouncing impulse along the normal, then a bounded friction impulse."""
        a, b, p, normal = self.a, self.b, self.p, self.normal
        vab = b.point_velocity(p) - a.point_velocity(p)
        ra = p - a.core
        rb = p - b.core
        va = -normal.dot(vab)
        effect_mass = (
            a.inv_mass
            + b.inv_mass
            + sqr(cross(ra, normal)) * a.inv_inertia
            + sqr(cross(rb, normal)) * b.inv_inertia
        )
        j_normal = (1 + RESTITUTION) * va / effect_mass
        if j_normal < 0:
            return
        impulse = normal * j_normal
        a.apply_impulse(ra, -impulse)
        b.apply_impulse(rb, impulse)

        tangent = Vec2(-normal.y, normal.x)
        vab = b.point_velocity(p) - a.point_velocity(p)
        j_tangent = -vab.dot(tangent) / (
            a.inv_mass
            + b.inv_mass
            + sqr(cross(ra, tangent)) * a.inv_inertia
            + sqr(cross(rb, tangent) * b.inv_inertia)
        )
        limit = FRICTION * j_normal
        j_tangent = max(min(j_tangent, limit), -limit)
        friction = tangent * j_tangent
        a.apply_impulse(ra, -friction)
        b.apply_impulse(rb, friction)

    def process_position(self, interval: float) -> None:
        """Push the bodies apart in proportion to the penetration beyond the slop."""
        a, b, p, normal = self.a, self.b, self.p, self.normal
        ra = p - a.core
        rb = p - b.core
        excess = max(self.penetration - POSITION_SLOP, 0.0)
        corrective = (POSITION_BIAS * excess / interval) / (
            a.inv_mass
            + b.inv_mass
            + sqr(cross(ra, normal)) * a.inv_inertia
            + sqr(cross(rb, normal) * b.inv_inertia)
        )
        if corrective > 0:
            a.apply_impulse(ra, normal * -corrective)
            b.apply_impulse(rb, normal * corrective)


@dataclass
class CollisionDetector:
    """Finds contacts between shape pairs and collects them as constraints."""

    constraints: list[ContactConstraint] = field(default_factory=list)

    def test_collision(self, buffers: RenderBuffers, a: Shape, b: Shape) -> bool:
        """Test a pair of shapes, recording a constraint when they touch."""
        kinds = (a.shape_type, b.shape_type)
        if kinds == (ShapeType.RECTANGLE, ShapeType.RECTANGLE):
            return self.gjk(buffers, a, b)
        if kinds == (ShapeType.CIRCLE, ShapeType.CIRCLE):
            return self.circle_vs_circle(a, b)
        if kinds == (ShapeType.CIRCLE, ShapeType.RECTANGLE):
            return self.sat(buffers, a, b)
        if kinds == (ShapeType.RECTANGLE, ShapeType.CIRCLE):
            return self.sat(buffers, b, a)
        return False

    def clear(self) -> None:
        self.constraints.clear()

    def circle_vs_circle(self, c1: Circle, c2: Circle) -> bool:
        n = c2.core - c1.core
        depth = c1.radius + c2.radius - length(n)
        if depth >= 0:
            normal = normalize(n)
            self.constraints.append(
                ContactConstraint(c1, c2, c1.core + normal * c1.radius, normal, depth)
            )
            return True
        return False

    def rect_overlap(self, r1: Rectangle, r2: Rectangle) -> bool:
        """Overlap of the two rectangles taken as axis-aligned around their centres."""
        overlap_x = (r1.core.x + r1.width / 2 >= r2.core.x - r2.width / 2) and (
            r2.core.x + r2.width / 2 >= r1.core.x - r1.width / 2
        )
        overlap_y = (r1.core.y + r1.height / 2 >= r2.core.y - r2.height / 2) and (
            r2.core.y + r2.height / 2 >= r1.core.y - r1.height / 2
        )
        return overlap_x and overlap_y

    def circle_overlaps_rect(self, c: Circle, r: Rectangle) -> bool:
        """Overlap of a circle with a rectangle taken as axis-aligned around its centre."""
        nearest_x = max(r.core.x - r.width / 2, min(c.core.x, r.core.x + r.width / 2))
        nearest_y = max(r.core.y - r.height / 2, min(c.core.y, r.core.y + r.height / 2))
        dx = c.core.x - nearest_x
        dy = c.core.y - nearest_y
        return dx * dx + dy * dy < c.radius * c.radius

    def gjk(self, buffers: RenderBuffers, a: Rectangle, b: Rectangle) -> bool:
        """Gilbert-Johnson-Keerthi intersection test; runs EPA on a hit."""
        direction = a.core - b.core
        simplex = [self.support(buffers, a, b, direction)]
        direction = reverse(direction)
        for _ in range(GJK_MAX_ITERATIONS + 1):
            point = self.support(buffers, a, b, direction)
            if dcmp(dot(point, direction)) <= 0:
                return False
            simplex.append(point)
            inside, direction = is_in_polygon(simplex, direction)
            if inside:
                self.epa(buffers, simplex, a, b)
                return True
        return False

    def sat(self, buffers: RenderBuffers, circle: Circle, rect: Rectangle) -> bool:
        """Separating-axis test of a circle against a polygon."""
        points = [v.xy() for v in rect.vertices(buffers)][: rect.npoints]
        min_depth = math.inf
        best_normal = Vec2()
        best_point = Vec2()
        for start, end in zip(points, points[1:] + points[:1]):
            edge = Edge(start, end)
            normal = edge.normal()
            min0, max0 = rect.projection(buffers, normal)
            min1, max1 = circle.projection(buffers, normal)
            if max0 < min1 or max1 < min0:
                return False
            foot = foot_of_perpendicular(circle.core, edge.a, edge.b)
            if (
                dcmp(dot(edge.a - foot, edge.b - foot)) <= 0
                and max0 < max1
                and min1 < max0
                and max0 - min1 < min_depth
            ):
                min_depth = max0 - min1
                best_normal = normal
                best_point = foot
        if min_depth < math.inf:
            self.constraints.append(
                ContactConstraint(rect, circle, best_point, best_normal, min_depth)
            )
            return True
        for point in points:
            if circle.contains_point(point):
                depth = circle.radius - length(circle.core - point)
                self.constraints.append(
                    ContactConstraint(
                        circle, rect, point, normalize(point - circle.core), depth
                    )
                )
                return True
        return False

    def support(
        self, buffers: RenderBuffers, a: Shape, b: Shape, direction: Vec2
    ) -> Vec2:
        """Support point of the Minkowski difference ``a - b`` along ``direction``."""
        return a.support(buffers, direction) - b.support(buffers, reverse(direction))

    def epa(
        self, buffers: RenderBuffers, simplex: list[Vec2], a: Rectangle, b: Rectangle
    ) -> None:
        """Expanding-polytope search for the contact normal and depth."""
        count = len(simplex)
        edges = [Edge(simplex[i], simplex[(i + 1) % count]) for i in range(count)]
        origin = Vec2(0.0, 0.0)
        for _ in range(EPA_MAX_ITERATIONS):
            normal = Vec2()
            min_distance = math.inf
            index = 0
            for i, edge in enumerate(edges):
                h = foot_of_perpendicular(origin, edge.a, edge.b)
                distance = length(h)
                if distance < min_distance:
                    min_distance = distance
                    index = i
                    if min_distance < 1e-6:
                        candidate = perp_scale(1.0, edge.b - edge.a)
                        probe = self.support(buffers, a, b, normal)
                        if probe == edges[index].a or probe == edges[index].b:
                            normal = candidate
                        else:
                            normal = -candidate
                    else:
                        normal = Vec2(h.x / min_distance, h.y / min_distance)
            new_point = self.support(buffers, a, b, normal)
            closest = edges[index]
            if new_point == closest.a or new_point == closest.b:
                contact_a = a.support(buffers, normal)
                contact_b = b.support(buffers, reverse(normal))
                p = Vec2(
                    (contact_a.x + contact_b.x) * 0.5, (contact_a.y + contact_b.y) * 0.5
                )
                self.constraints.append(ContactConstraint(a, b, p, normal, min_distance))
                return
            edges.append(Edge(closest.a, new_point))
            edges.append(Edge(new_point, closest.b))
            del edges[index]