"""CPU-side vertex, index and circle buffers that the drawing layer reads from."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from rigidsim.geometry import Vertex


@dataclass(slots=True)
class CircleData:
    """A circle to draw: its centre vertex and its radius."""

    v: Vertex = field(default_factory=Vertex)
    r: float = 0.0


@dataclass
class RenderBuffers:
    """Polygon vertices with their triangle indices, plus the circles to draw."""

    vertices: list[Vertex] = field(default_factory=list)
    circles: list[CircleData] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    def add_vertices(self, vertices: Iterable[Vertex]) -> None:
        """Append copies of ``vertices`` to the polygon vertex buffer."""
        self.vertices.extend(replace(v) for v in vertices)

    def add_indices(self, npoints: int) -> None:
        """Triangulate the last ``npoints`` vertices as a fan from the first one."""
        if npoints < 3:
            return
        if npoints > len(self.vertices):
            raise ValueError(
                f"cannot index {npoints} points, only {len(self.vertices)} vertices stored"
            )
        base = len(self.vertices) - npoints
        for i in range(1, npoints - 1):
            self.indices.extend((base, base + i, base + i + 1))

    def update_vertex(self, vertex: Vertex, index: int) -> None:
        """Replace the vertex referenced by index slot ``index``."""
        self.vertices[self.indices[index]] = replace(vertex)

    def clear_vertices(self) -> None:
        self.vertices.clear()

    def clear_indices(self) -> None:
        self.indices.clear()

    def clear_circles(self) -> None:
        self.circles.clear()

    def add_circle(self, circle: CircleData) -> None:
        """Append a copy of ``circle``."""
        self.circles.append(CircleData(replace(circle.v), circle.r))

    def index_count(self) -> int:
        return len(self.indices)

    def circle_count(self) -> int:
        return len(self.circles)