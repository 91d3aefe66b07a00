"""The simulation world and the interactive window that drives it."""

from __future__ import annotations

import argparse
import logging
from itertools import combinations

from rigidsim.collision import CollisionDetector
from rigidsim.render import RenderBuffers
from rigidsim.shapes import Circle, Rectangle, Shape, screen_to_world

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 800
TICK_INTERVAL = 0.05
AABB_MARGIN = 0.001
BACKGROUND = (51, 76, 76)


def quick_aabb(shapes: list[Shape], buffers: RenderBuffers) -> list[tuple[Shape, Shape]]:
    """Pairs of shapes whose slightly enlarged bounding boxes overlap."""
    if len(shapes) <= 1:
        return []
    boxes = [shape.aabb(buffers).enlarge(AABB_MARGIN) for shape in shapes]
    return [
        (shapes[i], shapes[j])
        for i, j in combinations(range(len(shapes)), 2)
        if boxes[i].overlaps(boxes[j])
    ]


class World:
    """Shapes, their render buffers and the collision solver for one window."""

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        self.width = width
        self.height = height
        self.shapes: list[Shape] = []
        self.buffers = RenderBuffers()
        self.detector = CollisionDetector()

    def add_shape(self, shape: Shape) -> None:
        shape.id = len(self.shapes)
        self.shapes.append(shape)
        logger.debug("shape count is %d", len(self.shapes))

    def clear(self) -> None:
        """Remove every shape and empty the render buffers."""
        self.buffers.clear_indices()
        self.buffers.clear_vertices()
        self.buffers.clear_circles()
        self.shapes.clear()

    def spawn_circle(self, x: float, y: float) -> Circle:
        """Create a circle at window pixel (x, y)."""
        circle = Circle(screen_to_world(x, y, self.width, self.height))
        circle.draw(self.buffers)
        self.add_shape(circle)
        return circle

    def spawn_rectangle(self, x: float, y: float) -> Rectangle:
        """Create a rectangle at window pixel (x, y)."""
        rect = Rectangle(screen_to_world(x, y, self.width, self.height))
        rect.draw(self.buffers)
        self.add_shape(rect)
        return rect

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def tick(self) -> None:
        """Advance the simulation by one fixed step."""
        self.step(TICK_INTERVAL)

    def step(self, interval: float) -> None:
        """Integrate, apply gravity and walls, then detect and resolve contacts."""
        if not self.shapes:
            return
        for shape in self.shapes:
            shape.process(self.buffers, interval)
        for shape in self.shapes:
            shape.apply_gravity(interval)
        for shape in self.shapes:
            shape.keep_inside(self.buffers, interval, self.width, self.height)
        for a, b in quick_aabb(self.shapes, self.buffers):
            self.detector.test_collision(self.buffers, a, b)
        for constraint in self.detector.constraints:
            constraint.process_velocity()
            constraint.process_position(interval)
        self.detector.clear()


def _draw(surface, world: World) -> None:
    import pygame

    half_w = world.width / 2
    half_h = world.height / 2

    def to_screen(x: float, y: float) -> tuple[float, float]:
        return x + half_w, half_h - y

    def colour(v) -> tuple[int, int, int]:
        return tuple(max(0, min(255, int(c * 255))) for c in (v.r, v.g, v.b))

    vertices = world.buffers.vertices
    for triangle in zip(*[iter(world.buffers.indices)] * 3):
        corners = [vertices[i] for i in triangle]
        pygame.draw.polygon(
            surface, colour(corners[0]), [to_screen(v.x, v.y) for v in corners]
        )
    for circle in world.buffers.circles:
        pygame.draw.circle(
            surface, colour(circle.v), to_screen(circle.v.x, circle.v.y), circle.r
        )


def main(argv: list[str] | None = None) -> int:
    """Open the simulation window and run until it is closed."""
    parser = argparse.ArgumentParser(
        prog="rigidsim",
        description="Left click drops a circle, right click a box, "
        "Enter drops a circle at the cursor, Space clears.",
    )
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    args = parser.parse_args(argv)

    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
        pygame.display.set_caption("physical engine")
        world = World(args.width, args.height)
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 1:
                        world.spawn_circle(*event.pos)
                    elif event.button == 3:
                        world.spawn_rectangle(*event.pos)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_SPACE:
                        world.clear()
                    elif event.key == pygame.K_RETURN:
                        world.spawn_circle(*pygame.mouse.get_pos())
                elif event.type == pygame.VIDEORESIZE:
                    world.resize(event.w, event.h)
            screen.fill(BACKGROUND)
            _draw(screen, world)
            world.tick()
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()
    return 0