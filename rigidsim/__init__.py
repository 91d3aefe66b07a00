"""Interactive 2D rigid-body simulation of circles and rectangles with impulse-based collision response."""

__version__ = "0.1.0"
__all__ = ["geometry", "render", "shapes", "collision", "app"]