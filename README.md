# rigidsim

A small interactive 2D rigid-body sandbox. Circles and rectangles fall under
gravity. They are pushed back when they cross the top or bottom edge of the
window, and they collide with each other. Rectangle pairs are tested with GJK,
and EPA then finds the contact normal and depth. A circle against a rectangle
uses a separating-axis test. Two circles use a direct distance test. Every
contact becomes a `ContactConstraint`, which is resolved with a bounce impulse,
a bounded friction impulse and a small position correction.

## Installing

```
pip install .
```

To install with the test tools as well:

```
pip install ".[test]"
```

## Running

```
rigidsim
```

This opens a resizable window, 800 × 800 by default. You can choose another
size:

```
rigidsim --width 1024 --height 768
```

| Input              | Effect                          |
|--------------------|---------------------------------|
| Left mouse button  | drops a circle at the cursor    |
| Right mouse button | drops a rectangle at the cursor |
| Enter              | drops a circle at the cursor    |
| Space              | removes every shape             |

Each frame advances the simulation by a fixed step of 0.05. The frame rate is
capped at 60 frames per second.

## Using it as a library

The simulation runs without a window. `rigidsim.app.World` holds the shapes, the
render buffers and the collision detector:

- `World.step(interval)` advances the simulation by `interval`.
- `World.tick()` advances it by the fixed step of 0.05.

```python
from rigidsim.app import World

world = World(800, 800)
world.spawn_circle(400, 100)      # window pixels, y pointing down
world.spawn_rectangle(420, 300)
for _ in range(100):
    world.tick()
print([shape.core for shape in world.shapes])
```

`World.clear()` removes every shape and empties the buffers.
`World.resize(width, height)` changes the extent used for the top and bottom
limits. `rigidsim.app.quick_aabb(shapes, buffers)` returns the pairs of shapes
whose slightly enlarged bounding boxes overlap.

The building blocks are in these modules:

- `rigidsim.geometry`: the `Vec2`, `Vertex` and `AABB` types. It also has the
  vector helpers: `dot`, `cross`, `length`, `normalize`, `is_in_polygon`,
  `foot_of_perpendicular` and the others.
- `rigidsim.render`: `RenderBuffers` and `CircleData`. `RenderBuffers` holds the
  polygon vertices, the triangle-fan indices and the circles that shapes write
  into.
- `rigidsim.shapes`: `Circle` (radius 30), `Rectangle` (60 × 30) and `Triangle`,
  all with unit mass except the triangle, plus `screen_to_world`.
- `rigidsim.collision`: `CollisionDetector`, `ContactConstraint` and `Edge`.

World coordinates put the origin at the centre of the window, with y pointing up.

## Limits

- There are no side walls. Shapes are only held back at the top and bottom edges.
- `Triangle` has no collision outline and no mass. It cannot be placed from the
  window.
- Scenes cannot be saved or loaded. A single shape cannot be selected, moved or
  removed. Space clears everything.

## Tests

```
pytest
```