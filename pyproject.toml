[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rigidsim"
version = "0.1.0"
description = "A small 2D rigid-body sandbox: circles and boxes falling, colliding and bouncing in a window"
requires-python = ">=3.10"
keywords = ["physics", "rigid body", "collision", "gjk", "epa", "sat", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = ["pygame"]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rigidsim = "rigidsim.app:main"

[tool.hatch.build.targets.wheel]
packages = ["rigidsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
