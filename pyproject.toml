[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orrery"
version = "0.1.0"
description = "Building blocks for an OpenGL solar system scene: transform maths, a fly camera, procedural geometry, an OBJ loader, an orbit scene graph and textured drawables."
requires-python = ">=3.10"
keywords = ["solar system", "opengl", "3d", "planets", "orrery", "scene graph", "wavefront obj"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Astronomy",
]
dependencies = [
    "numpy",
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["orrery"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
