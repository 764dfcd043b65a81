"""Transform maths, camera, geometry, OBJ loading, an orbit scene graph and OpenGL drawables for a solar system scene."""

__version__ = "0.1.0"