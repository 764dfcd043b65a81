# orrery

Building blocks for drawing a small model of the solar system with OpenGL:
4×4 transform maths, a free-flying camera, procedural geometry, a Wavefront
OBJ loader, a scene graph of orbiting bodies, and drawable objects
(textured spheres, loaded meshes, a skybox) that upload themselves to the GPU
on first use.

## Installing

```
pip install .
```

## Modules

### `orrery.glmath`

Numpy helpers for 4×4 matrices in mathematical layout (a point `p` is
transformed as `m @ p`, translation in the last column; transpose before
handing a matrix to OpenGL):
`identity()`, `normalize(v)`, `translate(offset)`, `rotate(angle, axis)`,
`scale(factors)`, `look_at(eye, center, up)`,
`perspective(fovy, aspect, near, far)`.
`Vertex` holds a position, a normal and a texture coordinate;
`pack_vertices(vertices)` interleaves them into a float32 `(n, 8)` array.

### `orrery.camera`

`Camera` starts at `(0, 10, -16)`. `initialize(width, height)` points it at
the origin and sets a 40° perspective projection with near and far planes at
0.01 and 100. `move(Direction.FORWARD | BACKWARD | LEFT | RIGHT)` steps it
along its view direction, `rotate(mouse_x, mouse_y)` turns it by a mouse
offset with the pitch held within ±89°. The matrices are in `camera.view`
and `camera.projection`.

### `orrery.geometry`

`build_sphere(precision)` returns a `SphereGeometry` (positions, normals,
texture coordinates and triangle indices); `to_mesh()` turns it into a
`MeshData`. Also `cube_mesh()`, `ring_geometry(segments, inner_radius,
outer_radius)` for a flat annulus drawn as a triangle strip, and
`skybox_vertices()` for the 36 positions of a skybox cube.

### `orrery.objloader`

`load_obj(path)` and `parse_obj(lines)` read Wavefront OBJ data into a flat
triangle `MeshData`; polygons are split into triangle fans, missing normals
and texture coordinates become zeros, and malformed input raises `ObjError`.

### `orrery.scene`

`BODIES` lists the Sun, Mercury, Venus, Earth, the Moon, Mars, Jupiter,
Saturn, Uranus and Neptune, each with an `Orbit` relative to its parent.
`compute_transforms(time, orbit)` gives the translation, rotation and scale
matrices of one orbit, `ship_model(time)` the model matrix of a starship that
circles the Sun facing it, and `update_scene(time)` a dict of model matrices
keyed by body name plus `"ship"`.

### Drawables (need a current OpenGL context)

- `orrery.texture.Texture(file_name)` decodes an image with pyglet at once
  and uploads it, mipmapped, on the first `bind(unit)`;
  `set_wrap_mode` and `set_filters` change its parameters. A missing or
  unreadable file raises `TextureError`.
- `orrery.shader.Shader` queues the built-in vertex and fragment stages with
  `add_shader(shader_type)`, links them with `finalize()`, and offers
  `enable()`, `uniform_location(name)` and `attrib_location(name)`.
  Failures raise `ShaderError`.
- `orrery.skybox.Skybox(faces)` takes six face images (+X, −X, +Y, −Y, +Z,
  −Z) and draws them with `render(view, projection)`.
- `orrery.meshes` has `Object` (the coloured cube), `Mesh` (an OBJ model with
  an optional texture) and `Sphere` (with lighting settings), each with
  `update(model)` and `render(...)`, plus `create_sun`, `create_planet` and
  `create_moon`.

## Example

```python
import numpy as np

from orrery.camera import Camera, Direction
from orrery.geometry import build_sphere
from orrery.scene import update_scene

mesh = build_sphere(48).to_mesh()

models = update_scene(12.5)        # model matrices at time 12.5
earth_centre = models["earth"] @ np.array([0.0, 0.0, 0.0, 1.0])

camera = Camera()
camera.initialize(800, 600)
camera.move(Direction.FORWARD)
camera.rotate(10.0, -5.0)
```

## What this package does not do

There is no viewer command, no window, no main loop and no keyboard or mouse
handling here, and no single object that draws the whole scene. To see
anything, open a window and OpenGL context yourself (for example with
pyglet), then position the drawables with `update_scene` and call their
`render` methods with your shader's attribute and uniform locations.

## Tests

```
pip install .[test]
pytest
```