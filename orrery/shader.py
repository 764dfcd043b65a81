"""The textured scene shader program."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

log = logging.getLogger(__name__)

VERTEX_SHADER = 0x8B31
FRAGMENT_SHADER = 0x8B30
INVALID_LOCATION = -1

_STAGE_NAMES = {VERTEX_SHADER: "vertex", FRAGMENT_SHADER: "fragment"}

_SOURCES: Dict[int, str] = {
    VERTEX_SHADER: """#version 460
layout (location = 0) in vec3 v_position;
layout (location = 1) in vec3 v_color;
layout (location = 2) in vec2 v_tc;

out vec3 color;
out vec2 tc;
out vec3 fragPos;

uniform mat4 projectionMatrix;
uniform mat4 viewMatrix;
uniform mat4 modelMatrix;
uniform bool hasTC;
uniform sampler2D sp;

void main(void)
{
    vec4 v = vec4(v_position, 1.0);
    gl_Position = (projectionMatrix * viewMatrix * modelMatrix) * v;
    color = v_color;
    tc = v_tc;
    fragPos = vec3(modelMatrix * v);
}
""",
    FRAGMENT_SHADER: """#version 460
uniform sampler2D sp;

in vec3 color;
in vec2 tc;
uniform bool hasTexture;

out vec4 frag_color;

void main(void)
{
    if (hasTexture)
        frag_color = texture(sp, tc);
    else
        frag_color = vec4(color, 1.0);
}
""",
}


class ShaderError(RuntimeError):
    """Raised when a shader cannot be created, compiled or linked."""


def shader_source(shader_type: int) -> str:
    """Return the GLSL source for a vertex or fragment shader."""
    try:
        return _SOURCES[shader_type]
    except KeyError:
        raise ShaderError(f"unsupported shader type {shader_type:#x}") from None


def _gl():
    from pyglet import gl

    return gl


def _build_program(sources: Sequence[Tuple[int, str]], validate: bool = True):
    """Compile, link and optionally validate a program.

    Returns the linked program object; its ``id`` is the OpenGL handle.
    """
    from pyglet.graphics import shader as pyglet_shader

    gl = _gl()
    try:
        stages = []
        for kind, text in sources:
            stage = _STAGE_NAMES.get(kind)
            if stage is None:
                raise ShaderError(f"error creating shader type {kind:#x}")
            stages.append(pyglet_shader.Shader(text, stage))
        program = pyglet_shader.ShaderProgram(*stages)
    except pyglet_shader.ShaderException as exc:
        raise ShaderError(f"error building shader program: {exc}") from exc
    if validate:
        gl.glValidateProgram(program.id)
        status = (gl.GLint * 1)()
        gl.glGetProgramiv(program.id, gl.GL_VALIDATE_STATUS, status)
        if not status[0]:
            buf = (gl.GLchar * 1024)()
            gl.glGetProgramInfoLog(program.id, 1024, None, buf)
            raise ShaderError(
                "invalid shader program: " + buf.value.decode(errors="replace")
            )
    return program


class Shader:
    """Collects shader stages, then links them into one program."""

    def __init__(self) -> None:
        self.program = 0
        self._linked = None
        self._stages: List[Tuple[int, str]] = []

    def add_shader(self, shader_type: int) -> None:
        """Queue the built-in source for ``shader_type``; call finalize() when done."""
        self._stages.append((shader_type, shader_source(shader_type)))

    def finalize(self) -> None:
        """Compile, link and validate the queued stages."""
        if not self._stages:
            raise ShaderError("no shaders were added to the program")
        self._linked = _build_program(self._stages)
        self.program = self._linked.id
        self._stages.clear()

    def _require_program(self) -> None:
        if not self.program:
            raise ShaderError("shader program has not been finalized")

    def enable(self) -> None:
        """Make this program current."""
        self._require_program()
        _gl().glUseProgram(self.program)

    def uniform_location(self, name: str) -> int:
        """Return the location of uniform ``name``, or -1 with a warning."""
        self._require_program()
        location = _gl().glGetUniformLocation(self.program, name.encode())
        if location == INVALID_LOCATION:
            log.warning("unable to get the location of uniform %r", name)
        return location

    def attrib_location(self, name: str) -> int:
        """Return the location of attribute ``name``, or -1 with a warning."""
        self._require_program()
        location = _gl().glGetAttribLocation(self.program, name.encode())
        if location == INVALID_LOCATION:
            log.warning("unable to get the location of attribute %r", name)
        return location