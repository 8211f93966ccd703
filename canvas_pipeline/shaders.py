#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/shaders.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

"""
Emulated shader stages.

A vertex shader receives a VertexContext (one attribute, the vertex position,
plus the uniforms) and returns the vertex position in normalized device
coordinates. A fragment shader receives a FragmentContext (uniforms only,
nothing is interpolated across a face) and returns the color for the whole
face. Both are plain callables; the Renderer builds a fresh context for each
invocation and shaders must not keep state between calls.

The default pair mirrors the most basic GLSL shaders:

    attribute vec3 position;
    uniform mat4 modelViewMatrix;
    uniform mat4 projectionMatrix;

    void main() {
        gl_Position = projectionMatrix * modelViewMatrix * vec4(position, 1.0);
    }

    uniform vec4 color;

    void main() {
        gl_FragColor = color;
    }
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Protocol

from .math_utils import Matrix4, Vector3

Color = Any  # any encoding the target surface can draw ('#ff0000', (255, 0, 0), ...)


@dataclass(frozen=True)
class VertexAttributes:
    position: Vector3


@dataclass(frozen=True)
class Uniforms:
    """Values shared by every shader invocation of one draw call."""
    model_view_matrix: Matrix4
    projection_matrix: Matrix4
    color: Color
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class VertexContext:
    attributes: VertexAttributes
    uniforms: Uniforms


@dataclass(frozen=True)
class FragmentContext:
    uniforms: Uniforms


class VertexShader(Protocol):
    def __call__(self, context: VertexContext) -> Vector3: ...


class FragmentShader(Protocol):
    def __call__(self, context: FragmentContext) -> Color: ...


def basic_vertex_shader(context: VertexContext) -> Vector3:
    position = context.attributes.position
    model_view_matrix = context.uniforms.model_view_matrix
    projection_matrix = context.uniforms.projection_matrix

    model_view_projection = Matrix4().multiply_matrices(projection_matrix, model_view_matrix)
    return position.apply_matrix4(model_view_projection)


def basic_fragment_shader(context: FragmentContext) -> Color:
    return context.uniforms.color


def uniform_color_fragment_shader(name: str) -> FragmentShader:
    """Fragment shader reading its color from a named material uniform.

    Falls back to the material color when the uniform is absent.
    """
    def shader(context: FragmentContext) -> Color:
        return context.uniforms.extra.get(name, context.uniforms.color)

    shader.__name__ = f"uniform_color_fragment_shader[{name}]"
    return shader


def make_offset_vertex_shader(dx: float, dy: float) -> VertexShader:
    """Basic vertex shader followed by a fixed shift in NDC."""
    def shader(context: VertexContext) -> Vector3:
        ndc = basic_vertex_shader(context)
        return Vector3(ndc.x + dx, ndc.y + dy, ndc.z)

    shader.__name__ = f"offset_vertex_shader[{dx}, {dy}]"
    return shader
