#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/renderer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
from types import MappingProxyType
from typing import Optional

from .camera import Camera
from .config import RenderConfig
from .errors import MalformedGeometryError
from .math_utils import Matrix4, Quaternion
from .mesh import Mesh, Vertex
from .shaders import (Color, FragmentContext, FragmentShader, Uniforms,
                      VertexAttributes, VertexContext, VertexShader)
from .surface import Surface

logger = logging.getLogger(__name__)


class Renderer:
    """
    Emulates the triangle pipeline of a GPU on a 2D surface.

    render(scene, camera) draws one frame:
      1. Clear the surface with clear_color
      2. Refresh the camera projection, world and view matrices
      3. Per object, in scene order: world and model-view matrices ->
         uniforms -> per face: vertex shader x3, fragment shader x1,
         then stroke (wireframe) or fill the triangle

    There is no depth test; later objects paint over earlier ones.
    """

    def __init__(self, surface: Surface, config: Optional[RenderConfig] = None):
        self.surface = surface
        self.config = config if config is not None else RenderConfig()
        # Clear / background color
        self.clear_color: Color = self.config.clear_color

        # Viewport parameters, set by resize()
        self.width = None
        self.height = None
        self.center = (0.0, 0.0)
        self.axis_scale = (1.0, 1.0)

    # ────────────────────────────────────────────────────────────────────
    # Frame
    # ────────────────────────────────────────────────────────────────────
    def render(self, scene, camera: Camera):
        """Render a scene viewed through a given camera."""
        if self.width is None:
            # Never resized: adopt the current surface size
            self.resize()

        self.clear()
        self.update_camera(camera)

        # Snapshot so the host may add or remove children mid-frame
        children = list(scene.children)
        for child in children:
            self.render_child(child, camera)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Rendered %d objects, %d faces", len(children),
                         sum(child.geometry.face_count for child in children))

    def clear(self):
        self.surface.fill_style = self.clear_color
        # In normalized device coordinates this covers the whole surface
        self.surface.fill_rect(-1, -1, 2, 2)

    def update_camera(self, camera: Camera):
        """
        Projection is recomputed every frame, then the camera world matrix
        and its inverse, the view matrix.
        """
        camera.update_projection_matrix()
        camera.update_matrix_world()
        camera.matrix_world_inverse.set_inverse_of(camera.matrix_world)

    # ────────────────────────────────────────────────────────────────────
    # Transforms
    # ────────────────────────────────────────────────────────────────────
    @staticmethod
    def compute_world_matrix(child: Mesh) -> Matrix4:
        """Object space -> scene space, from position, rotation and scale."""
        quaternion = Quaternion.from_euler(child.rotation)
        return Matrix4().compose(child.position, quaternion, child.scale)

    def compute_model_view_matrix(self, child: Mesh, camera: Camera) -> Matrix4:
        """Object space -> camera space. Expects an up to date camera view matrix."""
        return Matrix4().multiply_matrices(camera.matrix_world_inverse,
                                           self.compute_world_matrix(child))

    # ────────────────────────────────────────────────────────────────────
    # Objects
    # ────────────────────────────────────────────────────────────────────
    def render_child(self, child: Mesh, camera: Camera):
        material = child.material
        uniforms = Uniforms(
            model_view_matrix=self.compute_model_view_matrix(child, camera).readonly(),
            projection_matrix=camera.projection_matrix.readonly(),
            color=material.color,
            extra=MappingProxyType(dict(material.uniforms)),
        )

        geometry = child.geometry
        vertices = geometry.vertices
        surface = self.surface

        for face_index, face in enumerate(geometry.faces()):
            try:
                geometry.check_face(face_index, face)
            except MalformedGeometryError:
                if self.config.strict_geometry:
                    raise
                logger.warning("Skipping face %d of %r: indices %s out of range",
                               face_index, child, face)
                continue

            vertex0 = vertices[face[0]]
            vertex1 = vertices[face[1]]
            vertex2 = vertices[face[2]]

            # Vertex stage: object space -> normalized device coordinates
            p0 = self.apply_vertex_shader(material.vertex_shader, uniforms, vertex0)
            p1 = self.apply_vertex_shader(material.vertex_shader, uniforms, vertex1)
            p2 = self.apply_vertex_shader(material.vertex_shader, uniforms, vertex2)

            with surface.path() as path:
                path.line_to(p0.x, p0.y)
                path.line_to(p1.x, p1.y)
                path.line_to(p2.x, p2.y)
                path.close()

                # One fragment shader run colors the whole face
                color = self.apply_fragment_shader(material.fragment_shader, uniforms)
                if material.wireframe:
                    surface.stroke_style = color
                    surface.stroke()
                else:
                    surface.fill_style = color
                    surface.fill()

        leftover = len(geometry.indices) % 3
        if leftover:
            message = (f"{child!r} has {leftover} trailing indices "
                       f"that do not form a face")
            if self.config.strict_geometry:
                raise MalformedGeometryError(message, face_index=geometry.face_count,
                                             indices=tuple(geometry.indices[-leftover:]))
            logger.warning("Skipping partial face: %s", message)

    # ────────────────────────────────────────────────────────────────────
    # Shader invocation
    # ────────────────────────────────────────────────────────────────────
    @staticmethod
    def apply_vertex_shader(shader: VertexShader, uniforms: Uniforms, vertex: Vertex):
        # The position is cloned: attributes are immutable in shaders
        context = VertexContext(
            attributes=VertexAttributes(position=vertex.position.clone()),
            uniforms=uniforms,
        )
        return shader(context)

    @staticmethod
    def apply_fragment_shader(shader: FragmentShader, uniforms: Uniforms) -> Color:
        return shader(FragmentContext(uniforms=uniforms))

    # ────────────────────────────────────────────────────────────────────
    # Viewport
    # ────────────────────────────────────────────────────────────────────
    def resize(self):
        """
        Match the surface to its host size and map normalized device
        coordinates onto it: origin at the center, x right, y up, [-1, 1]
        spanning the full width and height. Call at startup and whenever
        the host size changes.
        """
        width, height = self.surface.client_size()
        self.surface.set_size(width, height)
        self.width, self.height = self.surface.width, self.surface.height

        self.center = (self.width * 0.5, self.height * 0.5)
        # Invert y to match NDC
        self.axis_scale = (self.width * 0.5, -self.height * 0.5)
        self.surface.set_transform(self.center, self.axis_scale)
        # One device pixel expressed in NDC units
        self.surface.line_width = 1.0 / max(self.width * 0.5, self.height * 0.5, 1.0)
        logger.debug("Viewport resized to %dx%d", self.width, self.height)
