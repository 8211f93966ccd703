#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math
from abc import ABC, abstractmethod

from .math_utils import Euler, Matrix4, Quaternion, Vector3

MIN_DISTANCE = 0.5


class Camera(ABC):
    """
    Base camera: a transform plus the matrices the renderer reads.

    `matrix_world` is rebuilt from position/rotation/scale by
    update_matrix_world(). `matrix_world_inverse` (the view matrix) is owned
    by whoever renders with the camera: the Renderer recomputes it every
    frame, the camera never inverts its own world matrix in place.
    """

    def __init__(self):
        self.position = Vector3(0.0, 0.0, 0.0)
        self.rotation = Euler(0.0, 0.0, 0.0)
        self.scale = Vector3(1.0, 1.0, 1.0)
        self.matrix_world = Matrix4()
        self.matrix_world_inverse = Matrix4()
        self.projection_matrix = Matrix4()

    def update_matrix_world(self):
        self.matrix_world.compose(self.position, Quaternion.from_euler(self.rotation), self.scale)

    @abstractmethod
    def update_projection_matrix(self):
        """Rebuild projection_matrix from the camera parameters."""

    def distance(self) -> float:
        """Distance from the scene origin."""
        return self.position.length()

    def orbit(self, dyaw: float, dpitch: float):
        """
        Rotate around the scene origin by delta angles (radians), keeping the
        current distance and looking back at the origin.
        """
        distance = max(MIN_DISTANCE, self.distance())
        self.rotation.order = 'YXZ'
        self.rotation.y += dyaw
        self.rotation.x = max(-math.pi / 2, min(math.pi / 2, self.rotation.x + dpitch))
        self._place_on_view_axis(distance)

    def dolly(self, delta: float):
        """Move along the view axis. Positive = further, negative = closer."""
        self._place_on_view_axis(max(MIN_DISTANCE, self.distance() + delta))

    def _place_on_view_axis(self, distance: float):
        # The camera looks down its local -Z, so it sits on local +Z
        rotation = Matrix4().make_rotation_from_euler(self.rotation)
        self.position.copy(Vector3(0.0, 0.0, distance).apply_matrix4(rotation))


class PerspectiveCamera(Camera):
    """Perspective projection from a vertical field of view (degrees) and aspect ratio."""

    def __init__(self, fov: float = 50.0, aspect: float = 1.0,
                 near: float = 0.1, far: float = 2000.0, zoom: float = 1.0):
        super().__init__()
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far
        self.zoom = zoom
        self.update_projection_matrix()

    def __repr__(self):
        return (f"PerspectiveCamera(fov={self.fov}, aspect={self.aspect:.3f}, "
                f"near={self.near}, far={self.far})")

    def update_projection_matrix(self):
        top = self.near * math.tan(math.radians(0.5 * self.fov)) / self.zoom
        height = 2 * top
        width = self.aspect * height
        left = -0.5 * width
        self.projection_matrix.make_perspective(left, left + width, top, top - height,
                                                self.near, self.far)

    def adjust_fov(self, delta: float):
        """Adjust field of view by delta degrees, clamped to [10, 170]."""
        self.fov = max(10, min(170, self.fov + delta))


class OrthographicCamera(Camera):
    """Parallel projection of the box [left, right] x [bottom, top] x [near, far]."""

    def __init__(self, left: float = -1.0, right: float = 1.0, top: float = 1.0,
                 bottom: float = -1.0, near: float = 0.1, far: float = 2000.0,
                 zoom: float = 1.0):
        super().__init__()
        self.left = left
        self.right = right
        self.top = top
        self.bottom = bottom
        self.near = near
        self.far = far
        self.zoom = zoom
        self.update_projection_matrix()

    def update_projection_matrix(self):
        dx = (self.right - self.left) / (2 * self.zoom)
        dy = (self.top - self.bottom) / (2 * self.zoom)
        cx = (self.right + self.left) / 2
        cy = (self.top + self.bottom) / 2
        self.projection_matrix.make_orthographic(cx - dx, cx + dx, cy + dy, cy - dy,
                                                 self.near, self.far)
