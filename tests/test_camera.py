"""Tests for canvas_pipeline.camera (projection and world matrices, orbit helpers)."""

from __future__ import annotations

import math

import numpy as np
import pytest

from canvas_pipeline.camera import MIN_DISTANCE, Camera, OrthographicCamera, PerspectiveCamera
from canvas_pipeline.math_utils import Matrix4, Vector3


class TestPerspectiveCamera:
    def test_projection_is_idempotent(self) -> None:
        cam = PerspectiveCamera(80, 1.5, 0.1, 2000)
        cam.update_projection_matrix()
        first = cam.projection_matrix.clone()
        cam.update_projection_matrix()
        assert cam.projection_matrix.equals(first)

    def test_projection_tracks_aspect(self) -> None:
        cam = PerspectiveCamera(90, 1.0, 1, 100)
        sx_square = cam.projection_matrix.elements[0, 0]
        cam.aspect = 2.0
        cam.update_projection_matrix()
        assert cam.projection_matrix.elements[0, 0] == pytest.approx(sx_square / 2)

    def test_fov_sets_focal_length(self) -> None:
        cam = PerspectiveCamera(90, 1.0, 1, 100)
        # f = 1 / tan(45 deg) = 1
        assert cam.projection_matrix.elements[1, 1] == pytest.approx(1.0)
        assert cam.projection_matrix.elements[3, 2] == -1.0

    def test_zoom_scales_projection(self) -> None:
        cam = PerspectiveCamera(90, 1.0, 1, 100, zoom=2.0)
        assert cam.projection_matrix.elements[1, 1] == pytest.approx(2.0)

    def test_adjust_fov_is_clamped(self) -> None:
        cam = PerspectiveCamera(80)
        cam.adjust_fov(500)
        assert cam.fov == 170
        cam.adjust_fov(-500)
        assert cam.fov == 10


class TestOrthographicCamera:
    def test_box_corners_map_to_ndc(self) -> None:
        cam = OrthographicCamera(-150, 150, 75, -75, 0.1, 100)
        p = Vector3(150, 75, -0.1).apply_matrix4(cam.projection_matrix)
        assert [p.x, p.y] == pytest.approx([1, 1])

    def test_zoom_narrows_the_box(self) -> None:
        cam = OrthographicCamera(-100, 100, 100, -100, zoom=2.0)
        p = Vector3(50, 0, -1).apply_matrix4(cam.projection_matrix)
        assert p.x == pytest.approx(1.0)


class TestCameraTransform:
    def test_base_camera_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Camera()

    def test_world_matrix_from_position(self) -> None:
        cam = PerspectiveCamera()
        cam.position.set(1, 2, 3)
        cam.update_matrix_world()
        np.testing.assert_allclose(cam.matrix_world.elements[:3, 3], [1, 2, 3])

    def test_orbit_keeps_distance_and_faces_origin(self) -> None:
        cam = PerspectiveCamera()
        cam.position.set(0, 0, 400)
        cam.orbit(0.5, 0.2)
        assert cam.distance() == pytest.approx(400)

        cam.update_matrix_world()
        view = Matrix4().set_inverse_of(cam.matrix_world)
        origin = Vector3(0, 0, 0).apply_matrix4(view)
        # The origin sits straight ahead on the camera's -Z axis
        assert list(origin) == pytest.approx([0, 0, -400], abs=1e-9)

    def test_orbit_pitch_is_clamped(self) -> None:
        cam = PerspectiveCamera()
        cam.position.set(0, 0, 10)
        cam.orbit(0.0, 10.0)
        assert cam.rotation.x == pytest.approx(math.pi / 2)

    def test_dolly_never_passes_minimum(self) -> None:
        cam = PerspectiveCamera()
        cam.position.set(0, 0, 10)
        cam.dolly(-5)
        assert cam.position.z == pytest.approx(5)
        cam.dolly(-100)
        assert cam.distance() == pytest.approx(MIN_DISTANCE)
