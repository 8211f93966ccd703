"""Shared fixtures: a drawing surface that records calls instead of drawing."""

from __future__ import annotations

import pytest

from canvas_pipeline.camera import PerspectiveCamera
from canvas_pipeline.mesh import Material, Mesh
from canvas_pipeline.scene import Scene
from canvas_pipeline.surface import Surface


class RecordingSurface(Surface):
    """Surface that logs every pixel primitive as (op, points, color)."""

    def __init__(self, width: int = 200, height: int = 100) -> None:
        self.calls = []
        self.host_size = (width, height)
        super().__init__(width, height)

    def client_size(self):
        return self.host_size

    def _allocate(self) -> None:
        self.calls.append(("allocate", (self.width, self.height), None))

    def _fill_rect_px(self, x0, y0, x1, y1, color) -> None:
        self.calls.append(("rect", [(x0, y0), (x1, y1)], color))

    def _fill_polygon_px(self, points, color) -> None:
        self.calls.append(("fill", list(points), color))

    def _stroke_polygon_px(self, points, color, width, closed) -> None:
        self.calls.append(("stroke", list(points), color))

    def ops(self, name: str):
        return [c for c in self.calls if c[0] == name]

    def reset(self) -> None:
        self.calls.clear()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface(200, 100)


@pytest.fixture
def camera() -> PerspectiveCamera:
    cam = PerspectiveCamera(80, 2.0)
    cam.position.set(0, 0, 400)
    return cam


@pytest.fixture
def plane() -> Mesh:
    return Mesh.plane(200, 100, Material(color="#ff0000"))


@pytest.fixture
def scene(plane: Mesh) -> Scene:
    return Scene([plane])
