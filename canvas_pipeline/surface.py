#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/surface.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import SurfaceError

Point = Tuple[float, float]


class Path:
    """Sub-path collected between begin and end of a Surface.path() scope."""
    __slots__ = ('points', 'closed')

    def __init__(self):
        self.points: List[Point] = []
        self.closed = False

    def move_to(self, x: float, y: float):
        self.points = [(float(x), float(y))]
        self.closed = False

    def line_to(self, x: float, y: float):
        # On an empty path line_to behaves like move_to
        self.points.append((float(x), float(y)))

    def close(self):
        self.closed = True


class Surface(ABC):
    """
    A 2D drawing surface in the style of an HTML canvas context.

    Coordinates passed to fill_rect and to paths are in user space and go
    through the current affine transform (translate then per-axis scale)
    before reaching device pixels. Subclasses implement the pixel
    primitives only.
    """

    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self._path: Optional[Path] = None
        self._reset_state()

    def _reset_state(self):
        self.fill_style = '#000000'
        self.stroke_style = '#000000'
        self.line_width = 1.0
        self.translate = (0.0, 0.0)
        self.scale = (1.0, 1.0)

    # ── Size ─────────────────────────────────────────────────────────────
    def client_size(self) -> Tuple[int, int]:
        """Current size of the host area the surface is shown in."""
        return self.width, self.height

    def set_size(self, width: int, height: int):
        """Reallocate the backing store. Resets transform and styles."""
        self.width = int(width)
        self.height = int(height)
        self._reset_state()
        self._allocate()

    # ── Transform ────────────────────────────────────────────────────────
    def set_transform(self, translate: Point = (0.0, 0.0), scale: Point = (1.0, 1.0)):
        self.translate = (float(translate[0]), float(translate[1]))
        self.scale = (float(scale[0]), float(scale[1]))

    def reset_transform(self):
        self.set_transform()

    def to_device(self, x: float, y: float) -> Point:
        return (self.translate[0] + x * self.scale[0],
                self.translate[1] + y * self.scale[1])

    def device_line_width(self) -> float:
        return self.line_width * max(abs(self.scale[0]), abs(self.scale[1]))

    # ── Drawing ──────────────────────────────────────────────────────────
    def fill_rect(self, x: float, y: float, w: float, h: float):
        x0, y0 = self.to_device(x, y)
        x1, y1 = self.to_device(x + w, y + h)
        self._fill_rect_px(min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1), self.fill_style)

    @contextmanager
    def path(self) -> Iterator[Path]:
        """Begin a path; it is discarded when the block exits, however it exits."""
        if self._path is not None:
            raise SurfaceError("A path is already open on this surface")
        self._path = Path()
        try:
            yield self._path
        finally:
            self._path = None

    def stroke(self):
        points = self._device_points()
        if len(points) >= 2:
            self._stroke_polygon_px(points, self.stroke_style, self.device_line_width(),
                                    self._path.closed)

    def fill(self):
        points = self._device_points()
        # Fill always closes the shape implicitly
        if len(points) >= 3:
            self._fill_polygon_px(points, self.fill_style)

    def _device_points(self) -> List[Point]:
        if self._path is None:
            raise SurfaceError("No open path; draw inside a Surface.path() block")
        return [self.to_device(x, y) for x, y in self._path.points]

    # ── Backend primitives (device pixels) ───────────────────────────────
    def _allocate(self):
        """Recreate pixel storage after a size change."""

    @abstractmethod
    def _fill_rect_px(self, x0: float, y0: float, x1: float, y1: float, color):
        ...

    @abstractmethod
    def _fill_polygon_px(self, points: Sequence[Point], color):
        ...

    @abstractmethod
    def _stroke_polygon_px(self, points: Sequence[Point], color, width: float, closed: bool):
        ...
