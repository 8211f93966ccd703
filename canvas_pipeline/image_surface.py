#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/image_surface.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from .surface import Point, Surface

logger = logging.getLogger(__name__)


class ImageSurface(Surface):
    """Off-screen RGB surface backed by a Pillow image."""

    def __init__(self, width: int = 320, height: int = 240, background='#000000'):
        self.background = background
        self.image = None
        self.draw = None
        super().__init__(width, height)
        self._allocate()

    def _allocate(self):
        self.image = Image.new('RGB', (max(1, self.width), max(1, self.height)), self.background)
        self.draw = ImageDraw.Draw(self.image)

    def _fill_rect_px(self, x0, y0, x1, y1, color):
        self.draw.rectangle([x0, y0, x1, y1], fill=color)

    def _fill_polygon_px(self, points: Sequence[Point], color):
        self.draw.polygon(list(points), fill=color)

    def _stroke_polygon_px(self, points: Sequence[Point], color, width: float, closed: bool):
        outline = list(points)
        if closed:
            outline.append(points[0])
        self.draw.line(outline, fill=color, width=max(1, int(round(width))))

    def pixel(self, x: int, y: int):
        return self.image.getpixel((x, y))

    def to_array(self) -> np.ndarray:
        """Frame as a (height, width, 3) uint8 array."""
        return np.asarray(self.image).copy()

    def snapshot(self) -> Image.Image:
        return self.image.copy()

    def save(self, path):
        self.image.save(path)
        logger.info("Saved frame to %s", path)


def save_animation(frames: Sequence[Image.Image], path, duration: int = 40):
    """Write frames as a looping GIF; duration is milliseconds per frame."""
    if not frames:
        raise ValueError("save_animation needs at least one frame")
    frames[0].save(
        path,
        save_all=True,
        append_images=list(frames[1:]),
        duration=duration,
        loop=0
    )
    logger.info("Animation saved to %s (%d frames)", path, len(frames))
