#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import curses
import logging

import numpy as np
from PIL import ImageColor

logger = logging.getLogger(__name__)


def parse_color(value):
    """
    Normalise a drawable color to an (r, g, b) tuple with values 0-255.
    Accepts anything PIL.ImageColor understands ('#f00', '#ff0000',
    'rgb(255,0,0)', 'red', ...) and 3- or 4-item int sequences.
    Returns None on failure.
    """
    if value is None:
        return None
    if isinstance(value, (tuple, list)):
        if len(value) in (3, 4) and all(isinstance(c, int) for c in value):
            return tuple(max(0, min(255, c)) for c in value[:3])
        return None
    try:
        return ImageColor.getrgb(str(value).strip())[:3]
    except ValueError:
        return None


# --- Palette lookup ---

# xterm-256: indices 16-231 are a 6x6x6 cube over these channel levels,
# 232-255 a gray ramp 8, 18, ..., 238
_CUBE_LEVELS = np.array([0, 95, 135, 175, 215, 255])

# Typical rendering of the eight basic ANSI colors, by index
_ANSI8 = np.array([
    [0, 0, 0],
    [128, 0, 0],
    [0, 128, 0],
    [128, 128, 0],
    [0, 0, 128],
    [128, 0, 128],
    [0, 128, 128],
    [192, 192, 192],
])


def rgb_to_nearest_xterm(r, g, b) -> int:
    """Closest xterm-256 index, from either the color cube or the gray ramp."""
    rgb = np.array([r, g, b])
    steps = np.abs(rgb[:, None] - _CUBE_LEVELS[None, :]).argmin(axis=1)
    cube_error = ((rgb - _CUBE_LEVELS[steps]) ** 2).sum()

    gray_step = int(np.clip((rgb.sum() // 3 - 3) // 10, 0, 23))
    gray_error = ((rgb - (8 + 10 * gray_step)) ** 2).sum()

    if gray_error < cube_error:
        return 232 + gray_step
    return int(16 + 36 * steps[0] + 6 * steps[1] + steps[2])


def rgb_to_nearest_ansi8(r, g, b) -> int:
    """Closest of the eight basic ANSI colors, for 8-color terminals."""
    return int(((_ANSI8 - (r, g, b)) ** 2).sum(axis=1).argmin())


class CursesPalette:
    """
    Lazily maps (fg, bg) RGB colors to curses color pairs.

    Color mode cascade:
      1. xterm-256   – 256+ colors: nearest xterm-256 index
      2. 8-color     – basic ANSI palette approximation
      3. Mono        – every lookup returns pair 0
    Call start() once after curses.wrapper init.
    """

    def __init__(self, use_color: bool = True):
        self.use_color = use_color
        self.num_colors = 0
        self.max_pairs = 0
        self.pairs = {}

    def start(self):
        if not self.use_color:
            return
        try:
            if not curses.has_colors():
                self.use_color = False
                return
            curses.start_color()
            self.num_colors = curses.COLORS
            self.max_pairs = curses.COLOR_PAIRS
        except curses.error as e:
            logger.warning("Terminal colors unavailable, falling back to mono: %s", e)
            self.use_color = False

    def color_index(self, rgb):
        if self.num_colors >= 256:
            return rgb_to_nearest_xterm(*rgb)
        return rgb_to_nearest_ansi8(*rgb)

    def pair(self, fg, bg) -> int:
        """Curses pair number for fg on bg (any parse_color input)."""
        if not self.use_color or self.num_colors < 8:
            return 0
        fg_rgb = parse_color(fg) or (255, 255, 255)
        bg_rgb = parse_color(bg) or (0, 0, 0)
        key = (self.color_index(fg_rgb), self.color_index(bg_rgb))
        pair_id = self.pairs.get(key)
        if pair_id is not None:
            return pair_id

        pair_id = len(self.pairs) + 1
        if pair_id >= self.max_pairs:
            # Out of pairs; reuse the default rather than failing the frame
            return 0
        try:
            curses.init_pair(pair_id, key[0], key[1])
        except curses.error as e:
            logger.warning("init_pair(%d, %d, %d) failed: %s", pair_id, key[0], key[1], e)
            return 0
        self.pairs[key] = pair_id
        return pair_id
