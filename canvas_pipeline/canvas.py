#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/canvas.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import curses

from .rasterizer import draw_polyline, fill_polygon
from .surface import Surface


class TerminalCanvas(Surface):
    """
    Surface drawn with terminal character cells.

    Each cell holds a 2x4 block of dots, shown as a Braille glyph (or an
    ASCII density ramp), so a w x h terminal area gives (w*2) x (h*4)
    pixels. A cell takes the color of the last pixel drawn into it.
    """

    # Braille dot mapping for 2x4 grid
    #  1 4
    #  2 5
    #  3 6
    #  7 8
    BRAILLE_REMAP = [0x01, 0x02, 0x04, 0x40, 0x08, 0x10, 0x20, 0x80]

    def __init__(self, w, h, stdscr=None):
        self.stdscr = stdscr
        self.background = '#000000'
        super().__init__(w, h)
        self._allocate()

    @classmethod
    def for_screen(cls, stdscr) -> 'TerminalCanvas':
        canvas = cls(0, 0, stdscr)
        canvas.set_size(*canvas.client_size())
        return canvas

    @property
    def w(self):
        return self.width

    @property
    def h(self):
        return self.height

    def client_size(self):
        if self.stdscr is None:
            return self.width, self.height
        th, tw = self.stdscr.getmaxyx()
        # Leave the last column and a HUD row plus a spare row free
        return max(0, (tw - 1) * 2), max(0, (th - 2) * 4)

    def _allocate(self):
        rows = self.height // 4 + 1
        cols = self.width // 2 + 1
        # Grid stores 8-bit masks for 2x4 cells
        self.grid = [[0] * cols for _ in range(rows)]
        # Color grid stores the drawn color per cell
        self.c_grid = [[None] * cols for _ in range(rows)]

    def set_pixel(self, x, y, color):
        if x < 0 or x >= self.width or y < 0 or y >= self.height: return
        cx, cy = x >> 1, y >> 2
        # (y & 3) is the row in the block, (x & 1) the column;
        # bits 0-3 are the left column, 4-7 the right
        self.grid[cy][cx] |= (1 << ((y & 3) + (x & 1) * 4))
        self.c_grid[cy][cx] = color

    def clear_pixel(self, x, y):
        if x < 0 or x >= self.width or y < 0 or y >= self.height: return
        self.grid[y >> 2][x >> 1] &= ~(1 << ((y & 3) + (x & 1) * 4))

    def is_set(self, x, y) -> bool:
        return bool(self.grid[y >> 2][x >> 1] & (1 << ((y & 3) + (x & 1) * 4)))

    # ── Surface primitives ───────────────────────────────────────────────
    def _fill_rect_px(self, x0, y0, x1, y1, color):
        # Dots are foreground only: a rect fill erases and sets the background
        xs = range(max(0, int(x0)), min(self.width, int(round(x1))))
        ys = range(max(0, int(y0)), min(self.height, int(round(y1))))
        if len(xs) == self.width and len(ys) == self.height:
            self._allocate()
        else:
            for y in ys:
                for x in xs:
                    self.clear_pixel(x, y)
        self.background = color

    def _fill_polygon_px(self, points, color):
        fill_polygon(self, points, color)

    def _stroke_polygon_px(self, points, color, width, closed):
        draw_polyline(self, points, color, closed)

    # ── Output ───────────────────────────────────────────────────────────
    def cells(self, use_braille=True):
        """Yield (row, col, char, color) for every non-empty cell."""
        render_cell = render_cell_braille if use_braille else render_cell_ascii
        for y, row_grid in enumerate(self.grid):
            row_color = self.c_grid[y]
            for x, mask in enumerate(row_grid):
                if mask:
                    yield y, x, render_cell(mask), row_color[x]

    def present(self, stdscr, palette, use_braille=True, top=1):
        """
        Write the canvas to the curses screen starting at row `top`.
        Does NOT call stdscr.refresh().
        """
        th, tw = stdscr.getmaxyx()
        stdscr.erase()
        bg_pair = palette.pair(self.background, self.background)
        if bg_pair:
            stdscr.bkgd(' ', curses.color_pair(bg_pair))

        for y, x, char, color in self.cells(use_braille):
            if y + top >= th or x >= tw - 1:
                continue
            attr = curses.color_pair(palette.pair(color, self.background))
            try:
                stdscr.addstr(y + top, x, char, attr)
            except curses.error:
                # Writing the bottom-right cell raises after the cursor wraps
                pass


def render_cell_ascii(mask: int) -> str:
    """
    Renders a 2x4 cell mask as an ASCII character based on pixel density.
    Used when Braille is unavailable.
    """
    if not mask:
        return ' '
    density = bin(mask).count('1')
    chars = " .:-=+*#%@"
    return chars[density] if density < len(chars) else '@'


def render_cell_braille(mask: int) -> str:
    """Renders a 2x4 cell mask as a Unicode Braille character."""
    if not mask:
        return ' '
    b = sum(TerminalCanvas.BRAILLE_REMAP[i] for i in range(8) if mask & (1 << i))
    return chr(0x2800 + b)
