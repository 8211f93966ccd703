#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/rasterizer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math


def _finite(*points):
    return all(math.isfinite(c) for p in points for c in p)


def fill_triangle(canvas, p1, p2, p3, color):
    """
    Scanline fill of a triangle given as (x, y) pixel tuples.
    Every covered pixel is set to `color`; no depth test.
    Vertices may lie far outside the canvas: only on-canvas rows are walked.
    """
    if not _finite(p1, p2, p3):
        return

    # Sort vertices by Y
    if p1[1] > p2[1]: p1, p2 = p2, p1
    if p1[1] > p3[1]: p1, p3 = p3, p1
    if p2[1] > p3[1]: p2, p3 = p3, p2

    x1, y1 = p1[0], int(round(p1[1]))
    x2, y2 = p2[0], int(round(p2[1]))
    x3, y3 = p3[0], int(round(p3[1]))

    w, h = canvas.w, canvas.h

    def draw_scanlines(y_start, y_end, xa, xb, x_step_a, x_step_b):
        first, last = max(y_start, 0), min(y_end, h)
        if first >= last:
            return
        # Jump straight to the first visible row
        xa += (first - y_start) * x_step_a
        xb += (first - y_start) * x_step_b
        for y in range(first, last):
            sx = int(round(min(max(xa, -1.0), float(w))))
            ex = int(round(min(max(xb, -1.0), float(w))))
            if sx > ex: sx, ex = ex, sx
            for x in range(max(0, sx), min(w, ex + 1)):
                canvas.set_pixel(x, y, color)
            xa += x_step_a
            xb += x_step_b

    if y3 == y1:
        # Degenerate (horizontal) triangle: one row
        draw_scanlines(y1, y1 + 1, min(x1, x2, x3), max(x1, x2, x3), 0, 0)
        return

    x_step_long = (x3 - x1) / (y3 - y1)

    # Top half
    if y2 > y1:
        x_step_1 = (x2 - x1) / (y2 - y1)
        draw_scanlines(y1, y2, float(x1), float(x1), x_step_long, x_step_1)

    # Bottom half, including the last row
    xa = x1 + x_step_long * (y2 - y1)
    x_step_2 = (x3 - x2) / (y3 - y2) if y3 != y2 else 0
    draw_scanlines(y2, y3 + 1, xa, float(x2), x_step_long, x_step_2)


def fill_polygon(canvas, points, color):
    """Fan-split a convex polygon into triangles."""
    for i in range(1, len(points) - 1):
        fill_triangle(canvas, points[0], points[i], points[i + 1], color)


def clip_segment(p1, p2, x_max, y_max):
    """
    Liang-Barsky clip of the segment p1-p2 to the box [0, x_max] x [0, y_max].
    Returns the clipped end points, or None when the segment misses the box.
    """
    x1, y1 = p1
    dx, dy = p2[0] - x1, p2[1] - y1
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x1), (dx, x_max - x1), (-dy, y1), (dy, y_max - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x1 + t0 * dx, y1 + t0 * dy), (x1 + t1 * dx, y1 + t1 * dy)


def draw_line_dda(canvas, p1, p2, color):
    """Draws a line between two (x, y) pixel tuples using the DDA algorithm."""
    if not _finite(p1, p2):
        return
    clipped = clip_segment(p1, p2, canvas.w - 1, canvas.h - 1)
    if clipped is None:
        return
    p1, p2 = clipped

    x1, y1 = int(round(p1[0])), int(round(p1[1]))
    x2, y2 = int(round(p2[0])), int(round(p2[1]))

    dx = x2 - x1
    dy = y2 - y1
    if dx == 0 and dy == 0:
        canvas.set_pixel(x1, y1, color)
        return

    step = abs(dx) if abs(dx) > abs(dy) else abs(dy)

    x_inc = dx / step
    y_inc = dy / step

    cx, cy = float(x1), float(y1)
    for _ in range(int(step) + 1):
        canvas.set_pixel(int(round(cx)), int(round(cy)), color)
        cx += x_inc; cy += y_inc


def draw_polyline(canvas, points, color, closed=True):
    n = len(points)
    segments = n if closed else n - 1
    for i in range(segments):
        draw_line_dda(canvas, points[i], points[(i + 1) % n], color)
