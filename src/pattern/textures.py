"""
textures.py
-----------

Procedural textures. Each public function is a factory: it binds and
normalizes its parameters, then returns a draw callback
`(width, height, surface) -> None` for `PatternCanvas.pattern()`.

Callbacks read the palette with `surface.get_colors()` and index it
modulo its length, so any palette with at least one color works. They
may change fill, stroke and draw modes freely; the controller restores
them after every application.
"""

from __future__ import annotations

__all__ = [
    "noise",
    "noise_grad",
    "stripe",
    "stripe_circle",
    "stripe_polygon",
    "stripe_radial",
    "wave",
    "dot",
    "checked",
    "cross",
    "triangle",
]

import math
from typing import Any, Optional, Union

from canvas.modes import DrawMode
from .rotation import DrawCallback
from .tiling import tile

numeric = Union[int, float]

# =============================================================================
# Constants
# =============================================================================
NOISE_SCALE = 0.01          # noise input scale for dot diameters
NOISE_GRAD_SIGMA_DIV = 5    # |gaussian| / 5 puts ~95% of dots in the left 40%
POLYGON_MAX_VERTICES = 30
# Seam masking for the radial stripes: the last wedge ends just past 0 and
# every wedge overshoots its end angle so neighbours overlap.
RADIAL_WRAP_END = 0.00001
RADIAL_SEAM_EPS = 0.0001
WAVE_VERTEX_STEP = 3        # x sampling step of wave outlines, in pixels


def _positive(value: numeric, default: numeric) -> numeric:
    value = abs(value)
    return default if value == 0 else value


def _clamp(value: numeric, low: numeric, high: numeric) -> numeric:
    return max(low, min(high, value))


# =============================================================================
# Stochastic textures
# =============================================================================
def noise(density: float = 0.2) -> DrawCallback:
    """
    Uniformly scattered small dots.

    colors[0] is the base, colors[1] the dots. `density` is the number of
    dots per unit area, clamped to [0, 1].
    """
    density = _clamp(density, 0, 1)

    def noise_fill(width: float, height: float, rt: Any) -> None:
        c = rt.get_colors()
        num = math.ceil(width * height * density)

        rt.ellipse_mode = DrawMode.CENTER
        rt.rect_mode = DrawMode.CORNER
        rt.no_stroke()

        rt.fill(c[0])
        rt.rect(0, 0, width, height)

        rt.fill(c[1 % len(c)])
        for _ in range(num):
            x = rt.random(width)
            y = rt.random(height)
            dia = rt.noise(x * NOISE_SCALE, y * NOISE_SCALE) * 0.5 + 1
            rt.ellipse(x, y, dia, dia)

    return noise_fill


def noise_grad(density: float = 0.2) -> DrawCallback:
    """Dots that thin out from the left edge to the right (half-gaussian in x)."""
    density = _clamp(density, 0, 1)

    def noise_grad_fill(width: float, height: float, rt: Any) -> None:
        c = rt.get_colors()
        num = math.ceil(width * height * density)

        rt.rect_mode = DrawMode.CORNER
        rt.ellipse_mode = DrawMode.CENTER
        rt.no_stroke()

        rt.fill(c[0])
        rt.rect(0, 0, width, height)

        rt.fill(c[1 % len(c)])
        for _ in range(num):
            x = abs(rt.random_gaussian()) / NOISE_GRAD_SIGMA_DIV * width
            y = rt.random(height)
            dia = rt.noise(x * NOISE_SCALE, y * NOISE_SCALE) * 0.5 + 1
            rt.ellipse(x, y, dia, dia)

    return noise_grad_fill


# =============================================================================
# Stripes
# =============================================================================
def stripe(space: numeric = 10) -> DrawCallback:
    """Vertical stripes cycling through the whole palette."""
    space = _positive(space, 10)

    def stripe_fill(width: float, height: float, rt: Any) -> None:
        c = rt.get_colors()
        rt.rect_mode = DrawMode.CORNER
        rt.no_stroke()

        count = 0
        x = 0.0
        while x <= width + space:
            rt.fill(c[count % len(c)])
            rt.rect(x, 0, math.ceil(space), height)
            x += space
            count += 1

    return stripe_fill


def stripe_circle(space: numeric = 25, min_radius: numeric = 0) -> DrawCallback:
    """Concentric rings around the area center, palette cycled from the inside out."""
    space = _positive(space, 25)

    def stripe_circle_fill(width: float, height: float, rt: Any) -> None:
        c = rt.get_colors()
        max_radius = math.hypot(width, height)
        num = math.ceil((max_radius - min_radius) / space)

        rt.ellipse_mode = DrawMode.CENTER
        rt.no_stroke()

        # outermost first so inner rings paint over
        for i in range(num):
            rt.fill(c[i % len(c)])
            radius = min_radius + (num - 1 - i) * space
            rt.circle(width / 2, height / 2, radius * 2)

    return stripe_circle_fill


def stripe_polygon(vert_num: int = 3, space: numeric = 25, min_radius: numeric = 0) -> DrawCallback:
    """Concentric regular polygons; `vert_num` is clamped to [3, 30]."""
    space = _positive(space, 25)
    vert_num = int(_clamp(vert_num, 3, POLYGON_MAX_VERTICES))

    def stripe_polygon_fill(width: float, height: float, rt: Any) -> None:
        c = rt.get_colors()
        max_radius = math.hypot(width, height)
        num = math.ceil((max_radius - min_radius) / space)

        rt.no_stroke()

        for i in range(num):
            rt.fill(c[i % len(c)])
            radius = min_radius + (num - 1 - i) * space

            rt.begin_shape()
            for k in range(vert_num):
                rad = k * math.tau / vert_num
                rt.vertex(width / 2 + math.cos(rad) * radius, height / 2 + math.sin(rad) * radius)
            rt.end_shape(close=True)

    return stripe_polygon_fill


def stripe_radial(angle_span: numeric = 1) -> DrawCallback:
    """
    Pie wedges around the area center.

    `angle_span` is the wedge angle in the surface's angle mode.
    """
    angle_span = _positive(angle_span, 1)

    def stripe_radial_fill(width: float, height: float, rt: Any) -> None:
        c = rt.get_colors()
        turn = rt.full_turn
        wrap_end = rt.from_radians(RADIAL_WRAP_END)
        seam = rt.from_radians(RADIAL_SEAM_EPS)

        rt.ellipse_mode = DrawMode.CENTER
        rt.no_stroke()

        dia = math.hypot(width, height)
        count = 0
        r = 0.0
        while r < turn:
            end = wrap_end if r + angle_span > turn else r + angle_span
            rt.fill(c[count % len(c)])
            rt.arc(width / 2, height / 2, dia, dia, r, end + seam)
            r += angle_span
            count += 1

    return stripe_radial_fill


def wave(wave_w: numeric = 100, wave_h: numeric = 10, space: numeric = 20,
         weight: numeric = 5) -> DrawCallback:
    """
    Horizontal sine bands.

    colors[0] is the base, colors[1] the bands. `wave_w` is the wavelength,
    `wave_h` the amplitude, `space` the band pitch and `weight` the band
    thickness.
    """
    space = _positive(space, 20)
    wave_w = _positive(wave_w, 100)

    def wave_fill(width: float, height: float, rt: Any) -> None:
        c = rt.get_colors()

        def wave_y(x: float) -> float:
            return math.sin(x / wave_w * math.tau) * wave_h

        rt.rect_mode = DrawMode.CORNER
        rt.no_stroke()

        rt.fill(c[0])
        rt.rect(0, 0, width, height)

        rt.fill(c[1 % len(c)])
        y = -wave_h
        while y <= height + wave_h:
            rt.begin_shape()
            x = 0.0
            while x < width:
                rt.vertex(x, y + wave_y(x))
                x += WAVE_VERTEX_STEP
            rt.vertex(width, y + wave_y(width))
            x = width
            while x > 0:
                rt.vertex(x, y + weight + wave_y(x))
                x -= WAVE_VERTEX_STEP
            rt.vertex(0, y + weight + wave_y(0))
            rt.end_shape(close=True)
            y += space

    return wave_fill


def cross(space: numeric = 20, weight: numeric = 5) -> DrawCallback:
    """Grid of horizontal and vertical bars; colors[1] on colors[0]."""
    space = _positive(space, 20)

    def cross_fill(width: float, height: float, rt: Any) -> None:
        c = rt.get_colors()
        rt.rect_mode = DrawMode.CORNER
        rt.no_stroke()

        rt.fill(c[0])
        rt.rect(0, 0, width, height)

        rt.fill(c[1 % len(c)])
        y = 0.0
        while y < height:
            rt.rect(0, y + space / 2 - weight / 2, width, weight)
            y += space
        x = 0.0
        while x < width:
            rt.rect(x + space / 2 - weight / 2, 0, weight, height)
            x += space

    return cross_fill


# =============================================================================
# Tilings
# =============================================================================
def dot(space: numeric = 15, dia: numeric = 7) -> DrawCallback:
    """Regular dot grid."""
    def dot_cell(rt: Any, column: int, row: int) -> None:
        rt.no_stroke()
        rt.ellipse_mode = DrawMode.CENTER
        rt.circle(0, 0, dia)

    return tile(space, space, dot_cell, False)


def checked(check_w: numeric = 10, check_h: Optional[numeric] = None) -> DrawCallback:
    """Checkerboard; `check_h` defaults to `check_w`."""
    check_h = check_w if check_h is None else check_h

    def checked_cell(rt: Any, column: int, row: int) -> None:
        rt.no_stroke()
        rt.rect_mode = DrawMode.CORNER
        rt.rect(0, 0, check_w, check_h)

    return tile(check_w * 2, check_h, checked_cell, True)


def triangle(tri_w: numeric = 20, tri_h: numeric = 20) -> DrawCallback:
    """Staggered rows of downward-pointing triangles."""
    def triangle_cell(rt: Any, column: int, row: int) -> None:
        rt.no_stroke()
        rt.triangle(0, 0, tri_w, 0, tri_w / 2, tri_h)

    return tile(tri_w, tri_h, triangle_cell, True)
