"""
test_textures.py
----------------
Rendering tests for the procedural texture factories.
"""

import math

import numpy as np
import pytest

from canvas import AngleMode
from conftest import BLUE, RED, pixel
from pattern import PatternCanvas, textures


FACTORIES = [
  textures.noise,
  textures.noise_grad,
  textures.stripe,
  textures.stripe_circle,
  textures.stripe_polygon,
  textures.stripe_radial,
  textures.wave,
  textures.dot,
  textures.checked,
  textures.cross,
  textures.triangle,
]


def _fill(cv, func, w=40, h=40):
  cv.pattern(func)
  cv.rect_pattern(0, 0, w, h)
  return cv.to_array()


# ---------------------------------------------------------------------------
# 1. Every factory renders
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("factory", FACTORIES, ids=lambda f: f.__name__)
def test_factory_renders_with_defaults(pattern_canvas, factory):
  img = _fill(pattern_canvas, factory())
  assert img.shape == (40, 40, 4)
  assert pattern_canvas.stack_depth == 0


@pytest.mark.parametrize("factory", FACTORIES, ids=lambda f: f.__name__)
def test_factory_works_with_single_color_palette(pattern_canvas, factory):
  pattern_canvas.pattern_colors(["#FF0000"])
  img = _fill(pattern_canvas, factory())
  assert pixel(img, 20, 20) == RED


@pytest.mark.parametrize("factory", FACTORIES, ids=lambda f: f.__name__)
def test_factory_renders_rotated(pattern_canvas, factory):
  pattern_canvas.pattern_angle(math.pi / 5)
  img = _fill(pattern_canvas, factory())
  assert img.shape == (40, 40, 4)


@pytest.mark.parametrize(
  "func",
  [
    textures.stripe(0),
    textures.stripe_circle(0),
    textures.stripe_polygon(5, 0),
    textures.stripe_radial(0),
    textures.wave(0, 10, 0, 5),
    textures.dot(0, 5),
    textures.cross(0, 5),
    textures.checked(0),
    textures.triangle(0, 0),
  ],
)
def test_zero_spacing_falls_back_to_defaults(pattern_canvas, func):
  assert _fill(pattern_canvas, func).shape == (40, 40, 4)


# ---------------------------------------------------------------------------
# 2. Layouts
# ---------------------------------------------------------------------------

def test_checked_layout(pattern_canvas):
  pattern_canvas.pattern_colors(["#0000FF", "#FF0000"])
  img = _fill(pattern_canvas, textures.checked(10))
  assert pixel(img, 5, 5) == RED
  assert pixel(img, 15, 15) == RED
  assert pixel(img, 15, 5) == BLUE
  assert pixel(img, 5, 15) == BLUE


def test_stripe_cycles_palette(pattern_canvas):
  pattern_canvas.pattern_colors(["#FF0000", "#0000FF"])
  img = _fill(pattern_canvas, textures.stripe(10))
  assert pixel(img, 5, 20) == RED
  assert pixel(img, 15, 20) == BLUE
  assert pixel(img, 25, 20) == RED


def test_cross_bars(pattern_canvas):
  pattern_canvas.pattern_colors(["#0000FF", "#FF0000"])
  img = _fill(pattern_canvas, textures.cross(20, 4))
  # bars are centered at 10 and 30 on both axes
  assert pixel(img, 1, 10) == RED
  assert pixel(img, 10, 1) == RED
  assert pixel(img, 1, 1) == BLUE
  assert pixel(img, 20, 20) == BLUE


def test_stripe_circle_center_uses_first_color(pattern_canvas):
  pattern_canvas.pattern_colors(["#FF0000", "#0000FF"])
  img = _fill(pattern_canvas, textures.stripe_circle(10))
  assert pixel(img, 20, 20) == RED


# ---------------------------------------------------------------------------
# 3. Parameter handling
# ---------------------------------------------------------------------------

def test_noise_draws_expected_number_of_dots(pattern_canvas):
  cv = pattern_canvas
  cv.pattern(textures.noise(0.25))
  cv.rect_pattern(0, 0, 20, 20)
  # base rect + ceil(20 * 20 * 0.25) dots
  assert len(cv.ax.patches) == 1 + 100


def test_noise_density_is_clamped(pattern_canvas):
  cv = pattern_canvas
  cv.pattern(textures.noise(5))
  cv.rect_pattern(0, 0, 5, 4)
  assert len(cv.ax.patches) == 1 + 20


@pytest.mark.parametrize("vert_num, expected", [(50, 30), (1, 3), (6, 6)])
def test_stripe_polygon_vertex_count_is_clamped(pattern_canvas, vert_num, expected):
  cv = pattern_canvas
  cv.pattern(textures.stripe_polygon(vert_num, space=1000))
  cv.rect_pattern(0, 0, 20, 20)
  # a single polygon; closing adds one vertex
  assert len(cv.ax.patches) == 1
  assert len(cv.ax.patches[0].get_path().vertices) == expected + 1


def test_stripe_radial_honors_degrees(pattern_canvas):
  cv = pattern_canvas
  cv.angle_mode = AngleMode.DEGREES
  cv.pattern(textures.stripe_radial(90))
  cv.rect_pattern(0, 0, 20, 20)
  assert len(cv.ax.patches) == 4


def test_noise_is_reproducible_with_seed():
  images = []
  for _ in range(2):
    cv = PatternCanvas(40, 40, dpi=100, antialiased=False, seed=3)
    try:
      images.append(_fill(cv, textures.noise(0.3)))
    finally:
      cv.close()
  assert np.array_equal(images[0], images[1])
