"""
test_shapes.py
--------------
Tests for the PatternCanvas shape adapters: covered regions, clipping
and per-surface pattern state.
"""

import pytest

from canvas import DrawMode
from conftest import RED, WHITE, pixel, unique_colors
from pattern import EmptyPathError, PatternRegion


@pytest.fixture
def red_canvas(pattern_canvas):
  pattern_canvas.pattern_colors(["#FF0000"])
  return pattern_canvas


def _region(cv):
  return tuple(pytest.approx(v) for v in cv.controller.region)


# ---------------------------------------------------------------------------
# 1. Regions of rect-like and ellipse-like shapes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
  "mode, args, expected",
  [
    (DrawMode.CORNER, (10, 10, 20, 20), (10, 10, 20, 20)),
    (DrawMode.CORNERS, (5, 5, 15, 25), (5, 5, 10, 20)),
    (DrawMode.CENTER, (20, 20, 10, 10), (15, 15, 10, 10)),
    (DrawMode.RADIUS, (20, 20, 5, 5), (15, 15, 10, 10)),
  ],
)
def test_rect_pattern_region_follows_rect_mode(red_canvas, mode, args, expected):
  red_canvas.rect_mode = mode
  red_canvas.rect_pattern(*args)
  assert red_canvas.controller.region == PatternRegion(*expected)


def test_rect_pattern_defaults_height_to_width(red_canvas):
  red_canvas.rect_pattern(2, 3, 8)
  assert red_canvas.controller.region == PatternRegion(2, 3, 8, 8)


def test_square_pattern_region(red_canvas):
  red_canvas.rect_mode = DrawMode.CENTER
  red_canvas.square_pattern(20, 20, 10)
  assert red_canvas.controller.region == PatternRegion(15, 15, 10, 10)


def test_ellipse_pattern_region_is_centered_by_default(red_canvas):
  red_canvas.ellipse_pattern(20, 20, 10, 6)
  assert red_canvas.controller.region == PatternRegion(15, 17, 10, 6)


def test_circle_pattern_region_in_corner_mode(red_canvas):
  red_canvas.ellipse_mode = DrawMode.CORNER
  red_canvas.circle_pattern(5, 5, 10)
  assert red_canvas.controller.region == PatternRegion(5, 5, 10, 10)


def test_arc_pattern_region_matches_full_ellipse(red_canvas):
  red_canvas.arc_pattern(20, 20, 30, 30, 0, 1.5)
  assert red_canvas.controller.region == PatternRegion(5, 5, 30, 30)


# ---------------------------------------------------------------------------
# 2. Regions of polygons
# ---------------------------------------------------------------------------

def test_triangle_pattern_region_is_centroid_box(red_canvas):
  red_canvas.triangle_pattern(0, 0, 30, 0, 0, 30)
  # centroid (10, 10), farthest vertex 20 away on each axis
  assert _region(red_canvas) == (-10, -10, 40, 40)


def test_quad_pattern_region_is_bounding_box(red_canvas):
  red_canvas.quad_pattern(1, 2, 11, 2, 11, 22, 1, 22)
  assert red_canvas.controller.region == PatternRegion(1, 2, 10, 20)


# ---------------------------------------------------------------------------
# 3. Free-form shapes
# ---------------------------------------------------------------------------

def test_end_shape_pattern_straight_edges(red_canvas):
  cv = red_canvas
  cv.begin_shape_pattern()
  for x, y in [(4, 4), (24, 4), (24, 14), (4, 14)]:
    cv.vertex_pattern(x, y)
  cv.end_shape_pattern(close=True)
  assert cv.controller.region == PatternRegion(4, 4, 20, 10)
  assert pixel(cv.to_array(), 14, 9) == RED


def test_end_shape_pattern_pads_curved_paths(red_canvas):
  cv = red_canvas
  cv.begin_shape_pattern()
  for x, y in [(0, 0), (0, 0), (10, 0), (10, 10), (0, 10), (0, 10)]:
    cv.curve_vertex_pattern(x, y)
  cv.end_shape_pattern(close=True)
  assert _region(cv) == (-1.25, -1.25, 12.5, 12.5)


def test_bezier_and_quadratic_pattern_vertices(red_canvas):
  cv = red_canvas
  cv.begin_shape_pattern()
  cv.vertex_pattern(0, 0)
  cv.bezier_vertex_pattern(10, 0, 20, 10, 20, 20)
  cv.quadratic_vertex_pattern(10, 30, 0, 20)
  cv.end_shape_pattern(close=True)
  assert cv.controller.region == PatternRegion(0, 0, 20, 30)


def test_begin_shape_pattern_resets_recorded_vertices(red_canvas):
  cv = red_canvas
  cv.begin_shape_pattern()
  cv.vertex_pattern(100, 100)
  cv.end_shape_pattern()
  cv.begin_shape_pattern()
  assert len(cv.vertex_path) == 0


def test_end_shape_pattern_without_vertices_raises(red_canvas):
  red_canvas.begin_shape_pattern()
  with pytest.raises(EmptyPathError):
    red_canvas.end_shape_pattern()


def test_contour_pattern_leaves_hole(red_canvas):
  cv = red_canvas
  cv.begin_shape_pattern()
  for x, y in [(0, 0), (40, 0), (40, 40), (0, 40)]:
    cv.vertex_pattern(x, y)
  cv.begin_contour_pattern()
  for x, y in [(10, 10), (10, 30), (30, 30), (30, 10)]:
    cv.vertex_pattern(x, y)
  cv.end_contour_pattern()
  cv.end_shape_pattern(close=True)

  img = cv.to_array()
  assert pixel(img, 5, 5) == RED
  assert pixel(img, 20, 20) == WHITE


# ---------------------------------------------------------------------------
# 4. Clipping and colors
# ---------------------------------------------------------------------------

def test_rect_pattern_is_clipped(red_canvas):
  red_canvas.rect_pattern(10, 10, 20, 20)
  img = red_canvas.to_array()
  assert unique_colors(img[11:29, 11:29]) == {RED}
  assert pixel(img, 5, 5) == WHITE
  assert pixel(img, 35, 35) == WHITE


def test_circle_pattern_leaves_corners_untouched(red_canvas):
  red_canvas.circle_pattern(20, 20, 40)
  img = red_canvas.to_array()
  assert pixel(img, 20, 20) == RED
  assert pixel(img, 1, 1) == WHITE
  assert pixel(img, 38, 38) == WHITE


def test_rotated_pattern_still_covers_shape(red_canvas):
  red_canvas.pattern_angle(0.7)
  red_canvas.rect_pattern(0, 0, 40, 40)
  assert unique_colors(red_canvas.to_array()[2:38, 2:38]) == {RED}


def test_adapters_leave_fill_and_stroke_disabled(red_canvas):
  red_canvas.fill("blue")
  red_canvas.stroke("green")
  red_canvas.rect_pattern(0, 0, 10, 10)
  assert red_canvas.fill_color is None
  assert red_canvas.stroke_color is None


# ---------------------------------------------------------------------------
# 5. Per-surface state
# ---------------------------------------------------------------------------

def test_pattern_state_accessors(pattern_canvas):
  func = lambda w, h, rt: None
  assert pattern_canvas.pattern(func) is func
  assert pattern_canvas.pattern_angle(1.5) == 1.5
  assert pattern_canvas.pattern_angle() == 1.5
  assert pattern_canvas.pattern_colors(["a", "b"]) == ["a", "b"]
  assert pattern_canvas.get_colors() == ["a", "b"]


def test_create_graphics_has_independent_state(pattern_canvas):
  g = pattern_canvas.create_graphics(20, 10)
  try:
    g.pattern_colors(["#00FF00"])
    g.pattern_angle(2.0)
    assert pattern_canvas.get_colors() == ["#FFFFFF", "#000000"]
    assert pattern_canvas.pattern_angle() == 0
    assert g.controller is not pattern_canvas.controller
    assert (g.width, g.height, g.dpi) == (20, 10, pattern_canvas.dpi)
    assert g.antialiased is pattern_canvas.antialiased
  finally:
    g.close()
