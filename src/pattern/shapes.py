"""
shapes.py
---------

`PatternCanvas`: a Canvas that can fill shapes with patterns.

Each `*_pattern` method draws the native shape with fill and stroke
disabled (so only its outline becomes the current path), works out the
region the pattern must cover from the shape's own arguments, and hands
it to the canvas's `PatternController`.

Every PatternCanvas owns its controller and vertex recorder; surfaces
never share pattern state.
"""

from __future__ import annotations

__all__ = ["PatternCanvas"]

import logging
from typing import Any, List, Optional, Union

from canvas.modes import ArcMode, mode_adjust
from canvas.surface import Canvas
from .controller import PatternController
from .rotation import DrawCallback
from .vertex_info import PatternRegion, VertexPath

numeric = Union[int, float]

LOGGER_NAME = "pattern"


class PatternCanvas(Canvas):
    """
    Canvas with pattern fills.

    Example:
        >>> from pattern import textures
        >>> cv = PatternCanvas(200, 200)
        >>> cv.pattern_colors(["#223", "#fc0"])
        >>> cv.pattern(textures.dot(12, 5))
        >>> cv.pattern_angle(0.3)
        >>> cv.circle_pattern(100, 100, 150)
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._controller = PatternController()
        self._vertex_path = VertexPath()

    @property
    def controller(self) -> PatternController:
        return self._controller

    @property
    def vertex_path(self) -> VertexPath:
        return self._vertex_path

    def create_graphics(self, width: int, height: int, **kwargs: Any) -> PatternCanvas:
        """Off-screen surface with its own, independent pattern state."""
        kwargs.setdefault("dpi", self.dpi)
        kwargs.setdefault("antialiased", self.antialiased)
        return PatternCanvas(width, height, **kwargs)

    # -------------------------------------------------------------------------
    # Pattern state
    # -------------------------------------------------------------------------
    def pattern(self, func: Any) -> Union[DrawCallback, bool]:
        return self._controller.set_draw_callback(func)

    def pattern_angle(self, angle: Any = None) -> numeric:
        return self._controller.set_angle(angle)

    def pattern_colors(self, colors: Any = None) -> List[Any]:
        return self._controller.set_colors(colors)

    def get_colors(self) -> List[Any]:
        return self._controller.colors

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _disable_color(self) -> None:
        self.no_stroke()
        self.no_fill()

    def _apply(self, region: PatternRegion) -> None:
        self._controller.apply_pattern(region.x, region.y, region.w, region.h, self)

    def _mode_region(self, a: numeric, b: numeric, c: numeric, d: numeric, mode) -> PatternRegion:
        return PatternRegion(*mode_adjust(a, b, c, d, mode))

    # -------------------------------------------------------------------------
    # Rect-like shapes
    # -------------------------------------------------------------------------
    def rect_pattern(self, x: numeric, y: numeric, w: numeric, h: Optional[numeric] = None) -> None:
        h = w if h is None else h
        self._disable_color()
        self.rect(x, y, w, h)
        self._apply(self._mode_region(x, y, w, h, self.rect_mode))

    def square_pattern(self, x: numeric, y: numeric, s: numeric) -> None:
        self._disable_color()
        self.square(x, y, s)
        self._apply(self._mode_region(x, y, s, s, self.rect_mode))

    # -------------------------------------------------------------------------
    # Ellipse-like shapes
    # -------------------------------------------------------------------------
    def ellipse_pattern(self, x: numeric, y: numeric, w: numeric, h: Optional[numeric] = None) -> None:
        h = w if h is None else h
        self._disable_color()
        self.ellipse(x, y, w, h)
        self._apply(self._mode_region(x, y, w, h, self.ellipse_mode))

    def circle_pattern(self, x: numeric, y: numeric, d: numeric) -> None:
        self._disable_color()
        self.circle(x, y, d)
        self._apply(self._mode_region(x, y, d, d, self.ellipse_mode))

    def arc_pattern(self, x: numeric, y: numeric, w: numeric, h: numeric,
                    start: numeric, stop: numeric, mode: Optional[ArcMode] = None) -> None:
        self._disable_color()
        self.arc(x, y, w, h, start, stop, mode)
        self._apply(self._mode_region(x, y, w, h, self.ellipse_mode))

    # -------------------------------------------------------------------------
    # Polygons
    # -------------------------------------------------------------------------
    def triangle_pattern(self, x1: numeric, y1: numeric, x2: numeric, y2: numeric,
                         x3: numeric, y3: numeric) -> None:
        self._disable_color()
        self.triangle(x1, y1, x2, y2, x3, y3)

        # centered on the centroid, wide enough for the farthest vertex
        cx = (x1 + x2 + x3) / 3
        cy = (y1 + y2 + y3) / 3
        w = max(abs(cx - x1), abs(cx - x2), abs(cx - x3)) * 2
        h = max(abs(cy - y1), abs(cy - y2), abs(cy - y3)) * 2
        self._apply(PatternRegion(cx - w / 2, cy - h / 2, w, h))

    def quad_pattern(self, x1: numeric, y1: numeric, x2: numeric, y2: numeric,
                     x3: numeric, y3: numeric, x4: numeric, y4: numeric) -> None:
        self._disable_color()
        self.quad(x1, y1, x2, y2, x3, y3, x4, y4)

        min_x, max_x = min(x1, x2, x3, x4), max(x1, x2, x3, x4)
        min_y, max_y = min(y1, y2, y3, y4), max(y1, y2, y3, y4)
        self._apply(PatternRegion(min_x, min_y, max_x - min_x, max_y - min_y))

    # -------------------------------------------------------------------------
    # Free-form shapes
    # -------------------------------------------------------------------------
    def begin_shape_pattern(self) -> None:
        self.begin_shape()
        self._vertex_path.reset()

    def begin_contour_pattern(self) -> None:
        self.begin_contour()

    def end_contour_pattern(self) -> None:
        self.end_contour()

    def vertex_pattern(self, x: numeric, y: numeric) -> None:
        self.vertex(x, y)
        self._vertex_path.add_vertex(x, y)

    def curve_vertex_pattern(self, x: numeric, y: numeric) -> None:
        self.curve_vertex(x, y)
        self._vertex_path.add_curve_vertex(x, y)

    def bezier_vertex_pattern(self, x2: numeric, y2: numeric, x3: numeric, y3: numeric,
                              x4: numeric, y4: numeric) -> None:
        self.bezier_vertex(x2, y2, x3, y3, x4, y4)
        self._vertex_path.add_bezier_vertex(x2, y2, x3, y3, x4, y4)

    def quadratic_vertex_pattern(self, cx: numeric, cy: numeric, x3: numeric, y3: numeric) -> None:
        self.quadratic_vertex(cx, cy, x3, y3)
        self._vertex_path.add_quadratic_vertex(cx, cy, x3, y3)

    def end_shape_pattern(self, close: bool = False) -> None:
        """Close the free-form shape and fill it; raises EmptyPathError with no vertices."""
        self._disable_color()
        self.end_shape(close=close)
        region = self._vertex_path.estimate_area()
        logging.getLogger(LOGGER_NAME).debug(f"Estimated area {region} from {self._vertex_path!r}.")
        self._apply(region)
