"""
vertex_info.py
--------------

Records the vertices of a free-form shape and estimates the region a
pattern needs to cover.

Curved segments can bulge outside the hull of their anchor points, so a
curved path gets its box scaled by `CURVE_AREA_MULT` around the center.
The estimate only has to be a superset: the pattern is clipped to the
real shape anyway.
"""

from __future__ import annotations

__all__ = ["CURVE_AREA_MULT", "EmptyPathError", "PatternRegion", "VertexPath"]

from typing import List, NamedTuple, Tuple, Union

numeric = Union[int, float]

# =============================================================================
# Constants
# =============================================================================
CURVE_AREA_MULT = 1.25


class EmptyPathError(ValueError):
    """Area estimation was requested before any vertex was recorded."""


class PatternRegion(NamedTuple):
    """Axis-aligned rectangle a pattern is rendered into."""
    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2


class VertexPath:
    """Vertices of one begin_shape/end_shape sequence."""

    __slots__ = ("points", "is_curve", "curve_area_mult")

    def __init__(self, curve_area_mult: float = CURVE_AREA_MULT) -> None:
        self.points: List[Tuple[float, float]] = []
        self.is_curve = False
        self.curve_area_mult = curve_area_mult

    def reset(self) -> None:
        self.points = []
        self.is_curve = False

    def add_vertex(self, x: numeric, y: numeric) -> None:
        self.points.append((x, y))

    def add_curve_vertex(self, x: numeric, y: numeric) -> None:
        self.add_vertex(x, y)
        self.is_curve = True

    def add_bezier_vertex(self, x2: numeric, y2: numeric, x3: numeric, y3: numeric,
                          x4: numeric, y4: numeric) -> None:
        # control points already bound the bezier; no padding needed
        self.add_vertex(x2, y2)
        self.add_vertex(x3, y3)
        self.add_vertex(x4, y4)

    def add_quadratic_vertex(self, cx: numeric, cy: numeric, x3: numeric, y3: numeric) -> None:
        self.add_vertex(cx, cy)
        self.add_vertex(x3, y3)

    def estimate_area(self) -> PatternRegion:
        """
        Bounding box of the recorded points, padded when the path is curved.

        Raises:
            EmptyPathError: No vertex has been recorded.
        """
        if not self.points:
            raise EmptyPathError("Cannot estimate the area of a path with no vertices.")

        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)

        w = max_x - min_x
        h = max_y - min_y
        cx = min_x + w / 2
        cy = min_y + h / 2

        if self.is_curve:
            w *= self.curve_area_mult
            h *= self.curve_area_mult

        return PatternRegion(cx - w / 2, cy - h / 2, w, h)

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} points={len(self.points)} is_curve={self.is_curve}>"
