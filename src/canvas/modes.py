"""
modes.py
--------

Drawing-mode enums shared by the canvas and the shape adapters.
"""

from enum import Enum, auto

__all__ = ["DrawMode", "AngleMode", "ArcMode", "mode_adjust"]


class DrawMode(Enum):
    """How the four numbers of a rect/ellipse call map to a box.

    CORNER:  (x, y) is the top-left corner, then width, height.
    CORNERS: (x1, y1) and (x2, y2) are opposite corners.
    CENTER:  (x, y) is the center, then width, height.
    RADIUS:  (x, y) is the center, then half-width, half-height.
    """
    CORNER = auto()
    CORNERS = auto()
    CENTER = auto()
    RADIUS = auto()


class AngleMode(Enum):
    RADIANS = auto()
    DEGREES = auto()


class ArcMode(Enum):
    OPEN = auto()   # filled as a chord, outline left open
    CHORD = auto()
    PIE = auto()


def mode_adjust(a: float, b: float, c: float, d: float, mode: DrawMode) -> tuple[float, float, float, float]:
    """Map the raw numbers of a rect/ellipse call to (x, y, w, h), top-left based."""
    if mode is DrawMode.CORNER:
        return a, b, c, d
    if mode is DrawMode.CORNERS:
        return a, b, c - a, d - b
    if mode is DrawMode.RADIUS:
        return a - c, b - d, 2 * c, 2 * d
    if mode is DrawMode.CENTER:
        return a - c * 0.5, b - d * 0.5, c, d
    raise TypeError(f"Unsupported draw mode: {mode!r}")
