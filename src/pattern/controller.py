"""
controller.py
-------------

Per-surface pattern state and the render sequence that paints a texture
inside the shape that was just drawn.

Render sequence for `apply_pattern(x, y, w, h, surface)`:
  1. pick the active callback (or the flat fill of colors[0])
  2. wrap it with the current rotation
  3. remember the surface's rect/ellipse modes
  4. push, clip to the current path, move the origin to (x, y), draw
  5. pop and put the modes back, even when the callback raises
"""

from __future__ import annotations

__all__ = ["DEFAULT_COLORS", "PatternController"]

import copy
import logging
from collections.abc import Sequence
from numbers import Real
from typing import Any, List, Optional, Union

from canvas.modes import DrawMode
from .rotation import DrawCallback, rotated
from .vertex_info import PatternRegion

numeric = Union[int, float]

# =============================================================================
# Constants
# =============================================================================
LOGGER_NAME = "pattern"
DEFAULT_COLORS = ("#FFFFFF", "#000000")


class PatternController:
    """
    Pattern state owned by one drawing surface.

    Attributes:
        region: Last area a pattern was applied to.
        target: Surface of the last `apply_pattern()` call.
    """

    __slots__ = ("region", "target", "_colors", "_angle", "_draw_callback")

    def __init__(self) -> None:
        self.region = PatternRegion(0.0, 0.0, 0.0, 0.0)
        self.target: Any = None
        self._colors: List[Any] = list(DEFAULT_COLORS)
        self._angle: numeric = 0
        self._draw_callback: Optional[DrawCallback] = None

    # -------------------------------------------------------------------------
    # State accessors
    # -------------------------------------------------------------------------
    @property
    def angle(self) -> numeric:
        return self._angle

    def set_angle(self, value: Any = None) -> numeric:
        """Store `value` when it is a number; always return the current angle."""
        if isinstance(value, Real) and not isinstance(value, bool):
            self._angle = value
        return self._angle

    @property
    def draw_callback(self) -> Optional[DrawCallback]:
        return self._draw_callback

    def set_draw_callback(self, func: Any) -> Union[DrawCallback, bool]:
        """Install `func` as the active texture; False (and no change) if not callable."""
        if not callable(func):
            logging.getLogger(LOGGER_NAME).warning(
                f"Ignoring non-callable pattern of type {type(func).__name__}."
            )
            return False
        self._draw_callback = func
        return func

    @property
    def colors(self) -> List[Any]:
        """Copy of the palette; mutating it never reaches the controller."""
        return copy.copy(self._colors)

    def set_colors(self, colors: Any = None) -> List[Any]:
        """Replace the palette with a non-empty sequence; always return a copy."""
        if (isinstance(colors, Sequence) and not isinstance(colors, (str, bytes))
                and len(colors) > 0):
            self._colors = list(colors)
        return self.colors

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def apply_pattern(self, x: numeric, y: numeric, w: numeric, h: numeric, surface: Any) -> None:
        """Paint the active pattern over (x, y, w, h), clipped to `surface`'s current path."""
        self.region = PatternRegion(x, y, w, h)
        self.target = surface
        self._draw_pattern()

    def _flat_fill(self) -> DrawCallback:
        c = self.colors

        def flat_fill(width: float, height: float, surface: Any) -> None:
            surface.rect_mode = DrawMode.CORNER
            surface.fill(c[0])
            surface.no_stroke()
            surface.rect(0, 0, width, height)

        return flat_fill

    def _draw_pattern(self) -> None:
        rt = self.target
        region = self.region
        func = self._draw_callback if callable(self._draw_callback) else self._flat_fill()
        rotated_func = rotated(func, self._angle)

        logging.getLogger(LOGGER_NAME).debug(
            f"Applying {getattr(func, '__name__', type(func).__name__)} to "
            f"({region.x:.1f}, {region.y:.1f}, {region.w:.1f}, {region.h:.1f}) "
            f"at angle {self._angle}."
        )

        rect_mode = rt.rect_mode
        ellipse_mode = rt.ellipse_mode
        try:
            with rt.saved():
                rt.clip()
                rt.translate(region.x, region.y)
                rotated_func(region.w, region.h, rt)
        finally:
            rt.rect_mode = rect_mode
            rt.ellipse_mode = ellipse_mode

    def __repr__(self) -> str:
        return (f"<{self.__class__.__name__} colors={self._colors} angle={self._angle} "
                f"pattern={getattr(self._draw_callback, '__name__', None)}>")
