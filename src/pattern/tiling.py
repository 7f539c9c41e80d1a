"""
tiling.py
---------

Grid walker shared by the tiling textures (dot, checked, triangle, ...).

A texture only supplies the drawing of a single cell; this module owns
the base fill, the row stagger, and the half-step overshoot that keeps
the right and bottom edges covered.
"""

from __future__ import annotations

__all__ = ["DEFAULT_TILE_SPACING", "CellCallback", "tile"]

import math
import logging
from typing import Any, Protocol, Union

from canvas.modes import DrawMode
from .rotation import DrawCallback

numeric = Union[int, float]

# =============================================================================
# Constants
# =============================================================================
LOGGER_NAME = "pattern"
DEFAULT_TILE_SPACING = 50


class CellCallback(Protocol):
    """Draw one cell with its anchor at the origin."""

    def __call__(self, surface: Any, column: int, row: int) -> None:
        ...


def _spacing(value: numeric) -> float:
    value = abs(value)
    return DEFAULT_TILE_SPACING if value == 0 else value


def tile(spacing_x: numeric, spacing_y: numeric, cell: CellCallback,
         use_row_offset: bool = False) -> DrawCallback:
    """
    Build a draw callback that repeats `cell` on a regular grid.

    Args:
        spacing_x, spacing_y: Grid step. Signs are dropped; 0 falls back
            to `DEFAULT_TILE_SPACING`.
        cell: Called as `cell(surface, column, row)` with the origin moved
            to the cell anchor.
        use_row_offset: Shift odd rows left by half a step (brick layout).

    Palette use: colors[0] paints the background, colors[1] is left as the
    fill color for the cells.
    """
    step_x = _spacing(spacing_x)
    step_y = _spacing(spacing_y)

    def func(width: float, height: float, surface: Any) -> None:
        c = surface.get_colors()
        surface.rect_mode = DrawMode.CORNER
        surface.no_stroke()

        surface.fill(c[0])
        surface.rect(0, 0, width, height)

        rows = math.floor((height + step_y / 2) / step_y) + 1
        logging.getLogger(LOGGER_NAME).debug(
            f"Tiling {width:.1f}x{height:.1f} with step ({step_x}, {step_y}), {rows} rows."
        )

        surface.fill(c[1 % len(c)])
        for row in range(rows):
            y = row * step_y
            x = -step_x / 2 if use_row_offset and row % 2 == 1 else 0.0
            column = 0
            while x <= width + step_x / 2:
                with surface.saved():
                    surface.translate(x, y)
                    cell(surface, column, row)
                x += step_x
                column += 1

    return func
