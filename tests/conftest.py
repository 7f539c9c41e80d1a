"""
-------
conftest.py
-------
Shared pytest fixtures for canvas and pattern tests.
"""

import pytest
import numpy as np
import matplotlib
matplotlib.use("Agg")  # headless backend for CI

from canvas import Canvas
from pattern import PatternCanvas


RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)


# -----------------------------------------------------------------------------
# Canvas fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(scope="function")
def canvas():
  """
  Create and yield an isolated 40x40 aliased Canvas.

  Aliased rendering keeps pixel colors exact for assertions.
  """
  cv = Canvas(40, 40, dpi=100, antialiased=False, seed=7)
  yield cv
  cv.close()


@pytest.fixture(scope="function")
def pattern_canvas():
  """Create and yield an isolated 40x40 aliased PatternCanvas."""
  cv = PatternCanvas(40, 40, dpi=100, antialiased=False, seed=7)
  yield cv
  cv.close()


# -----------------------------------------------------------------------------
# Pixel helpers
# -----------------------------------------------------------------------------
def pixel(img: np.ndarray, x: int, y: int) -> tuple:
  """RGBA tuple at canvas pixel (x, y); y grows downward."""
  return tuple(int(v) for v in img[y, x])


def unique_colors(img: np.ndarray) -> set:
  """Set of RGBA tuples present in an (H, W, 4) block."""
  return {tuple(int(v) for v in px) for px in img.reshape(-1, 4)}
