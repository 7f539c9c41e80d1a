"""
vector.py
---------

Minimal immutable 2D vector.
"""

from __future__ import annotations

import math
from typing import NamedTuple


class Vector(NamedTuple):
    x: float
    y: float

    def rotate(self, angle: float) -> Vector:
        """Rotate by `angle` radians (clockwise on a y-down canvas)."""
        c, s = math.cos(angle), math.sin(angle)
        return Vector(self.x * c - self.y * s, self.x * s + self.y * c)

    def heading(self) -> float:
        return math.atan2(self.y, self.x)

    def mag(self) -> float:
        return math.hypot(self.x, self.y)
