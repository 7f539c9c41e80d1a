"""
rotation.py
-----------

Wraps a draw callback so it always paints an upright, axis-aligned canvas
while the caller's rotation is applied around the region center through
the surface transform stack.

Rotating the coordinate frame, rather than rotating rendered pixels,
keeps every texture rotation-agnostic and free of resampling artifacts.
"""

from __future__ import annotations

__all__ = ["DrawCallback", "rotated_size", "rotated"]

from typing import Any, Protocol, Tuple, Union

from canvas.vector import Vector

numeric = Union[int, float]


class DrawCallback(Protocol):
    """Texture contract: paint a `width` x `height` area whose top-left is the origin."""

    def __call__(self, width: float, height: float, surface: Any) -> None:
        ...


def rotated_size(width: numeric, height: numeric, angle: float) -> Tuple[float, float]:
    """
    Size of the upright box that covers a `width` x `height` rectangle
    rotated by `angle` radians about its center.

    Only the corners (-w/2, h/2) and (w/2, h/2) are needed; the other two
    are their mirror images.
    """
    r1 = Vector(-width / 2, height / 2).rotate(angle)
    r2 = Vector(width / 2, height / 2).rotate(angle)
    nw = max(abs(r1.x), abs(r2.x)) * 2
    nh = max(abs(r1.y), abs(r2.y)) * 2
    return nw, nh


def rotated(draw: DrawCallback, angle: numeric) -> DrawCallback:
    """
    Return a callback that runs `draw` inside a frame rotated by `angle`
    (in the surface's angle mode) around the center of the target area.

    The inner callback receives the enlarged size from `rotated_size()` so
    its texture still covers the whole area after rotation.
    """
    def func(width: float, height: float, surface: Any) -> None:
        nw, nh = rotated_size(width, height, surface.radians(angle))

        with surface.saved():
            surface.translate(width / 2, height / 2)
            surface.rotate(angle)
            surface.translate(-nw / 2, -nh / 2)
            draw(nw, nh, surface)

    func.__name__ = f"rotated({getattr(draw, '__name__', type(draw).__name__)})"
    return func
