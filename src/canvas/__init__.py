from .modes import DrawMode, AngleMode, ArcMode, mode_adjust
from .vector import Vector
from .config import CanvasConfig
from .surface import Canvas


__all__ = [
    "modes",
    "vector",
    "config",
    "surface",
]
