from .vertex_info import CURVE_AREA_MULT, EmptyPathError, PatternRegion, VertexPath
from .rotation import DrawCallback, rotated, rotated_size
from .tiling import DEFAULT_TILE_SPACING, CellCallback, tile
from .controller import DEFAULT_COLORS, PatternController
from .shapes import PatternCanvas
from . import textures


__all__ = [
    "vertex_info",
    "rotation",
    "tiling",
    "controller",
    "shapes",
    "textures",
]
