"""
surface.py
----------

Immediate-mode 2D drawing surface backed by a Matplotlib Figure.

Responsibilities:
  - Keep a style/transform state with a save/restore stack
  - Turn shape calls into `PathPatch` artists in y-down pixel coordinates
  - Remember the last drawn path so it can become a clip region
  - Provide randomness and coherent noise for procedural drawing
  - Rasterize with Agg on demand (`to_array`, `save`)
"""

from __future__ import annotations

__all__ = ["Canvas"]

import os
import math
import logging
import contextlib
from dataclasses import dataclass, replace
from typing import Any, Iterator, List, Optional, Tuple, Union

import numpy as np
from matplotlib import colors as mcolors
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path as mplPath
from matplotlib.transforms import Affine2D, Bbox, TransformedBbox

from utils.rng import RNG
from utils.noise import CoherentNoise
from .config import CanvasConfig
from .modes import AngleMode, ArcMode, DrawMode, mode_adjust
from .vector import Vector

numeric = Union[int, float]
RGBA = Tuple[float, float, float, float]
PathLike = Union[str, os.PathLike]

# =============================================================================
# Constants
# =============================================================================
LOGGER_NAME = "canvas"
POINTS_PER_INCH = 72.0
MIN_CURVE_VERTICES = 4


# =============================================================================
# Drawing state
# =============================================================================
@dataclass
class _State:
    """Everything `push()` saves and `pop()` restores."""
    matrix: np.ndarray
    fill: Optional[RGBA] = (1.0, 1.0, 1.0, 1.0)
    stroke: Optional[RGBA] = (0.0, 0.0, 0.0, 1.0)
    weight: float = 1.0
    rect_mode: DrawMode = DrawMode.CORNER
    ellipse_mode: DrawMode = DrawMode.CENTER
    clips: Tuple[mplPath, ...] = ()
    clip_bbox: Optional[Bbox] = None

    def copy(self) -> _State:
        return replace(self, matrix=self.matrix.copy())


class _ShapeBuilder:
    """Collects begin_shape/end_shape vertices as Matplotlib path segments."""

    def __init__(self) -> None:
        self.contours: List[Tuple[List[Tuple[float, float]], List[int], bool]] = []
        self.verts: List[Tuple[float, float]] = []
        self.codes: List[int] = []
        self.curve_run: List[Tuple[float, float]] = []
        self.in_contour = False

    def _add(self, code: int, *points: Tuple[float, float]) -> None:
        for pt in points:
            self.verts.append(pt)
            self.codes.append(mplPath.MOVETO if not self.codes else code)

    def vertex(self, x: float, y: float) -> None:
        self.flush_curve()
        self._add(mplPath.LINETO, (x, y))

    def curve_vertex(self, x: float, y: float) -> None:
        self.curve_run.append((x, y))

    def bezier_vertex(self, *pts: Tuple[float, float]) -> None:
        self.flush_curve()
        if not self.codes:
            raise RuntimeError("bezier_vertex() requires a preceding vertex().")
        self.verts.extend(pts)
        self.codes.extend([mplPath.CURVE4] * 3)

    def quadratic_vertex(self, *pts: Tuple[float, float]) -> None:
        self.flush_curve()
        if not self.codes:
            raise RuntimeError("quadratic_vertex() requires a preceding vertex().")
        self.verts.extend(pts)
        self.codes.extend([mplPath.CURVE3] * 2)

    def flush_curve(self) -> None:
        # Catmull-Rom through run[1:-1]; the end points only steer tangents.
        run, self.curve_run = self.curve_run, []
        if len(run) < MIN_CURVE_VERTICES:
            return
        pts = np.asarray(run, dtype=float)
        self._add(mplPath.LINETO, tuple(pts[1]))
        for i in range(1, len(pts) - 2):
            p0, p1, p2, p3 = pts[i - 1], pts[i], pts[i + 1], pts[i + 2]
            b1 = p1 + (p2 - p0) / 6.0
            b2 = p2 - (p3 - p1) / 6.0
            self.verts.extend([tuple(b1), tuple(b2), tuple(p2)])
            self.codes.extend([mplPath.CURVE4] * 3)

    def close_contour(self, hole: bool = False) -> None:
        self.flush_curve()
        if self.codes:
            self.contours.append((self.verts, self.codes, hole))
        self.verts, self.codes = [], []

    def build(self, close: bool) -> Optional[mplPath]:
        # Holes are always closed; outer contours only with close=True.
        verts: List[Tuple[float, float]] = []
        codes: List[int] = []
        for contour_verts, contour_codes, hole in self.contours:
            verts.extend(contour_verts)
            codes.extend(contour_codes)
            if hole or close:
                verts.append(contour_verts[0])
                codes.append(mplPath.CLOSEPOLY)
        if not verts:
            return None
        return mplPath(np.asarray(verts, dtype=float), np.asarray(codes, dtype=np.uint8))


# =============================================================================
# Canvas
# =============================================================================
class Canvas:
    """
    Immediate-mode drawing surface.

    Coordinates are pixels with the origin at the top-left corner and y
    growing downward. Each shape call produces one `PathPatch` on the
    underlying Axes; nothing is rasterized until `to_array()` or `save()`.

    Example:
        >>> with Canvas(200, 100) as cv:
        ...     cv.fill("tomato")
        ...     cv.rect(10, 10, 50, 30)
        ...     img = cv.to_array()
    """

    def __init__(self, width: int = 400, height: int = 400, dpi: int = 100,
                 config: Optional[CanvasConfig] = None, **kwargs: Any) -> None:
        """
        Args:
            width, height: Canvas size in pixels.
            dpi: Figure resolution; one data unit maps to one pixel.
            config: Full configuration. Overrides width/height/dpi/kwargs.
            **kwargs: Extra `CanvasConfig` fields (background, antialiased, seed).
        """
        self.config = config or CanvasConfig(width=width, height=height, dpi=dpi, **kwargs)
        self.logger = logging.getLogger(LOGGER_NAME)
        self.width = self.config.width
        self.height = self.config.height
        self.dpi = self.config.dpi
        self.antialiased = self.config.antialiased

        self._state = _State(matrix=np.eye(3))
        self._stack: List[_State] = []
        self._angle_mode = AngleMode.RADIANS
        self._current_path: Optional[mplPath] = None
        self._shape: Optional[_ShapeBuilder] = None

        self.rng = RNG(seed=self.config.seed)
        self._noise = CoherentNoise(seed=self.config.seed)
        self._create_canvas()
        self.logger.debug(f"Created {self!r}")

    def _create_canvas(self) -> None:
        self.fig = Figure(figsize=(self.width / self.dpi, self.height / self.dpi), dpi=self.dpi)
        FigureCanvasAgg(self.fig)
        self.fig.patch.set_facecolor(self.config.background)
        self.ax = self.fig.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_autoscale_on(False)
        self.ax.axis("off")

    # -------------------------------------------------------------------------
    # State stack
    # -------------------------------------------------------------------------
    def push(self) -> None:
        """Save the full transform + style state."""
        self._stack.append(self._state.copy())

    def pop(self) -> None:
        """Restore the state saved by the matching `push()`."""
        if not self._stack:
            raise RuntimeError("pop() called without a matching push().")
        self._state = self._stack.pop()

    @contextlib.contextmanager
    def saved(self) -> Iterator[Canvas]:
        """Scoped push/pop; the state is restored even if the body raises."""
        self.push()
        try:
            yield self
        finally:
            self.pop()

    @property
    def stack_depth(self) -> int:
        return len(self._stack)

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------
    def _concat(self, t: Affine2D) -> None:
        self._state.matrix = self._state.matrix @ t.get_matrix()

    def translate(self, x: numeric, y: numeric) -> None:
        self._concat(Affine2D().translate(x, y))

    def rotate(self, angle: numeric) -> None:
        """Rotate the frame by `angle`, expressed in the current angle mode."""
        self._concat(Affine2D().rotate(self.radians(angle)))

    def scale(self, sx: numeric, sy: Optional[numeric] = None) -> None:
        self._concat(Affine2D().scale(sx, sx if sy is None else sy))

    def reset_matrix(self) -> None:
        self._state.matrix = np.eye(3)

    def get_matrix(self) -> np.ndarray:
        """Copy of the current user-to-pixel affine matrix (3x3)."""
        return self._state.matrix.copy()

    # -------------------------------------------------------------------------
    # Angles and vectors
    # -------------------------------------------------------------------------
    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: AngleMode) -> None:
        if not isinstance(mode, AngleMode):
            raise TypeError(f"angle_mode must be an AngleMode, not {type(mode).__name__}")
        self._angle_mode = mode

    def radians(self, angle: numeric) -> float:
        """Convert an angle in the current mode to radians."""
        return math.radians(angle) if self._angle_mode is AngleMode.DEGREES else float(angle)

    def from_radians(self, angle: numeric) -> float:
        """Convert radians to the current angle mode."""
        return math.degrees(angle) if self._angle_mode is AngleMode.DEGREES else float(angle)

    @property
    def full_turn(self) -> float:
        return self.from_radians(math.tau)

    @staticmethod
    def create_vector(x: numeric, y: numeric) -> Vector:
        return Vector(float(x), float(y))

    # -------------------------------------------------------------------------
    # Style
    # -------------------------------------------------------------------------
    @staticmethod
    def _rgba(color: Any, alpha: Optional[float]) -> RGBA:
        if color is None:
            raise TypeError("Color must not be None; use no_fill()/no_stroke().")
        return mcolors.to_rgba(color, alpha)

    def fill(self, color: Any, alpha: Optional[float] = None) -> None:
        self._state.fill = self._rgba(color, alpha)

    def no_fill(self) -> None:
        self._state.fill = None

    def stroke(self, color: Any, alpha: Optional[float] = None) -> None:
        self._state.stroke = self._rgba(color, alpha)

    def no_stroke(self) -> None:
        self._state.stroke = None

    def stroke_weight(self, weight: numeric) -> None:
        if weight < 0:
            raise ValueError(f"Stroke weight must be >= 0, got {weight}.")
        self._state.weight = float(weight)

    @property
    def fill_color(self) -> Optional[RGBA]:
        return self._state.fill

    @property
    def stroke_color(self) -> Optional[RGBA]:
        return self._state.stroke

    @property
    def rect_mode(self) -> DrawMode:
        return self._state.rect_mode

    @rect_mode.setter
    def rect_mode(self, mode: DrawMode) -> None:
        if not isinstance(mode, DrawMode):
            raise TypeError(f"rect_mode must be a DrawMode, not {type(mode).__name__}")
        self._state.rect_mode = mode

    @property
    def ellipse_mode(self) -> DrawMode:
        return self._state.ellipse_mode

    @ellipse_mode.setter
    def ellipse_mode(self, mode: DrawMode) -> None:
        if not isinstance(mode, DrawMode):
            raise TypeError(f"ellipse_mode must be a DrawMode, not {type(mode).__name__}")
        self._state.ellipse_mode = mode

    # -------------------------------------------------------------------------
    # Clipping
    # -------------------------------------------------------------------------
    @property
    def current_path(self) -> Optional[mplPath]:
        """Last drawn shape, in pixel coordinates."""
        return self._current_path

    def clip(self) -> None:
        """Confine later drawing to the last drawn shape."""
        path = self._current_path
        if path is None:
            raise RuntimeError("clip() requires a previously drawn shape.")
        st = self._state
        extent = path.get_extents()
        if not st.clips:
            st.clip_bbox = extent
        elif st.clip_bbox is not None:
            st.clip_bbox = Bbox.intersection(st.clip_bbox, extent)
        st.clips = st.clips + (path,)

    # -------------------------------------------------------------------------
    # Artist emission
    # -------------------------------------------------------------------------
    def _linewidth(self) -> float:
        det = abs(np.linalg.det(self._state.matrix[:2, :2]))
        return self._state.weight * math.sqrt(det) * POINTS_PER_INCH / self.dpi

    def _add_patch(self, path: mplPath, facecolor: Any, edgecolor: Any, linewidth: float) -> None:
        st = self._state
        patch = PathPatch(
            path,
            transform=self.ax.transData,
            facecolor=facecolor,
            edgecolor=edgecolor,
            linewidth=linewidth,
            antialiased=self.antialiased,
            snap=False,
        )
        self.ax.add_patch(patch)
        if st.clips:
            # Agg supports one clip path per artist; outer clips narrow the box.
            patch.set_clip_path(st.clips[-1], self.ax.transData)
            patch.set_clip_box(TransformedBbox(st.clip_bbox, self.ax.transData))

    def _emit(self, fill_path: mplPath, stroke_path: Optional[mplPath] = None,
              fillable: bool = True) -> None:
        st = self._state
        m = Affine2D(st.matrix)
        fill_path = m.transform_path(fill_path)
        stroke_path = fill_path if stroke_path is None else m.transform_path(stroke_path)
        self._current_path = fill_path

        if st.clips and st.clip_bbox is None:
            return  # disjoint clips: nothing is visible
        face = st.fill if fillable and st.fill is not None else "none"
        edge = st.stroke if st.stroke is not None and st.weight > 0 else "none"
        if stroke_path is fill_path:
            if face != "none" or edge != "none":
                self._add_patch(fill_path, face, edge, self._linewidth() if edge != "none" else 0.0)
            return
        if face != "none":
            self._add_patch(fill_path, face, "none", 0.0)
        if edge != "none":
            self._add_patch(stroke_path, "none", edge, self._linewidth())

    # -------------------------------------------------------------------------
    # Shapes
    # -------------------------------------------------------------------------
    @staticmethod
    def _polygon(points, close: bool = True) -> mplPath:
        verts = [tuple(p) for p in points]
        codes = [mplPath.MOVETO] + [mplPath.LINETO] * (len(verts) - 1)
        if close:
            verts.append(verts[0])
            codes.append(mplPath.CLOSEPOLY)
        return mplPath(np.asarray(verts, dtype=float), codes)

    def background(self, color: Any, alpha: Optional[float] = None) -> None:
        """Paint the whole canvas, ignoring transform and clip."""
        rgba = self._rgba(color, alpha)
        if rgba[3] >= 1.0:
            for artist in list(self.ax.patches):
                artist.remove()
        w, h = self.width, self.height
        self.ax.add_patch(PathPatch(
            self._polygon([(0, 0), (w, 0), (w, h), (0, h)]),
            transform=self.ax.transData, facecolor=rgba, edgecolor="none",
            linewidth=0.0, antialiased=self.antialiased, snap=False,
        ))

    def rect(self, x: numeric, y: numeric, w: numeric, h: Optional[numeric] = None) -> None:
        x, y, w, h = mode_adjust(x, y, w, w if h is None else h, self._state.rect_mode)
        self._emit(self._polygon([(x, y), (x + w, y), (x + w, y + h), (x, y + h)]))

    def square(self, x: numeric, y: numeric, s: numeric) -> None:
        self.rect(x, y, s, s)

    def ellipse(self, x: numeric, y: numeric, w: numeric, h: Optional[numeric] = None) -> None:
        x, y, w, h = mode_adjust(x, y, w, w if h is None else h, self._state.ellipse_mode)
        unit = Affine2D().scale(w / 2, h / 2).translate(x + w / 2, y + h / 2)
        self._emit(unit.transform_path(mplPath.unit_circle()))

    def circle(self, x: numeric, y: numeric, d: numeric) -> None:
        self.ellipse(x, y, d, d)

    def arc(self, x: numeric, y: numeric, w: numeric, h: numeric,
            start: numeric, stop: numeric, mode: Optional[ArcMode] = None) -> None:
        """
        Draw an elliptical arc from `start` to `stop` (current angle mode).

        Without `mode` the fill is a pie slice and the outline stays open.
        """
        x, y, w, h = mode_adjust(x, y, w, h, self._state.ellipse_mode)
        t1, t2 = self.radians(start), self.radians(stop)
        unit = Affine2D().scale(w / 2, h / 2).translate(x + w / 2, y + h / 2)
        if t2 - t1 >= math.tau:
            self._emit(unit.transform_path(mplPath.unit_circle()))
            return

        arc = mplPath.arc(math.degrees(t1), math.degrees(t2))
        center = np.zeros((1, 2))
        open_path = arc
        chord = mplPath(np.vstack([arc.vertices, arc.vertices[:1]]),
                        np.append(arc.codes, mplPath.CLOSEPOLY))
        pie_codes = np.concatenate([[mplPath.MOVETO, mplPath.LINETO], arc.codes[1:], [mplPath.CLOSEPOLY]])
        pie = mplPath(np.vstack([center, arc.vertices, center]), pie_codes)

        fill_path, stroke_path = {
            None: (pie, open_path),
            ArcMode.OPEN: (chord, open_path),
            ArcMode.CHORD: (chord, chord),
            ArcMode.PIE: (pie, pie),
        }[mode]
        same = fill_path is stroke_path
        fill_path = unit.transform_path(fill_path)
        self._emit(fill_path, None if same else unit.transform_path(stroke_path))

    def triangle(self, x1: numeric, y1: numeric, x2: numeric, y2: numeric,
                 x3: numeric, y3: numeric) -> None:
        self._emit(self._polygon([(x1, y1), (x2, y2), (x3, y3)]))

    def quad(self, x1: numeric, y1: numeric, x2: numeric, y2: numeric,
             x3: numeric, y3: numeric, x4: numeric, y4: numeric) -> None:
        self._emit(self._polygon([(x1, y1), (x2, y2), (x3, y3), (x4, y4)]))

    def line(self, x1: numeric, y1: numeric, x2: numeric, y2: numeric) -> None:
        self._emit(self._polygon([(x1, y1), (x2, y2)], close=False), fillable=False)

    # -------------------------------------------------------------------------
    # Free-form shapes
    # -------------------------------------------------------------------------
    def _builder(self) -> _ShapeBuilder:
        if self._shape is None:
            raise RuntimeError("Vertex calls must be placed between begin_shape() and end_shape().")
        return self._shape

    def begin_shape(self) -> None:
        self._shape = _ShapeBuilder()

    def vertex(self, x: numeric, y: numeric) -> None:
        self._builder().vertex(x, y)

    def curve_vertex(self, x: numeric, y: numeric) -> None:
        self._builder().curve_vertex(x, y)

    def bezier_vertex(self, x2: numeric, y2: numeric, x3: numeric, y3: numeric,
                      x4: numeric, y4: numeric) -> None:
        self._builder().bezier_vertex((x2, y2), (x3, y3), (x4, y4))

    def quadratic_vertex(self, cx: numeric, cy: numeric, x3: numeric, y3: numeric) -> None:
        self._builder().quadratic_vertex((cx, cy), (x3, y3))

    def begin_contour(self) -> None:
        shape = self._builder()
        if shape.in_contour:
            raise RuntimeError("begin_contour() called twice without end_contour().")
        shape.close_contour()
        shape.in_contour = True

    def end_contour(self) -> None:
        shape = self._builder()
        if not shape.in_contour:
            raise RuntimeError("end_contour() called without begin_contour().")
        shape.close_contour(hole=True)
        shape.in_contour = False

    def end_shape(self, close: bool = False) -> None:
        shape = self._builder()
        self._shape = None
        shape.close_contour(hole=shape.in_contour)
        path = shape.build(close)
        if path is not None:
            self._emit(path)

    # -------------------------------------------------------------------------
    # Randomness
    # -------------------------------------------------------------------------
    def random(self, low: Optional[numeric] = None, high: Optional[numeric] = None) -> float:
        """random() -> [0, 1); random(a) -> [0, a); random(a, b) -> [a, b)."""
        if low is None:
            return self.rng.random()
        if high is None:
            low, high = 0.0, low
        return low + (high - low) * self.rng.random()

    def random_gaussian(self, mean: numeric = 0.0, sd: numeric = 1.0) -> float:
        return self.rng.normal(mean, sd)

    def random_seed(self, seed: int) -> None:
        self.rng.seed(seed)

    def noise(self, x: numeric, y: numeric = 0.0) -> float:
        """Smooth noise value in [0, 1]."""
        return self._noise(x, y)

    def noise_seed(self, seed: int) -> None:
        self._noise = CoherentNoise(seed=seed)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    def to_array(self) -> np.ndarray:
        """Rasterize and return an (H, W, 4) uint8 RGBA copy of the canvas."""
        self.fig.canvas.draw()
        return np.asarray(self.fig.canvas.buffer_rgba()).copy()

    def save(self, output_path: PathLike) -> None:
        self.fig.savefig(output_path, dpi=self.dpi, facecolor=self.fig.get_facecolor(),
                         bbox_inches=None, pad_inches=0)
        self.logger.info(f"Saved {self.width}x{self.height} canvas to {output_path}")

    def close(self) -> None:
        try:
            self.fig.clear()
        finally:
            self.logger.debug(f"Closed {self!r}")

    def __enter__(self) -> Canvas:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.width}x{self.height} dpi={self.dpi}>"
