"""
Rendering capability used by painters.

A canvas keeps a current transform (unit square -> device pixels, y axis
flipped so the unit origin is the bottom-left corner), a current line width
and a path under construction. Points handed to the path operations are in
the caller's coordinates and are mapped through the current transform
immediately, so backends only ever see device coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple
import numpy as np
from PIL import ImageColor

from painters.errors import InvalidArgument, RenderingCapabilityError
from painters.geometry import Affine2D, Vect, as_vect
from painters.paths import PathCommand, map_path_commands

RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class CanvasConfig:
    width: int = 300
    height: int = 300
    background: RGBA = (0, 0, 0, 0)
    min_line_width: float = 1.0  # device pixels
    curve_segments: int = 16
    strict_frames: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidArgument(f"canvas size must be positive, got {self.width}x{self.height}")
        if self.curve_segments < 1:
            raise InvalidArgument("curve_segments must be >= 1")
        if self.min_line_width <= 0:
            raise InvalidArgument("min_line_width must be positive")


def parse_style(style: str) -> RGBA:
    """
    Colour string ("#000", "#666767", "rgba(0, 0, 0, 255)", "red") -> RGBA ints.
    Alpha in "rgba()" runs 0-255, as in Pillow's ImageColor.
    """
    try:
        return ImageColor.getcolor(style, "RGBA")
    except (ValueError, AttributeError) as e:
        raise RenderingCapabilityError(f"unknown style {style!r}") from e


@dataclass(frozen=True)
class DrawCommand:
    """One stroke or fill, in device coordinates."""
    op: str  # "stroke" or "fill"
    style: str
    subpaths: Tuple[Tuple[Tuple[float, float], ...], ...]
    line_width: float


@dataclass
class _State:
    transform: Affine2D
    line_width: float = 1.0


@dataclass
class _Subpath:
    points: List[Tuple[float, float]] = field(default_factory=list)
    closed: bool = False


def _bezier_points(p0: np.ndarray, controls: Sequence[np.ndarray], steps: int) -> np.ndarray:
    """
    Flatten a quadratic (one control) or cubic (two controls) Bezier, p0 excluded.
    """
    ts = np.linspace(0.0, 1.0, steps + 1)[1:, None]
    if len(controls) == 2:
        c, p1 = controls
        return (1 - ts) ** 2 * p0 + 2 * (1 - ts) * ts * c + ts ** 2 * p1
    c1, c2, p1 = controls
    return (
        (1 - ts) ** 3 * p0
        + 3 * (1 - ts) ** 2 * ts * c1
        + 3 * (1 - ts) * ts ** 2 * c2
        + ts ** 3 * p1
    )


class Canvas:
    """
    Base rendering capability. Subclasses implement ``_stroke`` and ``_fill``.
    """
    def __init__(self, config: Optional[CanvasConfig] = None):
        self.config = config or CanvasConfig()
        self._state = _State(transform=self.base_transform())
        self._stack: List[_State] = []
        self._subpaths: List[_Subpath] = []

    # ---- Surface ----
    @property
    def size(self) -> Tuple[int, int]:
        return self.config.width, self.config.height

    def base_transform(self) -> Affine2D:
        width, height = self.size
        # Scale the unit square to the surface and flip its y axis.
        flip = Affine2D.from_scale(float(width), -float(height))
        return flip.then(Affine2D.from_translate(0.0, float(height)))

    # ---- State ----
    @property
    def current_transform(self) -> Affine2D:
        return self._state.transform

    @property
    def line_width(self) -> float:
        return self._state.line_width

    @line_width.setter
    def line_width(self, value: float) -> None:
        if not value > 0:
            raise InvalidArgument(f"line width must be positive, got {value!r}")
        self._state.line_width = float(value)

    @property
    def depth(self) -> int:
        return len(self._stack)

    def save(self) -> None:
        self._stack.append(replace(self._state))

    def restore(self) -> None:
        if not self._stack:
            raise RenderingCapabilityError("restore() without matching save()")
        self._state = self._stack.pop()

    def transform(self, affine: Affine2D) -> None:
        """Apply ``affine`` before the current transform."""
        self._state.transform = affine.then(self._state.transform)

    def device_line_width(self) -> float:
        w, h = self._state.transform.edge_lengths()
        return max(self.config.min_line_width, self._state.line_width * min(w, h))

    # ---- Path construction ----
    def begin_path(self) -> None:
        self._subpaths = []

    def _device(self, v) -> Tuple[float, float]:
        p = self._state.transform.apply_vect(as_vect(v))
        return p.x, p.y

    def _current_point(self) -> np.ndarray:
        if not self._subpaths or not self._subpaths[-1].points:
            raise RenderingCapabilityError("no current point; call move_to() first")
        return np.array(self._subpaths[-1].points[-1], dtype=float)

    def _move_device(self, xy: Tuple[float, float]) -> None:
        self._subpaths.append(_Subpath(points=[xy]))

    def _line_device(self, xy: Tuple[float, float]) -> None:
        if not self._subpaths:
            self._move_device(xy)
            return
        if self._subpaths[-1].closed:
            # continue from where the closed subpath started
            self._move_device(self._subpaths[-1].points[0])
        self._subpaths[-1].points.append(xy)

    def _curve_device(self, *controls: Tuple[float, float]) -> None:
        p0 = self._current_point()
        pts = _bezier_points(p0, [np.array(c, dtype=float) for c in controls], self.config.curve_segments)
        for x, y in pts:
            self._line_device((float(x), float(y)))

    def move_to(self, v) -> None:
        self._move_device(self._device(v))

    def line_to(self, v) -> None:
        self._line_device(self._device(v))

    def quadratic_curve_to(self, control, end) -> None:
        self._curve_device(self._device(control), self._device(end))

    def bezier_curve_to(self, control1, control2, end) -> None:
        self._curve_device(self._device(control1), self._device(control2), self._device(end))

    def close_path(self) -> None:
        if not self._subpaths or not self._subpaths[-1].points:
            return
        sub = self._subpaths[-1]
        if sub.points[-1] != sub.points[0]:
            sub.points.append(sub.points[0])
        sub.closed = True

    def _frozen_subpaths(self) -> Tuple[Tuple[Tuple[float, float], ...], ...]:
        return tuple(tuple(s.points) for s in self._subpaths if s.points)

    # ---- Painting ----
    def stroke(self, style: str) -> None:
        self._stroke(self._frozen_subpaths(), style, self.device_line_width())

    def fill(self, style: str) -> None:
        self._fill(self._frozen_subpaths(), style)

    def draw_path(self, commands: Sequence[PathCommand], draw: str, style: str) -> None:
        """
        Replay parsed path commands, remapped point by point through the
        current transform, then stroke or fill them.
        """
        if draw not in ("stroke", "fill"):
            raise InvalidArgument(f"unknown draw mode {draw!r}")
        device = map_path_commands(commands, self._state.transform.apply_vect)
        self.begin_path()
        for cmd in device:
            pts = [(p.x, p.y) for p in cmd.points()]
            if cmd.kind == "M":
                self._move_device(pts[0])
            elif cmd.kind == "L":
                self._line_device(pts[0])
            elif cmd.kind in ("C", "Q"):
                self._curve_device(*pts)
            elif cmd.kind == "Z":
                self.close_path()
            else:
                raise RenderingCapabilityError(f"unknown path command {cmd.kind!r}")
        if draw == "fill":
            self.fill(style)
        else:
            self.stroke(style)

    def _stroke(self, subpaths, style: str, line_width: float) -> None:
        raise NotImplementedError

    def _fill(self, subpaths, style: str) -> None:
        raise NotImplementedError


class RecordingCanvas(Canvas):
    """
    Keeps every stroke and fill as a ``DrawCommand`` instead of drawing it.
    """
    def __init__(self, config: Optional[CanvasConfig] = None):
        super().__init__(config)
        self.commands: List[DrawCommand] = []

    def _stroke(self, subpaths, style: str, line_width: float) -> None:
        parse_style(style)
        self.commands.append(DrawCommand("stroke", style, subpaths, line_width))

    def _fill(self, subpaths, style: str) -> None:
        parse_style(style)
        self.commands.append(DrawCommand("fill", style, subpaths, 0.0))
