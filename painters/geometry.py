from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
import numpy as np

from .errors import InvalidArgument


# Frames with an edge cross product below this are treated as collapsed.
DEGENERATE_AREA = 1e-12


@dataclass(frozen=True)
class Vect:
    """
    Point or offset, either in the unit square or in an outer (device) space.
    """
    x: float
    y: float

    def __add__(self, other: "Vect") -> "Vect":
        return add_vect(self, other)

    def __sub__(self, other: "Vect") -> "Vect":
        return sub_vect(self, other)

    def __mul__(self, s: float) -> "Vect":
        return scale_vect(s, self)

    __rmul__ = __mul__


def make_vect(x: float, y: float) -> Vect:
    return Vect(x, y)


def as_vect(v) -> Vect:
    """Accept a Vect or any (x, y) pair."""
    if isinstance(v, Vect):
        return v
    x, y = v
    return Vect(float(x), float(y))


def add_vect(*vects: Vect) -> Vect:
    if not vects:
        raise InvalidArgument("add_vect requires at least one vector")
    x = 0.0
    y = 0.0
    for v in vects:
        x += v.x
        y += v.y
    return Vect(x, y)


def sub_vect(v: Vect, w: Vect) -> Vect:
    return Vect(v.x - w.x, v.y - w.y)


def scale_vect(s: float, v: Vect) -> Vect:
    return Vect(s * v.x, s * v.y)


ZERO_VECT = Vect(0, 0)


@dataclass(frozen=True)
class Segment:
    start: Vect
    end: Vect


def make_segment(start: Vect, end: Vect) -> Segment:
    return Segment(start, end)


# ---- Frames ----
#
# A frame is an origin plus two edges. The edges are offsets from the origin,
# not absolute corners:
#
#   origin (0.5, 0), edge1 (0.5, 0),   edge2 (0, 0.5)
#
# is the same frame as the corners
#
#   origin (0.5, 0), corner1 (1, 0),   corner2 (0.5, 0.5)

@dataclass(frozen=True)
class Frame:
    origin: Vect
    edge1: Vect
    edge2: Vect

    def is_degenerate(self) -> bool:
        return is_degenerate(self)


def make_frame(origin: Vect, edge1: Vect, edge2: Vect) -> Frame:
    return Frame(origin, edge1, edge2)


def frame_coord_map(frame: Frame) -> Callable[[Vect], Vect]:
    """
    Map a point of the unit square to the matching point of the frame.
    Inputs outside [0, 1]^2 are not clamped.
    """
    def coord_map(v: Vect) -> Vect:
        return add_vect(
            frame.origin,
            scale_vect(v.x, frame.edge1),
            scale_vect(v.y, frame.edge2),
        )
    return coord_map


def make_relative_frame(origin: Vect, corner1: Vect, corner2: Vect) -> Callable[[Frame], Frame]:
    """
    Build a frame nested inside whatever frame is given later.

    The three arguments are unit-square points (corners, not edges). The left
    half of a frame, for instance, is ``make_relative_frame((0, 0), (0.5, 0), (0, 1))``.
    """
    origin, corner1, corner2 = as_vect(origin), as_vect(corner1), as_vect(corner2)

    def relative(frame: Frame) -> Frame:
        tr = frame_coord_map(frame)
        new_origin = tr(origin)
        return Frame(
            new_origin,
            sub_vect(tr(corner1), new_origin),
            sub_vect(tr(corner2), new_origin),
        )
    return relative


def frame_area(frame: Frame) -> float:
    e1, e2 = frame.edge1, frame.edge2
    return abs(e1.x * e2.y - e1.y * e2.x)


def is_degenerate(frame: Frame) -> bool:
    return frame_area(frame) < DEGENERATE_AREA


UNIT_SQUARE = Frame(ZERO_VECT, Vect(1, 0), Vect(0, 1))


@dataclass(frozen=True)
class Affine2D:
    """
    2D affine transform x -> A x + t
    """
    A: np.ndarray  # shape (2, 2)
    t: np.ndarray  # shape (2,)

    def __post_init__(self):
        if self.A.shape != (2, 2):
            raise ValueError("A must be 2x2")
        if self.t.shape != (2,):
            raise ValueError("t must be length-2")

    def apply(self, point_xy: np.ndarray) -> np.ndarray:
        return self.A @ point_xy + self.t

    def apply_vect(self, v: Vect) -> Vect:
        x, y = self.apply(np.array([v.x, v.y], dtype=float))
        return Vect(float(x), float(y))

    # ---- Constructors and composition ----
    @staticmethod
    def from_translate(dx: float, dy: float) -> "Affine2D":
        return Affine2D(A=np.eye(2), t=np.array([dx, dy], dtype=float))

    @staticmethod
    def from_scale(sx: float, sy: float | None = None) -> "Affine2D":
        if sy is None:
            sy = sx
        return Affine2D(A=np.array([[sx, 0.0], [0.0, sy]], dtype=float), t=np.zeros(2))

    @staticmethod
    def from_frame(frame: Frame) -> "Affine2D":
        """
        The frame's coordinate map as a matrix: columns are the edges.
        """
        A = np.array(
            [[frame.edge1.x, frame.edge2.x], [frame.edge1.y, frame.edge2.y]],
            dtype=float,
        )
        return Affine2D(A=A, t=np.array([frame.origin.x, frame.origin.y], dtype=float))

    def then(self, after: "Affine2D") -> "Affine2D":
        """
        First apply self, then apply 'after'.
        y = after.apply(self.apply(x))
        """
        A_new = after.A @ self.A
        t_new = after.A @ self.t + after.t
        return Affine2D(A=A_new, t=t_new)

    def edge_lengths(self) -> tuple[float, float]:
        return float(np.linalg.norm(self.A[:, 0])), float(np.linalg.norm(self.A[:, 1]))
