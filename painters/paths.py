"""
Path-parsing capability.

Turns SVG-style path data into a flat list of absolute, typed commands that
painters can replay through any frame. Parsing itself is delegated to
svgpathtools; arcs are approximated with line commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from svgpathtools import parse_path, Line, CubicBezier, QuadraticBezier, Arc

from .errors import InvalidArgument, RenderingCapabilityError
from .geometry import Vect


# Line commands emitted per arc.
ARC_STEPS = 16


@dataclass(frozen=True)
class PathCommand:
    kind: str  # "M", "L", "C", "Q" or "Z"
    coords: Tuple[float, ...]

    def points(self) -> List[Vect]:
        c = self.coords
        return [Vect(c[i], c[i + 1]) for i in range(0, len(c), 2)]


def _xy(z: complex) -> Tuple[float, float]:
    return float(z.real), float(z.imag)


def _segment_commands(seg) -> List[PathCommand]:
    if isinstance(seg, Line):
        return [PathCommand("L", _xy(seg.end))]
    if isinstance(seg, CubicBezier):
        return [PathCommand("C", _xy(seg.control1) + _xy(seg.control2) + _xy(seg.end))]
    if isinstance(seg, QuadraticBezier):
        return [PathCommand("Q", _xy(seg.control) + _xy(seg.end))]
    if isinstance(seg, Arc):
        return [PathCommand("L", _xy(seg.point(i / ARC_STEPS))) for i in range(1, ARC_STEPS + 1)]
    raise RenderingCapabilityError(f"unsupported path segment: {type(seg).__name__}")


def parse_path_commands(path_data: str) -> List[PathCommand]:
    """
    Parse path data expressed in unit-square coordinates.

    Every continuous subpath starts with an ``M`` command; closed subpaths end
    with ``Z``.
    """
    if not path_data or not path_data.strip():
        raise InvalidArgument("path data is empty")
    try:
        path = parse_path(path_data)
    except (ValueError, IndexError) as e:
        raise RenderingCapabilityError(f"cannot parse path data: {e}") from e

    commands: List[PathCommand] = []
    for sub in path.continuous_subpaths():
        if len(sub) == 0:
            continue
        commands.append(PathCommand("M", _xy(sub[0].start)))
        for seg in sub:
            commands.extend(_segment_commands(seg))
        if sub.isclosed():
            commands.append(PathCommand("Z", ()))
    return commands


def map_path_commands(commands: Sequence[PathCommand], fn: Callable[[Vect], Vect]) -> List[PathCommand]:
    """
    Remap every coordinate pair of the commands through ``fn``.
    """
    mapped: List[PathCommand] = []
    for cmd in commands:
        coords: Tuple[float, ...] = ()
        for p in cmd.points():
            q = fn(p)
            coords += (q.x, q.y)
        mapped.append(PathCommand(cmd.kind, coords))
    return mapped


# Built-in silhouettes, authored y-down like any SVG; the painters built from
# them flip vertically.
FISH_PATH = (
    "M 0.05 0.5 C 0.25 0.2 0.6 0.15 0.8 0.4 L 0.95 0.25 L 0.95 0.75 L 0.8 0.6 "
    "C 0.6 0.85 0.25 0.8 0.05 0.5 Z "
    "M 0.2 0.42 L 0.25 0.42 "
    "M 0.42 0.28 C 0.5 0.42 0.5 0.58 0.42 0.72 "
    "M 0.55 0.25 L 0.62 0.12 L 0.7 0.3 "
    "M 0.55 0.75 L 0.62 0.88 L 0.7 0.7"
)

HEART_PATH = (
    "M 0.5 0.9 C 0.2 0.7 0.05 0.5 0.05 0.32 C 0.05 0.15 0.2 0.08 0.3 0.08 "
    "C 0.4 0.08 0.47 0.15 0.5 0.22 C 0.53 0.15 0.6 0.08 0.7 0.08 "
    "C 0.8 0.08 0.95 0.15 0.95 0.32 C 0.95 0.5 0.8 0.7 0.5 0.9 Z"
)
