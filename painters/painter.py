from __future__ import annotations

from typing import Callable, List, Sequence, Tuple
import logging
import numbers

from .errors import DegenerateFrame, InvalidArgument
from .geometry import (
    Affine2D,
    Frame,
    Segment,
    Vect,
    ZERO_VECT,
    as_vect,
    make_relative_frame,
)
from .paths import PathCommand, parse_path_commands, FISH_PATH, HEART_PATH

logger = logging.getLogger(__name__)

STROKE = "stroke"
FILL = "fill"
DRAW_MODES = (STROKE, FILL)


def _check_draw(draw: str) -> str:
    if draw not in DRAW_MODES:
        raise InvalidArgument(f"draw must be one of {DRAW_MODES}, got {draw!r}")
    return draw


def _usable(frame: Frame, canvas) -> bool:
    """
    False for collapsed frames, which render nothing unless the canvas asks
    for strict checking.
    """
    if not frame.is_degenerate():
        return True
    if canvas.config.strict_frames:
        raise DegenerateFrame(f"frame has zero area: {frame}")
    logger.debug("skipping degenerate frame %s", frame)
    return False


def _paint_in_frame(frame: Frame, canvas, draw_body: Callable) -> None:
    """
    Frame-scoped render segment: every transform/style change made while
    drawing is undone before returning.
    """
    if not _usable(frame, canvas):
        return
    canvas.save()
    try:
        canvas.transform(Affine2D.from_frame(frame))
        w, h = canvas.current_transform.edge_lengths()
        # One device pixel, whatever the frame's scale.
        canvas.line_width = 1.0 / min(w, h)
        draw_body(canvas)
    finally:
        canvas.restore()


def _finish(canvas, draw: str, style: str) -> None:
    if draw == FILL:
        canvas.fill(style)
    else:
        canvas.stroke(style)


class Painter:
    """
    Description of an image, parameterized only by the frame it is drawn in.

    Painters are immutable and can be rendered any number of times; nothing is
    drawn until ``paint`` is called with a frame and a canvas.
    """
    def paint(self, frame: Frame, canvas) -> None:
        raise NotImplementedError

    def __call__(self, frame: Frame, canvas) -> None:
        self.paint(frame, canvas)

    # ---- Composition DSL ----
    def over(self, *others: "Painter") -> "Over":
        return over(self, *others)

    def __or__(self, other: "Painter") -> "Over":
        return self.over(other)

    def beside(self, other: "Painter", m: float = 1, n: float = 1) -> "Over":
        return beside(self, other, m, n)

    def above(self, other: "Painter", m: float = 1, n: float = 1) -> "Over":
        return above(self, other, m, n)

    # ---- Transform helpers ----
    def transform(self, origin, corner1, corner2) -> "Transformed":
        return transform_painter(self, origin, corner1, corner2)

    def flip_vert(self) -> "Transformed":
        return flip_vert(self)

    def flip_horiz(self) -> "Transformed":
        return flip_horiz(self)

    def rot(self) -> "Transformed":
        return rot(self)

    def rot45(self) -> "Transformed":
        return rot45(self)

    def rot180(self) -> "Transformed":
        return rot180(self)

    def rot270(self) -> "Transformed":
        return rot270(self)


class Blank(Painter):
    """Draws nothing; the identity of ``over``."""
    def paint(self, frame: Frame, canvas) -> None:
        return None

    def __repr__(self) -> str:
        return "blank"


class SegmentsPainter(Painter):
    """
    Every segment is its own sub-path: move to the start, line to the end.
    Filling only makes sense if the segments happen to enclose a region.
    """
    def __init__(self, segments: Sequence[Segment], draw: str = STROKE, style: str = "#000"):
        self.segments: Tuple[Segment, ...] = tuple(segments)
        self.draw = _check_draw(draw)
        self.style = style

    def _draw(self, canvas) -> None:
        canvas.begin_path()
        for seg in self.segments:
            canvas.move_to(seg.start)
            canvas.line_to(seg.end)
        _finish(canvas, self.draw, self.style)

    def paint(self, frame: Frame, canvas) -> None:
        _paint_in_frame(frame, canvas, self._draw)

    def __repr__(self) -> str:
        return f"SegmentsPainter(n={len(self.segments)}, {self.draw}, {self.style!r})"


class VectsPainter(Painter):
    """One connected polyline through all the points."""
    def __init__(self, vects: Sequence[Vect], draw: str = STROKE, style: str = "#000"):
        vs = tuple(as_vect(v) for v in vects)
        if not vs:
            raise InvalidArgument("vects_to_painter requires at least one point")
        self.vects: Tuple[Vect, ...] = vs
        self.draw = _check_draw(draw)
        self.style = style

    def _draw(self, canvas) -> None:
        canvas.begin_path()
        first, *rest = self.vects
        canvas.move_to(first)
        for v in rest:
            canvas.line_to(v)
        _finish(canvas, self.draw, self.style)

    def paint(self, frame: Frame, canvas) -> None:
        _paint_in_frame(frame, canvas, self._draw)

    def __repr__(self) -> str:
        return f"VectsPainter(n={len(self.vects)}, {self.draw}, {self.style!r})"


class PathPainter(Painter):
    """
    External path data in unit-square coordinates, parsed once by ``parser``
    and replayed through the frame on every render.
    """
    def __init__(
        self,
        path_data: str,
        draw: str = STROKE,
        style: str = "#000",
        parser: Callable[[str], List[PathCommand]] = parse_path_commands,
    ):
        self.path_data = path_data
        self.commands: Tuple[PathCommand, ...] = tuple(parser(path_data))
        self.draw = _check_draw(draw)
        self.style = style

    def _draw(self, canvas) -> None:
        canvas.draw_path(self.commands, self.draw, self.style)

    def paint(self, frame: Frame, canvas) -> None:
        _paint_in_frame(frame, canvas, self._draw)

    def __repr__(self) -> str:
        return f"PathPainter(n={len(self.commands)}, {self.draw}, {self.style!r})"


class Transformed(Painter):
    """
    Renders ``painter`` in a frame derived from the given one. The painter
    itself never learns about the change.
    """
    def __init__(self, painter: Painter, origin: Vect, corner1: Vect, corner2: Vect):
        if not isinstance(painter, Painter):
            raise InvalidArgument(f"expected a Painter, got {type(painter).__name__}")
        self.painter = painter
        self.origin = as_vect(origin)
        self.corner1 = as_vect(corner1)
        self.corner2 = as_vect(corner2)
        self._relative = make_relative_frame(self.origin, self.corner1, self.corner2)

    def paint(self, frame: Frame, canvas) -> None:
        new_frame = self._relative(frame)
        if not _usable(new_frame, canvas):
            return
        self.painter.paint(new_frame, canvas)

    def __repr__(self) -> str:
        o, c1, c2 = self.origin, self.corner1, self.corner2
        return (
            f"Transformed(({o.x:g}, {o.y:g}), ({c1.x:g}, {c1.y:g}), "
            f"({c2.x:g}, {c2.y:g}), {self.painter!r})"
        )


class Over(Painter):
    """
    Several painters in the same frame; later ones are drawn on top.
    """
    def __init__(self, *painters: Painter):
        # flatten nested Over
        flat: list[Painter] = []
        for p in painters:
            if isinstance(p, Over):
                flat.extend(p.painters)
            elif isinstance(p, Painter):
                flat.append(p)
            else:
                raise InvalidArgument(f"expected a Painter, got {type(p).__name__}")
        if len(flat) == 0:
            raise InvalidArgument("over requires at least one painter")
        self.painters: Tuple[Painter, ...] = tuple(flat)

    def paint(self, frame: Frame, canvas) -> None:
        for p in self.painters:
            p.paint(frame, canvas)

    def __repr__(self) -> str:
        return f"Over({', '.join(repr(p) for p in self.painters)})"


# ---- Primitive constructors ----

def segments_to_painter(segments: Sequence[Segment], draw: str = STROKE, style: str = "#000") -> SegmentsPainter:
    return SegmentsPainter(segments, draw=draw, style=style)


def vects_to_painter(vects: Sequence[Vect], draw: str = STROKE, style: str = "#000") -> VectsPainter:
    return VectsPainter(vects, draw=draw, style=style)


def path_to_painter(
    path_data: str,
    draw: str = STROKE,
    style: str = "#000",
    parser: Callable[[str], List[PathCommand]] = parse_path_commands,
) -> PathPainter:
    return PathPainter(path_data, draw=draw, style=style, parser=parser)


def color_to_painter(draw: str = FILL, style: str = "#000") -> VectsPainter:
    """
    Fill (or outline) the whole frame with one style.
    """
    vects = [ZERO_VECT, Vect(1, 0), Vect(1, 1), Vect(0, 1), ZERO_VECT]
    return vects_to_painter(vects, draw=draw, style=style)


# ---- Combinators ----

def transform_painter(painter: Painter, origin, corner1, corner2) -> Transformed:
    """
    Draw ``painter`` in the frame spanned by three unit-square points.

    To flip a picture vertically, for example, it is enough to flip the frame:
    origin (0, 1), corner1 (1, 1), corner2 (0, 0).
    """
    return Transformed(painter, origin, corner1, corner2)


def over(*painters: Painter) -> Over:
    return Over(*painters)


def _split_point(m: float, n: float, name: str, share: float) -> float:
    """``share / (m + n)``, after checking both ratios."""
    for value in (m, n):
        if isinstance(value, bool) or not isinstance(value, numbers.Real) or value <= 0:
            raise InvalidArgument(f"{name} ratios must be positive numbers, got m={m!r}, n={n!r}")
    return float(share) / float(m + n)


def beside(painter1: Painter, painter2: Painter, m: float = 1, n: float = 1) -> Over:
    """
    ``painter1`` on the left ``m / (m + n)`` of the frame, ``painter2`` on the rest.
    """
    point = _split_point(m, n, "beside", m)
    split = Vect(point, 0)
    return over(
        transform_painter(painter1, ZERO_VECT, split, Vect(0, 1)),
        transform_painter(painter2, split, Vect(1, 0), Vect(point, 1)),
    )


def above(painter1: Painter, painter2: Painter, m: float = 1, n: float = 1) -> Over:
    """
    ``painter1`` on the top ``m / (m + n)`` of the frame, ``painter2`` below it.
    """
    point = _split_point(m, n, "above", n)
    split = Vect(0, point)
    return over(
        transform_painter(painter1, split, Vect(1, point), Vect(0, 1)),
        transform_painter(painter2, ZERO_VECT, Vect(1, 0), split),
    )


def flip_vert(painter: Painter) -> Transformed:
    return transform_painter(painter, Vect(0, 1), Vect(1, 1), ZERO_VECT)


def flip_horiz(painter: Painter) -> Transformed:
    return transform_painter(painter, Vect(1, 0), ZERO_VECT, Vect(1, 1))


def identity(painter: Painter) -> Painter:
    return painter


def rot(painter: Painter) -> Transformed:
    """Rotate 90 degrees counterclockwise."""
    return transform_painter(painter, Vect(1, 0), Vect(1, 1), ZERO_VECT)


def rot45(painter: Painter) -> Transformed:
    """
    Rotate 45 degrees counterclockwise and shrink by sqrt(2).

    The result pokes out of the top of the frame; nothing is clipped.
    """
    return transform_painter(painter, Vect(0.5, 0.5), Vect(1, 1), Vect(0, 1))


def rot180(painter: Painter) -> Transformed:
    return rot(rot(painter))


def rot270(painter: Painter) -> Transformed:
    return rot(rot(rot(painter)))


def quartet(tl: Painter, tr: Painter, bl: Painter, br: Painter) -> Over:
    return above(beside(tl, tr), beside(bl, br))


def nonet(
    p: Painter, q: Painter, r: Painter,
    s: Painter, t: Painter, u: Painter,
    v: Painter, w: Painter, x: Painter,
) -> Over:
    """3x3 grid, row by row from the top."""
    return above(
        beside(p, beside(q, r), 1, 2),
        above(beside(s, beside(t, u), 1, 2), beside(v, beside(w, x), 1, 2)),
        1,
        2,
    )


# ---- Built-in painters ----

blank = Blank()

black = color_to_painter()

grey = color_to_painter(style="#666767")

fish = flip_vert(path_to_painter(FISH_PATH))

heart = flip_vert(path_to_painter(HEART_PATH, draw=FILL))
