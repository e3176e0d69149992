"""
Recursive compositions built only from the combinators.

Each recursion level builds its sub-painters once and hands the same painter
object to every quadrant that needs it, so the description grows linearly
with depth. Rendering still visits every leaf: the number of leaf draws grows
roughly 4^depth for the corner fractal and the square limit.
"""

from __future__ import annotations

from typing import List
import logging
import numbers

from painters import (
    FILL,
    Painter,
    InvalidArgument,
    Vect,
    blank,
    fish as fish_painter,
    flip_horiz,
    nonet,
    over,
    quartet,
    rot,
    rot45,
    rot180,
    rot270,
    transform_painter,
    vects_to_painter,
)

logger = logging.getLogger(__name__)

# Deeper trees are refused; beyond this the leaf count is in the tens of millions.
MAX_DEPTH = 12

RHOMBUS_COLORS = ("#A5DEE4", "#51A8DD", "#005CAF")


def _check_depth(n, name: str = "depth", minimum: int = 0, maximum: int = MAX_DEPTH) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidArgument(f"{name} must be an integer, got {n!r}")
    if n < minimum:
        raise InvalidArgument(f"{name} must be >= {minimum}, got {n}")
    if n > maximum:
        raise InvalidArgument(f"{name} must be <= {maximum}, got {n}")
    return int(n)


def corner_fractal(base: Painter, n: int) -> Painter:
    """
    Four rotated copies of a recursive corner, one per quadrant.

    Depth 0 is blank. At depth 1 every quadrant holds exactly one ``base``,
    in the cell nearest the centre; each further level subdivides the outer
    cells again.
    """
    n = _check_depth(n)

    def side(k: int) -> Painter:
        if k == 0:
            return blank
        s = side(k - 1)
        return quartet(s, s, rot(base), base)

    def corner(k: int) -> Painter:
        if k == 0:
            return blank
        s = side(k - 1)
        return quartet(corner(k - 1), s, rot(s), base)

    c = corner(n)
    logger.debug("corner fractal depth %d", n)
    return quartet(c, rot270(c), rot(c), rot180(c))


def square_limit(n: int, fish: Painter = fish_painter) -> Painter:
    """
    Escher's "Square Limit": a nonet of corners and sides around a centre tile
    made of four interlocking fish.
    """
    n = _check_depth(n)

    fish2 = flip_horiz(rot45(fish))
    fish3 = rot270(fish2)
    t = over(fish, fish2, fish3)
    u = over(fish2, rot(fish2), rot180(fish2), rot270(fish2))

    def side(k: int) -> Painter:
        if k == 0:
            return blank
        s = side(k - 1)
        return quartet(s, s, rot(t), t)

    def corner(k: int) -> Painter:
        if k == 0:
            return blank
        s = side(k - 1)
        return quartet(corner(k - 1), s, rot(s), u)

    c = corner(n)
    s = side(n)
    return nonet(
        c, s, rot270(c),
        rot(s), u, rot270(s),
        rot(c), rot180(s), rot180(c),
    )


def rhombus_tile() -> Painter:
    """
    Three rhombi sharing the centre of the unit square: top, left and right
    faces of a cube seen from above.
    """
    top_color, left_color, right_color = RHOMBUS_COLORS
    top = vects_to_painter(
        [Vect(0, 0.75), Vect(0.5, 1), Vect(1, 0.75), Vect(0.5, 0.5), Vect(0, 0.75)],
        draw=FILL,
        style=top_color,
    )
    left = vects_to_painter(
        [Vect(0, 0.75), Vect(0.5, 0.5), Vect(0.5, 0), Vect(0, 0.25), Vect(0, 0.75)],
        draw=FILL,
        style=left_color,
    )
    right = vects_to_painter(
        [Vect(1, 0.75), Vect(0.5, 0.5), Vect(0.5, 0), Vect(1, 0.25), Vect(1, 0.75)],
        draw=FILL,
        style=right_color,
    )
    return over(top, left, right)


def rhombille_tiling(n: int) -> Painter:
    """
    ``n`` tiles per row; alternate rows are shifted by half a tile so the
    cubes interlock.
    """
    n = _check_depth(n, name="tile count", minimum=1, maximum=10 ** 3)
    tile = rhombus_tile()
    length = 1.0 / n
    half = length / 2
    quarter = half / 2
    row_step = 2 * length - half

    placed: List[Painter] = []

    def place(x: float, y: float) -> None:
        placed.append(
            transform_painter(tile, Vect(x, y), Vect(x + length, y), Vect(x, y + length))
        )

    def rows(start: float) -> List[float]:
        ys: List[float] = []
        j = 0
        while start + j * row_step < 1:
            ys.append(start + j * row_step)
            j += 1
        return ys

    # odd rows
    for y in rows(-3 * quarter):
        for i in range(n):
            place(i * length, y)

    # even rows: half a tile to the left, one tile longer
    for y in rows(0.0):
        for i in range(n + 1):
            place(i * length - half, y)

    logger.debug("rhombille tiling n=%d: %d tiles", n, len(placed))
    return over(*placed)
