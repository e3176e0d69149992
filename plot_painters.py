from __future__ import annotations

import os

from painters import (
    FILL,
    Vect,
    above,
    beside,
    black,
    blank,
    color_to_painter,
    fish,
    flip_horiz,
    flip_vert,
    grey,
    heart,
    make_segment,
    over,
    quartet,
    rot,
    rot45,
    segments_to_painter,
    transform_painter,
    vects_to_painter,
)
from plotting import render_grid, render_to_file


def build_letter_f():
    # An "F" is asymmetric under every flip and rotation, handy for eyeballing transforms.
    return segments_to_painter(
        [
            make_segment(Vect(0.3, 0.1), Vect(0.3, 0.9)),
            make_segment(Vect(0.3, 0.9), Vect(0.75, 0.9)),
            make_segment(Vect(0.3, 0.55), Vect(0.6, 0.55)),
        ]
    )


def build_triangle():
    return vects_to_painter(
        [Vect(0.1, 0.1), Vect(0.9, 0.1), Vect(0.5, 0.8), Vect(0.1, 0.1)],
        draw=FILL,
        style="#d62728",
    )


class UserCompositePainter:
    """
    Example of a user-defined composite painter:
      - Build with primitives
      - Place with beside/above/transform
      - Layer via | (over)
    """
    def __init__(self):
        sky = color_to_painter(style="#A5DEE4")
        sun = transform_painter(heart, Vect(0.6, 0.6), Vect(0.9, 0.6), Vect(0.6, 0.9))
        ground = above(blank, color_to_painter(style="#2ca02c"), 3, 1)
        self.painter = sky | ground | sun | build_triangle().transform(Vect(0.1, 0.2), Vect(0.5, 0.2), Vect(0.1, 0.6))

    def get(self):
        return self.painter


def main():
    os.makedirs("plots", exist_ok=True)

    f = build_letter_f()
    gallery = [
        (f, "F"),
        (flip_vert(f), "flip_vert(F)"),
        (flip_horiz(f), "flip_horiz(F)"),
        (rot(f), "rot(F)"),
        (rot45(f), "rot45(F)"),
        (beside(f, rot(f)), "beside(F, rot F)"),
        (above(f, flip_vert(f), 2, 1), "above(F, flip F, 2, 1)"),
        (quartet(black, grey, grey, black), "quartet"),
        (over(grey, fish), "over(grey, fish)"),
        (heart, "heart"),
    ]
    painters = [p for p, _ in gallery]
    titles = [t for _, t in gallery]
    render_grid(painters, "plots/painters_gallery.png", cols=5, titles=titles)

    user_comp = UserCompositePainter().get()
    render_to_file(user_comp, "plots/painters_user_composite.png", size=400)
    render_to_file(user_comp, "plots/painters_user_composite.svg", size=400)

    print("Saved plots to:")
    print(" - plots/painters_gallery.png")
    print(" - plots/painters_user_composite.png")
    print(" - plots/painters_user_composite.svg")


if __name__ == "__main__":
    main()
