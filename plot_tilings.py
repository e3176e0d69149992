from __future__ import annotations

import argparse
import logging
import os

from painters import fish, heart
from plotting import render_to_file
from tilings import MAX_DEPTH, corner_fractal, rhombille_tiling, square_limit


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render the recursive tilings built from the painter combinators.")
    p.add_argument(
        "--recipe",
        choices=["corner", "square-limit", "rhombille", "all"],
        default="all",
        help="which tiling to render (default: all)",
    )
    p.add_argument(
        "--depth",
        type=int,
        nargs="*",
        default=[1, 2, 3],
        help=f"recursion depths for corner/square-limit (0..{MAX_DEPTH}, default: 1 2 3)",
    )
    p.add_argument("--tiles", type=int, default=8, help="tiles per row for the rhombille tiling (default: 8)")
    p.add_argument("--size", type=int, default=600, help="output size in pixels (default: 600)")
    p.add_argument("--format", choices=["png", "svg", "pdf"], default="png", help="output format")
    p.add_argument("--outdir", type=str, default="plots/tilings", help="output directory")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] [%(levelname)-5s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    os.makedirs(args.outdir, exist_ok=True)
    # Sort and de-dup depths
    depths = sorted(set(args.depth))

    jobs = []
    if args.recipe in ("corner", "all"):
        for d in depths:
            jobs.append((f"corner_{d:02d}", corner_fractal(heart, d)))
    if args.recipe in ("square-limit", "all"):
        for d in depths:
            jobs.append((f"square_limit_{d:02d}", square_limit(d, fish)))
    if args.recipe in ("rhombille", "all"):
        jobs.append((f"rhombille_{args.tiles:03d}", rhombille_tiling(args.tiles)))

    for i, (name, painter) in enumerate(jobs):
        out_path = os.path.join(args.outdir, f"{name}.{args.format}")
        print(f"[{i + 1}/{len(jobs)}] Rendering {name} -> {out_path}")
        render_to_file(painter, out_path, size=args.size, format=args.format)
    print("All tilings rendered.")


if __name__ == "__main__":
    main()
