from __future__ import annotations

from typing import Optional, Sequence
import logging
import os

import numpy as np
import matplotlib.pyplot as plt
from PIL import Image

from painters import Painter, Frame, UNIT_SQUARE, InvalidArgument, RenderingCapabilityError
from plotting.canvas import Canvas, CanvasConfig, RecordingCanvas
from plotting.raster import RasterCanvas
from plotting.vectorizer import draw_commands_on_axis, save_commands

logger = logging.getLogger(__name__)


def render(painter: Painter, frame: Optional[Frame], canvas: Canvas) -> Canvas:
    """
    Paint ``painter`` into ``frame`` on ``canvas`` in a single synchronous pass.

    ``frame`` defaults to the whole surface. Errors raised by the canvas are
    not caught; a canvas whose render failed should be thrown away.
    """
    if not isinstance(painter, Painter):
        raise InvalidArgument(f"expected a Painter, got {type(painter).__name__}")
    if frame is None:
        frame = UNIT_SQUARE

    depth = canvas.depth
    logger.debug("render %r on %s %dx%d", painter, type(canvas).__name__, *canvas.size)
    painter.paint(frame, canvas)
    if canvas.depth != depth:
        raise RenderingCapabilityError(
            f"unbalanced save/restore: stack depth {canvas.depth}, expected {depth}"
        )
    return canvas


def render_to_image(
    painter: Painter,
    width: int = 300,
    height: int = 300,
    frame: Optional[Frame] = None,
    config: Optional[CanvasConfig] = None,
) -> Image.Image:
    if config is None:
        config = CanvasConfig(width=width, height=height)
    canvas = RasterCanvas(config)
    render(painter, frame, canvas)
    return canvas.to_image()


def record(
    painter: Painter,
    width: int = 300,
    height: int = 300,
    frame: Optional[Frame] = None,
) -> RecordingCanvas:
    canvas = RecordingCanvas(CanvasConfig(width=width, height=height))
    render(painter, frame, canvas)
    return canvas


def render_to_file(
    painter: Painter,
    out_path: str,
    size: int = 600,
    format: Optional[str] = None,
    frame: Optional[Frame] = None,
    dpi: int = 100,
) -> None:
    """
    PNG output goes through the Pillow raster canvas; SVG and PDF through
    matplotlib from the recorded draw commands.
    """
    if format is None:
        format = os.path.splitext(out_path)[1].lstrip(".").lower() or "png"
    folder = os.path.dirname(out_path)
    if folder:
        os.makedirs(folder, exist_ok=True)

    if format == "png":
        canvas = RasterCanvas(CanvasConfig(width=size, height=size))
        render(painter, frame, canvas)
        canvas.save_image(out_path, format="PNG")
        return

    if format in ("svg", "pdf"):
        canvas = record(painter, size, size, frame)
        save_commands(canvas.commands, out_path, size, size, format=format, dpi=dpi)
        logger.info("wrote %s (%d draw commands)", out_path, len(canvas.commands))
        return

    raise InvalidArgument(f"unsupported output format: {format!r}")


def render_grid(
    painters: Sequence[Painter],
    out_path: str,
    cols: int = 4,
    titles: Optional[Sequence[str]] = None,
    cell_size: int = 300,
    figsize_per_cell: tuple[float, float] = (3.0, 3.0),
) -> None:
    """
    Renders a grid of painters, one per cell, with optional titles.
    """
    n = len(painters)
    if n == 0:
        raise InvalidArgument("render_grid requires at least one painter")
    cols = max(1, min(cols, n))
    rows = (n + cols - 1) // cols
    fig_w = figsize_per_cell[0] * cols
    fig_h = figsize_per_cell[1] * rows

    fig, axes = plt.subplots(rows, cols, figsize=(fig_w, fig_h), constrained_layout=True)
    try:
        fig.patch.set_facecolor("white")

        if rows == 1 and cols == 1:
            axes = np.array([[axes]])
        elif rows == 1:
            axes = np.array([axes])
        elif cols == 1:
            axes = np.expand_dims(axes, axis=1)

        for idx, painter in enumerate(painters):
            ax = axes[idx // cols, idx % cols]
            canvas = record(painter, cell_size, cell_size)
            draw_commands_on_axis(ax, canvas.commands, cell_size, cell_size)
            # keep a visible border around each cell
            ax.axis("on")
            ax.set_xticks([])
            ax.set_yticks([])
            for spine in ax.spines.values():
                spine.set_visible(True)
                spine.set_color("black")
                spine.set_linewidth(1.0)
            label = titles[idx] if titles is not None and idx < len(titles) else f"{idx}"
            ax.set_title(label, fontsize=10, color="black")

        for idx in range(n, rows * cols):
            axes[idx // cols, idx % cols].axis("off")

        folder = os.path.dirname(out_path)
        if folder:
            os.makedirs(folder, exist_ok=True)

        fmt = "svg" if out_path.endswith(".svg") else "png"
        fig.savefig(out_path, dpi=200, format=fmt, transparent=False, facecolor="white")
    finally:
        plt.close(fig)
    logger.info("wrote grid of %d painters to %s", n, out_path)
