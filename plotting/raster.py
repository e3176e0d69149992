from __future__ import annotations

import logging
import os
from typing import Optional

import numpy as np
from matplotlib.path import Path as MplPath
from PIL import Image, ImageDraw

from plotting.canvas import Canvas, CanvasConfig, RGBA, parse_style

logger = logging.getLogger(__name__)


class RasterCanvas(Canvas):
    """
    Pillow-backed RGBA surface. No antialiasing, so sampled pixels carry the
    exact style colour (or the background where nothing was drawn). Fills
    cover the pixels whose centres fall inside the outline.
    """
    def __init__(self, config: Optional[CanvasConfig] = None):
        super().__init__(config)
        self.image = Image.new("RGBA", self.size, tuple(self.config.background))
        self._draw = ImageDraw.Draw(self.image)

    def _fill(self, subpaths, style: str) -> None:
        color = parse_style(style)
        for pts in subpaths:
            if len(pts) < 3:
                continue
            self._fill_polygon(pts, color)

    def _fill_polygon(self, pts, color: RGBA) -> None:
        # A pixel is painted when its centre lies inside the polygon, so
        # polygons sharing an edge never paint the same pixel.
        width, height = self.size
        xy = np.asarray(pts, dtype=float)
        x0 = max(0, int(np.floor(xy[:, 0].min())))
        x1 = min(width, int(np.ceil(xy[:, 0].max())))
        y0 = max(0, int(np.floor(xy[:, 1].min())))
        y1 = min(height, int(np.ceil(xy[:, 1].max())))
        if x0 >= x1 or y0 >= y1:
            return
        cx, cy = np.meshgrid(np.arange(x0, x1) + 0.5, np.arange(y0, y1) + 0.5)
        centres = np.column_stack([cx.ravel(), cy.ravel()])
        inside = MplPath(xy).contains_points(centres).reshape(cy.shape)
        if not inside.any():
            return
        mask = Image.fromarray(inside.astype(np.uint8) * 255)
        self.image.paste(color, (x0, y0, x1, y1), mask)

    def _stroke(self, subpaths, style: str, line_width: float) -> None:
        color = parse_style(style)
        width = max(1, int(round(line_width)))
        for pts in subpaths:
            if len(pts) < 2:
                continue
            self._draw.line(list(pts), fill=color, width=width)

    def pixel(self, x: int, y: int) -> RGBA:
        """RGBA at image coordinates (origin top-left)."""
        return tuple(self.image.getpixel((x, y)))

    def pixel_from_bottom(self, x: int, y: int) -> RGBA:
        """RGBA at a device point whose y is measured from the bottom edge."""
        return self.pixel(x, self.size[1] - 1 - y)

    def to_array(self) -> np.ndarray:
        return np.asarray(self.image)

    def to_image(self) -> Image.Image:
        return self.image.copy()

    def save_image(self, out_path: str, format: Optional[str] = None) -> None:
        folder = os.path.dirname(out_path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        self.image.save(out_path, format=format)
        logger.info("wrote %s (%dx%d)", out_path, *self.size)

