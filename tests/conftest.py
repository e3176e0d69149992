"""
Shared pytest fixtures for painter tests.
"""

import pytest
import matplotlib
matplotlib.use("Agg")  # headless backend for CI

from painters import color_to_painter, quartet
from plotting import CanvasConfig, RasterCanvas, RecordingCanvas, render


# Sixteen distinct colours: no cell of the 4x4 palette maps onto a cell of
# the same colour under any flip or rotation.
PALETTE_COLORS = [
    "#ff0000", "#00ff00", "#0000ff", "#ffff00",
    "#ff00ff", "#00ffff", "#800000", "#008000",
    "#000080", "#808000", "#800080", "#008080",
    "#c0c0c0", "#404040", "#ff8000", "#0080ff",
]

# Pixel coordinates well inside the 75px palette cells of a 300x300 canvas.
SAMPLE_COORDS = [20, 55, 95, 130, 170, 205, 245, 280]


@pytest.fixture
def raster():
    """Fresh transparent 300x300 raster canvas."""
    return RasterCanvas(CanvasConfig(width=300, height=300))


@pytest.fixture
def recorder():
    return RecordingCanvas(CanvasConfig(width=300, height=300))


@pytest.fixture
def palette():
    """
    4x4 grid of distinct flat colours; asymmetric under every flip and rotation.
    """
    cells = [color_to_painter(style=c) for c in PALETTE_COLORS]
    tiles = [quartet(*cells[i:i + 4]) for i in range(0, 16, 4)]
    return quartet(*tiles)


@pytest.fixture
def pixel_color():
    """
    Render a painter on a fresh 300x300 canvas and return the RGBA at (x, y),
    image coordinates.
    """
    def _pixel_color(painter, x, y):
        canvas = RasterCanvas(CanvasConfig(width=300, height=300))
        render(painter, None, canvas)
        return canvas.pixel(x, y)
    return _pixel_color


@pytest.fixture
def sampled():
    """
    Render a painter once and return its RGBA at every palette sample point.
    """
    def _sampled(painter):
        canvas = RasterCanvas(CanvasConfig(width=300, height=300))
        render(painter, None, canvas)
        return [canvas.pixel(x, y) for x in SAMPLE_COORDS for y in SAMPLE_COORDS]
    return _sampled


@pytest.fixture
def rendered():
    """
    Render a painter on a fresh 600x600 canvas and return the whole RGBA
    array. At this size every palette cell edge, even inside half frames,
    falls on a pixel boundary.
    """
    def _rendered(painter):
        canvas = RasterCanvas(CanvasConfig(width=600, height=600))
        render(painter, None, canvas)
        return canvas.to_array()
    return _rendered
