from .canvas import Canvas, CanvasConfig, DrawCommand, RecordingCanvas, parse_style
from .raster import RasterCanvas
from .renderer import render, record, render_to_image, render_to_file, render_grid
from .vectorizer import command_geometries, painted_region, clip_to_surface, draw_commands_on_axis, save_commands
