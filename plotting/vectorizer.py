from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple
import io

import matplotlib.pyplot as plt
import shapely.ops
from shapely.geometry import LineString, Polygon, box
from PIL import Image

from plotting.canvas import DrawCommand, parse_style


def _subpath_geometry(op: str, pts: Sequence[Tuple[float, float]]) -> Optional[Any]:
    if op == "fill":
        if len(pts) < 3:
            return None
        poly = Polygon(pts)
        if not poly.is_valid:
            poly = poly.buffer(0)
        return None if poly.is_empty else poly
    if len(pts) < 2:
        return None
    return LineString(pts)


def command_geometries(commands: Sequence[DrawCommand]) -> List[Tuple[DrawCommand, Any]]:
    """
    Returns a list of tuples [(draw_command, shapely_geometry)].
    Fills become polygons (one per subpath, unioned), strokes line strings.
    """
    out: List[Tuple[DrawCommand, Any]] = []
    for cmd in commands:
        parts = [g for g in (_subpath_geometry(cmd.op, pts) for pts in cmd.subpaths) if g is not None]
        if not parts:
            continue
        geom = parts[0] if len(parts) == 1 else shapely.ops.unary_union(parts)
        out.append((cmd, geom))
    return out


def painted_region(commands: Sequence[DrawCommand]) -> Any:
    """
    Union of every filled area, in device coordinates.
    """
    fills = [g for cmd, g in command_geometries(commands) if cmd.op == "fill"]
    if not fills:
        return Polygon()
    return shapely.ops.unary_union(fills)


def clip_to_surface(
    commands: Sequence[DrawCommand],
    width: float,
    height: float,
) -> List[Tuple[DrawCommand, Any]]:
    """
    Geometry of each command cut down to the surface rectangle. Commands that
    end up entirely outside (e.g. the overshoot of a 45 degree rotation) are
    dropped.
    """
    clip_box = box(0.0, 0.0, width, height)
    clipped: List[Tuple[DrawCommand, Any]] = []
    for cmd, geom in command_geometries(commands):
        part = geom.intersection(clip_box)
        if part.is_empty:
            continue
        clipped.append((cmd, part))
    return clipped


def _parts(geom: Any) -> List[Any]:
    if hasattr(geom, "geoms"):
        out: List[Any] = []
        for g in geom.geoms:
            out.extend(_parts(g))
        return out
    return [geom]


def draw_commands_on_axis(
    ax: plt.Axes,
    commands: Sequence[DrawCommand],
    width: float,
    height: float,
) -> None:
    """
    Renders recorded draw commands directly onto a given Matplotlib axis,
    clipped to the surface and in draw order.
    """
    ax.set_aspect("equal")
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.axis("off")

    # device pixels -> points
    axes_width_pt = ax.get_position().width * ax.figure.get_figwidth() * 72.0
    px_to_pt = axes_width_pt / width

    for cmd, geom in clip_to_surface(commands, width, height):
        rgba = tuple(c / 255.0 for c in parse_style(cmd.style))
        for part in _parts(geom):
            if isinstance(part, Polygon):
                x, y = part.exterior.xy
                ax.fill(x, y, fc=rgba, ec="none")
            elif isinstance(part, LineString):
                x, y = part.xy
                ax.plot(x, y, color=rgba, linewidth=cmd.line_width * px_to_pt, solid_capstyle="round")


def save_commands(
    commands: Sequence[DrawCommand],
    filename: Optional[str],
    width: float,
    height: float,
    format: str = "svg",
    dpi: int = 100,
) -> Optional[Image.Image]:
    """
    Saves the recorded commands through matplotlib (svg, pdf or png).
    Returns the PIL Image object instead if filename is None (png only).
    """
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    try:
        ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
        draw_commands_on_axis(ax, commands, width, height)

        if filename is None:
            buffer = io.BytesIO()
            fig.savefig(buffer, format="png", dpi=dpi, transparent=True)
            buffer.seek(0)
            return Image.open(buffer)

        fig.savefig(filename, format=format, dpi=dpi, transparent=True)
        return None
    finally:
        plt.close(fig)
