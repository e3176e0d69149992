# Re-export core painter API for convenience
from .errors import (
    PictError,
    InvalidArgument,
    DegenerateFrame,
    RenderingCapabilityError,
)
from .geometry import (
    Vect,
    Frame,
    Segment,
    Affine2D,
    ZERO_VECT,
    UNIT_SQUARE,
    make_vect,
    as_vect,
    add_vect,
    sub_vect,
    scale_vect,
    make_frame,
    make_relative_frame,
    frame_coord_map,
    frame_area,
    is_degenerate,
    make_segment,
)
from .paths import (
    PathCommand,
    parse_path_commands,
    map_path_commands,
    FISH_PATH,
    HEART_PATH,
)
from .painter import (
    STROKE,
    FILL,
    Painter,
    Blank,
    SegmentsPainter,
    VectsPainter,
    PathPainter,
    Transformed,
    Over,
    segments_to_painter,
    vects_to_painter,
    path_to_painter,
    color_to_painter,
    transform_painter,
    over,
    beside,
    above,
    flip_vert,
    flip_horiz,
    identity,
    rot,
    rot45,
    rot180,
    rot270,
    quartet,
    nonet,
    blank,
    black,
    grey,
    fish,
    heart,
)
