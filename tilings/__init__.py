from .recipes import (
    MAX_DEPTH,
    RHOMBUS_COLORS,
    corner_fractal,
    square_limit,
    rhombus_tile,
    rhombille_tiling,
)
