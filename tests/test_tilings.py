import itertools

import pytest

from painters import InvalidArgument, black, fish, heart
from plotting import painted_region, record
from plotting.vectorizer import command_geometries
from tilings import (
    MAX_DEPTH,
    RHOMBUS_COLORS,
    corner_fractal,
    rhombille_tiling,
    rhombus_tile,
    square_limit,
)


def test_corner_fractal_depth_zero_is_blank():
    assert record(corner_fractal(black, 0)).commands == []


def test_corner_fractal_depth_one_places_base_near_centre():
    commands = record(corner_fractal(black, 1)).commands
    assert len(commands) == 4
    centroids = set()
    for cmd, geom in command_geometries(commands):
        assert cmd.op == "fill"
        assert geom.area == pytest.approx(75 * 75)
        centroids.add((round(geom.centroid.x, 6), round(geom.centroid.y, 6)))
    assert centroids == {(112.5, 112.5), (187.5, 112.5), (112.5, 187.5), (187.5, 187.5)}


def test_corner_fractal_depth_two_leaf_count():
    assert len(record(corner_fractal(black, 2)).commands) == 24


def test_corner_fractal_shares_sub_painters():
    # building a deep fractal is cheap; only rendering visits every leaf
    deep = corner_fractal(heart, MAX_DEPTH)
    assert deep is not None


def test_quartet_of_fills_partitions_the_surface():
    from painters import quartet

    commands = record(quartet(black, black, black, black)).commands
    geoms = [g for _, g in command_geometries(commands)]
    assert painted_region(commands).area == pytest.approx(300 * 300)
    for a, b in itertools.combinations(geoms, 2):
        assert a.intersection(b).area == pytest.approx(0.0)


def test_square_limit_depth_zero_is_the_centre_tile():
    commands = record(square_limit(0, fish)).commands
    assert len(commands) == 4
    assert all(cmd.op == "stroke" for cmd in commands)


def test_square_limit_depth_one_leaf_count():
    # 4 corners of 4 fish, 4 sides of 6 fish, centre of 4 fish
    assert len(record(square_limit(1)).commands) == 44


def test_rhombus_tile_faces(pixel_color):
    tile = rhombus_tile()
    top, left, right = RHOMBUS_COLORS
    from plotting import parse_style

    assert pixel_color(tile, 150, 75) == parse_style(top)
    assert pixel_color(tile, 75, 180) == parse_style(left)
    assert pixel_color(tile, 225, 180) == parse_style(right)


@pytest.mark.parametrize("n, tiles", [(1, 4), (2, 10)])
def test_rhombille_tile_count(n, tiles):
    commands = record(rhombille_tiling(n)).commands
    assert len(commands) == 3 * tiles
    assert [c.style for c in commands[:3]] == list(RHOMBUS_COLORS)
    assert {c.op for c in commands} == {"fill"}


def test_rhombille_covers_the_surface():
    region = painted_region(record(rhombille_tiling(4)).commands)
    from shapely.geometry import box

    assert region.intersection(box(0, 0, 300, 300)).area == pytest.approx(300 * 300)


@pytest.mark.parametrize("n", [-1, MAX_DEPTH + 1, True, 1.5, "2"])
def test_recursive_depth_validation(n):
    with pytest.raises(InvalidArgument):
        corner_fractal(black, n)
    with pytest.raises(InvalidArgument):
        square_limit(n, fish)


@pytest.mark.parametrize("n", [0, -3, 2.0])
def test_rhombille_needs_a_positive_tile_count(n):
    with pytest.raises(InvalidArgument):
        rhombille_tiling(n)


def test_rhombille_places_no_tile_off_the_surface():
    from shapely.geometry import box
    from shapely.ops import unary_union

    commands = record(rhombille_tiling(10)).commands
    # 8 rows of 10 tiles and 7 shifted rows of 11
    assert len(commands) == 3 * (8 * 10 + 7 * 11)
    geoms = [g for _, g in command_geometries(commands)]
    surface = box(0, 0, 300, 300)
    for i in range(0, len(geoms), 3):
        tile = unary_union(geoms[i:i + 3])
        assert tile.intersection(surface).area > 0
