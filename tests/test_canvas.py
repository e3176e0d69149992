import numpy as np
import pytest

from painters import (
    Affine2D,
    InvalidArgument,
    PathCommand,
    RenderingCapabilityError,
    Vect,
    beside,
    black,
    fish,
    heart,
    quartet,
    rot,
)
from plotting import CanvasConfig, RasterCanvas, RecordingCanvas, parse_style, render


def test_canvas_config_defaults():
    cfg = CanvasConfig()
    assert (cfg.width, cfg.height) == (300, 300)
    assert cfg.background == (0, 0, 0, 0)
    assert not cfg.strict_frames


@pytest.mark.parametrize(
    "kwargs",
    [{"width": 0}, {"height": -5}, {"curve_segments": 0}, {"min_line_width": 0}],
)
def test_canvas_config_validation(kwargs):
    with pytest.raises(InvalidArgument):
        CanvasConfig(**kwargs)


def test_parse_style():
    assert parse_style("#000") == (0, 0, 0, 255)
    assert parse_style("#666767") == (102, 103, 103, 255)
    assert parse_style("red") == (255, 0, 0, 255)
    # alpha is 0-255, not a 0-1 fraction
    assert parse_style("rgba(0, 0, 0, 255)") == (0, 0, 0, 255)
    assert parse_style("rgba(0, 0, 0, 1)") == (0, 0, 0, 1)
    with pytest.raises(RenderingCapabilityError):
        parse_style("not-a-colour")


def test_surface_size_query():
    canvas = RecordingCanvas(CanvasConfig(width=400, height=200))
    assert canvas.size == (400, 200)


def test_base_transform_flips_y(recorder):
    T = recorder.current_transform
    assert np.allclose(T.apply(np.array([0.0, 0.0])), [0.0, 300.0])
    assert np.allclose(T.apply(np.array([1.0, 1.0])), [300.0, 0.0])


def test_save_restore_round_trips_state(recorder):
    before = recorder.current_transform
    recorder.save()
    recorder.transform(Affine2D.from_scale(0.5))
    recorder.line_width = 7.0
    assert recorder.depth == 1
    recorder.restore()
    assert recorder.depth == 0
    assert recorder.line_width == 1.0
    assert np.allclose(recorder.current_transform.A, before.A)
    assert np.allclose(recorder.current_transform.t, before.t)


def test_restore_without_save_fails(recorder):
    with pytest.raises(RenderingCapabilityError):
        recorder.restore()


def test_line_width_must_be_positive(recorder):
    with pytest.raises(InvalidArgument):
        recorder.line_width = 0


def test_transform_is_applied_before_current(recorder):
    recorder.transform(Affine2D.from_scale(0.5))
    recorder.begin_path()
    recorder.move_to(Vect(1, 1))
    recorder.line_to((1, 0))
    recorder.stroke("#000")
    (cmd,) = recorder.commands
    assert cmd.subpaths == (((150.0, 150.0), (150.0, 300.0)),)


def test_line_to_without_move_starts_a_subpath(recorder):
    recorder.begin_path()
    recorder.line_to(Vect(0, 0))
    recorder.line_to(Vect(1, 0))
    recorder.stroke("#000")
    assert recorder.commands[0].subpaths == (((0.0, 300.0), (300.0, 300.0)),)


def test_curves_are_flattened():
    canvas = RecordingCanvas(CanvasConfig(curve_segments=8))
    canvas.begin_path()
    canvas.move_to(Vect(0, 0))
    canvas.bezier_curve_to(Vect(0, 1), Vect(1, 1), Vect(1, 0))
    canvas.quadratic_curve_to(Vect(1.5, 0.5), Vect(1, 1))
    canvas.stroke("#000")
    (sub,) = canvas.commands[0].subpaths
    assert len(sub) == 1 + 8 + 8
    assert sub[8] == pytest.approx((300.0, 300.0))
    assert sub[-1] == pytest.approx((300.0, 0.0))
    # midpoint of the symmetric cubic sits at 3/4 height
    assert sub[4] == pytest.approx((150.0, 300.0 - 225.0))


def test_curve_needs_current_point(recorder):
    recorder.begin_path()
    with pytest.raises(RenderingCapabilityError):
        recorder.quadratic_curve_to(Vect(0, 1), Vect(1, 1))


def test_close_path_returns_to_start(recorder):
    recorder.begin_path()
    recorder.move_to(Vect(0, 0))
    recorder.line_to(Vect(1, 0))
    recorder.line_to(Vect(1, 1))
    recorder.close_path()
    recorder.fill("#000")
    (sub,) = recorder.commands[0].subpaths
    assert sub[0] == sub[-1]


def test_line_after_close_continues_from_the_closed_start(recorder):
    recorder.begin_path()
    recorder.move_to(Vect(0, 0))
    recorder.line_to(Vect(1, 0))
    recorder.line_to(Vect(1, 1))
    recorder.close_path()
    recorder.line_to(Vect(0, 1))
    recorder.stroke("#000")
    first, second = recorder.commands[0].subpaths
    assert first[0] == first[-1] == (0.0, 300.0)
    assert second == ((0.0, 300.0), (0.0, 0.0))


def test_draw_path_maps_through_current_transform(recorder):
    recorder.transform(Affine2D.from_translate(0.5, 0.0))
    cmds = [PathCommand("M", (0.0, 0.0)), PathCommand("L", (0.5, 1.0)), PathCommand("Z", ())]
    recorder.draw_path(cmds, "stroke", "#000")
    (cmd,) = recorder.commands
    assert cmd.subpaths == (((150.0, 300.0), (300.0, 0.0), (150.0, 300.0)),)


def test_draw_path_rejects_unknown_mode(recorder):
    with pytest.raises(InvalidArgument):
        recorder.draw_path([PathCommand("M", (0.0, 0.0))], "smudge", "#000")


def test_render_leaves_canvas_state_untouched(recorder):
    before = recorder.current_transform
    render(quartet(black, rot(fish), heart, beside(black, fish)), None, recorder)
    assert recorder.depth == 0
    assert recorder.line_width == 1.0
    assert np.allclose(recorder.current_transform.A, before.A)
    assert np.allclose(recorder.current_transform.t, before.t)


def test_capability_errors_propagate_unchanged():
    class FailingCanvas(RecordingCanvas):
        def _fill(self, subpaths, style):
            raise RenderingCapabilityError("surface lost")

    canvas = FailingCanvas(CanvasConfig())
    with pytest.raises(RenderingCapabilityError, match="surface lost"):
        render(black, None, canvas)
    # the frame-scoped segment still unwound its save
    assert canvas.depth == 0


def test_unknown_style_fails_at_render(recorder):
    from painters import color_to_painter

    with pytest.raises(RenderingCapabilityError):
        render(color_to_painter(style="no-such-colour"), None, recorder)


def test_raster_background_and_pixels():
    canvas = RasterCanvas(CanvasConfig(width=40, height=20, background=(255, 255, 255, 255)))
    assert canvas.pixel(0, 0) == (255, 255, 255, 255)
    render(black, None, canvas)
    assert canvas.pixel(39, 19) == (0, 0, 0, 255)
    assert canvas.to_array().shape == (20, 40, 4)


def test_raster_stroke_is_visible():
    canvas = RasterCanvas(CanvasConfig(width=100, height=100))
    canvas.line_width = 0.01
    canvas.begin_path()
    canvas.move_to(Vect(0, 0.5))
    canvas.line_to(Vect(1, 0.5))
    canvas.stroke("#0000ff")
    assert canvas.pixel(50, 50) == (0, 0, 255, 255)
    assert canvas.pixel(50, 10) == (0, 0, 0, 0)
