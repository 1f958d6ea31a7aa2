import math

import pytest

from julia_visualizer.colormaps import ColorMode
from julia_visualizer.complex_math import ComplexNumber
from julia_visualizer.view import MAX_ZOOM, MIN_ZOOM, ViewCommand, ViewController, ViewState


@pytest.fixture
def controller():
    state = ViewState(center_shift=(100.0, 50.0), zoom=10.0,
                      parameter=ComplexNumber(-0.4, -0.6))
    return ViewController(state=state, zoom_factor=1.5, pan_step=20.0, parameter_step=0.01)


class TestViewState:

    @pytest.mark.parametrize('zoom', [0.0, -1.0, math.nan, math.inf])
    def test_rejects_bad_zoom(self, zoom):
        with pytest.raises(ValueError):
            ViewState(zoom=zoom)

    def test_rejects_non_finite_fields(self):
        with pytest.raises(ValueError):
            ViewState(parameter=ComplexNumber(math.nan, 0.0))
        with pytest.raises(ValueError):
            ViewState(center_shift=(math.inf, 0.0))

    def test_rejects_bad_color_mode(self):
        with pytest.raises(ValueError):
            ViewState(color_mode='gradient')

    def test_snapshot_is_independent(self):
        state = ViewState(zoom=2.0)
        snapshot = state.snapshot()
        state.zoom = 4.0
        assert snapshot.zoom == 2.0
        assert snapshot is not state


class TestOperations:

    def test_zoom_in_out(self, controller):
        controller.zoom_in()
        assert controller.state.zoom == pytest.approx(15.0)
        controller.zoom_out()
        controller.zoom_out()
        assert controller.state.zoom == pytest.approx(10.0 / 1.5)

    def test_zoom_is_clamped(self, controller):
        controller.state.zoom = MAX_ZOOM
        controller.zoom_in()
        assert controller.state.zoom == MAX_ZOOM
        controller.state.zoom = MIN_ZOOM
        controller.zoom_out()
        assert controller.state.zoom == MIN_ZOOM

    def test_pan_is_additive(self, controller):
        controller.pan(1, 0)
        controller.pan(1, -2)
        assert controller.state.center_shift == (140.0, 10.0)

    def test_adjust_parameter_is_additive(self, controller):
        controller.adjust_parameter(1, 0)
        controller.adjust_parameter(0, -1)
        assert controller.state.parameter.re == pytest.approx(-0.39)
        assert controller.state.parameter.im == pytest.approx(-0.61)

    @pytest.mark.parametrize('delta', [(math.nan, 0), (0, math.inf)])
    def test_non_finite_deltas_rejected(self, controller, delta):
        with pytest.raises(ValueError):
            controller.pan(*delta)
        with pytest.raises(ValueError):
            controller.adjust_parameter(*delta)

    def test_toggle_color_mode(self, controller):
        controller.toggle_color_mode()
        assert controller.state.color_mode is ColorMode.GRADIENT
        controller.toggle_color_mode()
        assert controller.state.color_mode is ColorMode.GRAYSCALE

    def test_reset(self, controller):
        controller.zoom_in()
        controller.pan(3, 3)
        controller.reset()
        assert controller.state == ViewState(center_shift=(100.0, 50.0), zoom=10.0,
                                             parameter=ComplexNumber(-0.4, -0.6))

    def test_reset_with_new_center(self, controller):
        controller.reset((320, 240))
        assert controller.state.center_shift == (320.0, 240.0)
        assert controller.home.center_shift == (100.0, 50.0)

    def test_invalid_zoom_factor(self):
        with pytest.raises(ValueError):
            ViewController(zoom_factor=1.0)


class TestCommandQueue:

    def test_commands_wait_for_apply(self, controller):
        controller.submit(ViewCommand.ZOOM_IN)
        controller.submit(ViewCommand.PAN, 1, 0)
        assert controller.state.zoom == 10.0
        assert controller.apply_pending() == 2
        assert controller.state.zoom == pytest.approx(15.0)
        assert controller.state.center_shift == (120.0, 50.0)

    def test_queue_is_drained_once(self, controller):
        controller.submit(ViewCommand.TOGGLE_COLOR_MODE)
        controller.apply_pending()
        assert controller.apply_pending() == 0
        assert controller.state.color_mode is ColorMode.GRADIENT

    def test_commands_apply_in_submission_order(self, controller):
        controller.submit(ViewCommand.PAN, 1, 1)
        controller.submit(ViewCommand.RESET)
        controller.submit(ViewCommand.ADJUST_PARAMETER, 1, 1)
        controller.apply_pending()
        assert controller.state.center_shift == (100.0, 50.0)
        assert controller.state.parameter.re == pytest.approx(-0.39)

    def test_command_by_name(self, controller):
        controller.submit('zoom_out')
        controller.apply_pending()
        assert controller.state.zoom == pytest.approx(10.0 / 1.5)

    def test_unknown_command(self, controller):
        with pytest.raises(ValueError):
            controller.submit('spin')

    @pytest.mark.parametrize('command,args', [
        (ViewCommand.PAN, (1,)),
        (ViewCommand.PAN, (1, math.nan)),
        (ViewCommand.ADJUST_PARAMETER, ('left', 0)),
        (ViewCommand.ZOOM_IN, (2,)),
        (ViewCommand.RESET, ((1.0,),)),
        (ViewCommand.RESET, ((0.0, 0.0), (1.0, 1.0))),
    ])
    def test_bad_arguments_rejected_at_submit(self, controller, command, args):
        with pytest.raises(ValueError):
            controller.submit(command, *args)
        assert not controller.pending

    def test_rejected_command_leaves_batch_intact(self, controller):
        controller.submit(ViewCommand.ZOOM_IN)
        with pytest.raises(ValueError):
            controller.submit(ViewCommand.PAN, math.inf, 0)
        controller.submit(ViewCommand.PAN, 1, 0)
        assert controller.apply_pending() == 2
        assert controller.state.zoom == pytest.approx(15.0)
        assert controller.state.center_shift == (120.0, 50.0)

    def test_reset_with_window_center(self, controller):
        controller.submit(ViewCommand.PAN, 3, 3)
        controller.submit(ViewCommand.RESET, (320, 240))
        controller.apply_pending()
        assert controller.state.center_shift == (320.0, 240.0)
        assert controller.state.zoom == 10.0

    def test_batch_leaves_queue_before_applying(self, controller):
        controller.submit(ViewCommand.TOGGLE_COLOR_MODE)
        controller.pending.append((ViewCommand.PAN, ()))  # bypasses submit()
        with pytest.raises(TypeError):
            controller.apply_pending()
        assert not controller.pending
