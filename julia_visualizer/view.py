"""
View state for the Julia set visualizer.

ViewState holds everything a frame depends on besides the window size:
where the plane origin sits on screen, the zoom, the Julia parameter c
and the color mode. ViewController is the only thing that changes it.

Input handlers do not touch the state directly. They submit commands,
and the application drains the queue with apply_pending() exactly once
per tick, right before the frame is rendered.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .colormaps import ColorMode
from .complex_math import ComplexNumber

logger = logging.getLogger(__name__)


DEFAULT_PARAMETER = ComplexNumber(-0.391, -0.587)
DEFAULT_ZOOM = 300.0

MIN_ZOOM = 1e-3
MAX_ZOOM = 1e13  # Past this, float64 spacing is coarser than a pixel


def _check_finite(name, *values):
    for value in values:
        try:
            finite = math.isfinite(value)
        except TypeError:
            raise ValueError(f"{name} must be a number, got {value!r}") from None
        if not finite:
            raise ValueError(f"{name} must be finite, got {value!r}")


@dataclass
class ViewState:
    """
    Everything a frame is rendered from, apart from the viewport size.

    Attributes:
        center_shift: Pixel position (x, y) of the plane origin
        zoom: Pixels per plane unit, must be > 0
        parameter: Julia parameter c
        color_mode: Active coloring policy
    """
    center_shift: tuple = (0.0, 0.0)
    zoom: float = DEFAULT_ZOOM
    parameter: ComplexNumber = DEFAULT_PARAMETER
    color_mode: ColorMode = ColorMode.GRAYSCALE

    def __post_init__(self):
        self.center_shift = (float(self.center_shift[0]), float(self.center_shift[1]))
        self.zoom = float(self.zoom)
        self.parameter = ComplexNumber(float(self.parameter.re), float(self.parameter.im))
        self.validate()

    def validate(self):
        """Raise ValueError if the state cannot be rendered."""
        _check_finite("center_shift", *self.center_shift)
        _check_finite("zoom", self.zoom)
        _check_finite("parameter", *self.parameter)
        if self.zoom <= 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}")
        if not isinstance(self.color_mode, ColorMode):
            raise ValueError(f"color_mode must be a ColorMode, got {self.color_mode!r}")

    def snapshot(self):
        """Return an independent copy, safe to hand to render threads."""
        return replace(self)


class ViewCommand(Enum):
    ZOOM_IN = 'zoom_in'
    ZOOM_OUT = 'zoom_out'
    PAN = 'pan'
    ADJUST_PARAMETER = 'adjust_parameter'
    TOGGLE_COLOR_MODE = 'toggle_color_mode'
    RESET = 'reset'


def _check_command_args(command, args):
    """Raise ValueError unless args fit the handler for command."""
    if command in (ViewCommand.PAN, ViewCommand.ADJUST_PARAMETER):
        if len(args) != 2:
            raise ValueError(f"{command.value} takes (dx, dy), got {args!r}")
        _check_finite(f"{command.value} delta", *args)
    elif command is ViewCommand.RESET:
        if len(args) > 1:
            raise ValueError(f"reset takes an optional center_shift, got {args!r}")
        if args and args[0] is not None:
            if not isinstance(args[0], (tuple, list)) or len(args[0]) != 2:
                raise ValueError(f"center_shift must be (x, y), got {args[0]!r}")
            _check_finite("center_shift", *args[0])
    elif args:
        raise ValueError(f"{command.value} takes no arguments, got {args!r}")


@dataclass
class ViewController:
    """
    Applies discrete adjustments to a ViewState.

    Attributes:
        state: The ViewState being controlled
        zoom_factor: Multiplier applied by zoom_in / divisor for zoom_out
        pan_step: Pixels moved per unit of pan delta
        parameter_step: Change of c per unit of parameter delta
        home: State restored by reset()
    """
    state: ViewState = field(default_factory=ViewState)
    zoom_factor: float = 1.5
    pan_step: float = 20.0
    parameter_step: float = 0.005
    home: Optional[ViewState] = None
    pending: deque = field(default_factory=deque, repr=False)

    def __post_init__(self):
        if not self.zoom_factor > 1.0:
            raise ValueError(f"zoom_factor must be > 1, got {self.zoom_factor}")
        _check_finite("pan_step", self.pan_step)
        _check_finite("parameter_step", self.parameter_step)
        if self.home is None:
            self.home = self.state.snapshot()

    def zoom_in(self):
        self._set_zoom(self.state.zoom * self.zoom_factor)

    def zoom_out(self):
        self._set_zoom(self.state.zoom / self.zoom_factor)

    def _set_zoom(self, zoom):
        clamped = min(max(zoom, MIN_ZOOM), MAX_ZOOM)
        if clamped != zoom:
            logger.debug("Zoom %g clamped to %g", zoom, clamped)
        self.state.zoom = clamped

    def pan(self, dx, dy):
        """Move the plane origin by (dx, dy) pan steps."""
        _check_finite("pan delta", dx, dy)
        sx, sy = self.state.center_shift
        self.state.center_shift = (sx + dx * self.pan_step, sy + dy * self.pan_step)

    def adjust_parameter(self, dr, di):
        """Add (dr, di) parameter steps to the real and imaginary parts of c."""
        _check_finite("parameter delta", dr, di)
        c = self.state.parameter
        self.state.parameter = ComplexNumber(
            c.re + dr * self.parameter_step,
            c.im + di * self.parameter_step
        )

    def toggle_color_mode(self):
        self.state.color_mode = self.state.color_mode.toggled()

    def reset(self, center_shift=None):
        """
        Restore the home view.

        Args:
            center_shift: Optional new origin position, e.g. the center
                          of a resized window
        """
        self.state = self.home.snapshot()
        if center_shift is not None:
            self.state.center_shift = (float(center_shift[0]), float(center_shift[1]))

    def submit(self, command, *args):
        """
        Queue a command for the next apply_pending() call.

        Arguments are checked here, so a bad command is rejected at the
        call site and never reaches the queue.

        Raises:
            ValueError for an unknown command or invalid arguments
        """
        command = ViewCommand(command)
        _check_command_args(command, args)
        self.pending.append((command, args))

    def apply_pending(self):
        """
        Apply every queued command in submission order.

        The whole batch is taken off the queue before any of it runs.

        Returns:
            Number of commands applied
        """
        handlers = {
            ViewCommand.ZOOM_IN: self.zoom_in,
            ViewCommand.ZOOM_OUT: self.zoom_out,
            ViewCommand.PAN: self.pan,
            ViewCommand.ADJUST_PARAMETER: self.adjust_parameter,
            ViewCommand.TOGGLE_COLOR_MODE: self.toggle_color_mode,
            ViewCommand.RESET: self.reset,
        }
        batch = list(self.pending)
        self.pending.clear()
        for command, args in batch:
            handlers[command](*args)
        if batch:
            logger.debug("Applied %d view command(s): %s", len(batch), self.state)
        return len(batch)
