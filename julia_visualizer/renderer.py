"""
Parallel Julia set frame renderer.

The FrameRenderer class handles:
- Mapping between pixel and complex plane coordinates
- Fanning out one task per scanline to a thread pool created for the frame
- Collecting finished rows, in whatever order they complete, into a frame
  buffer indexed by row
- Applying the active color policy to each row

The row kernels are Numba functions compiled with nogil=True, so the
worker threads run them concurrently. render() blocks until every row of
the frame is done.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

from .colormaps import (
    ColorMode,
    apply_gradient_row,
    apply_grayscale_row,
    get_colormap,
    DEFAULT_PALETTE,
)
from .complex_math import ComplexNumber
from .compute import DEFAULT_ESCAPE_RADIUS, DEFAULT_MAX_ITER, compute_row
from .view import ViewState

logger = logging.getLogger(__name__)


CHANNELS = 4  # RGBA


def pixel_to_plane(x, y, center_shift, zoom):
    """
    Convert a pixel position to a point in the complex plane.

    re = (x - shift_x) / zoom, im = -(y - shift_y) / zoom: pixel rows grow
    downward while the imaginary axis points up.
    """
    shift_x, shift_y = center_shift
    return ComplexNumber((x - shift_x) / zoom, -(y - shift_y) / zoom)


def plane_to_pixel(point, center_shift, zoom):
    """Inverse of pixel_to_plane, returns fractional (x, y)."""
    shift_x, shift_y = center_shift
    return point.re * zoom + shift_x, shift_y - point.im * zoom


class FrameRenderer:
    """
    Renders complete RGBA frames of a Julia set.

    Usage:
        renderer = FrameRenderer(max_iter=1000)
        frame = renderer.render(view_state, 800, 600)
        # frame is a (600, 800, 4) uint8 array, rows top to bottom

    Attributes:
        max_iter: Maximum iteration count
        escape_radius: Escape threshold R
        supersample: Samples per axis per pixel (1 disables anti-aliasing)
        max_workers: Thread count for each frame's pool (None = default)
        colormap: Lookup table used in GRADIENT mode
        last_frame_time: Seconds spent in the most recent render()
    """

    def __init__(self, max_iter=DEFAULT_MAX_ITER, escape_radius=DEFAULT_ESCAPE_RADIUS,
                 supersample=1, max_workers=None, palette=DEFAULT_PALETTE):
        """
        Initialize the renderer.

        Args:
            max_iter: Maximum iteration count (default 1000)
            escape_radius: Escape threshold (default 2.0)
            supersample: Samples per axis per pixel (default 1)
            max_workers: Worker threads per frame (default: executor's choice)
            palette: Name of the gradient palette (default 'Classic')
        """
        if max_iter <= 0:
            raise ValueError("max_iter must be positive")
        if not escape_radius > 0:
            raise ValueError("escape_radius must be positive")
        if supersample < 1:
            raise ValueError("supersample must be >= 1")
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        self.max_iter = int(max_iter)
        self.escape_radius = float(escape_radius)
        self.supersample = int(supersample)
        self.max_workers = max_workers
        self.colormap = get_colormap(palette)
        self.last_frame_time = 0.0

    @classmethod
    def from_settings(cls, settings):
        return cls(
            max_iter=settings.max_iter,
            escape_radius=settings.escape_radius,
            supersample=settings.supersample,
            max_workers=settings.max_workers,
            palette=settings.palette,
        )

    def render(self, view, width, height):
        """
        Render a full frame.

        Args:
            view: ViewState to render; copied before any work is dispatched
            width, height: Viewport size in pixels

        Returns:
            numpy array (height, width, 4) of uint8 RGBA values
        """
        width = max(int(width), 0)
        height = max(int(height), 0)
        frame = np.zeros((height, width, CHANNELS), dtype=np.uint8)
        if width == 0 or height == 0:
            return frame

        snapshot = view.snapshot()
        start = time.perf_counter()

        with ThreadPoolExecutor(max_workers=self.max_workers,
                                thread_name_prefix="julia-row") as executor:
            futures = [
                executor.submit(self._render_row, y, width, snapshot)
                for y in range(height)
            ]
            for future in as_completed(futures):
                y, row = future.result()
                frame[y] = row

        self.last_frame_time = time.perf_counter() - start
        logger.debug("Rendered %dx%d frame in %.1f ms (c=%s, zoom=%g, %s)",
                      width, height, self.last_frame_time * 1000.0,
                      snapshot.parameter, snapshot.zoom, snapshot.color_mode.value)
        return frame

    def _render_row(self, y, width, view):
        """Evaluate and color scanline y; returns (y, row)."""
        shift_x, shift_y = view.center_shift
        escaped, counts, smooth = compute_row(
            y, width, shift_x, shift_y, view.zoom,
            view.parameter.re, view.parameter.im,
            self.max_iter, self.escape_radius * self.escape_radius,
            self.supersample
        )
        row = np.empty((width, CHANNELS), dtype=np.uint8)
        if view.color_mode is ColorMode.GRAYSCALE:
            apply_grayscale_row(escaped, counts, self.max_iter, row)
        else:
            apply_gradient_row(escaped, smooth, self.supersample * self.supersample,
                               self.max_iter, self.colormap, row)
        return y, row

    def warmup(self):
        """
        Warm up JIT compilation with a tiny frame in each color mode.

        Call this once at startup to pre-compile the Numba functions,
        avoiding a delay on the first real frame.
        """
        for mode in ColorMode:
            self.render(ViewState(center_shift=(1.0, 1.0), zoom=1.0, color_mode=mode), 2, 2)
