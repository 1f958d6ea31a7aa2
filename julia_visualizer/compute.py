"""
Julia set computation functions using Numba JIT compilation.

This module contains the performance-critical escape-time code. The JIT
kernels are compiled with nogil=True so the renderer's worker threads can
evaluate scanlines truly in parallel. They handle:
- The escape-time iteration z <- z² + c for a single point
- Smooth (continuous) iteration counts for banding-free coloring
- Evaluation of one full scanline, with optional fixed-grid supersampling

Plain-Python wrappers (evaluate, continuous_index) expose the same kernels
in terms of ComplexNumber and EscapeResult values.
"""

import math
from dataclasses import dataclass

import numpy as np
from numba import jit

from .complex_math import abs_squared, abs_value, complex_add, complex_mul


DEFAULT_MAX_ITER = 1000
DEFAULT_ESCAPE_RADIUS = 2.0

LOG2 = math.log(2.0)

# Upper clamp for smoothed values: n + 1 - SMOOTH_EPSILON < n + 1
SMOOTH_EPSILON = 1e-9


@dataclass(frozen=True)
class Escaped:
    """The orbit left the escape radius at `iteration` with |z| = `final_magnitude`."""
    iteration: int
    final_magnitude: float


@dataclass(frozen=True)
class Bounded:
    """The orbit stayed inside the escape radius for the whole iteration cap."""


@jit(nopython=True, nogil=True, cache=True)
def escape_time(zr, zi, cr, ci, max_iter, escape_r2):
    """
    Iterate z <- z² + c starting from z = zr + zi·i.

    The escape test runs before the update at every index, so a start
    point already outside the radius escapes at iteration 0.

    Args:
        zr, zi: Real and imaginary parts of the start point
        cr, ci: Real and imaginary parts of the Julia parameter c
        max_iter: Iteration cap
        escape_r2: Squared escape radius

    Returns:
        (iteration, magnitude): iteration == max_iter means the point is
        bounded; otherwise magnitude is |z| at the escaping iteration.
    """
    for iteration in range(max_iter):
        if abs_squared(zr, zi) > escape_r2:
            return iteration, abs_value(zr, zi)
        sqr, sqi = complex_mul(zr, zi, zr, zi)
        zr, zi = complex_add(sqr, sqi, cr, ci)
    return max_iter, abs_value(zr, zi)


@jit(nopython=True, nogil=True, cache=True)
def smoothing_log(escape_r2):
    """log R for a squared escape radius; 1.0 (no normalization) when R <= 1."""
    if escape_r2 > 1.0:
        return 0.5 * math.log(escape_r2)
    return 1.0


@jit(nopython=True, nogil=True, cache=True)
def smooth_value(iteration, magnitude, log_radius):
    """
    Continuous iteration count: n + 1 - log(log|z| / log R) / log(2).

    Normalizing by log R keeps the value in [n, n + 1) for every escape
    with R < |z| <= R². Compared with the unnormalized n + 1 - log(log|z|) / log(2)
    it only shifts all values by the constant log(log R) / log(2). The
    clamp covers rounding and escapes from far outside the radius.
    Magnitudes of 1 or less (only reachable with an escape radius below
    1) have no defined correction and return n.
    """
    if magnitude <= 1.0:
        return float(iteration)
    nu = math.log(math.log(magnitude) / log_radius) / LOG2
    value = iteration + 1.0 - nu
    if value < iteration:
        return float(iteration)
    upper = iteration + 1.0 - SMOOTH_EPSILON
    if value > upper:
        return upper
    return value


@jit(nopython=True, nogil=True, cache=True)
def plane_coordinates(x, y, shift_x, shift_y, zoom):
    """Map pixel (x, y) to the complex plane; the imaginary axis points up."""
    return (x - shift_x) / zoom, -(y - shift_y) / zoom


@jit(nopython=True, nogil=True, cache=True)
def compute_row(y, width, shift_x, shift_y, zoom, cr, ci, max_iter, escape_r2,
                samples):
    """
    Evaluate every pixel of scanline y.

    Each pixel is sampled on a samples x samples grid of sub-pixel offsets
    (a single sample at the pixel coordinate itself when samples == 1).

    Args:
        y: Row index
        width: Number of pixels in the row
        shift_x, shift_y: Pixel position of the plane origin
        zoom: Pixels per plane unit
        cr, ci: Julia parameter c
        max_iter: Iteration cap
        escape_r2: Squared escape radius
        samples: Samples per axis per pixel

    Returns:
        (escaped, counts, smooth) arrays of length width:
        - escaped: number of samples that escaped (0 means interior)
        - counts: mean discrete iteration over all samples, bounded
          samples count as 0 so edge pixels darken toward the interior
        - smooth: mean continuous index over the escaped samples only,
          max_iter when none escaped; the color mapper blends it with
          the interior color by the escaped fraction
    """
    escaped = np.zeros(width, dtype=np.int64)
    counts = np.zeros(width, dtype=np.float64)
    smooth = np.zeros(width, dtype=np.float64)
    total = samples * samples
    log_radius = smoothing_log(escape_r2)

    for px in range(width):
        n_escaped = 0
        count_sum = 0.0
        smooth_sum = 0.0
        for sy in range(samples):
            oy = (sy + 0.5) / samples - 0.5
            for sx in range(samples):
                ox = (sx + 0.5) / samples - 0.5
                zr, zi = plane_coordinates(px + ox, y + oy, shift_x, shift_y, zoom)
                iteration, magnitude = escape_time(zr, zi, cr, ci, max_iter, escape_r2)
                if iteration < max_iter:
                    n_escaped += 1
                    count_sum += iteration
                    smooth_sum += smooth_value(iteration, magnitude, log_radius)
        escaped[px] = n_escaped
        counts[px] = count_sum / total
        if n_escaped:
            smooth[px] = smooth_sum / n_escaped
        else:
            smooth[px] = max_iter

    return escaped, counts, smooth


def evaluate(z0, c, max_iter=DEFAULT_MAX_ITER, escape_radius=DEFAULT_ESCAPE_RADIUS):
    """
    Run the escape-time iteration for one start point.

    Args:
        z0: Start point (ComplexNumber), normally a pixel's plane coordinate
        c: Julia parameter (ComplexNumber)
        max_iter: Iteration cap (default 1000)
        escape_radius: Escape threshold R (default 2.0)

    Returns:
        Escaped(iteration, final_magnitude) or Bounded()
    """
    iteration, magnitude = escape_time(
        float(z0.re), float(z0.im), float(c.re), float(c.im),
        int(max_iter), float(escape_radius) ** 2
    )
    if iteration < max_iter:
        return Escaped(int(iteration), float(magnitude))
    return Bounded()


def continuous_index(result, escape_radius=DEFAULT_ESCAPE_RADIUS):
    """
    Smoothed iteration count for an escape result.

    Args:
        result: Escaped or Bounded from evaluate
        escape_radius: Escape threshold the result was computed with

    Returns:
        A float in [n, n + 1) for Escaped(n, ...), None for Bounded.
    """
    if isinstance(result, Bounded):
        return None
    log_radius = smoothing_log(float(escape_radius) ** 2)
    return float(smooth_value(int(result.iteration), float(result.final_magnitude),
                             log_radius))
