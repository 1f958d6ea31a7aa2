"""
Color mapping for Julia set visualization.

Two policies are available, selected by ColorMode:
- GRAYSCALE: intensity proportional to the discrete escape iteration
- GRADIENT: the smoothed iteration count looked up in a 4-stop gradient

Gradients are expanded into lookup tables of shape (4096, 3) with RGB
values (uint8). The high resolution allows for smooth interpolation in
the gradient lookup. Points that never escape are always painted with
INTERIOR_COLOR, whatever the mode.

To add a new palette:
1. Add its four (position, (r, g, b)) stops to the PALETTES dictionary
2. It becomes selectable through the "palette" setting
"""

from enum import Enum
from functools import lru_cache

import numpy as np
from numba import jit

from .compute import DEFAULT_ESCAPE_RADIUS, Bounded, continuous_index


NUM_COLORS = 4096  # Resolution of colormap for smooth gradients

INTERIOR_COLOR = (0, 0, 0, 255)
OPAQUE = 255


class ColorMode(Enum):
    GRAYSCALE = 'grayscale'
    GRADIENT = 'gradient'

    def toggled(self):
        if self is ColorMode.GRAYSCALE:
            return ColorMode.GRADIENT
        return ColorMode.GRAYSCALE


# Registry of the available gradients.
# Keys are display names, values are four (position, RGB) stops.
PALETTES = {
    'Classic': (
        (0.0, (0, 7, 100)),
        (0.33, (32, 107, 203)),
        (0.66, (237, 255, 255)),
        (1.0, (255, 170, 0)),
    ),
    'Ember': (
        (0.0, (20, 0, 0)),
        (0.3, (180, 20, 0)),
        (0.7, (255, 160, 0)),
        (1.0, (255, 255, 220)),
    ),
    'Ocean': (
        (0.0, (0, 10, 40)),
        (0.35, (0, 90, 140)),
        (0.7, (40, 200, 210)),
        (1.0, (240, 255, 255)),
    ),
    'Forest': (
        (0.0, (5, 25, 5)),
        (0.4, (30, 110, 40)),
        (0.75, (170, 210, 60)),
        (1.0, (255, 250, 200)),
    ),
}

DEFAULT_PALETTE = 'Classic'


def create_gradient(stops):
    """
    Expand gradient stops into a lookup table.

    Args:
        stops: Sequence of (position, (r, g, b)) with positions ascending
               from 0.0 to 1.0

    Returns:
        Array (NUM_COLORS, 3) of uint8 RGB values, linearly interpolated
        between the stops
    """
    positions = np.array([position for position, _ in stops], dtype=np.float64)
    rgb = np.array([color for _, color in stops], dtype=np.float64)
    t = np.linspace(0.0, 1.0, NUM_COLORS)

    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for channel in range(3):
        colors[:, channel] = np.round(np.interp(t, positions, rgb[:, channel]))
    return colors


@lru_cache(maxsize=None)
def get_colormap(name):
    """
    Get a palette's lookup table by name.

    Tables are built once and shared, so they are returned read-only.

    Raises:
        KeyError if name not found
    """
    colors = create_gradient(PALETTES[name])
    colors.flags.writeable = False
    return colors


def get_default_colormap():
    """Get the default colormap (Classic)."""
    return get_colormap(DEFAULT_PALETTE)


def list_colormap_names():
    """Get list of available palette names."""
    return list(PALETTES.keys())


@jit(nopython=True, nogil=True, cache=True)
def grayscale_level(value, max_iter):
    """Channel value for an iteration count: 255 * value / max_iter."""
    intensity = value / max_iter
    if intensity < 0.0:
        intensity = 0.0
    elif intensity > 1.0:
        intensity = 1.0
    return int(255 * intensity)


@jit(nopython=True, nogil=True, cache=True)
def gradient_rgb(t, colormap):
    """
    Look up a normalized index in a colormap with linear interpolation.

    t is clamped to [0, 1] first so floating point overshoot stays on the
    last color.
    """
    if t < 0.0:
        t = 0.0
    elif t > 1.0:
        t = 1.0
    num_colors = colormap.shape[0]
    fidx = t * (num_colors - 1)
    idx0 = int(fidx)
    idx1 = min(idx0 + 1, num_colors - 1)
    frac = fidx - idx0
    r = int(colormap[idx0, 0] * (1 - frac) + colormap[idx1, 0] * frac)
    g = int(colormap[idx0, 1] * (1 - frac) + colormap[idx1, 1] * frac)
    b = int(colormap[idx0, 2] * (1 - frac) + colormap[idx1, 2] * frac)
    return r, g, b


@jit(nopython=True, nogil=True, cache=True)
def apply_grayscale_row(escaped, counts, max_iter, out):
    """
    Color one scanline with the grayscale policy.

    Args:
        escaped: Escaped sample count per pixel (0 means interior)
        counts: Mean discrete iteration per pixel
        max_iter: Maximum iteration value
        out: Output RGBA row (width, 4), modified in place
    """
    for px in range(escaped.shape[0]):
        if escaped[px] == 0:
            for ch in range(4):
                out[px, ch] = np.uint8(INTERIOR_COLOR[ch])
        else:
            level = grayscale_level(counts[px], max_iter)
            out[px, 0] = np.uint8(level)
            out[px, 1] = np.uint8(level)
            out[px, 2] = np.uint8(level)
            out[px, 3] = np.uint8(OPAQUE)


@jit(nopython=True, nogil=True, cache=True)
def apply_gradient_row(escaped, smooth, total, max_iter, colormap, out):
    """
    Color one scanline with the gradient policy.

    A partly escaped pixel is blended toward INTERIOR_COLOR by the
    fraction of its samples that stayed bounded.

    Args:
        escaped: Escaped sample count per pixel (0 means interior)
        smooth: Mean continuous index of the escaped samples per pixel
        total: Samples taken per pixel
        max_iter: Maximum iteration value, used to normalize to [0, 1]
        colormap: Nx3 array of RGB colors (uint8)
        out: Output RGBA row (width, 4), modified in place
    """
    for px in range(escaped.shape[0]):
        if escaped[px] == 0:
            for ch in range(4):
                out[px, ch] = np.uint8(INTERIOR_COLOR[ch])
        else:
            r, g, b = gradient_rgb(smooth[px] / max_iter, colormap)
            coverage = escaped[px] / total
            out[px, 0] = np.uint8(int(INTERIOR_COLOR[0] + (r - INTERIOR_COLOR[0]) * coverage))
            out[px, 1] = np.uint8(int(INTERIOR_COLOR[1] + (g - INTERIOR_COLOR[1]) * coverage))
            out[px, 2] = np.uint8(int(INTERIOR_COLOR[2] + (b - INTERIOR_COLOR[2]) * coverage))
            out[px, 3] = np.uint8(OPAQUE)


def map_color(result, mode, max_iter, colormap=None, escape_radius=DEFAULT_ESCAPE_RADIUS):
    """
    Map a single escape result to an RGBA color.

    Args:
        result: Escaped or Bounded from compute.evaluate
        mode: ColorMode to apply
        max_iter: Iteration cap the result was computed with
        colormap: Lookup table for GRADIENT mode (default palette if None)
        escape_radius: Escape threshold the result was computed with

    Returns:
        (r, g, b, a) tuple of ints
    """
    if isinstance(result, Bounded):
        return INTERIOR_COLOR
    if mode is ColorMode.GRAYSCALE:
        level = grayscale_level(float(result.iteration), int(max_iter))
        return (level, level, level, OPAQUE)
    if colormap is None:
        colormap = get_default_colormap()
    t = continuous_index(result, escape_radius) / max_iter
    r, g, b = gradient_rgb(t, colormap)
    return (r, g, b, OPAQUE)
