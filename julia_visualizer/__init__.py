"""
Julia Set Visualizer Package

An interactive Julia set explorer using Pygame for display and Numba for
JIT-compiled computation. Every frame is recomputed from scratch, one
scanline per worker thread.

Quick Start:
    from julia_visualizer import run
    run()

Or from command line:
    python -m julia_visualizer

Package Structure:
    - complex_math.py: Complex value type and JIT-compiled arithmetic
    - compute.py: Escape-time iteration and smoothing kernels
    - colormaps.py: Grayscale and gradient color mapping
    - renderer.py: Parallel per-scanline frame rendering
    - view.py: View state and the command-driven view controller
    - config.py: Settings loaded from settings.json
    - app.py: Main application and event loop

Controls:
    - Arrows: Pan
    - +/- or scroll: Zoom in/out
    - A/D: Decrease/increase the real part of c
    - S/W: Decrease/increase the imaginary part of c
    - C: Toggle grayscale/gradient coloring
    - R: Reset to default view
    - ESC: Quit
"""

from .colormaps import PALETTES, ColorMode, get_colormap, list_colormap_names, map_color
from .complex_math import ComplexNumber
from .compute import Bounded, Escaped, continuous_index, evaluate
from .config import Settings, load_settings
from .renderer import FrameRenderer, pixel_to_plane, plane_to_pixel
from .view import ViewCommand, ViewController, ViewState

__version__ = "1.0.0"
__all__ = [
    "run",
    "Bounded",
    "ColorMode",
    "PALETTES",
    "ComplexNumber",
    "Escaped",
    "FrameRenderer",
    "Settings",
    "ViewCommand",
    "ViewController",
    "ViewState",
    "continuous_index",
    "evaluate",
    "get_colormap",
    "list_colormap_names",
    "load_settings",
    "map_color",
    "pixel_to_plane",
    "plane_to_pixel",
]


def run(settings=None):
    """Start the interactive viewer (imports pygame on first use)."""
    from .app import run as run_app
    run_app(settings)
