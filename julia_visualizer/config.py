"""
Settings for the Julia set visualizer.

Defaults live in the Settings dataclass. A settings.json file next to this
module (or one passed explicitly) overrides them key by key, and command
line flags override the file.
"""

import json
import logging
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .colormaps import ColorMode, PALETTES
from .complex_math import ComplexNumber
from .compute import DEFAULT_ESCAPE_RADIUS, DEFAULT_MAX_ITER

logger = logging.getLogger(__name__)


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@dataclass(frozen=True)
class Settings:
    """Configuration for the visualizer."""

    # Window
    width: int = 800
    height: int = 800

    # Fractal
    max_iter: int = DEFAULT_MAX_ITER
    escape_radius: float = DEFAULT_ESCAPE_RADIUS
    parameter: ComplexNumber = ComplexNumber(-0.391, -0.587)

    # View controls
    zoom: float = 300.0
    zoom_factor: float = 1.5
    pan_step: float = 20.0
    parameter_step: float = 0.005

    # Coloring
    color_mode: ColorMode = ColorMode.GRAYSCALE
    palette: str = 'Classic'

    # Quality and performance
    supersample: int = 1  # Samples per axis per pixel
    max_workers: Optional[int] = None  # None lets the executor pick

    log_level: str = 'INFO'

    def validate(self):
        """Validate configuration parameters."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")

        if self.max_iter <= 0:
            raise ValueError("max_iter must be positive")

        if not self.escape_radius > 0:
            raise ValueError("escape_radius must be positive")

        if not all(math.isfinite(v) for v in self.parameter):
            raise ValueError("parameter must be finite")

        if not (math.isfinite(self.zoom) and self.zoom > 0):
            raise ValueError("zoom must be a positive finite number")

        if not self.zoom_factor > 1.0:
            raise ValueError("zoom_factor must be > 1")

        if self.palette not in PALETTES:
            raise ValueError(f"Unknown palette {self.palette!r}, "
                             f"choose from {sorted(PALETTES)}")

        if self.supersample < 1:
            raise ValueError("supersample must be >= 1")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}")

    def with_overrides(self, **overrides):
        """Return a validated copy with the non-None overrides applied."""
        overrides = {k: v for k, v in overrides.items() if v is not None}
        updated = replace(self, **_coerce(overrides))
        updated.validate()
        return updated


def _optional_int(value):
    return None if value is None else int(value)


def _parameter(value):
    re_part, im_part = value
    return ComplexNumber(float(re_part), float(im_part))


def _color_mode(value):
    if isinstance(value, ColorMode):
        return value
    return ColorMode(str(value).lower())


# Converters from JSON values to the field types of Settings
CONVERTERS = {
    'width': int,
    'height': int,
    'max_iter': int,
    'supersample': int,
    'max_workers': _optional_int,
    'escape_radius': float,
    'zoom': float,
    'zoom_factor': float,
    'pan_step': float,
    'parameter_step': float,
    'parameter': _parameter,
    'color_mode': _color_mode,
    'palette': str,
    'log_level': str,
}


def _coerce(raw):
    """Convert JSON values to the field types of Settings."""
    values = dict(raw)
    for name, value in raw.items():
        convert = CONVERTERS.get(name)
        if convert is None:
            continue
        try:
            values[name] = convert(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {name}: {value!r}") from None
    return values


def load_settings(path=None):
    """
    Load settings from a JSON file.

    A missing or unreadable file is not an error: a warning is logged and
    the defaults are used. Unknown keys are ignored with a warning.

    Args:
        path: JSON file to read (default: settings.json beside this module)

    Returns:
        Validated Settings

    Raises:
        ValueError if the file holds invalid values
    """
    path = path or SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            raw = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s; using defaults", path, e)
        raw = {}

    if not isinstance(raw, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        raw = {}

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning("Ignoring unknown settings in %s: %s", path, ", ".join(unknown))

    settings = replace(Settings(), **_coerce({k: v for k, v in raw.items() if k in known}))
    settings.validate()
    return settings
