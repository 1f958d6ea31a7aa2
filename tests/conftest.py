import json

import pytest

from julia_visualizer.complex_math import ComplexNumber


# Default parameter of the viewer, next to the golden mean
# Siegel disk.
REFERENCE_C = ComplexNumber(-0.391, -0.587)


@pytest.fixture
def reference_c():
    return REFERENCE_C


@pytest.fixture
def write_settings(tmp_path):
    """Write a settings dict to a temporary JSON file and return its path."""
    def _write(data, name='settings.json'):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)
    return _write
