import logging

import pytest

from julia_visualizer.colormaps import ColorMode
from julia_visualizer.complex_math import ComplexNumber
from julia_visualizer.config import Settings, load_settings


def test_bundled_settings():
    settings = load_settings()
    assert settings.parameter == ComplexNumber(-0.391, -0.587)
    assert settings.max_iter == 1000
    assert settings.escape_radius == 2.0
    assert settings.color_mode is ColorMode.GRADIENT
    assert settings.max_workers is None


def test_defaults_validate():
    Settings().validate()


def test_file_overrides_defaults(write_settings):
    path = write_settings({'max_iter': 250, 'parameter': [0.285, 0.01],
                           'color_mode': 'GRAYSCALE', 'supersample': 2})
    settings = load_settings(path)
    assert settings.max_iter == 250
    assert settings.parameter == ComplexNumber(0.285, 0.01)
    assert settings.color_mode is ColorMode.GRAYSCALE
    assert settings.supersample == 2
    assert settings.width == Settings().width


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger='julia_visualizer.config'):
        settings = load_settings(str(tmp_path / 'absent.json'))
    assert settings == Settings()
    assert 'using defaults' in caplog.text


def test_malformed_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / 'broken.json'
    path.write_text('{"max_iter": ')
    with caplog.at_level(logging.WARNING, logger='julia_visualizer.config'):
        assert load_settings(str(path)) == Settings()
    assert 'Could not load' in caplog.text


def test_unknown_keys_are_ignored(write_settings, caplog):
    path = write_settings({'max_iter': 10, 'fullscreen': True})
    with caplog.at_level(logging.WARNING, logger='julia_visualizer.config'):
        settings = load_settings(path)
    assert settings.max_iter == 10
    assert 'fullscreen' in caplog.text


@pytest.mark.parametrize('data', [
    {'max_iter': 0},
    {'width': -5},
    {'escape_radius': 0},
    {'zoom': 0},
    {'zoom_factor': 0.5},
    {'palette': 'Neon'},
    {'supersample': 0},
    {'max_workers': 0},
    {'color_mode': 'sepia'},
    {'log_level': 'LOUD'},
    {'log_level': 5},
    {'max_workers': 'many'},
    {'max_iter': [100]},
    {'parameter': 0.3},
])
def test_invalid_values(write_settings, data):
    with pytest.raises(ValueError):
        load_settings(write_settings(data))


def test_with_overrides_skips_none():
    settings = Settings().with_overrides(width=320, height=None, log_level='DEBUG')
    assert settings.width == 320
    assert settings.height == Settings().height
    assert settings.log_level == 'DEBUG'


def test_with_overrides_validates():
    with pytest.raises(ValueError):
        Settings().with_overrides(max_iter=-1)


def test_string_numbers_are_converted(write_settings):
    settings = load_settings(write_settings({'max_workers': '4', 'max_iter': '300',
                                             'log_level': 'debug'}))
    assert settings.max_workers == 4
    assert settings.max_iter == 300
    assert settings.log_level == 'debug'
