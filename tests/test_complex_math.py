import math

import pytest

from julia_visualizer.complex_math import (
    ComplexNumber,
    abs_squared,
    add,
    complex_mul,
    magnitude,
    mul,
    squared_magnitude,
)


def test_add():
    assert add(ComplexNumber(1.0, 2.0), ComplexNumber(3.0, -1.0)) == ComplexNumber(4.0, 1.0)


def test_mul():
    assert mul(ComplexNumber(1.0, 2.0), ComplexNumber(3.0, -1.0)) == ComplexNumber(5.0, 5.0)


def test_i_squared_is_minus_one():
    i = ComplexNumber(0.0, 1.0)
    assert mul(i, i) == ComplexNumber(-1.0, 0.0)


def test_accepts_integer_parts():
    assert add(ComplexNumber(1, 1), ComplexNumber(2, 3)) == ComplexNumber(3.0, 4.0)


def test_magnitude():
    z = ComplexNumber(3.0, 4.0)
    assert magnitude(z) == 5.0
    assert squared_magnitude(z) == 25.0


def test_magnitude_far_beyond_escape_radius():
    z = ComplexNumber(1e200, 1e200)
    assert magnitude(z) == pytest.approx(math.sqrt(2) * 1e200)
    # The squared form overflows instead of raising
    assert squared_magnitude(z) == math.inf


def test_kernels_on_float_pairs():
    assert complex_mul(2.0, 0.0, 0.0, 3.0) == (0.0, 6.0)
    assert abs_squared(-2.0, 1.0) == 5.0


def test_values_are_immutable():
    z = ComplexNumber(1.0, 2.0)
    with pytest.raises(AttributeError):
        z.re = 5.0
    w = add(z, ComplexNumber(1.0, 1.0))
    assert z == ComplexNumber(1.0, 2.0)
    assert w == ComplexNumber(2.0, 3.0)


def test_str():
    assert str(ComplexNumber(-0.391, -0.587)) == "-0.3910 - 0.5870i"
