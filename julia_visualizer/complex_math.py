"""
Complex arithmetic for the Julia set computation.

Two layers live here:
- Scalar kernels (complex_add, complex_mul, abs_squared, abs_value) that are
  JIT-compiled with Numba and operate on (re, im) float pairs. These are
  what the hot loops in compute.py call.
- The ComplexNumber value type with add/mul/magnitude helpers built on top
  of the kernels, used by the rest of the package and by the tests.

All functions are pure and return new values; nothing is mutated in place,
so the same values can be shared freely between render threads.
"""

import math
from typing import NamedTuple

from numba import jit


class ComplexNumber(NamedTuple):
    """A point (re, im) in the complex plane."""
    re: float
    im: float

    def __str__(self):
        sign = '-' if self.im < 0 else '+'
        return f"{self.re:.4f} {sign} {abs(self.im):.4f}i"


@jit(nopython=True, nogil=True, cache=True)
def complex_add(ar, ai, br, bi):
    """(a + bi) + (c + di) = (a + c) + (b + d)i"""
    return ar + br, ai + bi


@jit(nopython=True, nogil=True, cache=True)
def complex_mul(ar, ai, br, bi):
    """(a + bi)(c + di) = (ac - bd) + (ad + bc)i"""
    return ar * br - ai * bi, ar * bi + ai * br


@jit(nopython=True, nogil=True, cache=True)
def abs_squared(zr, zi):
    """Squared magnitude, avoids the square root inside hot loops."""
    return zr * zr + zi * zi


@jit(nopython=True, nogil=True, cache=True)
def abs_value(zr, zi):
    return math.hypot(zr, zi)


def add(a, b):
    """Return the sum of two ComplexNumbers."""
    return ComplexNumber(*complex_add(float(a.re), float(a.im), float(b.re), float(b.im)))


def mul(a, b):
    """Return the product of two ComplexNumbers."""
    return ComplexNumber(*complex_mul(float(a.re), float(a.im), float(b.re), float(b.im)))


def magnitude(a):
    return abs_value(float(a.re), float(a.im))


def squared_magnitude(a):
    return abs_squared(float(a.re), float(a.im))
