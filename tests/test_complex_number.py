import math

import pytest

from kyros.complex_number import Complex, add, multiply


def test_add_and_multiply():
    a = Complex(1.5, -2.0)
    b = Complex(0.5, 3.0)
    assert add(a, b) == Complex(2.0, 1.0)
    # (1.5 - 2i)(0.5 + 3i) = 0.75 + 4.5i - 1i + 6
    assert multiply(a, b) == Complex(6.75, 3.5)
    assert a + b == add(a, b)
    assert a * b == multiply(a, b)


def test_operations_do_not_mutate():
    a = Complex(1.0, 1.0)
    a.add(Complex(1.0, 1.0))
    a.square()
    assert a == Complex(1.0, 1.0)
    with pytest.raises(AttributeError):
        a.real = 3.0


def test_exceeds_radius_is_strict():
    assert not Complex(2.0, 0.0).exceeds_radius(2.0)
    assert not Complex(0.0, -2.0).exceeds_radius(2.0)
    assert Complex(1.5, 1.5).exceeds_radius(2.0)
    assert Complex(-2.0, 0.001).exceeds_radius(2.0)


def test_helpers():
    z = Complex(-3.0, 4.0)
    assert z.conjugate() == Complex(-3.0, -4.0)
    assert z.absolute_parts() == Complex(3.0, 4.0)
    assert z.square() == Complex(-7.0, -24.0)
    r = z.reciprocal()
    assert r.real == pytest.approx(-3.0 / 25.0)
    assert r.imaginary == pytest.approx(-4.0 / 25.0)


def test_reciprocal_of_zero_escapes():
    r = Complex(0.0, 0.0).reciprocal()
    assert math.isinf(r.real)
    assert r.exceeds_radius(2.0)
