"""Fixed-precision complex value used by the escape-time loop."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    real: float
    imaginary: float

    def add(self, other: "Complex") -> "Complex":
        return Complex(self.real + other.real, self.imaginary + other.imaginary)

    def multiply(self, other: "Complex") -> "Complex":
        return Complex(
            self.real * other.real - self.imaginary * other.imaginary,
            self.real * other.imaginary + self.imaginary * other.real,
        )

    def square(self) -> "Complex":
        return self.multiply(self)

    def conjugate(self) -> "Complex":
        return Complex(self.real, -self.imaginary)

    def absolute_parts(self) -> "Complex":
        return Complex(abs(self.real), abs(self.imaginary))

    def reciprocal(self) -> "Complex":
        # 1/0 is the point at infinity, which escapes any finite radius.
        denom = self.real * self.real + self.imaginary * self.imaginary
        if denom == 0.0:
            return Complex(math.inf, 0.0)
        return Complex(self.real / denom, -self.imaginary / denom)

    def exceeds_radius(self, radius: float) -> bool:
        return self.real * self.real + self.imaginary * self.imaginary > radius * radius

    __add__ = add
    __mul__ = multiply


def add(a: Complex, b: Complex) -> Complex:
    return a.add(b)


def multiply(a: Complex, b: Complex) -> Complex:
    return a.multiply(b)
