from __future__ import annotations

from kyros.complex_number import Complex
from kyros.formulas import FormulaLike

ESCAPE_RADIUS = 2.0


def evaluate(c: Complex, z0: Complex, formula: FormulaLike, max_iterations: int) -> int:
    """
    Iterate ``z = formula(c, z)`` from ``z0`` and return the iteration count.

    The loop stops as soon as |z| exceeds ESCAPE_RADIUS (escaped, count below
    max_iterations) or when the cap is reached (count == max_iterations). A
    starting point already outside the radius returns 0.
    """
    z = z0
    n = 0
    while n < max_iterations and not z.exceeds_radius(ESCAPE_RADIUS):
        z = formula(c, z)
        n += 1
    return n
