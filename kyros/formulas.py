"""Iteration formulas and the name -> formula registry.

Every formula maps ``(c, z)`` to the next ``z``. The built-in set is closed
and lives on :class:`Formula`; callers resolve user-supplied names through a
:class:`FormulaRegistry` so an unknown name fails loudly instead of falling
back to some default.
"""

from __future__ import annotations

import enum
from typing import Callable, Dict, Iterator, Union

from kyros.complex_number import Complex
from kyros.errors import FormulaNotFound

FormulaFn = Callable[[Complex, Complex], Complex]


class Formula(enum.Enum):
    SD = "SD"
    R = "R"
    BS = "BS"
    SYM = "SYM"

    def apply(self, c: Complex, z: Complex) -> Complex:
        if self is Formula.SD:
            return z.square() + c
        if self is Formula.R:
            return z.square() + c.reciprocal()
        if self is Formula.BS:
            return z.absolute_parts().square() + c
        return z.conjugate().square() + c

    __call__ = apply

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    Formula.SD: "standard quadratic, z^2 + c",
    Formula.R: "reciprocal, z^2 + 1/c",
    Formula.BS: "burning ship, (|Re z| + i|Im z|)^2 + c",
    Formula.SYM: "symmetric tricorn, conj(z)^2 + c",
}

FormulaLike = Union[Formula, FormulaFn]


class FormulaRegistry:
    def __init__(self) -> None:
        self._formulas: Dict[str, FormulaLike] = {}

    def register(self, name: str, formula: FormulaLike) -> None:
        if name in self._formulas:
            raise ValueError(f"Formula {name!r} is already registered.")
        self._formulas[name] = formula

    def lookup(self, name: str) -> FormulaLike:
        try:
            return self._formulas[name]
        except KeyError:
            raise FormulaNotFound(name, self._formulas) from None

    def names(self) -> list:
        return sorted(self._formulas)

    def __contains__(self, name: object) -> bool:
        return name in self._formulas

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._formulas)


def default_registry() -> FormulaRegistry:
    registry = FormulaRegistry()
    for formula in Formula:
        registry.register(formula.value, formula)
    return registry


BUILTIN_FORMULAS = default_registry()


def lookup(name: str) -> FormulaLike:
    return BUILTIN_FORMULAS.lookup(name)
