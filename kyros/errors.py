from __future__ import annotations

from typing import Iterable


class KyrosError(Exception):
    """Base class for errors that abort a render."""


class ConfigError(KyrosError, ValueError):
    pass


class InvalidDimensions(ConfigError):
    pass


class FormulaNotFound(KyrosError, KeyError):
    def __init__(self, name: str, known: Iterable[str] = ()):
        self.name = name
        self.known = tuple(sorted(known))
        super().__init__(name)

    def __str__(self) -> str:
        known = ", ".join(self.known) if self.known else "none"
        return f"Formula {self.name!r} not found (known formulas: {known})."
