from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from kyros.complex_number import Complex
from kyros.errors import ConfigError, InvalidDimensions

DEFAULTS: Dict[str, Any] = {
    "width": 256,
    "height": 256,
    "max_iterations": 1024,
    "formula": "SD",
    "fixed_c": None,
    "output_index": 0,
}


@dataclass(frozen=True)
class RenderConfig:
    """Everything a render needs, fixed before the first pixel is evaluated."""

    width: int
    height: int
    max_iterations: int
    fixed_c: Optional[Complex] = None
    formula_name: str = "SD"
    output_index: int = 0

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 2:
            raise InvalidDimensions(f"Image dimensions must be at least 2x2, got {self.width}x{self.height}.")
        if self.max_iterations < 1:
            raise ConfigError(f"max_iterations must be positive, got {self.max_iterations}.")
        if self.output_index < 0:
            raise ConfigError(f"output_index must not be negative, got {self.output_index}.")

    @property
    def is_julia(self) -> bool:
        return self.fixed_c is not None

    @property
    def output_name(self) -> str:
        return f"out#{self.output_index}.png"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "max_iterations": self.max_iterations,
            "formula": self.formula_name,
            "fixed_c": None if self.fixed_c is None else [self.fixed_c.real, self.fixed_c.imaginary],
            "output_index": self.output_index,
        }


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return dict(DEFAULTS)

    with open(config_path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ConfigError("Config JSON must be an object.")
    return cfg


def _parse_fixed_c(value: Any) -> Optional[Complex]:
    if value is None:
        return None
    if isinstance(value, Complex):
        return value
    if not (isinstance(value, (list, tuple)) and len(value) == 2):
        raise ConfigError("fixed_c must be [re, im] or null.")
    try:
        return Complex(float(value[0]), float(value[1]))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"fixed_c components must be numbers: {e}") from e


def expand_aliases(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Rewrite ``pixels`` into width/height; explicit width or height wins."""
    out = {k: v for k, v in cfg.items() if k != "pixels"}
    if "pixels" in cfg:
        out.setdefault("width", cfg["pixels"])
        out.setdefault("height", cfg["pixels"])
    return out


def normalise_config(cfg: Dict[str, Any]) -> RenderConfig:
    merged = dict(DEFAULTS)
    merged.update(expand_aliases(cfg))

    try:
        width = int(merged["width"])
        height = int(merged["height"])
        max_iterations = int(merged["max_iterations"])
        output_index = int(merged["output_index"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid numeric config value: {e}") from e

    formula = merged["formula"]
    if not isinstance(formula, str):
        raise ConfigError("formula must be a string.")

    return RenderConfig(
        width=width,
        height=height,
        max_iterations=max_iterations,
        fixed_c=_parse_fixed_c(merged["fixed_c"]),
        formula_name=formula,
        output_index=output_index,
    )
