from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np
from PIL import Image

from kyros.config import RenderConfig
from kyros.formulas import BUILTIN_FORMULAS, FormulaRegistry
from kyros.renderers.cpu import render_buffer, resolve_workers
from kyros.util.logging_setup import get_logger


@dataclass(frozen=True)
class RenderOutcome:
    path: str
    elapsed: float
    workers: int

    def renderer_info(self) -> Dict[str, Any]:
        return {"resolved": "cpu", "workers": self.workers, "elapsed_s": round(self.elapsed, 3), "output": self.path}


def _ensure_dir(path: str) -> None:
    if path:
        os.makedirs(path, exist_ok=True)


def to_image(buf: np.ndarray) -> Image.Image:
    return Image.fromarray(buf)


def save_image(img: Image.Image, output_dir: str, config: RenderConfig) -> str:
    _ensure_dir(output_dir)
    path = os.path.join(output_dir, config.output_name)
    img.save(path, format="PNG")
    return path


def render_image(
    config: RenderConfig,
    *,
    registry: FormulaRegistry = BUILTIN_FORMULAS,
    workers: Optional[int] = 1,
    progress: bool = False,
    log_queue=None,
    log_level: int = logging.INFO,
) -> Image.Image:
    """Resolve the formula, then render ``config`` into a Pillow image."""
    # Raises FormulaNotFound before any pixel work starts.
    formula = registry.lookup(config.formula_name)
    buf = render_buffer(config, formula, workers=workers, progress=progress,
                        log_queue=log_queue, log_level=log_level)
    return to_image(buf)


def run_render(
    config: RenderConfig,
    *,
    output_dir: str = ".",
    registry: FormulaRegistry = BUILTIN_FORMULAS,
    workers: Optional[int] = 1,
    progress: bool = False,
    log_queue=None,
    log_level: int = logging.INFO,
) -> RenderOutcome:
    logger = get_logger()
    logger.info("Render start %s", config.to_dict())

    start = time.perf_counter()
    img = render_image(config, registry=registry, workers=workers, progress=progress,
                       log_queue=log_queue, log_level=log_level)
    logger.info("Saving file")
    path = save_image(img, output_dir, config)
    elapsed = time.perf_counter() - start

    logger.info("Saved %s", path)
    logger.info("Finished in %.2fs", elapsed)
    return RenderOutcome(path=path, elapsed=elapsed, workers=resolve_workers(workers))
