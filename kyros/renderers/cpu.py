from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from kyros.color import colorize
from kyros.complex_number import Complex
from kyros.config import RenderConfig
from kyros.escape import evaluate
from kyros.formulas import FormulaLike
from kyros.mapping import to_plane
from kyros.util.logging_setup import configure_worker_logging, get_logger

_G = {}

def _init_worker(config: RenderConfig, formula: FormulaLike, log_queue, log_level: int) -> None:
    _G["config"] = config
    _G["formula"] = formula
    configure_worker_logging(log_queue, log_level)

def render_rows(config: RenderConfig, formula: FormulaLike, y0: int, y1: int) -> np.ndarray:
    """Evaluate rows [y0, y1) of the image and return them as an RGB band."""
    width = config.width
    height = config.height
    max_iterations = config.max_iterations
    fixed_c = config.fixed_c

    xs = [to_plane(x, width) for x in range(width)]
    band = np.zeros((y1 - y0, width, 3), dtype=np.uint8)

    for yi, y in enumerate(range(y0, y1)):
        im = to_plane(y, height)
        row = band[yi]
        for x, re in enumerate(xs):
            z0 = Complex(re, im)
            c = z0 if fixed_c is None else fixed_c
            n = evaluate(c, z0, formula, max_iterations)
            row[x] = colorize(n, max_iterations)
    return band

def _render_band(y0_y1: Tuple[int, int]) -> Tuple[int, np.ndarray]:
    y0, y1 = y0_y1
    band = render_rows(_G["config"], _G["formula"], y0, y1)
    get_logger("worker").debug("Rendered rows %s..%s", y0, y1 - 1)
    return y0, band

def split_bands(height: int, band_height: int) -> List[Tuple[int, int]]:
    if band_height < 1:
        raise ValueError("band_height must be >= 1")
    bands: List[Tuple[int, int]] = []
    y = 0
    while y < height:
        y1 = min(height, y + band_height)
        bands.append((y, y1))
        y = y1
    return bands

def resolve_workers(workers: Optional[int]) -> int:
    if workers is None:
        return os.cpu_count() or 1
    if workers < 1:
        raise ValueError("workers must be >= 1")
    return workers

def render_buffer(
    config: RenderConfig,
    formula: FormulaLike,
    *,
    workers: Optional[int] = 1,
    band_height: int = 16,
    progress: bool = False,
    log_queue=None,
    log_level: int = logging.INFO,
) -> np.ndarray:
    """
    Render the full ``config.height x config.width`` grid into a uint8 RGB buffer.

    With one worker the rows are evaluated in-process, one at a time. With more,
    disjoint bands of rows go to a process pool and are copied back into place
    as they finish; both paths produce identical buffers.
    """
    logger = get_logger()
    workers = resolve_workers(workers)
    height = config.height

    logger.info("CPU render start size=%sx%s iter=%s formula=%s julia=%s workers=%s",
                config.width, height, config.max_iterations, config.formula_name, config.is_julia, workers)

    buf = np.zeros((height, config.width, 3), dtype=np.uint8)

    if workers == 1:
        for y in tqdm(range(height), desc="rows", unit="row", disable=not progress, leave=False):
            buf[y:y + 1] = render_rows(config, formula, y, y + 1)
    else:
        bands = split_bands(height, band_height)
        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_worker,
            initargs=(config, formula, log_queue, log_level),
        ) as pool:
            with tqdm(total=height, desc="rows", unit="row", disable=not progress, leave=False) as bar:
                for y0, band in pool.map(_render_band, bands):
                    buf[y0:y0 + band.shape[0]] = band
                    bar.update(band.shape[0])

    logger.info("CPU render done")
    return buf
