import numpy as np
import pytest

from kyros.color import BLACK, WHITE, colorize
from kyros.complex_number import Complex
from kyros.config import RenderConfig
from kyros.formulas import Formula
from kyros.renderers.cpu import render_buffer, render_rows, resolve_workers, split_bands


def test_small_mandelbrot_buffer():
    cfg = RenderConfig(width=4, height=4, max_iterations=4, formula_name="SD")
    buf = render_buffer(cfg, Formula.SD)
    assert buf.shape == (4, 4, 3)
    assert buf.dtype == np.uint8
    assert buf.reshape(-1, 3).shape[0] == 16
    # Every corner starts at |z| = 2*sqrt(2) and escapes immediately.
    for y, x in [(0, 0), (0, 3), (3, 0), (3, 3)]:
        assert tuple(buf[y, x]) == WHITE


def test_origin_pixel():
    cfg = RenderConfig(width=5, height=5, max_iterations=16)
    assert tuple(render_buffer(cfg, Formula.SD)[2, 2]) == BLACK
    assert tuple(render_buffer(cfg, Formula.R)[2, 2]) == colorize(1, 16)


def test_rows_and_columns_are_not_swapped():
    cfg = RenderConfig(width=7, height=3, max_iterations=20)
    buf = render_buffer(cfg, Formula.SD)
    assert buf.shape == (3, 7, 3)
    # Middle row is the real axis: x = 0 column index 3 is c = 0.
    assert tuple(buf[1, 3]) == BLACK
    # c = -2 sits on the boundary and never escapes.
    assert tuple(buf[1, 0]) == BLACK
    # c = 2 escapes on the second step.
    assert tuple(buf[1, 6]) == colorize(1, 20)


def test_mandelbrot_mode_starts_with_c_equal_to_z():
    seen = []

    def recorder(c, z):
        seen.append((c, z))
        return Complex(10.0, 10.0)

    cfg = RenderConfig(width=3, height=3, max_iterations=5)
    render_buffer(cfg, recorder)
    # The origin and the four axis endpoints sit inside the closed radius.
    assert len(seen) == 5
    assert all(c == z for c, z in seen)
    assert (Complex(0.0, 0.0), Complex(0.0, 0.0)) in seen


def test_julia_mode_uses_fixed_c():
    fixed = Complex(-0.4, 0.6)
    seen = []

    def recorder(c, z):
        seen.append(c)
        return Complex(10.0, 10.0)

    cfg = RenderConfig(width=5, height=5, max_iterations=5, fixed_c=fixed)
    render_buffer(cfg, recorder)
    assert seen
    assert all(c == fixed for c in seen)


def test_julia_differs_from_mandelbrot():
    mandel = render_buffer(RenderConfig(width=9, height=9, max_iterations=30), Formula.SD)
    julia = render_buffer(RenderConfig(width=9, height=9, max_iterations=30, fixed_c=Complex(-0.8, 0.156)), Formula.SD)
    assert not np.array_equal(mandel, julia)


@pytest.mark.parametrize("formula", list(Formula))
def test_render_is_deterministic(formula):
    cfg = RenderConfig(width=12, height=10, max_iterations=40, formula_name=formula.value)
    first = render_buffer(cfg, formula)
    second = render_buffer(cfg, formula)
    assert first.tobytes() == second.tobytes()


def test_parallel_matches_serial():
    cfg = RenderConfig(width=16, height=13, max_iterations=32, formula_name="BS")
    serial = render_buffer(cfg, Formula.BS, workers=1)
    parallel = render_buffer(cfg, Formula.BS, workers=2, band_height=3)
    assert serial.tobytes() == parallel.tobytes()


def test_render_rows_band():
    cfg = RenderConfig(width=6, height=6, max_iterations=10)
    full = render_buffer(cfg, Formula.SYM)
    band = render_rows(cfg, Formula.SYM, 2, 5)
    assert np.array_equal(band, full[2:5])


def test_split_bands():
    assert split_bands(10, 4) == [(0, 4), (4, 8), (8, 10)]
    assert split_bands(3, 16) == [(0, 3)]
    with pytest.raises(ValueError):
        split_bands(10, 0)


def test_resolve_workers():
    assert resolve_workers(3) == 3
    assert resolve_workers(None) >= 1
    with pytest.raises(ValueError):
        resolve_workers(0)
