import numpy as np
import pytest
from PIL import Image

from kyros.config import RenderConfig
from kyros.errors import FormulaNotFound
from kyros.formulas import Formula
from kyros.pipeline import render_image, run_render
from kyros.renderers.cpu import render_buffer


def test_run_render_writes_png(tmp_path):
    cfg = RenderConfig(width=6, height=4, max_iterations=8, formula_name="SD", output_index=3)
    outcome = run_render(cfg, output_dir=str(tmp_path / "images"))
    assert outcome.path.endswith("out#3.png")
    assert outcome.workers == 1
    assert outcome.elapsed >= 0
    with Image.open(outcome.path) as img:
        assert img.mode == "RGB"
        assert img.size == (6, 4)
        saved = np.asarray(img)
    assert np.array_equal(saved, render_buffer(cfg, Formula.SD))

    info = outcome.renderer_info()
    assert info["resolved"] == "cpu"
    assert info["output"] == outcome.path


def test_unknown_formula_stops_before_rendering(tmp_path):
    cfg = RenderConfig(width=4, height=4, max_iterations=4, formula_name="XYZ")
    with pytest.raises(FormulaNotFound):
        run_render(cfg, output_dir=str(tmp_path))
    assert list(tmp_path.iterdir()) == []


def test_render_image_size():
    img = render_image(RenderConfig(width=5, height=3, max_iterations=10, formula_name="SYM"))
    assert img.size == (5, 3)
