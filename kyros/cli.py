from __future__ import annotations

import argparse
import logging
import subprocess
from typing import Any, Callable, Dict, Optional

from kyros.config import DEFAULTS, RenderConfig, expand_aliases, load_config, normalise_config
from kyros.errors import ConfigError, KyrosError
from kyros.formulas import BUILTIN_FORMULAS
from kyros.pipeline import run_render
from kyros.util.logging_setup import configure_logging, create_log_queue, get_logger, start_queue_listener
from kyros.util.manifest import build_manifest, write_manifest

def _git_commit() -> Optional[str]:
    try:
        r = subprocess.run(["git", "rev-parse", "HEAD"], capture_output=True, text=True, check=True)
        return r.stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return None

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="kyros", description="The kyros escape-time fractal image generator.")
    p.add_argument("-p", "--pixels", type=int, default=None,
                   help=f"Square image size in pixels (default {DEFAULTS['width']}).")
    p.add_argument("--width", type=int, default=None, help="Image width; overrides --pixels.")
    p.add_argument("--height", type=int, default=None, help="Image height; overrides --pixels.")
    p.add_argument("--iterations", type=int, default=None,
                   help=f"Maximum iterations per pixel (default {DEFAULTS['max_iterations']}).")
    p.add_argument("-f", "--formula", type=str, default=None,
                   help=f"Generation formula: {', '.join(BUILTIN_FORMULAS.names())} (default {DEFAULTS['formula']}).")
    p.add_argument("--julia", type=float, nargs=2, metavar=("RE", "IM"), default=None,
                   help="Fix c for every pixel (Julia mode).")
    p.add_argument("--index", type=int, default=None, help="Output image index, used in the file name out#<index>.png.")
    p.add_argument("--output-dir", type=str, default=".", help="Directory to write the image to.")
    p.add_argument("--workers", type=int, default=1, help="Worker processes; 0 uses every CPU.")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON.")
    p.add_argument("--interactive", action="store_true", help="Prompt for each setting on stdin.")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    p.add_argument("--manifest", type=str, default="artifacts/run.json",
                   help="Run manifest path. Set empty to disable.")
    p.add_argument("--list-formulas", action="store_true", help="Print the available formulas and exit.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Rotating log file path. Empty disables file logging.")
    return p

def prompt_config(cfg: Dict[str, Any], input_fn: Callable[[str], str] = input) -> Dict[str, Any]:
    """Ask for each setting in turn; a blank answer keeps the current value."""
    out = dict(cfg)

    def ask(key: str, label: str, cast: Callable[[str], Any]) -> None:
        raw = input_fn(f"{label} [{out.get(key)}]: ").strip()
        if not raw:
            return
        try:
            out[key] = cast(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {label}: {raw!r}") from e

    ask("width", "Image width", int)
    ask("height", "Image height", int)
    ask("max_iterations", "Maximum iterations", int)
    ask("formula", "Formula", str)

    raw = input_fn(f"Julia c as 're im' (blank for Mandelbrot) [{out.get('fixed_c')}]: ").strip()
    if raw:
        parts = raw.split()
        if len(parts) != 2:
            raise ConfigError(f"Julia c needs two numbers, got {raw!r}")
        try:
            out["fixed_c"] = [float(parts[0]), float(parts[1])]
        except ValueError as e:
            raise ConfigError(f"Invalid Julia c: {raw!r}") from e

    ask("output_index", "Output index", int)
    return out

def resolve_config(args: argparse.Namespace, input_fn: Callable[[str], str] = input) -> RenderConfig:
    cfg = expand_aliases(load_config(args.config))
    if args.interactive:
        cfg = prompt_config({**DEFAULTS, **cfg}, input_fn)

    if args.pixels is not None:
        cfg["width"] = cfg["height"] = args.pixels
    if args.width is not None:
        cfg["width"] = args.width
    if args.height is not None:
        cfg["height"] = args.height
    if args.iterations is not None:
        cfg["max_iterations"] = args.iterations
    if args.formula is not None:
        cfg["formula"] = args.formula
    if args.julia is not None:
        cfg["fixed_c"] = list(args.julia)
    if args.index is not None:
        cfg["output_index"] = args.index
    return normalise_config(cfg)

def main(argv: Optional[list] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.workers < 0:
        parser.error("--workers must be >= 0")

    if args.list_formulas:
        for name in BUILTIN_FORMULAS.names():
            print(f"{name:4s} {BUILTIN_FORMULAS.lookup(name).description}")
        return 0

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    log_file = args.log_file.strip() or None
    listener_logger = configure_logging(level=log_level, console=True, log_file=log_file)
    logger = get_logger()

    workers = None if args.workers == 0 else args.workers
    queue = create_log_queue() if workers != 1 else None
    listener = start_queue_listener(queue, listener_logger) if queue is not None else None

    try:
        config = resolve_config(args)
        outcome = run_render(
            config,
            output_dir=args.output_dir,
            workers=workers,
            progress=not args.no_progress,
            log_queue=queue,
            log_level=log_level,
        )

        if args.manifest.strip():
            manifest = build_manifest(config=config.to_dict(), renderer_info=outcome.renderer_info(),
                                      git_commit=_git_commit())
            write_manifest(args.manifest, manifest)
            logger.info("Run manifest written: %s", args.manifest)
        return 0
    except KyrosError as e:
        logger.error("%s", e)
        return 1
    finally:
        if listener is not None:
            listener.stop()
