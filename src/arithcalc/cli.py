"""Command-line interface for arithcalc."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from arithcalc.comments import strip_comments
from arithcalc.errors import CalcError
from arithcalc.outcome import Error, render
from arithcalc.parser import DEFAULT_MAX_DEPTH, evaluate

DEFAULT_SUFFIX = "result"
CONFIG_NAME = "arithcalc.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    input_dir: Path | None
    output_dir: Path
    suffix: str
    max_depth: int
    to_stdout: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="arithcalc",
        description="Evaluate arithmetic expression files",
    )
    p.add_argument("input", nargs="?", help="Input expression file")
    p.add_argument("-d", "--dir", metavar="DIR", help="Evaluate every .txt file in DIR")
    p.add_argument(
        "-o",
        "--output-dir",
        metavar="DIR",
        help="Output directory (default: <name>_<suffix>)",
    )
    p.add_argument(
        "--suffix",
        default=None,
        help=f"Suffix appended to output file names (default: {DEFAULT_SUFFIX})",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"Maximum nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    p.add_argument("--stdout", action="store_true", help="Print results instead of writing files")
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _with_suffix(name: str, suffix: str) -> str:
    return f"{name}_{suffix}" if suffix else name


def _parse_max_depth(value: object, origin: str) -> int:
    # bool is an int subclass; `max_depth = true` is not a depth
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise argparse.ArgumentTypeError(f"{origin} must be a positive integer, got {value!r}")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    if args.input and args.dir:
        raise argparse.ArgumentTypeError("give either an input file or --dir, not both")
    if not args.input and not args.dir:
        raise argparse.ArgumentTypeError("no input: give an input file or --dir DIR")

    input_file = Path(args.input) if args.input else None
    input_dir = Path(args.dir) if args.dir else None

    base_dir = input_dir if input_dir is not None else input_file.parent
    if not base_dir.parts:
        base_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir)

    cfg_output = config.get("output")
    if not isinstance(cfg_output, dict):
        cfg_output = {}
    cfg_evaluate = config.get("evaluate")
    if not isinstance(cfg_evaluate, dict):
        cfg_evaluate = {}

    # Suffix: default < config < CLI
    suffix = DEFAULT_SUFFIX
    if isinstance(cfg_output.get("suffix"), str):
        suffix = cfg_output["suffix"]
    if args.suffix is not None:
        suffix = args.suffix

    # Max depth: default < config < CLI
    max_depth = DEFAULT_MAX_DEPTH
    if "max_depth" in cfg_evaluate:
        max_depth = _parse_max_depth(cfg_evaluate["max_depth"], "evaluate.max_depth")
    if args.max_depth is not None:
        max_depth = _parse_max_depth(args.max_depth, "--max-depth")

    # Output directory: derived default < config < CLI
    if input_file is not None:
        output_dir = Path(_with_suffix(input_file.stem, suffix))
    else:
        output_dir = Path(_with_suffix(base_dir.resolve().name, suffix))
    if isinstance(cfg_output.get("dir"), str):
        output_dir = Path(cfg_output["dir"])
    if args.output_dir:
        output_dir = Path(args.output_dir)

    return CliOptions(
        input_file=input_file,
        input_dir=input_dir,
        output_dir=output_dir,
        suffix=suffix,
        max_depth=max_depth,
        to_stdout=args.stdout,
        debug=args.debug,
    )


def collect_inputs(options: CliOptions) -> list[Path]:
    """Return the files to evaluate: the single input, or every .txt in the directory."""
    if options.input_dir is None:
        assert options.input_file is not None
        return [options.input_file]
    return sorted(p for p in options.input_dir.iterdir() if p.is_file() and p.suffix == ".txt")


def output_path(options: CliOptions, input_file: Path) -> Path:
    """Return ``<output_dir>/<stem>_<suffix>.txt`` for an input file."""
    return options.output_dir / f"{_with_suffix(input_file.stem, options.suffix)}.txt"


def process_file(path: Path, options: CliOptions) -> str:
    """Read, strip, and evaluate one expression file; return its output line."""
    from arithcalc.debug import dump_tokens

    raw = path.read_text(encoding="utf-8")
    stripped = strip_comments(raw)

    if options.debug:
        dump_tokens(stripped.text, file=sys.stderr)

    outcome = evaluate(stripped.text, options.max_depth)
    if isinstance(outcome, Error):
        diagnostic = CalcError(outcome.kind, stripped.original_position(outcome.position), raw)
        print(diagnostic.format(str(path)), file=sys.stderr)
    return render(outcome)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        inputs = collect_inputs(options)
        if not options.to_stdout:
            options.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    status = 0
    for path in inputs:
        try:
            result = process_file(path, options)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {path}: {exc}", file=sys.stderr)
            status = 1
            continue

        if options.to_stdout:
            if options.input_dir is not None:
                result = f"{path.name}: {result}"
            sys.stdout.write(result)
            continue

        target = output_path(options, path)
        try:
            target.write_text(result, encoding="utf-8")
        except OSError as exc:
            print(f"error: cannot write {target}: {exc}", file=sys.stderr)
            status = 1

    return status
