#!/usr/bin/env python3
"""
grow.py
Grow a painting outward from seed pixels using a shuffled, exhaustive colour palette.

Usage:
  python grow.py [--config FILE] [--width W --height H] [--seed X Y ...] [--bit-depth N]
                 [--colour-space rgb|hsv|hsl] [--no-shuffle] [--mask] [--rng-seed S] [--debug]

Config:
  Optional JSON or YAML file (see colour_grow.config for the schema). Command-line
  options override file values. Without a file the defaults are a 128x128 canvas,
  one seed at the centre and the full 8-bit RGB cube.

Output:
  <outdir>/<filename>.png, rewritten every --interval seconds and once at the end.
  With --mask also <outdir>/<filename>_frontier.png (boundary cells in white).

Notes:
  Placement is greedy: each colour goes to the boundary cell whose coloured
  neighbours it matches best. --workers threads the scoring pass only.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from colour_grow.config import config_from_mapping, read_config_file
from colour_grow.constants import COLOUR_SPACES, DEFAULT_HEIGHT, DEFAULT_WIDTH
from colour_grow.core_types import ConfigError
from colour_grow.run import run_growth
from colour_grow.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
)


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for a growth run.

    Returns:
      argparse.Namespace with config (optional Path) plus optional overrides for
      size, seeds, palette, output, interval, rng seed, workers, and the
      debug / quiet flags.
    """
    parser = argparse.ArgumentParser(
        prog="grow",
        description="Grow a painting from seed pixels, one best-fitting colour at a time.",
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON or YAML config file")
    parser.add_argument("--width", type=int, default=None, help="Canvas width")
    parser.add_argument("--height", type=int, default=None, help="Canvas height")
    parser.add_argument(
        "--seed",
        dest="seeds",
        type=int,
        nargs=2,
        action="append",
        metavar=("X", "Y"),
        default=None,
        help=(
            "Seed position; repeat for several. Replaces config seeds, which are "
            "then 0-based unless --one-indexed is given."
        ),
    )
    parser.add_argument(
        "--one-indexed",
        action="store_true",
        default=None,
        help="Seed positions are 1-based.",
    )
    parser.add_argument("--bit-depth", type=int, default=None, help="Bits per channel (1..8)")
    parser.add_argument(
        "--colour-space",
        choices=list(COLOUR_SPACES),
        default=None,
        help="How generated channel values are interpreted.",
    )
    parser.add_argument(
        "--group-by-channel",
        type=int,
        choices=[1, 2, 3],
        default=None,
        help="Channel kept grouped when shuffle is off.",
    )
    parser.add_argument(
        "--no-shuffle",
        dest="shuffle",
        action="store_false",
        default=None,
        help="Keep channel grouping instead of a final shuffle.",
    )
    parser.add_argument(
        "--alpha", action="store_true", default=None, help="Carry an opaque alpha channel"
    )
    parser.add_argument("--outdir", type=Path, default=None, help="Output directory")
    parser.add_argument("--filename", default=None, help="Output file stem")
    parser.add_argument(
        "--mask", action="store_true", default=None, help="Also write the boundary mask"
    )
    parser.add_argument(
        "--interval", type=float, default=None, help="Seconds between snapshots"
    )
    parser.add_argument("--rng-seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--workers", type=int, default=None, help="Scoring threads")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    parser.add_argument("--debug", action="store_true", help="Verbose timing details")
    return parser.parse_args(argv)


def apply_overrides(data: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Merge CLI overrides into a parsed config mapping. Returns a new dict."""
    merged: Dict[str, Any] = dict(data)

    if args.width is not None or args.height is not None:
        size = dict(merged.get("size") or {})
        size.setdefault("width", DEFAULT_WIDTH)
        size.setdefault("height", DEFAULT_HEIGHT)
        if args.width is not None:
            size["width"] = args.width
        if args.height is not None:
            size["height"] = args.height
        merged["size"] = size

    if args.seeds is not None:
        merged["seeds"] = [{"position": [x, y]} for x, y in args.seeds]
        # Command-line seeds are 0-based unless --one-indexed says otherwise.
        merged["one_indexed"] = bool(args.one_indexed)
    elif args.one_indexed is not None:
        merged["one_indexed"] = args.one_indexed

    palette = dict(merged.get("palette") or {})
    for key, value in (
        ("bit_depth", args.bit_depth),
        ("colour_space", args.colour_space),
        ("group_by_channel", args.group_by_channel),
        ("shuffle", args.shuffle),
        ("alpha", args.alpha),
    ):
        if value is not None:
            palette[key] = value
    if palette:
        merged["palette"] = palette

    output = dict(merged.get("output") or {})
    if args.outdir is not None:
        output["directory"] = str(args.outdir)
    if args.filename is not None:
        output["filename"] = args.filename
    if args.mask is not None:
        output["mask"] = args.mask
    if output:
        merged["output"] = output

    if args.interval is not None:
        merged["print_interval"] = args.interval
    if args.rng_seed is not None:
        merged["rng_seed"] = args.rng_seed
    if args.workers is not None:
        merged["workers"] = args.workers
    return merged


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Exits with status 2 on configuration errors."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        data = read_config_file(args.config) if args.config is not None else {}
        config = config_from_mapping(
            apply_overrides(data, args), require_file_fields=args.config is not None
        )
    except ConfigError as e:
        error(f"config {e}")
        sys.exit(2)

    print_banner(config.output.filename)
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Config", str(args.config) if args.config else "-"),
                    ("Bit depth", config.palette.bit_depth),
                    ("Group", config.palette.group_by_channel),
                    ("Interval", config.print_interval),
                    ("RNG seed", config.rng_seed if config.rng_seed is not None else "-"),
                ]
            )
        )

    summary = run_growth(config, report=not args.quiet, debug=args.debug)

    result = summary.result
    log(
        f"Wrote {summary.image_path} | size={config.width}x{config.height} "
        f"| coloured={result.coloured:,} | stop={result.stop_reason}"
    )
    if summary.mask_path is not None:
        log(f"Wrote {summary.mask_path}")
    if summary.snapshots_failed:
        error(f"{summary.snapshots_failed} snapshot write(s) failed")
    log(f"Total time {format_total_duration_compact(summary.seconds)}")


if __name__ == "__main__":
    main()
