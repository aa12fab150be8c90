# colour_grow/run.py
from __future__ import annotations

"""
End-to-end growth run: palette -> queue -> seeds -> grow -> final snapshot.

Random streams for palette shuffling and tie-breaking are spawned from one
SeedSequence, so a fixed rng_seed reproduces the canvas byte for byte.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from .canvas import Canvas
from .colour_queue import ColourQueue, generate_colours
from .config import GrowConfig
from .engine import GrowthEngine, GrowthResult
from .scoring import RandomTieBreaker
from .snapshot import SnapshotWriter
from .utils import (
    debug_log,
    format_seconds_compact,
    key_value_pairs_to_string,
    print_config_line,
)


@dataclass(frozen=True)
class RunSummary:
    result: GrowthResult
    canvas: Canvas
    image_path: Path
    mask_path: Optional[Path]
    snapshots_written: int
    snapshots_failed: int
    seconds: float


def spawn_generators(
    rng_seed: Optional[int],
) -> Tuple[np.random.Generator, np.random.Generator]:
    """(palette_rng, tie_rng) from one seed; fresh entropy when rng_seed is None."""
    palette_seq, tie_seq = np.random.SeedSequence(rng_seed).spawn(2)
    return np.random.default_rng(palette_seq), np.random.default_rng(tie_seq)


def build_queue(config: GrowConfig, rng: np.random.Generator) -> ColourQueue:
    pal = config.palette
    colours = generate_colours(
        bit_depth=pal.bit_depth,
        colour_space=pal.colour_space,
        group_by_channel=pal.group_by_channel,
        shuffle=pal.shuffle,
        with_alpha=pal.alpha,
        rng=rng,
    )
    return ColourQueue(colours)


def run_growth(
    config: GrowConfig,
    *,
    queue: Optional[ColourQueue] = None,
    report: bool = True,
    debug: bool = False,
) -> RunSummary:
    """
    Run one painting described by config.

    Args:
      config: validated GrowConfig
      queue : optional prebuilt queue (palette settings are then ignored)
      report: print the config line and per-snapshot painting rate
      debug : extra timing lines
    """
    t_start = time.perf_counter()
    palette_rng, tie_rng = spawn_generators(config.rng_seed)

    if queue is None:
        queue = build_queue(config, palette_rng)
    t_palette = time.perf_counter()
    if debug:
        debug_log(
            f"colours generated in {format_seconds_compact(t_palette - t_start)}"
        )

    canvas = Canvas(config.width, config.height, channels=queue.channels)
    if report:
        print_config_line(
            "run",
            [
                ("Size", f"{config.width}x{config.height}"),
                ("Seeds", len(config.seeds)),
                ("Colours", len(queue)),
                ("Space", config.palette.colour_space),
                ("Shuffle", config.palette.shuffle),
                ("Workers", config.workers),
            ],
            debug=False,
        )

    writer = SnapshotWriter(
        config.output.directory,
        config.output.filename,
        write_mask=config.output.mask,
        interval=config.print_interval,
        report=report,
    )
    tie_breaker = RandomTieBreaker(rng=tie_rng)
    try:
        with GrowthEngine(canvas, queue, tie_breaker, workers=config.workers) as engine:
            engine.seed_all(config.seeds)
            result = engine.run(on_step=writer.on_step)
            ok = writer.finish(engine)
    finally:
        writer.close()

    t_end = time.perf_counter()
    seconds = t_end - t_start
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Placed", result.placed),
                    ("Coloured", result.coloured),
                    ("Frontier", result.frontier_size),
                    ("Stop", result.stop_reason),
                    ("Final snapshot", ok),
                    ("Grow time", format_seconds_compact(t_end - t_palette)),
                ]
            )
        )
    return RunSummary(
        result=result,
        canvas=canvas,
        image_path=writer.image_path,
        mask_path=writer.mask_path if config.output.mask else None,
        snapshots_written=writer.written,
        snapshots_failed=writer.failed,
        seconds=seconds,
    )


__all__ = ["RunSummary", "spawn_generators", "build_queue", "run_growth"]
