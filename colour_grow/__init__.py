"""
colour_grow package.

Purpose:
  Grow a painting outward from seed pixels: every colour in a queue is placed on
  the uncoloured boundary cell whose coloured neighbours it matches best.
  See grow.py for the CLI.

Public API:
  Canvas          : fixed-size grid, each cell coloured at most once.
  BoundaryRegion  : uncoloured cells next to coloured ones (O(1) insert/remove).
  ColourQueue     : read-once colour sequence; generate_colours builds one.
  GrowthEngine    : seeding, scoring, selection and commit loop.
  RandomTieBreaker: seedable coin flips for exact score ties.
  SnapshotWriter  : background PNG snapshots of canvas and boundary mask.
  load_config     : JSON / YAML config -> GrowConfig.
  run_growth      : end-to-end run from a GrowConfig.

Quick start:
  from colour_grow import Canvas, ColourQueue, GrowthEngine
  engine = GrowthEngine(Canvas(64, 64), ColourQueue(colours))
  engine.seed((32, 32))
  engine.run()
"""

__version__ = "0.1.0"

from . import colour_convert
from . import core_types
from . import utils

from .canvas import Canvas
from .colour_queue import ColourQueue, generate_colours
from .config import GrowConfig, config_from_mapping, load_config
from .core_types import (
    ConfigError,
    ContractError,
    OutOfBoundsError,
    Placement,
    QueueExhausted,
    Seed,
)
from .engine import GrowthEngine, GrowthResult, Phase
from .frontier import BoundaryRegion
from .run import RunSummary, run_growth
from .scoring import (
    FirstTieBreaker,
    LastTieBreaker,
    RandomTieBreaker,
    score_candidate,
)
from .snapshot import SnapshotWriter

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "utils",
    "Canvas",
    "ColourQueue",
    "generate_colours",
    "GrowConfig",
    "config_from_mapping",
    "load_config",
    "ConfigError",
    "ContractError",
    "OutOfBoundsError",
    "Placement",
    "QueueExhausted",
    "Seed",
    "GrowthEngine",
    "GrowthResult",
    "Phase",
    "BoundaryRegion",
    "RunSummary",
    "run_growth",
    "FirstTieBreaker",
    "LastTieBreaker",
    "RandomTieBreaker",
    "score_candidate",
    "SnapshotWriter",
]
