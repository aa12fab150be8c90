# colour_grow/constants.py
"""
Defaults and tunables used across the project.

- NEIGHBOUR_OFFSETS: the one 8-neighbourhood table
- Run defaults (canvas size, palette depth, snapshot cadence)
- Scoring knobs (parallel threshold)
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Grid
# =========================
# (dx, dy) for the 8-neighbourhood, row by row, centre excluded.
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


# =========================
# Run defaults
# =========================
DEFAULT_WIDTH: int = 128
DEFAULT_HEIGHT: int = 128
DEFAULT_BIT_DEPTH: int = 8
MAX_BIT_DEPTH: int = 8
DEFAULT_COLOUR_SPACE: str = "rgb"
COLOUR_SPACES: Tuple[str, ...] = ("rgb", "hsv", "hsl")
DEFAULT_GROUP_BY_CHANNEL: int = 1
DEFAULT_PRINT_INTERVAL: float = 0.5  # seconds between snapshots
DEFAULT_OUTPUT_DIR: str = "output"
DEFAULT_FILENAME: str = "painting"
FRONTIER_SUFFIX: str = "_frontier"

# =========================
# Scoring
# =========================
# Below this many candidates threaded scoring costs more than it saves.
PARALLEL_MIN_CANDIDATES: int = 4096

__all__ = [
    "NEIGHBOUR_OFFSETS",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "DEFAULT_BIT_DEPTH",
    "MAX_BIT_DEPTH",
    "DEFAULT_COLOUR_SPACE",
    "COLOUR_SPACES",
    "DEFAULT_GROUP_BY_CHANNEL",
    "DEFAULT_PRINT_INTERVAL",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_FILENAME",
    "FRONTIER_SUFFIX",
    "PARALLEL_MIN_CANDIDATES",
]
