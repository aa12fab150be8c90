# colour_grow/scoring.py
from __future__ import annotations

"""
Candidate scoring and best-position selection.

A candidate's score is the mean, over its coloured 8-neighbours, of the squared
channel distance between the colour being placed and each neighbour. Lower is
better. Exact ties are settled one pair at a time (current best vs the next tied
candidate, in region order) by an injectable tie-breaker.

Scoring only reads the canvas, so it can be split across threads over an
immutable region snapshot; the reduction always runs here, sequentially.
"""

from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Optional, Protocol, Tuple

import numpy as np

from .canvas import Canvas
from .colour_convert import squared_distance, squared_distance_vec
from .constants import NEIGHBOUR_OFFSETS, PARALLEL_MIN_CANDIDATES
from .core_types import BoolMask, Colour, ContractError, Coord, U8Image
from .utils import split_range_into_parts


# Tie-breaking


class TieBreaker(Protocol):
    def prefer_challenger(self) -> bool:
        """True to replace the current best with the newly tied candidate."""
        ...


class RandomTieBreaker:
    """Fair coin per tie, from a seedable numpy Generator."""

    def __init__(
        self,
        seed: Optional[int | np.random.SeedSequence] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def prefer_challenger(self) -> bool:
        return bool(self.rng.integers(0, 2))


class FirstTieBreaker:
    """Always keep the earliest tied candidate."""

    def prefer_challenger(self) -> bool:
        return False


class LastTieBreaker:
    """Always take the latest tied candidate."""

    def prefer_challenger(self) -> bool:
        return True


# Scoring


def score_candidate(canvas: Canvas, coord: Coord, colour: Colour) -> float:
    """Score one position. Zero coloured neighbours is a contract failure."""
    total = 0
    count = 0
    for neighbour_colour in canvas.coloured_neighbours(coord):
        total += squared_distance(colour, neighbour_colour)
        count += 1
    if count == 0:
        raise ContractError(f"candidate {coord} has no coloured neighbours")
    return total / count


def score_positions(
    pixels: U8Image, painted: BoolMask, positions: np.ndarray, colour: Colour
) -> np.ndarray:
    """
    Vectorised scores for many positions.

    Args:
      pixels   : uint8 [H,W,C]
      painted  : bool [H,W]
      positions: int [N,2] as (x, y) rows
      colour   : C channels
    Returns:
      float64 [N]
    """
    if len(colour) != pixels.shape[2]:
        raise ContractError(
            f"colour has {len(colour)} channels, canvas has {pixels.shape[2]}"
        )
    height, width = painted.shape
    xs = positions[:, 0]
    ys = positions[:, 1]
    dist_sum = np.zeros(xs.shape[0], dtype=np.int64)
    counts = np.zeros(xs.shape[0], dtype=np.int64)

    # Array form of Canvas.neighbours: same offsets, same bounds rule.
    for dx, dy in NEIGHBOUR_OFFSETS:
        nx = xs + dx
        ny = ys + dy
        inside = (nx >= 0) & (nx < width) & (ny >= 0) & (ny < height)
        nxc = np.clip(nx, 0, width - 1)
        nyc = np.clip(ny, 0, height - 1)
        hit = inside & painted[nyc, nxc]
        d2 = squared_distance_vec(colour, pixels[nyc, nxc])
        dist_sum += np.where(hit, d2, 0)
        counts += hit

    if np.any(counts == 0):
        bad = positions[int(np.argmin(counts))]
        raise ContractError(
            f"candidate {(int(bad[0]), int(bad[1]))} has no coloured neighbours"
        )
    return dist_sum / counts


def score_frontier(
    canvas: Canvas,
    positions: np.ndarray,
    colour: Colour,
    workers: int = 1,
    executor: Optional[Executor] = None,
) -> np.ndarray:
    """
    Score every position in a region snapshot, threaded when worth it.

    The canvas must not change until this returns.
    """
    pixels = canvas.pixels
    painted = canvas.painted
    n = int(positions.shape[0])
    if workers <= 1 or n < PARALLEL_MIN_CANDIDATES:
        return score_positions(pixels, painted, positions, colour)

    spans = split_range_into_parts(n, workers)
    if executor is None:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(score_positions, pixels, painted, positions[s:e], colour)
                for s, e in spans
            ]
            parts = [f.result() for f in futures]
    else:
        futures = [
            executor.submit(score_positions, pixels, painted, positions[s:e], colour)
            for s, e in spans
        ]
        parts = [f.result() for f in futures]
    return np.concatenate(parts)


# Selection


def select_best(scores: np.ndarray, tie_breaker: TieBreaker) -> Tuple[int, float]:
    """
    Index and value of the minimum score.

    Tied minima are visited in order; each one replaces the current best when
    the tie-breaker prefers the challenger.
    """
    if scores.shape[0] == 0:
        raise ContractError("no candidates to select from")
    best_score = float(scores.min())
    tied = np.flatnonzero(scores == best_score)
    best = int(tied[0])
    for idx in tied[1:].tolist():
        if tie_breaker.prefer_challenger():
            best = int(idx)
    return best, best_score


__all__ = [
    "TieBreaker",
    "RandomTieBreaker",
    "FirstTieBreaker",
    "LastTieBreaker",
    "score_candidate",
    "score_positions",
    "score_frontier",
    "select_best",
]
