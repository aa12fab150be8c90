# colour_grow/engine.py
from __future__ import annotations

"""
Greedy flood-growth placement engine.

State machine:
  SEEDING : seed cells are coloured directly and the boundary region is
            initialised through the same neighbour update as placements.
  GROWING : pop colour -> score region -> select -> commit -> update region,
            while the region is non-empty and the queue is not exhausted.
  DONE    : terminal. The canvas is frozen.

All state (canvas, region, queue cursor) lives on one GrowthEngine instance.
"""

import enum
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from .canvas import Canvas
from .colour_queue import ColourQueue
from .core_types import Colour, ContractError, Coord, Placement, Seed, coerce_to_colour
from .frontier import BoundaryRegion
from .scoring import RandomTieBreaker, TieBreaker, score_frontier, select_best


class Phase(enum.Enum):
    SEEDING = "seeding"
    GROWING = "growing"
    DONE = "done"


STOP_QUEUE_EXHAUSTED = "queue_exhausted"
STOP_FRONTIER_EMPTY = "frontier_empty"


@dataclass(frozen=True)
class GrowthResult:
    placed: int  # placements made by run(), seeds excluded
    coloured: int  # total coloured cells
    stop_reason: str
    frontier_size: int


StepCallback = Callable[["GrowthEngine", Placement], None]


class GrowthEngine:
    def __init__(
        self,
        canvas: Canvas,
        queue: ColourQueue,
        tie_breaker: Optional[TieBreaker] = None,
        workers: int = 1,
    ):
        if queue.channels > canvas.channels:
            raise ContractError(
                f"queue has {queue.channels} channels, canvas has {canvas.channels}"
            )
        self.canvas = canvas
        self.queue = queue
        self.frontier = BoundaryRegion()
        self.tie_breaker: TieBreaker = (
            tie_breaker if tie_breaker is not None else RandomTieBreaker()
        )
        self.workers = max(1, int(workers))
        self.phase = Phase.SEEDING
        self.placed_count = 0  # seeds included
        self._executor: Optional[ThreadPoolExecutor] = None

    # Context management

    def __enter__(self) -> "GrowthEngine":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _scoring_executor(self) -> Optional[ThreadPoolExecutor]:
        if self.workers <= 1:
            return None
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.workers)
        return self._executor

    # Shared commit path

    def _commit(self, coord: Coord, colour: Colour, score: float) -> Placement:
        self.canvas.set(coord, colour)
        self.frontier.discard(coord)
        for n in self.canvas.neighbours(coord):
            if not self.canvas.is_coloured(n):
                self.frontier.insert_if_absent(n)
        placement = Placement(
            coord=coord, colour=colour, score=score, index=self.placed_count
        )
        self.placed_count += 1
        return placement

    # Seeding

    def seed(self, coord: Coord, colour: Optional[Colour] = None) -> Placement:
        """
        Colour a seed cell directly, bypassing the search.
        A missing colour is taken from the front of the queue.
        """
        if self.phase is not Phase.SEEDING:
            raise ContractError(f"cannot seed during {self.phase.value}")
        x, y = int(coord[0]), int(coord[1])
        # Reject the cell before consuming a colour for it.
        if self.canvas.is_coloured((x, y)):
            raise ContractError(f"seed cell {(x, y)} is already coloured")
        if colour is None:
            colour = self.queue.pop()
        try:
            value = coerce_to_colour(colour, self.canvas.channels)
        except ValueError as e:
            raise ContractError(f"bad seed colour for {(x, y)}: {e}") from e
        return self._commit((x, y), value, 0.0)

    def seed_all(self, seeds: Iterable[Seed]) -> None:
        for s in seeds:
            self.seed(s.coord, s.colour)

    # Growing

    @property
    def finished(self) -> bool:
        return self.frontier.is_empty() or self.queue.exhausted

    def stop_reason(self) -> Optional[str]:
        if self.queue.exhausted:
            return STOP_QUEUE_EXHAUSTED
        if self.frontier.is_empty():
            return STOP_FRONTIER_EMPTY
        return None

    def best_position(self, colour: Colour) -> Tuple[Coord, float]:
        """Best region member for colour. Reads state only."""
        positions = self.frontier.snapshot()
        scores = score_frontier(
            self.canvas,
            positions,
            colour,
            workers=self.workers,
            executor=self._scoring_executor(),
        )
        idx, score = select_best(scores, self.tie_breaker)
        return (int(positions[idx, 0]), int(positions[idx, 1])), score

    def step(self) -> Optional[Placement]:
        """One placement, or None (and DONE) when growth cannot continue."""
        if self.phase is Phase.DONE:
            return None
        self.phase = Phase.GROWING
        if self.finished:
            self._finish()
            return None
        colour = coerce_to_colour(self.queue.pop(), self.canvas.channels)
        coord, score = self.best_position(colour)
        return self._commit(coord, colour, score)

    def run(self, on_step: Optional[StepCallback] = None) -> GrowthResult:
        """Grow until the region empties or the queue runs out."""
        placed = 0
        while True:
            placement = self.step()
            if placement is None:
                break
            placed += 1
            if on_step is not None:
                on_step(self, placement)
        return GrowthResult(
            placed=placed,
            coloured=self.canvas.coloured_count,
            stop_reason=self.stop_reason() or STOP_FRONTIER_EMPTY,
            frontier_size=len(self.frontier),
        )

    def _finish(self) -> None:
        self.phase = Phase.DONE
        self.canvas.freeze()
        self.close()


__all__ = [
    "Phase",
    "GrowthResult",
    "GrowthEngine",
    "StepCallback",
    "STOP_QUEUE_EXHAUSTED",
    "STOP_FRONTIER_EMPTY",
]
