from typing import Set, Tuple

import pytest

from colour_grow.canvas import Canvas
from colour_grow.engine import GrowthEngine


def expected_frontier(canvas: Canvas) -> Set[Tuple[int, int]]:
    """Uncoloured cells with at least one coloured 8-neighbour, by brute force."""
    out = set()
    for y in range(canvas.height):
        for x in range(canvas.width):
            if canvas.is_coloured((x, y)):
                continue
            if any(canvas.is_coloured(n) for n in canvas.neighbours((x, y))):
                out.add((x, y))
    return out


def assert_frontier_invariant(engine: GrowthEngine) -> None:
    assert set(engine.frontier) == expected_frontier(engine.canvas)
    assert len(engine.frontier) == len(set(engine.frontier))


@pytest.fixture
def distinct_colours():
    """Eight colours far enough apart that scores never tie by accident."""
    return [
        (250, 10, 10),
        (10, 250, 10),
        (10, 10, 250),
        (200, 200, 20),
        (20, 200, 200),
        (200, 20, 200),
        (120, 60, 30),
        (30, 60, 120),
    ]
