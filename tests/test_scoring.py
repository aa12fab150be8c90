import numpy as np
import pytest

from colour_grow.canvas import Canvas
from colour_grow.colour_queue import ColourQueue, generate_colours
from colour_grow.core_types import ContractError
from colour_grow.engine import GrowthEngine
from colour_grow.scoring import (
    FirstTieBreaker,
    LastTieBreaker,
    RandomTieBreaker,
    score_candidate,
    score_frontier,
    score_positions,
    select_best,
)


class ScriptedTieBreaker:
    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = 0

    def prefer_challenger(self) -> bool:
        self.calls += 1
        return self.answers.pop(0)


def _two_neighbour_canvas() -> Canvas:
    canvas = Canvas(3, 3)
    canvas.set((0, 0), (0, 0, 0))
    canvas.set((2, 2), (10, 0, 0))
    return canvas


def _grown_engine(steps: int, seed: int = 0) -> GrowthEngine:
    rng = np.random.default_rng(seed)
    colours = generate_colours(bit_depth=3, rng=rng)
    engine = GrowthEngine(
        Canvas(24, 24), ColourQueue(colours), tie_breaker=RandomTieBreaker(seed)
    )
    engine.seed((12, 12))
    engine.seed((3, 20))
    for _ in range(steps):
        engine.step()
    return engine


class TestScoring:
    def test_mean_over_two_coloured_neighbours(self) -> None:
        canvas = _two_neighbour_canvas()
        assert score_candidate(canvas, (1, 1), (5, 0, 0)) == 25

    def test_vectorised_matches_single_candidate(self) -> None:
        canvas = _two_neighbour_canvas()
        scores = score_positions(
            canvas.pixels, canvas.painted, np.array([[1, 1]]), (5, 0, 0)
        )
        assert scores.tolist() == [25.0]

    def test_uncoloured_neighbours_are_not_counted(self) -> None:
        canvas = Canvas(3, 1)
        canvas.set((0, 0), (0, 0, 4))
        # (2, 0) is uncoloured; only one neighbour contributes.
        assert score_candidate(canvas, (1, 0), (0, 0, 0)) == 16

    def test_zero_coloured_neighbours_is_a_contract_failure(self) -> None:
        canvas = Canvas(4, 4)
        canvas.set((0, 0), (1, 1, 1))
        with pytest.raises(ContractError):
            score_candidate(canvas, (3, 3), (0, 0, 0))
        with pytest.raises(ContractError):
            score_positions(
                canvas.pixels, canvas.painted, np.array([[1, 1], [3, 3]]), (0, 0, 0)
            )

    def test_channel_mismatch_is_a_contract_failure(self) -> None:
        canvas = _two_neighbour_canvas()
        with pytest.raises(ContractError):
            score_positions(
                canvas.pixels, canvas.painted, np.array([[1, 1]]), (5, 0, 0, 255)
            )

    def test_vectorised_agrees_with_per_candidate_on_grown_canvas(self) -> None:
        engine = _grown_engine(steps=60)
        colour = (37, 200, 91)
        positions = engine.frontier.snapshot()
        vec = score_positions(engine.canvas.pixels, engine.canvas.painted, positions, colour)
        for (x, y), s in zip(positions.tolist(), vec.tolist()):
            assert s == pytest.approx(score_candidate(engine.canvas, (x, y), colour))

    def test_threaded_scoring_matches_serial(self, monkeypatch) -> None:
        monkeypatch.setattr("colour_grow.scoring.PARALLEL_MIN_CANDIDATES", 0)
        engine = _grown_engine(steps=80)
        positions = engine.frontier.snapshot()
        colour = (128, 64, 32)
        serial = score_frontier(engine.canvas, positions, colour, workers=1)
        threaded = score_frontier(engine.canvas, positions, colour, workers=3)
        assert np.array_equal(serial, threaded)


class TestSelection:
    def test_strict_minimum_wins_without_consulting_tie_breaker(self) -> None:
        tb = ScriptedTieBreaker([])
        assert select_best(np.array([4.0, 1.0, 3.0]), tb) == (1, 1.0)
        assert tb.calls == 0

    def test_first_and_last_tie_breakers(self) -> None:
        scores = np.array([3.0, 1.0, 1.0, 2.0, 1.0])
        assert select_best(scores, FirstTieBreaker()) == (1, 1.0)
        assert select_best(scores, LastTieBreaker()) == (4, 1.0)

    def test_ties_are_settled_pairwise_in_order(self) -> None:
        scores = np.array([3.0, 1.0, 1.0, 2.0, 1.0])
        tb = ScriptedTieBreaker([True, False])
        assert select_best(scores, tb) == (2, 1.0)
        assert tb.calls == 2

    def test_empty_scores_is_a_contract_failure(self) -> None:
        with pytest.raises(ContractError):
            select_best(np.zeros((0,)), FirstTieBreaker())

    def test_seeded_random_tie_breaker_is_reproducible(self) -> None:
        a = RandomTieBreaker(seed=7)
        b = RandomTieBreaker(seed=7)
        flips_a = [a.prefer_challenger() for _ in range(64)]
        flips_b = [b.prefer_challenger() for _ in range(64)]
        assert flips_a == flips_b
        assert True in flips_a and False in flips_a
