import numpy as np
import pytest

from colour_grow.colour_queue import ColourQueue, generate_colours
from colour_grow.core_types import QueueExhausted


class TestColourQueue:
    def test_pops_front_to_back(self) -> None:
        queue = ColourQueue([(1, 2, 3), (4, 5, 6)])
        assert len(queue) == 2
        assert queue.channels == 3
        assert queue.peek() == (1, 2, 3)
        assert queue.pop() == (1, 2, 3)
        assert queue.consumed == 1
        assert queue.remaining == 1
        assert queue.pop() == (4, 5, 6)
        assert queue.exhausted

    def test_pop_past_the_end_raises(self) -> None:
        queue = ColourQueue([(1, 2, 3)])
        queue.pop()
        with pytest.raises(QueueExhausted):
            queue.pop()
        with pytest.raises(QueueExhausted):
            queue.peek()

    def test_empty_queue_is_exhausted(self) -> None:
        queue = ColourQueue([])
        assert queue.exhausted
        assert queue.channels == 3

    @pytest.mark.parametrize(
        "colours", [[(1, 2)], [(1, 2, 3, 4, 5)], [(0, 0, 256)], [(-1, 0, 0)]]
    )
    def test_rejects_malformed_colours(self, colours) -> None:
        with pytest.raises(ValueError):
            ColourQueue(colours)


class TestGenerateColours:
    def test_depth_two_enumerates_the_cube(self) -> None:
        colours = generate_colours(bit_depth=2, rng=np.random.default_rng(0))
        assert colours.shape == (64, 3)
        assert colours.dtype == np.uint8
        assert len({tuple(c) for c in colours.tolist()}) == 64
        assert set(np.unique(colours).tolist()) == {0, 85, 170, 255}

    def test_depth_eight_is_exhaustive_and_unique(self) -> None:
        colours = generate_colours(bit_depth=8, rng=np.random.default_rng(0))
        assert colours.shape == (1 << 24, 3)
        packed = colours[:, 0].astype(np.int32) << 16
        packed |= colours[:, 1].astype(np.int32) << 8
        packed |= colours[:, 2]
        assert np.all(np.bincount(packed, minlength=1 << 24) == 1)

    @pytest.mark.parametrize("group, grouped_channel", [(1, 0), (2, 2), (3, 1)])
    def test_grouping_without_shuffle(self, group, grouped_channel) -> None:
        colours = generate_colours(
            bit_depth=1,
            group_by_channel=group,
            shuffle=False,
            rng=np.random.default_rng(3),
        )
        first_block = colours[:4, grouped_channel]
        second_block = colours[4:, grouped_channel]
        assert len(set(first_block.tolist())) == 1
        assert len(set(second_block.tolist())) == 1
        assert first_block[0] != second_block[0]

    def test_same_generator_seed_same_order(self) -> None:
        a = generate_colours(bit_depth=3, rng=np.random.default_rng(9))
        b = generate_colours(bit_depth=3, rng=np.random.default_rng(9))
        c = generate_colours(bit_depth=3, rng=np.random.default_rng(10))
        assert np.array_equal(a, b)
        assert not np.array_equal(a, c)

    def test_hsv_depth_one(self) -> None:
        colours = generate_colours(
            bit_depth=1, colour_space="hsv", rng=np.random.default_rng(0)
        )
        assert {tuple(c) for c in colours.tolist()} == {
            (0, 0, 0),
            (255, 255, 255),
            (0, 255, 255),
        }

    def test_hsl_depth_one_collapses_to_black_and_white(self) -> None:
        colours = generate_colours(
            bit_depth=1, colour_space="hsl", rng=np.random.default_rng(0)
        )
        assert colours.shape == (8, 3)
        assert {tuple(c) for c in colours.tolist()} == {(0, 0, 0), (255, 255, 255)}

    def test_alpha_channel_is_opaque(self) -> None:
        colours = generate_colours(
            bit_depth=1, with_alpha=True, rng=np.random.default_rng(0)
        )
        assert colours.shape == (8, 4)
        assert np.all(colours[:, 3] == 255)
        assert ColourQueue(colours).channels == 4

    def test_depth_above_maximum_is_limited(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("colour_grow.colour_queue.MAX_BIT_DEPTH", 2)
        colours = generate_colours(bit_depth=5, rng=np.random.default_rng(0))
        assert colours.shape == (64, 3)
        assert "[warn] Limiting colour bit-depth to 2." in capsys.readouterr().out

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"bit_depth": 0},
            {"colour_space": "lab"},
            {"group_by_channel": 0},
            {"group_by_channel": 4},
        ],
    )
    def test_invalid_arguments(self, kwargs) -> None:
        with pytest.raises(ValueError):
            generate_colours(**kwargs)
