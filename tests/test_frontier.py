import random

import numpy as np
import pytest

from colour_grow.core_types import ContractError
from colour_grow.frontier import BoundaryRegion


class TestBoundaryRegion:
    def test_insert_is_idempotent(self) -> None:
        region = BoundaryRegion()
        assert region.insert_if_absent((1, 2)) is True
        assert region.insert_if_absent((1, 2)) is False
        assert len(region) == 1
        assert region.contains((1, 2))
        assert (1, 2) in region

    def test_empty_region(self) -> None:
        region = BoundaryRegion()
        assert region.is_empty()
        assert list(region) == []
        assert region.snapshot().shape == (0, 2)

    def test_remove_swaps_last_into_hole(self) -> None:
        region = BoundaryRegion()
        for c in [(0, 0), (1, 0), (2, 0)]:
            region.insert_if_absent(c)
        region.remove((0, 0))
        assert list(region) == [(2, 0), (1, 0)]
        assert not region.contains((0, 0))
        region.remove((1, 0))
        assert list(region) == [(2, 0)]

    def test_remove_last_member(self) -> None:
        region = BoundaryRegion()
        region.insert_if_absent((4, 4))
        region.remove((4, 4))
        assert region.is_empty()

    def test_remove_non_member_is_a_contract_failure(self) -> None:
        region = BoundaryRegion()
        region.insert_if_absent((0, 0))
        with pytest.raises(ContractError):
            region.remove((5, 5))
        assert len(region) == 1

    def test_discard_reports_membership(self) -> None:
        region = BoundaryRegion()
        region.insert_if_absent((3, 3))
        assert region.discard((0, 0)) is False
        assert region.discard((3, 3)) is True
        assert region.is_empty()

    def test_snapshot_is_an_immutable_copy(self) -> None:
        region = BoundaryRegion()
        region.insert_if_absent((1, 2))
        region.insert_if_absent((3, 4))
        snap = region.snapshot()
        assert snap.tolist() == [[1, 2], [3, 4]]
        with pytest.raises(ValueError):
            snap[0, 0] = 9
        region.remove((1, 2))
        assert snap.tolist() == [[1, 2], [3, 4]]

    def test_to_mask_marks_members(self) -> None:
        region = BoundaryRegion()
        region.insert_if_absent((0, 1))
        region.insert_if_absent((2, 0))
        mask = region.to_mask(3, 2)
        assert mask.dtype == np.uint8
        assert mask.tolist() == [[0, 0, 255], [255, 0, 0]]

    def test_matches_a_plain_set_under_random_churn(self) -> None:
        rng = random.Random(0)
        region = BoundaryRegion()
        reference = set()
        for _ in range(2000):
            c = (rng.randrange(12), rng.randrange(12))
            if rng.random() < 0.6:
                assert region.insert_if_absent(c) is (c not in reference)
                reference.add(c)
            elif c in reference:
                region.remove(c)
                reference.discard(c)
            assert len(region) == len(reference)
        assert set(region) == reference
        assert sorted(map(tuple, region.snapshot().tolist())) == sorted(reference)
