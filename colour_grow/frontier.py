# colour_grow/frontier.py
from __future__ import annotations

"""
Boundary region: uncoloured cells with at least one coloured 8-neighbour.

Backed by a dense list plus a coord -> slot index so insert, membership and
remove are all O(1). Remove swaps the target with the last slot before
shrinking; order carries no meaning for any consumer.
"""

from typing import Dict, Iterator, List

import numpy as np

from .core_types import ContractError, Coord, U8Mask


class BoundaryRegion:
    def __init__(self) -> None:
        self._items: List[Coord] = []
        self._slot: Dict[Coord, int] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, coord: object) -> bool:
        return coord in self._slot

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._items)

    def contains(self, coord: Coord) -> bool:
        return coord in self._slot

    def is_empty(self) -> bool:
        return not self._items

    def insert_if_absent(self, coord: Coord) -> bool:
        """Add coord unless already present. Returns True if it was added."""
        if coord in self._slot:
            return False
        self._slot[coord] = len(self._items)
        self._items.append(coord)
        return True

    def remove(self, coord: Coord) -> None:
        """Remove a member. Removing a non-member is a contract failure."""
        idx = self._slot.pop(coord, None)
        if idx is None:
            raise ContractError(f"{coord} is not in the boundary region")
        last = self._items.pop()
        if idx < len(self._items):
            self._items[idx] = last
            self._slot[last] = idx

    def discard(self, coord: Coord) -> bool:
        """Remove coord if present. Returns True if it was a member."""
        if coord not in self._slot:
            return False
        self.remove(coord)
        return True

    def snapshot(self) -> np.ndarray:
        """Immutable int64 (N, 2) copy of the members as (x, y) rows."""
        if not self._items:
            arr = np.zeros((0, 2), dtype=np.int64)
        else:
            arr = np.array(self._items, dtype=np.int64)
        arr.flags.writeable = False
        return arr

    def to_mask(self, width: int, height: int) -> U8Mask:
        """uint8 (H, W) mask, 255 for members and 0 elsewhere."""
        mask = np.zeros((height, width), dtype=np.uint8)
        if self._items:
            pts = np.array(self._items, dtype=np.int64)
            mask[pts[:, 1], pts[:, 0]] = 255
        return mask


__all__ = ["BoundaryRegion"]
