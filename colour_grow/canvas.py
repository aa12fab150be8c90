# colour_grow/canvas.py
from __future__ import annotations

"""
Fixed-size pixel grid where every cell is coloured at most once.

Storage is a uint8 (H, W, C) pixel array plus a bool (H, W) painted mask.
Coordinates are (x, y); arrays are indexed [y, x].
"""

from typing import Iterator, Optional

import numpy as np

from .constants import NEIGHBOUR_OFFSETS
from .core_types import (
    BoolMask,
    Colour,
    ContractError,
    Coord,
    OutOfBoundsError,
    U8Image,
    coerce_to_colour,
)


class Canvas:
    def __init__(self, width: int, height: int, channels: int = 3):
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        if channels not in (3, 4):
            raise ValueError(f"channels must be 3 or 4, got {channels}")
        self.width = int(width)
        self.height = int(height)
        self.channels = int(channels)
        self._pixels = np.zeros((self.height, self.width, self.channels), dtype=np.uint8)
        self._painted = np.zeros((self.height, self.width), dtype=bool)
        self._coloured = 0
        self._frozen = False

    # Queries

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def coloured_count(self) -> int:
        return self._coloured

    @property
    def is_full(self) -> bool:
        return self._coloured == self.size

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def pixels(self) -> U8Image:
        """Read-only view of the (H, W, C) pixel array."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    @property
    def painted(self) -> BoolMask:
        """Read-only view of the (H, W) painted mask."""
        view = self._painted.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, coord: Coord) -> None:
        if not self.in_bounds(coord):
            raise OutOfBoundsError(
                f"{coord} outside canvas {self.width}x{self.height}"
            )

    def is_coloured(self, coord: Coord) -> bool:
        self._check(coord)
        return bool(self._painted[coord[1], coord[0]])

    def get(self, coord: Coord) -> Optional[Colour]:
        """Colour at coord, or None while uncoloured."""
        self._check(coord)
        x, y = coord
        if not self._painted[y, x]:
            return None
        return tuple(int(v) for v in self._pixels[y, x].tolist())

    def neighbours(self, coord: Coord) -> Iterator[Coord]:
        """Yield the in-bounds 8-neighbours of coord."""
        x, y = coord
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield (nx, ny)

    def coloured_neighbours(self, coord: Coord) -> Iterator[Colour]:
        """Yield the colours of coord's coloured 8-neighbours."""
        for n in self.neighbours(coord):
            if self._painted[n[1], n[0]]:
                yield tuple(int(v) for v in self._pixels[n[1], n[0]].tolist())

    # Mutation

    def set(self, coord: Coord, colour: Colour) -> None:
        """Colour an uncoloured cell. Re-colouring is a contract failure."""
        self._check(coord)
        if self._frozen:
            raise ContractError("canvas is frozen")
        x, y = coord
        if self._painted[y, x]:
            raise ContractError(f"cell {coord} is already coloured")
        try:
            value = coerce_to_colour(colour, self.channels)
        except ValueError as e:
            raise ContractError(f"bad colour for {coord}: {e}") from e
        self._pixels[y, x] = value
        self._painted[y, x] = True
        self._coloured += 1

    def freeze(self) -> None:
        """Make the canvas read-only for downstream snapshotting."""
        self._frozen = True
        self._pixels.flags.writeable = False
        self._painted.flags.writeable = False

    # Rendering

    def to_rgba(self) -> U8Image:
        """Copy as uint8 (H, W, 4); uncoloured cells are (0, 0, 0, 0)."""
        out = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        out[..., : self.channels] = self._pixels
        if self.channels == 3:
            out[..., 3] = np.where(self._painted, 255, 0).astype(np.uint8)
        out[~self._painted] = 0
        return out

    def __repr__(self) -> str:
        return (
            f"Canvas({self.width}x{self.height}, channels={self.channels}, "
            f"coloured={self._coloured})"
        )


__all__ = ["Canvas"]
