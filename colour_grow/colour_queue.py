# colour_grow/colour_queue.py
from __future__ import annotations

"""
Colour queue and palette generation.

Exports:
  ColourQueue(colours)
    Read-once, front-to-back queue over a (N, C) uint8 array.
  generate_colours(bit_depth, colour_space, group_by_channel, shuffle, with_alpha, rng)
    -> uint8 [N, 3|4] exhaustive quantised colour cube.

Notes:
  - values_per_channel = 2**bit_depth; level i maps to round(255 * i / (levels - 1)),
    so bit_depth 8 enumerates every 8-bit value once and 0/255 are always present.
  - Each channel's level order is permuted independently; the optional final
    shuffle removes the remaining channel sub-grouping.
  - With shuffle off, group_by_channel (1..3) picks which output channel is
    driven by the outermost loop and therefore stays grouped.
  - For hsv/hsl the first output channel is read as hue in degrees,
    (v - 0.5) * 360, the other two as saturation and value/lightness.
"""

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .colour_convert import hsl_to_rgb, hsv_to_rgb, unit_to_u8
from .constants import COLOUR_SPACES, MAX_BIT_DEPTH
from .core_types import Colour, QueueExhausted, U8Image
from .utils import warn


class ColourQueue:
    def __init__(self, colours: Union[U8Image, Sequence[Sequence[int]]]):
        arr = np.asarray(colours)
        if arr.size == 0:
            channels = arr.shape[1] if arr.ndim == 2 else 3
            arr = np.zeros((0, channels), dtype=np.uint8)
        if arr.ndim != 2 or arr.shape[1] not in (3, 4):
            raise ValueError(f"expected (N, 3|4) colours, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            if np.any(arr < 0) or np.any(arr > 255):
                raise ValueError("colour channels must be in 0..255")
            arr = arr.astype(np.uint8)
        self._colours = arr
        self._cursor = 0

    @property
    def channels(self) -> int:
        return int(self._colours.shape[1])

    @property
    def consumed(self) -> int:
        return self._cursor

    @property
    def remaining(self) -> int:
        return int(self._colours.shape[0]) - self._cursor

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    def __len__(self) -> int:
        return int(self._colours.shape[0])

    def peek(self) -> Colour:
        if self.exhausted:
            raise QueueExhausted("colour queue is exhausted")
        return tuple(int(v) for v in self._colours[self._cursor].tolist())

    def pop(self) -> Colour:
        colour = self.peek()
        self._cursor += 1
        return colour


def _channel_order(group_by_channel: int) -> Tuple[int, int, int]:
    """Loop-channel index feeding each output channel."""
    g = int(group_by_channel)
    return ((2 + g) % 3, (3 + g) % 3, (4 + g) % 3)


def generate_colours(
    bit_depth: int = MAX_BIT_DEPTH,
    colour_space: str = "rgb",
    group_by_channel: int = 1,
    shuffle: bool = True,
    with_alpha: bool = False,
    rng: Optional[np.random.Generator] = None,
) -> U8Image:
    """
    Enumerate a quantised colour cube in loop order (outer, middle, inner).

    Returns:
      uint8 [levels**3, 3] (or 4 with an opaque alpha channel)
    """
    if bit_depth < 1:
        raise ValueError(f"bit_depth must be >= 1, got {bit_depth}")
    if bit_depth > MAX_BIT_DEPTH:
        warn(f"Limiting colour bit-depth to {MAX_BIT_DEPTH}.")
        bit_depth = MAX_BIT_DEPTH
    if colour_space not in COLOUR_SPACES:
        raise ValueError(f"colour_space must be one of {COLOUR_SPACES}")
    if group_by_channel not in (1, 2, 3):
        raise ValueError(f"group_by_channel must be 1, 2 or 3, got {group_by_channel}")
    if rng is None:
        rng = np.random.default_rng()

    levels = 2 ** int(bit_depth)
    unit = np.arange(levels, dtype=np.float64) / float(levels - 1)
    loop_values = [unit[rng.permutation(levels)] for _ in range(3)]
    order = list(_channel_order(group_by_channel))

    slab = levels * levels
    channels = 4 if with_alpha else 3
    out = np.empty((levels * slab, channels), dtype=np.uint8)
    middle = np.repeat(loop_values[1], levels)
    inner = np.tile(loop_values[2], levels)

    for i in range(levels):
        outer = np.full(slab, loop_values[0][i])
        picked = np.stack([outer, middle, inner], axis=-1)[:, order]
        if colour_space == "hsv":
            rgb = hsv_to_rgb((picked[:, 0] - 0.5) * 360.0, picked[:, 1], picked[:, 2])
        elif colour_space == "hsl":
            rgb = hsl_to_rgb((picked[:, 0] - 0.5) * 360.0, picked[:, 1], picked[:, 2])
        else:
            rgb = picked
        out[i * slab : (i + 1) * slab, :3] = unit_to_u8(rgb)

    if with_alpha:
        out[:, 3] = 255
    if shuffle:
        rng.shuffle(out, axis=0)
    return out


__all__ = ["ColourQueue", "generate_colours"]
