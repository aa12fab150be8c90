# colour_grow/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, error classes and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

Coord = Tuple[int, int]  # (x, y)
Colour = Tuple[int, ...]  # 3 (RGB) or 4 (RGBA) channels, 0..255
RGBTuple = Tuple[int, int, int]

U8Image = NDArray[np.uint8]  # (H, W, C) or (N, C)
U8Mask = NDArray[np.uint8]  # (H, W)
BoolMask = NDArray[np.bool_]  # (H, W)

# Errors


class ContractError(RuntimeError):
    """A broken canvas or boundary-region invariant. Not recoverable."""


class OutOfBoundsError(IndexError):
    """Coordinate outside the canvas."""


class ConfigError(ValueError):
    """Invalid or missing configuration. The message names the field."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class QueueExhausted(LookupError):
    """Pop from an empty colour queue."""


# Value objects


@dataclass(frozen=True)
class Seed:
    """Seed position with an optional colour (None = take from the queue)."""

    coord: Coord
    colour: Optional[Colour] = None


@dataclass(frozen=True)
class Placement:
    """One committed placement."""

    coord: Coord
    colour: Colour
    score: float  # 0.0 for seeds
    index: int  # 0-based order of placement, seeds included


# Small helpers


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def coerce_to_colour(
    value: Union[str, Sequence[int], NDArray[np.generic]], channels: int
) -> Colour:
    """
    Coerce a hex string, sequence or array row to a Colour of `channels` length.

    A 3-channel value widened to 4 channels gets an opaque alpha (255).
    """
    if isinstance(value, str):
        rgb: Tuple[int, ...] = hex_to_rgb(value)
    elif isinstance(value, np.ndarray):
        rgb = tuple(int(v) for v in value.reshape(-1).tolist())
    else:
        rgb = tuple(int(v) for v in value)
    if len(rgb) == 3 and channels == 4:
        rgb = rgb + (255,)
    if len(rgb) != channels:
        raise ValueError(f"expected {channels} channels, got {len(rgb)}")
    if any(v < 0 or v > 255 for v in rgb):
        raise ValueError(f"channel values must be in 0..255, got {rgb}")
    return rgb


def clamp_coord(coord: Sequence[int], width: int, height: int) -> Coord:
    """Clamp an (x, y) pair into [0, width) x [0, height)."""
    x = min(max(int(coord[0]), 0), width - 1)
    y = min(max(int(coord[1]), 0), height - 1)
    return (x, y)


__all__ = [
    # aliases / types
    "Coord",
    "Colour",
    "RGBTuple",
    "U8Image",
    "U8Mask",
    "BoolMask",
    # errors
    "ContractError",
    "OutOfBoundsError",
    "ConfigError",
    "QueueExhausted",
    # value objects
    "Seed",
    "Placement",
    # helpers
    "hex_to_rgb",
    "coerce_to_colour",
    "clamp_coord",
]
