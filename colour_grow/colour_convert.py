# colour_grow/colour_convert.py
from __future__ import annotations

"""
Colour conversions and distances.

Exports:
  hsv_to_rgb(hue_deg, sat, val)
  hsl_to_rgb(hue_deg, sat, light)
  unit_to_u8(values)
  squared_distance(a, b)
  squared_distance_vec(target, colours)
"""

from typing import Sequence

import numpy as np
from numpy.typing import NDArray


# Hue sectors


def _sector_rgb(
    sector: np.ndarray, c: np.ndarray, x: np.ndarray, zero: np.ndarray
) -> np.ndarray:
    """
    Pick (r, g, b) per hue sector 0..5 from chroma c and second component x.
    All inputs share one shape; returns float32 [..., 3].
    """
    r = np.choose(sector, [c, x, zero, zero, x, c])
    g = np.choose(sector, [x, c, c, x, zero, zero])
    b = np.choose(sector, [zero, zero, x, c, c, x])
    return np.stack([r, g, b], axis=-1).astype(np.float32, copy=False)


def hsv_to_rgb(hue_deg: np.ndarray, sat: np.ndarray, val: np.ndarray) -> np.ndarray:
    """
    HSV to RGB. Vectorised.
    Args:
      hue_deg: any real degrees (wrapped into [0, 360))
      sat, val: 0..1
    Returns:
      float32 array [..., 3] in 0..1
    """
    h = np.mod(np.asarray(hue_deg, dtype=np.float64), 360.0) / 60.0
    s = np.clip(np.asarray(sat, dtype=np.float64), 0.0, 1.0)
    v = np.clip(np.asarray(val, dtype=np.float64), 0.0, 1.0)
    h, s, v = np.broadcast_arrays(h, s, v)

    c = v * s
    x = c * (1.0 - np.abs(np.mod(h, 2.0) - 1.0))
    m = v - c
    sector = np.floor(h).astype(np.int64) % 6
    rgb = _sector_rgb(sector, c, x, np.zeros_like(c))
    return (rgb + m[..., None]).astype(np.float32, copy=False)


def hsl_to_rgb(hue_deg: np.ndarray, sat: np.ndarray, light: np.ndarray) -> np.ndarray:
    """
    HSL to RGB. Vectorised.
    Args:
      hue_deg: any real degrees (wrapped into [0, 360))
      sat, light: 0..1
    Returns:
      float32 array [..., 3] in 0..1
    """
    h = np.mod(np.asarray(hue_deg, dtype=np.float64), 360.0) / 60.0
    s = np.clip(np.asarray(sat, dtype=np.float64), 0.0, 1.0)
    l = np.clip(np.asarray(light, dtype=np.float64), 0.0, 1.0)
    h, s, l = np.broadcast_arrays(h, s, l)

    c = (1.0 - np.abs(2.0 * l - 1.0)) * s
    x = c * (1.0 - np.abs(np.mod(h, 2.0) - 1.0))
    m = l - 0.5 * c
    sector = np.floor(h).astype(np.int64) % 6
    rgb = _sector_rgb(sector, c, x, np.zeros_like(c))
    return (rgb + m[..., None]).astype(np.float32, copy=False)


def unit_to_u8(values: np.ndarray) -> NDArray[np.uint8]:
    """Map floats in 0..1 to uint8 0..255 with rounding."""
    scaled = np.rint(np.clip(values, 0.0, 1.0) * 255.0)
    return scaled.astype(np.uint8)


# Distances


def squared_distance(a: Sequence[int], b: Sequence[int]) -> int:
    """Sum of squared per-channel differences. Exact integer arithmetic."""
    if len(a) != len(b):
        raise ValueError(f"channel count mismatch: {len(a)} vs {len(b)}")
    return sum((int(p) - int(q)) ** 2 for p, q in zip(a, b))


def squared_distance_vec(target: Sequence[int], colours: np.ndarray) -> NDArray[np.int64]:
    """
    Row-wise squared distance of one colour against many.

    Args:
      target: C channels
      colours: uint8 or int array [..., C]
    Returns:
      int64 array [...]
    """
    t = np.asarray(target, dtype=np.int64)
    diff = np.asarray(colours, dtype=np.int64) - t
    return np.sum(diff * diff, axis=-1)


__all__ = [
    "hsv_to_rgb",
    "hsl_to_rgb",
    "unit_to_u8",
    "squared_distance",
    "squared_distance_vec",
]
