# colour_grow/image_io.py
from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

"""
Raster writers: RGBA canvas PNGs and single-channel boundary masks.
"""


def _png_path(path: Path) -> Path:
    path = Path(path)
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def save_rgba_png(path: Path, rgba: np.ndarray) -> Path:
    """Write a uint8 (H,W,4) array as an RGBA PNG. Returns the written path."""
    if rgba.dtype != np.uint8 or rgba.ndim != 3 or rgba.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) image")
    path = _png_path(path)
    Image.fromarray(np.ascontiguousarray(rgba)).save(path, format="PNG")
    return path


def save_mask_png(path: Path, mask: np.ndarray) -> Path:
    """Write a uint8 (H,W) mask as an 8-bit greyscale PNG."""
    if mask.dtype != np.uint8 or mask.ndim != 2:
        raise TypeError("expected uint8 (H,W) mask")
    path = _png_path(path)
    Image.fromarray(np.ascontiguousarray(mask)).save(path, format="PNG")
    return path


__all__ = ["save_rgba_png", "save_mask_png"]
