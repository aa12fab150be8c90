# colour_grow/config.py
from __future__ import annotations

"""
Run configuration: loading (JSON or YAML) and validation.

Exports:
  GrowConfig, PaletteSpec, OutputSpec
  read_config_file(path) -> dict
  config_from_mapping(data, require_file_fields=False) -> GrowConfig
  load_config(path) -> GrowConfig

Every validation failure raises ConfigError naming the offending field, before
any placement happens.

Schema (all keys optional unless loaded from a file, where size and seeds are
required):
  size: {width, height}
  seeds: [{position: [x, y], colour: "#rrggbb" | [r, g, b]}, ...]
  one_indexed: bool          # seed positions given 1-based
  palette: {bit_depth, colour_space, group_by_channel, shuffle, alpha, locked_channels}
  output: {directory, filename, mask}
  print_interval: seconds
  rng_seed: int | null
  workers: int
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .constants import (
    COLOUR_SPACES,
    DEFAULT_BIT_DEPTH,
    DEFAULT_COLOUR_SPACE,
    DEFAULT_FILENAME,
    DEFAULT_GROUP_BY_CHANNEL,
    DEFAULT_HEIGHT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PRINT_INTERVAL,
    DEFAULT_WIDTH,
)
from .core_types import ConfigError, Seed, clamp_coord, coerce_to_colour
from .utils import warn


@dataclass(frozen=True)
class PaletteSpec:
    bit_depth: int = DEFAULT_BIT_DEPTH
    colour_space: str = DEFAULT_COLOUR_SPACE
    group_by_channel: int = DEFAULT_GROUP_BY_CHANNEL
    shuffle: bool = True
    alpha: bool = False
    # Accepted and validated; placement never reads them.
    locked_channels: Tuple[bool, bool, bool] = (False, False, False)


@dataclass(frozen=True)
class OutputSpec:
    directory: Path = Path(DEFAULT_OUTPUT_DIR)
    filename: str = DEFAULT_FILENAME
    mask: bool = False


@dataclass(frozen=True)
class GrowConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    seeds: Tuple[Seed, ...] = ()
    palette: PaletteSpec = field(default_factory=PaletteSpec)
    output: OutputSpec = field(default_factory=OutputSpec)
    print_interval: float = DEFAULT_PRINT_INTERVAL
    rng_seed: Optional[int] = None
    workers: int = 1

    @property
    def channels(self) -> int:
        return 4 if self.palette.alpha else 3


# Field readers


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(key, f"expected a mapping, got {type(value).__name__}")
    return value


def _int(value: Any, name: str, minimum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(name, f"expected an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise ConfigError(name, f"must be >= {minimum}, got {value}")
    return int(value)


def _float(value: Any, name: str, minimum: float = 0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(name, f"expected a number, got {value!r}")
    if value < minimum:
        raise ConfigError(name, f"must be >= {minimum}, got {value}")
    return float(value)


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(name, f"expected true/false, got {value!r}")
    return value


# Sections


def _read_size(data: Mapping[str, Any], required: bool) -> Tuple[int, int]:
    if "size" not in data:
        if required:
            raise ConfigError("size", "missing")
        return DEFAULT_WIDTH, DEFAULT_HEIGHT
    size = _section(data, "size")
    for key in ("width", "height"):
        if key not in size:
            raise ConfigError(f"size.{key}", "missing")
    width = _int(size["width"], "size.width", minimum=1)
    height = _int(size["height"], "size.height", minimum=1)
    return width, height


def _read_seeds(
    data: Mapping[str, Any], width: int, height: int, channels: int, required: bool
) -> Tuple[Seed, ...]:
    if "seeds" not in data:
        if required:
            raise ConfigError("seeds", "missing")
        return (Seed((width // 2, height // 2)),)
    raw = data["seeds"]
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError("seeds", f"expected a list, got {type(raw).__name__}")
    one_indexed = _bool(data.get("one_indexed", False), "one_indexed")

    seeds: List[Seed] = []
    seen: Dict[Tuple[int, int], int] = {}
    for i, entry in enumerate(raw):
        name = f"seeds[{i}]"
        if not isinstance(entry, Mapping):
            raise ConfigError(name, "expected a mapping with 'position'")
        pos = entry.get("position")
        if (
            not isinstance(pos, (list, tuple))
            or len(pos) != 2
            or any(isinstance(v, bool) or not isinstance(v, int) for v in pos)
        ):
            raise ConfigError(f"{name}.position", f"expected [x, y] integers, got {pos!r}")
        x, y = int(pos[0]), int(pos[1])
        if one_indexed:
            x, y = x - 1, y - 1
        coord = clamp_coord((x, y), width, height)
        if coord in seen:
            raise ConfigError(
                f"{name}.position", f"{coord} repeats seeds[{seen[coord]}] after clamping"
            )
        seen[coord] = i

        colour = None
        if entry.get("colour") is not None:
            try:
                colour = coerce_to_colour(entry["colour"], channels)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"{name}.colour", str(e)) from None
        seeds.append(Seed(coord, colour))
    return tuple(seeds)


def _read_palette(data: Mapping[str, Any]) -> PaletteSpec:
    pal = _section(data, "palette")
    defaults = PaletteSpec()
    bit_depth = _int(pal.get("bit_depth", defaults.bit_depth), "palette.bit_depth", minimum=1)
    colour_space = pal.get("colour_space", defaults.colour_space)
    if colour_space not in COLOUR_SPACES:
        raise ConfigError(
            "palette.colour_space", f"expected one of {COLOUR_SPACES}, got {colour_space!r}"
        )
    group = _int(
        pal.get("group_by_channel", defaults.group_by_channel),
        "palette.group_by_channel",
        minimum=1,
    )
    if group > 3:
        raise ConfigError("palette.group_by_channel", f"must be 1, 2 or 3, got {group}")

    locked_raw = pal.get("locked_channels", list(defaults.locked_channels))
    if not isinstance(locked_raw, (list, tuple)) or len(locked_raw) != 3:
        raise ConfigError("palette.locked_channels", "expected three true/false values")
    locked = tuple(
        _bool(v, f"palette.locked_channels[{i}]") for i, v in enumerate(locked_raw)
    )
    if any(locked):
        warn("palette.locked_channels is accepted but not used by placement")

    return PaletteSpec(
        bit_depth=bit_depth,
        colour_space=str(colour_space),
        group_by_channel=group,
        shuffle=_bool(pal.get("shuffle", defaults.shuffle), "palette.shuffle"),
        alpha=_bool(pal.get("alpha", defaults.alpha), "palette.alpha"),
        locked_channels=locked,  # type: ignore[arg-type]
    )


def _read_output(data: Mapping[str, Any]) -> OutputSpec:
    out = _section(data, "output")
    defaults = OutputSpec()
    directory = out.get("directory", str(defaults.directory))
    filename = out.get("filename", defaults.filename)
    if not isinstance(directory, str) or not directory:
        raise ConfigError("output.directory", f"expected a path, got {directory!r}")
    if not isinstance(filename, str) or not filename or "/" in filename:
        raise ConfigError("output.filename", f"expected a bare file name, got {filename!r}")
    return OutputSpec(
        directory=Path(directory),
        filename=filename,
        mask=_bool(out.get("mask", defaults.mask), "output.mask"),
    )


# Entry points


def config_from_mapping(
    data: Mapping[str, Any], require_file_fields: bool = False
) -> GrowConfig:
    """Validate a parsed mapping into a GrowConfig."""
    if not isinstance(data, Mapping):
        raise ConfigError("<root>", f"expected a mapping, got {type(data).__name__}")
    width, height = _read_size(data, require_file_fields)
    palette = _read_palette(data)
    channels = 4 if palette.alpha else 3
    seeds = _read_seeds(data, width, height, channels, require_file_fields)

    rng_seed = data.get("rng_seed")
    if rng_seed is not None:
        rng_seed = _int(rng_seed, "rng_seed", minimum=0)

    return GrowConfig(
        width=width,
        height=height,
        seeds=seeds,
        palette=palette,
        output=_read_output(data),
        print_interval=_float(
            data.get("print_interval", DEFAULT_PRINT_INTERVAL), "print_interval"
        ),
        rng_seed=rng_seed,
        workers=_int(data.get("workers", 1), "workers", minimum=1),
    )


def read_config_file(path: Path) -> Dict[str, Any]:
    """Parse a .json, .yaml or .yml file into a dict."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(str(path), f"cannot read config: {e}") from None
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(str(path), f"cannot parse config: {e}") from None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("<root>", f"expected a mapping, got {type(data).__name__}")
    return data


def load_config(path: Path) -> GrowConfig:
    return config_from_mapping(read_config_file(path), require_file_fields=True)


__all__ = [
    "PaletteSpec",
    "OutputSpec",
    "GrowConfig",
    "config_from_mapping",
    "read_config_file",
    "load_config",
]
