# colour_grow/snapshot.py
from __future__ import annotations

"""
Periodic canvas snapshots written off the hot loop.

Snapshots are captured between placements (copies of the canvas and, when
enabled, the boundary mask) and written by a single background thread. If the
previous write is still running the new snapshot is skipped. Write failures
are logged and counted; they never reach the engine.
"""

import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .constants import DEFAULT_PRINT_INTERVAL, FRONTIER_SUFFIX
from .core_types import Placement, U8Image, U8Mask
from .engine import GrowthEngine
from .image_io import save_mask_png, save_rgba_png
from .utils import format_percentage, key_value_pairs_to_string, log, warn


@dataclass(frozen=True)
class Snapshot:
    rgba: U8Image
    mask: Optional[U8Mask]
    coloured: int
    total: int


class SnapshotWriter:
    def __init__(
        self,
        output_dir: Path,
        filename: str,
        write_mask: bool = False,
        interval: float = DEFAULT_PRINT_INTERVAL,
        report: bool = True,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.output_dir = Path(output_dir)
        self.filename = filename
        self.write_mask = write_mask
        self.interval = float(interval)
        self.report = report
        self._clock = clock
        self._pool = ThreadPoolExecutor(max_workers=1)
        self._pending: Optional[Future] = None
        self._last_time = clock()
        self._last_count = 0
        self.written = 0
        self.failed = 0
        self.skipped = 0

    @property
    def image_path(self) -> Path:
        return self.output_dir / f"{self.filename}.png"

    @property
    def mask_path(self) -> Path:
        return self.output_dir / f"{self.filename}{FRONTIER_SUFFIX}.png"

    def capture(self, engine: GrowthEngine) -> Snapshot:
        """Copy the committed state. Call only between placements."""
        canvas = engine.canvas
        mask = (
            engine.frontier.to_mask(canvas.width, canvas.height)
            if self.write_mask
            else None
        )
        return Snapshot(
            rgba=canvas.to_rgba(),
            mask=mask,
            coloured=canvas.coloured_count,
            total=canvas.size,
        )

    def _write(self, snap: Snapshot) -> None:
        save_rgba_png(self.image_path, snap.rgba)
        if snap.mask is not None:
            save_mask_png(self.mask_path, snap.mask)

    def _on_done(self, fut: Future) -> None:
        exc = fut.exception()
        if exc is None:
            self.written += 1
            return
        self.failed += 1
        warn(f"snapshot write failed: {exc}")

    def _report_rate(self, snap: Snapshot) -> None:
        now = self._clock()
        elapsed = now - self._last_time
        placed = snap.coloured - self._last_count
        rate = placed / elapsed if elapsed > 0 else 0.0
        self._last_time = now
        self._last_count = snap.coloured
        if self.report:
            share = snap.coloured / max(1, snap.total)
            log(
                key_value_pairs_to_string(
                    [
                        ("Painting rate", f"{rate:,.0f} pixels/sec"),
                        ("Coloured", snap.coloured),
                        ("Progress", format_percentage(share)),
                    ]
                )
            )

    def submit(self, engine: GrowthEngine) -> bool:
        """Queue a snapshot unless one is still being written."""
        if self._pending is not None and not self._pending.done():
            self.skipped += 1
            return False
        snap = self.capture(engine)
        self._report_rate(snap)
        fut = self._pool.submit(self._write, snap)
        fut.add_done_callback(self._on_done)
        self._pending = fut
        return True

    def on_step(self, engine: GrowthEngine, placement: Placement) -> None:
        """Step callback: snapshot when the interval has elapsed."""
        if self._clock() - self._last_time >= self.interval:
            self.submit(engine)

    def finish(self, engine: GrowthEngine) -> bool:
        """Write the final snapshot and wait for it. Returns True on success."""
        if self._pending is not None:
            self._pending.exception()  # wait; failures already reported
        snap = self.capture(engine)
        self._report_rate(snap)
        fut = self._pool.submit(self._write, snap)
        fut.add_done_callback(self._on_done)
        self._pending = None
        # Callbacks run on the writer thread; joining it settles the counters.
        self._pool.shutdown(wait=True)
        return fut.exception() is None

    def close(self) -> None:
        self._pool.shutdown(wait=True)


__all__ = ["Snapshot", "SnapshotWriter"]
