import numpy as np
from PIL import Image

from colour_grow.canvas import Canvas
from colour_grow.colour_queue import ColourQueue
from colour_grow.engine import GrowthEngine
from colour_grow.scoring import FirstTieBreaker
from colour_grow.snapshot import SnapshotWriter


def _engine(colours) -> GrowthEngine:
    engine = GrowthEngine(Canvas(4, 3), ColourQueue(colours), tie_breaker=FirstTieBreaker())
    engine.seed((0, 0), (255, 0, 0))
    return engine


def test_final_snapshot_is_written_as_rgba_png(tmp_path) -> None:
    engine = _engine([(0, 255, 0), (0, 0, 255)])
    writer = SnapshotWriter(tmp_path / "out", "pic", interval=3600.0, report=False)
    engine.run(on_step=writer.on_step)
    assert writer.finish(engine) is True
    assert writer.written == 1
    assert writer.failed == 0

    with Image.open(writer.image_path) as im:
        assert im.mode == "RGBA"
        assert im.size == (4, 3)
        arr = np.asarray(im)
    assert np.array_equal(arr, engine.canvas.to_rgba())
    assert tuple(arr[0, 0]) == (255, 0, 0, 255)
    assert arr[2, 3, 3] == 0


def test_mask_matches_boundary_region(tmp_path) -> None:
    engine = _engine([(0, 255, 0)])
    writer = SnapshotWriter(tmp_path, "pic", write_mask=True, interval=3600.0, report=False)
    engine.run()
    assert writer.finish(engine)
    assert writer.mask_path.name == "pic_frontier.png"

    with Image.open(writer.mask_path) as im:
        assert im.mode == "L"
        mask = np.asarray(im)
    expected = engine.frontier.to_mask(4, 3)
    assert np.array_equal(mask, expected)
    assert set(np.unique(mask).tolist()) == {0, 255}


def test_write_failure_is_reported_not_raised(tmp_path, capsys) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    engine = _engine([(0, 255, 0)])
    writer = SnapshotWriter(blocker / "out", "pic", interval=3600.0, report=False)
    engine.run()
    assert writer.finish(engine) is False
    assert writer.failed == 1
    assert writer.written == 0
    assert "[warn] snapshot write failed" in capsys.readouterr().out


def test_zero_interval_snapshots_during_growth(tmp_path, capsys) -> None:
    colours = [(i * 20, 0, 0) for i in range(11)]
    engine = _engine(colours)
    writer = SnapshotWriter(tmp_path, "pic", interval=0.0, report=True)
    engine.run(on_step=writer.on_step)
    assert writer.finish(engine)
    assert writer.written >= 2
    assert writer.written + writer.skipped == 12
    assert "Painting rate" in capsys.readouterr().out


def test_rate_uses_injected_clock(tmp_path, capsys) -> None:
    ticks = iter([0.0, 2.0])
    engine = _engine([(1, 1, 1)])
    writer = SnapshotWriter(
        tmp_path, "pic", interval=1.0, report=True, clock=lambda: next(ticks)
    )
    engine.run()
    writer.finish(engine)
    # Seed plus one placement over two seconds.
    assert "Painting rate: 1 pixels/sec" in capsys.readouterr().out
