from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from lapwatch.core.clock import NS_PER_MS, SequenceClock
from lapwatch.core.errors import InvalidStateError, StopwatchError
from lapwatch.core.registry import StopwatchRegistry
from lapwatch.core.stopwatch import StopwatchState


def test_lap_and_stop_require_start(registry):
    sw = registry.create("fresh")
    with pytest.raises(InvalidStateError):
        sw.lap()
    with pytest.raises(InvalidStateError):
        sw.stop()
    assert sw.lap_times() == ()


def test_double_start_fails(registry):
    sw = registry.create("twice")
    sw.start()
    with pytest.raises(InvalidStateError, match="already running"):
        sw.start()
    assert sw.running


def test_lap_sequence_matches_boundaries():
    t0, t1, t2, t3 = 0, 5 * NS_PER_MS, 12 * NS_PER_MS, 30 * NS_PER_MS
    registry = StopwatchRegistry(SequenceClock([t0, t1, t2, t3]))
    sw = registry.create("seq")
    sw.start()
    assert sw.lap() == 5.0
    assert sw.lap() == 7.0
    assert sw.stop() == 18.0
    assert sw.lap_times() == (5.0, 7.0, 18.0)
    assert sw.state is StopwatchState.IDLE


def test_stop_then_lap_fails_and_keeps_laps(registry, clock):
    sw = registry.create("stopped")
    sw.start()
    clock.advance(ms=3)
    sw.stop()
    with pytest.raises(InvalidStateError, match="not running"):
        sw.lap()
    assert sw.lap_times() == (3.0,)


def test_reset_clears_and_allows_restart(registry, clock):
    sw = registry.create("reset")
    sw.start()
    clock.advance(ms=1)
    sw.lap()
    sw.reset()
    assert sw.lap_times() == ()
    assert not sw.running
    sw.start()
    clock.advance(ms=2)
    sw.stop()
    assert sw.lap_times() == (2.0,)


def test_reset_on_idle_never_fails(registry):
    sw = registry.create("idle")
    sw.reset()
    sw.reset()
    assert sw.state is StopwatchState.IDLE


def test_stop_then_start_begins_new_session(registry, clock):
    sw = registry.create("sessions")
    sw.start()
    clock.advance(ms=4)
    sw.stop()
    clock.advance(ms=100)
    sw.start()
    clock.advance(ms=1)
    sw.lap()
    assert sw.lap_times() == (4.0, 1.0)


def test_snapshot_is_independent(registry, clock):
    sw = registry.create("snap")
    sw.start()
    clock.advance(ms=1)
    sw.lap()
    snapshot = sw.lap_times()
    clock.advance(ms=1)
    sw.lap()
    sw.reset()
    assert snapshot == (1.0,)
    assert isinstance(snapshot, tuple)


def test_backwards_clock_records_zero_lap():
    registry = StopwatchRegistry(SequenceClock([10 * NS_PER_MS, 4 * NS_PER_MS, 12 * NS_PER_MS]))
    sw = registry.create("skew")
    sw.start()
    assert sw.lap() == 0.0
    assert sw.lap() == 2.0


def test_elapsed_includes_open_segment(registry, clock):
    sw = registry.create("elapsed")
    assert sw.elapsed_ms() == 0.0
    sw.start()
    clock.advance(ms=2)
    sw.lap()
    clock.advance(ms=3)
    assert sw.elapsed_ms() == 5.0
    sw.stop()
    clock.advance(ms=50)
    assert sw.elapsed_ms() == 5.0


def test_id_is_read_only(registry):
    sw = registry.create("ro")
    assert sw.id == "ro"
    with pytest.raises(AttributeError):
        sw.id = "other"


def test_errors_share_base_class(registry):
    sw = registry.create("base")
    with pytest.raises(StopwatchError):
        sw.stop()
    with pytest.raises(RuntimeError):
        sw.lap()


def test_snapshot_reads_one_consistent_view(registry, clock):
    sw = registry.create("view")
    sw.start()
    clock.advance(ms=2)
    sw.lap()
    clock.advance(ms=1)
    snap = sw.snapshot()
    assert snap.id == "view"
    assert snap.state is StopwatchState.RUNNING
    assert snap.laps == (2.0,)
    assert snap.elapsed_ms == 3.0
    sw.stop()
    assert snap.state is StopwatchState.RUNNING
    assert sw.snapshot().laps == (2.0, 1.0)
