from __future__ import annotations

import pytest

from everest_meter.clock import MIN_SAMPLE_INTERVAL_S, TICK_INTERVAL_S, ClockState, ElapsedClock


def _running_clock(fake_time) -> ElapsedClock:
    clock = ElapsedClock(time_source=fake_time)
    clock.start()
    clock.tick()
    return clock


def test_first_sample_after_start_only_sets_baseline(fake_time):
    clock = ElapsedClock(time_source=fake_time)
    clock.start()
    fake_time.advance(5.0)
    assert clock.tick() is False
    assert clock.elapsed_seconds == 0.0


def test_accepted_samples_add_measured_delta(fake_time):
    clock = _running_clock(fake_time)
    fake_time.advance(0.25)
    assert clock.tick() is True
    fake_time.advance(3.0)
    assert clock.tick() is True
    assert abs(clock.elapsed_seconds - 3.25) < 1e-9


def test_samples_closer_than_min_interval_are_deferred_not_lost(fake_time):
    clock = _running_clock(fake_time)
    fake_time.advance(0.02)
    assert clock.tick() is False
    fake_time.advance(0.04)
    assert clock.tick() is True
    assert abs(clock.elapsed_seconds - 0.06) < 1e-9


def test_pause_freezes_and_resume_skips_paused_gap(fake_time):
    clock = _running_clock(fake_time)
    fake_time.advance(10.0)
    clock.tick()
    clock.pause()
    fake_time.advance(600.0)
    assert clock.tick() is False
    assert clock.elapsed_seconds == 10.0

    clock.start()
    clock.tick()
    fake_time.advance(2.0)
    clock.tick()
    assert abs(clock.elapsed_seconds - 12.0) < 1e-9


def test_start_while_running_is_noop(fake_time):
    clock = _running_clock(fake_time)
    fake_time.advance(1.0)
    assert clock.start() is False
    assert clock.tick() is True
    assert abs(clock.elapsed_seconds - 1.0) < 1e-9


def test_time_source_going_backwards_never_decreases_elapsed(fake_time):
    clock = _running_clock(fake_time)
    fake_time.advance(1.0)
    clock.tick()
    fake_time.advance(-5.0)
    assert clock.tick() is False
    assert clock.elapsed_seconds == 1.0


def test_reset_zeroes_and_stops_from_any_state(fake_time):
    fresh = ElapsedClock(time_source=fake_time)
    fresh.reset()
    assert fresh.state() == ClockState(running=False, elapsed_seconds=0.0)

    clock = _running_clock(fake_time)
    fake_time.advance(42.0)
    clock.tick()
    clock.reset()
    assert clock.state() == ClockState(running=False, elapsed_seconds=0.0)
    fake_time.advance(5.0)
    assert clock.tick() is False
    assert clock.elapsed_seconds == 0.0


def test_tick_interval_arms_only_while_running(fake_time):
    clock = ElapsedClock(time_source=fake_time)
    assert clock.tick_interval is None
    assert clock.toggle() is True
    assert clock.tick_interval == TICK_INTERVAL_S
    assert clock.tick_interval < MIN_SAMPLE_INTERVAL_S
    assert clock.toggle() is False
    assert clock.tick_interval is None


@pytest.mark.parametrize("jitter", [-0.001, 0.0, 0.011])
def test_scheduled_runs_keep_accepted_samples_closer_than_a_tenth_of_a_second(fake_time, jitter):
    clock = ElapsedClock(time_source=fake_time)
    clock.start()
    clock.tick()
    steps = []
    for _ in range(40):
        fake_time.advance(clock.tick_interval + jitter)
        before = clock.elapsed_seconds
        if clock.tick():
            steps.append(clock.elapsed_seconds - before)
    assert len(steps) >= 20
    assert max(steps) < 0.1
    assert clock.elapsed_seconds == pytest.approx(40 * (TICK_INTERVAL_S + jitter), abs=0.1)
