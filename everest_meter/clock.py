"""Pausable elapsed-time clock driven by wall-clock samples."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


MIN_SAMPLE_INTERVAL_S = 0.05
# Scheduler period; kept below MIN_SAMPLE_INTERVAL_S.
TICK_INTERVAL_S = 0.04


@dataclass(frozen=True)
class ClockState:
    running: bool
    elapsed_seconds: float


class ElapsedClock:
    """Stopwatch that accumulates measured deltas between accepted samples.

    The host calls ``tick()`` on a repeating schedule while the clock runs. Each
    accepted sample adds the real time since the previous accepted sample, so
    throttled or late callbacks never lose or invent time.
    """

    def __init__(
        self,
        time_source: Callable[[], float] = time.monotonic,
        min_sample_interval: float = MIN_SAMPLE_INTERVAL_S,
        tick_interval: float = TICK_INTERVAL_S,
    ) -> None:
        self._time_source = time_source
        self._min_sample_interval = max(0.0, float(min_sample_interval))
        self._tick_interval = max(0.01, float(tick_interval))
        self._running = False
        self._elapsed = 0.0
        self._last_sample: float | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed

    @property
    def tick_interval(self) -> float | None:
        """Re-arm interval for the host scheduler; None disarms it."""
        return self._tick_interval if self._running else None

    def state(self) -> ClockState:
        return ClockState(running=self._running, elapsed_seconds=self._elapsed)

    def start(self) -> bool:
        if self._running:
            return False
        self._running = True
        # Next tick records the baseline; the paused gap is never counted.
        self._last_sample = None
        return True

    def pause(self) -> bool:
        was_running = self._running
        self._running = False
        self._last_sample = None
        return was_running

    def reset(self) -> None:
        self._running = False
        self._elapsed = 0.0
        self._last_sample = None

    def toggle(self) -> bool:
        if self._running:
            self.pause()
        else:
            self.start()
        return self._running

    def tick(self) -> bool:
        """Take one sample; return True when elapsed time advanced."""
        if not self._running:
            return False
        now = float(self._time_source())
        if self._last_sample is None:
            self._last_sample = now
            return False
        delta = now - self._last_sample
        if delta < self._min_sample_interval or delta <= 0:
            return False
        self._elapsed += delta
        self._last_sample = now
        return True
