from __future__ import annotations

from pathlib import Path

import pytest

import everest_meter.runtime_logging as runtime_logging
from everest_meter.clock import ElapsedClock
from everest_meter.schema import SessionParameters
from everest_meter.session import MeetingSession


class FakeTimeSource:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += float(seconds)


@pytest.fixture(autouse=True)
def isolated_runtime_log(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", Path(tmp_path) / "runtime_events.jsonl")
    return Path(tmp_path) / "runtime_events.jsonl"


@pytest.fixture
def base_parameters():
    return SessionParameters()


@pytest.fixture
def fake_time() -> FakeTimeSource:
    return FakeTimeSource()


@pytest.fixture
def session(base_parameters, fake_time) -> MeetingSession:
    return MeetingSession(parameters=base_parameters, clock=ElapsedClock(time_source=fake_time))
