"""Timestamped topic/note log, newest first."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Iterator

import pandas as pd

from everest_meter.defaults import UNTITLED_TOPIC
from everest_meter.formatting import fmt_time


@dataclass(frozen=True)
class Note:
    id: str
    timestamp_seconds: float
    topic: str
    text: str


class NoteLog:
    def __init__(self) -> None:
        self._notes: list[Note] = []

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(tuple(self._notes))

    @property
    def notes(self) -> tuple[Note, ...]:
        return tuple(self._notes)

    def add_note(self, topic: str | None, text: str | None, timestamp_seconds: float) -> Note | None:
        """Prepend a note stamped with the clock value; blank topic and text is a no-op."""
        t = str(topic or "").strip()
        n = str(text or "").strip()
        if not t and not n:
            return None
        note = Note(
            id=uuid.uuid4().hex,
            timestamp_seconds=max(0.0, float(timestamp_seconds)),
            topic=t or UNTITLED_TOPIC,
            text=n,
        )
        self._notes.insert(0, note)
        return note

    def clear_all(self) -> int:
        removed = len(self._notes)
        self._notes = []
        return removed


def notes_frame(notes) -> pd.DataFrame:
    rows = [{"At": fmt_time(n.timestamp_seconds), "Topic": n.topic, "Note": n.text} for n in notes]
    return pd.DataFrame(rows, columns=["At", "Topic", "Note"])
