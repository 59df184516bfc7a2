"""Meeting session state holder: user intents in, derived view state out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from everest_meter.altitude import equivalent_altitude, in_dead_zone
from everest_meter.clock import ElapsedClock
from everest_meter.cost import hourly_burn, live_cost
from everest_meter.notes import Note, NoteLog
from everest_meter.oxygen import OxygenReading, compute_oxygen
from everest_meter.runtime_logging import append_runtime_event
from everest_meter.schema import EDITABLE_FIELDS, SessionParameters, coerce_field


@dataclass(frozen=True)
class MeetingSnapshot:
    elapsed_seconds: float
    running: bool
    onsite_people: int
    remote_people: int
    participants: int
    oxygen: OxygenReading
    equivalent_altitude_m: float
    live_cost: float
    hourly_cost_per_person: float
    hourly_burn: float
    currency_code: str
    notes: tuple[Note, ...]

    @property
    def oxygen_percent(self) -> float:
        return self.oxygen.percent

    @property
    def consumed_liters(self) -> float:
        return self.oxygen.consumed_liters

    @property
    def room_volume_m3(self) -> float:
        return self.oxygen.room_volume_m3

    @property
    def in_dead_zone(self) -> bool:
        return in_dead_zone(self.equivalent_altitude_m)

    @property
    def toggle_label(self) -> str:
        if self.running:
            return "Pause"
        return "Resume" if self.elapsed_seconds > 0 else "Start"

    def to_dict(self) -> dict[str, Any]:
        return {
            "elapsed_seconds": self.elapsed_seconds,
            "running": self.running,
            "onsite_people": self.onsite_people,
            "remote_people": self.remote_people,
            "participants": self.participants,
            "oxygen_fraction": self.oxygen.fraction,
            "oxygen_percent": self.oxygen.percent,
            "consumed_liters": self.oxygen.consumed_liters,
            "room_volume_m3": self.oxygen.room_volume_m3,
            "equivalent_altitude_m": self.equivalent_altitude_m,
            "in_dead_zone": self.in_dead_zone,
            "live_cost": self.live_cost,
            "hourly_cost_per_person": self.hourly_cost_per_person,
            "hourly_burn": self.hourly_burn,
            "currency_code": self.currency_code,
            "notes": [
                {"id": n.id, "timestamp_seconds": n.timestamp_seconds, "topic": n.topic, "text": n.text}
                for n in self.notes
            ],
        }


class MeetingSession:
    """Single-writer owner of parameters, clock and notes for one meter instance.

    Setters coerce raw input before storing it, so the models downstream only
    ever see clamped values. Derived values are recomputed on every
    ``snapshot()`` call and never cached.
    """

    def __init__(
        self,
        parameters: SessionParameters | None = None,
        clock: ElapsedClock | None = None,
        notes: NoteLog | None = None,
    ) -> None:
        self.parameters = parameters if parameters is not None else SessionParameters()
        self.clock = clock if clock is not None else ElapsedClock()
        self.notes = notes if notes is not None else NoteLog()

    # Parameter intents.

    def _set(self, key: str, value):
        stored, warning = coerce_field(key, value)
        if warning:
            append_runtime_event(
                level="WARNING",
                event="parameter_coerced",
                message=warning,
                context={"field": key, "raw_value": value, "stored_value": stored},
            )
        setattr(self.parameters, key, stored)
        return stored

    def set_onsite_people(self, n) -> int:
        return self._set("onsite_people", n)

    def set_remote_people(self, n) -> int:
        return self._set("remote_people", n)

    def set_room_area(self, m2) -> float:
        return self._set("room_area_m2", m2)

    def set_o2_consumption_rate(self, lpm) -> float:
        return self._set("o2_consumption_lpm", lpm)

    def set_hourly_cost_per_person(self, amount) -> float:
        return self._set("hourly_cost_per_person", amount)

    def set_currency(self, code) -> str:
        return self._set("currency_code", code)

    def apply_parameters(self, values: dict) -> list[str]:
        """Route a mapping of field edits through the setters; return changed keys.

        Keys outside the editable fields (the fixed ceiling height included)
        are ignored.
        """
        changed: list[str] = []
        for key in EDITABLE_FIELDS:
            if key not in values:
                continue
            before = getattr(self.parameters, key)
            if self._set(key, values[key]) != before:
                changed.append(key)
        return changed

    # Clock intents.

    @property
    def tick_interval(self) -> float | None:
        return self.clock.tick_interval

    def start(self) -> None:
        if self.clock.start():
            append_runtime_event(
                level="INFO",
                event="clock_started",
                message="Meeting clock started.",
                context={"elapsed_seconds": self.clock.elapsed_seconds},
            )

    def pause(self) -> None:
        if self.clock.pause():
            append_runtime_event(
                level="INFO",
                event="clock_paused",
                message="Meeting clock paused.",
                context={"elapsed_seconds": self.clock.elapsed_seconds},
            )

    def toggle_running(self) -> bool:
        if self.clock.running:
            self.pause()
        else:
            self.start()
        return self.clock.running

    def reset(self) -> None:
        elapsed = self.clock.elapsed_seconds
        self.clock.reset()
        append_runtime_event(
            level="INFO",
            event="clock_reset",
            message="Meeting clock reset.",
            context={"elapsed_seconds_before": elapsed},
        )

    def tick(self) -> bool:
        return self.clock.tick()

    # Note intents.

    def add_note(self, topic: str | None, text: str | None) -> Note | None:
        note = self.notes.add_note(topic, text, self.clock.elapsed_seconds)
        if note is not None:
            append_runtime_event(
                level="INFO",
                event="note_added",
                message=f"Note added: {note.topic}",
                context={"note_id": note.id, "timestamp_seconds": note.timestamp_seconds},
            )
        return note

    def clear_notes(self) -> int:
        removed = self.notes.clear_all()
        append_runtime_event(
            level="INFO",
            event="notes_cleared",
            message=f"Cleared {removed} note(s).",
            context={"removed": removed},
        )
        return removed

    # Derived view state.

    def snapshot(self) -> MeetingSnapshot:
        p = self.parameters
        elapsed = self.clock.elapsed_seconds
        participants = p.total_participants
        oxygen = compute_oxygen(
            elapsed_seconds=elapsed,
            onsite_people=p.onsite_people,
            room_area_m2=p.room_area_m2,
            ceiling_height_m=p.ceiling_height_m,
            o2_consumption_lpm=p.o2_consumption_lpm,
        )
        return MeetingSnapshot(
            elapsed_seconds=elapsed,
            running=self.clock.running,
            onsite_people=p.onsite_people,
            remote_people=p.remote_people,
            participants=participants,
            oxygen=oxygen,
            equivalent_altitude_m=equivalent_altitude(oxygen.fraction),
            live_cost=live_cost(elapsed, participants, p.hourly_cost_per_person),
            hourly_cost_per_person=p.hourly_cost_per_person,
            hourly_burn=hourly_burn(participants, p.hourly_cost_per_person),
            currency_code=p.currency_code,
            notes=self.notes.notes,
        )
