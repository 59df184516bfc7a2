"""Input guidance metadata and advisory range checks."""

from __future__ import annotations

from typing import Any


INPUT_GUIDANCE: dict[str, dict[str, Any]] = {
    "onsite_people": {"min": 0, "max": 40, "note": "Only people in the room consume its oxygen."},
    "remote_people": {"min": 0, "max": 200, "note": "Remote attendees add cost but no oxygen load."},
    "room_area_m2": {"min": 5.0, "max": 500.0, "note": "Floor area of the meeting room; ceiling height is fixed at 3 m."},
    "o2_consumption_lpm": {"min": 0.1, "max": 2.0, "note": "About 0.25 to 0.5 L/min at rest, more when talking or moving."},
    "hourly_cost_per_person": {"min": 0.0, "max": 1000.0, "note": "Fully loaded hourly cost of one attendee."},
}


def _fmt(v: float) -> str:
    if abs(v - round(v)) < 1e-9:
        return f"{int(round(v))}"
    return f"{v:.3f}".rstrip("0").rstrip(".")


def help_with_guidance(key: str, base_help: str) -> str:
    g = INPUT_GUIDANCE.get(key)
    if not g:
        return base_help
    return f"{base_help} Reasonable range: {_fmt(g['min'])} to {_fmt(g['max'])}. {g['note']}"


def advisory_warnings(inputs: dict) -> list[str]:
    warnings: list[str] = []
    for key, g in INPUT_GUIDANCE.items():
        if key not in inputs:
            continue
        try:
            v = float(inputs[key])
        except (TypeError, ValueError):
            continue
        if v < g["min"] or v > g["max"]:
            warnings.append(
                f"{key}={_fmt(v)} is outside the recommended range [{_fmt(g['min'])}, {_fmt(g['max'])}]."
            )
    return warnings
