"""Default session parameters and page state."""

from __future__ import annotations


DEFAULTS = {
    "onsite_people": 4,
    "remote_people": 2,
    "room_area_m2": 30.0,
    "ceiling_height_m": 3.0,
    "hourly_cost_per_person": 80.0,
    "currency_code": "CHF",
    "o2_consumption_lpm": 0.6,
}

UI_DEFAULTS = {
    "note_topic": "",
    "note_text": "",
    "show_notes_table": False,
    "timeline_horizon_minutes": 60,
    "runtime_log_limit": 50,
}

FALLBACK_CURRENCY = "CHF"
UNTITLED_TOPIC = "(untitled)"
