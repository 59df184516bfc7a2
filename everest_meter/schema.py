"""Session parameter model and field coercion rules."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Callable

from everest_meter.defaults import DEFAULTS, FALLBACK_CURRENCY


MIN_O2_CONSUMPTION_LPM = 0.1
EDITABLE_FIELDS = (
    "onsite_people",
    "remote_people",
    "room_area_m2",
    "hourly_cost_per_person",
    "currency_code",
    "o2_consumption_lpm",
)


@dataclass
class SessionParameters:
    onsite_people: int = DEFAULTS["onsite_people"]
    remote_people: int = DEFAULTS["remote_people"]
    room_area_m2: float = DEFAULTS["room_area_m2"]
    ceiling_height_m: float = DEFAULTS["ceiling_height_m"]
    hourly_cost_per_person: float = DEFAULTS["hourly_cost_per_person"]
    currency_code: str = DEFAULTS["currency_code"]
    o2_consumption_lpm: float = DEFAULTS["o2_consumption_lpm"]

    @property
    def total_participants(self) -> int:
        return self.onsite_people + self.remote_people

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _coerce_numeric(value) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return float(int(value))
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        txt = value.strip().replace(",", "").replace("'", "")
        if txt == "":
            return None
        try:
            num = float(txt)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(num):
        return None
    return num


def coerce_people(value, default: int = 0) -> int:
    num = _coerce_numeric(value)
    if num is None:
        return int(default)
    return max(0, int(math.floor(num)))


def coerce_room_area(value, default: float = DEFAULTS["room_area_m2"]) -> float:
    num = _coerce_numeric(value)
    if num is None:
        return float(default)
    return max(0.0, num)


def coerce_hourly_cost(value, default: float = DEFAULTS["hourly_cost_per_person"]) -> float:
    num = _coerce_numeric(value)
    if num is None:
        return float(default)
    return max(0.0, num)


def coerce_o2_rate(value, default: float = DEFAULTS["o2_consumption_lpm"]) -> float:
    num = _coerce_numeric(value)
    if num is None:
        return float(default)
    return max(MIN_O2_CONSUMPTION_LPM, num)


def coerce_currency(value) -> str:
    code = str(value if value is not None else "").strip()
    return code or FALLBACK_CURRENCY


FIELD_COERCERS: dict[str, Callable[[Any], Any]] = {
    "onsite_people": lambda v: coerce_people(v, DEFAULTS["onsite_people"]),
    "remote_people": lambda v: coerce_people(v, DEFAULTS["remote_people"]),
    "room_area_m2": coerce_room_area,
    "hourly_cost_per_person": coerce_hourly_cost,
    "currency_code": coerce_currency,
    "o2_consumption_lpm": coerce_o2_rate,
}


def coerce_field(key: str, value) -> tuple[Any, str | None]:
    """Return the stored value for ``key`` and a warning when the input had to change."""
    if key not in FIELD_COERCERS:
        raise KeyError(key)
    coerced = FIELD_COERCERS[key](value)
    if key == "currency_code":
        if value is None or not str(value).strip():
            return coerced, f"{key} empty; reset to {FALLBACK_CURRENCY}."
        return coerced, None
    num = _coerce_numeric(value)
    if num is None:
        return coerced, f"{key} invalid and reset to default."
    if float(coerced) != num:
        return coerced, f"{key}={num:g} adjusted to {coerced:g}."
    return coerced, None

