"""Closed-room oxygen depletion model (illustrative, not a safety calculation)."""

from __future__ import annotations

from dataclasses import dataclass


SEA_LEVEL_O2_FRACTION = 0.209
MIN_O2_FRACTION = 0.01
MIN_ROOM_VOLUME_M3 = 1.0
LITERS_PER_M3 = 1000.0
DEFAULT_CEILING_HEIGHT_M = 3.0


@dataclass(frozen=True)
class OxygenReading:
    fraction: float
    percent: float
    consumed_liters: float
    room_volume_liters: float

    @property
    def room_volume_m3(self) -> float:
        return self.room_volume_liters / LITERS_PER_M3


def room_volume_liters(room_area_m2: float, ceiling_height_m: float = DEFAULT_CEILING_HEIGHT_M) -> float:
    return max(MIN_ROOM_VOLUME_M3, float(room_area_m2) * float(ceiling_height_m)) * LITERS_PER_M3


def compute_oxygen(
    elapsed_seconds: float,
    onsite_people: int,
    room_area_m2: float,
    ceiling_height_m: float = DEFAULT_CEILING_HEIGHT_M,
    o2_consumption_lpm: float = 0.6,
) -> OxygenReading:
    """Oxygen left in a sealed room after ``onsite_people`` breathe for ``elapsed_seconds``.

    Only onsite people consume room oxygen. The fraction is held within
    [0.01, 0.209]: it never rises above the starting concentration and never
    reports true zero.
    """
    volume_l = room_volume_liters(room_area_m2, ceiling_height_m)
    initial_o2_l = volume_l * SEA_LEVEL_O2_FRACTION
    consumed = max(0.0, float(onsite_people) * float(o2_consumption_lpm) * (float(elapsed_seconds) / 60.0))
    remaining = max(0.0, initial_o2_l - consumed)
    fraction = min(SEA_LEVEL_O2_FRACTION, max(MIN_O2_FRACTION, remaining / volume_l))
    percent = min(SEA_LEVEL_O2_FRACTION * 100.0, fraction * 100.0)
    return OxygenReading(
        fraction=fraction,
        percent=percent,
        consumed_liters=consumed,
        room_volume_liters=volume_l,
    )
