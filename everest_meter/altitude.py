"""Oxygen fraction to equivalent altitude mapping and the depletion projection."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd

from everest_meter.oxygen import DEFAULT_CEILING_HEIGHT_M, SEA_LEVEL_O2_FRACTION, compute_oxygen


SCALE_HEIGHT_M = 7000.0
EVEREST_SUMMIT_M = 8848.0
DEAD_ZONE_M = 8000.0


def equivalent_altitude(fraction: float) -> float:
    """Altitude whose oxygen partial pressure matches ``fraction`` at sea level.

    Inverts P(h) = P0 * exp(-h / 7000): h = -7000 * ln(fraction / 0.209),
    clamped to [0, 8848]. Non-positive fractions map straight to the summit.
    """
    frac = float(fraction)
    if frac <= 0:
        return EVEREST_SUMMIT_M
    h = -SCALE_HEIGHT_M * math.log(frac / SEA_LEVEL_O2_FRACTION)
    return max(0.0, min(EVEREST_SUMMIT_M, h))


def in_dead_zone(altitude_m: float) -> bool:
    return float(altitude_m) >= DEAD_ZONE_M


def marker_fraction(altitude_m: float) -> float:
    """Height of the climbing marker as a share of the summit altitude."""
    return min(1.0, max(0.0, float(altitude_m) / EVEREST_SUMMIT_M))


def altitude_ticks(count: int = 10) -> list[int]:
    if count < 2:
        return [0]
    return [int(round(v)) for v in np.linspace(0.0, EVEREST_SUMMIT_M, int(count))]


def oxygen_timeline(
    onsite_people: int,
    room_area_m2: float,
    ceiling_height_m: float = DEFAULT_CEILING_HEIGHT_M,
    o2_consumption_lpm: float = 0.6,
    horizon_seconds: float = 3600.0,
    points: int = 61,
) -> pd.DataFrame:
    """Oxygen percent and equivalent altitude sampled from zero to ``horizon_seconds``."""
    seconds = np.linspace(0.0, max(0.0, float(horizon_seconds)), max(2, int(points)))
    rows = []
    for t in seconds:
        reading = compute_oxygen(
            elapsed_seconds=float(t),
            onsite_people=onsite_people,
            room_area_m2=room_area_m2,
            ceiling_height_m=ceiling_height_m,
            o2_consumption_lpm=o2_consumption_lpm,
        )
        rows.append(
            {
                "Elapsed Seconds": float(t),
                "Elapsed Minutes": float(t) / 60.0,
                "Oxygen %": reading.percent,
                "Equivalent Altitude (m)": equivalent_altitude(reading.fraction),
            }
        )
    return pd.DataFrame(rows)
