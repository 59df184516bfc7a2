from __future__ import annotations

import math

import numpy as np
import pytest

from everest_meter.altitude import (
    DEAD_ZONE_M,
    EVEREST_SUMMIT_M,
    altitude_ticks,
    equivalent_altitude,
    in_dead_zone,
    marker_fraction,
    oxygen_timeline,
)
from everest_meter.oxygen import compute_oxygen


def test_reference_room_after_ten_minutes():
    reading = compute_oxygen(elapsed_seconds=600, onsite_people=4, room_area_m2=30, ceiling_height_m=3, o2_consumption_lpm=0.6)
    assert reading.room_volume_liters == 90000.0
    assert reading.room_volume_m3 == 90.0
    assert abs(reading.consumed_liters - 24.0) < 1e-9
    assert abs(reading.fraction - 18786.0 / 90000.0) < 1e-12
    assert reading.fraction < 0.209
    assert abs(reading.percent - 20.873333) < 1e-5


def test_fraction_stays_within_bounds_and_never_rises_over_time():
    fractions = [
        compute_oxygen(elapsed_seconds=t, onsite_people=12, room_area_m2=8, o2_consumption_lpm=1.5).fraction
        for t in range(0, 7 * 24 * 3600, 3600)
    ]
    assert all(0.01 <= f <= 0.209 for f in fractions)
    assert all(b <= a for a, b in zip(fractions, fractions[1:]))
    assert fractions[-1] == 0.01


def test_no_people_or_no_time_keeps_initial_fraction():
    assert compute_oxygen(elapsed_seconds=0, onsite_people=10, room_area_m2=30).fraction == 0.209
    assert compute_oxygen(elapsed_seconds=36000, onsite_people=0, room_area_m2=30).percent == pytest.approx(20.9)


def test_tiny_or_negative_room_area_is_floored_to_one_cubic_metre():
    for area in (0.0, -40.0, 0.1):
        reading = compute_oxygen(elapsed_seconds=60, onsite_people=1, room_area_m2=area)
        assert reading.room_volume_liters == 1000.0
        assert 0.01 <= reading.fraction <= 0.209


def test_altitude_reference_points():
    assert equivalent_altitude(0.209) == 0
    assert equivalent_altitude(0.0) == EVEREST_SUMMIT_M
    assert equivalent_altitude(-1.0) == EVEREST_SUMMIT_M
    # Floor fraction maps to ~21294 m before the summit cap.
    assert -7000 * math.log(0.01 / 0.209) == pytest.approx(21294, abs=1)
    assert equivalent_altitude(0.01) == EVEREST_SUMMIT_M
    assert equivalent_altitude(0.5) == 0.0


def test_altitude_is_non_increasing_in_fraction():
    fracs = np.linspace(-0.05, 0.3, 200)
    alts = [equivalent_altitude(f) for f in fracs]
    assert all(0.0 <= a <= EVEREST_SUMMIT_M for a in alts)
    assert all(b <= a for a, b in zip(alts, alts[1:]))


def test_dead_zone_marker_and_ticks():
    assert in_dead_zone(DEAD_ZONE_M)
    assert not in_dead_zone(7999.9)
    assert marker_fraction(-10) == 0.0
    assert marker_fraction(EVEREST_SUMMIT_M * 2) == 1.0
    ticks = altitude_ticks(10)
    assert len(ticks) == 10
    assert ticks[0] == 0 and ticks[-1] == 8848
    assert ticks[1] == round(8848 / 9)


@pytest.mark.parametrize("horizon_seconds", [1200.0, 400_000.0])
def test_timeline_matches_point_model_at_every_sample(horizon_seconds):
    df = oxygen_timeline(
        onsite_people=4, room_area_m2=30, o2_consumption_lpm=0.6, horizon_seconds=horizon_seconds, points=25
    )
    assert len(df) == 25
    assert df["Elapsed Seconds"].iloc[0] == 0.0
    assert df["Elapsed Seconds"].iloc[-1] == pytest.approx(horizon_seconds)
    for row in df.itertuples(index=False):
        t = row[0]
        point = compute_oxygen(elapsed_seconds=t, onsite_people=4, room_area_m2=30, o2_consumption_lpm=0.6)
        assert row[1] == pytest.approx(t / 60.0)
        assert row[2] == pytest.approx(point.percent)
        assert row[3] == pytest.approx(equivalent_altitude(point.fraction))
    assert df["Equivalent Altitude (m)"].iloc[0] == 0.0
    assert df["Equivalent Altitude (m)"].is_monotonic_increasing


def test_timeline_reaches_summit_once_oxygen_is_exhausted():
    df = oxygen_timeline(onsite_people=40, room_area_m2=5, horizon_seconds=24 * 3600, points=10)
    assert df["Oxygen %"].iloc[-1] == pytest.approx(1.0)
    assert df["Equivalent Altitude (m)"].iloc[-1] == EVEREST_SUMMIT_M
