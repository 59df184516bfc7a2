"""Live meeting cost accrual."""

from __future__ import annotations


SECONDS_PER_HOUR = 3600.0


def cost_per_second(hourly_cost_per_person: float) -> float:
    return float(hourly_cost_per_person) / SECONDS_PER_HOUR


def hourly_burn(total_participants: int, hourly_cost_per_person: float) -> float:
    return float(total_participants) * float(hourly_cost_per_person)


def live_cost(elapsed_seconds: float, total_participants: int, hourly_cost_per_person: float) -> float:
    """Cost so far: onsite and remote people both count, linear in time."""
    return float(total_participants) * cost_per_second(hourly_cost_per_person) * float(elapsed_seconds)
