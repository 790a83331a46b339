"""Rowing unit conversions (Concept2 pace/power model)."""

from __future__ import annotations

INVALID_HEART_RATE = 255

# Concept2: watts = 2.80 / (seconds per meter)^3
PACE_POWER_CONSTANT = 2.8
PACE_DISTANCE = 500.0


def watts_to_pace(watts: float) -> float:
    """Convert power in watts to pace in seconds per 500 m."""
    if watts <= 0:
        return 0.0
    return (PACE_POWER_CONSTANT / watts) ** (1.0 / 3.0) * PACE_DISTANCE


def pace_to_watts(pace: float) -> float:
    """Convert pace in seconds per 500 m to power in watts."""
    if pace <= 0:
        return 0.0
    pace_per_meter = pace / PACE_DISTANCE
    return PACE_POWER_CONSTANT / pace_per_meter**3


def calories_to_pace(calories_per_hour: float) -> float:
    """Convert a calorie burn rate (cal/hr) to pace in seconds per 500 m."""
    watts = (calories_per_hour - 300.0) / (4.0 * 0.8604)
    return watts_to_pace(watts)


def pace_to_speed(pace: float) -> float:
    """Convert pace in seconds per 500 m to speed in m/s."""
    if pace <= 0:
        return 0.0
    return PACE_DISTANCE / pace


def heart_rate_or_none(heart_rate: int) -> int | None:
    """Return ``heart_rate``, or None for the PM5's "no belt" value (255)."""
    if heart_rate == INVALID_HEART_RATE:
        return None
    return heart_rate
