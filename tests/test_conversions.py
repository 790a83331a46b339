"""Tests for pace, power and speed conversions."""

import pytest

from pm5_rower_mcp.utils.conversions import (
    calories_to_pace,
    heart_rate_or_none,
    pace_to_speed,
    pace_to_watts,
    watts_to_pace,
)


def test_pace_to_watts():
    """2:00/500m is about 203 W on the Concept2 model."""
    assert pace_to_watts(120.0) == pytest.approx(202.546, abs=1e-3)


def test_watts_to_pace_inverse():
    for watts in (50.0, 150.0, 400.0):
        assert pace_to_watts(watts_to_pace(watts)) == pytest.approx(watts)


def test_non_positive_inputs():
    assert watts_to_pace(0) == 0.0
    assert watts_to_pace(-10) == 0.0
    assert pace_to_watts(0) == 0.0
    assert pace_to_speed(0) == 0.0
    assert calories_to_pace(300) == 0.0


def test_pace_to_speed():
    assert pace_to_speed(100.0) == pytest.approx(5.0)


def test_calories_to_pace():
    watts = (900 - 300) / (4 * 0.8604)
    assert calories_to_pace(900) == pytest.approx(watts_to_pace(watts))


def test_heart_rate_or_none():
    assert heart_rate_or_none(150) == 150
    assert heart_rate_or_none(255) is None
