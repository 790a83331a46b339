"""Typed telemetry records decoded from the PM5 rowing service.

Units: times in seconds, distances in meters, speed in m/s, pace in
seconds per 500 m, power in watts, force in pounds, work in joules.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from .enums import (
    ErgMachineType,
    IntervalType,
    RowingState,
    StrokeState,
    WorkoutState,
    WorkoutType,
)


@dataclass(frozen=True)
class TelemetryRecord:
    """Base class for records; ``MIN_SIZE`` is the shortest valid buffer."""

    MIN_SIZE: ClassVar[int] = 0

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        for key, value in d.items():
            if isinstance(value, Enum):
                d[key] = value.name
        return d


@dataclass(frozen=True)
class GeneralStatus(TelemetryRecord):
    """Rowing general status (0x0031)."""

    MIN_SIZE: ClassVar[int] = 19

    elapsed_time: float
    distance: float
    workout_type: WorkoutType
    interval_type: IntervalType
    workout_state: WorkoutState
    rowing_state: RowingState
    stroke_state: StrokeState
    total_work_distance: float
    workout_duration: float | None = None
    workout_duration_type: int | None = None
    drag_factor: int | None = None


@dataclass(frozen=True)
class AdditionalStatus1(TelemetryRecord):
    """Rowing additional status 1 (0x0032)."""

    MIN_SIZE: ClassVar[int] = 17

    elapsed_time: float
    speed: float
    stroke_rate: int
    heart_rate: int  # 255 = no belt
    current_pace: float
    average_pace: float
    rest_distance: int
    rest_time: float
    erg_machine_type: ErgMachineType


@dataclass(frozen=True)
class AdditionalStatus2(TelemetryRecord):
    """Rowing additional status 2 (0x0033)."""

    MIN_SIZE: ClassVar[int] = 20

    elapsed_time: float
    interval_count: int
    average_power: int
    total_calories: int
    split_interval_avg_pace: float
    split_interval_avg_power: int
    split_interval_avg_calories: int  # cal/hr
    last_split_time: float
    last_split_distance: float


@dataclass(frozen=True)
class StrokeData(TelemetryRecord):
    """Stroke data (0x0035)."""

    MIN_SIZE: ClassVar[int] = 20

    elapsed_time: float
    distance: float
    drive_length: float
    drive_time: float
    recovery_time: float
    stroke_distance: float
    peak_drive_force: float
    average_drive_force: float
    work_per_stroke: float
    stroke_count: int


@dataclass(frozen=True)
class AdditionalStrokeData(TelemetryRecord):
    """Additional stroke data (0x0036)."""

    MIN_SIZE: ClassVar[int] = 15

    elapsed_time: float
    stroke_power: int
    stroke_calories: int  # cal/hr
    stroke_count: int
    projected_work_time: float
    projected_work_distance: float


@dataclass(frozen=True)
class SplitIntervalData(TelemetryRecord):
    """Split/interval data (0x0037)."""

    MIN_SIZE: ClassVar[int] = 18

    elapsed_time: float
    distance: float
    split_interval_time: float
    split_interval_distance: float
    interval_rest_time: float
    interval_rest_distance: float
    split_interval_type: int
    split_interval_number: int


@dataclass(frozen=True)
class EndOfWorkoutSummary(TelemetryRecord):
    """End-of-workout summary (0x0039).

    ``log_entry_date`` and ``log_entry_time`` are the raw packed values;
    :attr:`log_entry` unpacks them.
    """

    MIN_SIZE: ClassVar[int] = 20

    log_entry_date: int
    log_entry_time: int
    elapsed_time: float
    distance: float
    average_stroke_rate: int
    ending_heart_rate: int
    average_heart_rate: int
    min_heart_rate: int
    max_heart_rate: int
    drag_factor_average: int
    recovery_heart_rate: int
    workout_type: WorkoutType
    average_pace: float

    @property
    def log_entry(self) -> datetime | None:
        """Workout log timestamp, or None if the packed values are invalid.

        Date bits: month 0-3, day 4-8, years since 2000 9-15.
        Time: minutes in the low byte, hours in the high byte.
        """
        month = self.log_entry_date & 0x0F
        day = (self.log_entry_date >> 4) & 0x1F
        year = 2000 + (self.log_entry_date >> 9)
        minute = self.log_entry_time & 0xFF
        hour = self.log_entry_time >> 8
        try:
            return datetime(year, month, day, hour, minute)
        except ValueError:
            return None

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        log_entry = self.log_entry
        d["log_entry"] = log_entry.isoformat() if log_entry else None
        return d


@dataclass(frozen=True)
class HeartRateBeltInfo(TelemetryRecord):
    """Heart rate belt information (0x003B)."""

    MIN_SIZE: ClassVar[int] = 6

    manufacturer_id: int
    device_type: int
    belt_id: int
