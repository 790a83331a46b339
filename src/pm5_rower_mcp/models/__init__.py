"""Data models for telemetry records, enumerated fields, and device info."""

from .enums import (
    WorkoutType,
    WorkoutState,
    RowingState,
    StrokeState,
    IntervalType,
    ErgMachineType,
)
from .telemetry import (
    GeneralStatus,
    AdditionalStatus1,
    AdditionalStatus2,
    StrokeData,
    AdditionalStrokeData,
    SplitIntervalData,
    EndOfWorkoutSummary,
    HeartRateBeltInfo,
)
from .device_info import DeviceInfo
