"""Enumerated fields reported by the PM5.

Every enum decodes from a single raw byte through :meth:`RawEnum.from_raw`,
which never fails: values the table does not know map to the enum's
``default()`` member.
"""

from __future__ import annotations

from enum import IntEnum


class RawEnum(IntEnum):
    """IntEnum with a total byte -> member mapping."""

    @classmethod
    def default(cls) -> RawEnum:
        raise NotImplementedError

    @classmethod
    def from_raw(cls, raw: int) -> RawEnum:
        try:
            return cls(raw)
        except ValueError:
            return cls.default()


class WorkoutType(RawEnum):
    JUST_ROW_NO_SPLITS = 0
    JUST_ROW_SPLITS = 1
    FIXED_DIST_NO_SPLITS = 2
    FIXED_DIST_SPLITS = 3
    FIXED_TIME_NO_SPLITS = 4
    FIXED_TIME_SPLITS = 5
    FIXED_TIME_INTERVAL = 6
    FIXED_DIST_INTERVAL = 7
    VARIABLE_INTERVAL = 8
    VARIABLE_UNDEFINED_REST = 9
    FIXED_CALORIE_SPLITS = 10
    FIXED_WATT_MINUTE_SPLITS = 11
    FIXED_CALS_INTERVAL = 12

    @classmethod
    def default(cls) -> WorkoutType:
        return cls.JUST_ROW_NO_SPLITS


class WorkoutState(RawEnum):
    WAIT_TO_BEGIN = 0
    WORKOUT_ROW = 1
    COUNTDOWN_PAUSE = 2
    INTERVAL_REST = 3
    INTERVAL_WORK_TIME = 4
    INTERVAL_WORK_DISTANCE = 5
    INTERVAL_REST_END_TO_WORK_TIME = 6
    INTERVAL_REST_END_TO_WORK_DISTANCE = 7
    INTERVAL_WORK_TIME_TO_REST = 8
    INTERVAL_WORK_DISTANCE_TO_REST = 9
    WORKOUT_END = 10
    TERMINATE = 11
    WORKOUT_LOGGED = 12
    REARM = 13

    @classmethod
    def default(cls) -> WorkoutState:
        return cls.WAIT_TO_BEGIN


class RowingState(RawEnum):
    INACTIVE = 0
    ACTIVE = 1

    @classmethod
    def default(cls) -> RowingState:
        return cls.INACTIVE


class StrokeState(RawEnum):
    WAITING_FOR_WHEEL_TO_REACH_MIN_SPEED = 0
    WAITING_FOR_WHEEL_TO_ACCELERATE = 1
    DRIVING = 2
    DWELLING_AFTER_DRIVE = 3
    RECOVERY = 4

    @classmethod
    def default(cls) -> StrokeState:
        return cls.WAITING_FOR_WHEEL_TO_REACH_MIN_SPEED


class IntervalType(RawEnum):
    NONE = 0
    TIME = 1
    DISTANCE = 2
    REST = 3
    TIME_REST_UNDEFINED = 4
    DISTANCE_REST_UNDEFINED = 5
    REST_UNDEFINED = 6
    CALORIE = 7
    WATT_MINUTE = 8
    NONE_255 = 255

    @classmethod
    def default(cls) -> IntervalType:
        return cls.NONE


class ErgMachineType(RawEnum):
    STATIC_D = 0
    STATIC_C = 1
    STATIC_A = 2
    STATIC_B = 3
    STATIC_E = 5
    STATIC_DYNAMIC = 8
    SLIDES_A = 16
    SLIDES_B = 17
    SLIDES_C = 18
    SLIDES_D = 19
    SLIDES_E = 20
    SLIDES_DYNAMIC = 128
    STATIC_DYNO = 192
    STATIC_SKI = 193
    STATIC_BIKE = 194
    NUM = 195

    @classmethod
    def default(cls) -> ErgMachineType:
        return cls.STATIC_D


ENUMS: dict[str, type[RawEnum]] = {
    "workout_type": WorkoutType,
    "workout_state": WorkoutState,
    "rowing_state": RowingState,
    "stroke_state": StrokeState,
    "interval_type": IntervalType,
    "erg_machine_type": ErgMachineType,
}
