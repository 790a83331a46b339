"""CSAFE command identifiers and high-level command builders.

Short commands are a single opcode byte. Long commands are followed by a
data-length byte and their arguments; multi-byte arguments are sent
big-endian. Every ``build_*`` function returns a complete frame.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable

from ..models.enums import WorkoutType
from .framing import build_frame


class Command(IntEnum):
    """CSAFE command opcodes."""

    # Status commands
    GET_STATUS = 0x80
    RESET = 0x81
    GO_IDLE = 0x82
    GO_HAVE_ID = 0x83
    GO_IN_USE = 0x85
    GO_FINISHED = 0x86
    GO_READY = 0x87
    BAD_ID = 0x88

    # Configuration / query commands
    GET_VERSION = 0x91
    GET_ID = 0x92
    GET_UNITS = 0x93
    GET_SERIAL = 0x94
    GET_LIST = 0x98
    GET_UTILIZATION = 0x99
    GET_MOTOR_CURRENT = 0x9A
    GET_ODOMETER = 0x9B
    GET_ERROR_CODE = 0x9C
    GET_SERVICE_CODE = 0x9D
    GET_USER_INFO = 0x9E
    GET_TORQUE = 0x9F

    # Workout commands
    SET_WORKOUT_TYPE = 0x76
    SET_WORKOUT_DURATION = 0x20
    SET_WORKOUT_DISTANCE = 0x21
    SET_WORKOUT_CALORIES = 0x22
    SET_WORKOUT_PROGRAM = 0x24
    SET_WORKOUT_POWER = 0x34
    SET_WORKOUT_HR = 0x35

    # Control commands. GO_TO_WORKOUT_SCREEN shares 0x76 with
    # SET_WORKOUT_TYPE (an alias); the sub-command byte tells them apart.
    GO_TO_WORKOUT_SCREEN = 0x76
    SET_DATE_TIME = 0x37
    SET_USER_INFO = 0x1A


class SubCommand(IntEnum):
    """PM-specific sub-commands carried inside the 0x76 wrapper."""

    SET_WORKOUT_TYPE = 0x01
    SET_SCREEN_STATE = 0x13


class ScreenType(IntEnum):
    NONE = 0x00
    WORKOUT = 0x01


class WorkoutScreenValue(IntEnum):
    NONE = 0x00
    PREPARE_TO_ROW = 0x01
    TERMINATE_WORKOUT = 0x02


SHORT_COMMANDS: tuple[Command, ...] = (
    Command.GET_STATUS,
    Command.RESET,
    Command.GO_IDLE,
    Command.GO_HAVE_ID,
    Command.GO_IN_USE,
    Command.GO_FINISHED,
    Command.GO_READY,
    Command.BAD_ID,
    Command.GET_VERSION,
    Command.GET_ID,
    Command.GET_UNITS,
    Command.GET_SERIAL,
    Command.GET_LIST,
    Command.GET_UTILIZATION,
    Command.GET_MOTOR_CURRENT,
    Command.GET_ODOMETER,
    Command.GET_ERROR_CODE,
    Command.GET_SERVICE_CODE,
    Command.GET_USER_INFO,
    Command.GET_TORQUE,
)

MAX_WORKOUT_DISTANCE = 0xFFFFFF


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be 0-255, got {value}")


def command_contents(command: Command, data: bytes = b"") -> bytes:
    """Build unframed command contents.

    A short command (no data) is just its opcode; a long command is
    ``opcode, len(data), *data``.
    """
    if not data:
        return bytes([command])
    if len(data) > 0xFF:
        raise ValueError(f"Command data must be at most 255 bytes, got {len(data)}")
    return bytes([command, len(data)]) + data


def build_command(command: Command, data: bytes = b"") -> bytes:
    """Build a complete standard frame for a single command."""
    return build_frame(command_contents(command, data))


def build_short_command(command: Command) -> bytes:
    """Build a frame for a short (opcode-only) status or query command."""
    if command not in SHORT_COMMANDS:
        raise ValueError(f"{command!r} is not a short command")
    return build_command(command)


# ─── STATUS / QUERY COMMANDS ─────────────────────────────────────────

def build_get_status() -> bytes:
    """Build a GetStatus (0x80) frame."""
    return build_short_command(Command.GET_STATUS)


def build_reset() -> bytes:
    """Build a Reset (0x81) frame."""
    return build_short_command(Command.RESET)


def build_go_idle() -> bytes:
    return build_short_command(Command.GO_IDLE)


def build_go_in_use() -> bytes:
    return build_short_command(Command.GO_IN_USE)


def build_go_finished() -> bytes:
    return build_short_command(Command.GO_FINISHED)


def build_go_ready() -> bytes:
    return build_short_command(Command.GO_READY)


def build_get_version() -> bytes:
    """Build a GetVersion (0x91) frame."""
    return build_short_command(Command.GET_VERSION)


def build_get_serial() -> bytes:
    """Build a GetSerial (0x94) frame."""
    return build_short_command(Command.GET_SERIAL)


def build_get_odometer() -> bytes:
    """Build a GetOdometer (0x9B) frame."""
    return build_short_command(Command.GET_ODOMETER)


def build_get_user_info() -> bytes:
    return build_short_command(Command.GET_USER_INFO)


# ─── WORKOUT COMMANDS ────────────────────────────────────────────────

def build_set_workout_type(workout_type: WorkoutType | int) -> bytes:
    """Build a frame selecting the workout type.

    Contents: ``76 02 01 01 <type>`` (wrapper, length, sub-command,
    sub-length, workout type).
    """
    _check_byte("Workout type", int(workout_type))
    data = bytes([SubCommand.SET_WORKOUT_TYPE, 0x01, int(workout_type)])
    # The wrapper's declared length is 2 on the PM5, not len(data).
    contents = bytes([Command.SET_WORKOUT_TYPE, 0x02]) + data
    return build_frame(contents)


def build_screen_state(screen_type: int, value: int) -> bytes:
    """Build a 0x76/0x13 set-screen-state frame.

    Contents: ``76 04 13 02 <screen_type> <value>``.
    """
    _check_byte("Screen type", screen_type)
    _check_byte("Screen value", value)
    data = bytes([SubCommand.SET_SCREEN_STATE, 0x02, screen_type, value])
    return build_command(Command.GO_TO_WORKOUT_SCREEN, data)


def build_go_to_workout_screen() -> bytes:
    """Build a frame that moves the monitor to the workout screen."""
    return build_screen_state(ScreenType.WORKOUT, WorkoutScreenValue.PREPARE_TO_ROW)


def build_terminate_workout() -> bytes:
    """Build a frame that terminates the workout in progress."""
    return build_screen_state(ScreenType.WORKOUT, WorkoutScreenValue.TERMINATE_WORKOUT)


def build_set_workout_duration(hours: int, minutes: int, seconds: int) -> bytes:
    """Build a SetWorkoutDuration (0x20) frame.

    Args:
        hours: 0-255.
        minutes: 0-255.
        seconds: 0-255.
    """
    _check_byte("Hours", hours)
    _check_byte("Minutes", minutes)
    _check_byte("Seconds", seconds)
    return build_command(
        Command.SET_WORKOUT_DURATION, bytes([hours, minutes, seconds])
    )


def build_set_workout_distance(meters: int) -> bytes:
    """Build a SetWorkoutDistance (0x21) frame.

    Args:
        meters: Target distance, sent as a 24-bit big-endian value.
    """
    if not 0 <= meters <= MAX_WORKOUT_DISTANCE:
        raise ValueError(
            f"Distance must be 0-{MAX_WORKOUT_DISTANCE} meters, got {meters}"
        )
    return build_command(Command.SET_WORKOUT_DISTANCE, meters.to_bytes(3, "big"))


def build_set_workout_calories(calories: int) -> bytes:
    """Build a SetWorkoutCalories (0x22) frame (16-bit big-endian)."""
    if not 0 <= calories <= 0xFFFF:
        raise ValueError(f"Calories must be 0-65535, got {calories}")
    return build_command(Command.SET_WORKOUT_CALORIES, calories.to_bytes(2, "big"))


# ─── USER COMMANDS ───────────────────────────────────────────────────

def build_set_user_info(age: int, weight: int, gender: int) -> bytes:
    """Build a SetUserInfo (0x1A) frame.

    Contents: ``1A 04 <age> <gender> <weight hi> <weight lo>``.

    Args:
        age: Age in years (0-255).
        weight: Weight, 16-bit.
        gender: Gender code (0-255).
    """
    _check_byte("Age", age)
    _check_byte("Gender", gender)
    if not 0 <= weight <= 0xFFFF:
        raise ValueError(f"Weight must be 0-65535, got {weight}")
    data = bytes([age, gender]) + weight.to_bytes(2, "big")
    return build_command(Command.SET_USER_INFO, data)


# ─── WORKOUT SEQUENCES ───────────────────────────────────────────────

def build_just_row_workout() -> list[bytes]:
    """Frames to start a Just Row workout, in send order."""
    return [
        build_set_workout_type(WorkoutType.JUST_ROW_NO_SPLITS),
        build_go_to_workout_screen(),
    ]


def build_distance_workout(meters: int) -> list[bytes]:
    """Frames to start a fixed-distance workout, in send order."""
    return [
        build_set_workout_type(WorkoutType.FIXED_DIST_NO_SPLITS),
        build_set_workout_distance(meters),
        build_go_to_workout_screen(),
    ]


def build_time_workout(minutes: int, seconds: int) -> list[bytes]:
    """Frames to start a fixed-time workout, in send order."""
    return [
        build_set_workout_type(WorkoutType.FIXED_TIME_NO_SPLITS),
        build_set_workout_duration(0, minutes, seconds),
        build_go_to_workout_screen(),
    ]


COMMAND_BUILDERS: dict[str, Callable[..., bytes | list[bytes]]] = {
    "get_status": build_get_status,
    "reset": build_reset,
    "go_idle": build_go_idle,
    "go_in_use": build_go_in_use,
    "go_finished": build_go_finished,
    "go_ready": build_go_ready,
    "get_version": build_get_version,
    "get_serial": build_get_serial,
    "get_odometer": build_get_odometer,
    "get_user_info": build_get_user_info,
    "set_workout_type": build_set_workout_type,
    "go_to_workout_screen": build_go_to_workout_screen,
    "terminate_workout": build_terminate_workout,
    "set_workout_duration": build_set_workout_duration,
    "set_workout_distance": build_set_workout_distance,
    "set_workout_calories": build_set_workout_calories,
    "set_user_info": build_set_user_info,
    "just_row_workout": build_just_row_workout,
    "distance_workout": build_distance_workout,
    "time_workout": build_time_workout,
}
