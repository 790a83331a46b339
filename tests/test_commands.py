"""Tests for CSAFE command builders."""

import pytest

from pm5_rower_mcp.models.enums import WorkoutType
from pm5_rower_mcp.protocol.commands import (
    COMMAND_BUILDERS,
    SHORT_COMMANDS,
    Command,
    build_command,
    build_distance_workout,
    build_get_odometer,
    build_get_serial,
    build_get_status,
    build_get_version,
    build_go_to_workout_screen,
    build_just_row_workout,
    build_reset,
    build_screen_state,
    build_set_user_info,
    build_set_workout_calories,
    build_set_workout_distance,
    build_set_workout_duration,
    build_set_workout_type,
    build_short_command,
    build_terminate_workout,
    build_time_workout,
    command_contents,
)
from pm5_rower_mcp.protocol.framing import parse_frame


def test_command_enum_values():
    """Verify key opcodes."""
    assert Command.GET_STATUS == 0x80
    assert Command.RESET == 0x81
    assert Command.GET_VERSION == 0x91
    assert Command.GET_SERIAL == 0x94
    assert Command.GET_ODOMETER == 0x9B
    assert Command.SET_WORKOUT_DURATION == 0x20
    assert Command.SET_WORKOUT_DISTANCE == 0x21
    assert Command.SET_WORKOUT_CALORIES == 0x22
    assert Command.SET_USER_INFO == 0x1A


def test_workout_screen_shares_opcode():
    """GO_TO_WORKOUT_SCREEN is an alias of SET_WORKOUT_TYPE (0x76)."""
    assert Command.GO_TO_WORKOUT_SCREEN is Command.SET_WORKOUT_TYPE
    assert Command.GO_TO_WORKOUT_SCREEN == 0x76


def test_build_get_status():
    """GetStatus is a single-byte standard frame."""
    assert build_get_status() == bytes([0xF1, 0x80, 0x80, 0xF2])


@pytest.mark.parametrize(
    "builder, opcode",
    [
        (build_reset, 0x81),
        (build_get_version, 0x91),
        (build_get_serial, 0x94),
        (build_get_odometer, 0x9B),
    ],
)
def test_short_command_frames(builder, opcode):
    """Short commands frame their opcode alone."""
    assert builder() == bytes([0xF1, opcode, opcode, 0xF2])


def test_build_short_command_rejects_long_command():
    """Long commands cannot be sent without their data."""
    with pytest.raises(ValueError):
        build_short_command(Command.SET_WORKOUT_DISTANCE)


def test_every_short_command_parses():
    """Every short command builds a frame that parses back to its opcode."""
    for command in SHORT_COMMANDS:
        assert parse_frame(build_short_command(command)) == bytes([command])


def test_build_set_workout_type():
    """Set workout type uses the 0x76 wrapper with sub-command 0x01."""
    frame = build_set_workout_type(WorkoutType.FIXED_DIST_NO_SPLITS)
    assert frame == bytes([0xF1, 0x76, 0x02, 0x01, 0x01, 0x02, 0x76, 0xF2])


def test_build_go_to_workout_screen():
    """Go to workout screen uses the 0x76 wrapper with sub-command 0x13."""
    frame = build_go_to_workout_screen()
    assert frame == bytes([0xF1, 0x76, 0x04, 0x13, 0x02, 0x01, 0x01, 0x63, 0xF2])


def test_workout_type_and_screen_disambiguated_by_subcommand():
    """Both commands start with 0x76 but differ in sub-command and length."""
    workout_type = parse_frame(build_set_workout_type(WorkoutType.JUST_ROW_NO_SPLITS))
    screen = parse_frame(build_go_to_workout_screen())
    assert workout_type[0] == screen[0] == 0x76
    assert workout_type[2] == 0x01
    assert screen[2] == 0x13
    assert len(workout_type) == 5
    assert len(screen) == 6


def test_build_terminate_workout():
    """Terminate is screen state (workout, terminate)."""
    assert parse_frame(build_terminate_workout()) == bytes(
        [0x76, 0x04, 0x13, 0x02, 0x01, 0x02]
    )


def test_screen_state_bounds():
    """Screen state arguments must fit in a byte."""
    with pytest.raises(ValueError):
        build_screen_state(256, 0)


def test_build_set_workout_duration():
    """Duration is hours, minutes, seconds as single bytes."""
    assert parse_frame(build_set_workout_duration(0, 20, 0)) == bytes(
        [0x20, 0x03, 0x00, 0x14, 0x00]
    )


def test_workout_duration_bounds():
    """Duration fields out of 0-255 should raise."""
    with pytest.raises(ValueError):
        build_set_workout_duration(256, 0, 0)
    with pytest.raises(ValueError):
        build_set_workout_duration(0, -1, 0)


def test_build_set_workout_distance():
    """Distance is a 24-bit big-endian value."""
    assert parse_frame(build_set_workout_distance(2000)) == bytes(
        [0x21, 0x03, 0x00, 0x07, 0xD0]
    )


def test_workout_distance_with_reserved_byte():
    """A distance byte equal to a flag value is stuffed on the wire."""
    frame = build_set_workout_distance(0xF1)
    assert frame[1:-1].count(0xF1) == 0
    assert parse_frame(frame) == bytes([0x21, 0x03, 0x00, 0x00, 0xF1])


def test_workout_distance_bounds():
    """Distance must fit in 24 bits."""
    with pytest.raises(ValueError):
        build_set_workout_distance(0x1000000)
    with pytest.raises(ValueError):
        build_set_workout_distance(-1)


def test_build_set_workout_calories():
    """Calories is a 16-bit big-endian value."""
    assert parse_frame(build_set_workout_calories(300)) == bytes(
        [0x22, 0x02, 0x01, 0x2C]
    )


def test_workout_calories_bounds():
    """Calories must fit in 16 bits."""
    with pytest.raises(ValueError):
        build_set_workout_calories(70000)


def test_build_set_user_info():
    """User info is age, gender, then 16-bit big-endian weight."""
    assert parse_frame(build_set_user_info(age=30, weight=180, gender=1)) == bytes(
        [0x1A, 0x04, 0x1E, 0x01, 0x00, 0xB4]
    )


def test_user_info_bounds():
    """Out-of-range user info should raise."""
    with pytest.raises(ValueError):
        build_set_user_info(age=300, weight=180, gender=1)
    with pytest.raises(ValueError):
        build_set_user_info(age=30, weight=70000, gender=1)


def test_command_contents_short_and_long():
    """Short commands have no length byte; long commands do."""
    assert command_contents(Command.GET_STATUS) == b"\x80"
    assert command_contents(Command.SET_WORKOUT_CALORIES, b"\x01\x2C") == bytes(
        [0x22, 0x02, 0x01, 0x2C]
    )


def test_command_contents_too_long():
    """Data over 255 bytes cannot be length-prefixed."""
    with pytest.raises(ValueError):
        command_contents(Command.SET_WORKOUT_PROGRAM, bytes(256))


def test_build_command_frames_contents():
    """build_command frames command_contents."""
    frame = build_command(Command.SET_WORKOUT_CALORIES, b"\x01\x2C")
    assert parse_frame(frame) == bytes([0x22, 0x02, 0x01, 0x2C])


def test_just_row_workout_sequence():
    """Just Row sets the workout type then opens the workout screen."""
    frames = build_just_row_workout()
    assert [parse_frame(f) for f in frames] == [
        bytes([0x76, 0x02, 0x01, 0x01, 0x00]),
        bytes([0x76, 0x04, 0x13, 0x02, 0x01, 0x01]),
    ]


def test_distance_workout_sequence():
    """Distance workout sends type, distance, then workout screen."""
    frames = build_distance_workout(2000)
    assert len(frames) == 3
    assert parse_frame(frames[0])[-1] == WorkoutType.FIXED_DIST_NO_SPLITS
    assert parse_frame(frames[1]) == bytes([0x21, 0x03, 0x00, 0x07, 0xD0])
    assert frames[2] == build_go_to_workout_screen()


def test_time_workout_sequence():
    """Time workout sends type, duration, then workout screen."""
    frames = build_time_workout(minutes=30, seconds=0)
    assert parse_frame(frames[0])[-1] == WorkoutType.FIXED_TIME_NO_SPLITS
    assert parse_frame(frames[1]) == bytes([0x20, 0x03, 0x00, 0x1E, 0x00])
    assert frames[2] == build_go_to_workout_screen()


def test_command_builders_registry():
    """Every registered builder is callable and zero-arg ones build valid frames."""
    assert "set_workout_distance" in COMMAND_BUILDERS
    for name in ("get_status", "reset", "get_version", "go_to_workout_screen"):
        frame = COMMAND_BUILDERS[name]()
        assert parse_frame(frame) is not None
