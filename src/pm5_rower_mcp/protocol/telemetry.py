"""Decoders for PM5 rowing telemetry notifications.

Each ``decode_*`` function takes the raw characteristic value and returns
a typed record, or ``None`` if the buffer is shorter than the record's
minimum size. Multi-byte fields are little-endian; scaled fields are
divided by their LSB factor as they are read.

The multiplexed characteristic (0x0080) carries a one-byte identifier
followed by one of the records above; it is decoded through the same
functions via :data:`MULTIPLEX_DECODERS`.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..models.enums import (
    ErgMachineType,
    IntervalType,
    RowingState,
    StrokeState,
    WorkoutState,
    WorkoutType,
)
from ..models.telemetry import (
    AdditionalStatus1,
    AdditionalStatus2,
    AdditionalStrokeData,
    EndOfWorkoutSummary,
    GeneralStatus,
    HeartRateBeltInfo,
    SplitIntervalData,
    StrokeData,
    TelemetryRecord,
)
from ..utils.fields import read_u16, read_u24, read_u32
from .characteristics import Characteristic, resolve_characteristic

logger = logging.getLogger(__name__)

Decoder = Callable[[bytes], "TelemetryRecord | None"]

# Buffer lengths needed for the general status optional groups
WORKOUT_DURATION_END = 18  # duration @14-16, duration type @17
DRAG_FACTOR_END = 19


def _too_short(name: str, data: bytes, size: int) -> bool:
    if len(data) < size:
        logger.debug("%s rejected: %d bytes, need %d", name, len(data), size)
        return True
    return False


def decode_general_status(data: bytes) -> GeneralStatus | None:
    """Decode rowing general status (0x0031, 19 bytes).

    Workout duration/type and drag factor are optional groups: each is
    left ``None`` when the buffer does not reach it or when its bytes are
    all zero (nothing programmed or measured yet).
    """
    if _too_short("General status", data, GeneralStatus.MIN_SIZE):
        return None

    workout_duration = None
    workout_duration_type = None
    if len(data) >= WORKOUT_DURATION_END and any(data[14:18]):
        workout_duration = read_u24(data, 14) / 100.0
        workout_duration_type = data[17]

    drag_factor = None
    if len(data) >= DRAG_FACTOR_END and data[18]:
        drag_factor = data[18]

    return GeneralStatus(
        elapsed_time=read_u24(data, 0) / 100.0,
        distance=read_u24(data, 3) / 10.0,
        workout_type=WorkoutType.from_raw(data[6]),
        interval_type=IntervalType.from_raw(data[7]),
        workout_state=WorkoutState.from_raw(data[8]),
        rowing_state=RowingState.from_raw(data[9]),
        stroke_state=StrokeState.from_raw(data[10]),
        total_work_distance=float(read_u24(data, 11)),
        workout_duration=workout_duration,
        workout_duration_type=workout_duration_type,
        drag_factor=drag_factor,
    )


def decode_additional_status_1(data: bytes) -> AdditionalStatus1 | None:
    """Decode rowing additional status 1 (0x0032, 17 bytes)."""
    if _too_short("Additional status 1", data, AdditionalStatus1.MIN_SIZE):
        return None

    return AdditionalStatus1(
        elapsed_time=read_u24(data, 0) / 100.0,
        speed=read_u16(data, 3) / 1000.0,
        stroke_rate=data[5],
        heart_rate=data[6],
        current_pace=read_u16(data, 7) / 100.0,
        average_pace=read_u16(data, 9) / 100.0,
        rest_distance=read_u16(data, 11),
        rest_time=read_u24(data, 13) / 100.0,
        erg_machine_type=ErgMachineType.from_raw(data[16]),
    )


def decode_additional_status_2(data: bytes) -> AdditionalStatus2 | None:
    """Decode rowing additional status 2 (0x0033, 20 bytes)."""
    if _too_short("Additional status 2", data, AdditionalStatus2.MIN_SIZE):
        return None

    return AdditionalStatus2(
        elapsed_time=read_u24(data, 0) / 100.0,
        interval_count=data[3],
        average_power=read_u16(data, 4),
        total_calories=read_u16(data, 6),
        split_interval_avg_pace=read_u16(data, 8) / 100.0,
        split_interval_avg_power=read_u16(data, 10),
        split_interval_avg_calories=read_u16(data, 12),
        last_split_time=read_u24(data, 14) / 10.0,
        last_split_distance=float(read_u24(data, 17)),
    )


def decode_stroke_data(data: bytes) -> StrokeData | None:
    """Decode stroke data (0x0035, 20 bytes)."""
    if _too_short("Stroke data", data, StrokeData.MIN_SIZE):
        return None

    return StrokeData(
        elapsed_time=read_u24(data, 0) / 100.0,
        distance=read_u24(data, 3) / 10.0,
        drive_length=data[6] / 100.0,
        drive_time=data[7] / 100.0,
        recovery_time=read_u16(data, 8) / 100.0,
        stroke_distance=read_u16(data, 10) / 100.0,
        peak_drive_force=read_u16(data, 12) / 10.0,
        average_drive_force=read_u16(data, 14) / 10.0,
        work_per_stroke=read_u16(data, 16) / 10.0,
        stroke_count=read_u16(data, 18),
    )


def decode_additional_stroke_data(data: bytes) -> AdditionalStrokeData | None:
    """Decode additional stroke data (0x0036, 15 bytes)."""
    if _too_short("Additional stroke data", data, AdditionalStrokeData.MIN_SIZE):
        return None

    return AdditionalStrokeData(
        elapsed_time=read_u24(data, 0) / 100.0,
        stroke_power=read_u16(data, 3),
        stroke_calories=read_u16(data, 5),
        stroke_count=read_u16(data, 7),
        projected_work_time=float(read_u24(data, 9)),
        projected_work_distance=float(read_u24(data, 12)),
    )


def decode_split_interval_data(data: bytes) -> SplitIntervalData | None:
    """Decode split/interval data (0x0037, 18 bytes)."""
    if _too_short("Split/interval data", data, SplitIntervalData.MIN_SIZE):
        return None

    return SplitIntervalData(
        elapsed_time=read_u24(data, 0) / 100.0,
        distance=read_u24(data, 3) / 10.0,
        split_interval_time=read_u24(data, 6) / 10.0,
        split_interval_distance=float(read_u24(data, 9)),
        interval_rest_time=float(read_u16(data, 12)),
        interval_rest_distance=float(read_u16(data, 14)),
        split_interval_type=data[16],
        split_interval_number=data[17],
    )


def decode_end_of_workout_summary(data: bytes) -> EndOfWorkoutSummary | None:
    """Decode the end-of-workout summary (0x0039, 20 bytes)."""
    if _too_short("End of workout summary", data, EndOfWorkoutSummary.MIN_SIZE):
        return None

    return EndOfWorkoutSummary(
        log_entry_date=read_u16(data, 0),
        log_entry_time=read_u16(data, 2),
        elapsed_time=read_u24(data, 4) / 100.0,
        distance=read_u24(data, 7) / 10.0,
        average_stroke_rate=data[10],
        ending_heart_rate=data[11],
        average_heart_rate=data[12],
        min_heart_rate=data[13],
        max_heart_rate=data[14],
        drag_factor_average=data[15],
        recovery_heart_rate=data[16],
        workout_type=WorkoutType.from_raw(data[17]),
        average_pace=read_u16(data, 18) / 10.0,
    )


def decode_heart_rate_belt_info(data: bytes) -> HeartRateBeltInfo | None:
    """Decode heart rate belt information (0x003B, 6 bytes)."""
    if _too_short("Heart rate belt info", data, HeartRateBeltInfo.MIN_SIZE):
        return None

    return HeartRateBeltInfo(
        manufacturer_id=data[0],
        device_type=data[1],
        belt_id=read_u32(data, 2),
    )


# ─── DISPATCH ────────────────────────────────────────────────────────

CHARACTERISTIC_DECODERS: dict[Characteristic, Decoder] = {
    Characteristic.GENERAL_STATUS: decode_general_status,
    Characteristic.ADDITIONAL_STATUS_1: decode_additional_status_1,
    Characteristic.ADDITIONAL_STATUS_2: decode_additional_status_2,
    Characteristic.STROKE_DATA: decode_stroke_data,
    Characteristic.ADDITIONAL_STROKE_DATA: decode_additional_stroke_data,
    Characteristic.SPLIT_INTERVAL_DATA: decode_split_interval_data,
    Characteristic.END_OF_WORKOUT_SUMMARY: decode_end_of_workout_summary,
    Characteristic.HEART_RATE_BELT_INFO: decode_heart_rate_belt_info,
}

# Multiplex identifiers are the low byte of the characteristic short ID.
MULTIPLEX_DECODERS: dict[int, Decoder] = {
    0x31: decode_general_status,
    0x32: decode_additional_status_1,
    0x33: decode_additional_status_2,
    0x35: decode_stroke_data,
    0x36: decode_additional_stroke_data,
    0x37: decode_split_interval_data,
    0x39: decode_end_of_workout_summary,
    0x3B: decode_heart_rate_belt_info,
}


def parse_multiplexed(data: bytes) -> tuple[int, bytes] | None:
    """Split a multiplexed value (0x0080) into ``(identifier, remainder)``."""
    if len(data) < 2:
        return None
    return data[0], bytes(data[1:])


def decode_multiplexed(data: bytes) -> TelemetryRecord | None:
    """Decode a multiplexed value with the decoder its identifier selects.

    Unknown identifiers are ignored and yield ``None``.
    """
    parsed = parse_multiplexed(data)
    if parsed is None:
        return None

    identifier, remainder = parsed
    decoder = MULTIPLEX_DECODERS.get(identifier)
    if decoder is None:
        logger.debug(
            "Ignoring multiplexed identifier 0x%02X (%d bytes)",
            identifier,
            len(remainder),
        )
        return None
    return decoder(remainder)


def decode_characteristic(key: str | int, data: bytes) -> TelemetryRecord | None:
    """Decode a notification from any rowing characteristic.

    Args:
        key: Characteristic short ID, UUID or name (see
            :func:`resolve_characteristic`).
        data: The raw characteristic value.

    Returns:
        The decoded record, or ``None`` for unknown characteristics,
        ignored multiplex identifiers and truncated buffers.
    """
    characteristic = resolve_characteristic(key)
    if characteristic is None:
        logger.debug("No decoder for characteristic %r", key)
        return None

    if characteristic == Characteristic.MULTIPLEXED_INFO:
        return decode_multiplexed(data)

    decoder = CHARACTERISTIC_DECODERS.get(characteristic)
    if decoder is None:
        logger.debug("No decoder for characteristic %s", characteristic.name)
        return None
    return decoder(data)
