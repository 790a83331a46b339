"""PM5 BLE services and characteristics.

All PM5 UUIDs share the base ``CE06xxxx-43E5-11E4-916C-0800200C9A66``
with a 16-bit short ID in the first group.
"""

from __future__ import annotations

from enum import IntEnum

BASE_UUID_FMT = "ce06{short:04x}-43e5-11e4-916c-0800200c9a66"


def c2_uuid(short: int) -> str:
    """Expand a PM5 short ID into its full 128-bit UUID string."""
    return BASE_UUID_FMT.format(short=short)


class Service(IntEnum):
    DEVICE_INFORMATION = 0x0010
    CONTROL = 0x0020
    ROWING = 0x0030


class Characteristic(IntEnum):
    """Characteristic short IDs."""

    # Device information service
    MODEL_NUMBER = 0x0011
    SERIAL_NUMBER = 0x0012
    HARDWARE_REVISION = 0x0013
    FIRMWARE_REVISION = 0x0014
    MANUFACTURER = 0x0015
    ERG_MACHINE_TYPE = 0x0016
    ATT_MTU = 0x0017
    LL_DLE = 0x0018

    # Control service
    PM_RECEIVE = 0x0021  # CSAFE frames to the PM
    PM_TRANSMIT = 0x0022  # CSAFE frames from the PM

    # Rowing service
    GENERAL_STATUS = 0x0031
    ADDITIONAL_STATUS_1 = 0x0032
    ADDITIONAL_STATUS_2 = 0x0033
    SAMPLE_RATE = 0x0034
    STROKE_DATA = 0x0035
    ADDITIONAL_STROKE_DATA = 0x0036
    SPLIT_INTERVAL_DATA = 0x0037
    END_OF_WORKOUT_SUMMARY = 0x0039
    HEART_RATE_BELT_INFO = 0x003B
    MULTIPLEXED_INFO = 0x0080

    @property
    def uuid(self) -> str:
        return c2_uuid(self.value)


class SampleRate(IntEnum):
    """Notification rates written to the sample-rate characteristic."""

    ONE_SECOND = 0
    HALF_SECOND = 1  # PM5 default
    QUARTER_SECOND = 2
    TENTH_SECOND = 3


DEFAULT_SAMPLE_RATE = SampleRate.HALF_SECOND


def build_sample_rate(rate: SampleRate | int) -> bytes:
    """Build the one-byte value written to the sample-rate characteristic."""
    try:
        rate = SampleRate(rate)
    except ValueError:
        raise ValueError(
            f"Sample rate must be one of {[r.value for r in SampleRate]}, got {rate}"
        ) from None
    return bytes([rate])


_UUID_TO_CHARACTERISTIC: dict[str, Characteristic] = {
    c.uuid: c for c in Characteristic
}


def resolve_characteristic(key: str | int) -> Characteristic | None:
    """Resolve a characteristic from a short ID, UUID string, or name.

    Accepts ``0x0031``/``49``, ``"0031"``/``"0x0031"``, the full UUID in
    any case, or the enum name (``"general_status"``). Returns ``None`` for
    anything unknown.
    """
    if isinstance(key, int):
        try:
            return Characteristic(key)
        except ValueError:
            return None

    text = key.strip().lower()
    if text in _UUID_TO_CHARACTERISTIC:
        return _UUID_TO_CHARACTERISTIC[text]

    name = text.upper().replace("-", "_").replace(" ", "_")
    if name in Characteristic.__members__:
        return Characteristic[name]

    try:
        return Characteristic(int(text, 16))
    except ValueError:
        return None
