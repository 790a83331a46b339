"""Device information model (PM5 device information service, 0x0010)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Mapping

from ..protocol.characteristics import Characteristic
from ..utils.fields import read_u16
from .enums import ErgMachineType

DEFAULT_ATT_MTU = 23
DEFAULT_LL_DLE = 27


def decode_string(data: bytes) -> str:
    """Decode a characteristic string value, dropping NUL padding."""
    return data.split(b"\x00")[0].decode("utf-8", errors="replace").strip()


@dataclass(frozen=True)
class DeviceInfo:
    """Identification read from the device information characteristics."""

    model_number: str = ""
    serial_number: str = ""
    hardware_revision: str = ""
    firmware_revision: str = ""
    manufacturer: str = ""
    erg_machine_type: ErgMachineType = ErgMachineType.STATIC_D
    att_mtu: int = DEFAULT_ATT_MTU
    ll_dle: int = DEFAULT_LL_DLE

    @classmethod
    def from_characteristics(cls, values: Mapping[int, bytes]) -> DeviceInfo:
        """Build device info from raw characteristic values.

        Args:
            values: Raw values keyed by characteristic short ID
                (0x0011-0x0018). Missing entries keep their defaults.
        """
        def text(char: Characteristic) -> str:
            raw = values.get(char)
            return decode_string(raw) if raw else ""

        def u16(char: Characteristic, default: int) -> int:
            raw = values.get(char)
            if not raw or len(raw) < 2:
                return default
            return read_u16(raw, 0)

        erg_raw = values.get(Characteristic.ERG_MACHINE_TYPE)
        erg_machine_type = (
            ErgMachineType.from_raw(erg_raw[0]) if erg_raw else ErgMachineType.STATIC_D
        )

        return cls(
            model_number=text(Characteristic.MODEL_NUMBER),
            serial_number=text(Characteristic.SERIAL_NUMBER),
            hardware_revision=text(Characteristic.HARDWARE_REVISION),
            firmware_revision=text(Characteristic.FIRMWARE_REVISION),
            manufacturer=text(Characteristic.MANUFACTURER),
            erg_machine_type=erg_machine_type,
            att_mtu=u16(Characteristic.ATT_MTU, DEFAULT_ATT_MTU),
            ll_dle=u16(Characteristic.LL_DLE, DEFAULT_LL_DLE),
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["erg_machine_type"] = self.erg_machine_type.name
        return d
