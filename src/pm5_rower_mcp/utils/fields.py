"""Little-endian unsigned field readers for telemetry records.

Each reader returns 0 when the buffer is too short to hold the field at
``offset``. Whole-record length checks are done by the decoders; this is
only a per-field safety net.
"""

from __future__ import annotations


def _read_le(data: bytes, offset: int, width: int) -> int:
    if offset < 0 or offset + width > len(data):
        return 0
    return int.from_bytes(data[offset : offset + width], "little")


def read_u16(data: bytes, offset: int = 0) -> int:
    """Read a 16-bit little-endian unsigned integer."""
    return _read_le(data, offset, 2)


def read_u24(data: bytes, offset: int = 0) -> int:
    """Read a 24-bit little-endian unsigned integer."""
    return _read_le(data, offset, 3)


def read_u32(data: bytes, offset: int = 0) -> int:
    """Read a 32-bit little-endian unsigned integer."""
    return _read_le(data, offset, 4)
