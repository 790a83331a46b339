"""XOR checksum used by CSAFE frames."""

from __future__ import annotations


def xor_checksum(data: bytes) -> int:
    """Return the running XOR of every byte in ``data``.

    An empty input yields 0, so a frame carrying a single content byte
    has that byte as its checksum.
    """
    checksum = 0
    for byte in data:
        checksum ^= byte
    return checksum
