"""CSAFE frame builder and parser.

Frame layout::

    +-------+------------+------------+-------------------+----------+------+
    | Start | Dest (ext) | Src (ext)  | Stuffed contents  | Checksum | Stop |
    | 1 byte| 1 byte     | 1 byte     | variable length   | 1 byte   | 1 B  |
    +-------+------------+------------+-------------------+----------+------+

- Start: 0xF1 for a standard frame, 0xF0 for an extended (addressed) frame
- Dest/Src: only present in extended frames, never stuffed
- Contents: command bytes with 0xF0-0xF3 escaped as 0xF3 0x00-0x03
- Checksum: XOR of every byte between the start flag and the checksum,
  taken over the stuffed bytes (address bytes included)
- Stop: 0xF2
"""

from __future__ import annotations

import logging

from ..utils.checksum import xor_checksum

logger = logging.getLogger(__name__)

EXTENDED_START_FLAG = 0xF0
STANDARD_START_FLAG = 0xF1
STOP_FLAG = 0xF2
STUFF_FLAG = 0xF3

START_FLAGS = (STANDARD_START_FLAG, EXTENDED_START_FLAG)

# Reserved value -> escape index. Index n always decodes to 0xF0 + n.
STUFF_MAP: dict[int, int] = {
    EXTENDED_START_FLAG: 0x00,
    STANDARD_START_FLAG: 0x01,
    STOP_FLAG: 0x02,
    STUFF_FLAG: 0x03,
}
UNSTUFF_MAP: dict[int, int] = {index: value for value, index in STUFF_MAP.items()}

MIN_FRAME_SIZE = 4  # start + content + checksum + stop


def stuff(data: bytes) -> bytes:
    """Escape the four reserved flag values inside frame contents."""
    out = bytearray()
    for byte in data:
        index = STUFF_MAP.get(byte)
        if index is None:
            out.append(byte)
        else:
            out += bytes([STUFF_FLAG, index])
    return bytes(out)


def unstuff(data: bytes) -> bytes:
    """Reverse :func:`stuff`.

    A stuff flag that is not followed by a valid escape index (or that is
    the last byte) is kept as a literal 0xF3 and the byte after it is
    processed normally.
    """
    out = bytearray()
    i = 0
    n = len(data)
    while i < n:
        byte = data[i]
        if byte == STUFF_FLAG and i + 1 < n and data[i + 1] in UNSTUFF_MAP:
            out.append(UNSTUFF_MAP[data[i + 1]])
            i += 2
            continue
        out.append(byte)
        i += 1
    return bytes(out)


def build_frame(
    contents: bytes,
    extended: bool = False,
    destination: int | None = None,
    source: int | None = None,
) -> bytes:
    """Wrap command contents into a complete CSAFE frame.

    Args:
        contents: Unstuffed command bytes.
        extended: Build an extended frame (0xF0 start flag + addressing).
        destination: Destination address, extended frames only.
        source: Source address, extended frames only.

    Returns:
        The ready-to-transmit frame bytes.
    """
    if extended:
        frame = bytearray([EXTENDED_START_FLAG])
        if destination is not None:
            frame.append(destination & 0xFF)
        if source is not None:
            frame.append(source & 0xFF)
    else:
        frame = bytearray([STANDARD_START_FLAG])

    frame += stuff(contents)
    frame.append(xor_checksum(frame[1:]))
    frame.append(STOP_FLAG)
    return bytes(frame)


def split_frame(data: bytes) -> tuple[bytes, int] | None:
    """Validate a received frame and return ``(contents, checksum)``.

    ``contents`` is already unstuffed. Returns ``None`` if the frame is too
    short, has the wrong start/stop flag, or fails the checksum.
    """
    if len(data) < MIN_FRAME_SIZE:
        logger.debug("Frame rejected: %d bytes is below minimum", len(data))
        return None

    if data[0] not in START_FLAGS:
        logger.debug("Frame rejected: bad start flag 0x%02X", data[0])
        return None

    if data[-1] != STOP_FLAG:
        logger.debug("Frame rejected: bad stop flag 0x%02X", data[-1])
        return None

    body = data[1:-1]
    stuffed = body[:-1]
    received_checksum = body[-1]
    if xor_checksum(stuffed) != received_checksum:
        logger.debug(
            "Frame rejected: checksum 0x%02X != 0x%02X",
            received_checksum,
            xor_checksum(stuffed),
        )
        return None

    return unstuff(stuffed), received_checksum


def parse_frame(data: bytes) -> bytes | None:
    """Parse a received frame into its unstuffed contents.

    Returns:
        The contents bytes, or ``None`` if the frame is malformed.
    """
    result = split_frame(data)
    if result is None:
        return None
    return result[0]
