"""Response parsing for CSAFE frames received from the PM."""

from __future__ import annotations

from dataclasses import dataclass

from .framing import split_frame

STATUS_OK = 0x00


@dataclass(frozen=True)
class Response:
    """A validated, unstuffed CSAFE response.

    ``data`` is the frame contents (status byte first); ``checksum`` is
    the checksum byte as received.
    """

    data: bytes
    checksum: int

    @property
    def status(self) -> int | None:
        return self.data[0] if self.data else None

    @property
    def payload(self) -> bytes:
        return self.data[1:] if len(self.data) > 1 else b""

    @property
    def is_success(self) -> bool:
        return self.status == STATUS_OK

    @property
    def state(self) -> int | None:
        """Monitor state machine state (status bits 0-3)."""
        if self.status is None:
            return None
        return self.status & 0x0F

    @property
    def previous_frame_status(self) -> int | None:
        """Outcome of the previous frame (status bits 4-5)."""
        if self.status is None:
            return None
        return (self.status >> 4) & 0x03

    @property
    def frame_toggle(self) -> bool:
        """Frame count toggle (status bit 7)."""
        return bool(self.status and self.status & 0x80)

    def __repr__(self) -> str:
        status = "none" if self.status is None else f"0x{self.status:02X}"
        return (
            f"Response(status={status}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


@dataclass(frozen=True)
class CommandResponse:
    """One ``[command, length, data...]`` chunk of a response payload."""

    command: int
    data: bytes

    def __repr__(self) -> str:
        return (
            f"CommandResponse(command=0x{self.command:02X}, "
            f"data={self.data.hex(' ') if self.data else '(empty)'})"
        )


def parse_response(data: bytes) -> Response | None:
    """Parse a received frame into a Response.

    Returns:
        A ``Response``, or ``None`` if the start/stop flags are wrong, the
        frame is too short, or the checksum fails.
    """
    result = split_frame(data)
    if result is None:
        return None
    contents, checksum = result
    return Response(data=contents, checksum=checksum)


def split_command_responses(payload: bytes) -> list[CommandResponse]:
    """Split a response payload into per-command chunks.

    A chunk whose length byte is missing or overruns the payload is taken
    as a bare command byte with no data.
    """
    responses: list[CommandResponse] = []
    i = 0
    while i < len(payload):
        command = payload[i]
        if i + 1 < len(payload) and i + 2 + payload[i + 1] <= len(payload):
            length = payload[i + 1]
            responses.append(
                CommandResponse(command=command, data=payload[i + 2 : i + 2 + length])
            )
            i += 2 + length
        else:
            responses.append(CommandResponse(command=command, data=b""))
            i += 1
    return responses
