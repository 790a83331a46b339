"""Tests for CSAFE response parsing."""

from pm5_rower_mcp.protocol.framing import build_frame
from pm5_rower_mcp.protocol.parser import (
    CommandResponse,
    Response,
    parse_response,
    split_command_responses,
)


def test_parse_status_only():
    """A response with just a status byte has an empty payload."""
    response = parse_response(build_frame(b"\x00"))
    assert response == Response(data=b"\x00", checksum=0x00)
    assert response.status == 0
    assert response.is_success
    assert response.payload == b""


def test_parse_with_payload():
    """Status byte is split from the payload."""
    response = parse_response(build_frame(bytes([0x01, 0x91, 0x02, 0x05, 0x06])))
    assert response.status == 0x01
    assert not response.is_success
    assert response.payload == bytes([0x91, 0x02, 0x05, 0x06])


def test_parse_minimal_frame():
    """The smallest valid frame carries a single status byte."""
    response = parse_response(bytes([0xF1, 0x00, 0x00, 0xF2]))
    assert response is not None
    assert response.data == b"\x00"


def test_empty_response_has_no_status():
    empty = Response(data=b"", checksum=0)
    assert empty.status is None
    assert empty.state is None
    assert not empty.is_success
    assert empty.payload == b""


def test_status_bits():
    """State, previous frame status and frame toggle come from the status byte."""
    response = Response(data=bytes([0b1010_0101]), checksum=0)
    assert response.state == 0x05
    assert response.previous_frame_status == 0x02
    assert response.frame_toggle is True

    response = Response(data=bytes([0x01]), checksum=0)
    assert response.state == 0x01
    assert response.previous_frame_status == 0
    assert response.frame_toggle is False


def test_parse_invalid_frames():
    """Malformed frames yield None."""
    assert parse_response(b"") is None
    assert parse_response(bytes([0xF1, 0x00, 0x01, 0xF2])) is None
    assert parse_response(bytes([0xF1, 0x00, 0x00, 0x00])) is None


def test_parse_unstuffs_payload():
    """Stuffed bytes in a response are restored."""
    contents = bytes([0x00, 0x94, 0x02, 0xF2, 0xF0])
    assert parse_response(build_frame(contents)).payload == bytes([0x94, 0x02, 0xF2, 0xF0])


def test_repr():
    response = Response(data=bytes([0x09, 0xAB]), checksum=0xA2)
    assert repr(response) == "Response(status=0x09, payload=ab)"
    assert repr(Response(data=b"", checksum=0)) == "Response(status=none, payload=(empty))"


def test_split_command_responses():
    """Payloads split into [command, length, data] chunks."""
    payload = bytes([0x91, 0x03, 0x01, 0x02, 0x03, 0x80, 0x00])
    assert split_command_responses(payload) == [
        CommandResponse(command=0x91, data=bytes([0x01, 0x02, 0x03])),
        CommandResponse(command=0x80, data=b""),
    ]


def test_split_command_responses_truncated():
    """A chunk that overruns the payload is taken as a bare command."""
    assert split_command_responses(bytes([0x94, 0x09, 0x01])) == [
        CommandResponse(command=0x94, data=b""),
        CommandResponse(command=0x09, data=b""),
        CommandResponse(command=0x01, data=b""),
    ]
    assert split_command_responses(bytes([0x80])) == [
        CommandResponse(command=0x80, data=b"")
    ]
    assert split_command_responses(b"") == []
