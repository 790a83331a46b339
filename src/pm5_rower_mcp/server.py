"""MCP server entry point for the Concept2 PM5 codec.

Exposes CSAFE command building, frame parsing and telemetry decoding as
tools, resources, and prompts via the Model Context Protocol using the
official Python MCP SDK with stdio transport. Nothing here talks to a
device: inputs and outputs are hex strings captured from or sent to the
BLE transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .models.enums import ENUMS
from .protocol.characteristics import Characteristic, resolve_characteristic
from .protocol.commands import COMMAND_BUILDERS, Command
from .protocol.framing import build_frame
from .protocol.parser import parse_response, split_command_responses
from .protocol.telemetry import (
    CHARACTERISTIC_DECODERS,
    MULTIPLEX_DECODERS,
    decode_characteristic,
    parse_multiplexed,
)
from .utils.conversions import pace_to_speed, pace_to_watts, watts_to_pace

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "pm5-rower",
    instructions="CSAFE framing and telemetry decoding for the Concept2 PM5 rowing monitor",
)


def _parse_hex(text: str) -> bytes:
    """Parse hex input, tolerating spaces, colons and a 0x prefix."""
    cleaned = text.strip().lower().replace("0x", "")
    for sep in (" ", ":", "-", ","):
        cleaned = cleaned.replace(sep, "")
    return bytes.fromhex(cleaned)


def _hex(data: bytes) -> str:
    return data.hex(" ")


# ─── COMMAND TOOLS ───────────────────────────────────────────────────

@mcp.tool()
def list_commands() -> dict[str, Any]:
    """List the named CSAFE command builders and their opcodes."""
    return {
        "builders": sorted(COMMAND_BUILDERS),
        "opcodes": {c.name: f"0x{c.value:02X}" for c in Command},
    }


@mcp.tool()
def build_command(name: str, arguments: dict[str, int] | None = None) -> dict[str, Any]:
    """Build the frame(s) for a named PM5 command.

    Args:
        name: Builder name from list_commands, e.g. "set_workout_distance".
        arguments: Keyword arguments for the builder, e.g. {"meters": 2000}.
    """
    builder = COMMAND_BUILDERS.get(name)
    if builder is None:
        return {"error": f"Unknown command '{name}'. Valid: {sorted(COMMAND_BUILDERS)}"}

    try:
        result = builder(**(arguments or {}))
    except (TypeError, ValueError) as e:
        return {"error": str(e)}

    frames = result if isinstance(result, list) else [result]
    logger.info("Built %s: %d frame(s)", name, len(frames))
    return {"command": name, "frames": [_hex(f) for f in frames]}


@mcp.tool()
def encode_frame(
    contents_hex: str,
    extended: bool = False,
    destination: int | None = None,
    source: int | None = None,
) -> dict[str, Any]:
    """Wrap raw command contents into a stuffed, checksummed CSAFE frame.

    Args:
        contents_hex: Unstuffed contents as hex, e.g. "76 04 13 02 01 01".
        extended: Use the extended (addressed) start flag.
        destination: Destination address for extended frames.
        source: Source address for extended frames.
    """
    try:
        contents = _parse_hex(contents_hex)
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    frame = build_frame(contents, extended, destination, source)
    return {"frame": _hex(frame), "checksum": f"0x{frame[-2]:02X}"}


@mcp.tool()
def parse_csafe_response(frame_hex: str) -> dict[str, Any]:
    """Validate and unwrap a CSAFE frame received from the PM.

    Args:
        frame_hex: The complete frame as hex, including start and stop flags.
    """
    try:
        data = _parse_hex(frame_hex)
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    response = parse_response(data)
    if response is None:
        return {"valid": False, "error": "Malformed frame or checksum mismatch"}

    return {
        "valid": True,
        "contents": _hex(response.data),
        "checksum": f"0x{response.checksum:02X}",
        "status": response.status,
        "success": response.is_success,
        "state": response.state,
        "payload": _hex(response.payload),
        "commands": [
            {"command": f"0x{r.command:02X}", "data": _hex(r.data)}
            for r in split_command_responses(response.payload)
        ],
    }


# ─── TELEMETRY TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def decode_telemetry(characteristic: str, data_hex: str) -> dict[str, Any]:
    """Decode a rowing characteristic notification.

    Args:
        characteristic: Short ID ("0031"), UUID, or name ("general_status").
        data_hex: The raw characteristic value as hex.
    """
    resolved = resolve_characteristic(characteristic)
    if resolved is None:
        return {"error": f"Unknown characteristic '{characteristic}'"}

    try:
        data = _parse_hex(data_hex)
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    record = decode_characteristic(resolved, data)
    if record is None:
        return {
            "characteristic": resolved.name,
            "decoded": False,
            "length": len(data),
        }

    return {
        "characteristic": resolved.name,
        "decoded": True,
        "record": type(record).__name__,
        "fields": record.to_dict(),
    }


@mcp.tool()
def decode_multiplexed_record(data_hex: str) -> dict[str, Any]:
    """Decode a multiplexed (0x0080) notification.

    Args:
        data_hex: The raw value as hex; the first byte is the record identifier.
    """
    try:
        data = _parse_hex(data_hex)
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    parsed = parse_multiplexed(data)
    if parsed is None:
        return {"decoded": False, "error": "Multiplexed value too short"}

    identifier, remainder = parsed
    decoder = MULTIPLEX_DECODERS.get(identifier)
    record = decoder(remainder) if decoder else None
    result: dict[str, Any] = {
        "identifier": f"0x{identifier:02X}",
        "decoded": record is not None,
    }
    if record is not None:
        result["record"] = type(record).__name__
        result["fields"] = record.to_dict()
    elif decoder is None:
        result["ignored"] = True
    return result


@mcp.tool()
def convert_pace(
    pace: float | None = None,
    watts: float | None = None,
) -> dict[str, Any]:
    """Convert between pace (seconds per 500 m), power and speed.

    Args:
        pace: Pace in seconds per 500 m.
        watts: Power in watts (used when pace is not given).
    """
    if pace is None and watts is None:
        return {"error": "Provide pace or watts"}
    if pace is None:
        pace = watts_to_pace(watts)
    return {
        "pace": pace,
        "watts": pace_to_watts(pace),
        "speed": pace_to_speed(pace),
    }


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("pm5://catalog/characteristics")
def resource_characteristics() -> str:
    """All PM5 characteristics with UUIDs and whether they are decodable."""
    chars = [
        {
            "name": c.name,
            "short_id": f"0x{c.value:04X}",
            "uuid": c.uuid,
            "decodable": c in CHARACTERISTIC_DECODERS
            or c == Characteristic.MULTIPLEXED_INFO,
        }
        for c in Characteristic
    ]
    return json.dumps({"characteristics": chars, "count": len(chars)})


@mcp.resource("pm5://catalog/commands")
def resource_commands() -> str:
    """CSAFE command opcodes and named builders."""
    return json.dumps(list_commands())


@mcp.resource("pm5://catalog/enums")
def resource_enums() -> str:
    """Raw value tables for every enumerated telemetry field."""
    tables = {
        field: {
            "values": {m.value: m.name for m in enum},
            "default": enum.default().name,
        }
        for field, enum in ENUMS.items()
    }
    return json.dumps({"enums": tables})


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def analyze_capture(capture: str) -> str:
    """Guide the AI through decoding a captured PM5 BLE session.

    Args:
        capture: Lines of "<characteristic> <hex>" from a BLE sniffer or log.
    """
    return f"""Decode this PM5 BLE capture:

{capture}

For each line:
- Notifications on 0x0031-0x003B: use decode_telemetry with the characteristic ID
- Notifications on 0x0080: use decode_multiplexed_record
- Writes to 0x0021 / notifications on 0x0022: use parse_csafe_response

Then summarize the workout: type, state changes, distance, pace and power
trends, stroke rate, and heart rate. Flag frames that failed to decode."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
