"""Protocol layer: CSAFE framing, command builders, response parsing and telemetry decoding."""

from .framing import build_frame, parse_frame
from .commands import Command, build_command
from .parser import Response, parse_response
from .telemetry import decode_characteristic, decode_multiplexed, parse_multiplexed
