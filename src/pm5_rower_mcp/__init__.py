"""CSAFE framing, command building and telemetry decoding for the Concept2 PM5."""

__version__ = "0.1.0"
