"""Byte-level helpers shared by the protocol layer."""
