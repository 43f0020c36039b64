"""Big-endian unsigned integer helpers used for the type and length fields.

Encoding masks to the field width instead of raising: the wire only has
room for 8 or 16 bits and the certificate layer treats the low bits as
authoritative.
"""

from __future__ import annotations

import struct


def decode_uint(b: bytes) -> int:
    """Decode an unsigned big-endian integer of any width (empty -> 0)."""
    return int.from_bytes(b, "big", signed=False)


def encode_uint8(n: int) -> bytes:
    """Pack the low 8 bits of `n` as one byte."""
    return struct.pack(">B", n & 0xFF)


def encode_uint16(n: int) -> bytes:
    """Pack the low 16 bits of `n` as an unsigned 16-bit big-endian."""
    return struct.pack(">H", n & 0xFFFF)
