"""ICMP echo request construction and the Internet checksum."""

from __future__ import annotations

import random
import struct
from dataclasses import dataclass

__all__ = [
    "IcmpHeader",
    "checksum",
    "random_id",
    "build_echo_request",
    "ECHO_REQUEST",
    "ECHO_REPLY",
    "PAYLOAD",
    "PACKET_SIZE",
    "DATA_BYTES",
    "TIME_TO_LIVE",
    "TIMEOUT_SECONDS",
]

ECHO_REPLY = 0
ECHO_REQUEST = 8

PAYLOAD = b"Hi, this is Ping echo request!Abcde\x00"
PACKET_SIZE = 64
TIME_TO_LIVE = 64
TIMEOUT_SECONDS = 1.0

_HEADER = struct.Struct("!BBHHH")
DATA_BYTES = PACKET_SIZE - _HEADER.size


@dataclass
class IcmpHeader:
    """The eight-byte ICMP header."""

    type: int = ECHO_REQUEST
    code: int = 0
    checksum: int = 0
    identifier: int = 0
    sequence: int = 0

    SIZE = _HEADER.size

    def pack(self) -> bytes:
        """Return the header in network byte order."""
        return _HEADER.pack(
            self.type & 0xFF,
            self.code & 0xFF,
            self.checksum & 0xFFFF,
            self.identifier & 0xFFFF,
            self.sequence & 0xFFFF,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "IcmpHeader":
        """Read a header from the first eight bytes of *data*."""
        if len(data) < _HEADER.size:
            raise ValueError(
                f"ICMP header needs {_HEADER.size} bytes, got {len(data)}"
            )
        return cls(*_HEADER.unpack_from(data))


def checksum(data: bytes) -> int:
    """Return the 16-bit one's-complement Internet checksum of *data*."""
    if len(data) % 2:
        data = data + b"\x00"
    total = sum(word for (word,) in struct.iter_unpack("!H", data))
    total = (total >> 16) + (total & 0xFFFF)
    total += total >> 16
    return ~total & 0xFFFF


def random_id() -> int:
    """Return a random echo identifier between 2000 and 10000."""
    return random.randint(2000, 10000)


def build_echo_request(identifier: int, sequence: int) -> bytes:
    """Return a complete echo request: header followed by the payload."""
    header = IcmpHeader(ECHO_REQUEST, 0, 0, identifier, sequence)
    header.checksum = checksum(header.pack() + PAYLOAD)
    return header.pack() + PAYLOAD