"""Readable descriptions of received IP and ICMP headers."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass

from pingtool.icmp import IcmpHeader

__all__ = [
    "IpHeader",
    "icmp_message",
    "format_icmp_header",
    "source_hostname",
    "format_received_packet",
    "IP_HEADER_SIZE",
]

IP_HEADER_SIZE = 20

_IP_HEADER = struct.Struct("!BBHHHBBH4s4s")

_DEST_UNREACHABLE = {
    0: "Destination Unreachable: Network Unreachable",
    1: "Destination Host Unreachable",
    2: "Destination Unreachable: Protocol Unreachable",
    3: "Destination Unreachable: Port Unreachable",
}

_REDIRECT = {
    0: "Redirect: Network",
    1: "Redirect: Host",
    2: "Redirect: TOS Network",
    3: "Redirect: TOS Host",
}

_TIME_EXCEEDED = {
    0: "Time to live exceeded",
    1: "Time Exceeded: Fragment reassembly time exceeded",
}

_SIMPLE_TYPES = {
    0: "Echo Reply",
    4: "Source Quench",
    8: "Echo Request",
    12: "Parameter Problem",
    13: "Timestamp Request",
    14: "Timestamp Reply",
    15: "Information Request",
    16: "Information Reply",
    17: "Address Mask Request",
    18: "Address Mask Reply",
}


@dataclass(frozen=True)
class IpHeader:
    """An IPv4 header as read from a raw socket."""

    version: int
    ihl: int
    tos: int
    total_length: int
    identification: int
    fragment_field: int
    ttl: int
    protocol: int
    checksum: int
    source: str
    destination: str
    raw: bytes

    @property
    def length(self) -> int:
        """Header length in bytes."""
        return self.ihl * 4

    @property
    def flags(self) -> int:
        """The three flag bits."""
        return (self.fragment_field >> 13) & 0x7

    @property
    def fragment_offset(self) -> int:
        """The thirteen-bit fragment offset."""
        return self.fragment_field & 0x1FFF

    @classmethod
    def from_bytes(cls, data: bytes) -> "IpHeader":
        """Parse the header at the start of *data*."""
        if len(data) < IP_HEADER_SIZE:
            raise ValueError(
                f"IP header needs {IP_HEADER_SIZE} bytes, got {len(data)}"
            )
        (
            version_ihl,
            tos,
            total_length,
            identification,
            fragment_field,
            ttl,
            protocol,
            header_checksum,
            source,
            destination,
        ) = _IP_HEADER.unpack_from(data)
        ihl = version_ihl & 0x0F
        if len(data) < ihl * 4:
            raise ValueError(
                f"IP header claims {ihl * 4} bytes, got {len(data)}"
            )
        return cls(
            version=version_ihl >> 4,
            ihl=ihl,
            tos=tos,
            total_length=total_length,
            identification=identification,
            fragment_field=fragment_field,
            ttl=ttl,
            protocol=protocol,
            checksum=header_checksum,
            source=socket.inet_ntoa(source),
            destination=socket.inet_ntoa(destination),
            raw=bytes(data[: ihl * 4]),
        )

    def dump(self) -> str:
        """Return a hex dump followed by the decoded header fields."""
        hex_dump = "".join(
            f"{byte:02x}" + (" " if index % 2 else "")
            for index, byte in enumerate(self.raw)
        )
        fields = (
            f"{self.version}  {self.ihl}   {self.tos:02x} "
            f"{self.total_length:04x} {self.identification:04x}   "
            f"{self.flags:x} {self.fragment_offset:04x}  "
            f"{self.ttl:02x}  {self.protocol:02x} {self.checksum:04x} "
            f"{self.source}  {self.destination} "
        )
        return "\n".join(
            [
                "IP Hdr Dump:",
                f" {hex_dump}",
                "Vr HL TOS  Len   ID Flg  off TTL Pro  cks      Src\tDst\tData",
                fields,
            ]
        )


def icmp_message(icmp_type: int, code: int) -> str:
    """Describe an ICMP message by its type and code."""
    if icmp_type == 3:
        return _DEST_UNREACHABLE.get(code, "Destination Unreachable: Unknown Code")
    if icmp_type == 5:
        return _REDIRECT.get(code, "Redirect: Unknown Code")
    if icmp_type == 11:
        return _TIME_EXCEEDED.get(code, "Time Exceeded: Unknown Code")
    try:
        return _SIMPLE_TYPES[icmp_type]
    except KeyError:
        return f"Unknown ICMP Type: {icmp_type}"


def format_icmp_header(header: IcmpHeader, size: int) -> str:
    """Return a one-line summary of an ICMP header."""
    return (
        f"ICMP: type {header.type}, code {header.code}, size {size}, "
        f"id 0x{header.identifier:04x}, seq 0x{header.sequence:04x}"
    )


def source_hostname(address: str) -> str:
    """Return the host name for *address*, or the address if lookup fails."""
    try:
        host, _ = socket.getnameinfo((address, 0), 0)
    except (OSError, UnicodeError):
        return address
    return host


def format_received_packet(
    ip_header: IpHeader, length: int, icmp_header: IcmpHeader
) -> str:
    """Describe a received packet that was not an echo reply."""
    return (
        f"{length - IP_HEADER_SIZE} bytes from "
        f"{source_hostname(ip_header.source)} ({ip_header.source}): "
        f"{icmp_message(icmp_header.type, icmp_header.code)}"
    )