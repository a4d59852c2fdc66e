"""Destination address validation and host name resolution."""

from __future__ import annotations

import socket

__all__ = [
    "UnknownHostError",
    "is_ip_like",
    "is_valid_ipv4",
    "check_destination",
    "resolve_host_ip",
]


class UnknownHostError(Exception):
    """Raised when a destination cannot be resolved to an address."""

    def __init__(self, host: str, message: str = "ping: unknown host") -> None:
        super().__init__(message)
        self.host = host


def is_ip_like(addr: str) -> bool:
    """Return True if *addr* holds nothing but digits and dots."""
    return all(ch.isdigit() and ch.isascii() or ch == "." for ch in addr)


def is_valid_ipv4(addr: str) -> bool:
    """Return True for a dotted quad of four groups of one to three digits.

    Octet values are not range-checked; only the shape is.
    """
    if addr.count(".") != 3:
        return False
    parts = [part for part in addr.split(".") if part]
    if len(parts) != 4:
        return False
    return all(
        1 <= len(part) <= 3 and all(ch.isascii() and ch.isdigit() for ch in part)
        for part in parts
    )


def check_destination(addr: str) -> None:
    """Make sure *addr* is either a dotted quad or a resolvable host name."""
    if is_ip_like(addr) and is_valid_ipv4(addr):
        return
    try:
        socket.gethostbyname(addr)
    except (OSError, UnicodeError) as exc:
        raise UnknownHostError(addr) from exc


def resolve_host_ip(name: str) -> str:
    """Return the IPv4 address to ping for *name*.

    A dotted quad is returned unchanged; a host name resolves to the last
    address the resolver lists for it.
    """
    if is_valid_ipv4(name):
        return name
    try:
        _, _, addresses = socket.gethostbyname_ex(name)
    except (OSError, UnicodeError) as exc:
        raise UnknownHostError(name) from exc
    if not addresses:
        raise UnknownHostError(name)
    return addresses[-1]