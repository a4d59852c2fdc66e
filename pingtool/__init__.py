"""Send ICMP echo requests to an IPv4 host and report round-trip statistics."""

__version__ = "0.1.0"