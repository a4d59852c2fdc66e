"""The ping command: send ICMP echo requests and report the replies."""

from __future__ import annotations

import socket
import sys
import time
from typing import Callable, Sequence, TextIO

from pingtool.address import UnknownHostError, resolve_host_ip
from pingtool.icmp import (
    DATA_BYTES,
    ECHO_REPLY,
    ECHO_REQUEST,
    PACKET_SIZE,
    TIME_TO_LIVE,
    TIMEOUT_SECONDS,
    IcmpHeader,
    build_echo_request,
    random_id,
)
from pingtool.messages import IpHeader, format_icmp_header, format_received_packet
from pingtool.options import HelpRequested, OptionError, parse_arguments
from pingtool.stats import EPSILON, PingStatistics

__all__ = ["Pinger", "open_socket", "main", "RECV_BUFFER_SIZE"]

RECV_BUFFER_SIZE = 1024


def open_socket(ttl: int = TIME_TO_LIVE) -> socket.socket:
    """Open a raw ICMP socket with the given time-to-live and broadcast allowed."""
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
    except OSError as exc:
        raise OSError("Error opening the socket") from exc
    for level, option, value, message in (
        (socket.IPPROTO_IP, socket.IP_TTL, ttl, "Error setting time-to-live ttl"),
        (socket.SOL_SOCKET, socket.SO_BROADCAST, 1, "Error setting broadcast"),
    ):
        try:
            sock.setsockopt(level, option, value)
        except OSError as exc:
            sock.close()
            raise OSError(message) from exc
    return sock


class Pinger:
    """Sends one echo request a second until interrupted, then reports."""

    def __init__(
        self,
        sock,
        destination: str,
        resolved_address: str,
        identifier: int | None = None,
        verbose: bool = False,
        *,
        interval: float = 1.0,
        sleep: Callable[[float], None] | None = None,
        clock: Callable[[], float] | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.destination = destination
        self.resolved_address = resolved_address
        self.identifier = random_id() if identifier is None else identifier
        self.verbose = verbose
        self.interval = interval
        self.sequence = 0
        self.statistics = PingStatistics()
        self._sock = sock
        self._sleep = sleep if sleep is not None else time.sleep
        self._clock = clock if clock is not None else time.time
        self._out = out
        self._request = build_echo_request(self.identifier, self.sequence)

    def banner(self) -> str:
        """The line printed before the first request goes out."""
        line = f"PING {self.destination} ({self.resolved_address}): {DATA_BYTES} data bytes"
        if self.verbose:
            line += f", id 0x{self.identifier:04X} = {self.identifier}"
        return line

    def run(self) -> int:
        """Ping until interrupted, print the statistics and return 0."""
        self._sock.settimeout(TIMEOUT_SECONDS)
        self._emit(self.banner())
        try:
            while True:
                self._ping_once()
        except KeyboardInterrupt:
            self._emit(self.statistics.summary(self.destination))
            return 0
        finally:
            self._sock.close()

    def _emit(self, text: str) -> None:
        print(text, file=self._out if self._out is not None else sys.stdout)

    def _ping_once(self) -> None:
        self._request = build_echo_request(self.identifier, self.sequence)
        try:
            self._sock.sendto(self._request, (self.resolved_address, 0))
        except OSError as exc:
            self._emit(f"ping: sendto: {exc.strerror or exc}")
            return
        self.statistics.record_sent(self.sequence, self._clock())
        try:
            self._await_reply()
        except TimeoutError:
            self.statistics.record_failure(self.sequence)
        self._sleep(self.interval)
        self.sequence += 1

    def _await_reply(self) -> None:
        while True:
            try:
                data = self._sock.recv(RECV_BUFFER_SIZE)
            except TimeoutError:
                raise
            except OSError:
                self.statistics.record_reply(self.sequence, -1)
                return
            if not data:
                self.statistics.record_reply(self.sequence, 0)
                return
            try:
                ip_header = IpHeader.from_bytes(data)
                icmp_header = IcmpHeader.unpack(data[ip_header.length:])
            except ValueError:
                self.statistics.record_failure(self.sequence)
                return
            if icmp_header.type == ECHO_REQUEST:
                # Our own request seen on the loopback; keep waiting.
                continue
            self._handle_packet(data, ip_header, icmp_header)
            return

    def _handle_packet(
        self, data: bytes, ip_header: IpHeader, icmp_header: IcmpHeader
    ) -> None:
        length = len(data)
        if icmp_header.type == ECHO_REPLY:
            ms = self.statistics.record_reply(self.sequence, length, self._clock())
            if ms > EPSILON:
                self._emit(
                    f"{length} bytes from {ip_header.source}: "
                    f"icmp_seq={icmp_header.sequence} ttl={ip_header.ttl} "
                    f"time={ms:.3f} ms"
                )
            return
        if self.verbose:
            self._emit(format_received_packet(ip_header, length, icmp_header))
            self._emit(ip_header.dump())
            self._emit(format_icmp_header(IcmpHeader.unpack(self._request), PACKET_SIZE))
        self.statistics.record_failure(self.sequence)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ping command and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        options = parse_arguments(args)
    except HelpRequested as exc:
        print(exc.usage)
        return 1
    except (OptionError, UnknownHostError) as exc:
        print(exc)
        return 1
    try:
        sock = open_socket(TIME_TO_LIVE)
    except OSError as exc:
        print(exc)
        return 1
    try:
        resolved = resolve_host_ip(options.destination)
    except UnknownHostError:
        sock.close()
        return 1
    pinger = Pinger(sock, options.destination, resolved, verbose=options.verbose)
    return pinger.run()


if __name__ == "__main__":
    sys.exit(main())