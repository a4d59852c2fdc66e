"""Per-packet round-trip timing and the final ping statistics."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

__all__ = [
    "EPSILON",
    "PacketTimer",
    "PingStatistics",
    "packet_loss_percent",
]

EPSILON = 1e-6


@dataclass
class PacketTimer:
    """Send and receive times of one echo request."""

    sequence: int
    send_time: float
    recv_time: float | None = None
    error: bool = False

    def elapsed_ms(self) -> float:
        """Round-trip time in milliseconds, or EPSILON if there was none."""
        if self.error or self.recv_time is None:
            return EPSILON
        return (self.recv_time - self.send_time) * 1000.0


def packet_loss_percent(sent: int, lost: int) -> int:
    """Return the whole-number percentage of lost packets."""
    if sent == 0 or lost == 0:
        return 0
    return (lost * 100) // sent


@dataclass
class PingStatistics:
    """Counters and timers for every echo request sent."""

    timers: list[PacketTimer] = field(default_factory=list)
    sent: int = 0
    lost: int = 0

    def _find(self, sequence: int) -> PacketTimer | None:
        return next((t for t in self.timers if t.sequence == sequence), None)

    def record_sent(self, sequence: int, now: float | None = None) -> PacketTimer:
        """Start timing a request; it counts as lost until a reply comes."""
        timer = PacketTimer(sequence, time.time() if now is None else now)
        self.timers.append(timer)
        self.sent += 1
        self.lost += 1
        return timer

    def record_reply(
        self, sequence: int, length: int, now: float | None = None
    ) -> float:
        """Record a reply of *length* bytes and return its round-trip time.

        A non-positive length marks the request as failed. A successful
        reply is no longer counted as lost.
        """
        timer = self._find(sequence)
        if timer is not None:
            if length <= 0:
                timer.error = True
            else:
                timer.recv_time = time.time() if now is None else now
        ms = self.round_trip_ms(sequence)
        if ms > EPSILON:
            self.lost -= 1
        return ms

    def record_failure(self, sequence: int) -> None:
        """Mark the request with *sequence* as unanswered."""
        timer = self._find(sequence)
        if timer is not None:
            timer.error = True

    def round_trip_ms(self, sequence: int) -> float:
        """Round-trip time of *sequence* in milliseconds, or EPSILON."""
        timer = self._find(sequence)
        return EPSILON if timer is None else timer.elapsed_ms()

    def stddev(self, count: int, average: float) -> float:
        """Standard deviation of the answered round-trip times."""
        if count <= 0:
            return 0.0
        squares = [
            (ms - average) ** 2
            for ms in (t.elapsed_ms() for t in self.timers)
            if ms != EPSILON
        ]
        total = EPSILON + sum(squares)
        mean = total / len(squares) if total != EPSILON else 0.0
        return math.sqrt(mean)

    def summary(self, address: str) -> str:
        """Return the closing statistics report for *address*."""
        lost_count = self.lost
        received = self.sent - self.lost
        low = high = average = EPSILON
        entries = 0
        if self.timers and received:
            for index, timer in enumerate(self.timers):
                ms = timer.elapsed_ms()
                if ms == EPSILON:
                    lost_count += 1
                    continue
                if index == 0:
                    low = high = ms
                else:
                    low = min(low, ms)
                    high = max(high, ms)
                average += ms
            entries = len(self.timers)
        if average != EPSILON:
            average /= entries
        deviation = self.stddev(entries - lost_count, average)
        lines = [
            f"--- {address} ping statistics ---",
            f"{self.sent} packets transmitted, {received} packets received, "
            f"{packet_loss_percent(self.sent, self.lost)}% packet loss",
        ]
        if received > 0:
            lines.append(
                "round-trip min/avg/max/stddev = "
                f"{low:.3f}/{average:.3f}/{high:.3f}/{deviation:.3f} ms"
            )
        return "\n".join(lines)