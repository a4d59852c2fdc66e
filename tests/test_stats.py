import pytest

from pingtool.stats import EPSILON, PacketTimer, PingStatistics, packet_loss_percent


def test_elapsed_ms_from_times():
    timer = PacketTimer(0, send_time=1.0, recv_time=1.25)
    assert timer.elapsed_ms() == pytest.approx(250.0)


def test_elapsed_ms_error_is_epsilon():
    timer = PacketTimer(0, send_time=1.0, recv_time=1.25, error=True)
    assert timer.elapsed_ms() == EPSILON


def test_elapsed_ms_pending_is_epsilon():
    assert PacketTimer(3, send_time=1.0).elapsed_ms() == EPSILON


@pytest.mark.parametrize("sent, lost", [(0, 0), (0, 3), (5, 0)])
def test_packet_loss_zero_cases(sent, lost):
    assert packet_loss_percent(sent, lost) == 0


@pytest.mark.parametrize("count", [1, 4, 7])
def test_packet_loss_all_lost(count):
    assert packet_loss_percent(count, count) == 100


def test_record_sent_counts_as_lost():
    stats = PingStatistics()
    stats.record_sent(0, now=5.0)
    assert stats.sent == 1
    assert stats.lost == 1
    assert stats.timers[0].sequence == 0
    assert stats.timers[0].send_time == 5.0


def test_record_reply_returns_rtt_and_clears_loss():
    stats = PingStatistics()
    stats.record_sent(0, now=1.0)
    ms = stats.record_reply(0, 64, now=1.5)
    assert ms == pytest.approx(500.0)
    assert stats.lost == 0
    assert stats.round_trip_ms(0) == pytest.approx(500.0)


def test_record_reply_with_bad_length_marks_error():
    stats = PingStatistics()
    stats.record_sent(0, now=1.0)
    assert stats.record_reply(0, 0, now=1.5) == EPSILON
    assert stats.timers[0].error is True
    assert stats.lost == 1


def test_record_failure():
    stats = PingStatistics()
    stats.record_sent(2, now=1.0)
    stats.record_failure(2)
    assert stats.round_trip_ms(2) == EPSILON
    assert stats.lost == 1


def test_round_trip_unknown_sequence():
    stats = PingStatistics()
    stats.record_sent(0, now=1.0)
    assert stats.round_trip_ms(99) == EPSILON


def test_stddev_no_packets():
    assert PingStatistics().stddev(0, 10.0) == 0.0


def test_stddev_equal_times_is_zero():
    stats = PingStatistics()
    for seq in range(3):
        stats.record_sent(seq, now=float(seq))
        stats.record_reply(seq, 64, now=seq + 0.02)
    assert stats.stddev(3, stats.round_trip_ms(0)) == pytest.approx(0.0, abs=1e-3)


def test_stddev_symmetric_spread():
    stats = PingStatistics()
    stats.record_sent(0, now=0.0)
    stats.record_reply(0, 64, now=0.010)
    stats.record_sent(1, now=1.0)
    stats.record_reply(1, 64, now=1.030)
    low, high = stats.round_trip_ms(0), stats.round_trip_ms(1)
    result = stats.stddev(2, (low + high) / 2)
    assert result == pytest.approx((high - low) / 2, rel=1e-6)


def test_summary_with_replies():
    stats = PingStatistics()
    stats.record_sent(0, now=0.0)
    stats.record_reply(0, 64, now=0.010)
    stats.record_sent(1, now=1.0)
    stats.record_reply(1, 64, now=1.020)
    lines = stats.summary("example.com").split("\n")
    assert lines[0] == "--- example.com ping statistics ---"
    assert lines[1] == "2 packets transmitted, 2 packets received, 0% packet loss"
    prefix = "round-trip min/avg/max/stddev = "
    assert lines[2].startswith(prefix) and lines[2].endswith(" ms")
    low, avg, high, dev = (
        float(v) for v in lines[2][len(prefix):-3].split("/")
    )
    assert low == pytest.approx(10.0, abs=1e-3)
    assert high == pytest.approx(20.0, abs=1e-3)
    assert avg == pytest.approx((low + high) / 2, abs=1e-3)
    assert dev == pytest.approx((high - low) / 2, abs=1e-3)


def test_summary_all_lost():
    stats = PingStatistics()
    stats.record_sent(0, now=0.0)
    stats.record_failure(0)
    stats.record_sent(1, now=1.0)
    stats.record_failure(1)
    lines = stats.summary("10.0.0.1").split("\n")
    assert len(lines) == 2
    assert lines[1] == "2 packets transmitted, 0 packets received, 100% packet loss"


def test_summary_partial_loss():
    stats = PingStatistics()
    stats.record_sent(0, now=0.0)
    stats.record_reply(0, 64, now=0.010)
    stats.record_sent(1, now=1.0)
    stats.record_failure(1)
    lines = stats.summary("10.0.0.1").split("\n")
    assert lines[1] == "2 packets transmitted, 1 packets received, 50% packet loss"
    assert len(lines) == 3