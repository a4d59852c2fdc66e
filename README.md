# pingtool

A small command-line ping for IPv4. It sends one ICMP echo request a second
to a host. It prints a line for each echo reply. When you press Ctrl-C it
prints a summary with packet loss and round-trip min/avg/max/stddev.

## Installing

    pip install .

## Usage

    pingtool [OPTION...] HOST

Options:

- `-v` verbose output. The first line also shows the request identifier.
  When an ICMP message other than an echo reply arrives, it is described and
  the IP header and the outgoing ICMP header are dumped.
- `-h` prints the usage text and exits with status 1.

`HOST` may be a dotted IPv4 address or a host name. For a host name, the last
address the resolver returns is used. Only the first host given is pinged.

An unknown option, a missing host or a host that cannot be resolved prints a
message and exits with status 1.

Example:

    $ pingtool 127.0.0.1
    PING 127.0.0.1 (127.0.0.1): 56 data bytes
    64 bytes from 127.0.0.1: icmp_seq=0 ttl=64 time=0.071 ms
    64 bytes from 127.0.0.1: icmp_seq=1 ttl=64 time=0.065 ms
    ^C--- 127.0.0.1 ping statistics ---
    2 packets transmitted, 2 packets received, 0% packet loss
    round-trip min/avg/max/stddev = 0.065/0.068/0.071/0.003 ms

Each request waits one second for a reply. If no reply arrives in that time,
the request is counted as lost.

Sending ICMP needs a raw socket. The command usually has to run as root or
with the `CAP_NET_RAW` capability.

## What it does not do

The command has no count, interval, size or TTL options. It keeps pinging
until it is interrupted. IPv6 is not supported.

## Using it from Python

You can use the parts behind the command on their own:

- `pingtool.address`: `is_ip_like`, `is_valid_ipv4`, `check_destination`,
  `resolve_host_ip`, `UnknownHostError`
- `pingtool.options`: `parse_arguments` returns an `Options` value or raises
  `OptionError` or `HelpRequested`. Also `check_for_error`, `wants_help` and
  `destination_addresses`.
- `pingtool.icmp`: `IcmpHeader` (`pack`, `unpack`), `checksum`, `random_id`,
  `build_echo_request`
- `pingtool.messages`: `IpHeader` (`from_bytes`, `dump`), `icmp_message`,
  `format_icmp_header`, `source_hostname`, `format_received_packet`
- `pingtool.stats`: `PingStatistics` records sends, replies and failures and
  produces the summary with `summary(address)`. Also `PacketTimer` and
  `packet_loss_percent`.
- `pingtool.cli`: `open_socket`, `Pinger` (`banner`, `run`) and `main`

## Running the tests

    pip install .[test]
    pytest