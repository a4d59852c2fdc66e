import socket
from unittest import mock

import pytest

from pingtool.address import UnknownHostError
from pingtool.options import (
    USAGE,
    HelpRequested,
    OptionError,
    Options,
    check_for_error,
    destination_addresses,
    parse_arguments,
    wants_help,
)


def test_check_for_error_no_arguments():
    with pytest.raises(OptionError) as info:
        check_for_error([])
    assert str(info.value) == "ping: missing host operand"


@pytest.mark.parametrize(
    "args, expected",
    [
        (["host"], False),
        (["-"], False),
        (["-v", "host"], True),
        (["host", "-h"], True),
    ],
)
def test_check_for_error_flags(args, expected):
    assert check_for_error(args) is expected


def test_check_for_error_invalid_option():
    with pytest.raises(OptionError) as info:
        check_for_error(["host", "-x"])
    assert str(info.value) == "ping: invalid option -- 'x'"


def test_check_for_error_invalid_preload():
    with pytest.raises(OptionError) as info:
        check_for_error(["-v5", "host"])
    assert str(info.value) == "ping: invalid preload value (5)"


def test_check_for_error_hyphen_h_suffix():
    with pytest.raises(OptionError) as info:
        check_for_error(["-hx"])
    assert str(info.value) == "ping: invalid option -- 'h'"


def test_wants_help():
    assert wants_help(["a", "-h"]) is True
    assert wants_help(["a", "-v"]) is False


def test_destination_addresses_filters_options_and_empty():
    assert destination_addresses(["-v", "a", "", "b", "-h"]) == ["a", "b"]


def test_destination_addresses_none_given():
    with pytest.raises(OptionError) as info:
        destination_addresses(["-v", ""])
    assert str(info.value) == "ping: missing host operand"


def test_parse_arguments_verbose_quad():
    assert parse_arguments(["-v", "1.2.3.4"]) == Options(True, ["1.2.3.4"])


def test_parse_arguments_destination_property():
    options = parse_arguments(["1.2.3.4", "5.6.7.8"])
    assert options.destination == "1.2.3.4"
    assert options.verbose is False


def test_parse_arguments_help():
    with pytest.raises(HelpRequested) as info:
        parse_arguments(["-h", "1.2.3.4"])
    assert info.value.usage == USAGE
    assert USAGE.startswith("Usage: ping [OPTION...] HOST ...")


def test_parse_arguments_only_option():
    with pytest.raises(OptionError):
        parse_arguments(["-v"])


def test_parse_arguments_unknown_host():
    with mock.patch("socket.gethostbyname", side_effect=socket.gaierror("nope")):
        with pytest.raises(UnknownHostError):
            parse_arguments(["missing.example.com"])


def test_parse_arguments_resolves_first_destination_only():
    with mock.patch("socket.gethostbyname", return_value="10.0.0.1") as lookup:
        options = parse_arguments(["a.example.com", "b.example.com"])
    lookup.assert_called_once_with("a.example.com")
    assert options.destinations == ["a.example.com", "b.example.com"]