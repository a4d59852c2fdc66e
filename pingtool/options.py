"""Command-line argument checking for the ping command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from pingtool.address import check_destination

__all__ = [
    "Options",
    "OptionError",
    "HelpRequested",
    "USAGE",
    "check_for_error",
    "wants_help",
    "destination_addresses",
    "parse_arguments",
]

USAGE = (
    "Usage: ping [OPTION...] HOST ...\n"
    "Option: -v   verbose output\n"
    "Option: -h   display this help"
)

_KNOWN_OPTIONS = ("-v", "-h")


class OptionError(Exception):
    """Raised for a bad or missing command-line argument."""


class HelpRequested(Exception):
    """Raised when the user asked for the usage text."""

    def __init__(self, usage: str = USAGE) -> None:
        super().__init__(usage)
        self.usage = usage


@dataclass
class Options:
    """Parsed command-line settings."""

    verbose: bool = False
    destinations: list[str] = field(default_factory=list)

    @property
    def destination(self) -> str:
        """The host that will be pinged."""
        return self.destinations[0]


def _is_option(arg: str) -> bool:
    return len(arg) > 1 and arg.startswith("-")


def check_for_error(args: Sequence[str]) -> bool:
    """Reject unknown options; return True if any known option was given."""
    if not args:
        raise OptionError("ping: missing host operand")
    flagged = False
    for arg in args:
        if not _is_option(arg):
            continue
        if arg in _KNOWN_OPTIONS:
            flagged = True
        elif arg.startswith("-v"):
            raise OptionError(f"ping: invalid preload value ({arg[2:]})")
        else:
            raise OptionError(f"ping: invalid option -- '{arg[1]}'")
    return flagged


def wants_help(args: Sequence[str]) -> bool:
    """Return True if the help option is among *args*."""
    return "-h" in args


def destination_addresses(args: Sequence[str]) -> list[str]:
    """Return the non-empty, non-option arguments in order."""
    if not any(arg and not _is_option(arg) for arg in args):
        raise OptionError("ping: missing host operand")
    return [arg for arg in args if arg and arg not in _KNOWN_OPTIONS]


def parse_arguments(args: Sequence[str]) -> Options:
    """Check *args* (without the program name) and build the options."""
    verbose = check_for_error(args)
    if wants_help(args):
        raise HelpRequested()
    destinations = destination_addresses(args)
    check_destination(destinations[0])
    return Options(verbose=verbose, destinations=destinations)