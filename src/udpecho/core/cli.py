from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path
from typing import NoReturn

import yaml

from udpecho import __version__
from udpecho.core.artifacts import open_event_logger
from udpecho.core.client import parse_invocation, run_echo
from udpecho.core.config import COLOR_MODES, load_client_config
from udpecho.core.console import Console
from udpecho.core.errors import EchoError, UsageError


_OPTIONS_WITH_VALUE = ("--timeout", "--recv-buf", "--color", "--events", "--config")
_NEGATIVE_NUMBER_RE = re.compile(r"-\d+$|-\d*\.\d+$")


def _split_data(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv right before <data>.

    <data> is sent verbatim, so a payload such as ``-ping``, ``-h`` or ``--``
    never reaches the option parser. Options are only recognised before it
    and everything after <data> is ignored.
    """
    head: list[str] = []
    positionals = 0
    only_positionals = False
    i = 0
    while i < len(argv) and positionals < 2:
        arg = argv[i]
        head.append(arg)
        i += 1
        if only_positionals or not arg.startswith("-") or arg == "-" or _NEGATIVE_NUMBER_RE.fullmatch(arg):
            positionals += 1
        elif arg == "--":
            only_positionals = True
        elif arg in _OPTIONS_WITH_VALUE and i < len(argv):
            head.append(argv[i])
            i += 1
    return head, argv[i:]


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        if message.startswith("the following arguments are required"):
            raise UsageError()
        raise UsageError(f"{self.prog}: error: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="udpecho",
        allow_abbrev=False,
        usage="%(prog)s [options] host port data",
        description="udpecho - send one UDP datagram to an echo server and print the reply",
        epilog="data: text to send, encoded as UTF-8 and taken verbatim; options go before it.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("host", help="Hostname or ip address of the echo server")
    parser.add_argument("port", help="UDP port of the echo server (0-65535)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the reply (default: wait forever)",
    )
    parser.add_argument(
        "--recv-buf",
        type=int,
        default=None,
        help="Receive buffer size in bytes; longer replies are truncated (default: 65535)",
    )
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        default=None,
        help="Colour standard output bright green (default: auto)",
    )
    parser.add_argument(
        "--events",
        default=None,
        help="Append tx/rx/error events to this JSONL file",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional *.yaml/*.yml/*.json settings file with a 'client' mapping",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        head, tail = _split_data(sys.argv[1:] if argv is None else list(argv))
        args = parser.parse_args(head)
        invocation = parse_invocation([args.host, args.port, *tail])
        config = load_client_config(Path(args.config) if args.config else None).with_overrides(
            timeout_s=args.timeout,
            recv_buf=args.recv_buf,
            color=args.color,
            events_path=Path(args.events) if args.events else None,
        )
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return e.exit_code
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return UsageError.exit_code

    console = Console(color=config.color)
    try:
        events = open_event_logger(config.events_path)
    except OSError as e:
        console.error(f"Could not open event log! ({e})")
        return 1

    try:
        run_echo(invocation, config, console=console, events=events)
    except EchoError as e:
        console.error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        console.error("Interrupted while waiting for a reply.")
        return 130
    finally:
        events.close()
    return 0
