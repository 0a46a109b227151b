"""Command-line interface for tvcontrol."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from . import config_tv
from .catalog import CATALOG, Domain, TVError, encode_command
from .config_tv import SerialSettings
from .logging_config import setup_logging
from .tv_driver import TVDriver

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tvctl", description="Control a TV over its serial port"
    )
    parser.add_argument(
        "-p",
        "--port",
        default=config_tv.SERIAL_PORT,
        help=f"Serial device path (default: {config_tv.SERIAL_PORT})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (repeat for protocol traces)",
    )

    subparsers = parser.add_subparsers(dest="domain", required=True)
    for domain, spec in CATALOG.items():
        domain_parser = subparsers.add_parser(domain.value, help=f"{domain.value} commands")
        actions = domain_parser.add_subparsers(dest="action", required=True)
        for name, action in spec.actions.items():
            action_parser = actions.add_parser(name, help=action.description)
            if action.requires_argument:
                action_parser.add_argument("argument", metavar="LEVEL")
            else:
                action_parser.set_defaults(argument=None)

    return parser


def _log_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(_log_level(args.verbose))

    domain = Domain(args.domain)
    try:
        body = encode_command(domain, args.action, args.argument)
        LOGGER.info("%s %s -> %r", domain.value, args.action, body)
        with TVDriver(SerialSettings(port=args.port)) as driver:
            result = driver.exchange(body)
    except TVError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    print(result.response)
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
