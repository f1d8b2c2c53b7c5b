"""Command-line interface for wifi-direct configuration."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import constants
from .config import load_config, save_config
from .errors import InvalidInputError

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wifi-direct", description="Wi-Fi Direct command actor utilities"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=constants.DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {constants.DEFAULT_CONFIG_PATH})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "show-config", help="Print the resolved configuration and exit"
    )

    init_parser = subparsers.add_parser(
        "init-config", help="Write a configuration file populated with defaults"
    )
    init_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing configuration file"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (InvalidInputError, ValueError) as exc:
        LOGGER.error("Invalid configuration in %s: %s", args.config, exc)
        return 1

    if args.command == "show-config":
        print(f"Configuration loaded from {config.path!s}\n")
        for section in config.raw.sections():
            print(f"[{section}]")
            for key, value in config.raw[section].items():
                print(f"{key} = {value}")
            print()
        return 0

    if args.command == "init-config":
        if config.path.exists() and not args.force:
            LOGGER.error("%s already exists; use --force to overwrite", config.path)
            return 1
        save_config(config)
        print(f"Configuration written to {config.path!s}")
        return 0

    LOGGER.error("Unknown command: %s", args.command)
    return 1


if __name__ == "__main__":
    sys.exit(main())
