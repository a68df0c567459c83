"""Command-line interface for specan-remote."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from . import constants
from .app import RemoteControlApp
from .config import ConfigurationError, load_config
from .events import VALUE_EVENTS, CommandEvent, EventName
from .logging import configure_logging
from .sinks import CommandSink, CommandSinkError, build_sink

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=constants.APP_NAME,
        description="Web remote control for the spectrum analyzer LED display",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=constants.DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {constants.DEFAULT_CONFIG_PATH})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve the control page")
    serve_parser.add_argument("--host", help="Override [server] host")
    serve_parser.add_argument("--port", type=int, help="Override [server] port")

    send_parser = subparsers.add_parser(
        "send", help="Send one command event through the configured sink"
    )
    send_parser.add_argument(
        "event", choices=[name.value for name in EventName], metavar="EVENT"
    )
    send_parser.add_argument(
        "value", nargs="?", help="Slider value for E_GAIN_VALUE / E_BRIGHT_VALUE"
    )

    subparsers.add_parser("events", help="List the known command events")

    subparsers.add_parser(
        "show-config", help="Print the resolved configuration and exit"
    )

    return parser


async def _send_one(sink: CommandSink, event: CommandEvent) -> None:
    try:
        await sink.send(event)
    finally:
        await sink.close()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 1

    if args.command == "serve":
        if args.host:
            config.server.host = args.host
        if args.port is not None:
            config.server.port = args.port
        RemoteControlApp.start(config)
        return 0

    if args.command == "send":
        configure_logging(config.logging.level, log_path=config.logging.path)
        name = EventName(args.event)
        if args.value is not None and name not in VALUE_EVENTS:
            parser.error(f"{name.value} does not take a value")
        event = CommandEvent(name, args.value)
        try:
            asyncio.run(_send_one(build_sink(config.sink), event))
        except (CommandSinkError, ConfigurationError) as exc:
            LOGGER.error("Sending %s failed: %s", event.argument, exc)
            return 1
        return 0

    if args.command == "events":
        for name in EventName:
            suffix = " <value>" if name in VALUE_EVENTS else ""
            print(f"{name.value}{suffix}")
        return 0

    if args.command == "show-config":
        print(f"Configuration loaded from {config.path!s}\n")
        for section in config.raw.sections():
            print(f"[{section}]")
            for key, value in config.raw[section].items():
                print(f"{key} = {value}")
            print()
        return 0

    LOGGER.error("Unknown command: %s", args.command)
    return 1


if __name__ == "__main__":
    sys.exit(main())
