"""Outbound delivery of command events to the LED display."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

from .config import ConfigurationError, SinkConfig
from .events import CommandEvent

LOGGER = logging.getLogger(__name__)


class CommandSinkError(RuntimeError):
    """Raised when an event could not be handed to the display."""

    def __init__(self, message: str, *, event: Optional[CommandEvent] = None) -> None:
        super().__init__(message)
        self.event = event


class CommandSink(Protocol):
    """Minimal contract for anything that can carry events to the display."""

    async def send(self, event: CommandEvent) -> None:
        """Deliver one event. Raises CommandSinkError on failure."""
        ...

    async def close(self) -> None: ...


def _timeout_or_none(timeout: float) -> Optional[float]:
    return timeout if timeout > 0 else None


class ProcessCommandSink:
    """Run an external command with the event argument appended.

    Output is discarded and the exit status is only logged; the display
    script is treated as fire-and-forget.
    """

    def __init__(self, argv: Sequence[str], *, timeout: float = 0.0) -> None:
        if not argv:
            raise ConfigurationError("Process sink requires a command")
        self._argv: List[str] = list(argv)
        self._timeout = _timeout_or_none(timeout)

    @property
    def argv(self) -> List[str]:
        return list(self._argv)

    async def send(self, event: CommandEvent) -> None:
        args = [*self._argv, event.argument]
        LOGGER.debug("Running %s", " ".join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except (OSError, ValueError) as exc:
            raise CommandSinkError(
                f"Failed to start {self._argv[0]}: {exc}", event=event
            ) from exc

        try:
            returncode = await asyncio.wait_for(process.wait(), self._timeout)
        except asyncio.TimeoutError as exc:
            process.kill()
            await process.wait()
            raise CommandSinkError(
                f"Timed out after {self._timeout}s sending {event.argument}",
                event=event,
            ) from exc

        if returncode != 0:
            LOGGER.warning(
                "Command for %s exited with status %s", event.argument, returncode
            )

    async def close(self) -> None:
        return None


class TcpCommandSink:
    """Send the event argument straight to the display's remote-control port.

    One connection per event; the listener treats each packet as one
    command and strips trailing CR, LF and NUL bytes.
    """

    def __init__(self, host: str, port: int, *, timeout: float = 0.0) -> None:
        self._host = host
        self._port = port
        self._timeout = _timeout_or_none(timeout)

    async def send(self, event: CommandEvent) -> None:
        try:
            await asyncio.wait_for(self._send(event), self._timeout)
        except asyncio.TimeoutError as exc:
            raise CommandSinkError(
                f"Timed out sending {event.argument} to {self._host}:{self._port}",
                event=event,
            ) from exc
        except OSError as exc:
            raise CommandSinkError(
                f"Failed to send {event.argument} to {self._host}:{self._port}: {exc}",
                event=event,
            ) from exc

    async def _send(self, event: CommandEvent) -> None:
        _, writer = await asyncio.open_connection(self._host, self._port)
        try:
            writer.write(f"{event.argument}\n".encode("utf-8"))
            await writer.drain()
        finally:
            writer.close()
            await writer.wait_closed()
        LOGGER.debug("Sent %s to %s:%s", event.argument, self._host, self._port)

    async def close(self) -> None:
        return None


class LogCommandSink:
    """Dry-run sink that only logs what would have been sent."""

    async def send(self, event: CommandEvent) -> None:
        LOGGER.info("Command event: %s", event.argument)

    async def close(self) -> None:
        return None


def build_sink(config: SinkConfig) -> CommandSink:
    """Create the sink selected by the ``[sink]`` configuration section."""

    if config.type == "process":
        return ProcessCommandSink(config.command, timeout=config.timeout_seconds)
    if config.type == "tcp":
        return TcpCommandSink(config.host, config.port, timeout=config.timeout_seconds)
    if config.type == "log":
        return LogCommandSink()
    raise ConfigurationError(f"Unsupported sink type: {config.type}")
