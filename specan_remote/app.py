"""Main application entry-point for specan-remote."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .config import RemoteConfig, load_config
from .dispatcher import SINK_COMPONENT, CommandDispatcher
from .health import HealthReporter
from .logging import configure_logging
from .server import ControlServer, create_app
from .sinks import CommandSink, build_sink

LOGGER = logging.getLogger(__name__)


class RemoteControlApp:
    """Coordinates application startup and shutdown.

    The sink can be injected for testing or to drive the display through
    something other than the configured delivery method.
    """

    def __init__(
        self,
        config: Optional[RemoteConfig] = None,
        *,
        sink: Optional[CommandSink] = None,
    ) -> None:
        self._config = config or load_config()
        self._health = HealthReporter()
        self._dispatcher = CommandDispatcher(
            sink or build_sink(self._config.sink), health=self._health
        )
        self._server: Optional[ControlServer] = None
        self._shutdown_event: Optional[asyncio.Event] = None

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    async def run(self) -> None:
        """Serve the control page until shutdown is requested."""

        self._shutdown_event = asyncio.Event()
        LOGGER.info("specan-remote starting with config: %s", self._config.path)
        await self._start_services()

        try:
            await self._shutdown_event.wait()
        except asyncio.CancelledError:
            LOGGER.info("specan-remote received shutdown signal")
            raise
        finally:
            await self._stop_services()

    def request_shutdown(self) -> None:
        if self._shutdown_event is not None:
            self._shutdown_event.set()

    @classmethod
    def start(cls, config: Optional[RemoteConfig] = None) -> None:
        instance = cls(config=config)
        configure_logging(
            instance._config.logging.level,
            log_path=instance._config.logging.path,
            log_access=instance._config.logging.log_access,
        )
        try:
            asyncio.run(instance.run())
        except KeyboardInterrupt:
            LOGGER.info("specan-remote received shutdown signal")

    async def _start_services(self) -> None:
        server_config = self._config.server
        await self._health.update(SINK_COMPONENT, True, self._config.sink.type)

        app = create_app(
            self._dispatcher,
            defaults=self._config.form,
            title=server_config.title,
            health=self._health,
        )
        server = ControlServer(app, server_config.host, server_config.port)
        await server.start()
        self._server = server

    async def _stop_services(self) -> None:
        if self._server is not None:
            await self._server.stop()
            self._server = None
        await self._dispatcher.close()
