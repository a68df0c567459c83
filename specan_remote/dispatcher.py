"""Translate submitted form fields into command events for the display."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Mapping, Optional

from .events import CommandEvent, events_from_params
from .health import HealthReporter
from .sinks import CommandSink, CommandSinkError

LOGGER = logging.getLogger(__name__)

SINK_COMPONENT = "sink"


class CommandDispatcher:
    """Deliver the events fired by one request to the configured sink.

    Events go out one at a time in field check order. Requests are
    serialized so the sink never sees two requests' events interleaved.
    Delivery failures are logged and reported to health, never raised.
    """

    def __init__(
        self, sink: CommandSink, *, health: Optional[HealthReporter] = None
    ) -> None:
        self._sink = sink
        self._health = health
        self._lock = asyncio.Lock()

    def events_for(self, params: Mapping[str, str]) -> List[CommandEvent]:
        return events_from_params(params)

    async def dispatch(self, params: Mapping[str, str]) -> List[CommandEvent]:
        events = self.events_for(params)
        if not events:
            return events

        async with self._lock:
            for event in events:
                await self._deliver(event)
        return events

    async def _deliver(self, event: CommandEvent) -> None:
        try:
            await self._sink.send(event)
        except CommandSinkError as exc:
            LOGGER.warning("Dropped %s: %s", event.argument, exc)
            if self._health is not None:
                await self._health.update(SINK_COMPONENT, False, str(exc))
            return

        LOGGER.info("Dispatched %s", event.argument)
        if self._health is not None:
            await self._health.update(SINK_COMPONENT, True, event.argument)

    async def close(self) -> None:
        await self._sink.close()
