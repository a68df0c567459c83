"""aiohttp application serving the control page."""

from __future__ import annotations

import contextlib
import logging
from typing import Optional

from aiohttp import web
from multidict import MultiDict

from . import constants
from .config import FormConfig
from .dispatcher import CommandDispatcher
from .form import FormState, render_page
from .health import HealthReporter

LOGGER = logging.getLogger(__name__)

DISPATCHER_KEY = web.AppKey("dispatcher", CommandDispatcher)
HEALTH_KEY = web.AppKey("health", HealthReporter)
FORM_DEFAULTS_KEY = web.AppKey("form_defaults", FormConfig)
TITLE_KEY = web.AppKey("title", str)


async def _request_params(request: web.Request) -> MultiDict[str]:
    params: MultiDict[str] = MultiDict(request.query)
    if request.method == "POST" and request.body_exists:
        form = await request.post()
        for key, value in form.items():
            if isinstance(value, str):
                params.add(key, value)
    return params


async def handle_page(request: web.Request) -> web.Response:
    app = request.app
    params = await _request_params(request)

    await app[DISPATCHER_KEY].dispatch(params)

    state = FormState.from_params(params, app[FORM_DEFAULTS_KEY])
    return web.Response(
        text=render_page(state, title=app[TITLE_KEY]), content_type="text/html"
    )


async def handle_health(request: web.Request) -> web.Response:
    snapshot = await request.app[HEALTH_KEY].snapshot()
    status = 200 if snapshot["status"] == "ok" else 503
    return web.json_response(snapshot, status=status)


def create_app(
    dispatcher: CommandDispatcher,
    *,
    defaults: Optional[FormConfig] = None,
    title: str = constants.DEFAULT_PAGE_TITLE,
    health: Optional[HealthReporter] = None,
) -> web.Application:
    app = web.Application()
    app[DISPATCHER_KEY] = dispatcher
    app[HEALTH_KEY] = health or HealthReporter()
    app[FORM_DEFAULTS_KEY] = defaults or FormConfig()
    app[TITLE_KEY] = title

    app.router.add_get("/", handle_page)
    app.router.add_post("/", handle_page)
    app.router.add_get("/healthz", handle_health)
    return app


class ControlServer:
    """HTTP server hosting the control page."""

    def __init__(self, app: web.Application, host: str, port: int) -> None:
        self._app = app
        self._host = host
        self._port = port
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    async def start(self) -> None:
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self._host, self._port)
        await self._site.start()
        LOGGER.info("Control page listening on http://%s:%s/", self._host, self._port)

    async def stop(self) -> None:
        with contextlib.suppress(Exception):
            if self._site is not None:
                await self._site.stop()
        if self._runner is not None:
            await self._runner.cleanup()
        self._site = None
        self._runner = None
