"""
Mock driver HTTP service.

Serves the static fixture so the page can be exercised in API mode without a
real backend:

- ``GET /drivers`` -> JSON array of the nine fixture drivers
- ``GET /``        -> plaintext liveness message

Every response carries a permissive CORS header.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Sequence

from aiohttp import web

from driver_roster.domain.fixtures import MOCK_DRIVERS
from driver_roster.domain.models import DriverRecord
from driver_roster.utils.logging import get_logger

log = get_logger(__name__)

LIVENESS_MESSAGE = "API is running. Use /drivers for data."

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    response = await handler(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def create_app(drivers: Sequence[DriverRecord] = MOCK_DRIVERS) -> web.Application:
    payload = [d.to_dict() for d in drivers]

    async def handle_drivers(request: web.Request) -> web.Response:
        return web.json_response(payload)

    async def handle_root(request: web.Request) -> web.Response:
        return web.Response(text=LIVENESS_MESSAGE)

    app = web.Application(middlewares=[cors_middleware])
    app.router.add_get("/drivers", handle_drivers)
    app.router.add_get("/", handle_root)
    return app


def run_mock_api(host: str = "127.0.0.1", port: int = 5000) -> None:
    """Serve the mock API until interrupted."""
    log.info(f"API running on http://{host}:{port}", extra={"host": host, "port": port})
    web.run_app(create_app(), host=host, port=port, print=None)


__all__ = ["LIVENESS_MESSAGE", "create_app", "run_mock_api"]
