"""FastAPI application: one catch-all route that logs requests as JSON lines.

Per request: HttpRequest → assemble() → serialize() → LineEmitter.emit(),
then the configured acknowledgment goes back to the caller.

| outcome           | response                                  |
|-------------------|-------------------------------------------|
| emitted           | ack_status, ack_body                      |
| MappingError      | 400, {"error": "<message>"}               |
| write/encode fail | 500, {"error": "failed to write output"}  |
"""

from __future__ import annotations

import asyncio
import re
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from webhook2stdout._assemble import assemble
from webhook2stdout._emit import LineEmitter, serialize
from webhook2stdout._mapping import MappingError
from webhook2stdout.http._request import HttpRequest

if TYPE_CHECKING:
    from webhook2stdout._config import Config

log = structlog.get_logger(__name__)

SERVER_NAME = "webhook2stdout"

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"]

# ":name" route segments, as written in older config files
_COLON_PARAM = re.compile(r"(?<=/):([A-Za-z_][A-Za-z0-9_]*)")


def route_path(route: str) -> str:
    """Rewrite ``/hooks/:id`` segments to Starlette's ``/hooks/{id}``."""
    return _COLON_PARAM.sub(r"{\1}", route)


def route_forms(route: str) -> list[str]:
    """Starlette paths for a route, with and without a trailing slash."""
    path = route_path(route)
    base = path.rstrip("/")
    if not base:
        return ["/"]
    return [base, base + "/"]


def create_app(config: Config, emitter: LineEmitter | None = None) -> FastAPI:
    """Build the receiver app for a config.

    ``emitter`` defaults to a LineEmitter on stdout.
    """
    emitter = emitter if emitter is not None else LineEmitter()
    headers = {"Server": SERVER_NAME}

    app = FastAPI(
        title="Webhook Logger",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )

    async def receive(request: Request) -> Response:
        ctx = await HttpRequest.from_starlette(request)
        try:
            document = assemble(ctx, config.mappings)
        except MappingError as exc:
            log.error("failed to build output", error=str(exc), method=ctx.method, path=ctx.path)
            return JSONResponse({"error": str(exc)}, status_code=400, headers=headers)

        try:
            await asyncio.to_thread(emitter.emit, serialize(document, config.pretty))
        except (OSError, TypeError, ValueError) as exc:
            log.error("failed to write output", error=str(exc))
            return JSONResponse(
                {"error": "failed to write output"}, status_code=500, headers=headers
            )

        log.debug("request logged", method=ctx.method, path=ctx.path)
        return _ack(config, headers)

    for path in route_forms(config.route):
        app.add_api_route(path, receive, methods=ALL_METHODS, include_in_schema=False)
    return app


def _ack(config: Config, headers: dict[str, str]) -> Response:
    # 1xx, 204 and 304 responses must not carry a body.
    if config.ack_status < 200 or config.ack_status in (204, 304):
        return Response(status_code=config.ack_status, headers=headers)
    return JSONResponse(config.ack_body, status_code=config.ack_status, headers=headers)
