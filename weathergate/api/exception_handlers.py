"""Global exception handlers for JSON error responses."""

from __future__ import annotations

import logging
import traceback

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weathergate.api.headers import tile_headers, weather_headers
from weathergate.errors import (
    ConfigurationError,
    GatewayError,
    MalformedUpstreamError,
    UpstreamError,
)

logger = logging.getLogger("weathergate.errors")


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Translate a classified failure into ``{"error": message}``.

    Only ``exc.message`` reaches the client.  Provider messages and parse
    failures are logged here and nowhere else.
    """
    if isinstance(exc, ConfigurationError):
        logger.error("OPENWEATHER_API_KEY is not configured")
    elif isinstance(exc, UpstreamError):
        logger.warning(
            "Provider returned %d on %s: %s",
            exc.upstream_status,
            request.url.path,
            exc.raw_message,
        )
    elif isinstance(exc, MalformedUpstreamError):
        logger.error("Malformed provider payload on %s: %s", request.url.path, exc.reason)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=weather_headers(),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return ``{"error": detail}`` for routing errors (404, 405).

    Tile paths get the tile header set; everything else gets the weather
    security headers.
    """
    if request.url.path.startswith("/api/tiles"):
        headers = tile_headers()
    else:
        headers = weather_headers()
    headers.update(exc.headers or {})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=headers,
    )


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all for unhandled exceptions.

    Logs the full traceback server-side but returns a generic 500 response
    with no internal details leaked.
    """
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    )

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers=weather_headers(),
    )
