from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weathergate.api.exception_handlers import (
    gateway_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from weathergate.api.middleware import RequestLoggingMiddleware
from weathergate.api.routes.tiles import router as tiles_router
from weathergate.api.routes.weather import router as weather_router
from weathergate.api.schemas import HealthResponse
from weathergate.config import settings
from weathergate.errors import GatewayError
from weathergate.logging_config import setup_logging
from weathergate.services.cache import weather_cache
from weathergate.services.metrics import metrics
from weathergate.services.rate_limiter import rate_limiter

logger = logging.getLogger("weathergate")

_DESCRIPTION = """\
Gateway in front of the OpenWeatherMap API.

Clients never see the provider credential.  Weather lookups are throttled
per client address, cached for a few minutes, and reduced to a fixed set
of public fields.  Overlay map tiles are proxied after their layer and
coordinates have been checked.

### Rate limiting

Weather lookups are limited per client address (first hop of
`X-Forwarded-For`) using a one-minute sliding window.
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    if not settings.openweather_api_key:
        logger.error("OPENWEATHER_API_KEY is not set; data endpoints will return 500")
    yield


app = FastAPI(
    title="Weather Gateway",
    version="0.1.0",
    summary="Credential-hiding, rate-limited proxy for weather data and map tiles",
    description=_DESCRIPTION,
    lifespan=lifespan,
)

# Exception handlers
app.add_exception_handler(GatewayError, gateway_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Request logging
app.add_middleware(RequestLoggingMiddleware)

app.include_router(weather_router)
app.include_router(tiles_router)


def _cache_stats() -> dict:
    return {
        "size": weather_cache.size,
        "max_size": settings.cache_maxsize,
        "hit_rate": metrics.snapshot()["cache"]["hit_rate"],
    }


@app.get(
    "/health",
    tags=["system"],
    summary="Health check",
    description="Returns 200 when the provider credential is configured, "
    "503 otherwise.",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Credential missing"}},
)
async def health():
    configured = bool(settings.openweather_api_key)
    body = {
        "status": "ok" if configured else "degraded",
        "upstream_configured": configured,
        "cache": _cache_stats(),
        "rate_limiter": {"active_keys": rate_limiter.active_keys},
        "uptime_seconds": metrics.uptime_seconds(),
    }
    return JSONResponse(status_code=200 if configured else 503, content=body)


@app.get(
    "/metrics",
    tags=["system"],
    summary="Application metrics",
    description="Request counters, latency percentiles, cache and upstream stats.",
)
async def get_metrics():
    snap = metrics.snapshot()
    snap["cache"]["size"] = weather_cache.size
    snap["cache"]["max_size"] = settings.cache_maxsize
    snap["rate_limiter"] = {"active_keys": rate_limiter.active_keys}
    return snap
