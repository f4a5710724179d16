from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from weathergate.api.dependencies import get_client_key, get_upstream
from weathergate.api.headers import weather_headers
from weathergate.api.schemas import ErrorResponse, WeatherResponse
from weathergate.config import settings
from weathergate.errors import ConfigurationError, RateLimitError
from weathergate.services.cache import make_cache_key, weather_cache
from weathergate.services.metrics import metrics
from weathergate.services.rate_limiter import rate_limiter
from weathergate.services.sanitizer import sanitize_location
from weathergate.services.upstream import UpstreamClient
from weathergate.services.weather_shaper import shape_weather

router = APIRouter(prefix="/api", tags=["weather"])


@router.api_route(
    "/weather",
    methods=["GET", "OPTIONS"],
    summary="Current weather for a location",
    response_model=WeatherResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing, too long or invalid city"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Configuration or internal error"},
        504: {"model": ErrorResponse, "description": "Provider timed out"},
    },
)
async def get_weather(
    request: Request,
    city: str | None = Query(None, description="City or place name"),
    client_key: str = Depends(get_client_key),
    upstream: UpstreamClient = Depends(get_upstream),
):
    """Look up current conditions, served from cache when fresh."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=weather_headers())

    # --- validate ------------------------------------------------------------
    location = sanitize_location(city, max_length=settings.city_max_length)

    # --- rate limit ----------------------------------------------------------
    if not rate_limiter.admit(client_key):
        metrics.inc_rate_limited()
        raise RateLimitError()

    # --- cache check ---------------------------------------------------------
    cache_key = make_cache_key(location)
    cached = weather_cache.lookup(cache_key)
    if cached is not None:
        return JSONResponse(content=cached, headers=weather_headers("HIT"))

    # --- provider fetch ------------------------------------------------------
    api_key = settings.openweather_api_key
    if not api_key:
        raise ConfigurationError()

    raw = await upstream.fetch_json(
        settings.weather_api_url,
        params={"q": location, "appid": api_key, "units": "metric"},
    )
    payload = shape_weather(raw)
    weather_cache.store(cache_key, payload)

    return JSONResponse(content=payload, headers=weather_headers("MISS"))
