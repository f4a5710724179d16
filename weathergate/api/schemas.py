"""Pydantic models for the public response contract.

The weather models double as the allow-list applied to provider payloads:
only the fields declared here are ever sent to clients.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Body of every JSON error response."""

    error: str = Field(..., description="Human-readable error message")


# ---------------------------------------------------------------------------
# /api/weather
# ---------------------------------------------------------------------------


class Coordinates(BaseModel):
    lat: float = Field(..., description="Latitude of the matched location")
    lon: float = Field(..., description="Longitude of the matched location")


class SunInfo(BaseModel):
    country: str | None = Field(None, description="ISO 3166 country code")
    sunrise: int | None = Field(None, description="Sunrise, UTC epoch seconds")
    sunset: int | None = Field(None, description="Sunset, UTC epoch seconds")


class Condition(BaseModel):
    main: str = Field(..., description="Condition group, e.g. 'Rain'")
    description: str = Field(..., description="Condition detail, e.g. 'light rain'")


class Readings(BaseModel):
    temp: float = Field(..., description="Temperature, °C")
    feels_like: float = Field(..., description="Perceived temperature, °C")
    temp_min: float = Field(..., description="Minimum observed temperature, °C")
    temp_max: float = Field(..., description="Maximum observed temperature, °C")
    humidity: int = Field(..., description="Relative humidity, %")
    pressure: int = Field(..., description="Sea-level pressure, hPa")


class Wind(BaseModel):
    speed: float = Field(0, description="Wind speed, m/s")


class WeatherResponse(BaseModel):
    """Current conditions for a location."""

    name: str = Field(..., description="Display name of the matched location")
    coord: Coordinates
    sys: SunInfo
    weather: list[Condition] = Field(..., description="Primary weather condition")
    main: Readings
    wind: Wind
    visibility: int | None = Field(None, description="Visibility, metres")
    timezone: int = Field(..., description="Offset from UTC in seconds")


# ---------------------------------------------------------------------------
# /health
# ---------------------------------------------------------------------------


class CacheHealth(BaseModel):
    size: int = Field(..., description="Current number of cached entries")
    max_size: int = Field(..., description="Maximum cache capacity")
    hit_rate: float = Field(..., description="Cache hit rate (0.0-1.0)")


class RateLimiterHealth(BaseModel):
    active_keys: int = Field(..., description="Number of tracked client keys")


class HealthResponse(BaseModel):
    """Health-check result."""

    status: str = Field(..., description="Overall status: 'ok' or 'degraded'")
    upstream_configured: bool = Field(
        ..., description="Whether the provider credential is set"
    )
    cache: CacheHealth
    rate_limiter: RateLimiterHealth
    uptime_seconds: float = Field(..., description="Seconds since the process started")
