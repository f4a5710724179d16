"""Response header sets for the two public endpoints."""

from __future__ import annotations

from weathergate.config import settings

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def weather_headers(cache_status: str | None = None) -> dict[str, str]:
    """Headers for every weather response, successful or not.

    CORS reflects ``ALLOWED_ORIGIN`` when it is set and falls back to ``*``.
    """
    headers = {
        **_SECURITY_HEADERS,
        "Cache-Control": "no-store",
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }
    if settings.allowed_origin:
        headers["Access-Control-Allow-Origin"] = settings.allowed_origin
        headers["Vary"] = "Origin"
    else:
        headers["Access-Control-Allow-Origin"] = "*"
    if cache_status is not None:
        headers["X-Cache"] = cache_status
    return headers


def tile_headers(max_age: int | None = None) -> dict[str, str]:
    # Tiles carry no per-client data, so any origin may embed them.
    headers = {
        "X-Content-Type-Options": "nosniff",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, OPTIONS",
    }
    if max_age is not None:
        headers["Cache-Control"] = f"public, max-age={max_age}"
    return headers
