from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from weathergate.api.dependencies import get_upstream
from weathergate.api.headers import tile_headers
from weathergate.api.schemas import ErrorResponse
from weathergate.config import settings
from weathergate.errors import UpstreamError, UpstreamTimeoutError, ValidationError
from weathergate.services.tiles import validate_tile_request
from weathergate.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tiles"])


@router.api_route(
    "/tiles",
    methods=["GET", "OPTIONS"],
    summary="Weather overlay map tile",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG tile"},
        400: {"model": ErrorResponse, "description": "Invalid layer or coordinates"},
        500: {"description": "Server misconfigured (empty body)"},
        502: {"description": "Tile fetch failed (empty body)"},
        504: {"description": "Provider timed out (empty body)"},
    },
)
async def get_tile(
    request: Request,
    layer: str | None = Query(None, description="Overlay layer identifier"),
    z: str | None = Query(None, description="Zoom level, 0-22"),
    x: str | None = Query(None, description="Tile column"),
    y: str | None = Query(None, description="Tile row"),
    upstream: UpstreamClient = Depends(get_upstream),
):
    """Proxy a single overlay tile from the provider.

    Failures after validation answer with an empty body, since clients
    expect an image here and not JSON.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=tile_headers())

    try:
        tile_layer, coord = validate_tile_request(layer, z, x, y)
    except ValidationError as exc:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=tile_headers(),
        )

    api_key = settings.openweather_api_key
    if not api_key:
        logger.error("OPENWEATHER_API_KEY is not configured")
        return Response(status_code=500, headers=tile_headers())

    # Built from the parsed integers, never the raw query strings.
    url = f"{settings.tile_api_url}/{tile_layer.value}/{coord.z}/{coord.x}/{coord.y}.png"

    try:
        image = await upstream.fetch_binary(url, params={"appid": api_key})
    except UpstreamTimeoutError:
        return Response(status_code=504)
    except UpstreamError as exc:
        logger.warning("Tile provider returned %d: %s", exc.upstream_status, exc.raw_message)
        return Response(status_code=exc.status_code)
    except Exception:
        logger.exception("Tile fetch failed for %s/%d/%d/%d", tile_layer.value, coord.z, coord.x, coord.y)
        return Response(status_code=502)

    return Response(
        content=image,
        media_type="image/png",
        headers=tile_headers(max_age=settings.tile_cache_max_age),
    )
