"""Timeout-bounded HTTP client for the weather provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from weathergate.config import settings
from weathergate.errors import MalformedUpstreamError, UpstreamError, UpstreamTimeoutError
from weathergate.services.metrics import metrics

logger = logging.getLogger(__name__)


def _raw_message(resp: httpx.Response) -> str:
    """Best-effort extraction of the provider's error text, for logs only."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.text[:200]


class UpstreamClient:
    """Fetch JSON documents and tile images from the provider.

    Every call is bounded by *timeout* seconds end to end.  On expiry the
    request task is cancelled, which closes the in-flight connection rather
    than leaving it to finish in the background.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def fetch_json(self, url: str, params: dict[str, Any]) -> Any:
        resp = await self._get(url, params)
        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedUpstreamError("provider returned a non-JSON body") from exc

    async def fetch_binary(self, url: str, params: dict[str, Any]) -> bytes:
        resp = await self._get(url, params)
        return resp.content

    async def _get(self, url: str, params: dict[str, Any]) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await asyncio.wait_for(
                    client.get(url, params=params), timeout=self._timeout
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            metrics.inc_upstream("timeout")
            raise UpstreamTimeoutError() from exc
        except httpx.HTTPError as exc:
            metrics.inc_upstream("failure")
            logger.warning("Upstream transport error: %s", type(exc).__name__)
            raise

        if not resp.is_success:
            metrics.inc_upstream("failure")
            raise UpstreamError(resp.status_code, _raw_message(resp))

        metrics.inc_upstream("ok")
        return resp


# Module-level singleton initialized from config
upstream_client = UpstreamClient(timeout=settings.upstream_timeout)
