from __future__ import annotations

from fastapi import Request

from weathergate.services.request_context import client_key_from_forwarded
from weathergate.services.upstream import UpstreamClient, upstream_client


def get_upstream() -> UpstreamClient:
    return upstream_client


def get_client_key(request: Request) -> str:
    """Throttling key: first hop of ``X-Forwarded-For``, else ``"unknown"``."""
    return client_key_from_forwarded(request.headers.get("x-forwarded-for"))
