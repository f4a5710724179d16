"""Per-request identity: correlation ID and throttling key."""

from __future__ import annotations

import uuid
from contextvars import ContextVar

UNKNOWN_CLIENT = "unknown"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    """Return a new 32-character hex request ID."""
    return uuid.uuid4().hex


def get_request_id() -> str:
    return request_id_var.get()


def client_key_from_forwarded(forwarded_for: str | None) -> str:
    """Derive the rate-limit key from an ``X-Forwarded-For`` chain.

    The first address is the original client as reported by the proxy.  It
    is not authenticated and can be spoofed; it is only a throttling
    heuristic.
    """
    if not forwarded_for:
        return UNKNOWN_CLIENT
    first = forwarded_for.split(",")[0].strip()
    return first or UNKNOWN_CLIENT
