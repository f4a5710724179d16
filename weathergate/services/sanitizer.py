"""Free-text location cleanup."""

from __future__ import annotations

import re

from weathergate.errors import ValidationError

MAX_LOCATION_LENGTH = 100

# Letters (ASCII and Latin-1 Supplement through Latin Extended-B, minus the
# multiplication and division signs), digits, whitespace, hyphens,
# apostrophes, periods and commas.
_DISALLOWED = re.compile(r"[^A-Za-z0-9À-ÖØ-öø-ɏ\s\-'.,]")


def sanitize_location(raw: str | None, max_length: int = MAX_LOCATION_LENGTH) -> str:
    """Return *raw* with every disallowed character dropped.

    The length ceiling applies to the raw input so padding with characters
    that get stripped cannot smuggle a longer string past it.
    """
    if raw is None or not raw.strip():
        raise ValidationError("City parameter is required")
    if len(raw) > max_length:
        raise ValidationError("City name is too long")

    cleaned = _DISALLOWED.sub("", raw.strip()).strip()
    if not cleaned:
        raise ValidationError("City name contains invalid characters")
    return cleaned
