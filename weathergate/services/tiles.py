"""Tile layer and coordinate validation."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from weathergate.errors import ValidationError

MAX_ZOOM = 22
# One ceiling for every zoom level.  The exact grid at zoom z is 2**z, so
# low zooms accept x/y values that do not exist on the provider.
MAX_TILE_COORD = 2**22

_DIGITS = re.compile(r"[0-9]+")


class Layer(str, enum.Enum):
    PRECIPITATION = "precipitation_new"
    CLOUDS = "clouds_new"
    WIND = "wind_new"
    TEMPERATURE = "temp_new"


@dataclass(frozen=True)
class TileCoordinate:
    z: int
    x: int
    y: int


def _parse_coord(value: str | None) -> int | None:
    if value is None or not _DIGITS.fullmatch(value):
        return None
    return int(value, 10)


def validate_tile_request(
    layer: str | None,
    z: str | None,
    x: str | None,
    y: str | None,
) -> tuple[Layer, TileCoordinate]:
    """Check the layer against the overlay set and bounds-check z/x/y.

    Coordinates arrive as query strings and are only accepted as plain
    base-10 digits, so signs, whitespace and path fragments are rejected.
    """
    try:
        parsed_layer = Layer(layer)
    except ValueError:
        raise ValidationError("Invalid layer") from None

    zn, xn, yn = _parse_coord(z), _parse_coord(x), _parse_coord(y)
    if (
        zn is None or zn > MAX_ZOOM
        or xn is None or xn >= MAX_TILE_COORD
        or yn is None or yn >= MAX_TILE_COORD
    ):
        raise ValidationError("Invalid tile coordinates")

    return parsed_layer, TileCoordinate(z=zn, x=xn, y=yn)
