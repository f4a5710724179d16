"""Project provider weather payloads onto the public response contract."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from weathergate.api.schemas import (
    Condition,
    Coordinates,
    Readings,
    SunInfo,
    WeatherResponse,
    Wind,
)
from weathergate.errors import MalformedUpstreamError


def shape_weather(raw: Any) -> dict[str, Any]:
    """Copy the allow-listed fields out of *raw*.

    Raises ``MalformedUpstreamError`` when the condition list or the
    ``main``, ``sys`` or ``coord`` objects are missing, or when a copied
    field has the wrong type.  Unknown provider fields are dropped.
    """
    if not isinstance(raw, dict):
        raise MalformedUpstreamError("payload is not an object")

    conditions = raw.get("weather")
    if not isinstance(conditions, list) or not conditions or not isinstance(conditions[0], dict):
        raise MalformedUpstreamError("missing 'weather' conditions")
    for section in ("main", "sys", "coord"):
        if not isinstance(raw.get(section), dict):
            raise MalformedUpstreamError(f"missing '{section}' object")

    condition = conditions[0]
    main, sys_info, coord = raw["main"], raw["sys"], raw["coord"]
    wind = raw.get("wind") if isinstance(raw.get("wind"), dict) else {}

    try:
        shaped = WeatherResponse(
            name=raw.get("name"),
            coord=Coordinates(lat=coord.get("lat"), lon=coord.get("lon")),
            sys=SunInfo(
                country=sys_info.get("country"),
                sunrise=sys_info.get("sunrise"),
                sunset=sys_info.get("sunset"),
            ),
            weather=[
                Condition(
                    main=condition.get("main"),
                    description=condition.get("description"),
                )
            ],
            main=Readings(
                temp=main.get("temp"),
                feels_like=main.get("feels_like"),
                temp_min=main.get("temp_min"),
                temp_max=main.get("temp_max"),
                humidity=main.get("humidity"),
                pressure=main.get("pressure"),
            ),
            wind=Wind(speed=wind.get("speed") or 0),
            visibility=raw.get("visibility"),
            timezone=raw.get("timezone"),
        )
    except PydanticValidationError as exc:
        raise MalformedUpstreamError(f"unexpected field types: {exc.error_count()} errors") from exc

    return shaped.model_dump()
