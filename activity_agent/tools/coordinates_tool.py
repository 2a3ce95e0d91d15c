"""OpenStreetMap geocoding tool."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from activity_agent.errors import ParameterError
from activity_agent.tools.base import Tool

LOGGER = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "activity-agent/0.1 (+https://github.com/activity-agent)"


class GetCoordinatesTool(Tool):
    """Look up latitude and longitude for a place name."""

    name = "getCoordinates"
    description = "Get coordinates (latitude and longitude) for a given city name."
    parameters_schema: dict[str, Any] = {
        "type": "object",
        "properties": {
            "city_name": {"type": "string", "description": "The name of the city to get coordinates for."},
        },
        "required": ["city_name"],
        "additionalProperties": False,
    }

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, timeout_seconds: float = 15.0) -> None:
        self._user_agent = user_agent
        self._timeout_seconds = timeout_seconds

    def parse_parameter(self, raw: str) -> dict[str, Any]:
        city_name = raw.replace('"', "").strip().strip("'").strip()
        if not city_name:
            raise ParameterError("Invalid parameter for getCoordinates action: empty place name")
        return {"city_name": city_name}

    async def run(self, **kwargs: Any) -> dict[str, Any]:
        city_name = str(kwargs["city_name"])
        try:
            async with httpx.AsyncClient() as client:
                resp = await client.get(
                    NOMINATIM_URL,
                    params={"q": city_name, "format": "jsonv2"},
                    headers={"User-Agent": self._user_agent, "Accept": "application/json"},
                    timeout=self._timeout_seconds,
                )
                if not resp.is_success:
                    return {"error": f"OpenStreetMap API error: {resp.status_code} {resp.reason_phrase}"}
                data = resp.json()

            if not data:
                return {"error": "Location not found"}
            first = data[0]
            return {
                "lat": float(first["lat"]),
                "lon": float(first["lon"]),
                "displayName": first.get("display_name", city_name),
            }
        except (httpx.HTTPError, ValueError, KeyError, TypeError, IndexError) as exc:
            LOGGER.warning("Geocoding %r failed: %s", city_name, exc)
            return {"error": f"Failed to get coordinates: {exc}"}
