"""Open-Meteo current weather tool."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from activity_agent.tools.base import CoordinateTool

LOGGER = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

# WMO weather interpretation codes.
WEATHER_CODES: dict[int, str] = {
    0: "clear sky",
    1: "mainly clear",
    2: "partly cloudy",
    3: "overcast",
    45: "fog",
    48: "depositing rime fog",
    51: "light drizzle",
    53: "moderate drizzle",
    55: "dense drizzle",
    56: "light freezing drizzle",
    57: "dense freezing drizzle",
    61: "slight rain",
    63: "moderate rain",
    65: "heavy rain",
    66: "light freezing rain",
    67: "heavy freezing rain",
    71: "slight snow",
    73: "moderate snow",
    75: "heavy snow",
    77: "snow grains",
    80: "slight rain showers",
    81: "moderate rain showers",
    82: "violent rain showers",
    85: "slight snow showers",
    86: "heavy snow showers",
    95: "thunderstorm",
    96: "thunderstorm with slight hail",
    99: "thunderstorm with heavy hail",
}


def describe_weather_code(code: Any) -> str:
    try:
        return WEATHER_CODES.get(int(code), "unknown weather")
    except (TypeError, ValueError):
        return "unknown weather"


class GetWeatherTool(CoordinateTool):
    """Current temperature and conditions at a coordinate."""

    name = "getWeather"
    description = "Get current weather for given coordinates (latitude first, then longitude)."

    def __init__(self, timeout_seconds: float = 15.0) -> None:
        self._timeout_seconds = timeout_seconds

    async def run(self, **kwargs: Any) -> str:
        lat, long = kwargs["lat"], kwargs["long"]
        try:
            async with httpx.AsyncClient() as client:
                resp = await client.get(
                    OPEN_METEO_URL,
                    params={
                        "latitude": lat,
                        "longitude": long,
                        "current": "temperature_2m,weathercode",
                    },
                    timeout=self._timeout_seconds,
                )
                data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.warning("Weather lookup for %s,%s failed: %s", lat, long, exc)
            return f"Failed to get weather: {exc}"

        current = data.get("current") if isinstance(data, dict) else None
        if not current:
            LOGGER.warning("Weather data not available: %r", data)
            return "Weather data not available"
        return f"{current.get('temperature_2m')}°C, {describe_weather_code(current.get('weathercode'))}"
