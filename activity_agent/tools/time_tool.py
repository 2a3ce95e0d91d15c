"""Local time lookup tool."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from activity_agent.tools.base import CoordinateTool

LOGGER = logging.getLogger(__name__)

TIME_API_URL = "https://timeapi.io/api/Time/current/coordinate"


class GetTimeTool(CoordinateTool):
    """Current local time at a coordinate.

    timeapi.io is slow, so the request gets a long timeout of its own.
    """

    name = "getTime"
    description = "Get current time for given coordinates (latitude first, then longitude)."

    def __init__(self, timeout_seconds: float = 60.0) -> None:
        self._timeout_seconds = timeout_seconds

    async def run(self, **kwargs: Any) -> str:
        lat, long = kwargs["lat"], kwargs["long"]
        try:
            async with httpx.AsyncClient() as client:
                resp = await client.get(
                    TIME_API_URL,
                    params={"latitude": lat, "longitude": long},
                    timeout=self._timeout_seconds,
                )
                if not resp.is_success:
                    return f"Time API error: {resp.status_code} {resp.reason_phrase}"
                data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.warning("Time lookup for %s,%s failed: %s", lat, long, exc)
            return f"Failed to get time: {exc}"

        if not data:
            LOGGER.warning("Time data not available: %r", data)
            return "Time data not available"
        dst_status = " (DST active)" if data.get("dstActive") else ""
        return f"{data.get('dayOfWeek')}, {data.get('date')} at {data.get('time')} {data.get('timeZone')}{dst_status}"
