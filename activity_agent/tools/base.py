"""Tool contracts."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any

from activity_agent.errors import ParameterError


class Tool(ABC):
    """Base class for all agent tools.

    Tools never raise on lookup failures; they return a descriptive error
    so the model always gets a textual result back.
    """

    name: str
    description: str
    parameters_schema: dict[str, Any]

    @abstractmethod
    def parse_parameter(self, raw: str) -> dict[str, Any]:
        """Turn the raw ``NAME(...)`` parameter text into keyword arguments."""

    @abstractmethod
    async def run(self, **kwargs: Any) -> Any:
        """Execute tool with validated arguments."""


class CoordinateTool(Tool):
    """Tool taking ``lat, long`` in that order."""

    parameters_schema: dict[str, Any] = {
        "type": "object",
        "properties": {
            "lat": {"type": "number", "description": "Latitude of the location."},
            "long": {"type": "number", "description": "Longitude of the location."},
        },
        "required": ["lat", "long"],
        "additionalProperties": False,
    }

    def parse_parameter(self, raw: str) -> dict[str, Any]:
        parts = raw.split(",")
        if len(parts) < 2:
            raise ParameterError(f"Invalid parameter for {self.name} action: expected 'lat, long'")
        try:
            lat, long = float(parts[0].strip()), float(parts[1].strip())
        except ValueError as exc:
            raise ParameterError(f"Invalid parameter for {self.name} action: {raw!r}") from exc
        if not (math.isfinite(lat) and math.isfinite(long)):
            raise ParameterError(f"Invalid parameter for {self.name} action: {raw!r}")
        return {"lat": lat, "long": long}
