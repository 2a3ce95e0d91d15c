"""Registry for safe tool registration and execution."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from pydantic import ValidationError, create_model

from activity_agent.errors import ClassificationError, ParameterError
from activity_agent.tools.base import Tool
from activity_agent.tools.coordinates_tool import DEFAULT_USER_AGENT, GetCoordinatesTool
from activity_agent.tools.time_tool import GetTimeTool
from activity_agent.tools.weather_tool import GetWeatherTool

LOGGER = logging.getLogger(__name__)


class ToolRegistry:
    """Explicit registry of safe tools."""

    def __init__(self, tool_timeout_seconds: float = 60.0) -> None:
        self._tool_timeout_seconds = tool_timeout_seconds
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        self._tools[tool.name] = tool

    def names(self) -> frozenset[str]:
        return frozenset(self._tools)

    def list_tool_specs(self) -> list[dict[str, Any]]:
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.parameters_schema,
                },
            }
            for tool in self._tools.values()
        ]

    async def execute(self, tool_name: str, raw_parameter: str | None) -> str:
        """Parse, validate and run a tool, returning its result as text.

        Parameter problems raise ``ParameterError``. Failures inside the tool
        itself, including timeouts, come back as ``Tool error: ...`` text.
        """

        tool = self._tools.get(tool_name)
        if tool is None:
            raise ClassificationError(f"Invalid tool name: {tool_name}")
        if not raw_parameter or not raw_parameter.strip():
            raise ParameterError("Parameter is required for action execution")

        arguments = tool.parse_parameter(raw_parameter)
        validated = _validate_json_schema(tool.parameters_schema, arguments)
        try:
            result = await asyncio.wait_for(tool.run(**validated), timeout=self._tool_timeout_seconds)
        except asyncio.TimeoutError:
            LOGGER.warning("Tool %s timed out after %.0fs", tool_name, self._tool_timeout_seconds)
            return f"Tool error: {tool_name} timed out after {self._tool_timeout_seconds:g} seconds"
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Tool %s failed", tool_name)
            return f"Tool error: {tool_name} failed: {exc}"
        return result if isinstance(result, str) else json.dumps(result)


def _validate_json_schema(schema: dict[str, Any], payload: dict[str, Any]) -> dict[str, Any]:
    props = schema.get("properties", {})
    required = set(schema.get("required", []))
    fields: dict[str, tuple[type[Any], Any]] = {}
    for name, config in props.items():
        typ = _python_type(config.get("type", "string"))
        default = ... if name in required else None
        fields[name] = (typ, default)

    model = create_model("ToolInputModel", **fields)
    try:
        value = model(**payload)
    except ValidationError as exc:
        raise ParameterError(f"Invalid input for tool: {exc}") from exc
    return value.model_dump(exclude_none=True)


def _python_type(schema_type: str) -> type[Any]:
    mapping: dict[str, type[Any]] = {
        "string": str,
        "integer": int,
        "number": float,
        "boolean": bool,
        "object": dict,
        "array": list,
    }
    return mapping.get(schema_type, str)


def build_default_registry(tool_timeout_seconds: float = 60.0, user_agent: str | None = None) -> ToolRegistry:
    """Registry with the geocoding, weather and time tools."""

    registry = ToolRegistry(tool_timeout_seconds=tool_timeout_seconds)
    registry.register(GetCoordinatesTool(user_agent=user_agent or DEFAULT_USER_AGENT))
    registry.register(GetWeatherTool())
    registry.register(GetTimeTool(timeout_seconds=tool_timeout_seconds))
    return registry
