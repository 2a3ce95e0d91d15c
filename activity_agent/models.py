"""Core domain models used across layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union

TOOL_NAMES: frozenset[str] = frozenset({"getCoordinates", "getWeather", "getTime"})


class ActivityType(str, Enum):
    """Kinds of activity recorded in an agent session."""

    PROMPT = "prompt"
    THOUGHT = "thought"
    ACTION = "action"
    RESPONSE = "response"
    ELICITATION = "elicitation"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """Role-tagged unit of model context (human, assistant or system)."""

    role: str
    content: str


@dataclass(slots=True)
class Prompt:
    body: str

    type = ActivityType.PROMPT

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type.value, "body": self.body}


@dataclass(slots=True)
class Thought:
    body: str

    type = ActivityType.THOUGHT

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type.value, "body": self.body}


@dataclass(slots=True)
class Action:
    """Tool call announced by the model.

    ``result`` is ``None`` until the tool has run.
    """

    tool: str
    parameter: str | None = None
    result: str | None = None

    type = ActivityType.ACTION

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type.value,
            "action": self.tool,
            "parameter": self.parameter,
        }
        if self.result is not None:
            payload["result"] = self.result
        return payload


@dataclass(slots=True)
class Response:
    body: str

    type = ActivityType.RESPONSE

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type.value, "body": self.body}


@dataclass(slots=True)
class Elicitation:
    body: str

    type = ActivityType.ELICITATION

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type.value, "body": self.body}


@dataclass(slots=True)
class Error:
    body: str

    type = ActivityType.ERROR

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type.value, "body": self.body}


ClassifiedContent = Union[Thought, Action, Response, Elicitation, Error]
ActivityContent = Union[Prompt, Thought, Action, Response, Elicitation, Error]
TerminalContent = Union[Response, Elicitation, Error]


@dataclass(slots=True)
class ActivityRecord:
    """Activity as read back from a store."""

    id: str
    session_id: str
    type: ActivityType
    content: dict[str, Any]
    created_at: datetime | None = None

    @property
    def body(self) -> str:
        return str(self.content.get("body") or "")


@dataclass(slots=True)
class ActivityPage:
    """One page of a session's activities, newest first."""

    records: list[ActivityRecord]
    next_cursor: str | None = None
