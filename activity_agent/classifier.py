"""Classify free-text model replies into activity content."""

from __future__ import annotations

import re
from collections.abc import Callable, Collection

from activity_agent.errors import ClassificationError
from activity_agent.models import (
    TOOL_NAMES,
    Action,
    ActivityType,
    ClassifiedContent,
    Elicitation,
    Error,
    Response,
    Thought,
)

# Checked in order; the first matching marker wins.
MARKERS: tuple[tuple[str, ActivityType], ...] = (
    ("THINKING:", ActivityType.THOUGHT),
    ("ACTION:", ActivityType.ACTION),
    ("RESPONSE:", ActivityType.RESPONSE),
    ("ELICITATION:", ActivityType.ELICITATION),
    ("ERROR:", ActivityType.ERROR),
)

_ACTION_PATTERN = re.compile(r"ACTION:\s*(\w+)\(([^)]*)\)")

_BODY_TYPES: dict[ActivityType, Callable[[str], ClassifiedContent]] = {
    ActivityType.THOUGHT: Thought,
    ActivityType.RESPONSE: Response,
    ActivityType.ELICITATION: Elicitation,
    ActivityType.ERROR: Error,
}


def classify(raw_text: str, tool_names: Collection[str] = TOOL_NAMES) -> ClassifiedContent:
    """Map a model reply to exactly one content variant.

    Text without a recognised marker is treated as a thought. An ``ACTION:``
    reply must read ``NAME(params)`` with ``NAME`` in ``tool_names``;
    otherwise ``ClassificationError`` is raised. The parameter string is
    returned untouched (``None`` when the parentheses are empty) and is
    parsed later by the tool itself.
    """

    text = raw_text.strip()
    for marker, activity_type in MARKERS:
        if not text.startswith(marker):
            continue
        if activity_type is ActivityType.ACTION:
            return _parse_action(text, tool_names)
        return _BODY_TYPES[activity_type](text[len(marker):].strip())
    return Thought(text)


def _parse_action(text: str, tool_names: Collection[str]) -> Action:
    match = _ACTION_PATTERN.match(text)
    if match is None:
        raise ClassificationError(f"Could not parse action: {text[:200]}")
    tool_name, params = match.groups()
    if tool_name not in tool_names:
        raise ClassificationError(f"Invalid tool name: {tool_name}")
    return Action(tool=tool_name, parameter=params or None)
