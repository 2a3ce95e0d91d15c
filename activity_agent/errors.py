"""Exception types raised by the agent."""

from __future__ import annotations


class AgentError(Exception):
    """Base class for failures that end an agent turn."""


class ClassificationError(AgentError):
    """Model reply is tagged as an action but cannot be parsed into one."""


class ParameterError(AgentError):
    """Tool parameter string is missing or fails to parse."""


class ModelError(AgentError):
    """Language model call failed in transport or returned no reply."""


class ActivityStoreError(AgentError):
    """Activity store rejected a read or write."""
