"""LLM provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from activity_agent.models import ChatMessage


class LLMProvider(ABC):
    """Abstract model provider used by the agent runtime."""

    @abstractmethod
    async def generate(self, system_prompt: str, messages: Sequence[ChatMessage]) -> str:
        """Return the model's text reply, or raise ``ModelError``."""
