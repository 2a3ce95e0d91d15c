"""OpenRouter implementation of LLMProvider."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from activity_agent.config import Settings
from activity_agent.errors import ModelError
from activity_agent.llm.base import LLMProvider
from activity_agent.models import ChatMessage

_LOGGER = logging.getLogger(__name__)

_MAX_RETRIES = 3
_RETRY_BACKOFF_SECONDS = [5, 15, 45]

_ROLE_MAP = {"human": "user", "assistant": "assistant", "system": "system"}


class OpenRouterProvider(LLMProvider):
    """LLM provider using OpenRouter's OpenAI-compatible chat endpoint."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def generate(self, system_prompt: str, messages: Sequence[ChatMessage]) -> str:
        payload: dict[str, Any] = {
            "model": self._settings.openrouter_model,
            "temperature": 0,
            "messages": [
                {"role": "system", "content": system_prompt},
                *({"role": _ROLE_MAP.get(m.role, m.role), "content": m.content} for m in messages),
            ],
        }

        timeout = httpx.Timeout(self._settings.request_timeout_seconds)
        try:
            async with httpx.AsyncClient(base_url=self._settings.openrouter_base_url, timeout=timeout) as client:
                for attempt in range(_MAX_RETRIES + 1):
                    response = await client.post(
                        "/chat/completions",
                        headers={
                            "Authorization": f"Bearer {self._settings.openrouter_api_key}",
                            "Content-Type": "application/json",
                        },
                        json=payload,
                    )
                    if response.status_code == 429 and attempt < _MAX_RETRIES:
                        wait = _RETRY_BACKOFF_SECONDS[attempt]
                        _LOGGER.warning(
                            "OpenRouter rate limited (429), retrying in %ds (attempt %d/%d)",
                            wait,
                            attempt + 1,
                            _MAX_RETRIES,
                        )
                        await asyncio.sleep(wait)
                        continue
                    response.raise_for_status()
                    break
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ModelError(f"Model API error: {exc}") from exc

        try:
            choice = data["choices"][0]
        except (KeyError, IndexError, TypeError) as exc:
            raise ModelError(f"Model API error: no choices in response {str(data)[:200]}") from exc

        content = (choice.get("message") or {}).get("content") or ""
        _LOGGER.info(
            "LLM response: finish_reason=%r content=%r",
            choice.get("finish_reason"),
            content[:200],
        )
        return content
