"""Core agent runtime."""

from __future__ import annotations

import asyncio
import logging

from activity_agent.classifier import classify
from activity_agent.errors import ModelError
from activity_agent.history import load_history
from activity_agent.llm.base import LLMProvider
from activity_agent.models import (
    Action,
    ActivityContent,
    ChatMessage,
    Elicitation,
    Error,
    Response,
    TerminalContent,
    Thought,
)
from activity_agent.prompt import SYSTEM_PROMPT
from activity_agent.stores.base import ActivityStore
from activity_agent.tools.registry import ToolRegistry

LOGGER = logging.getLogger(__name__)

MAX_ITERATIONS_MESSAGE = "The agent has reached the maximum number of iterations and will now stop."


class AgentRuntime:
    """Turn-taking loop that records every step as a session activity.

    Each iteration asks the model for its next step, classifies the reply
    and acts on it. Thoughts and actions continue the loop; responses,
    elicitations and errors end it. Any failure inside an iteration is
    posted as an error activity and ends the turn.
    """

    def __init__(
        self,
        llm: LLMProvider,
        activity_store: ActivityStore,
        tool_registry: ToolRegistry,
        max_iterations: int = 10,
        courtesy_delay_seconds: float = 1.0,
        request_timeout_seconds: float = 30.0,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._llm = llm
        self._activity_store = activity_store
        self._tool_registry = tool_registry
        self._max_iterations = max_iterations
        self._courtesy_delay_seconds = courtesy_delay_seconds
        self._request_timeout_seconds = request_timeout_seconds
        self._system_prompt = system_prompt

    async def handle_user_prompt(self, session_id: str, user_prompt: str) -> TerminalContent:
        """Run one agent turn for ``user_prompt`` and return the content that ended it."""

        history = await load_history(self._activity_store, session_id)
        # The new prompt goes first and earlier turns follow it.
        messages: list[ChatMessage] = [ChatMessage(role="human", content=user_prompt or ""), *history]

        outcome: TerminalContent | None = None
        iterations = 0
        while outcome is None and iterations < self._max_iterations:
            iterations += 1
            try:
                outcome = await self._run_iteration(session_id, messages)
            except Exception as exc:  # noqa: BLE001
                LOGGER.exception("Agent iteration %d failed for session %s", iterations, session_id)
                outcome = Error(f"Agent error: {exc}")
                await self._publish(session_id, outcome)

        if outcome is None:
            LOGGER.warning("Session %s hit the iteration limit (%d)", session_id, self._max_iterations)
            outcome = Error(MAX_ITERATIONS_MESSAGE)
            await self._publish(session_id, outcome)

        LOGGER.info(
            "Session %s finished after %d iteration(s) with %s",
            session_id,
            iterations,
            outcome.type.value,
        )
        return outcome

    async def _run_iteration(self, session_id: str, messages: list[ChatMessage]) -> TerminalContent | None:
        """Run one model step; return the terminal content, or ``None`` to continue."""

        reply = await self._call_model(messages)
        content = classify(reply, self._tool_registry.names())
        LOGGER.info("Session %s classified reply as %s", session_id, content.type.value)

        if isinstance(content, (Response, Elicitation, Error)):
            await self._publish(session_id, content)
            return content

        if isinstance(content, Thought):
            await self._publish(session_id, content)
            messages.append(ChatMessage(role="assistant", content=reply))
        elif isinstance(content, Action):
            await self._publish(session_id, content)
            LOGGER.info("Executing tool %s(%s)", content.tool, content.parameter)
            result = await self._tool_registry.execute(content.tool, content.parameter)
            messages.append(ChatMessage(role="assistant", content=reply))
            messages.append(ChatMessage(role="human", content=f"Tool result: {result}"))
            await self._publish(
                session_id,
                Action(tool=content.tool, parameter=content.parameter, result=result),
            )

        await asyncio.sleep(self._courtesy_delay_seconds)
        return None

    async def _call_model(self, messages: list[ChatMessage]) -> str:
        try:
            return await asyncio.wait_for(
                self._llm.generate(self._system_prompt, list(messages)),
                timeout=self._request_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ModelError(f"Model API error: no reply within {self._request_timeout_seconds:g} seconds") from exc

    async def _publish(self, session_id: str, content: ActivityContent) -> None:
        await self._activity_store.create_activity(session_id, content)
