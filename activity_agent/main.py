"""Application entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from activity_agent.agent_runtime import AgentRuntime
from activity_agent.config import Settings, load_settings
from activity_agent.llm.openrouter import OpenRouterProvider
from activity_agent.models import Prompt
from activity_agent.stores.base import ActivityStore
from activity_agent.stores.linear_store import LinearActivityStore
from activity_agent.stores.sqlite_store import SqliteActivityStore
from activity_agent.tools.registry import build_default_registry

logging.basicConfig(level=logging.INFO)
LOGGER = logging.getLogger(__name__)


def build_activity_store(settings: Settings) -> ActivityStore:
    """Create the activity store selected by ``ACTIVITY_STORE``."""

    if settings.activity_store == "linear":
        if not settings.linear_access_token:
            raise ValueError("LINEAR_ACCESS_TOKEN is required when ACTIVITY_STORE=linear")
        return LinearActivityStore(
            access_token=settings.linear_access_token,
            api_url=settings.linear_api_url,
            timeout_seconds=settings.request_timeout_seconds,
        )
    store = SqliteActivityStore(settings.database_path)
    store.initialize()
    return store


def build_runtime(settings: Settings, activity_store: ActivityStore) -> AgentRuntime:
    return AgentRuntime(
        llm=OpenRouterProvider(settings),
        activity_store=activity_store,
        tool_registry=build_default_registry(
            tool_timeout_seconds=settings.tool_timeout_seconds,
            user_agent=settings.nominatim_user_agent or None,
        ),
        max_iterations=settings.max_iterations,
        courtesy_delay_seconds=settings.courtesy_delay_seconds,
        request_timeout_seconds=settings.request_timeout_seconds,
    )


async def run(session_id: str, prompt: str, record_prompt: bool = True) -> str:
    """Initialize app layers and run one agent turn."""

    settings = load_settings()
    store = build_activity_store(settings)
    runtime = build_runtime(settings, store)

    if record_prompt:
        # The hosted platform records user prompts itself; do the same locally.
        await store.create_activity(session_id, Prompt(prompt))

    outcome = await runtime.handle_user_prompt(session_id, prompt)
    return outcome.body


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="activity-agent", description="Run one agent turn for a session.")
    parser.add_argument("prompt", help="User prompt to answer.")
    parser.add_argument("--session", required=True, help="Agent session id.")
    parser.add_argument(
        "--no-record-prompt",
        action="store_true",
        help="Do not store the prompt as a prompt activity before running.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Synchronous wrapper for asyncio entrypoint."""

    args = _parse_args(argv)
    reply = asyncio.run(run(args.session, args.prompt, record_prompt=not args.no_record_prompt))
    print(reply)


if __name__ == "__main__":
    main()
