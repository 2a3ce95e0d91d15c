"""Rebuild model context from a session's recorded activities."""

from __future__ import annotations

import logging

from activity_agent.models import ActivityRecord, ActivityType, ChatMessage
from activity_agent.stores.base import ActivityStore

LOGGER = logging.getLogger(__name__)

_ROLES: dict[ActivityType, str] = {
    ActivityType.PROMPT: "human",
    ActivityType.RESPONSE: "assistant",
}


async def fetch_all_activities(store: ActivityStore, session_id: str) -> list[ActivityRecord]:
    """Follow the cursor until the store reports no further page."""

    page = await store.list_activities(session_id)
    records = list(page.records)
    while page.next_cursor:
        page = await store.list_activities(session_id, after=page.next_cursor)
        records.extend(page.records)
    return records


async def load_history(store: ActivityStore, session_id: str) -> list[ChatMessage]:
    """Prompts and responses of the session as chat messages, oldest first.

    Thoughts, actions, elicitations and errors are left out of the model
    context.
    """

    records = await fetch_all_activities(store, session_id)
    conversational = [record for record in records if record.type in _ROLES]
    LOGGER.info(
        "Loaded %d activities for session %s (%d prompt/response)",
        len(records),
        session_id,
        len(conversational),
    )
    return [ChatMessage(role=_ROLES[record.type], content=record.body) for record in reversed(conversational)]
