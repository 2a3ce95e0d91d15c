"""Linear agent-activity store over the GraphQL API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from activity_agent.errors import ActivityStoreError
from activity_agent.models import ActivityContent, ActivityPage, ActivityRecord, ActivityType
from activity_agent.stores.base import ActivityStore

LOGGER = logging.getLogger(__name__)

LINEAR_API_URL = "https://api.linear.app/graphql"

CREATE_ACTIVITY_MUTATION = """
mutation AgentActivityCreate($input: AgentActivityCreateInput!) {
  agentActivityCreate(input: $input) {
    success
    agentActivity { id }
  }
}
"""

LIST_ACTIVITIES_QUERY = """
query AgentSessionActivities($id: String!, $after: String) {
  agentSession(id: $id) {
    activities(after: $after) {
      nodes {
        id
        createdAt
        content {
          __typename
          ... on AgentActivityPromptContent { body }
          ... on AgentActivityThoughtContent { body }
          ... on AgentActivityResponseContent { body }
          ... on AgentActivityElicitationContent { body }
          ... on AgentActivityErrorContent { body }
          ... on AgentActivityActionContent { action parameter result }
        }
      }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

_TYPENAMES: dict[str, ActivityType] = {
    "AgentActivityPromptContent": ActivityType.PROMPT,
    "AgentActivityThoughtContent": ActivityType.THOUGHT,
    "AgentActivityActionContent": ActivityType.ACTION,
    "AgentActivityResponseContent": ActivityType.RESPONSE,
    "AgentActivityElicitationContent": ActivityType.ELICITATION,
    "AgentActivityErrorContent": ActivityType.ERROR,
}


class LinearActivityStore(ActivityStore):
    """Reads and writes agent activities in a Linear workspace."""

    def __init__(self, access_token: str, api_url: str = LINEAR_API_URL, timeout_seconds: float = 30.0) -> None:
        self._access_token = access_token
        self._api_url = api_url
        self._timeout_seconds = timeout_seconds

    async def create_activity(self, session_id: str, content: ActivityContent) -> None:
        data = await self._execute(
            CREATE_ACTIVITY_MUTATION,
            {"input": {"agentSessionId": session_id, "content": content.to_payload()}},
        )
        result = data.get("agentActivityCreate") or {}
        if not result.get("success"):
            raise ActivityStoreError(f"Linear rejected {content.type.value} activity for session {session_id}")

    async def list_activities(self, session_id: str, after: str | None = None) -> ActivityPage:
        data = await self._execute(LIST_ACTIVITIES_QUERY, {"id": session_id, "after": after})
        session = data.get("agentSession")
        if session is None:
            raise ActivityStoreError(f"Agent session not found: {session_id}")

        connection = session["activities"]
        records = [_to_record(session_id, node) for node in connection.get("nodes", [])]
        page_info = connection.get("pageInfo") or {}
        next_cursor = page_info.get("endCursor") if page_info.get("hasNextPage") else None
        return ActivityPage(records=records, next_cursor=next_cursor)

    async def _execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self._timeout_seconds)) as client:
                response = await client.post(
                    self._api_url,
                    headers={
                        "Authorization": f"Bearer {self._access_token}",
                        "Content-Type": "application/json",
                    },
                    json={"query": query, "variables": variables},
                )
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ActivityStoreError(f"Linear API error: {exc}") from exc

        if payload.get("errors"):
            messages = "; ".join(str(err.get("message", err)) for err in payload["errors"])
            raise ActivityStoreError(f"Linear API error: {messages}")
        return payload.get("data") or {}


def _to_record(session_id: str, node: dict[str, Any]) -> ActivityRecord:
    content = dict(node.get("content") or {})
    typename = content.pop("__typename", None)
    activity_type = _TYPENAMES.get(typename or "")
    if activity_type is None:
        try:
            activity_type = ActivityType(content.get("type"))
        except ValueError:
            # Newer content kinds are step-tracking noise for history purposes.
            LOGGER.debug("Unrecognised activity content %r on %s", typename, node.get("id"))
            activity_type = ActivityType.THOUGHT
    content["type"] = activity_type.value
    created_at = node.get("createdAt")
    return ActivityRecord(
        id=str(node["id"]),
        session_id=session_id,
        type=activity_type,
        content=content,
        created_at=datetime.fromisoformat(created_at.replace("Z", "+00:00")) if created_at else None,
    )
