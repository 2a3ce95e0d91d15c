"""Tests for LinearActivityStore."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from activity_agent.errors import ActivityStoreError
from activity_agent.models import Action, ActivityType, Thought
from activity_agent.stores.linear_store import LinearActivityStore


def _mock_response(data: dict) -> MagicMock:
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = data
    resp.raise_for_status = MagicMock()
    return resp


def _mock_client(**kwargs) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client.post = AsyncMock(**kwargs)
    return mock_client


def _page(nodes: list[dict], has_next: bool, end_cursor: str | None) -> dict:
    return {
        "data": {
            "agentSession": {
                "activities": {
                    "nodes": nodes,
                    "pageInfo": {"hasNextPage": has_next, "endCursor": end_cursor},
                }
            }
        }
    }


@pytest.mark.asyncio
async def test_create_activity_sends_mutation_with_payload():
    mock_client = _mock_client(
        return_value=_mock_response({"data": {"agentActivityCreate": {"success": True, "agentActivity": {"id": "a1"}}}})
    )

    with patch("activity_agent.stores.linear_store.httpx.AsyncClient", return_value=mock_client):
        store = LinearActivityStore(access_token="tok")
        await store.create_activity("sess-1", Action(tool="getWeather", parameter="1,2"))

    call = mock_client.post.call_args
    assert call.kwargs["headers"]["Authorization"] == "Bearer tok"
    body = call.kwargs["json"]
    assert "agentActivityCreate" in body["query"]
    assert body["variables"]["input"] == {
        "agentSessionId": "sess-1",
        "content": {"type": "action", "action": "getWeather", "parameter": "1,2"},
    }


@pytest.mark.asyncio
async def test_create_activity_raises_when_not_successful():
    mock_client = _mock_client(return_value=_mock_response({"data": {"agentActivityCreate": {"success": False}}}))

    with patch("activity_agent.stores.linear_store.httpx.AsyncClient", return_value=mock_client):
        with pytest.raises(ActivityStoreError):
            await LinearActivityStore(access_token="tok").create_activity("sess-1", Thought("x"))


@pytest.mark.asyncio
async def test_graphql_errors_raise():
    mock_client = _mock_client(return_value=_mock_response({"errors": [{"message": "Entity not found"}]}))

    with patch("activity_agent.stores.linear_store.httpx.AsyncClient", return_value=mock_client):
        with pytest.raises(ActivityStoreError, match="Entity not found"):
            await LinearActivityStore(access_token="tok").list_activities("sess-1")


@pytest.mark.asyncio
async def test_transport_errors_raise():
    mock_client = _mock_client(side_effect=httpx.ConnectError("down"))

    with patch("activity_agent.stores.linear_store.httpx.AsyncClient", return_value=mock_client):
        with pytest.raises(ActivityStoreError, match="down"):
            await LinearActivityStore(access_token="tok").list_activities("sess-1")


@pytest.mark.asyncio
async def test_list_activities_maps_content_and_cursor():
    nodes = [
        {
            "id": "a2",
            "createdAt": "2026-10-17T10:00:00.000Z",
            "content": {"__typename": "AgentActivityResponseContent", "body": "Sunny"},
        },
        {
            "id": "a1",
            "createdAt": "2026-10-17T09:59:00.000Z",
            "content": {"__typename": "AgentActivityPromptContent", "body": "Weather?"},
        },
    ]
    mock_client = _mock_client(return_value=_mock_response(_page(nodes, has_next=True, end_cursor="cur-1")))

    with patch("activity_agent.stores.linear_store.httpx.AsyncClient", return_value=mock_client):
        page = await LinearActivityStore(access_token="tok").list_activities("sess-1", after="cur-0")

    assert [r.type for r in page.records] == [ActivityType.RESPONSE, ActivityType.PROMPT]
    assert page.records[0].body == "Sunny"
    assert page.records[0].content["type"] == "response"
    assert page.records[0].created_at.year == 2026
    assert page.next_cursor == "cur-1"
    assert mock_client.post.call_args.kwargs["json"]["variables"] == {"id": "sess-1", "after": "cur-0"}


@pytest.mark.asyncio
async def test_last_page_has_no_cursor():
    mock_client = _mock_client(return_value=_mock_response(_page([], has_next=False, end_cursor="cur-9")))

    with patch("activity_agent.stores.linear_store.httpx.AsyncClient", return_value=mock_client):
        page = await LinearActivityStore(access_token="tok").list_activities("sess-1")

    assert page.records == []
    assert page.next_cursor is None


@pytest.mark.asyncio
async def test_missing_session_raises():
    mock_client = _mock_client(return_value=_mock_response({"data": {"agentSession": None}}))

    with patch("activity_agent.stores.linear_store.httpx.AsyncClient", return_value=mock_client):
        with pytest.raises(ActivityStoreError, match="not found"):
            await LinearActivityStore(access_token="tok").list_activities("missing")
