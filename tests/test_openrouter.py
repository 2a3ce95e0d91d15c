"""Tests for OpenRouterProvider."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from activity_agent.config import Settings
from activity_agent.errors import ModelError
from activity_agent.llm.openrouter import OpenRouterProvider
from activity_agent.models import ChatMessage


def _settings() -> Settings:
    return Settings(OPENROUTER_API_KEY="key", OPENROUTER_MODEL="some/model", _env_file=None)


def _mock_response(data: dict, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    resp.raise_for_status = MagicMock()
    return resp


def _mock_client(**kwargs) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client.post = AsyncMock(**kwargs)
    return mock_client


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"content": content}, "finish_reason": "stop"}]}


@pytest.mark.asyncio
async def test_generate_sends_system_prompt_and_maps_roles():
    mock_client = _mock_client(return_value=_mock_response(_completion("THINKING: hmm")))

    with patch("activity_agent.llm.openrouter.httpx.AsyncClient", return_value=mock_client):
        reply = await OpenRouterProvider(_settings()).generate(
            "be helpful",
            [ChatMessage("human", "hi"), ChatMessage("assistant", "hello")],
        )

    assert reply == "THINKING: hmm"
    payload = mock_client.post.call_args.kwargs["json"]
    assert payload["model"] == "some/model"
    assert payload["temperature"] == 0
    assert payload["messages"] == [
        {"role": "system", "content": "be helpful"},
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
    ]
    assert mock_client.post.call_args.kwargs["headers"]["Authorization"] == "Bearer key"


@pytest.mark.asyncio
async def test_generate_retries_on_rate_limit():
    mock_client = _mock_client(
        side_effect=[_mock_response({}, status_code=429), _mock_response(_completion("RESPONSE: ok"))]
    )

    with patch("activity_agent.llm.openrouter.httpx.AsyncClient", return_value=mock_client), patch(
        "activity_agent.llm.openrouter.asyncio.sleep", new=AsyncMock()
    ) as sleep:
        reply = await OpenRouterProvider(_settings()).generate("sys", [ChatMessage("human", "hi")])

    assert reply == "RESPONSE: ok"
    sleep.assert_awaited_once_with(5)
    assert mock_client.post.call_count == 2


@pytest.mark.asyncio
async def test_transport_failure_raises_model_error():
    mock_client = _mock_client(side_effect=httpx.ConnectError("unreachable"))

    with patch("activity_agent.llm.openrouter.httpx.AsyncClient", return_value=mock_client):
        with pytest.raises(ModelError, match="unreachable"):
            await OpenRouterProvider(_settings()).generate("sys", [ChatMessage("human", "hi")])


@pytest.mark.asyncio
async def test_http_status_error_raises_model_error():
    request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
    bad = _mock_response({}, status_code=401)
    bad.raise_for_status.side_effect = httpx.HTTPStatusError(
        "401 Unauthorized", request=request, response=httpx.Response(401, request=request)
    )
    mock_client = _mock_client(return_value=bad)

    with patch("activity_agent.llm.openrouter.httpx.AsyncClient", return_value=mock_client):
        with pytest.raises(ModelError, match="Model API error"):
            await OpenRouterProvider(_settings()).generate("sys", [ChatMessage("human", "hi")])


@pytest.mark.asyncio
async def test_missing_choices_raises_model_error():
    mock_client = _mock_client(return_value=_mock_response({"error": {"message": "no credits"}}))

    with patch("activity_agent.llm.openrouter.httpx.AsyncClient", return_value=mock_client):
        with pytest.raises(ModelError, match="no choices"):
            await OpenRouterProvider(_settings()).generate("sys", [ChatMessage("human", "hi")])
