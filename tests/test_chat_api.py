"""
Integration tests for POST /chat and the system routes.

The model is mocked at app.agent.graph.chat_with_tools, so tests need no OpenAI access.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.agent.llm import ModelReply, ToolCall
from app.api.handlers import APOLOGY_MESSAGE
from app.core.errors import UpstreamServiceError
from app.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_chat_order_status_end_to_end(client: TestClient) -> None:
    """Model calls check_order_status, tool runs, second call answers; action is recorded."""
    replies = [
        ModelReply(content=None, tool_calls=[ToolCall(id="call_1", name="check_order_status", arguments={"order_id": "ABC-123"})]),
        ModelReply(content="Good news: order ABC-123 is In Transit and arrives tomorrow."),
    ]
    with patch("app.agent.graph.chat_with_tools", side_effect=replies):
        response = client.post("/chat", json={"user_query": "I want to check order ABC-123"})
    assert response.status_code == 200
    data = response.json()
    assert "In Transit" in data["ai_response"]
    assert data["action_taken"].startswith(
        'check_order_status({"order_id":"ABC-123"}) -> Order ABC-123 is currently \'In Transit\''
    )


def test_chat_without_tool_returns_null_action(client: TestClient) -> None:
    with patch("app.agent.graph.chat_with_tools", return_value=ModelReply(content="We are open Mon-Fri, 9-5 EST.")):
        response = client.post("/chat", json={"user_query": "What are your support hours?"})
    assert response.status_code == 200
    assert response.json() == {"ai_response": "We are open Mon-Fri, 9-5 EST.", "action_taken": None}


def test_chat_unknown_tool_is_200_with_message(client: TestClient) -> None:
    bad = ToolCall(id="call_x", name="nonexistent_tool", arguments={})
    with patch("app.agent.graph.chat_with_tools", return_value=ModelReply(content=None, tool_calls=[bad])):
        response = client.post("/chat", json={"user_query": "launch the rockets"})
    assert response.status_code == 200
    data = response.json()
    assert "nonexistent_tool" in data["ai_response"]
    assert "unknown" in data["ai_response"]
    assert data["action_taken"] is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"json": {}},
        {"json": {"user_query": ""}},
        {"json": {"question": "wrong field"}},
        {"json": {"user_query": 123}},
        {},
        {"content": "not json", "headers": {"Content-Type": "application/json"}},
    ],
)
def test_chat_missing_query_returns_400(client: TestClient, kwargs: dict) -> None:
    with patch("app.agent.graph.chat_with_tools") as mock_llm:
        response = client.post("/chat", **kwargs)
    assert response.status_code == 400
    assert "user_query" in response.json()["error"]
    mock_llm.assert_not_called()


def test_chat_upstream_failure_returns_500(client: TestClient) -> None:
    with patch("app.agent.graph.chat_with_tools", side_effect=UpstreamServiceError("Incorrect API key provided")):
        response = client.post("/chat", json={"user_query": "shipping cost?"})
    assert response.status_code == 500
    data = response.json()
    assert data["ai_response"] == APOLOGY_MESSAGE
    assert data["action_taken"] == "Server Error: Incorrect API key provided"


def test_chat_failure_in_second_call_returns_500(client: TestClient) -> None:
    replies = [
        ModelReply(content=None, tool_calls=[ToolCall(id="c", name="book_appointment", arguments={"date": "Friday", "service": "haircut"})]),
        UpstreamServiceError("timed out"),
    ]
    with patch("app.agent.graph.chat_with_tools", side_effect=replies):
        response = client.post("/chat", json={"user_query": "book a haircut on Friday"})
    assert response.status_code == 500
    assert response.json()["action_taken"].startswith("Server Error:")


def test_cors_preflight_allows_any_origin(client: TestClient) -> None:
    response = client.options(
        "/chat",
        headers={
            "Origin": "https://shop.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/").status_code == 200
