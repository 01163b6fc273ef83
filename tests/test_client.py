"""Tests for the DashClaw HTTP client."""

import json

import httpx
import pytest

from memory_consolidator.client import DashClawClient
from memory_consolidator.errors import DashClawError


@pytest.fixture
def recorded():
    return []


def make_client(recorded, status=200, payload=None):
    def handler(request: httpx.Request) -> httpx.Response:
        recorded.append(request)
        if status >= 400:
            return httpx.Response(status, text="boom")
        return httpx.Response(status, json=payload or {})

    return DashClawClient(
        base_url="https://dashclaw.example/",
        api_key="secret-key",
        transport=httpx.MockTransport(handler),
    )


def test_create_handoff(recorded):
    with make_client(recorded, payload={"handoff_id": "ho_1"}) as client:
        result = client.create_handoff(
            summary="Memory consolidation for 2026-10-18 (NIGHTLY)",
            session_date="2026-10-18",
            key_decisions=["Use service X"],
        )

    assert result == {"handoff_id": "ho_1"}
    request = recorded[0]
    assert request.method == "POST"
    assert str(request.url) == "https://dashclaw.example/api/handoffs"
    assert request.headers["x-api-key"] == "secret-key"
    assert json.loads(request.content) == {
        "agent_id": "moltfire",
        "agent_name": "MoltFire",
        "summary": "Memory consolidation for 2026-10-18 (NIGHTLY)",
        "session_date": "2026-10-18",
        "key_decisions": ["Use service X"],
        "open_tasks": [],
        "next_priorities": [],
    }


def test_capture_key_point(recorded):
    with make_client(recorded) as client:
        client.capture_key_point(content="[Infra] idea", category="insight", importance=7, session_date="2026-10-18")

    body = json.loads(recorded[0].content)
    assert recorded[0].url.path == "/api/handoffs/key-points"
    assert body["content"] == "[Infra] idea"
    assert body["importance"] == 7


def test_record_decision(recorded):
    with make_client(recorded) as client:
        client.record_decision(decision="Use X", context="From daily log section: Infra", outcome="success", confidence=80)

    body = json.loads(recorded[0].content)
    assert recorded[0].url.path == "/api/learning/decisions"
    assert body["outcome"] == "success"
    assert body["confidence"] == 80


def test_empty_response_body_is_empty_dict(recorded):
    def handler(request):
        return httpx.Response(204)

    client = DashClawClient("https://dashclaw.example", "k", transport=httpx.MockTransport(handler))
    assert client.record_decision(decision="d", context="c", outcome="success", confidence=80) == {}


def test_error_status_raises(recorded):
    with make_client(recorded, status=500) as client:
        with pytest.raises(DashClawError) as exc_info:
            client.create_handoff(summary="s", session_date="2026-10-18", key_decisions=[])

    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "boom"
