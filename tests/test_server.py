"""Tests for the HTTP and websocket surface."""

import pytest

pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

from helpdesk.engine import HelpDeskEngine  # noqa: E402
from helpdesk.realtime.server import create_app  # noqa: E402


@pytest.fixture
def client(instant_engine):
    return TestClient(create_app(engine=instant_engine))


class TestHttp:
    """Tests for the HTTP endpoints."""

    def test_health(self, client, instant_engine):
        body = client.get("/health").json()
        assert body == {"status": "ok", "entries": 45, "rules": len(instant_engine.rules)}

    def test_classify_kb(self, client):
        body = client.post("/classify", json={"text": "how do I start learning react"}).json()
        assert body["result"]["kind"] == "kb"
        assert body["result"]["entry"]["id"] == "2"
        assert body["result"]["text"] == body["result"]["entry"]["answer"]

    def test_classify_fallback(self, client, default_config):
        body = client.post("/classify", json={"text": "tell me a joke"}).json()
        assert body["result"]["kind"] == "fallback"
        assert body["result"]["text"] in default_config["fallback_responses"]
        assert "entry" not in body["result"]

    def test_classify_blank(self, client):
        assert client.post("/classify", json={"text": "  "}).json() == {"result": None}

    def test_classify_requires_text(self, client):
        assert client.post("/classify", json={}).status_code == 422

    def test_search(self, client, instant_engine):
        body = client.get("/search", params={"q": "docker"}).json()
        assert body["count"] == len(instant_engine.search("docker"))
        assert [r["id"] for r in body["results"]] == [e.id for e in instant_engine.search("docker")]

    def test_search_empty_query_lists_everything(self, client):
        assert client.get("/search").json()["count"] == 45

    def test_search_with_category(self, client):
        body = client.get("/search", params={"q": "", "category": "Tips"}).json()
        assert body["count"] > 0
        assert {r["category"] for r in body["results"]} == {"Tips"}

    def test_search_includes_code_snippets(self, client):
        results = client.get("/search", params={"q": "pointers in c++"}).json()["results"]
        assert results[0]["id"] == "pointers-confusion"
        assert "ptr" in results[0]["code"]

    def test_categories(self, client, instant_engine):
        assert client.get("/categories").json() == {"categories": instant_engine.categories()}


class TestWebsocket:
    """Tests for the /ws chat endpoint."""

    def test_greeting_then_answer(self, client, instant_engine):
        with client.websocket_connect("/ws") as ws:
            greeting = ws.receive_json()
            assert greeting["role"] == "assistant"
            assert greeting["content"] == instant_engine.greeting

            ws.send_text("how do I start learning react")
            reply = ws.receive_json()
            assert reply["role"] == "assistant"
            assert reply["content"] == instant_engine.get_entry("2").answer
            assert reply["timestamp"]

    def test_sequential_turns(self, client, instant_engine):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_text("docker")
            assert ws.receive_json()["content"] == instant_engine.get_entry("9").answer
            ws.send_text("   ")
            ws.send_text("Can you recommend some python books?")
            assert ws.receive_json()["content"].startswith("Python is versatile")

    def test_rejects_input_while_pending(self, default_config, default_entries):
        config = dict(default_config, scheduler={"min_delay_ms": 5000, "max_delay_ms": 5000})
        slow = HelpDeskEngine.from_config(config, entries=default_entries)
        with TestClient(create_app(engine=slow)).websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_text("react")
            ws.send_text("docker")
            assert ws.receive_json() == {"warning": "response pending"}
