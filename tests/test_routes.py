"""HTTP boundary tests: /api/send, /api/conversation, /api/clear."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.app import create_app
from backend.config import load_settings
from backend.routes.conversation import GENERATION_FAILED, SESSION_COOKIE
from career_quest.errors import GenerationNetworkError
from career_quest.prompts import PromptError
from conftest import path_payload


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    return load_settings(env_file=None)


@pytest.fixture
def client(settings, conversation):
    app = create_app(settings=settings, conversation=conversation)
    with TestClient(app) as c:
        yield c


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_settings_hide_api_key(client):
    data = client.get("/api/settings").json()
    assert "api_key" not in data
    assert data["offline"] is True
    assert data["counselor_name"] == "John"


def test_first_contact_issues_session_cookie(client):
    resp = client.get("/api/conversation")
    assert resp.status_code == 200
    assert SESSION_COOKIE in resp.cookies
    assert resp.json() == {"stage": 0, "log": []}


def test_send_then_render(client, stub_llm, stub_images):
    stub_llm.queue("paths", path_payload("architect", "designer", "analyst"))
    stub_images.fail.add("designer")

    assert client.post("/api/send", json={"message": "I like design and math"}).json() == {"ok": True}
    data = client.get("/api/conversation").json()

    assert data["stage"] == 1
    log = data["log"]
    assert len(log) == 4
    assert log[0] == {"kind": "user", "role": "user", "text": "I like design and math"}
    assert log[1]["image"] == "https://img.test/architect"
    assert log[2]["image"] == {"kind": "error", "error_message": "Image generation failed"}
    assert log[3]["role"] == "bot"


def test_empty_message_is_400(client):
    resp = client.post("/api/send", json={"message": ""})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User input is required."


def test_missing_message_is_422(client):
    assert client.post("/api/send", json={}).status_code == 422


def test_generation_failure_is_generic_502(client, stub_llm):
    stub_llm.queue("paths", GenerationNetworkError("Cannot connect to content API at https://secret"))
    client.post("/api/send", json={"message": "design"})

    resp = client.get("/api/conversation")

    assert resp.status_code == 502
    assert resp.json()["detail"] == GENERATION_FAILED
    assert "secret" not in resp.text


def test_clear_resets_conversation(client, stub_llm):
    stub_llm.queue("paths", path_payload("architect"))
    client.post("/api/send", json={"message": "design"})
    client.get("/api/conversation")

    assert client.post("/api/clear").json() == {"ok": True}
    assert client.get("/api/conversation").json() == {"stage": 0, "log": []}


def test_separate_clients_get_separate_sessions(settings, conversation, stub_llm):
    app = create_app(settings=settings, conversation=conversation)
    stub_llm.queue("paths", path_payload("architect"))
    with TestClient(app) as alice, TestClient(app) as bob:
        alice.post("/api/send", json={"message": "design"})
        assert alice.get("/api/conversation").json()["stage"] == 1
        assert bob.get("/api/conversation").json()["stage"] == 0


def test_template_failure_is_generic_502(client):
    client.post("/api/send", json={"message": "design"})
    with patch("career_quest.content.instructions_for", side_effect=PromptError("Template error: bad")):
        resp = client.get("/api/conversation")

    assert resp.status_code == 502
    assert resp.json()["detail"] == GENERATION_FAILED


def test_empty_message_creates_no_session(client, conversation):
    resp = client.post("/api/send", json={"message": "   "})

    assert resp.status_code == 400
    assert len(conversation.registry) == 0
