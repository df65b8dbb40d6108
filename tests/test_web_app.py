"""Tests for the FastAPI rendering endpoints."""

# pylint: disable=missing-class-docstring,missing-function-docstring,redefined-outer-name

import json

import pytest
from fastapi.testclient import TestClient

from wellness_chat.config import CONNECTION_TROUBLE_REPLY, MAX_MESSAGE_LENGTH
from wellness_chat.web.app import app


@pytest.fixture
def client():
    return TestClient(app)


class TestRenderEndpoint:

    def test_renders_markdown(self, client):
        resp = client.post("/api/render", json={"text": "**hi**"})
        assert resp.status_code == 200
        assert resp.json() == {"html": "<p><strong>hi</strong></p>"}

    def test_escapes_markup(self, client):
        resp = client.post("/api/render", json={"text": "<script>x</script>"})
        assert "<script>" not in resp.json()["html"]

    def test_missing_text_rejected(self, client):
        resp = client.post("/api/render", json={})
        assert resp.status_code == 422


class TestReplyEndpoint:

    def test_extracts_and_renders(self, client):
        body = json.dumps({"response": "# Hi"})
        resp = client.post("/api/reply", json={"status": 200, "body": body})
        assert resp.status_code == 200
        assert resp.json() == {"text": "# Hi", "html": "<h1>Hi</h1>"}

    def test_backend_error_gives_canned_reply(self, client):
        resp = client.post("/api/reply", json={"status": 500, "body": "boom"})
        data = resp.json()
        assert data["text"] == CONNECTION_TROUBLE_REPLY
        assert data["html"] == f"<p>{CONNECTION_TROUBLE_REPLY}</p>"

    def test_invalid_status_rejected(self, client):
        resp = client.post("/api/reply", json={"status": 42, "body": ""})
        assert resp.status_code == 422


class TestTruncateEndpoint:

    def test_long_message_truncated(self, client):
        resp = client.post("/api/truncate", json={"message": "x" * (MAX_MESSAGE_LENGTH + 100)})
        data = resp.json()
        assert data["truncated"] is True
        assert len(data["message"]) == MAX_MESSAGE_LENGTH + 3

    def test_message_is_stripped(self, client):
        resp = client.post("/api/truncate", json={"message": "  hello  "})
        assert resp.json() == {"message": "hello", "truncated": False}

    def test_blank_message_rejected(self, client):
        resp = client.post("/api/truncate", json={"message": "   "})
        assert resp.status_code == 400
