import json
from unittest import mock

import pytest

from app import create_app
from src.presentation_assembly import routes, store as store_module
from src.presentation_assembly.config import Settings

from tests.fakes import FakeDocumentStore, template_slides


@pytest.fixture
def store():
    return FakeDocumentStore({"tmpl": template_slides()})


@pytest.fixture
def client(store):
    app = create_app(store=store, settings=Settings())
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok", "service": "google-slides-mcp"}


def test_post_slides_creates_presentation(client, store):
    resp = client.post(
        "/slides",
        json={"title": "Deck", "slides": [{"title": "A"}, {"title": "B"}], "templatePresentationId": "tmpl"},
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["title"] == "Deck"
    assert body["editUrl"] == f"https://docs.google.com/presentation/d/{body['presentationId']}/edit"
    assert len(store.batches) == 2


def test_post_slides_validation_error(client, store):
    resp = client.post("/slides", json={"title": "", "slides": []})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "Invalid request body"
    assert {d["path"] for d in body["details"]} == {"title", "slides"}
    assert store.calls == []


def test_post_slides_engine_error_is_500(client):
    resp = client.post("/slides", json={"title": "Deck", "slides": [{}], "templatePresentationId": "missing"})
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["error"] == "Failed to create presentation"
    assert body["reason"] == "NOT_FOUND"
    assert body["phase"] == "provision"


def test_default_template_from_settings(store):
    app = create_app(store=store, settings=Settings(default_template_id="tmpl"))
    resp = app.test_client().post("/slides", json={"title": "Deck", "slides": [{}]})
    assert resp.status_code == 200
    assert store.calls[0][0] == "copy"


def test_get_tools(client):
    tools = client.get("/tools").get_json()["tools"]
    assert "create_presentation_from_content" in [t["name"] for t in tools]


def test_post_tools_plain_and_json_rpc(client):
    assert "tools" in client.post("/tools", json={}).get_json()
    rpc = client.post("/tools", json={"jsonrpc": "2.0", "id": 7, "method": "tools/list"}).get_json()
    assert rpc["id"] == 7
    assert "tools" in rpc["result"]


def test_mcp_initialize(client):
    body = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "initialize"}).get_json()
    assert body["result"]["serverInfo"]["name"] == "google-slides-mcp"
    assert body["result"]["capabilities"] == {"tools": {}}


def test_mcp_initialized_notification(client):
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert resp.status_code == 202
    assert resp.data == b""


def test_mcp_tools_call(client):
    body = client.post(
        "/mcp",
        json={
            "jsonrpc": "2.0",
            "id": "a",
            "method": "tools/call",
            "params": {
                "name": "create_presentation_from_content",
                "arguments": {"title": "Deck", "slides": [{"title": "A"}], "templatePresentationId": "tmpl"},
            },
        },
    ).get_json()
    assert body["result"]["isError"] is False
    payload = json.loads(body["result"]["content"][0]["text"])
    assert payload["title"] == "Deck"


def test_mcp_errors(client):
    not_rpc = client.post("/mcp", json=["nope"])
    assert not_rpc.status_code == 400
    assert not_rpc.get_json()["error"]["code"] == -32600

    missing_name = client.post("/mcp", json={"id": 2, "method": "tools/call", "params": {}})
    assert missing_name.get_json()["error"]["code"] == -32602

    unknown = client.post("/mcp", json={"id": 3, "method": "resources/list"})
    assert unknown.get_json()["error"]["code"] == -32601


def test_mcp_get_not_allowed(client):
    assert client.get("/mcp").status_code == 405


def test_tools_call_endpoint(client):
    ok = client.post("/tools/call", json={"name": "create_presentation", "arguments": {"title": "T"}})
    assert ok.get_json()["success"] is True

    bad = client.post("/tools/call", json={"name": "create_presentation", "arguments": {}})
    assert bad.status_code == 400
    assert bad.get_json()["success"] is False

    nameless = client.post("/tools/call", json={})
    assert nameless.status_code == 400


@pytest.fixture
def google_app(monkeypatch):
    creds = object()
    build_credentials = mock.Mock(return_value=creds)
    monkeypatch.setattr(routes, "build_credentials", build_credentials)
    monkeypatch.setattr(store_module, "build_slides_service", lambda c: mock.MagicMock(name="slides"))
    monkeypatch.setattr(store_module, "build_drive_service", lambda c: mock.MagicMock(name="drive"))
    return create_app(settings=Settings()), build_credentials


def test_each_request_builds_its_own_google_store(google_app):
    app, build_credentials = google_app
    with app.test_request_context("/slides", method="POST"):
        first = routes._store()
        assert routes._store() is first
    with app.test_request_context("/slides", method="POST"):
        second = routes._store()

    assert isinstance(first, store_module.GoogleSlidesStore)
    assert second is not first
    assert second.slides is not first.slides
    build_credentials.assert_called_once()


def test_post_slides_missing_credentials_is_json_500(monkeypatch):
    def no_credentials(settings):
        raise FileNotFoundError("Google credentials not configured.")

    monkeypatch.setattr(routes, "build_credentials", no_credentials)
    app = create_app(settings=Settings())
    resp = app.test_client().post("/slides", json={"title": "Deck", "slides": [{}]})
    assert resp.status_code == 500
    assert resp.get_json() == {
        "error": "Failed to create presentation",
        "message": "Google credentials not configured.",
    }
