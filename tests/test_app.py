"""Tests for app wiring: banner, health, middlewares, error bodies and settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from notebook_api.core.config import Settings
from notebook_api.main import create_app


def test_banner(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == "Student Notebook Backend API. Use /notes for operations."


def test_ping_and_health(client: TestClient) -> None:
    assert client.get("/ping").json() == {"message": "pong"}
    assert client.get("/health").json() == {"ok": True, "storage_backend": "json", "mongo_ready": None}


def test_request_id_is_echoed(client: TestClient) -> None:
    r = client.get("/ping", headers={"X-Request-Id": "abc123"})
    assert r.headers["X-Request-Id"] == "abc123"
    assert client.get("/ping").headers["X-Request-Id"]


def test_error_body_carries_request_id(client: TestClient) -> None:
    r = client.get("/notes/missing", headers={"X-Request-Id": "rid-1"})
    assert r.json() == {"message": "Note not found", "request_id": "rid-1"}


def test_unknown_route(client: TestClient) -> None:
    r = client.get("/nope")
    assert r.status_code == 404
    assert "message" in r.json()


def test_cors_allows_any_origin(client: TestClient) -> None:
    r = client.get("/notes", headers={"Origin": "http://example.com"})
    assert r.headers["access-control-allow-origin"] in ("*", "http://example.com")


def test_unhandled_errors_become_500(settings: Settings) -> None:
    app = create_app(settings)

    def boom() -> None:
        raise RuntimeError("kaput")

    app.state.note_service.list_notes = lambda status=None: boom()
    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/notes")
    assert r.status_code == 500
    assert r.json()["message"] == "Internal server error"


def test_lifespan_creates_uploads_dir(settings: Settings) -> None:
    assert not settings.uploads_path.exists()
    with TestClient(create_app(settings)):
        assert settings.uploads_path.is_dir()


@pytest.mark.parametrize(
    "raw,expected",
    [("", ""), ("/", ""), ("api", "/api"), ("/api/", "/api"), (" /api ", "/api")],
)
def test_api_prefix_normalized(raw: str, expected: str) -> None:
    assert Settings(_env_file=None, api_prefix=raw).api_prefix_normalized == expected


def test_paths_resolve_under_data_dir(tmp_path: Path) -> None:
    s = Settings(_env_file=None, data_dir=tmp_path, uploads_dir="files", uploads_url="files/")
    assert s.notes_path == tmp_path / "notes.json"
    assert s.tasks_path == tmp_path / "tasks.json"
    assert s.uploads_path == tmp_path / "files"
    assert s.uploads_url_normalized == "/files"

    absolute = tmp_path / "elsewhere" / "n.json"
    assert Settings(_env_file=None, notes_file=str(absolute)).notes_path == absolute
