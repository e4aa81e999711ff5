"""
End-to-end tests of the preference endpoints through FastAPI's TestClient.
"""
from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the redfin_api package importable when running the tests locally
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from redfin_api.app import create_app  # noqa: E402
from redfin_api.core import config as core_config  # noqa: E402
from redfin_api.db import models  # noqa: E402
from redfin_api.db import session as db_session  # noqa: E402
from redfin_api.db.session import get_session  # noqa: E402
from redfin_api.domain.preferences import AI_COMPANY  # noqa: E402
from redfin_api.repositories.sql_repository import SQLRepository  # noqa: E402
from redfin_api.services.session_service import SESSION_COOKIE_NAME, issue_session  # noqa: E402


@pytest.fixture()
def client(tmp_path, monkeypatch):
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("API_PREFIX", "/api")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    with TestClient(create_app()) as test_client:
        yield test_client

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


def _auth(username: str) -> dict:
    return {"Authorization": f"Bearer {issue_session(username)}"}


def test_ai_company_scenario(client):
    repo = SQLRepository()
    member = repo.create_member("alice")
    headers = _auth("alice")

    resp = client.post("/api/ai-company", json={"aiCompany": "OpenAI"}, headers=headers)
    assert resp.status_code == 204
    assert resp.content == b""
    assert client.get("/api/ai-company", headers=headers).json() == {"aiCompany": "OpenAI"}

    resp = client.post("/api/ai-company", json={"aiCompany": "Anthropic"}, headers=headers)
    assert resp.status_code == 204
    assert client.get("/api/ai-company", headers=headers).json() == {"aiCompany": "Anthropic"}

    assert repo.count_preferences(AI_COMPANY.model, member.id) == 1


@pytest.mark.parametrize(
    "path,key,value",
    [
        ("/api/ai-field", "aiField", "Computer Vision"),
        ("/api/job-interest", "interest", "ML Engineer"),
    ],
)
def test_other_kinds_round_trip(client, path, key, value):
    SQLRepository().create_member("alice")
    headers = _auth("alice")

    assert client.get(path, headers=headers).json() == {}
    assert client.post(path, json={key: value}, headers=headers).status_code == 204
    assert client.get(path, headers=headers).json() == {key: value}


def test_ghost_member(client):
    headers = _auth("ghost")

    resp = client.get("/api/job-interest", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {}

    resp = client.post("/api/job-interest", json={"interest": "ML"}, headers=headers)
    assert resp.status_code == 404


@pytest.mark.parametrize("payload", [{}, {"interest": None}, {"interest": 42}, {"job": "ML"}])
def test_post_rejects_missing_or_non_string_value(client, payload):
    SQLRepository().create_member("alice")
    headers = _auth("alice")

    resp = client.post("/api/job-interest", json=payload, headers=headers)

    assert resp.status_code == 422
    assert client.get("/api/job-interest", headers=headers).json() == {}


def test_post_accepts_empty_string(client):
    SQLRepository().create_member("alice")
    headers = _auth("alice")
    assert client.post("/api/ai-field", json={"aiField": ""}, headers=headers).status_code == 204
    assert client.get("/api/ai-field", headers=headers).json() == {"aiField": ""}


def test_requests_without_session_are_unauthorized(client):
    SQLRepository().create_member("alice")
    assert client.get("/api/ai-company").status_code == 401
    assert client.post("/api/ai-company", json={"aiCompany": "OpenAI"}).status_code == 401
    bogus = {"Authorization": "Bearer not-a-token"}
    assert client.get("/api/ai-company", headers=bogus).status_code == 401


def test_session_cookie_is_accepted(client):
    SQLRepository().create_member("alice")
    cookie = {"Cookie": f"{SESSION_COOKIE_NAME}={issue_session('alice')}"}
    assert client.post("/api/ai-field", json={"aiField": "NLP"}, headers=cookie).status_code == 204
    assert client.get("/api/ai-field", headers=cookie).json() == {"aiField": "NLP"}


def test_expired_session_is_rejected(client):
    SQLRepository().create_member("alice")
    with get_session() as session:
        session.add(
            models.UserSession(
                token="old-token",
                username="alice",
                expires_at=datetime.now(timezone.utc) - timedelta(minutes=5),
            )
        )
        session.commit()

    resp = client.get("/api/ai-company", headers={"Authorization": "Bearer old-token"})
    assert resp.status_code == 401


def test_health_and_security_headers(client):
    resp = client.get("/health")
    assert resp.json() == {"ok": True}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
