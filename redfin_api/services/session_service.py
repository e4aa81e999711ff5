"""Session helpers (issue tokens, resolve the current member, revoke)."""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Request

from redfin_api.core.config import get_settings
from redfin_api.db.models import UserSession
from redfin_api.db.session import get_session

SESSION_COOKIE_NAME = "session"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def issue_session(username: str) -> str:
    """Create a new session token for the member and persist it."""
    token = secrets.token_urlsafe(32)
    settings = get_settings()
    ttl = max(60, settings.session_ttl_seconds)
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)

    with get_session() as session:
        session.add(UserSession(token=token, username=username, expires_at=expires_at))
        session.commit()
    return token


def session_token(request: Request) -> str | None:
    """Bearer token from the Authorization header, else the session cookie."""
    scheme, _, value = (request.headers.get("authorization") or "").partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return request.cookies.get(SESSION_COOKIE_NAME)


def current_username(request: Request) -> str | None:
    """Return the username associated with the current session, if any."""
    token = session_token(request)
    if not token:
        return None

    now = datetime.now(timezone.utc)
    with get_session() as session:
        db_session = session.get(UserSession, token)
        if db_session:
            if db_session.expires_at and _as_utc(db_session.expires_at) < now:
                session.delete(db_session)
                session.commit()
                return None
            return db_session.username

    return None


def delete_session(token: str) -> None:
    """Remove a session token from the store."""
    if not token:
        return
    with get_session() as session:
        entity = session.get(UserSession, token)
        if entity:
            session.delete(entity)
            session.commit()
