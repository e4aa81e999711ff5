"""Endpoints for the per-kind member preferences (AI company, AI field, job interest)."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from redfin_api.domain.preferences import PreferenceKind
from redfin_api.services.preference_service import MemberNotFoundError, PreferenceService
from redfin_api.services.session_service import current_username


def require_username(request: Request) -> str:
    who = current_username(request)
    if not who:
        raise HTTPException(401, "Not authenticated")
    return who


def _get_preference_service(request: Request, kind: PreferenceKind) -> PreferenceService:
    services = getattr(getattr(request.app, "state", None), "preference_services", None) or {}
    svc = services.get(kind.name)
    if not svc:
        raise RuntimeError(f"PreferenceService for {kind.name} not configured")
    return svc


def build_router(kind: PreferenceKind, prefix: str = "") -> APIRouter:
    """Router with POST (save) and GET (read) for one preference kind."""
    router = APIRouter(prefix=f"{prefix}{kind.path}", tags=["preferences"])

    @router.post("", status_code=204, response_class=Response)
    def save_preference(request: Request, payload: dict, username: str = Depends(require_username)):
        value = payload.get(kind.payload_key)
        if not isinstance(value, str):
            raise HTTPException(422, f"'{kind.payload_key}' must be a string")
        svc = _get_preference_service(request, kind)
        try:
            svc.upsert(username, value)
        except MemberNotFoundError:
            raise HTTPException(404, "Member not found")
        return Response(status_code=204)

    @router.get("")
    def get_preference(request: Request, username: str = Depends(require_username)):
        svc = _get_preference_service(request, kind)
        value = svc.query(username)
        if value is None:
            return {}
        return {kind.payload_key: value}

    return router
