"""FastAPI router for viewer sessions and their actions."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from farmlands.viewer.render import build_view_model
from farmlands.viewer.session import ViewSession, ViewSessionManager
from farmlands.viewer.state import (
    Action,
    DismissNotice,
    SelectOwner,
    SetFarmsVisible,
    SetOwnersVisible,
    SetQuery,
    SetRankBySize,
    SetYear,
    SetYearFilterEnabled,
)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class QueryRequest(BaseModel):
    query: str


class EnabledRequest(BaseModel):
    enabled: bool


class YearRequest(BaseModel):
    year: int


class VisibleRequest(BaseModel):
    visible: bool


class OwnerRequest(BaseModel):
    owner: str


class RankRequest(BaseModel):
    by_size: bool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_session_manager(request: Request) -> ViewSessionManager:
    manager = getattr(request.app.state, "view_sessions", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Viewer sessions not available")
    return manager


def _get_session(session_id: str, request: Request) -> ViewSession:
    session = _get_session_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"View {session_id!r} not found")
    session.touch()
    return session


def _view_payload(session: ViewSession, request: Request) -> dict[str, Any]:
    settings = getattr(request.app.state, "settings", None)
    payload = build_view_model(session.controller, settings)
    payload["view_id"] = session.session_id
    return payload


def _apply(session_id: str, request: Request, action: Action) -> dict[str, Any]:
    session = _get_session(session_id, request)
    session.controller.dispatch(action)
    return _view_payload(session, request)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/api/views")
async def create_view(request: Request) -> dict[str, Any]:
    """Start a new viewer session with default state."""
    session = _get_session_manager(request).create_session()
    return _view_payload(session, request)


@router.get("/api/views/{view_id}")
async def get_view(view_id: str, request: Request) -> dict[str, Any]:
    """Current view model for a session."""
    return _view_payload(_get_session(view_id, request), request)


@router.delete("/api/views/{view_id}")
async def end_view(view_id: str, request: Request) -> dict[str, Any]:
    """End a viewer session and discard its state."""
    if not _get_session_manager(request).end_session(view_id):
        raise HTTPException(status_code=404, detail=f"View {view_id!r} not found")
    return {"view_id": view_id, "ended": True}


@router.post("/api/views/{view_id}/search")
async def search_view(view_id: str, body: QueryRequest, request: Request) -> dict[str, Any]:
    """Search the visible farms by name and fit the map on a hit."""
    session = _get_session(view_id, request)
    result = session.controller.search(body.query)
    payload = _view_payload(session, request)
    payload["found"] = result.found
    return payload


@router.put("/api/views/{view_id}/query")
async def set_query(view_id: str, body: QueryRequest, request: Request) -> dict[str, Any]:
    return _apply(view_id, request, SetQuery(query=body.query))


@router.put("/api/views/{view_id}/year-filter")
async def set_year_filter(view_id: str, body: EnabledRequest, request: Request) -> dict[str, Any]:
    return _apply(view_id, request, SetYearFilterEnabled(enabled=body.enabled))


@router.put("/api/views/{view_id}/year")
async def set_year(view_id: str, body: YearRequest, request: Request) -> dict[str, Any]:
    """Move the year slider. Values outside the slider range are clamped."""
    return _apply(view_id, request, SetYear(year=body.year))


@router.put("/api/views/{view_id}/owners")
async def set_owners_visible(view_id: str, body: VisibleRequest, request: Request) -> dict[str, Any]:
    return _apply(view_id, request, SetOwnersVisible(visible=body.visible))


@router.put("/api/views/{view_id}/owners/highlight")
async def highlight_owner(view_id: str, body: OwnerRequest, request: Request) -> dict[str, Any]:
    return _apply(view_id, request, SelectOwner(owner=body.owner))


@router.put("/api/views/{view_id}/farms")
async def set_farms_visible(view_id: str, body: VisibleRequest, request: Request) -> dict[str, Any]:
    return _apply(view_id, request, SetFarmsVisible(visible=body.visible))


@router.put("/api/views/{view_id}/farms/rank")
async def set_farm_ranking(view_id: str, body: RankRequest, request: Request) -> dict[str, Any]:
    return _apply(view_id, request, SetRankBySize(enabled=body.by_size))


@router.delete("/api/views/{view_id}/notice")
async def dismiss_notice(view_id: str, request: Request) -> dict[str, Any]:
    return _apply(view_id, request, DismissNotice())
