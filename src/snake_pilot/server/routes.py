"""REST API route handlers for session lifecycle and control."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from snake_pilot.keys import Action
from snake_pilot.server.models import (
    ActionRequest,
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    SessionSummary,
)
from snake_pilot.server.session_manager import SessionInstance, SessionManager
from snake_pilot.snake import Direction

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _require(request: Request, session_id: str) -> SessionInstance:
    try:
        return _get_manager(request).require(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a session and start its active driver."""
    manager = _get_manager(request)
    try:
        instance = manager.create_session(
            board_size=body.board_size,
            mode=body.mode,
            human_tick_ms=body.human_tick_ms,
            agent_delay_ms=body.agent_delay_ms,
            fallback=body.fallback,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return instance.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Current snapshot of the session's world."""
    instance = _require(request, session_id)
    return {"session_id": session_id, **instance.session.snapshot().to_dict()}


@router.post("/{session_id}/actions")
async def perform_action(
    session_id: str, body: ActionRequest, request: Request,
) -> dict:
    """Toggle mode, pause/resume, or restart."""
    instance = _require(request, session_id)
    instance.session.perform(Action(body.action))
    return {"session_id": session_id, **instance.session.snapshot().to_dict()}


@router.post("/{session_id}/direction")
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Human direction intent; rejected while the autopilot drives."""
    instance = _require(request, session_id)
    direction = Direction.from_name(body.direction)
    return DirectionResponse(accepted=instance.session.set_direction(direction))


@router.delete("/{session_id}", status_code=204)
async def close_session(session_id: str, request: Request) -> Response:
    try:
        _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return Response(status_code=204)
