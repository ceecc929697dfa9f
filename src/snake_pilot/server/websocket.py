"""WebSocket handler streaming snapshots and accepting key presses."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from snake_pilot.keys import Action
from snake_pilot.server.session_manager import SessionManager
from snake_pilot.session import GameSession
from snake_pilot.snake import Direction
from snake_pilot.world import GameState

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _encode(state: GameState) -> str:
    return json.dumps(state.to_dict(), separators=(",", ":"))


def _handle_message(session: GameSession, raw: str) -> None:
    """Apply one client frame; malformed frames are ignored."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return
    if not isinstance(msg, dict):
        return

    key = msg.get("key")
    if isinstance(key, str):
        session.press_key(key)
        return

    direction_str = msg.get("direction")
    if isinstance(direction_str, str):
        direction = Direction.from_name(direction_str)
        if direction is not None:
            session.set_direction(direction)
        return

    action_str = msg.get("action")
    if isinstance(action_str, str):
        with contextlib.suppress(ValueError):
            session.perform(Action(action_str))


async def _pump(websocket: WebSocket, queue: asyncio.Queue[GameState]) -> None:
    """Forward queued snapshots to the client until cancelled."""
    while True:
        state = await queue.get()
        if websocket.client_state != WebSocketState.CONNECTED:
            return
        await websocket.send_text(_encode(state))


async def _stop_sender(sender: asyncio.Task, session_id: str) -> None:
    """Cancel the snapshot sender; a send that already failed is logged."""
    sender.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        try:
            await sender
        except Exception:
            logger.warning(
                "Snapshot sender failed for session %s.", session_id,
                exc_info=True,
            )


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Stream one snapshot per tick; accept keys, directions, and actions."""
    instance = _get_manager(websocket).get_session(session_id)
    if instance is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    session = instance.session
    await websocket.accept()
    await websocket.send_text(_encode(session.snapshot()))
    logger.info("Client connected to session %s.", session_id)

    queue: asyncio.Queue[GameState] = asyncio.Queue(maxsize=64)

    def _enqueue(state: GameState) -> None:
        if queue.full():
            queue.get_nowait()
        queue.put_nowait(state)

    unsubscribe = session.subscribe(_enqueue)
    sender = asyncio.create_task(_pump(websocket, queue))
    try:
        while True:
            raw = await websocket.receive_text()
            _handle_message(session, raw)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        unsubscribe()
        await _stop_sender(sender, session_id)
