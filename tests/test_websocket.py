"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import asyncio
import json
import logging

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect, WebSocketState

from snake_pilot.server.app import create_app
from snake_pilot.server.websocket import _pump, _stop_sender
from snake_pilot.world import GridWorld


@pytest.fixture()
def tc():
    """Starlette sync TestClient. Entering it runs the lifespan and keeps one
    event loop alive for REST calls, WebSocket connections, and tick loops."""
    with TestClient(create_app()) as client:
        yield client


def _create(tc, **body):
    resp = tc.post("/sessions", json={"board_size": 10, "seed": 2, **body})
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        session_id = _create(tc, human_tick_ms=2000)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["snake"] == [[5, 5]]
            assert state["mode"] == "human"
            assert "food" in state

    def test_agent_ticks_are_streamed(self, tc):
        session_id = _create(tc, mode="ai", agent_delay_ms=50)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            first = json.loads(ws.receive_text())
            second = json.loads(ws.receive_text())
            assert second["tick"] > first["tick"]
            assert second["mode"] == "ai"

    def test_pause_key_broadcasts(self, tc):
        session_id = _create(tc, human_tick_ms=2000)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"key": "p"}))
            state = json.loads(ws.receive_text())
            assert state["paused"] is True

    def test_action_message(self, tc):
        session_id = _create(tc, human_tick_ms=2000, agent_delay_ms=2000)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "toggle_mode"}))
            state = json.loads(ws.receive_text())
            assert state["mode"] == "ai"

    def test_direction_message(self, tc):
        session_id = _create(tc, human_tick_ms=2000)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "down"}))
            # Pausing forces a broadcast carrying the new heading.
            ws.send_text(json.dumps({"key": "p"}))
            state = json.loads(ws.receive_text())
            assert state["direction"] == "down"

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ):
            pass

    def test_invalid_frames_ignored(self, tc):
        session_id = _create(tc, human_tick_ms=2000)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text("123")
            ws.send_text(json.dumps({"direction": "sideways"}))
            ws.send_text(json.dumps({"action": "explode"}))
            ws.send_text(json.dumps({"no_known_key": True}))
            ws.send_text(json.dumps({"key": "p"}))
            state = json.loads(ws.receive_text())
            assert state["paused"] is True


class _BrokenSocket:
    client_state = WebSocketState.CONNECTED

    async def send_text(self, text):
        raise RuntimeError("connection reset")


class TestSnapshotSender:
    @pytest.mark.asyncio
    async def test_failed_send_is_logged_not_raised(self, caplog):
        queue = asyncio.Queue()
        queue.put_nowait(GridWorld(board_size=6, seed=0).snapshot())
        sender = asyncio.create_task(_pump(_BrokenSocket(), queue))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert sender.done()

        with caplog.at_level(logging.WARNING, logger="snake_pilot.server.websocket"):
            await _stop_sender(sender, "abc")
        assert "Snapshot sender failed for session abc." in caplog.text

    @pytest.mark.asyncio
    async def test_idle_sender_is_cancelled(self):
        sender = asyncio.create_task(_pump(_BrokenSocket(), asyncio.Queue()))
        await asyncio.sleep(0)
        await _stop_sender(sender, "abc")
        assert sender.cancelled()
