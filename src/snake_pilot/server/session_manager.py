"""In-memory registry of play sessions and their lifecycles."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field

from snake_pilot.ai.config import AgentConfig, GameConfig
from snake_pilot.server.models import SessionSummary
from snake_pilot.session import GameSession

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class SessionInstance:
    """A registered session and its bookkeeping."""

    session_id: str
    session: GameSession
    created_at: float = field(default_factory=time.monotonic)

    def summary(self) -> SessionSummary:
        state = self.session.snapshot()
        return SessionSummary(
            session_id=self.session_id,
            mode=state.mode.value,
            board_size=state.board_size,
            score=state.score,
            game_over=state.game_over,
        )


class SessionManager:
    """Central registry managing all live sessions."""

    def __init__(self, max_sessions: int = _MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1.")
        self._sessions: dict[str, SessionInstance] = {}
        self._max_sessions = max_sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def create_session(
        self,
        board_size: int = 20,
        mode: str = "human",
        human_tick_ms: int = 200,
        agent_delay_ms: int = 150,
        fallback: str = "survival",
        seed: int | None = None,
        *,
        start: bool = True,
    ) -> SessionInstance:
        """Create a session and, by default, start its tick loop.

        Starting needs a running event loop.
        """
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Close a session first.")

        config = GameConfig(
            board_size=board_size,
            mode=mode,
            human_tick_ms=human_tick_ms,
            seed=seed,
            agent=AgentConfig(move_delay_ms=agent_delay_ms, fallback=fallback),
        )
        session_id = uuid.uuid4().hex[:12]
        instance = SessionInstance(session_id=session_id, session=GameSession(config))
        self._sessions[session_id] = instance
        if start:
            instance.session.start()
        logger.info(
            "Session %s created (board=%d, mode=%s).", session_id, board_size, mode,
        )
        return instance

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def require(self, session_id: str) -> SessionInstance:
        instance = self._sessions.get(session_id)
        if instance is None:
            raise KeyError(f"Session {session_id} not found.")
        return instance

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    def close_session(self, session_id: str) -> None:
        instance = self._sessions.pop(session_id, None)
        if instance is None:
            raise KeyError(f"Session {session_id} not found.")
        instance.session.close()
        logger.info("Session %s closed.", session_id)

    async def cleanup(self) -> None:
        """Stop every session's tick loops."""
        for instance in self._sessions.values():
            instance.session.close()
        self._sessions.clear()
        logger.info("SessionManager cleanup complete.")
