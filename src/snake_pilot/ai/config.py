"""Game and autopilot configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from snake_pilot.grid import MIN_BOARD_SIZE

logger = logging.getLogger(__name__)

FALLBACKS = ("survival", "greedy")


@dataclass(frozen=True)
class AgentConfig:
    """Autopilot cadence and fallback strategy."""

    move_delay_ms: int = 150
    fallback: str = "survival"

    def __post_init__(self) -> None:
        if self.move_delay_ms < 1:
            raise ValueError("move_delay_ms must be at least 1.")
        if self.fallback not in FALLBACKS:
            raise ValueError(
                f"Unsupported fallback: {self.fallback!r}. "
                f"Expected one of {list(FALLBACKS)}.",
            )


@dataclass(frozen=True)
class GameConfig:
    """Full session configuration.

    Supports JSON serialization so a session can be reproduced.
    """

    board_size: int = 20
    mode: str = "human"
    human_tick_ms: int = 200
    seed: int | None = None
    agent: AgentConfig = field(default_factory=AgentConfig)

    def __post_init__(self) -> None:
        if self.board_size < MIN_BOARD_SIZE:
            raise ValueError(f"board_size must be at least {MIN_BOARD_SIZE}.")
        if self.mode not in ("human", "ai"):
            raise ValueError(f"Unsupported mode: {self.mode!r}.")
        if self.human_tick_ms < 1:
            raise ValueError("human_tick_ms must be at least 1.")

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        raw = dict(raw)
        raw["agent"] = AgentConfig(**raw.pop("agent", {}))
        return cls(**raw)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
