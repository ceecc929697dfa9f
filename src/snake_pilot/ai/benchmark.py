"""Headless autopilot runs for measuring how well the planner plays."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from snake_pilot.ai.agent import AgentLoop, SnakeAgent
from snake_pilot.ai.config import AgentConfig
from snake_pilot.world import GameState, GridWorld, Mode

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a batch of autopilot games."""

    total_games: int
    total_steps: int
    scores: list[int]
    lengths: list[int]
    wall_time_seconds: float

    @property
    def mean_score(self) -> float:
        return float(np.mean(self.scores)) if self.scores else 0.0

    @property
    def max_score(self) -> int:
        return max(self.scores, default=0)

    @property
    def mean_length(self) -> float:
        return float(np.mean(self.lengths)) if self.lengths else 0.0

    @property
    def steps_per_second(self) -> float:
        return self.total_steps / max(self.wall_time_seconds, 1e-9)

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, {self.total_steps} steps in "
            f"{self.wall_time_seconds:.2f}s | "
            f"mean score {self.mean_score:.1f}, max score {self.max_score}, "
            f"mean length {self.mean_length:.1f}, "
            f"{self.steps_per_second:.1f} steps/s"
        )


def play_game(
    world: GridWorld,
    agent: SnakeAgent | None = None,
    *,
    max_steps: int = 2_000,
    fallback: str = "survival",
    on_tick: Callable[[GameState], None] | None = None,
) -> int:
    """Drive *world* with the autopilot until it ends or *max_steps* pass.

    Returns the number of moves applied.
    """
    if world.mode is not Mode.AGENT:
        world.set_mode(Mode.AGENT)
    loop = AgentLoop(
        world, agent=agent, config=AgentConfig(fallback=fallback), on_tick=on_tick,
    )
    steps = 0
    while steps < max_steps and loop.tick():
        steps += 1
    return steps


def run_autopilot(
    *,
    num_games: int = 20,
    board_size: int = 10,
    max_steps: int = 2_000,
    seed: int | None = 0,
    fallback: str = "survival",
) -> BenchmarkResult:
    """Play *num_games* autopilot games back to back without any delay."""
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    rng = np.random.default_rng(seed)

    scores: list[int] = []
    lengths: list[int] = []
    total_steps = 0
    start = time.perf_counter()
    for _ in range(num_games):
        world = GridWorld(
            board_size=board_size,
            mode=Mode.AGENT,
            seed=int(rng.integers(2**31)),
        )
        total_steps += play_game(world, max_steps=max_steps, fallback=fallback)
        scores.append(world.score)
        lengths.append(len(world.snake))

    result = BenchmarkResult(
        total_games=num_games,
        total_steps=total_steps,
        scores=scores,
        lengths=lengths,
        wall_time_seconds=time.perf_counter() - start,
    )
    logger.info(result.summary())
    return result
