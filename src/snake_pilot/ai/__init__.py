"""Search-based autopilot for Snake Pilot."""

from snake_pilot.ai.agent import AgentLoop, SnakeAgent
from snake_pilot.ai.benchmark import BenchmarkResult, play_game, run_autopilot
from snake_pilot.ai.config import AgentConfig, GameConfig
from snake_pilot.ai.pathfinding import (
    ObstacleMap,
    candidate_moves,
    find_path,
    greedy_move,
    is_safe,
)
from snake_pilot.ai.survival import flood_fill, survival_move

__all__ = [
    "AgentConfig",
    "AgentLoop",
    "BenchmarkResult",
    "GameConfig",
    "ObstacleMap",
    "SnakeAgent",
    "candidate_moves",
    "find_path",
    "flood_fill",
    "greedy_move",
    "is_safe",
    "play_game",
    "run_autopilot",
    "survival_move",
]
