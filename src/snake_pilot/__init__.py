"""Snake Pilot: grid-world Snake with a search-based autopilot."""

from snake_pilot.grid import CellType, Grid
from snake_pilot.session import GameSession
from snake_pilot.snake import SEARCH_ORDER, Direction, Snake
from snake_pilot.world import FOOD_SCORE, GameState, GridWorld, Mode

__all__ = [
    "FOOD_SCORE",
    "SEARCH_ORDER",
    "CellType",
    "Direction",
    "GameSession",
    "GameState",
    "Grid",
    "GridWorld",
    "Mode",
    "Snake",
]
