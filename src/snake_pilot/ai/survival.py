"""Space-maximising fallback used when no route to the food exists."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

import numpy as np

from snake_pilot.ai.pathfinding import ObstacleMap, candidate_moves
from snake_pilot.snake import SEARCH_ORDER, Cell, Direction

if TYPE_CHECKING:
    from snake_pilot.world import GameState

logger = logging.getLogger(__name__)


def _static_obstacles(state: GameState) -> np.ndarray:
    """Boolean ``[y, x]`` mask of the body minus its tail."""
    blocked = np.zeros((state.board_size, state.board_size), dtype=bool)
    for x, y in state.snake[:-1]:
        blocked[y, x] = True
    return blocked


def flood_fill(
    state: GameState,
    start: Cell,
    blocked: np.ndarray | None = None,
) -> int:
    """Count the open cells reachable from *start*, *start* included.

    The body minus its tail is a fixed obstacle here: this is a worst-case
    estimate of room, not a simulation of the snake moving.
    """
    if blocked is None:
        blocked = _static_obstacles(state)
    size = state.board_size
    x, y = start
    if not (0 <= x < size and 0 <= y < size) or blocked[y, x]:
        return 0

    seen = blocked.copy()
    seen[y, x] = True
    queue: deque[Cell] = deque([start])
    count = 0
    while queue:
        cell = queue.popleft()
        count += 1
        for direction in SEARCH_ORDER:
            nx, ny = direction.step(cell)
            if 0 <= nx < size and 0 <= ny < size and not seen[ny, nx]:
                seen[ny, nx] = True
                queue.append((nx, ny))
    return count


def survival_move(state: GameState) -> Direction | None:
    """Choose the safe move that leads into the largest open region.

    Returns ``None`` when every move is immediately fatal. Ties go to the
    first candidate in :data:`SEARCH_ORDER`.
    """
    obstacles = ObstacleMap(state)
    moves = list(candidate_moves(state, obstacles))
    if not moves:
        logger.debug("No safe move from %s.", state.head)
        return None

    blocked = _static_obstacles(state)
    best, best_space = moves[0][0], 0
    for direction, cell in moves:
        space = flood_fill(state, cell, blocked)
        if space > best_space:
            best, best_space = direction, space
    logger.debug("Survival move %s with %d open cells.", best.name, best_space)
    return best
