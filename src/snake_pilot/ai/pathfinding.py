"""Breadth-first path planning from the snake's head to the food.

The planner only ever reads a :class:`~snake_pilot.world.GameState`
snapshot. Body segments are obstacles until the snake has moved far enough
for them to have left the board: a segment ``t`` places from the tail is
treated as vacated once ``t`` or more steps have been taken. This follows
the tail by path depth alone and ignores growth from food eaten mid-path.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING

import numpy as np

from snake_pilot.snake import SEARCH_ORDER, Cell, Direction

if TYPE_CHECKING:
    from snake_pilot.world import GameState

logger = logging.getLogger(__name__)

_FREE = -1


class ObstacleMap:
    """Per-snapshot lookup of when each body cell frees up.

    ``tail_index[y, x]`` holds the segment's distance from the tail, or
    ``-1`` for cells the snake does not cover.
    """

    def __init__(self, state: GameState) -> None:
        self.size = state.board_size
        self.tail_index = np.full((self.size, self.size), _FREE, dtype=np.int32)
        last = state.length - 1
        for i, (x, y) in enumerate(state.snake):
            self.tail_index[y, x] = last - i

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def is_free(self, cell: Cell, elapsed: int = 0) -> bool:
        """True when *cell* is on the board and clear after *elapsed* steps."""
        if not self.in_bounds(cell):
            return False
        x, y = cell
        return int(self.tail_index[y, x]) <= elapsed


def is_safe(state: GameState, cell: Cell, elapsed: int = 0) -> bool:
    """Check a single cell against walls and the still-present body."""
    x, y = cell
    if not (0 <= x < state.board_size and 0 <= y < state.board_size):
        return False
    blocking = state.length - elapsed - 1
    return cell not in state.snake[:max(blocking, 0)]


def candidate_moves(
    state: GameState, obstacles: ObstacleMap | None = None,
) -> Iterator[tuple[Direction, Cell]]:
    """Yield the immediately safe ``(direction, cell)`` moves from the head.

    Moves are produced in :data:`SEARCH_ORDER`. Stepping back onto the neck
    is excluded since the world refuses that reversal.
    """
    obstacles = obstacles if obstacles is not None else ObstacleMap(state)
    head = state.head
    neck = state.snake[1] if state.length > 1 else None
    for direction in SEARCH_ORDER:
        cell = direction.step(head)
        if cell != neck and obstacles.is_free(cell, 0):
            yield direction, cell


def find_path(state: GameState) -> list[Direction]:
    """Return the shortest safe list of moves from the head to the food.

    An empty list means no route exists (or there is no food); it never
    means the head already sits on the food.
    """
    food = state.food
    if food is None or food == state.head:
        return []

    obstacles = ObstacleMap(state)
    head = state.head
    parents: dict[Cell, tuple[Cell, Direction]] = {}
    depth: dict[Cell, int] = {head: 0}
    queue: deque[Cell] = deque()

    for direction, cell in candidate_moves(state, obstacles):
        parents[cell] = (head, direction)
        depth[cell] = 1
        queue.append(cell)

    while queue:
        cell = queue.popleft()
        if cell == food:
            return _unwind(parents, head, cell)
        elapsed = depth[cell]
        for direction in SEARCH_ORDER:
            nxt = direction.step(cell)
            if nxt in depth or not obstacles.is_free(nxt, elapsed):
                continue
            parents[nxt] = (cell, direction)
            depth[nxt] = elapsed + 1
            queue.append(nxt)

    logger.debug("No path from %s to food at %s.", head, food)
    return []


def _unwind(
    parents: dict[Cell, tuple[Cell, Direction]], head: Cell, cell: Cell,
) -> list[Direction]:
    path: list[Direction] = []
    while cell != head:
        cell, direction = parents[cell]
        path.append(direction)
    path.reverse()
    return path


def greedy_move(state: GameState) -> Direction | None:
    """Pick the safe move that lands closest to the food.

    Distance is Manhattan distance; ties keep :data:`SEARCH_ORDER`.
    """
    food = state.food
    moves = list(candidate_moves(state))
    if not moves:
        return None
    if food is None:
        return moves[0][0]
    moves.sort(key=lambda m: abs(m[1][0] - food[0]) + abs(m[1][1] - food[1]))
    return moves[0][0]
