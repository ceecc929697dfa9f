"""Shared fixtures: random but valid board layouts."""

from __future__ import annotations

import numpy as np
import pytest

from snake_pilot.snake import SEARCH_ORDER
from snake_pilot.world import GridWorld, Mode


def random_layout(
    rng: np.random.Generator,
    board_size: int,
    max_length: int,
    *,
    odd_length: bool = False,
):
    """Build a self-avoiding snake body and a free food cell.

    The body is a random walk from the head; it stops early when boxed in.
    """
    head = tuple(int(v) for v in rng.integers(board_size, size=2))
    body = [head]
    occupied = {head}
    while len(body) < max_length:
        x, y = body[-1]
        options = [
            (x + d.dx, y + d.dy) for d in SEARCH_ORDER
            if 0 <= x + d.dx < board_size and 0 <= y + d.dy < board_size
            and (x + d.dx, y + d.dy) not in occupied
        ]
        if not options:
            break
        nxt = options[int(rng.integers(len(options)))]
        body.append(nxt)
        occupied.add(nxt)
    if odd_length and len(body) % 2 == 0:
        body.pop()

    taken = set(body)
    free = [
        (x, y) for x in range(board_size) for y in range(board_size)
        if (x, y) not in taken
    ]
    food = free[int(rng.integers(len(free)))] if free else None
    return body, food


@pytest.fixture()
def layout_world():
    """Factory producing agent-mode worlds loaded with random layouts."""

    def _make(seed: int, board_size: int = 6, max_length: int = 9, **kwargs):
        rng = np.random.default_rng(seed)
        body, food = random_layout(rng, board_size, max_length, **kwargs)
        world = GridWorld(board_size=board_size, mode=Mode.AGENT, seed=seed)
        world.load(body, food)
        return world

    return _make
