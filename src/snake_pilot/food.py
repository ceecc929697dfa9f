"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from snake_pilot.grid import CellType

if TYPE_CHECKING:
    from snake_pilot.grid import Grid
    from snake_pilot.snake import Cell

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places the single food cell on the board.

    Placement is rejection sampling over the whole board: a uniformly random
    cell is drawn until one not covered by the snake turns up. The expected
    number of draws is ``area / free_cells``, so placement slows down as the
    snake fills the board. Uses a seeded NumPy RNG for reproducible games.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: Cell | None = None
        self.last_attempts = 0

    def spawn(self) -> Cell | None:
        """Place food on a random free cell and return it.

        Returns ``None`` when the snake covers the whole board.
        """
        self.remove()
        if self.grid.free_count() == 0:
            logger.warning("No free cells available for food placement.")
            self.last_attempts = 0
            return None

        size = self.grid.size
        attempts = 0
        while True:
            attempts += 1
            x, y = (int(v) for v in self.rng.integers(size, size=2))
            if self.grid.get((x, y)) != CellType.SNAKE:
                break

        if attempts > size * size:
            logger.debug("Food placement took %d draws.", attempts)
        self.last_attempts = attempts
        self.position = (x, y)
        self.grid.set(self.position, CellType.FOOD)
        return self.position

    def remove(self) -> None:
        """Forget the current food cell, clearing it unless the snake sits there."""
        if self.position is None:
            return
        if self.grid.get(self.position) == CellType.FOOD:
            self.grid.set(self.position, CellType.EMPTY)
        self.position = None

    def to_dict(self) -> dict:
        return {"position": list(self.position) if self.position else None}
