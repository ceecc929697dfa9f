"""Square board representation for the snake game."""

from __future__ import annotations

import enum

import numpy as np

from snake_pilot.snake import Cell

MIN_BOARD_SIZE = 4


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed square board.

    Cells are addressed as ``(x, y)``; the backing array is indexed
    ``cells[y, x]`` so that rows run top to bottom.
    """

    def __init__(self, size: int = 20) -> None:
        if size < MIN_BOARD_SIZE:
            raise ValueError(
                f"Board size must be at least {MIN_BOARD_SIZE}x{MIN_BOARD_SIZE}.",
            )
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int8)

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a coordinate lies on the board."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, cell: Cell) -> CellType:
        x, y = cell
        return CellType(self.cells[y, x])

    def set(self, cell: Cell, cell_type: CellType) -> None:
        x, y = cell
        self.cells[y, x] = cell_type

    def free_count(self) -> int:
        """Number of cells not covered by the snake."""
        return int(np.count_nonzero(self.cells != CellType.SNAKE))

    def to_dict(self) -> dict:
        """Serialize board state to a dictionary."""
        return {
            "size": self.size,
            "cells": self.cells.tolist(),
        }
