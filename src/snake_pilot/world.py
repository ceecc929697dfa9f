"""Authoritative single-snake game state and movement rules."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from snake_pilot.food import FoodSpawner
from snake_pilot.grid import CellType, Grid
from snake_pilot.snake import Cell, Direction, Snake

logger = logging.getLogger(__name__)

FOOD_SCORE = 10


class Mode(str, enum.Enum):
    """Which control source drives the world."""

    HUMAN = "human"
    AGENT = "ai"

    @property
    def other(self) -> Mode:
        return Mode.AGENT if self is Mode.HUMAN else Mode.HUMAN


@dataclass(frozen=True)
class GameState:
    """Immutable point-in-time copy of the world.

    ``direction`` is the heading the next tick will take: a queued turn if
    there is one, otherwise the direction of the last move.
    """

    snake: tuple[Cell, ...]
    food: Cell | None
    direction: Direction
    score: int
    playing: bool
    paused: bool
    game_over: bool
    mode: Mode
    board_size: int
    tick: int = 0

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def playable(self) -> bool:
        return self.playing and not self.paused and not self.game_over

    def to_dict(self) -> dict:
        """Serialize to JSON-friendly primitives for renderers."""
        return {
            "tick": self.tick,
            "snake": [list(c) for c in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction.name.lower(),
            "score": self.score,
            "playing": self.playing,
            "paused": self.paused,
            "game_over": self.game_over,
            "mode": self.mode.value,
            "board": {"width": self.board_size, "height": self.board_size},
        }


class GridWorld:
    """Single-snake world on a square board.

    The world owns the grid, snake, and food spawner. Each accepted call to
    :meth:`apply_move` advances the game by exactly one tick. Only the
    driver matching :attr:`mode` may move the snake when a driver is named.
    """

    def __init__(
        self,
        board_size: int = 20,
        mode: Mode = Mode.HUMAN,
        seed: int | None = None,
    ) -> None:
        self.grid = Grid(board_size)
        self.rng = np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)
        self.mode = mode
        self.restart()

    @property
    def board_size(self) -> int:
        return self.grid.size

    @property
    def food(self) -> Cell | None:
        return self.food_spawner.position

    @property
    def playable(self) -> bool:
        return self.playing and not self.paused and not self.game_over

    def restart(self) -> None:
        """Reinitialise: one-segment snake at the centre heading right."""
        centre = self.board_size // 2
        self.grid.clear()
        self.food_spawner.position = None
        self.snake = Snake(centre, centre, Direction.RIGHT, length=1)
        self._paint_snake()
        self.score = 0
        self.tick = 0
        self.playing = True
        self.paused = False
        self.game_over = False
        self.generate_food()

    def load(
        self,
        body: Iterable[Cell],
        food: Cell | None,
        direction: Direction | None = None,
    ) -> None:
        """Replace snake and food with an explicit layout.

        When *direction* is omitted it is inferred from the neck, falling
        back to ``RIGHT`` for a one-segment snake.
        """
        cells = [tuple(c) for c in body]
        if not cells:
            raise ValueError("Snake length must be at least 1.")
        if len(set(cells)) != len(cells):
            raise ValueError("Snake segments must not overlap.")
        for cell in cells:
            if not self.grid.in_bounds(cell):
                raise ValueError(f"Snake segment {cell} is off the board.")
        if food is not None and (food in cells or not self.grid.in_bounds(food)):
            raise ValueError(f"Food cell {food} is not a free board cell.")

        if direction is None:
            direction = (
                Direction.between(cells[1], cells[0]) if len(cells) > 1 else None
            ) or Direction.RIGHT

        self.grid.clear()
        self.snake = Snake(*cells[0], direction=direction, length=1)
        self.snake.body.extend(cells[1:])
        self._paint_snake()
        self.food_spawner.position = None
        if food is not None:
            self.place_food(food)

    def place_food(self, cell: Cell) -> None:
        """Put the food on a specific free cell."""
        if self.grid.get(cell) == CellType.SNAKE:
            raise ValueError(f"Cell {cell} is occupied by the snake.")
        self.food_spawner.remove()
        self.food_spawner.position = cell
        self.grid.set(cell, CellType.FOOD)

    def generate_food(self) -> Cell | None:
        """Move the food to a uniformly random cell off the snake."""
        return self.food_spawner.spawn()

    def set_direction(self, direction: Direction) -> None:
        """Queue a turn for the next tick.

        The turn is checked against the direction of the last applied move,
        not against an earlier queued turn, so two presses between ticks can
        not fold the snake back onto its neck. A refused reversal leaves any
        earlier queued turn in place.
        """
        if self.snake.resolve(direction) is direction:
            self.snake.pending_direction = direction

    def apply_move(
        self,
        direction: Direction | None = None,
        *,
        driver: Mode | None = None,
    ) -> bool:
        """Advance the game by one tick.

        Returns True when the move was carried out (including a fatal one),
        False when the world ignored it.
        """
        if not self.playable:
            return False
        if driver is not None and driver is not self.mode:
            logger.debug("Ignoring move from inactive driver %s.", driver.value)
            return False

        if direction is None:
            direction = self.snake.pending_direction
        self.snake.pending_direction = None
        self.snake.direction = self.snake.resolve(direction)
        new_head = self.snake.next_head()

        if not self.grid.in_bounds(new_head) or self.snake.occupies(new_head):
            self._end_game()
            return True

        self.snake.body.appendleft(new_head)
        self.tick += 1
        if new_head == self.food:
            self.grid.set(new_head, CellType.SNAKE)
            self.food_spawner.position = None
            self.score += FOOD_SCORE
            self.generate_food()
        else:
            vacated = self.snake.body.pop()
            self.grid.set(vacated, CellType.EMPTY)
            self.grid.set(new_head, CellType.SNAKE)
        return True

    def toggle_pause(self) -> None:
        """Pause or resume; a finished game stays finished."""
        if self.game_over:
            return
        self.paused = not self.paused

    def set_mode(self, mode: Mode) -> None:
        """Switch the active driver; switching always restarts the world."""
        self.mode = Mode(mode)
        logger.info("Switched to %s mode.", self.mode.value)
        self.restart()

    def toggle_mode(self) -> Mode:
        self.set_mode(self.mode.other)
        return self.mode

    def snapshot(self) -> GameState:
        """Return an immutable copy of the current state."""
        return GameState(
            snake=tuple(self.snake.body),
            food=self.food,
            direction=self.snake.pending_direction or self.snake.direction,
            score=self.score,
            playing=self.playing,
            paused=self.paused,
            game_over=self.game_over,
            mode=self.mode,
            board_size=self.board_size,
            tick=self.tick,
        )

    def _paint_snake(self) -> None:
        for cell in self.snake.body:
            self.grid.set(cell, CellType.SNAKE)

    def _end_game(self) -> None:
        """Freeze the score and stop play."""
        self.game_over = True
        self.playing = False
        logger.info(
            "Game over at tick %d with score %d (length %d).",
            self.tick, self.score, len(self.snake),
        )
