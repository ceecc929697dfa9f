"""Snake representation and direction handling."""

from __future__ import annotations

import enum
from collections import deque

Cell = tuple[int, int]


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, so ``UP`` decreases it.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        """The direction whose delta is the negation of this one."""
        return Direction((-self.dx, -self.dy))

    def step(self, cell: Cell) -> Cell:
        """Return the cell one step away from *cell* in this direction."""
        return cell[0] + self.dx, cell[1] + self.dy

    @classmethod
    def between(cls, start: Cell, end: Cell) -> Direction | None:
        """Direction leading from *start* to an orthogonally adjacent *end*."""
        delta = (end[0] - start[0], end[1] - start[1])
        try:
            return cls(delta)
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: str) -> Direction | None:
        """Parse a wire name such as ``"up"``; unknown names give None."""
        return cls.__members__.get(name.upper())


# Fixed enumeration order for search and tie-breaking.
SEARCH_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        start_x: int,
        start_y: int,
        direction: Direction = Direction.RIGHT,
        length: int = 1,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        self.body: deque[Cell] = deque()
        for i in range(length):
            self.body.append((start_x - direction.dx * i, start_y - direction.dy * i))
        self.direction = direction
        # Turn requested since the last applied move, if any.
        self.pending_direction: Direction | None = None

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def resolve(self, requested: Direction | None) -> Direction:
        """Return the direction the snake will actually take.

        ``None`` keeps the current heading. An exact reversal is refused
        while the snake has a neck to run into.
        """
        if requested is None:
            return self.direction
        if len(self.body) > 1 and requested is self.direction.opposite:
            return self.direction
        return requested

    def next_head(self, direction: Direction | None = None) -> Cell:
        """Compute the next head position without moving."""
        return self.resolve(direction).step(self.head)

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
        }
