"""Keyboard translation for browser key names."""

from __future__ import annotations

import enum

from snake_pilot.snake import Direction


class Action(str, enum.Enum):
    """Discrete, non-movement triggers."""

    TOGGLE_MODE = "toggle_mode"
    PAUSE = "pause"
    RESTART = "restart"


KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
}
# WASD, either case.
KEY_DIRECTIONS.update({
    key: direction
    for letter, direction in (
        ("w", Direction.UP), ("s", Direction.DOWN),
        ("a", Direction.LEFT), ("d", Direction.RIGHT),
    )
    for key in (letter, letter.upper())
})

KEY_ACTIONS: dict[str, Action] = {
    " ": Action.TOGGLE_MODE,
    "p": Action.PAUSE,
    "P": Action.PAUSE,
    "r": Action.RESTART,
    "R": Action.RESTART,
}


def direction_for_key(key: str) -> Direction | None:
    return KEY_DIRECTIONS.get(key)


def action_for_key(key: str) -> Action | None:
    return KEY_ACTIONS.get(key)
