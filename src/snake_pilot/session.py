"""A single play session: one world, its two drivers, and input binding."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from snake_pilot.ai.agent import AgentLoop, TickListener
from snake_pilot.ai.config import GameConfig
from snake_pilot.keys import Action, action_for_key, direction_for_key
from snake_pilot.snake import Direction
from snake_pilot.world import GameState, GridWorld, Mode

logger = logging.getLogger(__name__)


class GameSession:
    """Owns a :class:`GridWorld` and whichever driver is active.

    The world's mode names the active driver: the human loop advances the
    snake along its current heading every ``human_tick_ms``, the agent loop
    every ``agent.move_delay_ms``. Mode switches and restarts cancel the
    running driver before the world is reinitialised, so a stale timer can
    never fire into a fresh game.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.world = GridWorld(
            board_size=self.config.board_size,
            mode=Mode(self.config.mode),
            seed=self.config.seed,
        )
        self.agent_loop = AgentLoop(
            self.world, config=self.config.agent, on_tick=self._notify,
        )
        self._listeners: list[TickListener] = []
        self._human_task: asyncio.Task | None = None
        self._started = False

    @property
    def mode(self) -> Mode:
        return self.world.mode

    @property
    def started(self) -> bool:
        return self._started

    def snapshot(self) -> GameState:
        return self.world.snapshot()

    def subscribe(self, listener: TickListener) -> Callable[[], None]:
        """Call *listener* with a snapshot after every change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def start(self) -> None:
        """Start ticking the active driver. Needs a running event loop."""
        if self._started:
            return
        self._started = True
        self._start_driver()
        logger.info("Session started in %s mode.", self.mode.value)

    def close(self) -> None:
        """Stop every driver and drop listeners."""
        self._stop_drivers()
        self._started = False
        self._listeners.clear()

    def set_direction(self, direction: Direction) -> bool:
        """Human direction intent; ignored while the agent drives."""
        if self.mode is not Mode.HUMAN:
            return False
        self.world.set_direction(direction)
        return True

    def press_key(self, key: str) -> bool:
        """Translate a browser key name. Returns True if the key was used."""
        direction = direction_for_key(key)
        if direction is not None:
            return self.set_direction(direction)
        action = action_for_key(key)
        if action is None:
            return False
        self.perform(action)
        return True

    def perform(self, action: Action) -> None:
        handlers = {
            Action.TOGGLE_MODE: self.toggle_mode,
            Action.PAUSE: self.toggle_pause,
            Action.RESTART: self.restart,
        }
        handlers[Action(action)]()

    def toggle_mode(self) -> Mode:
        self._stop_drivers()
        mode = self.world.toggle_mode()
        self.agent_loop.agent.reset()
        if self._started:
            self._start_driver()
        self._notify(self.world.snapshot())
        return mode

    def toggle_pause(self) -> None:
        self.world.toggle_pause()
        self._notify(self.world.snapshot())

    def restart(self) -> None:
        self._stop_drivers()
        self.world.restart()
        self.agent_loop.agent.reset()
        if self._started:
            self._start_driver()
        self._notify(self.world.snapshot())

    def on_hidden(self) -> None:
        """Pause a live game when the page stops being visible."""
        if self.world.playable:
            self.toggle_pause()

    def human_tick(self) -> bool:
        """Advance one human-mode tick along the current heading."""
        moved = self.world.apply_move(driver=Mode.HUMAN)
        if moved:
            self._notify(self.world.snapshot())
        return moved

    async def _run_human(self) -> None:
        interval = self.config.human_tick_ms / 1000.0
        try:
            while True:
                await asyncio.sleep(interval)
                self.human_tick()
        except asyncio.CancelledError:
            logger.debug("Human tick loop cancelled.")
        except Exception:
            logger.exception("Human tick loop error.")

    def _start_driver(self) -> None:
        if self.mode is Mode.AGENT:
            self.agent_loop.start()
        else:
            loop = asyncio.get_running_loop()
            self._human_task = loop.create_task(self._run_human())

    def _stop_drivers(self) -> None:
        self.agent_loop.stop()
        if self._human_task is not None:
            self._human_task.cancel()
            self._human_task = None

    def _notify(self, state: GameState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Session listener failed.")
