"""Autopilot policy and the timer-driven loop that applies it."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from snake_pilot.ai.config import AgentConfig
from snake_pilot.ai.pathfinding import find_path, greedy_move, is_safe
from snake_pilot.ai.survival import survival_move
from snake_pilot.snake import Direction
from snake_pilot.world import GameState, GridWorld, Mode

logger = logging.getLogger(__name__)

TickListener = Callable[[GameState], None]


class SnakeAgent:
    """Plans a route to the food and follows it one step per call.

    The plan is recomputed when the food moves, when the snake's length
    changes, or when it runs out. Each step is re-checked against the
    snapshot it is about to be applied to; a step that is no longer safe
    drops the whole plan. Without a usable step the agent falls back to
    the configured heuristic.
    """

    def __init__(self, fallback: str = "survival") -> None:
        self._fallback: Callable[[GameState], Direction | None] = (
            greedy_move if fallback == "greedy" else survival_move
        )
        self.plan: list[Direction] = []
        self.last_state: GameState | None = None
        self.replans = 0

    def reset(self) -> None:
        """Forget the plan and the previous snapshot."""
        self.plan = []
        self.last_state = None

    def needs_replan(self, state: GameState) -> bool:
        last = self.last_state
        if last is None:
            return True
        if state.food != last.food:
            return True
        if state.length != last.length:
            return True
        return not self.plan

    def next_move(self, state: GameState) -> Direction | None:
        """Return the direction to take from *state*, or None to keep going."""
        if not state.playable:
            return None

        if self.needs_replan(state):
            self.plan = find_path(state)
            self.replans += 1
            logger.debug(
                "Planned %d steps from %s to %s.",
                len(self.plan), state.head, state.food,
            )

        direction = self._next_planned_step(state)
        if direction is None:
            direction = self._fallback(state)

        self.last_state = state
        return direction

    def _next_planned_step(self, state: GameState) -> Direction | None:
        if not self.plan:
            return None
        step = self.plan[0]
        if is_safe(state, step.step(state.head)):
            return self.plan.pop(0)
        logger.debug("Planned step %s became unsafe; dropping plan.", step.name)
        self.plan = []
        return None


class AgentLoop:
    """Drives a :class:`GridWorld` from a :class:`SnakeAgent` on a timer.

    Only acts while the world is in agent mode; moves are applied with the
    agent as the named driver so the world rejects them otherwise.
    """

    def __init__(
        self,
        world: GridWorld,
        agent: SnakeAgent | None = None,
        config: AgentConfig | None = None,
        on_tick: TickListener | None = None,
    ) -> None:
        self.world = world
        self.config = config if config is not None else AgentConfig()
        self.agent = (
            agent if agent is not None else SnakeAgent(self.config.fallback)
        )
        self.move_delay_ms = self.config.move_delay_ms
        self.on_tick = on_tick
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> bool:
        """Make one decision and apply it. Returns True if the world moved."""
        if self.world.mode is not Mode.AGENT or not self.world.playable:
            return False
        direction = self.agent.next_move(self.world.snapshot())
        moved = self.world.apply_move(direction, driver=Mode.AGENT)
        if moved and self.on_tick is not None:
            self.on_tick(self.world.snapshot())
        return moved

    async def run(self) -> None:
        """Tick forever with a fixed delay between ticks."""
        try:
            while True:
                await asyncio.sleep(self.move_delay_ms / 1000.0)
                self.tick()
        except asyncio.CancelledError:
            logger.debug("Agent loop cancelled.")
        except Exception:
            logger.exception("Agent loop error.")

    def start(self) -> None:
        """Schedule :meth:`run` on the running event loop."""
        if self.running:
            return
        self.agent.reset()
        self._task = asyncio.get_running_loop().create_task(self.run())

    def stop(self) -> None:
        """Cancel the scheduled loop; no tick runs after this returns."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def set_speed(self, delay_ms: int) -> None:
        """Change the delay between ticks, restarting a running loop."""
        if delay_ms < 1:
            raise ValueError("delay_ms must be at least 1.")
        self.move_delay_ms = delay_ms
        if self.running:
            self.stop()
            self.start()
