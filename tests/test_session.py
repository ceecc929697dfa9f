"""Tests for GameSession driver switching and keyboard binding."""

import asyncio

import pytest

from snake_pilot.ai.config import AgentConfig, GameConfig
from snake_pilot.keys import Action, action_for_key, direction_for_key
from snake_pilot.session import GameSession
from snake_pilot.snake import Direction
from snake_pilot.world import Mode


def _session(mode="human", **kwargs):
    return GameSession(GameConfig(
        board_size=10,
        mode=mode,
        human_tick_ms=5,
        seed=1,
        agent=AgentConfig(move_delay_ms=5),
        **kwargs,
    ))


class TestKeys:
    def test_arrow_and_wasd(self):
        assert direction_for_key("ArrowUp") is Direction.UP
        assert direction_for_key("a") is Direction.LEFT
        assert direction_for_key("D") is Direction.RIGHT
        assert direction_for_key("x") is None

    def test_actions(self):
        assert action_for_key(" ") is Action.TOGGLE_MODE
        assert action_for_key("P") is Action.PAUSE
        assert action_for_key("r") is Action.RESTART
        assert action_for_key("ArrowUp") is None


class TestSessionInput:
    def test_direction_key_in_human_mode(self):
        session = _session()
        assert session.press_key("ArrowDown")
        assert session.world.snake.pending_direction is Direction.DOWN

    def test_direction_key_ignored_in_agent_mode(self):
        session = _session(mode="ai")
        assert not session.press_key("ArrowDown")
        assert session.world.snake.pending_direction is None

    def test_unknown_key(self):
        assert not _session().press_key("Escape")

    def test_pause_key(self):
        session = _session()
        session.press_key("p")
        assert session.world.paused
        session.press_key("p")
        assert not session.world.paused

    def test_toggle_mode_key_restarts(self):
        session = _session()
        session.human_tick()
        assert session.press_key(" ")
        assert session.mode is Mode.AGENT
        assert session.world.tick == 0

    def test_on_hidden_pauses_once(self):
        session = _session()
        session.on_hidden()
        assert session.world.paused
        session.on_hidden()
        assert session.world.paused

    def test_listeners_receive_snapshots(self):
        session = _session()
        seen = []
        unsubscribe = session.subscribe(seen.append)
        session.human_tick()
        session.toggle_pause()
        assert [s.tick for s in seen] == [1, 1]
        assert seen[-1].paused
        unsubscribe()
        session.toggle_pause()
        assert len(seen) == 2

    def test_failing_listener_does_not_break_tick(self):
        session = _session()

        def _boom(state):
            raise RuntimeError("listener failure")

        session.subscribe(_boom)
        assert session.human_tick()


class TestSessionDrivers:
    @pytest.mark.asyncio
    async def test_human_loop_moves_snake(self):
        session = _session()
        session.start()
        await asyncio.sleep(0.05)
        session.close()
        assert session.world.tick > 0
        assert not session.agent_loop.running

    @pytest.mark.asyncio
    async def test_agent_loop_drives_in_agent_mode(self):
        session = _session(mode="ai")
        session.start()
        await asyncio.sleep(0.05)
        assert session.agent_loop.running
        session.close()
        assert session.world.tick > 0

    @pytest.mark.asyncio
    async def test_mode_switch_stops_previous_driver(self):
        session = _session()
        session.start()
        await asyncio.sleep(0.02)
        session.toggle_mode()
        assert session.mode is Mode.AGENT
        assert session.agent_loop.running
        assert session._human_task is None

        session.toggle_mode()
        assert session.mode is Mode.HUMAN
        assert not session.agent_loop.running
        assert session._human_task is not None
        session.close()

    @pytest.mark.asyncio
    async def test_restart_does_not_leak_stale_ticks(self):
        session = _session()
        session.start()
        await asyncio.sleep(0.02)
        session.close()
        session.restart()
        await asyncio.sleep(0.03)
        # Closed sessions stay idle after a restart.
        assert session.world.tick == 0

    @pytest.mark.asyncio
    async def test_restart_while_running_resets_world(self):
        session = _session(mode="ai")
        session.start()
        await asyncio.sleep(0.03)
        session.restart()
        state = session.snapshot()
        assert state.score == 0
        assert state.length == 1
        session.close()
