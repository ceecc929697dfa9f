"""CLI for running the Snake autopilot headless."""

from __future__ import annotations

import argparse
import logging
import sys

from snake_pilot.ai.config import FALLBACKS
from snake_pilot.world import GameState

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-pilot",
        description="Snake autopilot benchmarking and headless play.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Play many autopilot games and report scores.",
    )
    bench_p.add_argument("--num-games", type=_positive_int, default=20)
    bench_p.add_argument("--board-size", type=int, default=10)
    bench_p.add_argument("--max-steps", type=_positive_int, default=2_000)
    bench_p.add_argument("--seed", type=int, default=0)
    bench_p.add_argument("--fallback", choices=FALLBACKS, default="survival")

    # --- play ---
    play_p = sub.add_parser(
        "play", help="Play one autopilot game, printing the board.",
    )
    play_p.add_argument("--board-size", type=int, default=10)
    play_p.add_argument("--max-steps", type=_positive_int, default=500)
    play_p.add_argument("--seed", type=int, default=None)
    play_p.add_argument("--fallback", choices=FALLBACKS, default="survival")
    play_p.add_argument(
        "--every", type=_positive_int, default=25,
        help="Print the board every N moves.",
    )

    return parser


def render_ascii(state: GameState) -> str:
    """Draw a snapshot as text: ``@`` head, ``o`` body, ``*`` food."""
    rows = [["." for _ in range(state.board_size)] for _ in range(state.board_size)]
    for x, y in state.snake[1:]:
        rows[y][x] = "o"
    if state.food is not None:
        fx, fy = state.food
        rows[fy][fx] = "*"
    hx, hy = state.head
    rows[hy][hx] = "@"
    header = f"tick {state.tick}  score {state.score}  length {state.length}"
    return "\n".join([header, *("".join(r) for r in rows)])


def _run_benchmark(args: argparse.Namespace) -> int:
    from snake_pilot.ai.benchmark import run_autopilot

    result = run_autopilot(
        num_games=args.num_games,
        board_size=args.board_size,
        max_steps=args.max_steps,
        seed=args.seed,
        fallback=args.fallback,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_play(args: argparse.Namespace) -> int:
    from snake_pilot.ai.benchmark import play_game
    from snake_pilot.world import GridWorld, Mode

    world = GridWorld(board_size=args.board_size, mode=Mode.AGENT, seed=args.seed)

    def _maybe_print(state: GameState) -> None:
        if state.tick % args.every == 0:
            print(render_ascii(state) + "\n")  # noqa: T201

    play_game(
        world, max_steps=args.max_steps, fallback=args.fallback,
        on_tick=_maybe_print,
    )
    final = world.snapshot()
    print(render_ascii(final))  # noqa: T201
    print("Game over." if final.game_over else "Step limit reached.")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-pilot`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.board_size < 4:
        parser.error("--board-size must be at least 4")

    handlers = {
        "benchmark": _run_benchmark,
        "play": _run_play,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
