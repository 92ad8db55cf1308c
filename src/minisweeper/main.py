#!/usr/bin/env python3
"""
Mini Minesweeper - Main entry point.

Usage:
    python -m minisweeper.main play [--size N] [--expose-mines]
    python -m minisweeper.main simulate [--games N] [--seed S]
    python -m minisweeper.main scores [--clear]
"""
import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from .agents import RandomAgent
from .evaluation import Evaluator
from .game.config import DEFAULT_GRID_SIZE, DIFFICULTIES, SessionConfig
from .game.countdown import AsyncioScheduler
from .game.engine import GameEngine
from .game.scoreboard import (
    InMemoryScoreStore,
    JsonScoreStore,
    ScoreStore,
    ScoreStoreError,
)
from .game.session import SessionController

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  ROW COL         reveal a cell (also: r ROW COL)
  reset           ask to start a new round
  yes / no        answer the reset prompt
  size N          new round on an N x N grid
  easy|medium|hard  grid of 3, 5 or 7
  help            show this help
  quit            leave the game"""


# ============================================================================
# Rendering
# ============================================================================

def format_snapshot(snapshot: Dict[str, Any]) -> str:
    """Render a session snapshot as text."""
    size = snapshot["grid_size"]
    lines = ["   " + " ".join(str(col) for col in range(size))]
    for row in snapshot["cells"]:
        symbols = []
        for cell in row:
            if cell["is_revealed"]:
                symbols.append("*" if cell["is_mine"] else " ")
            elif cell["is_mine"]:
                symbols.append("x")
            else:
                symbols.append(".")
        lines.append(f"{row[0]['row']:>2} " + " ".join(symbols))

    lines.append(f"Wins: {snapshot['wins']}  Losses: {snapshot['losses']}")
    if snapshot["message"]:
        lines.append(snapshot["message"])
    if snapshot["is_resetting"]:
        lines.append(f"Game restarting in {snapshot['reset_countdown']}...")
    if snapshot["reset_pending"]:
        lines.append("Reset game? This will start a new round. (yes/no)")
    return "\n".join(lines)


# ============================================================================
# Command Handling
# ============================================================================

def _parse_ints(tokens: List[str]) -> Optional[List[int]]:
    try:
        return [int(token) for token in tokens]
    except ValueError:
        return None


def handle_command(session: SessionController, line: str) -> bool:
    """
    Apply one line of user input to the session.

    Returns:
        False when the user asked to quit.
    """
    tokens = line.strip().lower().split()
    if not tokens:
        return True
    command, args = tokens[0], tokens[1:]

    if command in ("quit", "q", "exit"):
        return False
    if command in ("help", "h", "?"):
        print(HELP_TEXT)
    elif command == "reset":
        session.request_reset()
        print(format_snapshot(session.snapshot()))
    elif command in ("yes", "y"):
        if not session.confirm_reset():
            print("No reset to confirm.")
    elif command in ("no", "n"):
        session.cancel_reset()
        print("Reset cancelled.")
    elif command in DIFFICULTIES:
        session.set_difficulty(DIFFICULTIES[command])
    elif command == "size":
        values = _parse_ints(args)
        if not values or len(values) != 1:
            print("Usage: size N")
            return True
        try:
            session.set_difficulty(values[0])
        except ValueError as exc:
            print(f"Invalid size: {exc}")
    else:
        if command == "r":
            tokens = args
        values = _parse_ints(tokens)
        if values is None or len(values) != 2:
            print("Unknown command. Type 'help' for a list of commands.")
            return True
        if not session.reveal_cell(*values):
            print("Nothing to reveal there.")
    return True


# ============================================================================
# Commands
# ============================================================================

def _make_store(path: Optional[str]) -> ScoreStore:
    return JsonScoreStore(path) if path else InMemoryScoreStore()


async def _play_loop(args: argparse.Namespace) -> None:
    loop = asyncio.get_running_loop()
    config = SessionConfig(grid_size=args.size, expose_mines=args.expose_mines)

    def redraw(engine: GameEngine) -> None:
        print()
        print(format_snapshot(session.snapshot()))

    engine = GameEngine(
        config=config,
        store=_make_store(args.scores_file),
        scheduler=AsyncioScheduler(loop),
        on_change=redraw,
    )
    session = SessionController(engine)

    print("Mini Minesweeper - avoid the mine, reveal every safe cell.")
    print(HELP_TEXT)
    print(format_snapshot(session.snapshot()))

    try:
        while True:
            try:
                line = await loop.run_in_executor(None, input, "> ")
            except EOFError:
                break
            if not handle_command(session, line):
                break
    finally:
        engine.close()
        logger.info(
            "Session ended (wins=%d, losses=%d)", engine.wins, engine.losses
        )


def play(args: argparse.Namespace) -> int:
    """Play interactively in the terminal."""
    try:
        asyncio.run(_play_loop(args))
    except KeyboardInterrupt:
        pass
    return 0


def simulate(args: argparse.Namespace) -> int:
    """Let a random agent play a number of rounds."""
    config = SessionConfig(grid_size=args.size)
    evaluator = Evaluator(
        config,
        num_episodes=args.games,
        store=_make_store(args.scores_file),
        seed=args.seed,
    )
    agent = RandomAgent(args.size, seed=args.seed)

    print(f"Simulating {args.games} rounds on a {args.size}x{args.size} grid...")
    results = evaluator.evaluate(agent)

    print("Results for Random:")
    print(f"  Wins: {results.wins}")
    print(f"  Losses: {results.losses}")
    print(f"  Win rate: {results.win_rate:.1%}")
    print(f"  Avg reward: {results.avg_reward:.2f}")
    print(f"  Avg steps: {results.avg_steps:.1f}")
    return 0


def scores(args: argparse.Namespace) -> int:
    """Show or clear the stored scoreboard."""
    store = JsonScoreStore(args.scores_file)
    if args.clear:
        store.clear()
        print(f"Cleared scores in {store.path}")
        return 0

    tally = store.load()
    print(f"Wins: {tally.wins}")
    print(f"Losses: {tally.losses}")
    print(f"Win rate: {tally.win_rate:.1%}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Mini Minesweeper - one mine, reveal every safe cell"
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--size", type=int, default=DEFAULT_GRID_SIZE, help="Grid size (N x N)"
    )
    play_parser.add_argument(
        "--expose-mines", action="store_true", help="Show where the mine is"
    )
    play_parser.add_argument(
        "--scores-file", default=None, help="JSON file to keep scores in"
    )

    sim_parser = subparsers.add_parser(
        "simulate", help="Let a random agent play"
    )
    sim_parser.add_argument(
        "--size", type=int, default=DEFAULT_GRID_SIZE, help="Grid size (N x N)"
    )
    sim_parser.add_argument(
        "--games", type=int, default=100, help="Number of rounds to play"
    )
    sim_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )
    sim_parser.add_argument(
        "--scores-file", default=None, help="JSON file to keep scores in"
    )

    scores_parser = subparsers.add_parser("scores", help="Show stored scores")
    scores_parser.add_argument(
        "--scores-file", default="scores.json", help="JSON file with scores"
    )
    scores_parser.add_argument(
        "--clear", action="store_true", help="Reset stored scores to zero"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {"play": play, "simulate": simulate, "scores": scores}
    if args.command not in commands:
        parser.print_help()
        return 0

    try:
        return commands[args.command](args)
    except ScoreStoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
