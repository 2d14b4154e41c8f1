"""
Main CLI for Igisoro.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from ..core import GameEngine, Rejected
from ..utils.rich_display import BoardDisplay, console, setup_rich_logging


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_pit(text: str) -> Tuple[int, int]:
    """
    Parse a pit written as "row,col" (a space also works as separator).

    Raises:
        argparse.ArgumentTypeError: If the text is not two integers
    """
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected ROW,COL, got {text!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected ROW,COL, got {text!r}") from None


def play_command(args) -> int:
    """Two players take turns at one terminal."""
    setup_rich_logging(args.log_level)
    logger = logging.getLogger(__name__)

    engine = GameEngine()
    display = BoardDisplay(delay=args.delay, animate=not args.no_animate)
    display.show_header("Igisoro - Player 1 plays rows 2-3, Player 2 rows 0-1")

    while not engine.game_over:
        display.show_state(engine)
        try:
            text = console.input(f"Player {engine.current_player}, pick a pit (row,col) or q: ")
        except EOFError:
            logger.info("Input closed, leaving game")
            return 1

        if text.strip().lower() in ("q", "quit", "exit"):
            logger.info("Game abandoned")
            return 0

        try:
            row, col = parse_pit(text)
        except argparse.ArgumentTypeError as e:
            display.console.print(f"[yellow]⚠[/yellow]  {e}")
            continue

        result = engine.attempt_move(row, col)
        if isinstance(result, Rejected):
            display.show_rejected(result)
            continue
        display.show_outcome(result)

    display.show_state(engine)
    display.show_history(engine.state)
    display.show_result(engine.state)
    return 0


def trace_command(args) -> int:
    """Play a fixed list of moves from a new game and print every step."""
    setup_logging(args.log_level)

    engine = GameEngine()
    display = BoardDisplay(animate=False)
    engine.add_observer(display.show_step)

    for row, col in args.moves:
        display.console.print(f"Player {engine.current_player} plays ({row}, {col})")
        result = engine.attempt_move(row, col)
        if isinstance(result, Rejected):
            display.show_rejected(result)
            return 1
        display.show_outcome(result)

    display.show_state(engine)
    if engine.game_over:
        display.show_result(engine.state)
    else:
        display.console.print(f"Player {engine.current_player} to move")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Igisoro board game")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a two-player game in the terminal")
    play_parser.add_argument(
        "--delay", type=float, default=0.2, help="Seconds between animated sowing steps"
    )
    play_parser.add_argument(
        "--no-animate", action="store_true", help="Show only the result of each move"
    )
    play_parser.set_defaults(func=play_command)

    # Trace command
    trace_parser = subparsers.add_parser("trace", help="Replay moves and print each step")
    trace_parser.add_argument(
        "moves", nargs="+", type=parse_pit, metavar="ROW,COL", help="Moves to play in order"
    )
    trace_parser.set_defaults(func=trace_command)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
