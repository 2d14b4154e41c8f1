"""
Rich-based terminal display for an Igisoro game.

Provides:
- Board table with territory colouring
- Step-by-step move playback
- Score panel and move history
"""

import logging
import time
from typing import Iterable, Optional

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table

from ..core import (
    NUM_COLS,
    NUM_ROWS,
    PLAYER_1,
    PLAYER_2,
    GameEngine,
    GameState,
    MoveOutcome,
    Rejected,
    SowStep,
    StepKind,
    get_game_result,
    owner,
    territory_total,
)

console = Console()
logger = logging.getLogger(__name__)

PLAYER_STYLES = {PLAYER_1: "blue", PLAYER_2: "red"}

REJECT_MESSAGES = {
    "game_over": "The game is already over",
    "not_your_turn": "That pit belongs to the other player",
    "empty_pit": "That pit is empty",
    "wrong_territory": "There is no such pit",
    "engine_busy": "A move is still being played",
}


class BoardDisplay:
    """
    Rich renderer for boards, moves and results.

    Playback pacing lives here; the engine only hands over finished steps.
    """

    def __init__(self, delay: float = 0.2, animate: bool = True, out: Optional[Console] = None):
        """
        Initialize board display.

        Args:
            delay: Seconds to wait between animated steps
            animate: Play moves step by step instead of jumping to the result
            out: Console to write to (defaults to the module console)
        """
        self.delay = delay
        self.animate = animate
        self.console = out or console

    def render_board(self, board, highlight=None, title: Optional[str] = None) -> Table:
        """Build a table for a 4x8 board, optionally highlighting one pit."""
        table = Table(title=title, show_header=True, header_style="dim", padding=(0, 1))
        table.add_column("", style="dim")
        for col in range(NUM_COLS):
            table.add_column(str(col), justify="right")

        for row in range(NUM_ROWS):
            style = PLAYER_STYLES[owner(row)]
            cells = []
            for col in range(NUM_COLS):
                text = str(board[row][col])
                if highlight == (row, col):
                    text = f"[reverse]{text}[/reverse]"
                cells.append(f"[{style}]{text}[/{style}]")
            table.add_row(f"{row} P{owner(row)}", *cells, end_section=(row == 1))

        return table

    def render_scores(self, engine: GameEngine) -> Panel:
        state = engine.state
        stats = engine.stats
        lines = []
        for player in (PLAYER_1, PLAYER_2):
            style = PLAYER_STYLES[player]
            marker = " <" if player == state.player and not state.game_over else ""
            lines.append(
                f"[{style}]Player {player}[/{style}]: "
                f"{territory_total(state, player)} on board, "
                f"{state.captured_by(player)} captured{marker}"
            )
        lines.append(f"[dim]Moves: {stats.total_moves} | Time: {stats.duration}[/dim]")
        return Panel("\n".join(lines), title="Score", expand=False)

    def show_header(self, title: str = "Igisoro"):
        self.console.rule(f"[bold blue]{title}[/bold blue]")

    def show_state(self, engine: GameEngine):
        state = engine.state
        capture = engine.last_capture
        highlight = (capture.row, capture.col) if capture else None
        self.console.print(self.render_board(state.board, highlight=highlight))
        self.console.print(self.render_scores(engine))

    def show_step(self, step: SowStep):
        """Print one step as a single text line."""
        row, col = step.pit
        if step.kind is StepKind.SOW:
            self.console.print(f"  sow     -> ({row}, {col}) now {step.board[row][col]}")
        elif step.kind is StepKind.RELAY:
            self.console.print(f"  [cyan]relay[/cyan]   <- ({row}, {col}) picked up {step.seeds}")
        else:
            self.console.print(f"  [bold red]capture[/bold red] <- ({row}, {col}) took {step.seeds}")

    def play_steps(self, steps: Iterable[SowStep]):
        """Animate a move's steps in place, pausing `delay` seconds between them."""
        with Live(console=self.console, refresh_per_second=20, transient=True) as live:
            for step in steps:
                label = f"{step.kind.value} ({step.pit[0]}, {step.pit[1]})"
                live.update(self.render_board(step.board, highlight=step.pit, title=label))
                if self.delay > 0:
                    time.sleep(self.delay)

    def show_outcome(self, outcome: MoveOutcome):
        if self.animate:
            self.play_steps(outcome.steps)

        if outcome.capture:
            self.console.print(
                f"[bold red]Player {outcome.player} captured {outcome.capture.amount} seeds "
                f"from ({outcome.capture.row}, {outcome.capture.col})[/bold red]"
            )
        else:
            self.console.print(f"Player {outcome.player} sowed {len(outcome.steps)} steps, no capture")

    def show_rejected(self, rejected: Rejected):
        self.console.print(f"[yellow]⚠[/yellow]  {REJECT_MESSAGES[rejected.reason.value]} ({rejected.row}, {rejected.col})")

    def show_history(self, state: GameState):
        table = Table(title="Moves", show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Player")
        table.add_column("From")
        table.add_column("Captured", justify="right")

        for i, record in enumerate(state.history, start=1):
            style = PLAYER_STYLES[record.player]
            table.add_row(
                str(i),
                f"[{style}]Player {record.player}[/{style}]",
                f"({record.origin[0]}, {record.origin[1]})",
                str(record.captured) if record.captured else "-",
            )

        self.console.print(table)

    def show_result(self, state: GameState):
        result = get_game_result(state)
        if result:
            self.console.print(Panel(f"[bold green]{result}[/bold green]", title="Game over", expand=False))


def setup_rich_logging(level: str = "INFO"):
    """Configure logging to work nicely with rich console."""
    from rich.logging import RichHandler

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )
