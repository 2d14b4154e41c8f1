"""
Board topology and immutable game state.

An Igisoro board is a 4x8 grid of pits:

    row 0   [P2 outer]   sown left -> right
    row 1   [P2 inner]   sown right -> left
    row 2   [P1 inner]   sown left -> right
    row 3   [P1 outer]   sown right -> left

Seeds travel one counter-clockwise ring through all 32 pits regardless of
who owns them. The two inner rows start with 4 seeds per pit.
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass

from .errors import InvariantViolation

NUM_ROWS = 4
NUM_COLS = 8
INITIAL_SEEDS = 4

PLAYER_1 = 1
PLAYER_2 = 2

Pit = Tuple[int, int]
Board = Tuple[Tuple[int, ...], ...]

_TERRITORY = {
    PLAYER_1: (2, 3),
    PLAYER_2: (0, 1),
}


def owner(row: int) -> int:
    """Player owning every pit in the given row."""
    return PLAYER_1 if row in _TERRITORY[PLAYER_1] else PLAYER_2


def territory_rows(player: int) -> Tuple[int, int]:
    """The two rows belonging to a player."""
    return _TERRITORY[player]


def opponent(player: int) -> int:
    return PLAYER_2 if player == PLAYER_1 else PLAYER_1


def on_board(row: int, col: int) -> bool:
    return 0 <= row < NUM_ROWS and 0 <= col < NUM_COLS


def adjacent_pit(row: int, col: int) -> Pit:
    """
    Next pit counter-clockwise around the whole board.

    Even rows run towards higher columns, odd rows towards lower ones, and
    each row end drops to the next row (row 3 wraps back to row 0).

    Args:
        row: Current row
        col: Current column

    Returns:
        (row, col) of the following pit
    """
    if not on_board(row, col):
        raise InvariantViolation(f"Pit ({row}, {col}) is off the board")

    if row % 2 == 0:
        if col < NUM_COLS - 1:
            return row, col + 1
    elif col > 0:
        return row, col - 1

    # Row end: step down a row, staying in the same column
    return (row + 1) % NUM_ROWS, col


def initial_board() -> Board:
    """Starting layout: inner rows full, outer rows empty."""
    rows = []
    for row in range(NUM_ROWS):
        seeds = INITIAL_SEEDS if row in (1, 2) else 0
        rows.append((seeds,) * NUM_COLS)
    return tuple(rows)


def board_to_lists(board: Board) -> List[List[int]]:
    return [list(row) for row in board]


def lists_to_board(rows: List[List[int]]) -> Board:
    return tuple(tuple(row) for row in rows)


@dataclass(frozen=True)
class MoveRecord:
    """One entry of the append-only move log."""

    player: int
    origin: Pit
    captured: int
    board_after: Board

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player,
            "from": {"row": self.origin[0], "col": self.origin[1]},
            "captured": self.captured,
            "board_after": board_to_lists(self.board_after),
        }


@dataclass(frozen=True)
class GameState:
    """
    Immutable game state.

    Attributes:
        board: 4 rows of 8 seed counts
        player: Player to move (1 or 2); after the final move, the last mover
        game_over: True once the player due to move next had no seeds
        captures: Cumulative captured seeds as (player 1, player 2)
        move_count: Moves played so far
        history: Move log, oldest first
    """

    board: Board
    player: int = PLAYER_1
    game_over: bool = False
    captures: Tuple[int, int] = (0, 0)
    move_count: int = 0
    history: Tuple[MoveRecord, ...] = ()

    def __post_init__(self) -> None:
        """Validate state invariants."""
        if len(self.board) != NUM_ROWS or any(len(row) != NUM_COLS for row in self.board):
            raise ValueError(f"Board must be {NUM_ROWS}x{NUM_COLS}")
        if self.player not in (PLAYER_1, PLAYER_2):
            raise ValueError(f"Invalid player {self.player}, must be 1 or 2")
        if any(seeds < 0 for row in self.board for seeds in row):
            raise ValueError("Negative seed count not allowed")
        if len(self.captures) != 2 or any(c < 0 for c in self.captures):
            raise ValueError(f"Invalid captures {self.captures}")

    @classmethod
    def from_rows(cls, rows, player: int = PLAYER_1, **kwargs) -> "GameState":
        """Build a state from any nested sequence of seed counts."""
        return cls(board=lists_to_board(rows), player=player, **kwargs)

    def seeds_at(self, row: int, col: int) -> int:
        return self.board[row][col]

    @property
    def seeds_on_board(self) -> int:
        return sum(sum(row) for row in self.board)

    @property
    def total_seeds(self) -> int:
        """Seeds on the board plus everything captured so far."""
        return self.seeds_on_board + sum(self.captures)

    def captured_by(self, player: int) -> int:
        return self.captures[player - 1]

    def get_player_pits(self, player: int) -> List[Pit]:
        """Pit coordinates in a player's territory, row-major."""
        return [(row, col) for row in territory_rows(player) for col in range(NUM_COLS)]

    @property
    def last_move(self) -> Optional[MoveRecord]:
        return self.history[-1] if self.history else None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            "board": board_to_lists(self.board),
            "current_player": self.player,
            "game_over": self.game_over,
            "captures": {"1": self.captures[0], "2": self.captures[1]},
            "move_count": self.move_count,
            "history": [record.to_dict() for record in self.history],
        }

    def __str__(self) -> str:
        """Human-readable board representation."""
        pit_width = 3
        lines = []
        for row in range(NUM_ROWS):
            if row == 2:
                lines.append("    " + "-" * (NUM_COLS * (pit_width + 1) - 1))
            cells = " ".join(f"{s:>{pit_width}}" for s in self.board[row])
            lines.append(f"{row} P{owner(row)} {cells}")

        status = "Game over" if self.game_over else f"Player {self.player}'s turn"
        return "\n".join(lines) + f"\n\n{status}\n"
