"""
Igisoro game rules implementation.

Implements the sowing and relay-capture rules:
- Seeds are sown one per pit around the counter-clockwise ring
- Last seed in an empty pit ends the move
- Last seed in a non-empty own pit picks that pit up and keeps sowing
- Last seed in a non-empty opponent pit captures the whole pit
- Game ends when the player due to move has no seeds left
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .board import (
    NUM_COLS,
    PLAYER_1,
    PLAYER_2,
    Board,
    GameState,
    MoveRecord,
    Pit,
    adjacent_pit,
    board_to_lists,
    initial_board,
    lists_to_board,
    on_board,
    opponent,
    owner,
    territory_rows,
)
from .errors import IllegalMoveError, InvariantViolation, RejectReason

logger = logging.getLogger(__name__)

# Far beyond any real relay; reaching it means the sowing loop is broken.
MAX_SOW_STEPS = 100_000


class Winner(Enum):
    PLAYER_1 = PLAYER_1
    PLAYER_2 = PLAYER_2
    TIE = 0


class StepKind(Enum):
    SOW = "sow"
    RELAY = "relay"
    CAPTURE = "capture"


@dataclass(frozen=True)
class SowStep:
    """
    One observable board mutation during a move.

    SOW drops a single seed into `pit`, RELAY picks `pit` up to keep sowing,
    CAPTURE removes `pit`'s seeds from play. `seeds` is the amount moved.
    """

    kind: StepKind
    pit: Pit
    seeds: int
    board: Board

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "row": self.pit[0],
            "col": self.pit[1],
            "seeds": self.seeds,
            "board": board_to_lists(self.board),
        }


@dataclass(frozen=True)
class CaptureMarker:
    row: int
    col: int
    amount: int


@dataclass(frozen=True)
class MoveOutcome:
    """Everything a caller needs to present a finished move."""

    state: GameState
    player: int
    origin: Pit
    steps: Tuple[SowStep, ...]
    captured: int
    capture: Optional[CaptureMarker]

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current_player(self) -> int:
        return self.state.player

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def winner(self) -> Optional[Winner]:
        return get_winner(self.state)

    @property
    def boards(self) -> List[Board]:
        """Intermediate boards in order, one per step."""
        return [step.board for step in self.steps]

    def to_dict(self) -> Dict[str, Any]:
        winner = self.winner
        return {
            "accepted": True,
            "player": self.player,
            "from": {"row": self.origin[0], "col": self.origin[1]},
            "board": board_to_lists(self.board),
            "steps": [step.to_dict() for step in self.steps],
            "captured": self.captured,
            "capture": (
                {"row": self.capture.row, "col": self.capture.col, "amount": self.capture.amount}
                if self.capture
                else None
            ),
            "current_player": self.current_player,
            "game_over": self.game_over,
            "winner": winner.name if winner else None,
        }


@dataclass(frozen=True)
class Rejected:
    """A refused move request."""

    reason: RejectReason
    row: int
    col: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accepted": False,
            "reason": self.reason.value,
            "row": self.row,
            "col": self.col,
        }


def new_game() -> GameState:
    """Create the initial game state."""
    return GameState(board=initial_board())


def is_playable(state: GameState, row: int, col: int) -> bool:
    """True if the current player may start a move from this pit."""
    return validate_move(state, row, col) is None


def can_move(state: GameState, player: int) -> bool:
    """True if the player has at least one seed in their territory."""
    return any(state.board[row][col] > 0 for row, col in state.get_player_pits(player))


def territory_total(state: GameState, player: int) -> int:
    """Seeds in the player's two rows. Used for scoring only."""
    return sum(sum(state.board[row]) for row in territory_rows(player))


def legal_moves(state: GameState) -> List[Pit]:
    """
    Generate all legal moves for the current player.

    Args:
        state: Current game state

    Returns:
        Playable pits in row-major order (empty once the game is over)
    """
    if state.game_over:
        return []
    return [pit for pit in state.get_player_pits(state.player) if state.board[pit[0]][pit[1]] > 0]


def validate_move(state: GameState, row: int, col: int) -> Optional[RejectReason]:
    """Reason the move is refused, or None if it may be played."""
    if state.game_over:
        return RejectReason.GAME_OVER
    if not on_board(row, col):
        return RejectReason.WRONG_TERRITORY
    if owner(row) != state.player:
        return RejectReason.NOT_YOUR_TURN
    if state.board[row][col] == 0:
        return RejectReason.EMPTY_PIT
    return None


def _snapshot(board: List[List[int]]) -> Board:
    return lists_to_board(board)


def _sow(board: List[List[int]], origin: Pit, player: int) -> Tuple[List[SowStep], int, Optional[CaptureMarker]]:
    """
    Run the relay sowing loop in place.

    Returns:
        (steps, seeds captured, capture marker or None)
    """
    steps: List[SowStep] = []
    row, col = origin
    seeds = board[row][col]
    board[row][col] = 0

    while True:
        while seeds > 0:
            row, col = adjacent_pit(row, col)
            board[row][col] += 1
            seeds -= 1
            steps.append(SowStep(StepKind.SOW, (row, col), 1, _snapshot(board)))

            if len(steps) > MAX_SOW_STEPS:
                raise InvariantViolation(f"Move from {origin} did not terminate")

        landed = board[row][col]
        if landed == 1:
            # Pit was empty before the last seed
            return steps, 0, None

        board[row][col] = 0
        if owner(row) != player:
            steps.append(SowStep(StepKind.CAPTURE, (row, col), landed, _snapshot(board)))
            return steps, landed, CaptureMarker(row, col, landed)

        steps.append(SowStep(StepKind.RELAY, (row, col), landed, _snapshot(board)))
        seeds = landed


def execute_move(state: GameState, row: int, col: int) -> MoveOutcome:
    """
    Apply a move and return the outcome.

    1. Empty the origin pit into hand
    2. Sow one seed per pit counter-clockwise
    3. Last seed in an empty pit: move ends
    4. Last seed in a non-empty own pit: pick it up, continue from 2
    5. Last seed in a non-empty opponent pit: capture it, move ends
    6. Pass the turn, or end the game if the opponent has no seeds

    Args:
        state: Current game state
        row: Origin row
        col: Origin column

    Returns:
        MoveOutcome with the new state and every intermediate board

    Raises:
        IllegalMoveError: If the pit is not playable
    """
    reason = validate_move(state, row, col)
    if reason is not None:
        raise IllegalMoveError(reason, row, col)

    player = state.player
    board = [list(r) for r in state.board]
    seeds_before = state.seeds_on_board

    steps, captured, capture = _sow(board, (row, col), player)

    if sum(sum(r) for r in board) + captured != seeds_before:
        raise InvariantViolation(
            f"Seed count changed during move ({row}, {col}): "
            f"{seeds_before} before, {sum(sum(r) for r in board)} + {captured} captured after"
        )

    final_board = _snapshot(board)
    captures = list(state.captures)
    captures[player - 1] += captured

    next_player = opponent(player)
    game_over = not any(board[r][c] > 0 for r in territory_rows(next_player) for c in range(NUM_COLS))

    record = MoveRecord(player=player, origin=(row, col), captured=captured, board_after=final_board)
    new_state = GameState(
        board=final_board,
        player=player if game_over else next_player,
        game_over=game_over,
        captures=(captures[0], captures[1]),
        move_count=state.move_count + 1,
        history=state.history + (record,),
    )

    logger.debug(
        f"Player {player} sowed from ({row}, {col}): {len(steps)} steps, captured {captured}"
    )

    return MoveOutcome(
        state=new_state,
        player=player,
        origin=(row, col),
        steps=tuple(steps),
        captured=captured,
        capture=capture,
    )


def attempt_move(state: GameState, row: int, col: int) -> Union[MoveOutcome, Rejected]:
    """Like execute_move, but reports refused moves as a Rejected value."""
    try:
        return execute_move(state, row, col)
    except IllegalMoveError as e:
        logger.debug(f"Rejected move ({row}, {col}) for player {state.player}: {e.reason.value}")
        return Rejected(e.reason, row, col)


def get_winner(state: GameState) -> Optional[Winner]:
    """
    Decide the game.

    A player who can still move beats one who cannot. Otherwise the larger
    territory total wins; equal totals tie.

    Args:
        state: Game state

    Returns:
        Winner, or None while the game is running
    """
    if not state.game_over:
        return None

    p1_can = can_move(state, PLAYER_1)
    p2_can = can_move(state, PLAYER_2)
    if p1_can and not p2_can:
        return Winner.PLAYER_1
    if p2_can and not p1_can:
        return Winner.PLAYER_2

    p1_seeds = territory_total(state, PLAYER_1)
    p2_seeds = territory_total(state, PLAYER_2)
    if p1_seeds > p2_seeds:
        return Winner.PLAYER_1
    if p2_seeds > p1_seeds:
        return Winner.PLAYER_2
    return Winner.TIE


def get_game_result(state: GameState) -> Optional[str]:
    """
    Get human-readable game result.

    Args:
        state: Game state

    Returns:
        Result string or None if not terminal
    """
    winner = get_winner(state)
    if winner is None:
        return None
    if winner is Winner.TIE:
        return "Tie game"

    player = winner.value
    return f"Player {player} wins ({territory_total(state, player)} seeds on board, {state.captured_by(player)} captured)"
