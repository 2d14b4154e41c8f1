"""Rejection reasons and exception types for the game engine."""

from enum import Enum


class RejectReason(Enum):
    """Why a move request was refused."""

    GAME_OVER = "game_over"
    NOT_YOUR_TURN = "not_your_turn"
    EMPTY_PIT = "empty_pit"
    WRONG_TERRITORY = "wrong_territory"
    ENGINE_BUSY = "engine_busy"


class IllegalMoveError(ValueError):
    """Raised by execute_move when a move's preconditions do not hold."""

    def __init__(self, reason: RejectReason, row: int, col: int) -> None:
        self.reason = reason
        self.row = row
        self.col = col
        super().__init__(f"Illegal move ({row}, {col}): {reason.value}")


class InvariantViolation(AssertionError):
    """Internal defect: seed conservation broken or the board walked off its edge."""
