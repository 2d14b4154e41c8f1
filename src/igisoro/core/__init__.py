"""Core game state, rules and engine."""

from .board import (
    NUM_ROWS,
    NUM_COLS,
    INITIAL_SEEDS,
    PLAYER_1,
    PLAYER_2,
    GameState,
    MoveRecord,
    adjacent_pit,
    initial_board,
    owner,
)
from .errors import RejectReason, IllegalMoveError, InvariantViolation
from .rules import (
    CaptureMarker,
    MoveOutcome,
    Rejected,
    SowStep,
    StepKind,
    Winner,
    new_game,
    is_playable,
    can_move,
    territory_total,
    legal_moves,
    execute_move,
    attempt_move,
    get_winner,
    get_game_result,
)
from .engine import GameEngine, GameStats

__all__ = [
    "NUM_ROWS",
    "NUM_COLS",
    "INITIAL_SEEDS",
    "PLAYER_1",
    "PLAYER_2",
    "GameState",
    "MoveRecord",
    "adjacent_pit",
    "initial_board",
    "owner",
    "RejectReason",
    "IllegalMoveError",
    "InvariantViolation",
    "CaptureMarker",
    "MoveOutcome",
    "Rejected",
    "SowStep",
    "StepKind",
    "Winner",
    "new_game",
    "is_playable",
    "can_move",
    "territory_total",
    "legal_moves",
    "execute_move",
    "attempt_move",
    "get_winner",
    "get_game_result",
    "GameEngine",
    "GameStats",
]
