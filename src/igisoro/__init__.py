"""Igisoro: a Rwandan four-row sowing and capturing game."""

from .core import (
    GameEngine,
    GameState,
    MoveOutcome,
    Rejected,
    RejectReason,
    Winner,
    new_game,
    attempt_move,
    get_winner,
)

__version__ = "0.1.0"

__all__ = [
    "GameEngine",
    "GameState",
    "MoveOutcome",
    "Rejected",
    "RejectReason",
    "Winner",
    "new_game",
    "attempt_move",
    "get_winner",
]
