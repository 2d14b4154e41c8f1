"""
Mutable game handle for presentation layers.

GameEngine owns the current GameState and is the single writer of it. A move
runs to completion synchronously; while its steps are being handed to
observers the engine is busy and refuses further moves.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .board import Board, GameState, MoveRecord, Pit
from .errors import RejectReason
from .rules import (
    CaptureMarker,
    MoveOutcome,
    Rejected,
    SowStep,
    Winner,
    attempt_move,
    can_move,
    get_winner,
    is_playable,
    legal_moves,
    new_game,
    territory_total,
)

logger = logging.getLogger(__name__)

StepObserver = Callable[[SowStep], None]


@dataclass(frozen=True)
class GameStats:
    total_moves: int
    player1_captures: int
    player2_captures: int
    started_at: float
    elapsed_seconds: float

    @property
    def duration(self) -> str:
        """Elapsed time as m:ss."""
        minutes = int(self.elapsed_seconds // 60)
        seconds = int(self.elapsed_seconds % 60)
        return f"{minutes}:{seconds:02d}"


class GameEngine:
    """
    Single-game engine with a re-entrancy guard.

    Example:
        engine = GameEngine()
        result = engine.attempt_move(2, 0)
        if isinstance(result, Rejected):
            ...
    """

    def __init__(self, state: Optional[GameState] = None, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._observers: List[StepObserver] = []
        self.reset(state)

    def reset(self, state: Optional[GameState] = None) -> None:
        """Start over from the initial layout (or from a given state)."""
        self._state = state if state is not None else new_game()
        self._busy = False
        self._last_capture: Optional[CaptureMarker] = None
        self._started_at = self._clock()
        logger.debug("Game reset")

    def add_observer(self, observer: StepObserver) -> None:
        """Register a callback receiving every step of every move, in order."""
        self._observers.append(observer)

    def remove_observer(self, observer: StepObserver) -> None:
        self._observers.remove(observer)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def current_player(self) -> int:
        return self._state.player

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def captures(self) -> Tuple[int, int]:
        return self._state.captures

    @property
    def move_count(self) -> int:
        return self._state.move_count

    @property
    def history(self) -> Tuple[MoveRecord, ...]:
        return self._state.history

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def last_capture(self) -> Optional[CaptureMarker]:
        """Capture made by the most recent move, if it made one."""
        return self._last_capture

    @property
    def stats(self) -> GameStats:
        return GameStats(
            total_moves=self._state.move_count,
            player1_captures=self._state.captures[0],
            player2_captures=self._state.captures[1],
            started_at=self._started_at,
            elapsed_seconds=max(0.0, self._clock() - self._started_at),
        )

    def is_playable(self, row: int, col: int) -> bool:
        return not self._busy and is_playable(self._state, row, col)

    def can_move(self, player: int) -> bool:
        return can_move(self._state, player)

    def territory_total(self, player: int) -> int:
        return territory_total(self._state, player)

    def legal_moves(self) -> List[Pit]:
        if self._busy:
            return []
        return legal_moves(self._state)

    def winner(self) -> Optional[Winner]:
        return get_winner(self._state)

    def attempt_move(self, row: int, col: int) -> Union[MoveOutcome, Rejected]:
        """
        Play a move for the current player.

        Args:
            row: Origin row
            col: Origin column

        Returns:
            MoveOutcome on success, Rejected when the request is refused
        """
        if self._state.game_over:
            return Rejected(RejectReason.GAME_OVER, row, col)
        if self._busy:
            logger.debug(f"Rejected move ({row}, {col}): engine busy")
            return Rejected(RejectReason.ENGINE_BUSY, row, col)

        result = attempt_move(self._state, row, col)
        if isinstance(result, Rejected):
            return result

        self._busy = True
        try:
            for step in result.steps:
                for observer in list(self._observers):
                    observer(step)
        finally:
            self._busy = False

        self._state = result.state
        self._last_capture = result.capture

        if result.capture:
            logger.info(
                f"Player {result.player} captured {result.capture.amount} seeds "
                f"at ({result.capture.row}, {result.capture.col})"
            )
        if result.game_over:
            logger.info(f"Game over after {result.state.move_count} moves: {result.winner.name}")

        return result

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready snapshot of the whole game."""
        data = self._state.to_dict()
        winner = self.winner()
        data["winner"] = winner.name if winner else None
        data["busy"] = self._busy
        data["last_capture"] = (
            {
                "row": self._last_capture.row,
                "col": self._last_capture.col,
                "amount": self._last_capture.amount,
            }
            if self._last_capture
            else None
        )
        return data
