"""Tests for the mutable game engine."""

import json

import pytest
from igisoro.core import (
    PLAYER_1,
    PLAYER_2,
    GameEngine,
    GameState,
    MoveOutcome,
    Rejected,
    RejectReason,
    Winner,
    initial_board,
    new_game,
)


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_new_engine():
    engine = GameEngine()

    assert engine.state == new_game()
    assert engine.current_player == PLAYER_1
    assert engine.game_over is False
    assert engine.busy is False
    assert engine.last_capture is None
    assert engine.winner() is None


def test_attempt_move_updates_state():
    engine = GameEngine()

    result = engine.attempt_move(2, 0)

    assert isinstance(result, MoveOutcome)
    assert engine.state is result.state
    assert engine.current_player == PLAYER_2
    assert engine.move_count == 1
    assert len(engine.history) == 1
    assert engine.history[0].origin == (2, 0)
    assert engine.board[2] == (0, 5, 5, 5, 0, 5, 5, 5)


def test_rejected_move_leaves_state_alone():
    engine = GameEngine()
    before = engine.state

    result = engine.attempt_move(0, 0)

    assert isinstance(result, Rejected)
    assert result.reason is RejectReason.NOT_YOUR_TURN
    assert engine.state is before


def test_observers_receive_every_step():
    engine = GameEngine()
    seen = []
    engine.add_observer(seen.append)

    result = engine.attempt_move(2, 0)

    assert tuple(seen) == result.steps

    engine.remove_observer(seen.append)
    engine.attempt_move(1, 0)
    assert len(seen) == len(result.steps)


def test_reentrant_move_is_rejected_as_busy():
    """A move requested while another is being played out is refused."""
    engine = GameEngine()
    nested = []

    def observer(step):
        assert engine.busy
        assert not engine.is_playable(2, 1)
        assert engine.legal_moves() == []
        nested.append(engine.attempt_move(2, 1))

    engine.add_observer(observer)
    engine.attempt_move(2, 0)

    assert nested
    assert all(isinstance(r, Rejected) and r.reason is RejectReason.ENGINE_BUSY for r in nested)
    assert engine.busy is False
    assert engine.move_count == 1


def test_failing_observer_does_not_commit_move():
    engine = GameEngine()

    def observer(step):
        raise RuntimeError("display broke")

    engine.add_observer(observer)
    with pytest.raises(RuntimeError):
        engine.attempt_move(2, 0)

    assert engine.busy is False
    assert engine.state == new_game()


def test_last_capture():
    rows = [[0] * 8 for _ in range(4)]
    rows[3][0] = 1
    rows[0][0] = 3
    rows[1][4] = 2
    rows[2][2] = 1
    engine = GameEngine(GameState.from_rows(rows))

    engine.attempt_move(3, 0)
    assert engine.last_capture.amount == 4
    assert (engine.last_capture.row, engine.last_capture.col) == (0, 0)
    assert engine.captures == (4, 0)

    # Next move captures nothing, so the marker clears
    engine.attempt_move(1, 4)
    assert engine.last_capture is None


def test_game_over_and_winner():
    rows = [[0] * 8 for _ in range(4)]
    rows[2][0] = 1
    engine = GameEngine(GameState.from_rows(rows))

    result = engine.attempt_move(2, 0)

    assert result.game_over
    assert engine.game_over
    assert engine.winner() is Winner.PLAYER_1
    assert not engine.can_move(PLAYER_2)

    again = engine.attempt_move(2, 1)
    assert isinstance(again, Rejected)
    assert again.reason is RejectReason.GAME_OVER


def test_reset():
    engine = GameEngine()
    engine.attempt_move(2, 0)
    engine.attempt_move(1, 2)

    engine.reset()

    assert engine.board == initial_board()
    assert engine.current_player == PLAYER_1
    assert engine.captures == (0, 0)
    assert engine.history == ()
    assert engine.move_count == 0
    assert engine.game_over is False
    assert engine.last_capture is None
    assert engine.state.total_seeds == 64


def test_stats():
    clock = FakeClock(100.0)
    engine = GameEngine(clock=clock)
    engine.attempt_move(2, 0)
    clock.now = 175.0

    stats = engine.stats

    assert stats.total_moves == 1
    assert stats.player1_captures == 0
    assert stats.player2_captures == 0
    assert stats.elapsed_seconds == 75.0
    assert stats.duration == "1:15"


def test_queries_delegate_to_state():
    engine = GameEngine()

    assert engine.is_playable(2, 0)
    assert not engine.is_playable(1, 0)
    assert engine.can_move(PLAYER_1)
    assert engine.territory_total(PLAYER_1) == 32
    assert engine.territory_total(PLAYER_2) == 32
    assert len(engine.legal_moves()) == 8


def test_to_dict_is_json_serializable():
    engine = GameEngine()
    engine.attempt_move(2, 0)

    data = json.loads(json.dumps(engine.to_dict()))

    assert data["current_player"] == 2
    assert data["winner"] is None
    assert data["busy"] is False
    assert data["last_capture"] is None
    assert data["history"][0]["from"] == {"row": 2, "col": 0}
