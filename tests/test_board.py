"""Tests for board topology and game state representation."""

import pytest
from igisoro.core import (
    NUM_COLS,
    NUM_ROWS,
    PLAYER_1,
    PLAYER_2,
    GameState,
    InvariantViolation,
    adjacent_pit,
    initial_board,
    owner,
)


def test_initial_board():
    """Inner rows hold 4 seeds per pit, outer rows start empty."""
    board = initial_board()

    assert len(board) == NUM_ROWS
    assert board[0] == (0,) * NUM_COLS
    assert board[1] == (4,) * NUM_COLS
    assert board[2] == (4,) * NUM_COLS
    assert board[3] == (0,) * NUM_COLS

    state = GameState(board=board)
    assert state.seeds_on_board == 64
    assert state.total_seeds == 64
    assert state.player == PLAYER_1
    assert state.game_over is False


def test_owner_partitions_rows():
    """Rows 0-1 belong to Player 2, rows 2-3 to Player 1."""
    assert [owner(row) for row in range(NUM_ROWS)] == [PLAYER_2, PLAYER_2, PLAYER_1, PLAYER_1]


def test_player_pits():
    """Each territory covers all 8 columns of its two rows."""
    state = GameState(board=initial_board())

    p1_pits = state.get_player_pits(PLAYER_1)
    p2_pits = state.get_player_pits(PLAYER_2)

    assert len(p1_pits) == 16
    assert len(p2_pits) == 16
    assert set(p1_pits).isdisjoint(p2_pits)
    assert all(owner(row) == PLAYER_1 for row, _ in p1_pits)
    assert all(owner(row) == PLAYER_2 for row, _ in p2_pits)


@pytest.mark.parametrize(
    "pit, expected",
    [
        ((0, 0), (0, 1)),
        ((0, 7), (1, 7)),
        ((1, 7), (1, 6)),
        ((1, 0), (2, 0)),
        ((2, 3), (2, 4)),
        ((2, 7), (3, 7)),
        ((3, 7), (3, 6)),
        ((3, 0), (0, 0)),
    ],
)
def test_adjacent_pit(pit, expected):
    """Ring order turns at every row end."""
    assert adjacent_pit(*pit) == expected


def test_adjacent_pit_visits_every_pit_once():
    """32 steps from any pit walk the full ring and come back."""
    pit = (2, 0)
    seen = []
    for _ in range(NUM_ROWS * NUM_COLS):
        pit = adjacent_pit(*pit)
        seen.append(pit)

    assert pit == (2, 0)
    assert len(set(seen)) == NUM_ROWS * NUM_COLS


def test_adjacent_pit_off_board():
    """Walking from outside the board is a defect, not a user error."""
    with pytest.raises(InvariantViolation):
        adjacent_pit(4, 0)
    with pytest.raises(InvariantViolation):
        adjacent_pit(0, -1)


def test_invalid_states():
    """Malformed states are refused at construction."""
    with pytest.raises(ValueError):
        GameState.from_rows([[0] * NUM_COLS] * 3)
    with pytest.raises(ValueError):
        GameState.from_rows([[0] * 7] * NUM_ROWS)
    with pytest.raises(ValueError):
        GameState(board=initial_board(), player=0)
    with pytest.raises(ValueError):
        GameState.from_rows([[-1] + [0] * 7] + [[0] * NUM_COLS] * 3)
    with pytest.raises(ValueError):
        GameState(board=initial_board(), captures=(0, -2))


def test_state_is_immutable():
    state = GameState(board=initial_board())
    with pytest.raises(AttributeError):
        state.player = PLAYER_2


def test_to_dict():
    state = GameState(board=initial_board(), captures=(3, 1))
    data = state.to_dict()

    assert data["board"][1] == [4] * NUM_COLS
    assert data["current_player"] == 1
    assert data["game_over"] is False
    assert data["captures"] == {"1": 3, "2": 1}
    assert data["history"] == []


def test_str():
    text = str(GameState(board=initial_board()))

    assert "Player 1's turn" in text
    assert "P2" in text and "P1" in text
