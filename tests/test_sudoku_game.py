# tests/test_sudoku_game.py
import pytest

from sudoku_core import clone_grid, count_clues, find_empty, is_complete, is_consistent, solve
from sudoku_game import (
    MAX_HINTS,
    GameSession,
    HintLimitError,
    UnsolvableBoardError,
)

from test_sudoku_core import PUZZLE, SOLVED


def _session(board=None):
    return GameSession(
        difficulty="medium",
        puzzle=clone_grid(PUZZLE),
        solution=clone_grid(SOLVED),
        board=clone_grid(board if board is not None else PUZZLE),
    )


def test_new_session_starts_from_puzzle():
    s = GameSession.new("easy")
    assert s.difficulty == "easy"
    assert s.board == s.puzzle
    assert s.board is not s.puzzle
    assert count_clues(s.puzzle) == 46
    assert is_complete(s.solution)


def test_place_checks_against_reference_solution():
    s = _session()
    assert not s.place(0, 2, 1)
    assert s.errors == 1
    assert s.board[0][2] == 0
    assert s.place(0, 2, 4)
    assert s.board[0][2] == 4
    assert s.errors == 1


def test_place_on_filled_cell_is_rejected():
    s = _session()
    with pytest.raises(ValueError):
        s.place(0, 0, 5)
    with pytest.raises(ValueError):
        s.place(0, 2, 0)


def test_possible_numbers_follow_current_board():
    s = _session()
    assert s.possible_numbers(0, 2) == [1, 2, 4]
    assert s.possible_numbers(0, 0) == []
    s.board[0][3] = 2  # displayed value, not from the solution
    assert s.possible_numbers(0, 2) == [1, 4]
    assert s.is_given(0, 0)
    assert not s.is_given(0, 2)


def test_hint_uses_first_empty_cell_and_can_be_applied():
    s = _session()
    hint = s.request_hint()
    assert (hint.row, hint.col, hint.value) == (0, 2, 4)
    assert s.hints_used == 1
    assert s.board[0][2] == 0
    applied = s.apply_hint()
    assert applied == hint
    assert s.board[0][2] == 4
    with pytest.raises(ValueError):
        s.apply_hint()


def test_hint_follows_board_that_diverges_from_reference_solution():
    empty = [[0] * 9 for _ in range(9)]
    s = GameSession(
        difficulty="hard",
        puzzle=clone_grid(empty),
        solution=clone_grid(SOLVED),
        board=clone_grid(empty),
    )
    # consistent on its own but not the reference value (5)
    s.board[0][0] = 9
    hint = s.request_hint()
    assert (hint.row, hint.col, hint.value) == (0, 1, 1)
    assert hint.value != SOLVED[0][1]
    assert s.board[0][0] == 9


def test_hint_limit():
    s = _session()
    for _ in range(MAX_HINTS):
        assert s.request_hint() is not None
        s.apply_hint()
    with pytest.raises(HintLimitError):
        s.request_hint()


def test_hint_on_inconsistent_board():
    board = [[0] * 9 for _ in range(9)]
    board[0] = [0, 1, 2, 3, 4, 5, 6, 7, 8]
    board[5][0] = 9
    s = _session(board)
    with pytest.raises(UnsolvableBoardError):
        s.request_hint()
    assert s.hints_used == 0


def test_hint_on_full_board_returns_none():
    s = _session(SOLVED)
    assert s.request_hint() is None
    assert s.is_solved()


def test_game_solved_after_filling_every_cell():
    s = _session()
    while True:
        pos = find_empty(s.board)
        if pos is None:
            break
        r, c = pos
        assert s.place(r, c, SOLVED[r][c])
    assert s.is_solved()
    assert s.errors == 0


def test_elapsed_time_format():
    s = _session()
    s.tick()
    s.tick(60)
    assert s.format_elapsed() == "01:01"
    s.elapsed_seconds = 3599
    assert s.format_elapsed() == "59:59"


def _empty_session():
    empty = [[0] * 9 for _ in range(9)]
    return GameSession(
        difficulty="hard",
        puzzle=clone_grid(empty),
        solution=clone_grid(SOLVED),
        board=clone_grid(empty),
    )


def test_place_rejects_digit_clashing_with_board():
    s = _session()
    # 5 is in row 0 already: counted as an error even before the reference check
    assert not s.place(0, 2, 5)
    assert s.errors == 1
    assert s.board[0][2] == 0


def test_game_can_be_won_after_divergent_hint():
    s = _empty_session()
    hint = s.request_hint()
    assert (hint.row, hint.col, hint.value) == (0, 0, 1)
    assert hint.value != SOLVED[0][0]
    s.apply_hint()
    assert not s.follows_reference()

    # reference digit 1 at (0, 7) now clashes with the hinted 1 in row 0
    assert SOLVED[0][7] == 1
    assert not s.place(0, 7, 1)
    assert s.errors == 1
    assert is_consistent(s.board)

    while True:
        pos = find_empty(s.board)
        if pos is None:
            break
        r, c = pos
        assert s.place(r, c, solve(s.board)[r][c])
        assert is_consistent(s.board)

    assert s.board != SOLVED
    assert s.is_solved()
    assert s.errors == 1


def test_generated_hard_game_stays_consistent_after_applied_hint():
    s = GameSession.new("hard")
    hint = s.request_hint()
    s.apply_hint()
    assert s.board[hint.row][hint.col] == hint.value

    while True:
        pos = find_empty(s.board)
        if pos is None:
            break
        r, c = pos
        # the reference digit is only accepted while it fits the displayed board
        if not s.place(r, c, s.solution[r][c]):
            assert s.place(r, c, solve(s.board)[r][c])
        assert is_consistent(s.board)

    assert is_complete(s.board)
    assert s.is_solved()
