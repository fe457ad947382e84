# tests/test_sudoku_difficulty.py
import pytest

from sudoku_core import count_clues, generate_full_grid, is_complete, rows_to_grid, solve
from sudoku_difficulty import (
    PROFILES,
    DifficultyProfile,
    book_hash,
    canon_str,
    derive_puzzle,
    generate,
    generate_puzzles_for_profile,
    generate_rows,
    get_profile,
    hash_grid_sha256,
)


def test_profiles_removal_counts():
    assert {name: p.removals for name, p in PROFILES.items()} == {"easy": 35, "medium": 45, "hard": 55}
    assert PROFILES["hard"].clues == 26


def test_get_profile_normalizes_names():
    assert get_profile("EASY").name == "easy"
    assert get_profile(" hard ").name == "hard"
    assert get_profile(None).name == "medium"
    assert get_profile(PROFILES["easy"]) is PROFILES["easy"]
    with pytest.raises(ValueError):
        get_profile("expert")


@pytest.mark.parametrize("tier", ["easy", "medium", "hard"])
def test_generate_puzzle_clue_count_and_givens_match_solution(tier):
    puzzle, solution = generate(tier)
    assert is_complete(solution)
    assert count_clues(puzzle) == 81 - PROFILES[tier].removals
    for r in range(9):
        for c in range(9):
            if puzzle[r][c]:
                assert puzzle[r][c] == solution[r][c]


def test_easy_generation_repeated():
    for _ in range(100):
        puzzle, solution = generate("easy")
        assert count_clues(puzzle) == 46
        assert is_complete(solution)


@pytest.mark.parametrize("tier", ["easy", "medium"])
def test_generated_puzzle_is_solvable_and_agrees_with_givens(tier):
    for _ in range(5):
        puzzle, _solution = generate(tier)
        result = solve(puzzle)
        assert result is not None
        assert is_complete(result)
        for r in range(9):
            for c in range(9):
                if puzzle[r][c]:
                    assert result[r][c] == puzzle[r][c]


def test_derive_puzzle_does_not_mutate_full_grid():
    full = generate_full_grid()
    before = [row[:] for row in full]
    puzzle = derive_puzzle(full, "medium")
    assert full == before
    assert count_clues(puzzle) == 36


def test_derive_puzzle_rejects_too_many_removals():
    full = generate_full_grid()
    with pytest.raises(ValueError):
        derive_puzzle(full, DifficultyProfile("impossible", 82))
    everything = derive_puzzle(full, DifficultyProfile("all", 81))
    assert count_clues(everything) == 0


def test_generate_rows_uses_dash_for_empty_cells():
    puzzle_rows, solution_rows = generate_rows("hard")
    assert sum(row.count("-") for row in puzzle_rows) == 55
    assert all("-" not in row for row in solution_rows)
    assert is_complete(rows_to_grid(solution_rows))


def test_hashes_are_stable_and_order_independent():
    a, sa = generate("easy")
    b, sb = generate("easy")
    assert len(canon_str(a)) == 81
    assert hash_grid_sha256(a) == hash_grid_sha256([row[:] for row in a])
    assert book_hash([(a, sa), (b, sb)]) == book_hash([(b, sb), (a, sa)])


def test_generate_puzzles_for_profile_returns_distinct_puzzles():
    puzzles = generate_puzzles_for_profile(PROFILES["easy"], 4)
    assert len(puzzles) == 4
    assert len({canon_str(p) for (p, _s) in puzzles}) == 4
