"""
État d'une partie : grille de départ, solution de référence, grille affichée,
chronomètre, erreurs et indices.

Les indices sont calculés par le solveur à partir de la grille *affichée*,
pas de la solution de référence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from sudoku_core import (
    Grid,
    clone_grid,
    find_empty,
    is_complete,
    is_placement_valid,
    possible_numbers,
    solve,
)
from sudoku_difficulty import generate, get_profile

MAX_HINTS = 5


class GameError(Exception):
    pass


class HintLimitError(GameError):
    pass


class UnsolvableBoardError(GameError):
    pass


@dataclass
class Hint:
    row: int
    col: int
    value: int


@dataclass
class GameSession:
    difficulty: str
    puzzle: Grid
    solution: Grid
    board: Grid
    elapsed_seconds: int = 0
    errors: int = 0
    hints_used: int = 0
    last_hint: Optional[Hint] = field(default=None, repr=False)

    @classmethod
    def new(cls, difficulty: Optional[str] = None) -> "GameSession":
        profile = get_profile(difficulty)
        puzzle, solution = generate(profile)
        return cls(
            difficulty=profile.name,
            puzzle=puzzle,
            solution=solution,
            board=clone_grid(puzzle),
        )

    # ---------- Lecture ----------

    def is_given(self, r: int, c: int) -> bool:
        return self.puzzle[r][c] != 0

    def possible_numbers(self, r: int, c: int) -> List[int]:
        if self.board[r][c] != 0:
            return []
        return possible_numbers(self.board, r, c)

    def is_solved(self) -> bool:
        # un indice peut mener à une autre solution que la référence
        return find_empty(self.board) is None and is_complete(self.board)

    def follows_reference(self) -> bool:
        """True si chaque case remplie porte le chiffre de la solution de référence."""
        return all(
            v == 0 or v == self.solution[r][c]
            for r, row in enumerate(self.board)
            for c, v in enumerate(row)
        )

    def expected_value(self, r: int, c: int) -> Optional[int]:
        """
        Chiffre attendu en (r, c) : celui de la référence tant que la grille
        la suit, sinon celui d'une complétion de la grille affichée.
        None si la grille affichée n'a pas de complétion.
        """
        if self.follows_reference():
            return self.solution[r][c]
        solved = solve(self.board)
        if solved is None:
            return None
        return solved[r][c]

    def format_elapsed(self) -> str:
        return f"{self.elapsed_seconds // 60:02d}:{self.elapsed_seconds % 60:02d}"

    # ---------- Actions joueur ----------

    def tick(self, seconds: int = 1) -> None:
        self.elapsed_seconds += seconds

    def place(self, r: int, c: int, v: int) -> bool:
        """
        Pose `v` en (r, c) s'il respecte la grille affichée et correspond au
        chiffre attendu (voir expected_value). Sinon compte une erreur et
        laisse la case vide.
        """
        if not 1 <= v <= 9:
            raise ValueError(f"Chiffre invalide : {v}")
        if self.board[r][c] != 0:
            raise ValueError(f"Case ({r + 1},{c + 1}) déjà remplie.")
        if not is_placement_valid(self.board, r, c, v):
            self.errors += 1
            return False
        expected = self.expected_value(r, c)
        # grille sans complétion : seul le contrôle local s'applique
        if expected is not None and v != expected:
            self.errors += 1
            return False
        self.board[r][c] = v
        return True

    def request_hint(self) -> Optional[Hint]:
        """
        Résout la grille affichée et propose la valeur de la première case vide.
        Retourne None si la grille est déjà pleine.
        """
        if self.hints_used >= MAX_HINTS:
            raise HintLimitError(f"Nombre maximum d'indices atteint ({MAX_HINTS}).")
        pos = find_empty(self.board)
        if pos is None:
            return None
        solved = solve(self.board)
        if solved is None:
            raise UnsolvableBoardError("La grille n'a pas de solution (incohérente).")
        r, c = pos
        self.last_hint = Hint(r, c, solved[r][c])
        self.hints_used += 1
        return self.last_hint

    def apply_hint(self) -> Hint:
        """
        Écrit le dernier indice sur la grille. La valeur peut différer de la
        solution de référence : place() suit alors la nouvelle complétion.
        """
        hint = self.last_hint
        if hint is None:
            raise ValueError("Aucun indice disponible.")
        self.board[hint.row][hint.col] = hint.value
        self.last_hint = None
        return hint
