"""
Sauvegarde / chargement d'une partie dans un fichier texte.

Format : une valeur par ligne
- difficulté
- secondes écoulées
- 9 lignes : grille de départ
- 9 lignes : grille affichée
- 9 lignes : solution
('-' pour une case vide)
"""

import os
from typing import List, Optional

from sudoku_core import grid_to_rows, is_consistent, rows_to_grid
from sudoku_difficulty import get_profile
from sudoku_game import GameSession

SAVE_FILE = "savegame.dat"


# Écrire la partie courante
def save_game(session: GameSession, path: str = SAVE_FILE) -> None:
    lines = [session.difficulty, str(session.elapsed_seconds)]
    lines += grid_to_rows(session.puzzle)
    lines += grid_to_rows(session.board)
    lines += grid_to_rows(session.solution)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


# Relire une partie ; None si aucun fichier
def load_game(path: str = SAVE_FILE) -> Optional[GameSession]:
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        lines: List[str] = [line.strip() for line in f]

    if len(lines) < 2 + 27:
        raise ValueError(f"Sauvegarde tronquée : {len(lines)} lignes.")

    difficulty = get_profile(lines[0]).name
    try:
        elapsed = int(lines[1])
    except ValueError:
        raise ValueError(f"Temps invalide dans la sauvegarde : {lines[1]!r}")

    puzzle = rows_to_grid(lines[2:11])
    board = rows_to_grid(lines[11:20])
    solution = rows_to_grid(lines[20:29])

    for r in range(9):
        for c in range(9):
            if puzzle[r][c] and board[r][c] != puzzle[r][c]:
                raise ValueError(f"Sauvegarde : case donnée ({r + 1},{c + 1}) modifiée.")
    if not is_consistent(board):
        raise ValueError("Sauvegarde : grille courante incohérente.")

    return GameSession(
        difficulty=difficulty,
        puzzle=puzzle,
        solution=solution,
        board=board,
        elapsed_seconds=elapsed,
    )
