"""
Moteur Sudoku commun :
- grille 9x9 (0 = case vide)
- règle de placement (ligne / colonne / bloc)
- génération d'une grille complète (backtracking, ordre aléatoire)
- solveur backtracking (ordre fixe 1..9) utilisé pour les indices
- conversion vers / depuis le format texte ('-' = case vide)
"""

from __future__ import annotations
import random
from typing import List, Tuple, Optional

Grid = List[List[int]]
Pos = Tuple[int, int]

EMPTY_CHAR = "-"


# ---------- Contrôles ----------

def check_grid(grid: Grid) -> None:
    """Lève ValueError si la grille n'est pas une 9x9 d'entiers 0..9."""
    if len(grid) != 9 or any(len(row) != 9 for row in grid):
        raise ValueError("La grille doit faire 9x9.")
    for row in grid:
        for v in row:
            if not isinstance(v, int) or not 0 <= v <= 9:
                raise ValueError(f"Valeur hors limites dans la grille : {v!r}")


def clone_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def is_placement_valid(grid: Grid, r: int, c: int, v: int) -> bool:
    """
    True si `v` n'apparaît ni dans la ligne `r`, ni dans la colonne `c`,
    ni dans le bloc 3x3 de (r, c). La case elle-même n'est pas vérifiée :
    l'appelant ne place que dans des cases vides.
    """
    for i in range(9):
        if grid[r][i] == v or grid[i][c] == v:
            return False
    br, bc = 3 * (r // 3), 3 * (c // 3)
    for rr in range(br, br + 3):
        for cc in range(bc, bc + 3):
            if grid[rr][cc] == v:
                return False
    return True


def possible_numbers(grid: Grid, r: int, c: int) -> List[int]:
    """Chiffres 1..9 qu'on peut poser en (r, c) sur la grille courante."""
    return [v for v in range(1, 10) if is_placement_valid(grid, r, c, v)]


def find_empty(grid: Grid) -> Optional[Pos]:
    for r in range(9):
        for c in range(9):
            if grid[r][c] == 0:
                return r, c
    return None


def count_clues(grid: Grid) -> int:
    return sum(1 for row in grid for v in row if v)


def is_consistent(grid: Grid) -> bool:
    """Aucun chiffre non nul en double dans une ligne, une colonne ou un bloc."""
    for i in range(9):
        row = [v for v in grid[i] if v]
        col = [grid[r][i] for r in range(9) if grid[r][i]]
        br, bc = 3 * (i // 3), 3 * (i % 3)
        box = [grid[br + dr][bc + dc] for dr in range(3) for dc in range(3) if grid[br + dr][bc + dc]]
        for unit in (row, col, box):
            if len(unit) != len(set(unit)):
                return False
    return True


def is_complete(grid: Grid) -> bool:
    """Toutes les cases remplies et chaque ligne / colonne / bloc = 1..9."""
    full = set(range(1, 10))
    for i in range(9):
        if set(grid[i]) != full:
            return False
        if {grid[r][i] for r in range(9)} != full:
            return False
    for br in range(0, 9, 3):
        for bc in range(0, 9, 3):
            box = {grid[br + dr][bc + dc] for dr in range(3) for dc in range(3)}
            if box != full:
                return False
    return True


# ---------- Backtracking ----------

def _next_cell(r: int, c: int) -> Pos:
    return (r, c + 1) if c < 8 else (r + 1, 0)


def generate_full_grid() -> Grid:
    """Génère une grille complète valide (9x9), chiffres essayés dans un ordre aléatoire."""
    grid: Grid = [[0] * 9 for _ in range(9)]

    def backtrack(r=0, c=0) -> bool:
        if r == 9:
            return True
        nr, nc = _next_cell(r, c)
        if grid[r][c] != 0:
            return backtrack(nr, nc)
        vals = list(range(1, 10))
        random.shuffle(vals)
        for v in vals:
            if is_placement_valid(grid, r, c, v):
                grid[r][c] = v
                if backtrack(nr, nc):
                    return True
                grid[r][c] = 0
        return False

    if not backtrack():
        # une grille vide a toujours une solution
        raise RuntimeError("Échec de génération d'une grille complète.")
    return grid


def solve(grid: Grid) -> Optional[Grid]:
    """
    Complète une copie de `grid` par backtracking (chiffres 1..9 dans l'ordre).

    Retourne la grille complétée, ou None si aucune complétion n'existe.
    La grille de l'appelant n'est jamais modifiée.

    Seules les cases vides sont testées : deux cases déjà remplies en
    conflit ne sont pas détectées (une grille pleine est rendue telle quelle).
    """
    check_grid(grid)
    work = clone_grid(grid)

    def backtrack(r=0, c=0) -> bool:
        if r == 9:
            return True
        nr, nc = _next_cell(r, c)
        if work[r][c] != 0:
            return backtrack(nr, nc)
        for v in range(1, 10):
            if is_placement_valid(work, r, c, v):
                work[r][c] = v
                if backtrack(nr, nc):
                    return True
                work[r][c] = 0
        return False

    if backtrack():
        return work
    return None


# ---------- Format texte (9 lignes de 9 caractères) ----------

def grid_to_rows(grid: Grid) -> List[str]:
    check_grid(grid)
    return ["".join(str(v) if v else EMPTY_CHAR for v in row) for row in grid]


def rows_to_grid(rows: List[str]) -> Grid:
    """Inverse de grid_to_rows. Lève ValueError sur une ligne mal formée."""
    if len(rows) != 9:
        raise ValueError(f"9 lignes attendues, {len(rows)} reçues.")
    grid: Grid = []
    for i, line in enumerate(rows):
        if len(line) != 9:
            raise ValueError(f"Ligne {i + 1} : 9 caractères attendus, reçu {line!r}")
        row = []
        for ch in line:
            if ch == EMPTY_CHAR:
                row.append(0)
            elif ch in "123456789":
                row.append(int(ch))
            else:
                raise ValueError(f"Ligne {i + 1} : caractère invalide {ch!r}")
        grid.append(row)
    return grid
