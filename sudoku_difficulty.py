from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Dict, Set, Optional
import random
import hashlib

from sudoku_core import Grid, check_grid, clone_grid, generate_full_grid, grid_to_rows


# ---------- Utils de hash / représentation ----------

def canon_str(grid: Grid) -> str:
    """Chaîne canonique pour une grille (ligne par ligne)."""
    return "".join("".join(str(v) for v in row) for row in grid)


def hash_grid_sha256(grid: Grid) -> str:
    """Hash hex (64) d'une grille basée sur canon_str (exact match)."""
    return hashlib.sha256(canon_str(grid).encode("utf-8")).hexdigest().lower()


def book_hash(puzzles: List[Tuple[Grid, Grid]]) -> str:
    """
    Hash d'ensemble indépendant de l'ordre :
    - hash de chaque puzzle,
    - tri,
    - payload versionné,
    - re-hash.
    """
    per = sorted(hash_grid_sha256(p) for (p, _s) in puzzles)
    payload = "sudoku-book:v1\ncount=" + str(len(per)) + "\n" + "\n".join(per) + "\n"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest().lower()


# ====================================================
#   PROFILS : nombre de cases retirées
# ====================================================

@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    removals: int

    @property
    def clues(self) -> int:
        return 81 - self.removals


EASY_PROFILE = DifficultyProfile("easy", 35)
MEDIUM_PROFILE = DifficultyProfile("medium", 45)
HARD_PROFILE = DifficultyProfile("hard", 55)

PROFILES: Dict[str, DifficultyProfile] = {
    EASY_PROFILE.name: EASY_PROFILE,
    MEDIUM_PROFILE.name: MEDIUM_PROFILE,
    HARD_PROFILE.name: HARD_PROFILE,
}

DEFAULT_DIFFICULTY = MEDIUM_PROFILE.name


def get_profile(tier: Optional[str | DifficultyProfile]) -> DifficultyProfile:
    """Résout un nom de difficulté (insensible à la casse, None = medium)."""
    if isinstance(tier, DifficultyProfile):
        return tier
    key = DEFAULT_DIFFICULTY if tier is None else tier.strip().lower()
    if key not in PROFILES:
        raise ValueError(f"Difficulté inconnue : {tier!r}")
    return PROFILES[key]


# ====================================================
#   DÉRIVATION D'UN PUZZLE
# ====================================================

def derive_puzzle(full: Grid, tier: Optional[str | DifficultyProfile]) -> Grid:
    """
    Retire `removals` cases tirées au hasard parmi les 81.

    Une case déjà vide est simplement re-tirée. Aucune vérification
    d'unicité ni de résolubilité.
    """
    check_grid(full)
    k = get_profile(tier).removals
    filled = sum(1 for row in full for v in row if v)
    if k > filled:
        raise ValueError(f"Impossible de retirer {k} cases : seulement {filled} remplies.")

    puzzle = clone_grid(full)
    remaining = k
    while remaining > 0:
        r = random.randrange(9)
        c = random.randrange(9)
        if puzzle[r][c] != 0:
            puzzle[r][c] = 0
            remaining -= 1
    return puzzle


def generate(tier: Optional[str | DifficultyProfile] = None) -> Tuple[Grid, Grid]:
    """Retourne (puzzle, solution) pour la difficulté demandée."""
    profile = get_profile(tier)
    full = generate_full_grid()
    return derive_puzzle(full, profile), full


def generate_rows(tier: Optional[str | DifficultyProfile] = None) -> Tuple[List[str], List[str]]:
    """Comme generate(), au format texte ('-' pour les cases vides)."""
    puzzle, full = generate(tier)
    return grid_to_rows(puzzle), grid_to_rows(full)


# ====================================================
#   GÉNÉRATION MULTI-PUZZLES
# ====================================================

def generate_puzzles_for_profile(profile: DifficultyProfile, count: int) -> List[Tuple[Grid, Grid]]:
    """
    Génère `count` puzzles distincts pour un profil donné.
    Les doublons (même grille de départ) sont rejetés.
    """
    puzzles: List[Tuple[Grid, Grid]] = []
    seen: Set[str] = set()
    tries = 0
    max_tries = count * 100

    while len(puzzles) < count and tries < max_tries:
        if tries and tries % 500 == 0:
            print(f"[{profile.name}] tries={tries}, ok={len(puzzles)}/{count}")
        tries += 1

        puzzle, full = generate(profile)
        sig = canon_str(puzzle)
        if sig in seen:
            continue
        seen.add(sig)
        puzzles.append((puzzle, full))

    if len(puzzles) < count:
        raise RuntimeError(f"Seulement {len(puzzles)} puzzles générés pour le profil {profile.name}")

    return puzzles
