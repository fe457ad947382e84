"""
Génération d'un PDF (puzzles puis solutions) pour un niveau de difficulté.
"""

from __future__ import annotations
from typing import List, Tuple, Optional

import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from sudoku_core import Grid
from sudoku_difficulty import (
    DifficultyProfile,
    generate_puzzles_for_profile,
    hash_grid_sha256,
    book_hash,
)

TRIM_W_DEFAULT = 6.0
TRIM_H_DEFAULT = 9.0

DEFAULT_BOOK_TITLE = "Sudoku"
DEFAULT_GIVEN_COLOR = "black"
DEFAULT_ADDED_COLOR = "red"

BLOCK_SHADE_COLOR = "#e9e9e9"

PROFILE_NAME_FR = {"easy": "facile", "medium": "moyen", "hard": "difficile"}


def chunk(lst, n):
    for i in range(0, len(lst), n):
        yield lst[i : i + n]


# ---------- Dessin d'une grille ----------

def draw_grid_at(
    ax,
    grid: Grid,
    left: float,
    bottom: float,
    size: float,
    puzzle_grid: Grid | None = None,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
    thick: float = 2.0,
):
    """
    Dessine `grid` avec son coin bas-gauche en (left, bottom).
    Si `puzzle_grid` est fourni, les chiffres absents du puzzle sont
    écrits en `added_color` (page de solutions).
    """
    cell = size / 9.0
    block = size / 3.0

    # fond en damier de blocs
    for br in range(3):
        for bc in range(3):
            if (br + bc) % 2 == 0:
                ax.add_patch(
                    plt.Rectangle(
                        (left + bc * block, bottom + br * block),
                        block,
                        block,
                        facecolor=BLOCK_SHADE_COLOR,
                        edgecolor="none",
                        zorder=0,
                    )
                )

    ax.add_patch(
        plt.Rectangle((left, bottom), size, size, fill=False, linewidth=thick * 1.5, color="k", zorder=3)
    )
    for i in range(1, 9):
        lw = thick if i % 3 == 0 else thick * 0.4
        ax.plot([left + i * cell] * 2, [bottom, bottom + size], linewidth=lw, color="k", zorder=2)
        ax.plot([left, left + size], [bottom + i * cell] * 2, linewidth=lw, color="k", zorder=2)

    font_pts = cell * 0.5 * 72
    for r in range(9):
        for c in range(9):
            v = grid[r][c]
            if not v:
                continue
            added = puzzle_grid is not None and puzzle_grid[r][c] == 0
            ax.text(
                left + c * cell + cell / 2,
                bottom + (8 - r) * cell + cell * 0.47,
                str(v),
                ha="center",
                va="center",
                fontsize=font_pts,
                fontweight="bold" if added else "normal",
                color=added_color if added else given_color,
                zorder=4,
            )


def draw_page_figure(
    items: List[Tuple[Grid, Optional[Grid]]],
    trim_w: float,
    trim_h: float,
    rows: int,
    cols: int,
    page_num: int,
    title: str,
    start_idx: int,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
):
    """
    Une page de grilles. `items` = [(grille, puzzle_ou_None), ...] :
    puzzle_ou_None sert à colorer les chiffres ajoutés sur les solutions.
    """
    plt.rcParams["font.family"] = "DejaVu Sans"
    fig = plt.figure(figsize=(trim_w, trim_h))
    ax = plt.gca()
    ax.set_xlim(0, trim_w)
    ax.set_ylim(0, trim_h)
    ax.axis("off")

    margin_x = 0.5
    margin_y = 0.8
    cell_w = (trim_w - 2 * margin_x) / cols
    cell_h = (trim_h - 2 * margin_y) / rows
    size = min(cell_w, cell_h) * 0.90
    # traits plus fins pour les miniatures
    thick = 2.0 if rows * cols == 1 else 0.6

    for idx, (grid, puzzle_grid) in enumerate(items[: rows * cols]):
        r = idx // cols
        c = idx % cols
        left = margin_x + c * cell_w + (cell_w - size) / 2
        bottom = margin_y + (rows - 1 - r) * cell_h + (cell_h - size) / 2
        draw_grid_at(
            ax,
            grid,
            left,
            bottom,
            size,
            puzzle_grid=puzzle_grid,
            given_color=given_color,
            added_color=added_color,
            thick=thick,
        )
        ax.text(left + size / 2, bottom - 0.1, str(start_idx + idx), ha="center", va="top", fontsize=8)

    ax.text(trim_w / 2, trim_h - 0.3, title, ha="center", va="top", fontsize=12, fontweight="bold")
    ax.text(trim_w - 0.2, 0.2, str(page_num), ha="right", va="bottom", fontsize=10)
    return fig


# ---------- Livre complet ----------

def build_book_pdf(
    profile: DifficultyProfile,
    output_path: str,
    n_puzzles: int,
    title: str = DEFAULT_BOOK_TITLE,
    trim_w: float = TRIM_W_DEFAULT,
    trim_h: float = TRIM_H_DEFAULT,
    puzzle_rows: int = 2,
    puzzle_cols: int = 1,
    solution_rows: int = 3,
    solution_cols: int = 3,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
) -> Tuple[List[Tuple[Grid, Grid]], List[str], str]:
    """
    Génère `n_puzzles` puzzles du profil et écrit le PDF. Retourne :
    - la liste (puzzle, solution)
    - la liste des hashs par puzzle
    - le hash global du "livre"
    """
    if n_puzzles <= 0:
        raise ValueError("Le nombre de puzzles doit être > 0.")

    puzzles = generate_puzzles_for_profile(profile, n_puzzles)
    label_fr = PROFILE_NAME_FR.get(profile.name, profile.name)

    puzzles_per_page = puzzle_rows * puzzle_cols
    solutions_per_page = solution_rows * solution_cols
    page_no = 1

    with PdfPages(output_path) as pdf:
        for page_i, page in enumerate(chunk(puzzles, puzzles_per_page)):
            fig = draw_page_figure(
                [(p, None) for (p, _s) in page],
                trim_w=trim_w,
                trim_h=trim_h,
                rows=puzzle_rows,
                cols=puzzle_cols,
                page_num=page_no,
                title=f"{title} — Niveau {label_fr}",
                start_idx=page_i * puzzles_per_page + 1,
            )
            pdf.savefig(fig, bbox_inches="tight")
            plt.close(fig)
            page_no += 1

        for page_i, page in enumerate(chunk(puzzles, solutions_per_page)):
            first = page_i * solutions_per_page + 1
            last = first + len(page) - 1
            fig = draw_page_figure(
                [(s, p) for (p, s) in page],
                trim_w=trim_w,
                trim_h=trim_h,
                rows=solution_rows,
                cols=solution_cols,
                page_num=page_no,
                title=f"Solutions {first}" if first == last else f"Solutions {first}–{last}",
                start_idx=first,
                given_color=given_color,
                added_color=added_color,
            )
            pdf.savefig(fig, bbox_inches="tight")
            plt.close(fig)
            page_no += 1

    print(f"[{profile.name}] PDF écrit : {output_path} ({page_no - 1} pages)")
    per_puzzle_hashes = [hash_grid_sha256(p) for (p, _s) in puzzles]
    return puzzles, per_puzzle_hashes, book_hash(puzzles)
