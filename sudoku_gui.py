"""
Interface CustomTkinter pour jouer au Sudoku :
menu (nouvelle partie / charger / livre PDF), grille 9x9, pavé 1–9,
indices, sauvegarde et chronomètre.
"""

from __future__ import annotations
import os

import customtkinter as ctk
from tkinter import messagebox

from sudoku_book import build_book_pdf, DEFAULT_BOOK_TITLE
from sudoku_difficulty import PROFILES
from sudoku_game import GameSession, GameError, MAX_HINTS
from sudoku_save import save_game, load_game, SAVE_FILE

# ---------------------------
# Libellés FR pour l'UI
# ---------------------------
DIFF_KEY_TO_LABEL_FR = {
    "easy": "facile",
    "medium": "moyen",
    "hard": "difficile",
}
DIFF_LABEL_FR_TO_KEY = {v: k for k, v in DIFF_KEY_TO_LABEL_FR.items()}


def diff_key_to_label_fr(key: str) -> str:
    return DIFF_KEY_TO_LABEL_FR.get(key, key)


def diff_label_fr_to_key(label: str) -> str:
    return DIFF_LABEL_FR_TO_KEY.get(label, label)


# Couleurs des cases
GIVEN_BG = "#c8c8c8"
EMPTY_BG = "#ffffff"
FILLED_BG = "#dcfff0"
ERROR_BG = "#ffc8c8"
SELECTED_BG = "#c8c8c8"
FILLED_FG = "#0a5aa0"

DEFAULT_N_PUZZLES = 20


def launch_gui():
    ctk.set_appearance_mode("light")
    ctk.set_default_color_theme("blue")

    app = ctk.CTk()
    app.title("Sudoku")

    state = {"session": None, "selected": None, "timer_id": None, "locked": False}

    status_var = ctk.StringVar(value="")
    timer_var = ctk.StringVar(value="Temps : 00:00")
    book_diff_var = ctk.StringVar(value=DIFF_KEY_TO_LABEL_FR["medium"])
    book_n_var = ctk.StringVar(value=str(DEFAULT_N_PUZZLES))

    # ==========================
    #   MENU
    # ==========================
    frame_menu = ctk.CTkFrame(app)

    ctk.CTkLabel(
        frame_menu,
        text="Sudoku",
        font=ctk.CTkFont(size=28, weight="bold"),
    ).grid(row=0, column=0, columnspan=2, pady=(20, 20))

    for i, key in enumerate(PROFILES.keys()):
        ctk.CTkButton(
            frame_menu,
            text=f"Nouvelle partie — {diff_key_to_label_fr(key)}",
            command=lambda k=key: on_new_game(k),
        ).grid(row=1 + i, column=0, columnspan=2, sticky="ew", padx=20, pady=5)

    ctk.CTkButton(frame_menu, text="Charger la partie", command=lambda: on_load()).grid(
        row=4, column=0, columnspan=2, sticky="ew", padx=20, pady=(15, 5)
    )

    ctk.CTkLabel(frame_menu, text="Livre PDF").grid(row=5, column=0, sticky="w", padx=20, pady=(20, 5))
    ctk.CTkOptionMenu(
        frame_menu,
        values=[diff_key_to_label_fr(k) for k in PROFILES.keys()],
        variable=book_diff_var,
    ).grid(row=5, column=1, sticky="ew", padx=20, pady=(20, 5))
    ctk.CTkLabel(frame_menu, text="Nombre de puzzles").grid(row=6, column=0, sticky="w", padx=20, pady=5)
    ctk.CTkEntry(frame_menu, textvariable=book_n_var).grid(row=6, column=1, sticky="ew", padx=20, pady=5)
    ctk.CTkButton(frame_menu, text="Générer le PDF", command=lambda: on_book()).grid(
        row=7, column=0, columnspan=2, sticky="ew", padx=20, pady=5
    )

    ctk.CTkButton(frame_menu, text="Quitter", fg_color="gray", command=app.destroy).grid(
        row=8, column=0, columnspan=2, sticky="ew", padx=20, pady=(15, 20)
    )

    # ==========================
    #   PARTIE
    # ==========================
    frame_game = ctk.CTkFrame(app)

    frame_top = ctk.CTkFrame(frame_game, fg_color="transparent")
    frame_top.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))
    frame_top.grid_columnconfigure(0, weight=1)
    ctk.CTkLabel(frame_top, textvariable=status_var, anchor="w").grid(row=0, column=0, sticky="w")
    ctk.CTkLabel(frame_top, textvariable=timer_var, anchor="e").grid(row=0, column=1, sticky="e")

    frame_board = ctk.CTkFrame(frame_game, fg_color="black")
    frame_board.grid(row=1, column=0, padx=10, pady=5)

    tiles = [[None] * 9 for _ in range(9)]
    for r in range(9):
        for c in range(9):
            # espace plus large entre les blocs 3x3
            padx = (3 if c % 3 == 0 else 1, 3 if c == 8 else 0)
            pady = (3 if r % 3 == 0 else 1, 3 if r == 8 else 0)
            t = ctk.CTkButton(
                frame_board,
                text="",
                width=52,
                height=52,
                corner_radius=0,
                font=ctk.CTkFont(size=20),
                command=lambda rr=r, cc=c: on_tile(rr, cc),
            )
            t.grid(row=r, column=c, padx=padx, pady=pady)
            tiles[r][c] = t

    frame_pad = ctk.CTkFrame(frame_game, fg_color="transparent")
    frame_pad.grid(row=2, column=0, padx=10, pady=5)
    num_buttons = {}
    for v in range(1, 10):
        b = ctk.CTkButton(
            frame_pad,
            text=str(v),
            width=44,
            command=lambda vv=v: on_select_number(vv),
        )
        b.grid(row=0, column=v - 1, padx=2)
        num_buttons[v] = b

    frame_ctrl = ctk.CTkFrame(frame_game, fg_color="transparent")
    frame_ctrl.grid(row=3, column=0, padx=10, pady=(5, 10))
    for i, (label, cmd) in enumerate(
        [
            ("Indice", lambda: on_hint()),
            ("Appliquer l'indice", lambda: on_apply_hint()),
            ("Sauvegarder", lambda: on_save()),
            ("Charger", lambda: on_load()),
            ("Menu", lambda: show_menu()),
        ]
    ):
        ctk.CTkButton(frame_ctrl, text=label, width=110, command=cmd).grid(row=0, column=i, padx=3)

    # ==========================
    #   AFFICHAGE
    # ==========================

    def show_menu():
        stop_timer()
        frame_game.pack_forget()
        frame_menu.pack(padx=20, pady=20)

    def show_game():
        frame_menu.pack_forget()
        frame_game.pack(padx=10, pady=10)

    def refresh_status():
        s = state["session"]
        status_var.set(
            f"Difficulté : {diff_key_to_label_fr(s.difficulty).upper()}    "
            f"Erreurs : {s.errors}    Indices : {s.hints_used}/{MAX_HINTS}"
        )
        timer_var.set(f"Temps : {s.format_elapsed()}")

    def refresh_board():
        s = state["session"]
        for r in range(9):
            for c in range(9):
                v = s.board[r][c]
                t = tiles[r][c]
                if s.is_given(r, c):
                    t.configure(text=str(v), fg_color=GIVEN_BG, text_color_disabled="black", state="disabled")
                elif v:
                    t.configure(text=str(v), fg_color=FILLED_BG, text_color_disabled=FILLED_FG, state="disabled")
                else:
                    t.configure(
                        text="",
                        fg_color=EMPTY_BG,
                        hover_color="#eeeeee",
                        state="disabled" if state["locked"] else "normal",
                    )
        refresh_status()

    def start_session(session: GameSession):
        stop_timer()
        state["session"] = session
        state["locked"] = False
        on_select_number(None)
        refresh_board()
        show_game()
        start_timer()

    # ==========================
    #   CHRONO
    # ==========================

    def tick():
        state["session"].tick()
        timer_var.set(f"Temps : {state['session'].format_elapsed()}")
        state["timer_id"] = app.after(1000, tick)

    def start_timer():
        state["timer_id"] = app.after(1000, tick)

    def stop_timer():
        if state["timer_id"] is not None:
            app.after_cancel(state["timer_id"])
            state["timer_id"] = None

    # ==========================
    #   ACTIONS
    # ==========================

    def on_new_game(key: str):
        try:
            start_session(GameSession.new(key))
        except Exception as e:
            messagebox.showerror("Erreur", f"Une erreur est survenue : {e}")

    def on_select_number(v):
        # re-cliquer le chiffre sélectionné le désélectionne
        state["selected"] = None if v == state["selected"] else v
        for n, b in num_buttons.items():
            b.configure(fg_color=SELECTED_BG if n == state["selected"] else ("#3a7ebf", "#1f538d"))

    def on_tile(r: int, c: int):
        s = state["session"]
        if s is None or state["locked"] or s.board[r][c] != 0:
            return
        chosen = state["selected"]
        if chosen is None:
            possibles = s.possible_numbers(r, c)
            if not possibles:
                messagebox.showinfo("Info", "Aucun chiffre possible (grille peut-être incohérente).")
            else:
                messagebox.showinfo("Possibles", f"Chiffres possibles pour ({r + 1},{c + 1}) : {possibles}")
            return
        if s.place(r, c, chosen):
            refresh_board()
            check_win()
        else:
            refresh_status()
            tiles[r][c].configure(fg_color=ERROR_BG)
            app.after(220, lambda: tiles[r][c].configure(fg_color=EMPTY_BG))

    def on_hint():
        s = state["session"]
        try:
            hint = s.request_hint()
        except GameError as e:
            messagebox.showinfo("Indice", str(e))
            return
        if hint is None:
            messagebox.showinfo("Info", "Aucune case vide. La grille est peut-être déjà résolue.")
            return
        refresh_status()
        messagebox.showinfo(
            "Indice",
            f"Position : ligne {hint.row + 1}, colonne {hint.col + 1}\n"
            f"Valeur suggérée : {hint.value}\n\n"
            "Le solveur a complété la grille affichée de façon cohérente.\n"
            "Appuie sur « Appliquer l'indice » pour remplir la case.\n\n"
            f"Indices utilisés : {s.hints_used} / {MAX_HINTS}",
        )

    def on_apply_hint():
        try:
            state["session"].apply_hint()
        except ValueError as e:
            messagebox.showinfo("Indice", str(e))
            return
        refresh_board()
        check_win()

    def check_win():
        s = state["session"]
        if not s.is_solved():
            return
        stop_timer()
        state["locked"] = True
        refresh_board()
        messagebox.showinfo(
            "Résolu",
            f"Bravo, grille résolue !\nTemps : {s.format_elapsed()}\nErreurs : {s.errors}",
        )

    def on_save():
        try:
            save_game(state["session"])
            messagebox.showinfo("Sauvegarde", f"Partie sauvegardée dans {SAVE_FILE}")
        except Exception as e:
            messagebox.showerror("Erreur", f"Erreur de sauvegarde : {e}")

    def on_load():
        try:
            session = load_game()
        except Exception as e:
            messagebox.showerror("Erreur", f"Erreur de chargement : {e}")
            return
        if session is None:
            messagebox.showinfo("Chargement", "Aucune sauvegarde trouvée.")
            return
        start_session(session)

    def on_book():
        try:
            n_puzzles = int(book_n_var.get())
            if n_puzzles <= 0:
                raise ValueError("Le nombre de puzzles doit être > 0.")
            profile = PROFILES[diff_label_fr_to_key(book_diff_var.get())]
            output_file = f"sudoku_book_{n_puzzles}_puzzles_{profile.name}.pdf"
            print(f"Génération du PDF : {output_file}")

            _puzzles, per_puzzle_hashes, b_hash = build_book_pdf(
                profile=profile,
                output_path=output_file,
                n_puzzles=n_puzzles,
                title=DEFAULT_BOOK_TITLE,
            )
            print("Hashs puzzles :", [h[:8] for h in per_puzzle_hashes])
            print("Hash du livre (ordre-agnostique) :", b_hash)
            messagebox.showinfo("Terminé", f"PDF généré :\n{os.path.abspath(output_file)}")
        except Exception as e:
            messagebox.showerror("Erreur", f"Une erreur est survenue : {e}")

    show_menu()
    app.mainloop()


if __name__ == "__main__":
    launch_gui()
