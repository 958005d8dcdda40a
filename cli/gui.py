"""Tkinter desktop GUI for playing chess against the computer."""

from __future__ import annotations

import argparse
import logging
import tkinter as tk
from typing import Optional

from ai.sampling_ai import Difficulty, SamplingAI
from engine.board import Board
from engine.config import GameConfig
from engine.game import OpponentTurnTicket, TurnEngine
from engine.rules import Position

LIGHT_SQUARE = "#0f3460"
DARK_SQUARE = "#16213e"
SELECTED_SQUARE = "#e94560"
DESTINATION_SQUARE = "#53a8b6"


class ChessGUI(tk.Tk):
    """Board, captured-piece panel, and New Game button."""

    def __init__(self, difficulty: Difficulty, seed: Optional[int] = None, opponent_delay_ms: int = 500) -> None:
        super().__init__()
        self.title("Retro Chess")
        self.resizable(False, False)

        self.difficulty = difficulty
        self.opponent_delay_ms = opponent_delay_ms
        self.engine = TurnEngine(policy=SamplingAI(difficulty=difficulty, seed=seed))
        self._pending_after_id: Optional[str] = None

        self.turn_var = tk.StringVar(value="")
        self.captured_white_var = tk.StringVar(value="")
        self.captured_black_var = tk.StringVar(value="")

        self._build_layout()
        self._refresh_view()

    def _build_layout(self) -> None:
        outer = tk.Frame(self, padx=10, pady=10)
        outer.pack()

        tk.Label(outer, textvariable=self.turn_var, anchor="w").grid(row=0, column=0, columnspan=2, sticky="w")
        tk.Label(outer, text=f"Level: {self.difficulty.value.upper()}", anchor="w").grid(
            row=1, column=0, columnspan=2, sticky="w", pady=(0, 8)
        )

        captured = tk.Frame(outer, padx=6)
        captured.grid(row=2, column=0, sticky="n")
        tk.Label(captured, text="Captured").pack(anchor="w")
        tk.Label(captured, textvariable=self.captured_white_var, font=("Segoe UI Symbol", 14), wraplength=120).pack(
            anchor="w"
        )
        tk.Label(captured, textvariable=self.captured_black_var, font=("Segoe UI Symbol", 14), wraplength=120).pack(
            anchor="w"
        )

        self.buttons: list[list[tk.Button]] = []
        board_frame = tk.Frame(outer, bd=1, relief=tk.SOLID)
        board_frame.grid(row=2, column=1)
        for row in range(Board.rows):
            button_row: list[tk.Button] = []
            for col in range(Board.cols):
                btn = tk.Button(
                    board_frame,
                    text="",
                    width=3,
                    height=1,
                    font=("Segoe UI Symbol", 22),
                    fg="#f0f0f0",
                    command=lambda r=row, c=col: self._on_cell_click((r, c)),
                )
                btn.grid(row=row, column=col)
                button_row.append(btn)
            self.buttons.append(button_row)

        tk.Button(outer, text="New Game", command=self._new_game).grid(row=3, column=0, pady=(8, 0), sticky="w")
        tk.Button(outer, text="Quit", command=self.destroy).grid(row=3, column=1, pady=(8, 0), sticky="w")

    def _new_game(self) -> None:
        if self._pending_after_id is not None:
            self.after_cancel(self._pending_after_id)
            self._pending_after_id = None
        self.engine.reset()
        self._refresh_view()

    def _refresh_view(self) -> None:
        state = self.engine.state
        for row in range(Board.rows):
            for col in range(Board.cols):
                pos = (row, col)
                cell = state.board.get_cell(pos)
                bg = LIGHT_SQUARE if (row + col) % 2 == 0 else DARK_SQUARE
                if pos == state.selected:
                    bg = SELECTED_SQUARE
                elif pos in state.valid_moves:
                    bg = DESTINATION_SQUARE
                self.buttons[row][col].configure(text=cell.glyph if cell is not None else "", bg=bg)

        self.turn_var.set("Your turn" if state.white_to_move else "Computer thinking...")
        self.captured_white_var.set(" ".join(state.captured_by_white))
        self.captured_black_var.set(" ".join(state.captured_by_black))

    def _on_cell_click(self, pos: Position) -> None:
        before = self.engine.state
        after = self.engine.select_square(pos)
        self._refresh_view()
        if after.last_move is not before.last_move:
            ticket = self.engine.schedule_opponent_turn()
            if ticket is not None:
                self._pending_after_id = self.after(self.opponent_delay_ms, lambda: self._ai_turn(ticket))

    def _ai_turn(self, ticket: OpponentTurnTicket) -> None:
        self._pending_after_id = None
        if not self.engine.run_opponent_turn(ticket) and self.engine.opponent_turn_due():
            self.turn_var.set("Computer could not move. Start a new game.")
            return
        self._refresh_view()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chess desktop GUI")
    parser.add_argument("--config", type=str, default=None, help="Path to game config JSON")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=None, help="Opponent difficulty")
    parser.add_argument("--seed", type=int, default=None, help="Deterministic opponent seed")
    parser.add_argument("--log-level", default=None, help="Python logging level")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = GameConfig.load(args.config)
    log_level = (args.log_level or config.log_level).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
    app = ChessGUI(
        difficulty=Difficulty.parse(args.difficulty) if args.difficulty else config.difficulty,
        seed=args.seed if args.seed is not None else config.seed,
        opponent_delay_ms=config.opponent_delay_ms,
    )
    app.mainloop()


if __name__ == "__main__":
    main()
