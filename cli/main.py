"""CLI entrypoint for playing chess against the computer."""

from __future__ import annotations

import argparse
import logging
import time
from typing import Optional

from ai.sampling_ai import Difficulty, SamplingAI
from engine.config import GameConfig
from engine.game import GameState, TurnEngine
from engine.movegen import generate_moves
from engine.rules import Position, in_bounds

HELP_TEXT = "Commands: <row> <col> (select / move) | moves <row> <col> | board | reset | help | quit"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play chess in the terminal against the computer.")
    parser.add_argument("--config", type=str, default=None, help="Path to game config JSON")
    parser.add_argument(
        "--difficulty",
        type=str,
        default=None,
        choices=[d.value for d in Difficulty],
        help="Opponent difficulty (overrides config)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Deterministic opponent seed")
    parser.add_argument("--log-level", type=str, default=None, help="Python logging level")
    return parser.parse_args()


def parse_square(parts: list[str]) -> Optional[Position]:
    if len(parts) != 2:
        return None
    pos = (int(parts[0]), int(parts[1]))
    return pos if in_bounds(pos) else None


def describe(state: GameState) -> str:
    turn = "white (you)" if state.white_to_move else "black (computer)"
    lines = [
        f"Turn: {turn} | Status: {state.status.value}",
        f"Captured by white: {' '.join(state.captured_by_white) or '-'}",
        f"Captured by black: {' '.join(state.captured_by_black) or '-'}",
    ]
    if state.selected is not None:
        lines.append(f"Selected {state.selected}; destinations: {list(state.valid_moves)}")
    return "\n".join(lines)


def run_cli() -> None:
    args = parse_args()
    config = GameConfig.load(args.config)
    difficulty = Difficulty.parse(args.difficulty) if args.difficulty else config.difficulty
    seed = args.seed if args.seed is not None else config.seed
    log_level = (args.log_level or config.log_level).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
    logger = logging.getLogger("chess.cli")

    engine = TurnEngine(policy=SamplingAI(difficulty=difficulty, seed=seed))
    logger.info("Starting game. Human=white Computer=black Difficulty=%s", difficulty.value)
    print(HELP_TEXT)

    while True:
        state = engine.state
        print()
        print(state.board.render_ascii())
        print(describe(state))

        user_input = input("Your move> ").strip()
        command = user_input.lower()
        if command in {"quit", "exit"}:
            print("Exiting game.")
            break
        if command == "help":
            print(HELP_TEXT)
            continue
        if command == "reset":
            engine.reset()
            print("New game started.")
            continue
        if command == "board":
            continue

        parts = command.split()
        try:
            if parts and parts[0] == "moves":
                pos = parse_square(parts[1:])
                if pos is None:
                    print("Invalid square.")
                    continue
                print(f"Destinations from {pos}: {generate_moves(state.board, pos)}")
                continue

            pos = parse_square(parts)
        except ValueError:
            print("Invalid numeric input.")
            continue
        if pos is None:
            print("Invalid command format.")
            continue

        new_state = engine.select_square(pos)
        if new_state.last_move is not state.last_move:
            if new_state.last_captured is not None:
                print(f"You captured: {new_state.last_captured.glyph}")
            ticket = engine.schedule_opponent_turn()
            if ticket is None:
                continue
            time.sleep(config.opponent_delay_ms / 1000.0)
            if engine.run_opponent_turn(ticket):
                reply = engine.state
                print(f"Computer move: {reply.last_move}")
                if reply.last_captured is not None:
                    print(f"Computer captured: {reply.last_captured.glyph}")
            else:
                print("Computer could not find a move; the turn is stuck until you reset.")


if __name__ == "__main__":
    run_cli()
