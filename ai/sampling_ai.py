"""Bounded random-sampling opponents with a difficulty-keyed capture bias."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Dict, List, Optional

from ai.base_ai import BaseAI
from engine.board import Board, Move
from engine.movegen import generate_all_moves, generate_moves
from engine.pieces import Color
from engine.rules import Position

LOGGER = logging.getLogger(__name__)


class Difficulty(str, Enum):
    """Opponent difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "str | Difficulty") -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r}; expected one of: {choices}") from None


ATTEMPT_BUDGET: Dict[Difficulty, int] = {
    Difficulty.EASY: 5,
    Difficulty.MEDIUM: 10,
    Difficulty.HARD: 20,
}


class SamplingAI(BaseAI):
    """
    Opponent that samples pieces at random until one can move.

    Each attempt picks one of the color's occupied squares uniformly. The
    first sampled piece with any destination moves: on hard it always takes
    a capture when one exists, on medium it takes a capture on a fair coin
    flip, otherwise it picks uniformly among all its destinations. If the
    attempt budget runs out first, no move is returned and the caller's turn
    does not advance.
    """

    def __init__(
        self,
        difficulty: "str | Difficulty" = Difficulty.MEDIUM,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.difficulty = Difficulty.parse(difficulty)
        self.max_attempts = ATTEMPT_BUDGET[self.difficulty]
        self._rng = rng if rng is not None else random.Random(seed)

    def choose_move(self, board: Board, color: Color) -> Optional[Move]:
        candidates = board.positions_of(color)
        if not candidates:
            LOGGER.debug("No %s pieces on board; nothing to sample.", color.value)
            return None

        for attempt in range(1, self.max_attempts + 1):
            origin = self._rng.choice(candidates)
            destinations = generate_moves(board, origin)
            if not destinations:
                continue

            to_pos = self._pick_destination(board, destinations)
            move = Move(from_pos=origin, to_pos=to_pos)
            LOGGER.debug(
                "Sampling AI (%s) chose %s on attempt %d/%d",
                self.difficulty.value,
                move,
                attempt,
                self.max_attempts,
            )
            return move

        LOGGER.debug("Sampling AI (%s) exhausted %d attempts", self.difficulty.value, self.max_attempts)
        return None

    def _pick_destination(self, board: Board, destinations: List[Position]) -> Position:
        captures = [pos for pos in destinations if board.get_cell(pos) is not None]
        if self.difficulty is Difficulty.HARD and captures:
            return self._rng.choice(captures)
        if self.difficulty is Difficulty.MEDIUM and captures and self._rng.random() > 0.5:
            return self._rng.choice(captures)
        return self._rng.choice(destinations)


class RandomAI(BaseAI):
    """Picks a uniformly random move among all of a color's moves."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_move(self, board: Board, color: Color) -> Optional[Move]:
        moves = generate_all_moves(board, color)
        return self._rng.choice(moves) if moves else None
