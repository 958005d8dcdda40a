"""Policy-vs-policy self-play for measuring opponent behaviour."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from ai.base_ai import BaseAI
from ai.sampling_ai import Difficulty, RandomAI, SamplingAI
from engine.game import GameState, apply_policy_move, initial_state
from engine.pieces import Color, Kind

LOGGER = logging.getLogger(__name__)


@dataclass
class EpisodeStats:
    """Summary from one self-play episode."""

    plies: int
    stalled_side: Optional[Color]
    king_captured_by: Optional[Color]
    white_captures: int
    black_captures: int

    @property
    def stalled(self) -> bool:
        return self.stalled_side is not None


@dataclass
class SelfPlayConfig:
    """Self-play run config."""

    max_plies: int = 300
    base_seed: Optional[int] = None
    log_every: int = 10


POLICY_KINDS: List[str] = [d.value for d in Difficulty] + ["random"]


def build_policy(kind: str, seed: Optional[int]) -> BaseAI:
    """Build a policy from a difficulty name or "random"."""
    if kind == "random":
        return RandomAI(seed=seed)
    return SamplingAI(difficulty=Difficulty.parse(kind), seed=seed)


def play_episode(white_ai: BaseAI, black_ai: BaseAI, max_plies: int = 300) -> EpisodeStats:
    """
    Play one game between two policies from the starting position.

    The game ends when a king is captured, when the side to move finds no
    move, or after max_plies.
    """
    state: GameState = initial_state()
    plies = 0
    stalled_side: Optional[Color] = None
    king_captured_by: Optional[Color] = None

    while plies < max_plies:
        mover = state.side_to_move
        actor = white_ai if mover is Color.WHITE else black_ai
        next_state = apply_policy_move(state, actor)
        if next_state is state:
            stalled_side = mover
            break
        state = next_state
        plies += 1
        if state.last_captured is not None and state.last_captured.kind is Kind.KING:
            king_captured_by = mover
            break

    return EpisodeStats(
        plies=plies,
        stalled_side=stalled_side,
        king_captured_by=king_captured_by,
        white_captures=len(state.captured_by_white),
        black_captures=len(state.captured_by_black),
    )


class SelfPlayRunner:
    """Runs policy-vs-policy matches, one policy kind per side."""

    def __init__(self, config: SelfPlayConfig) -> None:
        self.config = config

    def run_games(self, white_kind: str, black_kind: str, n_games: int) -> List[EpisodeStats]:
        results: List[EpisodeStats] = []
        for game_index in range(n_games):
            seed = None if self.config.base_seed is None else self.config.base_seed + game_index
            white_ai = build_policy(white_kind, seed=seed)
            black_ai = build_policy(black_kind, seed=None if seed is None else seed + 9973)
            stats = play_episode(white_ai, black_ai, max_plies=self.config.max_plies)
            results.append(stats)
            if (game_index + 1) % max(1, self.config.log_every) == 0:
                LOGGER.info(
                    "Self-play game %d/%d | plies=%d stalled=%s king_captured_by=%s",
                    game_index + 1,
                    n_games,
                    stats.plies,
                    stats.stalled_side.value if stats.stalled_side else None,
                    stats.king_captured_by.value if stats.king_captured_by else None,
                )
        return results

    @staticmethod
    def summarize(results: Sequence[EpisodeStats]) -> Dict[str, float]:
        if not results:
            return {"games": 0}
        plies = np.array([r.plies for r in results], dtype=np.float64)
        stalls = np.array([r.stalled for r in results], dtype=np.float64)
        white_caps = np.array([r.white_captures for r in results], dtype=np.float64)
        black_caps = np.array([r.black_captures for r in results], dtype=np.float64)
        return {
            "games": len(results),
            "mean_plies": float(plies.mean()),
            "stall_rate": float(stalls.mean()),
            "white_king_wins": sum(1 for r in results if r.king_captured_by is Color.WHITE),
            "black_king_wins": sum(1 for r in results if r.king_captured_by is Color.BLACK),
            "mean_white_captures": float(white_caps.mean()),
            "mean_black_captures": float(black_caps.mean()),
        }
