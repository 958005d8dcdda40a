"""Geometry helpers and movement constants for chess."""

from __future__ import annotations

from typing import Dict, List, Tuple

from engine.pieces import Color, Kind

BOARD_SIZE = 8

Position = Tuple[int, int]
Offset = Tuple[int, int]

DIAGONALS: List[Offset] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
ORTHOGONALS: List[Offset] = [(-1, 0), (1, 0), (0, -1), (0, 1)]
ALL_DIRECTIONS: List[Offset] = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]

KNIGHT_OFFSETS: List[Offset] = [(-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1)]
KING_OFFSETS: List[Offset] = ALL_DIRECTIONS

SLIDING_DIRECTIONS: Dict[Kind, List[Offset]] = {
    Kind.BISHOP: DIAGONALS,
    Kind.ROOK: ORTHOGONALS,
    Kind.QUEEN: ALL_DIRECTIONS,
}

# White advances toward row 0, black toward row 7.
PAWN_DIRECTION: Dict[Color, int] = {
    Color.WHITE: -1,
    Color.BLACK: 1,
}

PAWN_START_ROW: Dict[Color, int] = {
    Color.WHITE: 6,
    Color.BLACK: 1,
}


def in_bounds(pos: Position) -> bool:
    """Return whether a position is on the 8x8 board."""
    row, col = pos
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def offset(pos: Position, delta: Offset, steps: int = 1) -> Position:
    """Return pos shifted by delta repeated steps times (may be off-board)."""
    return (pos[0] + delta[0] * steps, pos[1] + delta[1] * steps)
