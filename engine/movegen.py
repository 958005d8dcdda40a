"""Pseudo-legal move generation for chess pieces."""

from __future__ import annotations

from typing import List, Sequence

from engine.board import Board, Move
from engine.pieces import Color, Kind, Piece
from engine.rules import (
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    PAWN_DIRECTION,
    PAWN_START_ROW,
    SLIDING_DIRECTIONS,
    Offset,
    Position,
    in_bounds,
    offset,
)


def generate_moves(board: Board, pos: Position) -> List[Position]:
    """
    Return every square the piece on pos may move to, ignoring check.

    An empty or off-board origin yields an empty list. Results are always on
    the board and never occupied by a piece of the mover's color.
    """
    if not in_bounds(pos):
        return []
    piece = board.get_cell(pos)
    if piece is None:
        return []

    if piece.kind is Kind.PAWN:
        return _pawn_moves(board, pos, piece)
    if piece.kind is Kind.KNIGHT:
        return _step_moves(board, pos, piece, KNIGHT_OFFSETS)
    if piece.kind is Kind.KING:
        return _step_moves(board, pos, piece, KING_OFFSETS)
    return _sliding_moves(board, pos, piece, SLIDING_DIRECTIONS[piece.kind])


def _pawn_moves(board: Board, pos: Position, piece: Piece) -> List[Position]:
    moves: List[Position] = []
    direction = PAWN_DIRECTION[piece.color]

    one_step = offset(pos, (direction, 0))
    if in_bounds(one_step) and board.get_cell(one_step) is None:
        moves.append(one_step)
        # Keyed on the start row, not on whether the pawn has moved before.
        two_step = offset(pos, (direction, 0), steps=2)
        if pos[0] == PAWN_START_ROW[piece.color] and in_bounds(two_step) and board.get_cell(two_step) is None:
            moves.append(two_step)

    for side_step in (-1, 1):
        target_pos = offset(pos, (direction, side_step))
        if not in_bounds(target_pos):
            continue
        target = board.get_cell(target_pos)
        if target is not None and target.color is not piece.color:
            moves.append(target_pos)
    return moves


def _step_moves(board: Board, pos: Position, piece: Piece, offsets: Sequence[Offset]) -> List[Position]:
    moves: List[Position] = []
    for delta in offsets:
        target_pos = offset(pos, delta)
        if not in_bounds(target_pos):
            continue
        target = board.get_cell(target_pos)
        if target is None or target.color is not piece.color:
            moves.append(target_pos)
    return moves


def _sliding_moves(board: Board, pos: Position, piece: Piece, directions: Sequence[Offset]) -> List[Position]:
    moves: List[Position] = []
    for delta in directions:
        target_pos = offset(pos, delta)
        while in_bounds(target_pos):
            target = board.get_cell(target_pos)
            if target is None:
                moves.append(target_pos)
                target_pos = offset(target_pos, delta)
                continue
            if target.color is not piece.color:
                moves.append(target_pos)
            break
    return moves


def generate_all_moves(board: Board, color: Color) -> List[Move]:
    """Generate every pseudo-legal move for color."""
    moves: List[Move] = []
    for from_pos in board.positions_of(color):
        for to_pos in generate_moves(board, from_pos):
            moves.append(Move(from_pos=from_pos, to_pos=to_pos))
    return moves


def is_king_safe(board: Board, color: Color) -> bool:
    """
    Return False if any opposing piece attacks color's king.

    Extension point for check detection. The turn engine does not call it,
    so moves that leave a king attacked remain playable.
    """
    king_pos = board.find_king(color)
    if king_pos is None:
        return True
    for move in generate_all_moves(board, color.opponent()):
        if move.to_pos == king_pos:
            return False
    return True
