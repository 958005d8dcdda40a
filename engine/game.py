"""Turn engine: authoritative game state and its transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from ai.base_ai import BaseAI
from engine.board import Board, Move
from engine.movegen import generate_moves
from engine.pieces import Color, Piece
from engine.rules import Position, in_bounds

LOGGER = logging.getLogger(__name__)

HUMAN_COLOR = Color.WHITE
OPPONENT_COLOR = HUMAN_COLOR.opponent()


class GameStatus(str, Enum):
    """Game status. Only PLAYING is ever reached; the rest are reserved."""

    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    DRAW = "draw"


@dataclass(frozen=True, eq=True)
class GameState:
    """Immutable snapshot of a game. Every transition builds a new one."""

    # Board is mutable and unhashable, so states compare by value only.
    __hash__ = None  # type: ignore[assignment]

    board: Board = field(default_factory=Board.standard)
    white_to_move: bool = True
    status: GameStatus = GameStatus.PLAYING
    captured_by_white: Tuple[str, ...] = ()
    captured_by_black: Tuple[str, ...] = ()
    selected: Optional[Position] = None
    valid_moves: Tuple[Position, ...] = ()
    last_move: Optional[Move] = None
    last_captured: Optional[Piece] = None

    @property
    def side_to_move(self) -> Color:
        return Color.WHITE if self.white_to_move else Color.BLACK

    @property
    def captured(self) -> Dict[Color, Tuple[str, ...]]:
        """Glyphs captured by each color, in capture order."""
        return {Color.WHITE: self.captured_by_white, Color.BLACK: self.captured_by_black}


def initial_state() -> GameState:
    """Return a fresh game at the standard starting position."""
    return GameState(board=Board.standard())


def apply_move(state: GameState, from_pos: Position, to_pos: Position) -> GameState:
    """
    Apply a move for the side to move.

    The move is rejected, returning state unchanged, unless from_pos holds a
    piece of the side to move and to_pos is one of its generated
    destinations. Leaving one's own king attacked is not checked.
    """
    mover = state.side_to_move
    piece = state.board.get_cell(from_pos) if in_bounds(from_pos) else None
    if piece is None or piece.color is not mover:
        LOGGER.debug("Rejected move %s->%s: no %s piece on source", from_pos, to_pos, mover.value)
        return state
    if to_pos not in generate_moves(state.board, from_pos):
        LOGGER.debug("Rejected move %s->%s: destination not reachable", from_pos, to_pos)
        return state

    move = Move(from_pos=from_pos, to_pos=to_pos)
    board, captured = state.board.with_move(move)
    captured_by_white = state.captured_by_white
    captured_by_black = state.captured_by_black
    if captured is not None:
        if mover is Color.WHITE:
            captured_by_white = captured_by_white + (captured.glyph,)
        else:
            captured_by_black = captured_by_black + (captured.glyph,)

    LOGGER.debug(
        "%s moved %s %s%s",
        mover.value,
        piece.kind.value,
        move,
        f" capturing {captured.kind.value}" if captured is not None else "",
    )
    return replace(
        state,
        board=board,
        white_to_move=not state.white_to_move,
        captured_by_white=captured_by_white,
        captured_by_black=captured_by_black,
        selected=None,
        valid_moves=(),
        last_move=move,
        last_captured=captured,
    )


def select_or_move(state: GameState, pos: Position) -> GameState:
    """
    Handle a click on pos by the human player.

    With a selection pending, clicking one of its destinations applies the
    move. Otherwise clicking one of the human's pieces selects it, and
    anything else clears the selection. Nothing happens unless it is the
    human's turn and the game is playing.
    """
    if state.side_to_move is not HUMAN_COLOR or state.status is not GameStatus.PLAYING:
        return state
    if not in_bounds(pos):
        return state

    if state.selected is not None and pos in state.valid_moves:
        return apply_move(state, state.selected, pos)

    piece = state.board.get_cell(pos)
    if piece is not None and piece.color is HUMAN_COLOR:
        return replace(state, selected=pos, valid_moves=tuple(generate_moves(state.board, pos)))
    if state.selected is None:
        return state
    return replace(state, selected=None, valid_moves=())


def apply_policy_move(state: GameState, policy: BaseAI) -> GameState:
    """Let policy move for the side to move; unchanged if it finds no move."""
    mover = state.side_to_move
    move = policy.choose_move(state.board, mover)
    if move is None:
        return state
    return apply_move(state, move.from_pos, move.to_pos)


def apply_opponent_turn(state: GameState, policy: BaseAI) -> GameState:
    """
    Play the computer opponent's move.

    A no-op unless it is the opponent's turn and the game is playing. When
    the policy finds no move the turn does not advance.
    """
    if state.side_to_move is not OPPONENT_COLOR or state.status is not GameStatus.PLAYING:
        return state
    next_state = apply_policy_move(state, policy)
    if next_state is state:
        LOGGER.warning("Opponent found no move; turn stays with %s.", OPPONENT_COLOR.value)
    return next_state


@dataclass(frozen=True)
class OpponentTurnTicket:
    """Handle for a scheduled opponent turn, valid until the next reset."""

    generation: int


class TurnEngine:
    """Owns the authoritative game state and the opponent policy."""

    def __init__(self, policy: BaseAI) -> None:
        self.policy = policy
        self.state = initial_state()
        self._generation = 0

    def select_square(self, pos: Position) -> GameState:
        self.state = select_or_move(self.state, pos)
        return self.state

    def reset(self) -> GameState:
        """Start a new game and invalidate any scheduled opponent turn."""
        self._generation += 1
        self.state = initial_state()
        LOGGER.info("Game reset (generation %d).", self._generation)
        return self.state

    def opponent_turn_due(self) -> bool:
        return self.state.side_to_move is OPPONENT_COLOR and self.state.status is GameStatus.PLAYING

    def schedule_opponent_turn(self) -> Optional[OpponentTurnTicket]:
        """Return a ticket for the opponent's pending turn, or None if not due."""
        if not self.opponent_turn_due():
            return None
        return OpponentTurnTicket(generation=self._generation)

    def run_opponent_turn(self, ticket: OpponentTurnTicket) -> bool:
        """Apply the opponent's move if ticket is still current. Returns True if a move was made."""
        if ticket.generation != self._generation:
            LOGGER.info("Discarding stale opponent turn (generation %d).", ticket.generation)
            return False
        previous = self.state
        self.state = apply_opponent_turn(previous, self.policy)
        return self.state is not previous
