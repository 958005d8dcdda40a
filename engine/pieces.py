"""Piece definitions and display glyphs for chess."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class Color(str, Enum):
    """Player color."""

    WHITE = "white"
    BLACK = "black"

    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class Kind(str, Enum):
    """Chess piece kinds."""

    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


KIND_LETTER: Dict[Kind, str] = {
    Kind.PAWN: "p",
    Kind.KNIGHT: "n",
    Kind.BISHOP: "b",
    Kind.ROOK: "r",
    Kind.QUEEN: "q",
    Kind.KING: "k",
}

LETTER_KIND: Dict[str, Kind] = {letter: kind for kind, letter in KIND_LETTER.items()}

WHITE_GLYPHS: Dict[Kind, str] = {
    Kind.KING: "♔",
    Kind.QUEEN: "♕",
    Kind.ROOK: "♖",
    Kind.BISHOP: "♗",
    Kind.KNIGHT: "♘",
    Kind.PAWN: "♙",
}

BLACK_GLYPHS: Dict[Kind, str] = {
    Kind.KING: "♚",
    Kind.QUEEN: "♛",
    Kind.ROOK: "♜",
    Kind.BISHOP: "♝",
    Kind.KNIGHT: "♞",
    Kind.PAWN: "♟",
}

BACK_RANK: List[Kind] = [
    Kind.ROOK,
    Kind.KNIGHT,
    Kind.BISHOP,
    Kind.QUEEN,
    Kind.KING,
    Kind.BISHOP,
    Kind.KNIGHT,
    Kind.ROOK,
]


@dataclass(frozen=True)
class Piece:
    """A chess piece owned by one color."""

    kind: Kind
    color: Color

    @property
    def letter(self) -> str:
        """FEN-style letter: uppercase for white, lowercase for black."""
        letter = KIND_LETTER[self.kind]
        return letter.upper() if self.color is Color.WHITE else letter

    @property
    def glyph(self) -> str:
        glyphs = WHITE_GLYPHS if self.color is Color.WHITE else BLACK_GLYPHS
        return glyphs[self.kind]

    @classmethod
    def from_letter(cls, letter: str) -> "Piece":
        kind = LETTER_KIND.get(letter.lower())
        if kind is None:
            raise ValueError(f"Unknown piece letter: {letter!r}")
        color = Color.WHITE if letter.isupper() else Color.BLACK
        return cls(kind=kind, color=color)
