"""Chess board grid and move record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from engine.pieces import BACK_RANK, Color, Kind, Piece
from engine.rules import BOARD_SIZE, Position, in_bounds

Cell = Optional[Piece]


@dataclass(frozen=True)
class Move:
    """A purely geometric move from one square to another."""

    from_pos: Position
    to_pos: Position

    def __str__(self) -> str:
        return f"{self.from_pos}->{self.to_pos}"


class Board:
    """8x8 chess board. Row 0 is black's back rank, row 7 is white's."""

    rows: int = BOARD_SIZE
    cols: int = BOARD_SIZE

    def __init__(self, grid: Optional[List[List[Cell]]] = None) -> None:
        if grid is None:
            grid = [[None for _ in range(self.cols)] for _ in range(self.rows)]
        if len(grid) != self.rows or any(len(row) != self.cols for row in grid):
            raise ValueError(f"Board grid must be {self.rows}x{self.cols}.")
        self.grid: List[List[Cell]] = [list(row) for row in grid]

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def standard(cls) -> "Board":
        """Build the standard chess starting position."""
        board = cls()
        for col, kind in enumerate(BACK_RANK):
            board.grid[0][col] = Piece(kind, Color.BLACK)
            board.grid[1][col] = Piece(Kind.PAWN, Color.BLACK)
            board.grid[6][col] = Piece(Kind.PAWN, Color.WHITE)
            board.grid[7][col] = Piece(kind, Color.WHITE)
        return board

    @classmethod
    def from_ascii(cls, text: str) -> "Board":
        """
        Parse a board from eight lines of eight characters.

        '.' marks an empty square; any other character is a FEN-style piece
        letter (uppercase white, lowercase black). Whitespace inside a line is
        ignored so rows may be written as "r n b q k b n r".
        """
        lines = [line.replace(" ", "") for line in text.strip().splitlines() if line.strip()]
        if len(lines) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(lines)}.")
        grid: List[List[Cell]] = []
        for line in lines:
            if len(line) != BOARD_SIZE:
                raise ValueError(f"Expected {BOARD_SIZE} columns in row {line!r}.")
            grid.append([None if ch == "." else Piece.from_letter(ch) for ch in line])
        return cls(grid)

    def clone(self) -> "Board":
        """Copy the grid so the new board shares no mutable state."""
        return Board(self.grid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __repr__(self) -> str:
        return f"Board(\n{self.render_ascii()}\n)"

    def iter_positions(self) -> Iterable[Position]:
        """Yield all board positions."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def get_cell(self, pos: Position) -> Cell:
        """Return cell content at an on-board position."""
        if not in_bounds(pos):
            raise IndexError(f"Position off board: {pos}")
        row, col = pos
        return self.grid[row][col]

    def set_cell(self, pos: Position, piece: Cell) -> None:
        if not in_bounds(pos):
            raise IndexError(f"Position off board: {pos}")
        row, col = pos
        self.grid[row][col] = piece

    def positions_of(self, color: Color) -> List[Position]:
        """Return squares occupied by color, in row-major order."""
        positions: List[Position] = []
        for pos in self.iter_positions():
            cell = self.get_cell(pos)
            if cell is not None and cell.color is color:
                positions.append(pos)
        return positions

    def find_king(self, color: Color) -> Optional[Position]:
        for pos in self.positions_of(color):
            cell = self.get_cell(pos)
            if cell is not None and cell.kind is Kind.KING:
                return pos
        return None

    def with_move(self, move: Move) -> Tuple["Board", Cell]:
        """
        Return a new board with the move applied and the captured occupant.

        No legality check is performed here; the turn engine validates moves
        against the move generator before calling this.
        """
        moving_piece = self.get_cell(move.from_pos)
        if moving_piece is None:
            raise ValueError(f"Source square {move.from_pos} is empty.")
        captured = self.get_cell(move.to_pos)
        board = self.clone()
        board.set_cell(move.to_pos, moving_piece)
        board.set_cell(move.from_pos, None)
        return board, captured

    def render_ascii(self) -> str:
        """Return a simple human-readable board representation."""
        lines: List[str] = []
        lines.append("   " + " ".join(str(c) for c in range(self.cols)))
        for row in range(self.rows):
            cells = ["." if cell is None else cell.letter for cell in self.grid[row]]
            lines.append(f"{row}  " + " ".join(cells))
        return "\n".join(lines)
