"""Base opponent policy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from engine.board import Board, Move
from engine.pieces import Color


class BaseAI(ABC):
    """Abstract move selection contract."""

    @abstractmethod
    def choose_move(self, board: Board, color: Color) -> Optional[Move]:
        """Choose a move for color, or None when no move was found."""
        raise NotImplementedError
