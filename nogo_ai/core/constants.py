"""
Constants for the NoGo game.

This module defines the piece colors, placement verdicts and board limits
used throughout the NoGo implementation.
"""
from enum import Enum, IntEnum
from typing import Dict, Final, Tuple


class Piece(IntEnum):
    """Enum representing the content of a board point (and the side to move)."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> 'Piece':
        """The other color. EMPTY has no opponent and maps to itself."""
        if self is Piece.BLACK:
            return Piece.WHITE
        if self is Piece.WHITE:
            return Piece.BLACK
        return Piece.EMPTY

    @classmethod
    def from_role(cls, role: str) -> 'Piece':
        """
        Convert a role name ("black" or "white") to a piece color.

        Args:
            role: Role name, case-insensitive

        Returns:
            The matching color

        Raises:
            ValueError: If the role does not name a color
        """
        try:
            color = cls[role.strip().upper()]
        except KeyError:
            raise ValueError(f"invalid role: {role}") from None
        if color is cls.EMPTY:
            raise ValueError(f"invalid role: {role}")
        return color


class PlaceResult(Enum):
    """Verdict of a placement attempt. Only LEGAL mutates the board."""
    LEGAL = "legal"
    ILLEGAL_OUT_OF_RANGE = "out of range"
    ILLEGAL_OCCUPIED = "occupied"
    ILLEGAL_SUICIDE = "self-capture"
    ILLEGAL_CAPTURE = "capture"
    ILLEGAL_COLOR = "not a color"

    @property
    def is_legal(self) -> bool:
        return self is PlaceResult.LEGAL


# Standard NoGo board
DEFAULT_BOARD_WIDTH: Final[int] = 9
DEFAULT_BOARD_HEIGHT: Final[int] = 9

# Orthogonal neighbour offsets as (dx, dy)
NEIGHBOUR_OFFSETS: Final[Tuple[Tuple[int, int], ...]] = ((0, -1), (-1, 0), (1, 0), (0, 1))

# Characters that may not appear in an agent name
INVALID_NAME_CHARS: Final[str] = "[]():; "

# Column labels, Go style (no "I")
COLUMN_LABELS: Final[str] = "ABCDEFGHJKLMNOPQRSTUVWXYZ"

# Symbols for terminal display
PIECE_SYMBOLS: Final[Dict[Piece, str]] = {
    Piece.EMPTY: ".",
    Piece.BLACK: "X",
    Piece.WHITE: "O",
}
