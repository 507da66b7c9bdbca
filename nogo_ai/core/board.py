"""
Board representation and placement rules for NoGo.

This module defines the Board class, a value-typed game position:
- A numpy grid of points (EMPTY, BLACK, WHITE)
- The side to move
- Legality-checked placement following the NoGo rules

A placement is illegal if the point is occupied, if the placed stone's group
is left without liberties (self-capture), or if any adjacent opponent group
loses its last liberty (capturing is forbidden in NoGo).
"""
from __future__ import annotations
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

import numpy as np

from nogo_ai.core.constants import (
    Piece, PlaceResult, DEFAULT_BOARD_WIDTH, DEFAULT_BOARD_HEIGHT,
    NEIGHBOUR_OFFSETS, COLUMN_LABELS, PIECE_SYMBOLS
)

_EMPTY = int(Piece.EMPTY)


@lru_cache(maxsize=None)
def neighbour_table(width: int, height: int) -> Tuple[Tuple[int, ...], ...]:
    """
    Precompute the orthogonal neighbours of every position.

    Args:
        width: Board width
        height: Board height

    Returns:
        Tuple indexed by position, each entry a tuple of neighbour positions
    """
    table = []
    for position in range(width * height):
        x, y = position % width, position // width
        neighbours = []
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height:
                neighbours.append(ny * width + nx)
        table.append(tuple(neighbours))
    return tuple(table)


class Board:
    """
    A single NoGo position.

    Points are addressed by a flat position index ``y * width + x``.
    Copies are cheap full-state copies, so callers can try a placement on a
    disposable copy without touching the original.
    """

    def __init__(
        self,
        width: int = DEFAULT_BOARD_WIDTH,
        height: int = DEFAULT_BOARD_HEIGHT,
        turn: Piece = Piece.BLACK,
    ):
        """
        Create an empty board.

        Args:
            width: Number of columns
            height: Number of rows
            turn: Side to move first
        """
        if width <= 0 or height <= 0:
            raise ValueError("board dimensions must be positive")
        if width > len(COLUMN_LABELS):
            raise ValueError(f"board width must be at most {len(COLUMN_LABELS)}")
        if turn not in (Piece.BLACK, Piece.WHITE):
            raise ValueError("the side to move must be BLACK or WHITE")

        self.width = width
        self.height = height
        self.turn = Piece(turn)
        self.ply = 0
        self._cells = np.zeros(width * height, dtype=np.int8)
        self._neighbours = neighbour_table(width, height)

    @classmethod
    def from_rows(cls, rows: Sequence[str], turn: Piece = Piece.BLACK) -> 'Board':
        """
        Build a position from text rows, top row first.

        Each character is one point: ``.`` empty, ``X`` black, ``O`` white.
        Whitespace is ignored. Stones are set directly, without legality
        checks, so any arrangement can be described.

        Args:
            rows: Row strings of equal length
            turn: Side to move

        Returns:
            Board holding the position
        """
        cleaned = ["".join(row.split()) for row in rows]
        if not cleaned or any(len(row) != len(cleaned[0]) for row in cleaned):
            raise ValueError("rows must be non-empty and of equal length")

        symbols = {symbol: piece for piece, symbol in PIECE_SYMBOLS.items()}
        board = cls(width=len(cleaned[0]), height=len(cleaned), turn=turn)
        for y, row in enumerate(cleaned):
            for x, char in enumerate(row.upper()):
                if char not in symbols:
                    raise ValueError(f"unknown board symbol: {char!r}")
                board._cells[y * board.width + x] = int(symbols[char])
        return board

    @property
    def size(self) -> int:
        """Number of points on the board."""
        return self.width * self.height

    @property
    def grid(self) -> np.ndarray:
        """A (height, width) copy of the points."""
        return self._cells.reshape(self.height, self.width).copy()

    def copy(self) -> 'Board':
        """Return an independent copy of this position."""
        other = Board.__new__(Board)
        other.width = self.width
        other.height = self.height
        other.turn = self.turn
        other.ply = self.ply
        other._cells = self._cells.copy()
        other._neighbours = self._neighbours
        return other

    def __getitem__(self, position: int) -> Piece:
        return Piece(int(self._cells[position]))

    def position_of(self, x: int, y: int) -> int:
        """Convert column/row coordinates to a position index."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"coordinates ({x}, {y}) are off the board")
        return y * self.width + x

    def coordinates_of(self, position: int) -> Tuple[int, int]:
        """Convert a position index to (x, y) coordinates."""
        return position % self.width, position // self.width

    def label(self, position: int) -> str:
        """Go-style label of a position, e.g. ``C7`` (rows counted from the bottom)."""
        x, y = self.coordinates_of(position)
        return f"{COLUMN_LABELS[x]}{self.height - y}"

    def parse_label(self, text: str) -> int:
        """
        Convert a Go-style label back to a position index.

        Raises:
            ValueError: If the label is malformed or off the board
        """
        text = text.strip().upper()
        if len(text) < 2 or text[0] not in COLUMN_LABELS or not text[1:].isdigit():
            raise ValueError(f"malformed coordinate: {text!r}")
        x = COLUMN_LABELS.index(text[0])
        y = self.height - int(text[1:])
        return self.position_of(x, y)

    def place(self, position: int, color: Optional[Piece] = None) -> PlaceResult:
        """
        Attempt to place a stone.

        The board is modified only when the placement is legal; in that case
        the turn passes to the opponent of the placed color.

        Args:
            position: Position index of the point
            color: Color to place (defaults to the side to move)

        Returns:
            The placement verdict
        """
        if color is None:
            color = self.turn
        if color not in (Piece.BLACK, Piece.WHITE):
            return PlaceResult.ILLEGAL_COLOR
        if not 0 <= position < self.size:
            return PlaceResult.ILLEGAL_OUT_OF_RANGE

        cells = self._cells
        if cells[position] != _EMPTY:
            return PlaceResult.ILLEGAL_OCCUPIED

        cells[position] = int(color)
        opponent = int(Piece(color).opponent)
        for neighbour in self._neighbours[position]:
            if cells[neighbour] == opponent and not self._has_liberty(neighbour):
                cells[position] = _EMPTY
                return PlaceResult.ILLEGAL_CAPTURE
        if not self._has_liberty(position):
            cells[position] = _EMPTY
            return PlaceResult.ILLEGAL_SUICIDE

        self.turn = Piece(color).opponent
        self.ply += 1
        return PlaceResult.LEGAL

    def is_legal(self, position: int, color: Optional[Piece] = None) -> bool:
        """Check a placement on a disposable copy."""
        return self.copy().place(position, color).is_legal

    def legal_moves(self, color: Optional[Piece] = None) -> List[int]:
        """
        List every position where ``color`` (default: side to move) may play.

        Returns:
            Legal positions in ascending order
        """
        return [p for p in range(self.size) if self.is_legal(p, color)]

    def count(self, piece: Piece) -> int:
        """Number of points holding ``piece``."""
        return int(np.count_nonzero(self._cells == piece))

    def _has_liberty(self, position: int) -> bool:
        """Whether the group containing ``position`` touches an empty point."""
        cells = self._cells
        neighbours = self._neighbours
        color = cells[position]
        seen = {position}
        stack = [position]
        while stack:
            current = stack.pop()
            for neighbour in neighbours[current]:
                value = cells[neighbour]
                if value == _EMPTY:
                    return True
                if value == color and neighbour not in seen:
                    seen.add(neighbour)
                    stack.append(neighbour)
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.turn == other.turn
                and np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash((self.width, self.height, int(self.turn), self._cells.tobytes()))

    def __str__(self) -> str:
        header = "   " + " ".join(COLUMN_LABELS[:self.width])
        lines = [header]
        for y in range(self.height):
            row = self._cells[y * self.width:(y + 1) * self.width]
            symbols = " ".join(PIECE_SYMBOLS[Piece(int(v))] for v in row)
            lines.append(f"{self.height - y:>2} {symbols}")
        lines.append(f"{self.turn.name.lower()} to move")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (f"Board(width={self.width}, height={self.height}, "
                f"turn={self.turn.name}, ply={self.ply})")
