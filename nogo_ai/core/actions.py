"""
Actions for the NoGo game.

NoGo has a single kind of action: placing a stone of a given color on a
given point. There is no pass; a side with no legal placement loses.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nogo_ai.core.constants import Piece, PlaceResult

if TYPE_CHECKING:
    from nogo_ai.core.board import Board


@dataclass(frozen=True)
class Place:
    """
    Placement of a ``color`` stone at ``position``.

    Applying a placement does not require the board to agree on whose turn
    it is: the stone is placed for ``color`` and the turn then passes to its
    opponent. This is what lets the search enumerate candidate moves for
    either side.
    """
    position: int
    color: Piece

    def __post_init__(self):
        if self.position < 0:
            raise ValueError(f"position must be non-negative, got {self.position}")
        if self.color not in (Piece.BLACK, Piece.WHITE):
            raise ValueError(f"a placement needs a stone color, got {self.color!r}")
        object.__setattr__(self, "color", Piece(self.color))

    def apply(self, board: 'Board') -> PlaceResult:
        """
        Apply the placement to a board.

        The board is left untouched unless the result is LEGAL.

        Args:
            board: Board to modify

        Returns:
            The placement verdict
        """
        return board.place(self.position, self.color)

    def to_dict(self) -> dict:
        return {"position": self.position, "color": self.color.name.lower()}

    @classmethod
    def from_dict(cls, data: dict) -> 'Place':
        return cls(position=int(data["position"]), color=Piece.from_role(data["color"]))

    def __str__(self) -> str:
        return f"{self.color.name.lower()}@{self.position}"
