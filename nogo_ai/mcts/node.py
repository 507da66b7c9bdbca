"""
Monte Carlo Tree Search Node for NoGo.

This module defines the MCTSNode class which represents a node in the MCTS tree.
Each node records the placement that led to it, which color played it, and
the visit/win statistics of the simulations that passed through it. Nodes do
not store positions: the search replays moves on a per-iteration board copy.
"""
from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING
import math

from nogo_ai.core.actions import Place
from nogo_ai.core.constants import Piece
from nogo_ai.mcts.config import MCTSConfig

if TYPE_CHECKING:
    from nogo_ai.core.board import Board


class MCTSNode:
    """
    A node in the Monte Carlo Tree Search.

    Children are owned by their parent and created all at once at expansion;
    ``parent`` is a plain back reference used for backpropagation and the
    exploration term. A node without children is a frontier node.
    """

    __slots__ = ("parent", "children", "move", "mover", "depth", "visits", "wins")

    def __init__(
        self,
        parent: Optional['MCTSNode'] = None,
        move: Optional[Place] = None,
        mover: Piece = Piece.BLACK,
    ):
        """
        Initialize an MCTS node.

        Args:
            parent: The parent node (None for root)
            move: The placement that led to this node (None for root)
            mover: The color that made ``move``
        """
        self.parent = parent
        self.children: List[MCTSNode] = []
        self.move = move
        self.mover = mover
        self.depth = parent.depth + 1 if parent is not None else 0

        # Node statistics
        self.visits = 0
        self.wins = 0

    def is_frontier(self) -> bool:
        """
        Check if this node is on the boundary of the explored tree.

        Returns:
            True if the node has no children yet
        """
        return not self.children

    @property
    def win_rate(self) -> float:
        """Fraction of simulations through this node that were won (0 if unvisited)."""
        return self.wins / self.visits if self.visits else 0.0

    def selection_score(
        self,
        exploration_weight: float = math.sqrt(2),
        use_parent_wins: bool = True,
    ) -> float:
        """
        Calculate the UCT score of this node.

        UCT = wins / visits + c * sqrt(ln(N) / visits)

        where N is the parent's win count (``use_parent_wins``) or the
        parent's visit count. N below 1 is treated as 1, which makes the
        exploration term 0.

        Args:
            exploration_weight: Exploration constant c
            use_parent_wins: Use the parent's wins rather than its visits for N

        Returns:
            UCT score, or infinity for a node that was never visited
        """
        # If the node has never been visited, treat it as having infinite value
        if self.visits == 0:
            return MCTSConfig.INFINITE_VALUE

        exploitation = self.wins / self.visits

        if self.parent is None:
            return exploitation
        parent_count = self.parent.wins if use_parent_wins else self.parent.visits
        exploration = math.sqrt(math.log(max(parent_count, 1)) / self.visits)

        return exploitation + exploration_weight * exploration

    def legal_move_count(self, board: 'Board') -> int:
        """
        Count the placements available to the side to move.

        Every candidate is tried on a disposable copy, so ``board`` is left
        unchanged.

        Args:
            board: Position to examine

        Returns:
            Number of legal placements
        """
        color = board.turn
        count = 0
        for position in range(board.size):
            if Place(position, color).apply(board.copy()).is_legal:
                count += 1
        return count

    def add_child(self, move: Place) -> 'MCTSNode':
        """Create and attach a child reached by ``move``, played by the opponent of this node's mover."""
        child = MCTSNode(parent=self, move=move, mover=self.mover.opponent)
        self.children.append(child)
        return child

    def update(self, won: bool) -> None:
        """
        Record one simulation result.

        Args:
            won: Whether the result counts as a win for this node
        """
        self.visits += 1
        if won:
            self.wins += 1

    def __repr__(self) -> str:
        return (f"MCTSNode(move={self.move}, mover={self.mover.name}, "
                f"visits={self.visits}, wins={self.wins}, "
                f"children={len(self.children)})")
