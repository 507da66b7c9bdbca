"""
Monte Carlo Tree Search (MCTS) algorithm for NoGo.

This module implements the core MCTS algorithm with the four standard phases:
1. Selection: Descend the tree by UCT score to a frontier node
2. Expansion: On a node's first visit, create one child per legal placement
3. Simulation: Play uniformly random legal placements until the side to move
   has none; that side loses
4. Backpropagation: Update visit and win counts up to the root

Every iteration works on its own copy of the caller's board, so the caller's
position is never modified and nothing leaks between iterations.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
import itertools
import logging
import random
import time

from nogo_ai.core.actions import Place
from nogo_ai.core.board import Board
from nogo_ai.core.constants import Piece
from nogo_ai.mcts.config import MCTSConfig
from nogo_ai.mcts.node import MCTSNode

logger = logging.getLogger(__name__)


def mcts_search(
    board: Board,
    color: Piece,
    config: Optional[MCTSConfig] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Optional[Place], Dict[str, Any]]:
    """
    Run Monte Carlo Tree Search to choose a placement for ``color``.

    This function runs the full MCTS algorithm:
    1. Create a root node for the current position
    2. Repeatedly run selection, expansion, simulation, and backpropagation
    3. Return the move of the best root child

    Args:
        board: Current position, with ``color`` to move; not modified
        color: Color of the searching agent
        config: MCTS configuration parameters
        rng: Random stream for expansion order and rollouts

    Returns:
        Tuple of (chosen placement or None if the root has no children, search statistics)
    """
    # Use default config if none provided
    if config is None:
        config = MCTSConfig()

    root, stats = search_tree(board, color, config, rng)

    best_child = choose_child(root, config.final_selection)
    best_move = best_child.move if best_child is not None else None

    stats["node_count"] = count_nodes(root)
    stats["action_statistics"] = get_action_statistics(root, config)
    stats["principal_variation"] = [
        (str(move), value) for move, value in get_principal_variation(root)
    ]

    logger.debug(
        "search for %s: %d iterations, %d nodes, %.3fs, move %s",
        color.name.lower(), stats["iterations"], stats["node_count"],
        stats["time_elapsed"], best_move,
    )

    # The tree goes out of scope here; nothing is kept between searches
    return best_move, stats


def search_tree(
    board: Board,
    color: Piece,
    config: Optional[MCTSConfig] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[MCTSNode, Dict[str, Any]]:
    """
    Build a search tree for ``color`` from the given position.

    Args:
        board: Current position, with ``color`` to move; not modified
        color: Color of the searching agent
        config: MCTS configuration parameters
        rng: Random stream for expansion order and rollouts

    Returns:
        Tuple of (root node, loop statistics)
    """
    if config is None:
        config = MCTSConfig()
    if rng is None:
        rng = random.Random()

    root = MCTSNode(mover=color.opponent)

    stats: Dict[str, Any] = {
        "iterations": 0,
        "max_tree_depth": 0,
        "max_rollout_plies": 0,
        "total_simulation_steps": 0,
        "stopped_early": False,
    }

    start_time = time.time()

    # Main MCTS loop; without an iteration cap only the time limit ends it
    budget = itertools.count() if config.iterations is None else range(config.iterations)
    for _ in budget:
        # Check time limit if specified
        if config.time_limit is not None and time.time() - start_time > config.time_limit:
            stats["stopped_early"] = True
            break

        current_board = board.copy()

        # 1. Selection: descend to a frontier node, advancing the board
        node = select_node(root, current_board, config)

        # 2. Expansion: only on the node's first visit
        if node.visits == 0:
            expand_node(node, current_board, rng)

        # 3. Simulation: random playout from the node's position
        won, steps = simulate_game(node, current_board, color, rng)

        # 4. Backpropagation: update statistics up the tree
        backpropagate(node, won, color, config.backup)

        stats["iterations"] += 1
        stats["total_simulation_steps"] += steps
        stats["max_tree_depth"] = max(stats["max_tree_depth"], node.depth)
        stats["max_rollout_plies"] = max(stats["max_rollout_plies"], steps)

    stats["time_elapsed"] = time.time() - start_time
    stats["iterations_per_second"] = stats["iterations"] / max(0.001, stats["time_elapsed"])
    stats["average_simulation_steps"] = stats["total_simulation_steps"] / max(1, stats["iterations"])

    return root, stats



def select_node(root: MCTSNode, board: Board, config: Optional[MCTSConfig] = None) -> MCTSNode:
    """
    Descend from ``root`` to a frontier node.

    At each level the child with the highest UCT score is chosen (the first
    one on ties) and its move is applied to ``board``, which therefore ends at
    the returned node's position.

    Args:
        root: Root node of the MCTS tree
        board: Position of the root; advanced in place
        config: MCTS configuration parameters

    Returns:
        The frontier node reached
    """
    if config is None:
        config = MCTSConfig()

    node = root
    while not node.is_frontier():
        node = max(
            node.children,
            key=lambda child: child.selection_score(
                config.exploration_weight, config.use_parent_wins
            ),
        )
        node.move.apply(board)
    return node


def expand_node(node: MCTSNode, board: Board, rng: random.Random) -> int:
    """
    Create a child for every legal placement of the side to move.

    Candidates are visited in shuffled order, so children come out in random
    order. Each candidate is tested on a disposable copy of ``board``. A
    position without legal placements leaves the node childless.

    Args:
        node: Frontier node to expand
        board: Position of the node; not modified
        rng: Random stream used to shuffle candidates

    Returns:
        Number of children created
    """
    color = board.turn
    positions = list(range(board.size))
    rng.shuffle(positions)
    for position in positions:
        move = Place(position, color)
        if move.apply(board.copy()).is_legal:
            node.add_child(move)
    return len(node.children)


def simulate_game(
    node: MCTSNode,
    board: Board,
    color: Piece,
    rng: random.Random,
) -> Tuple[bool, int]:
    """
    Play a random game from the node's position.

    Each ply, a uniformly random legal placement is played for the side to
    move: positions are shuffled and the first legal one is played directly
    on ``board`` (placement only mutates on a legal result). The playout ends
    when the side to move has no legal placement; that side loses.

    Args:
        node: Node the simulation starts from
        board: Position of the node; consumed by the playout
        color: Color of the searching agent
        rng: Random stream for move choice

    Returns:
        Tuple of (whether ``color`` won, number of plies played)
    """
    positions = list(range(board.size))
    steps = 0
    while True:
        mover = board.turn
        rng.shuffle(positions)
        for position in positions:
            if Place(position, mover).apply(board).is_legal:
                break
        else:
            # No legal placement for the side to move
            return mover.opponent == color, steps
        steps += 1


def backpropagate(
    node: MCTSNode,
    won: bool,
    color: Piece,
    backup: str = "agent",
) -> None:
    """
    Update statistics from ``node`` up to the root inclusive.

    With the ``"agent"`` backup every node counts a win when the searching
    agent won. With the ``"mover"`` backup each node counts a win when its
    own mover won.

    Args:
        node: Node the simulation started from
        won: Whether the searching agent won the simulation
        color: Color of the searching agent
        backup: ``"agent"`` or ``"mover"``
    """
    current: Optional[MCTSNode] = node
    while current is not None:
        if backup == "mover" and current.mover != color:
            current.update(not won)
        else:
            current.update(won)
        current = current.parent


def choose_child(root: MCTSNode, final_selection: str = "robust") -> Optional[MCTSNode]:
    """
    Pick the root child whose move will be played.

    Args:
        root: Root node of the MCTS tree
        final_selection: ``"robust"`` (most visits) or ``"win_rate"`` (best
            win rate among visited children)

    Returns:
        The chosen child, or None if the root has no children
    """
    if not root.children:
        return None

    if final_selection == "win_rate":
        return max(root.children, key=lambda c: c.wins / c.visits if c.visits else -1.0)

    # The most visited child is more robust than the best average
    return max(root.children, key=lambda c: c.visits)


def count_nodes(node: MCTSNode) -> int:
    """
    Count the total number of nodes in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Total number of nodes
    """
    count = 1  # Count this node
    for child in node.children:
        count += count_nodes(child)
    return count


def get_principal_variation(root: MCTSNode, max_depth: int = 10) -> List[Tuple[Place, float]]:
    """
    Get the principal variation (most visited path) from the root.

    This is useful for analysis and debugging.

    Args:
        root: Root node of the MCTS tree
        max_depth: Maximum depth to explore

    Returns:
        List of (move, win rate) pairs along the principal variation
    """
    result = []
    current = root
    depth = 0

    while current.children and depth < max_depth:
        best_child = max(current.children, key=lambda c: c.visits)
        if best_child.visits == 0:
            break
        result.append((best_child.move, best_child.win_rate))
        current = best_child
        depth += 1

    return result


def get_action_statistics(root: MCTSNode, config: Optional[MCTSConfig] = None) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all moves from the root.

    Args:
        root: Root node of the MCTS tree
        config: MCTS configuration parameters (for the UCT score)

    Returns:
        Dictionary mapping move strings to statistics
    """
    if config is None:
        config = MCTSConfig()

    result = {}
    for child in root.children:
        result[str(child.move)] = {
            "position": child.move.position,
            "visits": child.visits,
            "wins": child.wins,
            "value": child.win_rate,
            "uct": child.selection_score(config.exploration_weight, config.use_parent_wins),
        }
    return result
