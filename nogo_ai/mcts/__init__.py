"""
Monte Carlo Tree Search (MCTS) implementation for NoGo.

This package provides an MCTS agent that plays NoGo without any training.
Each decision builds a fresh tree and runs a fixed number of iterations of:

1. Selection: Starting from the root node, descend by UCT score until reaching
   a frontier node (a node without children).
2. Expansion: On a node's first visit, create one child per legal placement.
3. Simulation: From the node, play uniformly random legal placements until the
   side to move has none; that side loses.
4. Backpropagation: Update the visit and win counts of every node on the path.

The move of the most visited root child is played.
"""

from nogo_ai.mcts.node import MCTSNode
from nogo_ai.mcts.agent import MCTSAgent, MCTSAgentFactory
from nogo_ai.mcts.search import (
    mcts_search,
    search_tree,
    select_node,
    expand_node,
    simulate_game,
    backpropagate,
    choose_child
)
from nogo_ai.mcts.config import MCTSConfig

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=100,              # Number of MCTS iterations per move
    uct_variant="reference",     # ln(parent wins) in the exploration term
    final_selection="robust",    # Play the most visited child
    time_limit=None              # Optional time limit in seconds (None = no limit)
)

__all__ = [
    'MCTSAgent',
    'MCTSAgentFactory',
    'MCTSNode',
    'MCTSConfig',
    'mcts_search',
    'search_tree',
    'select_node',
    'expand_node',
    'simulate_game',
    'backpropagate',
    'choose_child',
    'DEFAULT_CONFIG'
]
