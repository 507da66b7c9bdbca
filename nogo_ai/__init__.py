"""
NoGo AI - A Monte Carlo Tree Search agent for the board game NoGo.

This package provides a NoGo board with the placement rules of the game,
a uniform random baseline agent, and an MCTS agent that chooses placements
under an iteration or time budget.
"""

__version__ = "0.1.0"
__author__ = "NoGo AI Team"

# Make key components available at package level
from nogo_ai.core.board import Board
from nogo_ai.core.actions import Place
from nogo_ai.core.constants import Piece, PlaceResult
from nogo_ai.core.agent import Agent, AgentConfig, RandomAgent
from nogo_ai.mcts.agent import MCTSAgent

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))

__all__ = [
    'Board', 'Place', 'Piece', 'PlaceResult',
    'Agent', 'AgentConfig', 'RandomAgent', 'MCTSAgent',
]
