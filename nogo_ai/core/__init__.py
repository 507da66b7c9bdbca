"""
NoGo AI Core Package

This package contains the game logic for NoGo, including:
- Board representation and placement rules
- The placement action
- Agent configuration, the agent interface and the random baseline
- Game flow between two agents
- Constants and enums

All core components can be imported directly from this package.
"""

# Constants
from nogo_ai.core.constants import (
    Piece, PlaceResult,
    DEFAULT_BOARD_WIDTH, DEFAULT_BOARD_HEIGHT
)

# Board and actions
from nogo_ai.core.board import Board
from nogo_ai.core.actions import Place

# Agents
from nogo_ai.core.agent import Agent, AgentConfig, RandomAgent, parse_args

# Game
from nogo_ai.core.game import (
    Game, GameRecord, GameResult,
    play_game, simulate_random_game
)

__all__ = [
    # Constants
    'Piece', 'PlaceResult',
    'DEFAULT_BOARD_WIDTH', 'DEFAULT_BOARD_HEIGHT',

    # Board and actions
    'Board', 'Place',

    # Agents
    'Agent', 'AgentConfig', 'RandomAgent', 'parse_args',

    # Game
    'Game', 'GameRecord', 'GameResult',
    'play_game', 'simulate_random_game',
]
