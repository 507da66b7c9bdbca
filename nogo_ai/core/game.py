"""
Game flow management for NoGo.

This module defines:
- GameRecord: the outcome and move list of one game
- Game: a manager that alternates two agents on a board until one side
  cannot move
- Helper functions for quick games between agents
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

from nogo_ai.core.actions import Place
from nogo_ai.core.agent import Agent, AgentConfig, RandomAgent
from nogo_ai.core.board import Board
from nogo_ai.core.constants import Piece, DEFAULT_BOARD_WIDTH, DEFAULT_BOARD_HEIGHT

logger = logging.getLogger(__name__)

ActionCallback = Callable[[Board], Optional[Place]]


class GameResult(Enum):
    """Enum representing possible game results."""
    IN_PROGRESS = auto()
    NO_LEGAL_MOVE = auto()  # The side to move had no legal placement
    FORFEIT = auto()  # The side to move returned an illegal placement
    RESIGNED = auto()  # The side to move gave up while it still had a legal placement


@dataclass
class GameRecord:
    """Outcome and history of a single game."""
    moves: List[Place] = field(default_factory=list)
    result: GameResult = GameResult.IN_PROGRESS
    winner: Optional[Piece] = None
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def plies(self) -> int:
        return len(self.moves)

    @property
    def loser(self) -> Optional[Piece]:
        return self.winner.opponent if self.winner is not None else None

    @property
    def game_over(self) -> bool:
        return self.result is not GameResult.IN_PROGRESS

    def to_dict(self) -> dict:
        return {
            "moves": [move.to_dict() for move in self.moves],
            "result": self.result.name.lower(),
            "winner": self.winner.name.lower() if self.winner is not None else None,
            "plies": self.plies,
            "duration": (self.end_time or time.time()) - self.start_time,
        }


class Game:
    """
    Manager for NoGo game flow.

    Agents are registered per color as callbacks taking the board and
    returning a placement or None. The side that cannot produce a legal
    placement on its turn loses.
    """

    def __init__(
        self,
        width: int = DEFAULT_BOARD_WIDTH,
        height: int = DEFAULT_BOARD_HEIGHT,
    ):
        """
        Initialize a new game.

        Args:
            width: Board width
            height: Board height
        """
        self.width = width
        self.height = height
        self.board = Board(width, height)
        self.record = GameRecord()
        self.agent_callbacks: Dict[Piece, ActionCallback] = {}
        self.agents: Dict[Piece, Agent] = {}

    def register_agent(self, color: Piece, agent: Agent) -> None:
        """
        Register an agent to play ``color``.

        Raises:
            ValueError: If the agent is configured for the other color
        """
        if agent.color != color:
            raise ValueError(f"{agent.name} plays {agent.role}, not {color.name.lower()}")
        self.agents[color] = agent
        self.agent_callbacks[color] = agent.get_action_callback()

    def register_callback(self, color: Piece, callback: ActionCallback) -> None:
        """Register a bare callback (e.g. a human prompt) to play ``color``."""
        self.agents.pop(color, None)
        self.agent_callbacks[color] = callback

    def reset(self) -> Board:
        """Start a new game on an empty board."""
        self.board = Board(self.width, self.height)
        self.record = GameRecord()
        for agent in self.agents.values():
            agent.open_episode()
        return self.board

    def step(self) -> Tuple[Board, bool]:
        """
        Let the side to move play one placement.

        Returns:
            Tuple of (board after the step, whether the game is over)
        """
        if self.record.game_over:
            return self.board, True

        color = self.board.turn
        callback = self.agent_callbacks.get(color)
        if callback is None:
            raise ValueError(f"no agent registered for {color.name.lower()}")

        move = callback(self.board.copy())
        if move is None:
            stuck = not self.board.legal_moves(color)
            self._finish(winner=color.opponent,
                         result=GameResult.NO_LEGAL_MOVE if stuck else GameResult.RESIGNED)
            return self.board, True

        verdict = move.apply(self.board) if move.color == color else None
        if verdict is None or not verdict.is_legal:
            logger.warning("%s played an illegal move %s (%s)", color.name.lower(), move,
                           verdict.value if verdict is not None else "wrong color")
            self._finish(winner=color.opponent, result=GameResult.FORFEIT)
            return self.board, True

        self.record.moves.append(move)
        return self.board, False

    def play(self) -> GameRecord:
        """Play a full game from an empty board and return its record."""
        self.reset()
        game_over = False
        while not game_over:
            _, game_over = self.step()
        return self.record

    def _finish(self, winner: Piece, result: GameResult) -> None:
        self.record.winner = winner
        self.record.result = result
        self.record.end_time = time.time()
        logger.debug("%s wins after %d plies (%s)", winner.name.lower(),
                    self.record.plies, result.name.lower())
        for agent in self.agents.values():
            agent.close_episode(winner.name.lower())


def play_game(black: Agent, white: Agent, width: int = DEFAULT_BOARD_WIDTH,
              height: int = DEFAULT_BOARD_HEIGHT) -> GameRecord:
    """
    Play one game between two agents.

    Args:
        black: Agent playing black (moves first)
        white: Agent playing white
        width: Board width
        height: Board height

    Returns:
        The game record
    """
    game = Game(width, height)
    game.register_agent(Piece.BLACK, black)
    game.register_agent(Piece.WHITE, white)
    return game.play()


def simulate_random_game(width: int = DEFAULT_BOARD_WIDTH, height: int = DEFAULT_BOARD_HEIGHT,
                         seed: Optional[int] = None) -> GameRecord:
    """Play a game between two random agents."""
    white_seed = seed + 1 if seed is not None else None
    black = RandomAgent(AgentConfig(name="random-black", role=Piece.BLACK, seed=seed))
    white = RandomAgent(AgentConfig(name="random-white", role=Piece.WHITE, seed=white_seed))
    return play_game(black, white, width, height)
