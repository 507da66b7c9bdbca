"""
Monte Carlo Tree Search Agent for NoGo.

This module provides the MCTSAgent class, a ready-to-use player that uses
Monte Carlo Tree Search to choose placements. The agent can be configured
with different parameters and keeps statistics about its searches; the
search tree itself is rebuilt for every decision.
"""
from dataclasses import replace
from typing import Dict, List, Optional, Tuple, Union, Any
import json
import logging
import math

from nogo_ai.core.actions import Place
from nogo_ai.core.agent import Agent, AgentConfig
from nogo_ai.core.board import Board
from nogo_ai.core.constants import Piece
from nogo_ai.mcts.config import MCTSConfig
from nogo_ai.mcts.search import mcts_search

logger = logging.getLogger(__name__)


class MCTSAgent(Agent):
    """
    Monte Carlo Tree Search agent for playing NoGo.

    The iteration budget comes from the agent configuration's
    ``simulation_budget``; the remaining search parameters come from an
    optional MCTSConfig.
    """

    def __init__(
        self,
        config: Union[AgentConfig, str],
        mcts_config: Optional[MCTSConfig] = None,
        verbose: bool = False,
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: Agent configuration, or an argument string such as
                ``"name=mcts role=white seed=1 T=500"``
            mcts_config: MCTS configuration parameters
            verbose: Whether to log a summary of every search
        """
        if isinstance(config, str):
            config = AgentConfig.from_args(config, name="mcts")
        super().__init__(config)

        if mcts_config is None:
            mcts_config = MCTSConfig(iterations=config.simulation_budget)
        elif "simulation_budget" in config.model_fields_set:
            mcts_config = replace(mcts_config, iterations=config.simulation_budget)
        self.mcts_config = mcts_config
        self.verbose = verbose

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all moves and their statistics
        self.action_history: List[Tuple[Optional[Place], Dict[str, Any]]] = []

    def take_action(self, board: Board) -> Optional[Place]:
        """
        Choose a placement using Monte Carlo Tree Search.

        Args:
            board: Current position; this agent's color must be to move

        Returns:
            The placement of the most promising root child, or None if the
            search produced no candidate (no legal move, or a zero budget)
        """
        if board.turn != self.color:
            raise ValueError(f"it is not {self.role}'s turn")

        action, stats = mcts_search(board, self.color, self.mcts_config, self.rng)

        self.last_stats = stats
        self.action_history.append((action, stats))

        if self.verbose:
            self._log_search_info(action, stats)

        return action

    def _log_search_info(self, action: Optional[Place], stats: Dict[str, Any]) -> None:
        logger.info("%s selected: %s", self.name, action if action is not None else "no move")
        logger.info("Iterations: %d, time: %.3fs (%.1f it/s), nodes: %d, tree depth: %d, deepest rollout: %d",
                    stats["iterations"], stats["time_elapsed"],
                    stats["iterations_per_second"], stats["node_count"], stats["max_tree_depth"],
                    stats["max_rollout_plies"])

        ranked = sorted(stats["action_statistics"].items(),
                        key=lambda item: item[1]["visits"], reverse=True)
        for i, (move, info) in enumerate(ranked[:5]):
            logger.info("%d. %s - %d visits, %.3f value", i + 1, move, info["visits"], info["value"])

    def get_last_statistics(self) -> Dict[str, Any]:
        """Statistics from the most recent search."""
        return self.last_stats

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.action_history = []

    def save_statistics(self, filename: str) -> None:
        """
        Save the search history to a JSON file.

        Args:
            filename: Name of the file to save to
        """
        history = []
        for action, stats in self.action_history:
            history.append({
                "action": action.to_dict() if action is not None else None,
                "stats": {k: v for k, v in stats.items() if not isinstance(v, (dict, list))},
            })

        data = {
            "agent_name": self.name,
            "role": self.role,
            "config": self.mcts_config.to_dict(),
            "history": history,
            "total_actions": len(self.action_history),
        }

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        budget = self.mcts_config.iterations
        if budget is None:
            return f"{self.name} ({self.role}, MCTS, {self.mcts_config.time_limit}s per move)"
        return f"{self.name} ({self.role}, MCTS, {budget} iterations)"


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents of different strengths.
    """

    @staticmethod
    def create_fast(role: Piece, seed: Optional[int] = None) -> MCTSAgent:
        config = MCTSConfig.fast()
        agent_config = AgentConfig(name="fast-mcts", role=role, seed=seed,
                                   simulation_budget=config.iterations)
        return MCTSAgent(agent_config, config)

    @staticmethod
    def create_standard(role: Piece, seed: Optional[int] = None) -> MCTSAgent:
        config = MCTSConfig.default()
        agent_config = AgentConfig(name="mcts", role=role, seed=seed,
                                   simulation_budget=config.iterations)
        return MCTSAgent(agent_config, config)

    @staticmethod
    def create_strong(role: Piece, seed: Optional[int] = None) -> MCTSAgent:
        config = MCTSConfig.deep()
        agent_config = AgentConfig(name="strong-mcts", role=role, seed=seed,
                                   simulation_budget=config.iterations)
        return MCTSAgent(agent_config, config)

    @staticmethod
    def create_custom(
        role: Piece,
        iterations: Optional[int] = 100,
        time_limit: Optional[float] = None,
        exploration_weight: float = math.sqrt(2),
        seed: Optional[int] = None,
        name: str = "custom-mcts",
    ) -> MCTSAgent:
        """
        Create a custom MCTS agent.

        Args:
            role: Color the agent plays
            iterations: Number of MCTS iterations (None = until the time limit)
            time_limit: Optional time limit in seconds
            exploration_weight: UCT exploration parameter
            seed: Seed of the agent's random stream
            name: Name of the agent

        Returns:
            MCTSAgent
        """
        config = MCTSConfig(
            iterations=iterations,
            time_limit=time_limit,
            exploration_weight=exploration_weight,
        )
        agent_config = AgentConfig(name=name, role=role, seed=seed)
        return MCTSAgent(agent_config, config)
