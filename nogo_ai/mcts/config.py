"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS algorithm,
including the iteration budget, the UCT exploration constant and the rules
used to pick the final move.
"""
from dataclasses import dataclass, fields, replace
from typing import Optional, Literal, ClassVar
import math


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the MCTS algorithm,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: Optional[int] = 100
    """Number of MCTS iterations per move decision (0 = no search, None = until time_limit)"""

    exploration_weight: float = math.sqrt(2)
    """UCT exploration parameter (default is sqrt(2))"""

    time_limit: Optional[float] = None
    """Optional time limit in seconds (None = iteration budget only)"""

    # Strategy parameters
    uct_variant: Literal["reference", "classic"] = "reference"
    """Count used in the UCT logarithm: parent wins ('reference') or parent visits ('classic')"""

    final_selection: Literal["robust", "win_rate"] = "robust"
    """Final move rule: most visited child ('robust') or best win rate ('win_rate')"""

    backup: Literal["agent", "mover"] = "agent"
    """Whose win is counted during backpropagation: the searching agent's, or each node's mover's"""

    # Constants
    INFINITE_VALUE: ClassVar[float] = float('inf')
    """Selection score of a node that was never visited"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations is None:
            if self.time_limit is None:
                raise ValueError("iterations may only be None when time_limit is set")
        elif self.iterations < 0:
            raise ValueError("iterations must be non-negative")

        if self.exploration_weight <= 0:
            raise ValueError("exploration_weight must be positive")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive or None")

        if self.uct_variant not in ("reference", "classic"):
            raise ValueError("uct_variant must be 'reference' or 'classic'")

        if self.final_selection not in ("robust", "win_rate"):
            raise ValueError("final_selection must be 'robust' or 'win_rate'")

        if self.backup not in ("agent", "mover"):
            raise ValueError("backup must be 'agent' or 'mover'")

    @property
    def use_parent_wins(self) -> bool:
        return self.uct_variant == "reference"

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """Fewer iterations, for quick games and tests."""
        return cls(iterations=30)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(
            iterations=2000,
            uct_variant="classic",
            backup="mover",
        )

    def with_iterations(self, iterations: Optional[int]) -> 'MCTSConfig':
        """Copy of this configuration with a different iteration budget."""
        return replace(self, iterations=iterations)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in self.to_dict().items())
        return f"MCTSConfig({params})"
