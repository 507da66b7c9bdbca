"""
Agent configuration and the agent capability interface.

Agents are built from an AgentConfig, usually parsed from the argument
string a tournament harness passes around (``"name=mcts role=black seed=7"``).
Every agent answers a single question, ``take_action(board)``, and returns
either a legal placement or None when it has no legal move.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
import logging
import random
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from nogo_ai.core.actions import Place
from nogo_ai.core.board import Board
from nogo_ai.core.constants import Piece, INVALID_NAME_CHARS

logger = logging.getLogger(__name__)


class AgentConfig(BaseModel):
    """
    Construction-time configuration of an agent.

    String values are coerced to the typed fields, so a config can be built
    directly from ``key=value`` pairs. Keys that are not fields are kept as
    free-form properties.
    """
    model_config = ConfigDict(extra="allow")

    name: str = "unknown"
    role: Piece
    seed: Optional[int] = None
    simulation_budget: int = Field(
        default=100,
        ge=0,
        validation_alias=AliasChoices("simulation_budget", "T"),
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value or any(char in INVALID_NAME_CHARS for char in value):
            raise ValueError(f"invalid name: {value}")
        return value

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, value: Any) -> Piece:
        if isinstance(value, str):
            return Piece.from_role(value)
        if value not in (Piece.BLACK, Piece.WHITE):
            raise ValueError(f"invalid role: {value}")
        return Piece(value)

    @classmethod
    def from_args(cls, args: str = "", **defaults: Any) -> 'AgentConfig':
        """
        Parse a whitespace separated ``key=value`` argument string.

        Later pairs override earlier ones and ``defaults``. ``T`` is accepted
        as an alias of ``simulation_budget``.

        Args:
            args: Argument string
            **defaults: Values used when a key is absent

        Returns:
            Validated configuration

        Raises:
            ValueError: If the role is missing or invalid, or a value has the wrong type
        """
        return cls.model_validate({**defaults, **parse_args(args)})

    @property
    def properties(self) -> Dict[str, str]:
        """The free-form keys that are not configuration fields."""
        return {key: str(value) for key, value in (self.model_extra or {}).items()}


def parse_args(args: str) -> Dict[str, str]:
    """Split ``"a=1 b=2"`` into ``{"a": "1", "b": "2"}``; a bare word maps to itself."""
    pairs: Dict[str, str] = {}
    for pair in args.split():
        key, sep, value = pair.partition("=")
        pairs[key] = value if sep else pair
    return pairs


class Agent(ABC):
    """
    Base class for NoGo agents.

    Each agent owns its pseudo-random stream, seeded once at construction so
    that a fixed seed reproduces the same decisions.
    """

    def __init__(self, config: Union[AgentConfig, str]):
        """
        Initialize the agent.

        Args:
            config: Agent configuration, or an argument string to parse into one
        """
        if isinstance(config, str):
            config = AgentConfig.from_args(config)
        self.config = config
        self.color: Piece = config.role
        self.rng = random.Random(config.seed)
        self.meta: Dict[str, str] = {
            "name": config.name,
            "role": config.role.name.lower(),
            **config.properties,
        }
        if config.seed is not None:
            self.meta["seed"] = str(config.seed)

    @property
    def name(self) -> str:
        return self.meta["name"]

    @property
    def role(self) -> str:
        return self.meta["role"]

    def property(self, key: str) -> str:
        """
        Read a stored property.

        Raises:
            KeyError: If the property was never set
        """
        return self.meta[key]

    def notify(self, message: str) -> None:
        """Store a ``key=value`` message as a property."""
        key, sep, value = message.partition("=")
        self.meta[key] = value if sep else message

    def open_episode(self, flag: str = "") -> None:
        """Called by the game runner before the first move of a game."""

    def close_episode(self, flag: str = "") -> None:
        """Called by the game runner once a game is decided."""

    @abstractmethod
    def take_action(self, board: Board) -> Optional[Place]:
        """
        Choose a placement for this agent's color.

        Args:
            board: Current position, with this agent to move

        Returns:
            A legal placement, or None if the agent has no legal move
        """

    def get_action_callback(self) -> Callable[[Board], Optional[Place]]:
        """Callback form of ``take_action``, for registering with a Game."""
        return self.take_action

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"


class RandomAgent(Agent):
    """
    Agent that plays a uniformly random legal placement.

    This agent serves as a baseline for comparison with the search agents.
    """

    def __init__(self, config: Union[AgentConfig, str]):
        if isinstance(config, str):
            config = AgentConfig.from_args(config, name="random")
        super().__init__(config)
        self._space: List[int] = []

    def take_action(self, board: Board) -> Optional[Place]:
        if len(self._space) != board.size:
            self._space = list(range(board.size))
        self.rng.shuffle(self._space)
        for position in self._space:
            move = Place(position, self.color)
            if move.apply(board.copy()).is_legal:
                return move
        logger.debug("%s has no legal move", self.name)
        return None
