"""
Shared helpers for the command-line tools: logging setup, agent creation
from argument strings, and board rendering with rich.
"""
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from nogo_ai.core.agent import Agent, AgentConfig, RandomAgent
from nogo_ai.core.board import Board
from nogo_ai.core.constants import Piece, PIECE_SYMBOLS, COLUMN_LABELS
from nogo_ai.mcts.agent import MCTSAgent
from nogo_ai.mcts.config import MCTSConfig

AGENT_TYPES = ("random", "mcts")

PIECE_STYLES = {
    Piece.EMPTY: "dim",
    Piece.BLACK: "bold bright_white on grey23",
    Piece.WHITE: "bold black on white",
}


def setup_logging(debug: bool = False, console: Optional[Console] = None) -> None:
    """Route log records through rich; DEBUG when ``debug`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=debug)],
        force=True,
    )


def create_agent(
    kind: str,
    role: Piece,
    args: str = "",
    mcts_config: Optional[MCTSConfig] = None,
    verbose: bool = False,
) -> Agent:
    """
    Build an agent from its type and an argument string.

    Args:
        kind: ``"random"`` or ``"mcts"``
        role: Color the agent plays; a ``role=`` in ``args`` is overridden
        args: ``key=value`` argument string (``name``, ``seed``, ``T`` ...)
        mcts_config: Search parameters for an MCTS agent
        verbose: Log a summary of every search (MCTS only)

    Returns:
        The agent

    Raises:
        ValueError: If the type is unknown or the arguments are invalid
    """
    config = AgentConfig.from_args(f"{args} role={role.name.lower()}", name=kind)
    if kind == "random":
        return RandomAgent(config)
    if kind == "mcts":
        return MCTSAgent(config, mcts_config, verbose=verbose)
    raise ValueError(f"unknown agent type: {kind} (expected one of {', '.join(AGENT_TYPES)})")


def render_board(board: Board, last_position: Optional[int] = None) -> Table:
    """
    Render a board as a rich table, highlighting the last placement.

    Args:
        board: Position to render
        last_position: Position of the most recent placement, if any

    Returns:
        Renderable table
    """
    table = Table(show_header=True, show_edge=False, box=None, padding=(0, 1),
                  title=f"{board.turn.name.lower()} to move (ply {board.ply})")
    table.add_column("")
    for x in range(board.width):
        table.add_column(COLUMN_LABELS[x], justify="center")

    for y in range(board.height):
        cells = []
        for x in range(board.width):
            position = board.position_of(x, y)
            piece = board[position]
            style = PIECE_STYLES[piece]
            if position == last_position:
                style += " underline"
            cells.append(Text(PIECE_SYMBOLS[piece], style=style))
        table.add_row(str(board.height - y), *cells)
    return table
