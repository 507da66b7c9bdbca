#!/usr/bin/env python
"""
Interactive NoGo game interface for playing against AI agents.

Example usage:
    # Play black against a random agent
    nogo-play --opponent random

    # Play white against an MCTS agent with 500 iterations per move
    nogo-play --opponent mcts --iterations 500 --color white

    # Watch two agents play each other
    nogo-play --watch --black mcts --white random --black-args "T=200 seed=1"
"""
import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from nogo_ai.core.actions import Place
from nogo_ai.core.board import Board
from nogo_ai.core.constants import Piece
from nogo_ai.core.game import Game, GameResult
from nogo_ai.cli import AGENT_TYPES, create_agent, render_board, setup_logging
from nogo_ai.mcts.config import MCTSConfig

logger = logging.getLogger(__name__)

console = Console()


def parse_args(argv=None):
    """Parse command-line arguments for game configuration."""
    parser = argparse.ArgumentParser(description="Play NoGo against AI agents")

    # Board configuration
    parser.add_argument("--width", type=int, default=9, help="Board width")
    parser.add_argument("--height", type=int, default=9, help="Board height")

    # Human game configuration
    parser.add_argument("--opponent", type=str, default="mcts", choices=AGENT_TYPES,
                        help="Type of AI opponent")
    parser.add_argument("--color", type=str, default="black", choices=["black", "white"],
                        help="Color the human plays")
    parser.add_argument("--opponent-args", type=str, default="",
                        help="Opponent argument string, e.g. 'name=bot seed=3'")

    # Agent vs agent
    parser.add_argument("--watch", action="store_true",
                        help="Watch two agents play instead of playing yourself")
    parser.add_argument("--black", type=str, default="mcts", choices=AGENT_TYPES,
                        help="Black agent type (with --watch)")
    parser.add_argument("--white", type=str, default="random", choices=AGENT_TYPES,
                        help="White agent type (with --watch)")
    parser.add_argument("--black-args", type=str, default="", help="Black agent argument string")
    parser.add_argument("--white-args", type=str, default="", help="White agent argument string")

    # MCTS configuration
    parser.add_argument("--iterations", type=int, default=None,
                        help="MCTS iterations per move (overrides T= in argument strings)")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="MCTS time limit per move, in seconds (the only budget unless --iterations is given)")
    parser.add_argument("--uct", type=str, default="reference", choices=["reference", "classic"],
                        help="UCT exploration variant")
    parser.add_argument("--final", type=str, default="robust", choices=["robust", "win_rate"],
                        help="Final move selection rule")

    parser.add_argument("--debug", action="store_true", help="Show debug information")

    return parser.parse_args(argv)


def build_mcts_config(args) -> MCTSConfig:
    """MCTS parameters shared by every MCTS agent of this session."""
    # A time limit without an explicit iteration count searches until the clock runs out
    iterations = None if args.time_limit is not None and args.iterations is None else 100
    return MCTSConfig(
        iterations=iterations,
        time_limit=args.time_limit,
        uct_variant=args.uct,
        final_selection=args.final,
    )


def with_budget(agent_args: str, iterations: Optional[int]) -> str:
    """Append the command-line iteration budget to an agent argument string."""
    if iterations is None:
        return agent_args
    return f"{agent_args} T={iterations}"


def human_callback(color: Piece):
    """Prompt the human for a placement; an empty answer resigns."""
    def prompt(board: Board) -> Optional[Place]:
        legal = board.legal_moves(color)
        if not legal:
            console.print("[bold red]You have no legal move.[/bold red]")
            return None
        while True:
            answer = Prompt.ask(f"Your move as {color.name.lower()} (e.g. C3, empty to resign)",
                                default="", show_default=False)
            if not answer:
                return None
            try:
                position = board.parse_label(answer)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                continue
            if position not in legal:
                console.print(f"[red]{answer.upper()} is not a legal move.[/red]")
                continue
            return Place(position, color)
    return prompt


def play_game(args) -> GameResult:
    """Play one game with the configured participants."""
    mcts_config = build_mcts_config(args)
    game = Game(args.width, args.height)

    if args.watch:
        for color, kind, agent_args in ((Piece.BLACK, args.black, args.black_args),
                                        (Piece.WHITE, args.white, args.white_args)):
            agent = create_agent(kind, color, with_budget(agent_args, args.iterations),
                                 mcts_config, verbose=args.debug)
            game.register_agent(color, agent)
        human_color = None
    else:
        human_color = Piece.from_role(args.color)
        opponent = create_agent(args.opponent, human_color.opponent,
                                with_budget(args.opponent_args, args.iterations),
                                mcts_config, verbose=args.debug)
        game.register_agent(human_color.opponent, opponent)
        game.register_callback(human_color, human_callback(human_color))

    board = game.reset()
    console.print(render_board(board))

    game_over = False
    while not game_over:
        mover = game.board.turn
        if mover != human_color:
            name = game.agents[mover].name
            with console.status(f"{name} is thinking..."):
                board, game_over = game.step()
        else:
            board, game_over = game.step()

        last = game.record.moves[-1].position if game.record.moves else None
        if not game_over and last is not None:
            console.print(f"{mover.name.lower()} plays {board.label(last)}")
        console.print(render_board(board, last))

    record = game.record
    console.rule("[bold yellow]GAME OVER")
    winner = record.winner.name.lower()
    if human_color is None:
        console.print(f"[bold]{winner}[/bold] wins after {record.plies} plies "
                      f"({record.result.name.lower().replace('_', ' ')})")
    elif record.winner == human_color:
        console.print("[bold green]You win![/bold green]")
    elif record.result is GameResult.RESIGNED:
        console.print(f"[bold red]You resigned; {game.agents[human_color.opponent].name} wins.[/bold red]")
    else:
        console.print(f"[bold red]{game.agents[human_color.opponent].name} wins![/bold red]")
    return record.result


def main(argv=None):
    """Main function."""
    args = parse_args(argv)
    setup_logging(args.debug, console)

    try:
        play_game(args)
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(2)
    except KeyboardInterrupt:
        console.print("\nGame interrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
