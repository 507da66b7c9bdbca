#!/usr/bin/env python
"""
Evaluate two NoGo agents against each other.

Plays a series of games, swapping colors every game, and reports each
agent's win rate overall and per color.

Example usage:
    nogo-evaluate --first mcts --second random --games 20 --first-args "T=200"
"""
import argparse
import json
import logging
import sys
from collections import defaultdict
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from nogo_ai.core.constants import Piece
from nogo_ai.core.game import play_game
from nogo_ai.cli import AGENT_TYPES, create_agent, setup_logging
from nogo_ai.mcts.config import MCTSConfig

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments for the evaluation."""
    parser = argparse.ArgumentParser(description="Evaluate two NoGo agents against each other")

    parser.add_argument("--first", type=str, default="mcts", choices=AGENT_TYPES,
                        help="Type of the first agent (black in even games)")
    parser.add_argument("--second", type=str, default="random", choices=AGENT_TYPES,
                        help="Type of the second agent")
    parser.add_argument("--first-args", type=str, default="", help="First agent argument string")
    parser.add_argument("--second-args", type=str, default="", help="Second agent argument string")

    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument("--width", type=int, default=9, help="Board width")
    parser.add_argument("--height", type=int, default=9, help="Board height")
    parser.add_argument("--seed", type=int, default=None,
                        help="Base seed; game i seeds its agents from seed + i")

    parser.add_argument("--uct", type=str, default="reference", choices=["reference", "classic"],
                        help="UCT exploration variant for MCTS agents")
    parser.add_argument("--final", type=str, default="robust", choices=["robust", "win_rate"],
                        help="Final move selection rule for MCTS agents")
    parser.add_argument("--output", type=str, default=None,
                        help="Write the summary as JSON to this file")
    parser.add_argument("--debug", action="store_true", help="Show debug information")

    return parser.parse_args(argv)


def seeded(agent_args: str, seed: Optional[int]) -> str:
    if seed is None:
        return agent_args
    return f"seed={seed} {agent_args}"


def evaluate(args) -> Dict[str, Any]:
    """
    Play the configured series of games.

    Returns:
        Summary with per-agent wins, per-color wins and average game length
    """
    if args.games <= 0:
        raise ValueError("--games must be positive")

    mcts_config = MCTSConfig(uct_variant=args.uct, final_selection=args.final)
    labels = ("first", "second")
    wins: Dict[str, int] = defaultdict(int)
    color_wins: Dict[str, int] = defaultdict(int)
    total_plies = 0

    for i in tqdm(range(args.games), desc="Evaluating"):
        seed = args.seed + i if args.seed is not None else None
        # Even games: first agent plays black
        first_color = Piece.BLACK if i % 2 == 0 else Piece.WHITE
        first = create_agent(args.first, first_color, seeded(args.first_args, seed), mcts_config)
        second = create_agent(args.second, first_color.opponent,
                              seeded(args.second_args, seed + 1 if seed is not None else None),
                              mcts_config)

        black, white = (first, second) if first_color is Piece.BLACK else (second, first)
        record = play_game(black, white, args.width, args.height)

        winner_label = labels[0] if record.winner == first_color else labels[1]
        wins[winner_label] += 1
        color_wins[record.winner.name.lower()] += 1
        total_plies += record.plies
        logger.debug("game %d: %s (%s) wins in %d plies", i + 1, winner_label,
                     record.winner.name.lower(), record.plies)

    return {
        "games": args.games,
        "first": {"type": args.first, "args": args.first_args, "wins": wins["first"],
                  "win_rate": wins["first"] / args.games},
        "second": {"type": args.second, "args": args.second_args, "wins": wins["second"],
                   "win_rate": wins["second"] / args.games},
        "black_wins": color_wins["black"],
        "white_wins": color_wins["white"],
        "average_plies": total_plies / args.games,
    }


def print_summary(summary: Dict[str, Any], console: Console) -> None:
    table = Table(title=f"Results over {summary['games']} games")
    table.add_column("Agent")
    table.add_column("Arguments")
    table.add_column("Wins", justify="right")
    table.add_column("Win rate", justify="right")
    for label in ("first", "second"):
        entry = summary[label]
        table.add_row(f"{label}: {entry['type']}", entry["args"] or "-",
                      str(entry["wins"]), f"{entry['win_rate']:.1%}")
    console.print(table)
    console.print(f"Black wins: {summary['black_wins']}, white wins: {summary['white_wins']}, "
                  f"average length: {summary['average_plies']:.1f} plies")


def main(argv=None):
    """Main function."""
    args = parse_args(argv)
    console = Console()
    setup_logging(args.debug, console)

    try:
        summary = evaluate(args)
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(2)

    print_summary(summary, console)

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(summary, f, indent=2)
        logger.info("Summary written to %s", args.output)


if __name__ == "__main__":
    main()
