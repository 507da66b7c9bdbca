#!/usr/bin/env python
"""
Tests for agent configuration, the random baseline and the MCTS agent.
"""
import json
import os
import tempfile
import unittest

from nogo_ai.core.actions import Place
from nogo_ai.core.agent import AgentConfig, RandomAgent, parse_args
from nogo_ai.core.board import Board
from nogo_ai.core.constants import Piece
from nogo_ai.mcts.agent import MCTSAgent, MCTSAgentFactory
from nogo_ai.mcts.config import MCTSConfig


class TestAgentConfig(unittest.TestCase):
    """Test case for argument parsing and validation."""

    def test_parse_args(self):
        self.assertEqual(parse_args("a=1  b=x=y flag"), {"a": "1", "b": "x=y", "flag": "flag"})
        self.assertEqual(parse_args(""), {})

    def test_from_args(self):
        config = AgentConfig.from_args("name=bot role=white seed=3 T=250 search=mcts")
        self.assertEqual(config.name, "bot")
        self.assertEqual(config.role, Piece.WHITE)
        self.assertEqual(config.seed, 3)
        self.assertEqual(config.simulation_budget, 250)
        self.assertEqual(config.properties, {"search": "mcts"})

    def test_later_pairs_override_defaults(self):
        config = AgentConfig.from_args("role=black name=second", name="first")
        self.assertEqual(config.name, "second")
        self.assertEqual(config.simulation_budget, 100)
        self.assertIsNone(config.seed)

    def test_full_field_name(self):
        config = AgentConfig.from_args("role=Black simulation_budget=0")
        self.assertEqual(config.role, Piece.BLACK)
        self.assertEqual(config.simulation_budget, 0)

    def test_invalid_configurations(self):
        for args in ("", "role=unknown", "role=empty", "role=black T=-1",
                     "role=black seed=abc", "role=black name=a(b)"):
            with self.assertRaises(ValueError, msg=args):
                AgentConfig.from_args(args)


class TestRandomAgent(unittest.TestCase):
    """Test case for the uniform random baseline."""

    def test_plays_legal_moves(self):
        agent = RandomAgent("role=black seed=1")
        self.assertEqual(agent.name, "random")
        board = Board.from_rows([
            "X . O",
            ". . .",
            "O . X",
        ])
        for _ in range(10):
            move = agent.take_action(board)
            self.assertEqual(move.color, Piece.BLACK)
            self.assertTrue(board.is_legal(move.position, Piece.BLACK))

    def test_no_legal_move(self):
        agent = RandomAgent("role=white")
        self.assertIsNone(agent.take_action(Board(1, 1, turn=Piece.WHITE)))

    def test_seed_reproduces_moves(self):
        first = RandomAgent("role=black seed=9")
        second = RandomAgent("role=black seed=9")
        board = Board()
        self.assertEqual([first.take_action(board) for _ in range(5)],
                         [second.take_action(board) for _ in range(5)])

    def test_properties(self):
        agent = RandomAgent("name=baseline role=white seed=4 note=hello")
        self.assertEqual(agent.role, "white")
        self.assertEqual(agent.color, Piece.WHITE)
        self.assertEqual(agent.property("note"), "hello")
        self.assertEqual(agent.property("seed"), "4")
        agent.notify("note=changed")
        self.assertEqual(agent.property("note"), "changed")
        with self.assertRaises(KeyError):
            agent.property("missing")


class TestMCTSAgent(unittest.TestCase):
    """Test case for the MCTS agent."""

    def test_budget_from_arguments(self):
        agent = MCTSAgent("role=black T=12 seed=1")
        self.assertEqual(agent.name, "mcts")
        self.assertEqual(agent.mcts_config.iterations, 12)

    def test_explicit_budget_overrides_search_config(self):
        agent = MCTSAgent(AgentConfig(role=Piece.BLACK, simulation_budget=3),
                          MCTSConfig(iterations=50, uct_variant="classic"))
        self.assertEqual(agent.mcts_config.iterations, 3)
        self.assertEqual(agent.mcts_config.uct_variant, "classic")

        agent = MCTSAgent(AgentConfig(role=Piece.BLACK), MCTSConfig(iterations=50))
        self.assertEqual(agent.mcts_config.iterations, 50)

    def test_takes_legal_action(self):
        agent = MCTSAgent("role=white T=30 seed=2")
        board = Board(3, 3)
        board.place(4)
        move = agent.take_action(board)
        self.assertEqual(move.color, Piece.WHITE)
        self.assertTrue(board.is_legal(move.position))
        self.assertEqual(board.count(Piece.WHITE), 0)
        self.assertEqual(agent.get_last_statistics()["iterations"], 30)
        self.assertEqual(len(agent.action_history), 1)

    def test_single_legal_move(self):
        agent = MCTSAgent("role=black T=5 seed=0")
        self.assertEqual(agent.take_action(Board.from_rows(["O . ."])), Place(2, Piece.BLACK))

    def test_no_legal_move_and_zero_budget(self):
        self.assertIsNone(MCTSAgent("role=black T=20").take_action(Board(1, 1)))
        self.assertIsNone(MCTSAgent("role=black T=0").take_action(Board(3, 3)))

    def test_same_seed_same_move(self):
        board = Board(4, 4)
        moves = {MCTSAgent("role=black T=60 seed=11").take_action(board) for _ in range(2)}
        self.assertEqual(len(moves), 1)

    def test_refuses_to_move_out_of_turn(self):
        agent = MCTSAgent("role=white T=5")
        with self.assertRaises(ValueError):
            agent.take_action(Board(3, 3))

    def test_factory(self):
        fast = MCTSAgentFactory.create_fast(Piece.BLACK, seed=1)
        self.assertEqual(fast.mcts_config.iterations, MCTSConfig.fast().iterations)
        custom = MCTSAgentFactory.create_custom(Piece.WHITE, iterations=7, time_limit=1.0)
        self.assertEqual(custom.color, Piece.WHITE)
        self.assertEqual(custom.mcts_config.iterations, 7)
        self.assertEqual(custom.mcts_config.time_limit, 1.0)
        self.assertEqual(custom.mcts_config.exploration_weight, MCTSConfig().exploration_weight)

        timed = MCTSAgentFactory.create_custom(Piece.BLACK, iterations=None, time_limit=0.05, seed=1)
        self.assertIsNone(timed.mcts_config.iterations)
        self.assertIn("0.05s per move", str(timed))
        move = timed.take_action(Board(3, 3))
        self.assertTrue(Board(3, 3).is_legal(move.position))
        self.assertTrue(timed.get_last_statistics()["stopped_early"])

    def test_save_statistics(self):
        agent = MCTSAgent("name=saver role=black T=10 seed=3")
        agent.take_action(Board(3, 3))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "stats.json")
            agent.save_statistics(path)
            with open(path) as f:
                data = json.load(f)
        self.assertEqual(data["agent_name"], "saver")
        self.assertEqual(data["total_actions"], 1)
        self.assertEqual(data["history"][0]["stats"]["iterations"], 10)
        agent.reset_statistics()
        self.assertEqual(agent.action_history, [])


if __name__ == "__main__":
    unittest.main()
