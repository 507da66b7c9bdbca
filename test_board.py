#!/usr/bin/env python
"""
Tests for the NoGo board and the placement action.

Positions are written top row first: ``.`` empty, ``X`` black, ``O`` white.
"""
import unittest

import numpy as np

from nogo_ai.core.actions import Place
from nogo_ai.core.board import Board, neighbour_table
from nogo_ai.core.constants import Piece, PlaceResult


class TestBoard(unittest.TestCase):
    """Test case for board state and placement rules."""

    def test_empty_board(self):
        board = Board()
        self.assertEqual(board.size, 81)
        self.assertEqual(board.turn, Piece.BLACK)
        self.assertEqual(board.count(Piece.EMPTY), 81)
        self.assertEqual(len(board.legal_moves()), 81)

    def test_legal_placement_passes_turn(self):
        board = Board(3, 3)
        self.assertEqual(board.place(4), PlaceResult.LEGAL)
        self.assertEqual(board[4], Piece.BLACK)
        self.assertEqual(board.turn, Piece.WHITE)
        self.assertEqual(board.ply, 1)

    def test_explicit_color_ignores_turn(self):
        board = Board(3, 3)
        self.assertEqual(board.place(4, Piece.WHITE), PlaceResult.LEGAL)
        self.assertEqual(board[4], Piece.WHITE)
        # turn goes to the opponent of the placed color
        self.assertEqual(board.turn, Piece.BLACK)

    def test_occupied(self):
        board = Board(3, 3)
        board.place(0)
        before = board.copy()
        self.assertEqual(board.place(0), PlaceResult.ILLEGAL_OCCUPIED)
        self.assertEqual(board, before)

    def test_out_of_range_and_bad_color(self):
        board = Board(3, 3)
        self.assertEqual(board.place(9), PlaceResult.ILLEGAL_OUT_OF_RANGE)
        self.assertEqual(board.place(-1), PlaceResult.ILLEGAL_OUT_OF_RANGE)
        self.assertEqual(board.place(0, Piece.EMPTY), PlaceResult.ILLEGAL_COLOR)
        self.assertEqual(board.count(Piece.EMPTY), 9)

    def test_self_capture_is_illegal(self):
        board = Board.from_rows([
            ". X .",
            "X . .",
            ". . .",
        ], turn=Piece.WHITE)
        before = board.copy()
        self.assertEqual(board.place(0), PlaceResult.ILLEGAL_SUICIDE)
        self.assertEqual(board, before)
        self.assertFalse(board.is_legal(0))

    def test_capture_is_illegal(self):
        board = Board.from_rows([
            "X O .",
            ". . .",
            ". . .",
        ], turn=Piece.WHITE)
        self.assertEqual(board.place(3), PlaceResult.ILLEGAL_CAPTURE)
        self.assertEqual(board[3], Piece.EMPTY)
        self.assertEqual(board.turn, Piece.WHITE)

    def test_group_liberties_are_shared(self):
        board = Board.from_rows([
            "X X O",
            ". O .",
            ". . .",
        ], turn=Piece.WHITE)
        # white at 3 would take the last liberty of the black pair
        self.assertEqual(board.place(3), PlaceResult.ILLEGAL_CAPTURE)
        # black at 3 extends its own group instead
        self.assertEqual(board.place(3, Piece.BLACK), PlaceResult.LEGAL)

    def test_single_point_board_has_no_legal_move(self):
        board = Board(1, 1)
        self.assertEqual(board.place(0), PlaceResult.ILLEGAL_SUICIDE)
        self.assertEqual(board.legal_moves(), [])

    def test_exactly_one_legal_move(self):
        board = Board.from_rows(["O . ."])
        self.assertEqual(board.legal_moves(), [2])

    def test_copy_is_independent(self):
        board = Board(3, 3)
        other = board.copy()
        other.place(4)
        self.assertEqual(board[4], Piece.EMPTY)
        self.assertEqual(board.turn, Piece.BLACK)
        self.assertNotEqual(board, other)

    def test_grid_shape(self):
        board = Board.from_rows(["X . .", ". O ."])
        grid = board.grid
        self.assertEqual(grid.shape, (2, 3))
        self.assertTrue(np.array_equal(grid, np.array([[1, 0, 0], [0, 2, 0]])))

    def test_labels(self):
        board = Board()
        position = board.position_of(2, 2)
        self.assertEqual(board.label(position), "C7")
        self.assertEqual(board.parse_label("c7"), position)
        self.assertEqual(board.parse_label("J1"), board.position_of(8, 8))
        with self.assertRaises(ValueError):
            board.parse_label("I5")
        with self.assertRaises(ValueError):
            board.parse_label("K1")

    def test_neighbour_table(self):
        table = neighbour_table(3, 3)
        self.assertEqual(sorted(table[0]), [1, 3])
        self.assertEqual(sorted(table[4]), [1, 3, 5, 7])

    def test_invalid_construction(self):
        with self.assertRaises(ValueError):
            Board(0, 3)
        with self.assertRaises(ValueError):
            Board(3, 3, turn=Piece.EMPTY)
        with self.assertRaises(ValueError):
            Board.from_rows(["X ?"])
        with self.assertRaises(ValueError):
            Board.from_rows(["X .", "."])


class TestPlace(unittest.TestCase):
    """Test case for the placement action."""

    def test_apply_uses_its_own_color(self):
        board = Board(3, 3)
        move = Place(4, Piece.WHITE)
        self.assertEqual(move.apply(board), PlaceResult.LEGAL)
        self.assertEqual(board[4], Piece.WHITE)

    def test_apply_leaves_board_on_illegal(self):
        board = Board.from_rows(["O . ."])
        before = board.copy()
        self.assertEqual(Place(1, Piece.BLACK).apply(board), PlaceResult.ILLEGAL_CAPTURE)
        self.assertEqual(board, before)

    def test_validation(self):
        with self.assertRaises(ValueError):
            Place(-1, Piece.BLACK)
        with self.assertRaises(ValueError):
            Place(0, Piece.EMPTY)

    def test_dict_form(self):
        move = Place(5, Piece.WHITE)
        self.assertEqual(move.to_dict(), {"position": 5, "color": "white"})
        self.assertEqual(Place.from_dict(move.to_dict()), move)
        self.assertEqual(str(move), "white@5")


if __name__ == "__main__":
    unittest.main()
