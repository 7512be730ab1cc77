from __future__ import annotations

import pytest

from tetris_autopilot.board import Board, PIECE_VALUES
from tetris_autopilot.tetromino import Tetromino, TetrominoType


def test_bitstring_is_row_major_top_first() -> None:
    board = Board()
    board.set_cell(0, 0, 1)
    board.set_cell(Board.height - 1, Board.width - 1, 3)
    bits = board.to_bitstring()
    assert len(bits) == Board.width * Board.height
    assert bits[0] == "1"
    assert bits[-1] == "1"
    assert bits.count("1") == 2


def test_cells_above_field_are_empty_but_walls_are_not() -> None:
    board = Board()
    assert board.is_empty(-2, 4)
    assert not board.is_empty(-1, -1)
    assert not board.is_empty(0, Board.width)
    assert not board.is_empty(Board.height, 0)


def test_lock_piece_and_count_without_clearing() -> None:
    board = Board()
    for col in range(Board.width):
        if col not in (3, 4, 5, 6):
            board.set_cell(Board.height - 1, col, 1)
    piece = Tetromino(TetrominoType.I, rotation=1, position=(Board.height - 1, 5))
    board.lock_piece(piece)
    assert board.get_cell(Board.height - 1, 3) == PIECE_VALUES[TetrominoType.I]
    assert board.count_full_rows() == 1
    # counting leaves the row in place
    assert board.count_full_rows() == 1
    assert board.clear_full_rows() == 1
    assert board.count_full_rows() == 0
    assert not board.grid.any()


def test_lock_piece_above_field_rejected() -> None:
    board = Board()
    piece = Tetromino(TetrominoType.I, rotation=0, position=(0, 5))
    with pytest.raises(IndexError):
        board.lock_piece(piece)


def test_clear_full_rows_shifts_rows_down() -> None:
    board = Board()
    board.grid[Board.height - 1] = [1] * Board.width
    board.set_cell(Board.height - 2, 0, 2)
    assert board.clear_full_rows() == 1
    assert board.get_cell(Board.height - 1, 0) == 2
    assert board.get_cell(Board.height - 2, 0) == 0
