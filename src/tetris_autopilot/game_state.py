"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board
from .rng import NESRandom
from .tetromino import Tetromino, TetrominoType
from .utils import can_move


@dataclass
class GameState:
    """Board, active piece and look-ahead for one game.

    Movement helpers validate against the board and return ``False`` instead
    of applying an illegal move, so both the autopilot and manual input can
    share them without corrupting the piece.
    """

    rng: NESRandom = field(default_factory=NESRandom)
    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    upcoming: Optional[TetrominoType] = None
    lines: int = 0
    pieces: int = 0
    over: bool = False

    def spawn_tetromino(self) -> Tetromino:
        """Promote ``upcoming`` to the active piece and draw a new look-ahead.

        The game is over when the freshly spawned piece overlaps the stack.
        """

        shape = self.upcoming or self.rng.next_piece()
        self.active = Tetromino.spawn(shape)
        self.upcoming = self.rng.next_piece()
        if not can_move(self.board, self.active, 0, 0):
            self.over = True
        return self.active

    def reset_game(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board()
        self.lines = 0
        self.pieces = 0
        self.over = False
        self.active = None
        self.upcoming = None
        self.spawn_tetromino()

    # Movement ---------------------------------------------------------
    def shift(self, dx: int) -> bool:
        """Shift the active piece ``dx`` columns if the board allows it."""

        if self.active is None or not can_move(self.board, self.active, dx, 0):
            return False
        self.active.move(dx, 0)
        return True

    def rotate(self, direction: int) -> bool:
        """Rotate the active piece, undoing the rotation if it collides."""

        if self.active is None:
            return False
        self.active.rotate(direction)
        if not can_move(self.board, self.active, 0, 0):
            self.active.rotate(-direction)
            return False
        return True

    def can_drop(self) -> bool:
        return self.active is not None and can_move(self.board, self.active, 0, 1)

    def drop(self) -> None:
        assert self.active is not None
        self.active.move(0, 1)

    # Locking ----------------------------------------------------------
    def merge(self) -> None:
        """Lock the active piece into the board.

        A piece locked partly above the visible field tops out the game.
        """

        assert self.active is not None
        if any(row < 0 for row, _ in self.active.blocks()):
            self.over = True
            return
        self.board.lock_piece(self.active)
        self.pieces += 1

    def count_lines_to_burn(self) -> int:
        return self.board.count_full_rows()

    def burn_lines(self) -> int:
        cleared = self.board.clear_full_rows()
        self.lines += cleared
        return cleared

    # Read-only views --------------------------------------------------
    def piece_positions(self) -> List[Tuple[int, int]]:
        return self.active.blocks() if self.active is not None else []

    def next_piece_positions(self) -> List[Tuple[int, int]]:
        """Return the look-ahead piece's cells relative to a ``(1, 2)`` pivot."""

        if self.upcoming is None:
            return []
        preview = Tetromino.spawn(self.upcoming)
        preview.position = (1, 2)
        return preview.blocks()
