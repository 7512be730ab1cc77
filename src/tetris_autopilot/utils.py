"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import Optional, List

from .board import Board, PIECE_VALUES
from .tetromino import Tetromino


# Frames per row of gravity on the NES, indexed by level.  Levels past the end
# of the table use the last entry.
FRAMES_PER_ROW = (
    48, 43, 38, 33, 28, 23, 18, 13, 8, 6,  # 0-9
    5, 5, 5,  # 10-12
    4, 4, 4,  # 13-15
    3, 3, 3,  # 16-18
    2, 2, 2, 2, 2, 2, 2, 2, 2, 2,  # 19-28
    1,  # 29+
)
MIN_FRAMES_PER_ROW = 1


def drop_interval_frames(level: int) -> int:
    """Return how many frames pass between gravity drops at ``level``.

    The interval never increases with the level and is clamped at
    :data:`MIN_FRAMES_PER_ROW`.
    """

    if level < 0:
        raise ValueError(f"Level must be non-negative, got {level}")
    frames = FRAMES_PER_ROW[min(level, len(FRAMES_PER_ROW) - 1)]
    return max(MIN_FRAMES_PER_ROW, frames)


def first_transition_lines(start_level: int) -> int:
    """Return the line count at which a game started on ``start_level`` first levels up."""

    return min(start_level * 10 + 10, max(100, start_level * 10 - 50))


def level_for_lines(start_level: int, lines: int) -> int:
    """Return the current level for a game started on ``start_level``.

    Follows the NES rule: the first level-up happens after
    :func:`first_transition_lines` lines, then every ten lines.
    """

    first = first_transition_lines(start_level)
    if lines < first:
        return start_level
    return start_level + 1 + (lines - first) // 10


def can_move(board: Board, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``board``.

    Translating the piece by the provided offsets must keep all of its blocks
    on empty cells (see :meth:`Board.is_empty`).  Passing ``0, 0`` checks the
    piece's current placement, which is how rotations are validated.
    """

    for row, col in tetromino.blocks():
        if not board.is_empty(row + dy, col + dx):
            return False
    return True


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    Renderers get a single 2D array to draw without mutating the underlying
    board.  Cells of the active piece above the visible field are skipped.
    """

    grid = board.grid.tolist()
    if active is not None:
        for r, c in active.blocks():
            if 0 <= r < board.height and 0 <= c < board.width:
                grid[r][c] = PIECE_VALUES[active.shape]
    return grid
