"""Tetromino definitions using the NES orientation tables.

Each piece is described by a list of orientations.  An orientation is a set of
``(row, col)`` offsets from the piece's pivot cell, so rotating a piece never
moves its pivot.  The orientation order is clockwise: ``rotate(1)`` steps to the
next entry and ``rotate(-1)`` to the previous one.  This matches the rotation
behaviour the placement solver assumes when it emits input sequences.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

Orientation = List[Tuple[int, int]]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# Offsets are (row, col) relative to the pivot, rows growing downwards.
ORIENTATIONS: Dict[TetrominoType, List[Orientation]] = {
    TetrominoType.T: [
        [(0, -1), (0, 0), (0, 1), (-1, 0)],  # up
        [(-1, 0), (0, 0), (0, 1), (1, 0)],  # right
        [(0, -1), (0, 0), (0, 1), (1, 0)],  # down
        [(-1, 0), (0, -1), (0, 0), (1, 0)],  # left
    ],
    TetrominoType.J: [
        [(-1, 0), (0, 0), (1, -1), (1, 0)],  # left
        [(-1, -1), (0, -1), (0, 0), (0, 1)],  # up
        [(-1, 0), (-1, 1), (0, 0), (1, 0)],  # right
        [(0, -1), (0, 0), (0, 1), (1, 1)],  # down
    ],
    TetrominoType.Z: [
        [(0, -1), (0, 0), (1, 0), (1, 1)],
        [(-1, 1), (0, 0), (0, 1), (1, 0)],
    ],
    TetrominoType.O: [
        [(0, -1), (0, 0), (1, -1), (1, 0)],
    ],
    TetrominoType.S: [
        [(0, 0), (0, 1), (1, -1), (1, 0)],
        [(-1, 0), (0, 0), (0, 1), (1, 1)],
    ],
    TetrominoType.L: [
        [(-1, 0), (0, 0), (1, 0), (1, 1)],  # right
        [(0, -1), (0, 0), (0, 1), (1, -1)],  # down
        [(-1, -1), (-1, 0), (0, 0), (1, 0)],  # left
        [(-1, 1), (0, -1), (0, 0), (0, 1)],  # up
    ],
    TetrominoType.I: [
        [(-2, 0), (-1, 0), (0, 0), (1, 0)],  # vertical
        [(0, -2), (0, -1), (0, 0), (0, 1)],  # horizontal
    ],
}

# Orientation index each piece spawns in.
SPAWN_ORIENTATION: Dict[TetrominoType, int] = {
    TetrominoType.T: 2,
    TetrominoType.J: 3,
    TetrominoType.Z: 0,
    TetrominoType.O: 0,
    TetrominoType.S: 0,
    TetrominoType.L: 1,
    TetrominoType.I: 1,
}

SPAWN_POSITION: Tuple[int, int] = (0, 5)


def shape_blocks(shape: TetrominoType, rotation: int) -> Orientation:
    """Return the block offsets for ``shape`` at ``rotation``.

    Values of ``rotation`` are wrapped so any integer is accepted.
    """

    states = ORIENTATIONS[shape]
    return states[rotation % len(states)]


@dataclass
class Tetromino:
    """Active falling piece in the game."""

    shape: TetrominoType
    rotation: int = 0
    position: Tuple[int, int] = SPAWN_POSITION  # (row, col) of the pivot

    @classmethod
    def spawn(cls, shape: TetrominoType) -> "Tetromino":
        """Return ``shape`` in its spawn orientation at the spawn position."""

        return cls(shape, rotation=SPAWN_ORIENTATION[shape], position=SPAWN_POSITION)

    def rotate(self, direction: int = 1) -> None:
        """Rotate the piece.

        Positive values rotate clockwise whilst negative values rotate
        counter-clockwise.  The rotation wraps around the number of available
        orientations, so an ``O`` piece never changes.
        """

        states = ORIENTATIONS[self.shape]
        step = 1 if direction > 0 else -1
        self.rotation = (self.rotation + step) % len(states)

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by ``dx`` columns and ``dy`` rows."""

        row, col = self.position
        self.position = (row + dy, col + dx)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global block coordinates for this piece."""

        row, col = self.position
        state = shape_blocks(self.shape, self.rotation)
        return [(row + dr, col + dc) for dr, dc in state]
