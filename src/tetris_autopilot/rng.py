"""NES-style piece randomizer."""

from __future__ import annotations

import random
from typing import Optional

from .tetromino import TetrominoType


class NESRandom:
    """Approximation of the NES piece generator.

    A 32-bit LCG picks one of seven pieces.  A repeat of the previous piece is
    rerolled once, so repeats still happen but less often than uniform.
    """

    PIECES = [
        TetrominoType.I,
        TetrominoType.J,
        TetrominoType.L,
        TetrominoType.O,
        TetrominoType.S,
        TetrominoType.T,
        TetrominoType.Z,
    ]

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = random.getrandbits(32)
        self.state = seed & 0xFFFFFFFF
        self.prev_index: Optional[int] = None

    def _lcg_next(self) -> int:
        self.state = (self.state * 0x41C64E6D + 0x3039) & 0xFFFFFFFF
        return self.state

    def _rand(self) -> int:
        return (self._lcg_next() >> 16) & 0x7FFF

    def next_piece(self) -> TetrominoType:
        cand = self._rand() % 7
        if cand == self.prev_index:
            cand = self._rand() % 7
        self.prev_index = cand
        return self.PIECES[cand]
