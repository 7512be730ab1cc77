"""NES line-clear scoring."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .exceptions import BoardInvariantError


LOGGER = logging.getLogger(__name__)

# Base points per simultaneous clear, multiplied by ``level + 1``.
LINE_CLEAR_POINTS = {0: 0, 1: 40, 2: 100, 3: 300, 4: 1200}
TETRIS = 4


@dataclass
class ScoreKeeper:
    """Running score and tetris-rate statistics for one game."""

    score: int = 0
    total_lines: int = 0
    tetris_lines: int = 0

    def add_clear(self, lines: int, level: int) -> int:
        """Award points for ``lines`` cleared by one merge at ``level``.

        Returns the score increment.

        Raises:
            BoardInvariantError: If ``lines`` is outside ``0..4``.
        """

        if lines not in LINE_CLEAR_POINTS:
            raise BoardInvariantError(f"A merge cannot clear {lines} lines")
        delta = LINE_CLEAR_POINTS[lines] * (level + 1)
        self.score += delta
        self.total_lines += lines
        if lines == TETRIS:
            self.tetris_lines += lines
        if lines:
            LOGGER.debug("Cleared %d line(s) at level %d for %d points", lines, level, delta)
        return delta

    @property
    def tetris_rate(self) -> int:
        """Percentage of cleared lines that came from tetrises, rounded down.

        ``0`` before any line has been cleared.
        """

        if self.total_lines == 0:
            return 0
        return (self.tetris_lines * 100) // self.total_lines
