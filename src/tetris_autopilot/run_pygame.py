"""Minimal pygame front-end for the autopilot.

Draws the board, the active and next pieces and the statistics panel.  The
board border turns red once the solver has mispredicted.  Arrow keys and
``Z``/``X`` nudge the piece by hand and ``P`` toggles pause; the autopilot
keeps playing its own sequence on top of any manual input.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import pygame

from .autopilot import Autopilot, FrameView
from .board import Board, PIECE_VALUES
from .tetromino import TetrominoType

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
PANEL_WIDTH = 225

BORDER_COLOR = (255, 255, 255)
WARNING_COLOR = (255, 0, 0)

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 165, 0),
}

# Mapping from the integer stored in the board grid to a colour
CELL_COLORS = {0: (0, 0, 0)}
for shape, value in PIECE_VALUES.items():
    CELL_COLORS[value] = SHAPE_COLORS[shape]


def draw_board(screen: pygame.Surface, view: FrameView) -> None:
    """Render the board with the active piece overlaid."""

    for r, row in enumerate(view.grid):
        for c, value in enumerate(row):
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, CELL_COLORS[value], rect)
            pygame.draw.rect(screen, (50, 50, 50), rect, 1)
    border = pygame.Rect(0, 0, Board.width * CELL_SIZE, Board.height * CELL_SIZE)
    # The warning stays up for the rest of the game once raised.
    if view.mispredictions:
        pygame.draw.rect(screen, WARNING_COLOR, border, 10)
    else:
        pygame.draw.rect(screen, BORDER_COLOR, border, 2)


def draw_panel(screen: pygame.Surface, font: pygame.font.Font, view: FrameView) -> None:
    """Render the next piece preview and the statistics."""

    left = Board.width * CELL_SIZE + 20
    for r, c in view.next_piece_cells:
        rect = pygame.Rect(left + c * CELL_SIZE, 20 + r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
        pygame.draw.rect(screen, (0, 0, 255), rect)
        pygame.draw.rect(screen, (0, 0, 0), rect, 2)

    lines = [
        f"Score {view.score}",
        f"Lines {view.lines}",
        f"Level {view.level}",
    ]
    if view.tetris_rate is not None:
        lines.append(f"Tetris {view.tetris_rate}%")
    if view.paused:
        lines.append("Paused")
    elif view.awaiting_outcome:
        lines.append("Thinking...")
    if view.game_over:
        lines.append("Game over")
    for i, text in enumerate(lines):
        surface = font.render(text, True, (255, 255, 255))
        screen.blit(surface, (left, 140 + i * 40))


def handle_key(event: pygame.event.Event, autopilot: Autopilot) -> None:
    """Apply manual overrides to the piece the autopilot is driving."""

    if event.key == pygame.K_p:
        autopilot.toggle_pause()
    elif event.key == pygame.K_LEFT:
        autopilot.shift(-1)
    elif event.key == pygame.K_RIGHT:
        autopilot.shift(1)
    elif event.key in (pygame.K_UP, pygame.K_x):
        autopilot.rotate(1)
    elif event.key == pygame.K_z:
        autopilot.rotate(-1)


class GameRunner:
    """Drive an :class:`Autopilot` from a pygame window at a fixed frame rate."""

    def __init__(self, autopilot: Autopilot) -> None:
        self.autopilot = autopilot
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._font: Optional[pygame.font.Font] = None

    @property
    def running(self) -> bool:
        return self._running

    def _draw(self) -> None:
        if not self._screen or not self._font:
            return
        view = self.autopilot.snapshot()
        self._screen.fill((0, 0, 0))
        draw_board(self._screen, view)
        draw_panel(self._screen, self._font, view)
        pygame.display.flip()

    async def run(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(
            (Board.width * CELL_SIZE + PANEL_WIDTH, Board.height * CELL_SIZE)
        )
        pygame.display.set_caption("Tetris autopilot")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.Font(None, 36)

        self.autopilot.start()
        self._running = True
        try:
            while self._running:
                self._clock.tick(self.autopilot.config.fps)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        handle_key(event, self.autopilot)
                try:
                    self.autopilot.tick()
                except Exception:
                    LOGGER.exception("Autopilot crashed at frame %d", self.autopilot.frame)
                    raise
                self._draw()
                # Let the solver task make progress between frames
                await asyncio.sleep(0)
        finally:
            self.autopilot.close()
            pygame.quit()
            LOGGER.info("Game stopped")

    def stop(self) -> None:
        self._running = False


def main(autopilot: Autopilot) -> None:
    """Open a window and play until it is closed."""

    asyncio.run(GameRunner(autopilot).run())
