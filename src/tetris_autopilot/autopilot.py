"""Frame-stepped autopilot driving a game from solver input sequences.

:class:`Autopilot` owns everything one game needs: the board and pieces, the
score, the reconciliation state and the input cursor.  :meth:`Autopilot.tick`
advances it by exactly one frame and is meant to be called at a fixed cadence
from a single ``asyncio`` loop.

Solver requests run as ``asyncio`` tasks.  Their completion callback only
queues the response; reconciliation happens at the start of the next tick, so
all game state is mutated from ``tick`` alone.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Sequence, Tuple

from .config import AutopilotConfig
from .exceptions import AutopilotError
from .game_state import GameState
from .inputs import InputCursor, frame_input
from .outcomes import Outcome
from .reconcile import ReconciliationController
from .rng import NESRandom
from .scoring import ScoreKeeper
from .solver import SolverClient, SolverRequest
from .utils import drop_interval_frames, level_for_lines, render_grid


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameView:
    """Read-only snapshot handed to renderers once per frame.

    ``mispredicted`` reflects the latest reconciliation only, while
    ``mispredictions`` counts every divergence this game.
    """

    grid: Tuple[Tuple[int, ...], ...]
    piece_cells: Tuple[Tuple[int, int], ...]
    next_piece_cells: Tuple[Tuple[int, int], ...]
    score: int
    lines: int
    level: int
    tetris_rate: Optional[int]  # ``None`` until a line has been cleared
    mispredicted: bool
    mispredictions: int
    paused: bool
    awaiting_outcome: bool
    game_over: bool


@dataclass(frozen=True)
class _SolverResponse:
    outcomes: Sequence[Outcome] = ()
    error: Optional[BaseException] = None


class Autopilot:
    """Simulation context plus the frame scheduler that advances it."""

    def __init__(
        self,
        solver: SolverClient,
        config: Optional[AutopilotConfig] = None,
        *,
        game: Optional[GameState] = None,
    ) -> None:
        self.config = config or AutopilotConfig()
        self.solver = solver
        self.game = game or GameState(rng=NESRandom(self.config.seed))
        self.scores = ScoreKeeper()
        self.controller = ReconciliationController(self.config.reaction_time)
        self.cursor = InputCursor()
        self.frame = 0
        self.paused = False
        self.aborted = False
        self._pending: Optional[asyncio.Future] = None
        self._inbox: Deque[_SolverResponse] = deque()

    # Properties -------------------------------------------------------
    @property
    def level(self) -> int:
        return level_for_lines(self.config.start_level, self.game.lines)

    @property
    def awaiting_outcome(self) -> bool:
        return self.controller.awaiting

    @property
    def mispredicted(self) -> bool:
        return self.controller.state.mispredicted

    @property
    def finished(self) -> bool:
        return self.game.over or self.aborted

    # Lifecycle --------------------------------------------------------
    def start(self) -> None:
        """Spawn the first piece, if needed, and ask the solver for its outcomes.

        Must be called from within a running event loop.
        """

        if self.game.active is None:
            self.game.reset_game()
        LOGGER.info(
            "Game started at level %d with %s (next %s)",
            self.config.start_level,
            self.game.active.shape.value,
            self.game.upcoming.value if self.game.upcoming else "-",
        )
        self.request_outcomes()

    def close(self) -> None:
        """Cancel an outstanding solver request, if any."""

        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    # Solver traffic ---------------------------------------------------
    def request_outcomes(self) -> None:
        """Dispatch a solver request for the active piece without blocking."""

        if self._pending is not None and not self._pending.done():
            raise RuntimeError("A solver request is already outstanding")
        self.controller.begin_request()
        request = SolverRequest.from_game(
            self.game,
            level=self.level,
            reaction_time=self.config.reaction_time,
            tap_id=self.config.tap_id,
        )
        LOGGER.debug("Requesting outcomes for %s at frame %d", request.current_piece.value, self.frame)
        task = asyncio.ensure_future(self.solver.fetch_outcomes(request))
        task.add_done_callback(self._on_response)
        self._pending = task

    def _on_response(self, task: asyncio.Future) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._inbox.append(_SolverResponse(error=error))
        else:
            self._inbox.append(_SolverResponse(outcomes=task.result()))

    def _drain_inbox(self) -> None:
        while self._inbox:
            response = self._inbox.popleft()
            self._pending = None
            if response.error is not None:
                if isinstance(response.error, AutopilotError):
                    raise response.error
                LOGGER.error(
                    "Solver request failed; still awaiting outcome",
                    exc_info=response.error,
                )
                continue
            active = self.controller.reconcile(response.outcomes)
            self.cursor.load(active)

    # Frame stepping ---------------------------------------------------
    def tick(self) -> None:
        """Advance the simulation by one frame.

        Raises:
            AutopilotError: On any fatal contract violation.  The game is
                marked aborted before the error propagates.
        """

        self.frame += 1
        if self.aborted:
            return
        try:
            self._drain_inbox()
            if (
                self.frame < self.config.warmup_frames
                or self.paused
                or self.game.over
                or self.controller.awaiting
            ):
                return
            self._play_frame()
            self._apply_gravity()
        except AutopilotError:
            self.aborted = True
            LOGGER.error("Game aborted at frame %d", self.frame)
            raise

    def _play_frame(self) -> None:
        # An exhausted sequence means the piece simply falls.
        if self.cursor.exhausted:
            return
        frame = frame_input(self.cursor.next_char())
        if frame.rotation is not None:
            self.game.rotate(frame.rotation.direction)
        if frame.shift is not None:
            self.game.shift(frame.shift.dx)

    def _apply_gravity(self) -> None:
        level = self.level
        if self.frame % drop_interval_frames(level) != 0:
            return
        if self.game.can_drop():
            self.game.drop()
        else:
            self._lock(level)

    def _lock(self, level: int) -> None:
        self.game.merge()
        if self.game.over:
            LOGGER.info("Game over: piece locked above the field (score %d)", self.scores.score)
            return
        cleared = self.game.count_lines_to_burn()
        if cleared:
            self.scores.add_clear(cleared, level)
            self.game.burn_lines()
            LOGGER.info(
                "Cleared %d line(s); lines=%d score=%d", cleared, self.game.lines, self.scores.score
            )
        self.game.spawn_tetromino()
        if self.game.over:
            LOGGER.info("Game over: no room to spawn (score %d)", self.scores.score)
            return
        self.request_outcomes()

    async def run(self, max_frames: Optional[int] = None) -> None:
        """Tick at ``config.fps`` until the game ends or ``max_frames`` pass."""

        interval = 1.0 / self.config.fps
        self.start()
        try:
            while not self.finished and (max_frames is None or self.frame < max_frames):
                self.tick()
                await asyncio.sleep(interval)
        finally:
            self.close()

    # Manual override --------------------------------------------------
    def shift(self, dx: int) -> bool:
        return self.game.shift(dx)

    def rotate(self, direction: int) -> bool:
        return self.game.rotate(direction)

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        LOGGER.info("Paused" if self.paused else "Resumed")
        return self.paused

    # Rendering --------------------------------------------------------
    def snapshot(self) -> FrameView:
        return FrameView(
            grid=tuple(tuple(row) for row in render_grid(self.game.board, self.game.active)),
            piece_cells=tuple(self.game.piece_positions()),
            next_piece_cells=tuple(self.game.next_piece_positions()),
            score=self.scores.score,
            lines=self.game.lines,
            level=self.level,
            tetris_rate=self.scores.tetris_rate if self.scores.total_lines else None,
            mispredicted=self.mispredicted,
            mispredictions=self.controller.state.mispredictions,
            paused=self.paused,
            awaiting_outcome=self.awaiting_outcome,
            game_over=self.game.over,
        )
