"""Client boundary for the external placement solver.

The engine only needs an object with an ``async fetch_outcomes(request)``
method returning a best-first list of :class:`~tetris_autopilot.outcomes.Outcome`.
:class:`StackRabbitClient` implements it over HTTP against a StackRabbit-style
server.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol
from urllib.parse import urlencode
from urllib.request import urlopen

from .exceptions import SolverContractError
from .game_state import GameState
from .outcomes import Outcome, parse_outcomes
from .tetromino import TetrominoType


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverRequest:
    """Snapshot of the game sent to the solver after each lock."""

    board: str
    current_piece: TetrominoType
    next_piece: Optional[TetrominoType]
    level: int
    lines: int
    reaction_time: int
    tap_id: int

    @classmethod
    def from_game(
        cls, game: GameState, *, level: int, reaction_time: int, tap_id: int
    ) -> "SolverRequest":
        assert game.active is not None
        return cls(
            board=game.board.to_bitstring(),
            current_piece=game.active.shape,
            next_piece=game.upcoming,
            level=level,
            lines=game.lines,
            reaction_time=reaction_time,
            tap_id=tap_id,
        )

    def to_params(self) -> Dict[str, str]:
        """Return the query parameters understood by the solver server."""

        params = {
            "board": self.board,
            "currentPiece": self.current_piece.value,
            "level": str(self.level),
            "lines": str(self.lines),
            "reactionTime": str(self.reaction_time),
            "tapId": str(self.tap_id),
        }
        if self.next_piece is not None:
            params["nextPiece"] = self.next_piece.value
        return params


class SolverClient(Protocol):
    async def fetch_outcomes(self, request: SolverRequest) -> List[Outcome]:
        ...


class StackRabbitClient:
    """HTTP client for a StackRabbit-style solver server.

    Each request is a ``GET {base_url}/{endpoint}?...`` whose JSON body is the
    ranked outcome list.  The blocking call runs on a daemon thread so the tick
    loop keeps running while the solver thinks.  Cancelling the awaiting task
    abandons the thread: shutdown never waits for a stalled solver.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        *,
        endpoint: str = "engine-movelist",
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint.strip("/")
        self.timeout = timeout

    def url_for(self, request: SolverRequest) -> str:
        return f"{self.base_url}/{self.endpoint}?{urlencode(request.to_params())}"

    def _get(self, url: str) -> bytes:
        with urlopen(url, timeout=self.timeout) as response:
            return response.read()

    async def _get_in_background(self, url: str) -> bytes:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def deliver(body: Optional[bytes], error: Optional[Exception]) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(body)

        def worker() -> None:
            try:
                body = self._get(url)
            except Exception as exc:
                result: tuple = (None, exc)
            else:
                result = (body, None)
            try:
                loop.call_soon_threadsafe(deliver, *result)
            except RuntimeError:
                # Loop already closed; the request was abandoned.
                LOGGER.debug("Dropping solver response for closed loop: %s", url)

        threading.Thread(target=worker, name="solver-request", daemon=True).start()
        return await future

    async def fetch_outcomes(self, request: SolverRequest) -> List[Outcome]:
        url = self.url_for(request)
        LOGGER.debug("Requesting outcomes: %s", url)
        body = await self._get_in_background(url)
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise SolverContractError(f"Solver returned invalid JSON: {exc}") from exc
        outcomes = parse_outcomes(payload)
        LOGGER.debug("Solver returned %d outcome(s)", len(outcomes))
        return outcomes
