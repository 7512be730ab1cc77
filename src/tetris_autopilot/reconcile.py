"""Reconcile in-flight input sequences with fresh solver outcomes.

When a piece locks, the engine asks the solver for outcomes for the newly
spawned piece.  By then the engine is already holding a *plan*: the input
sequence the solver recommended for this piece, computed one cycle earlier
assuming the previous piece landed exactly as predicted.

The solver answers with a ranked list of outcomes, each keyed by an input
sequence the player might be following.  If one of them equals the plan, its
best adjustment is spliced onto the first ``reaction_time`` frames of the plan.
Those frames are identical in both sequences, so the splice is seamless.  If
none matches, the previous plan drives one more piece and the best fresh
outcome becomes the plan for the piece after.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .exceptions import SolverContractError
from .outcomes import Outcome, find_outcome


LOGGER = logging.getLogger(__name__)


class ReconciliationPhase(str, Enum):
    AWAITING_OUTCOME = "AwaitingOutcome"
    ON_PLAN = "OnPlan"
    MISPREDICTED = "Mispredicted"


@dataclass
class ReconciliationState:
    """Plan bookkeeping that persists across a whole game."""

    planned_sequence: Optional[str] = None
    active_sequence: str = ""
    pending_await: bool = True
    mispredicted: bool = False
    phase: ReconciliationPhase = ReconciliationPhase.AWAITING_OUTCOME
    mispredictions: int = 0


class ReconciliationController:
    """State machine deciding which input sequence drives the active piece."""

    def __init__(self, reaction_time: int) -> None:
        if reaction_time < 0:
            raise ValueError(f"reaction_time must be non-negative, got {reaction_time}")
        self.reaction_time = reaction_time
        self.state = ReconciliationState()

    @property
    def awaiting(self) -> bool:
        return self.state.pending_await

    def begin_request(self) -> None:
        """Enter ``AwaitingOutcome`` after a lock dispatched a solver request."""

        self.state.pending_await = True
        self.state.phase = ReconciliationPhase.AWAITING_OUTCOME

    def reconcile(self, outcomes: Sequence[Outcome]) -> str:
        """Choose the new active sequence from a best-first ``outcomes`` list.

        Returns the new active sequence.

        Raises:
            SolverContractError: If ``outcomes`` is empty, or the matched
                outcome has no adjustments, or its best adjustment has no
                follow-up plan.
        """

        if not outcomes:
            raise SolverContractError("Solver returned no outcomes")
        state = self.state
        if state.planned_sequence is None:
            # First response of the game: trust the best outcome outright.
            state.planned_sequence = outcomes[0].input_sequence

        planned = state.planned_sequence
        current = find_outcome(outcomes, planned)
        if current is None:
            self._recover(planned, outcomes[0])
        else:
            self._follow(planned, current)
        state.pending_await = False
        return state.active_sequence

    def _follow(self, planned: str, current: Outcome) -> None:
        if not current.adjustments:
            raise SolverContractError(
                f"Outcome {current.input_sequence!r} has an empty adjustments list"
            )
        best = current.adjustments[0]
        if best.follow_up is None:
            raise SolverContractError(
                f"Adjustment {best.input_sequence!r} has no follow-up plan"
            )
        state = self.state
        state.active_sequence = planned[: self.reaction_time] + best.input_sequence
        state.planned_sequence = best.follow_up.input_sequence
        state.mispredicted = False
        state.phase = ReconciliationPhase.ON_PLAN
        LOGGER.debug("On plan; next plan %r", state.planned_sequence)

    def _recover(self, planned: str, best: Outcome) -> None:
        state = self.state
        state.active_sequence = planned
        state.planned_sequence = best.input_sequence
        state.mispredicted = True
        state.mispredictions += 1
        state.phase = ReconciliationPhase.MISPREDICTED
        LOGGER.warning(
            "No outcome matched planned sequence %r; replaying it for one piece", planned
        )
