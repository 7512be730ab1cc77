"""Ranked solver outcomes.

The solver answers each request with a best-first list of :class:`Outcome`
objects.  Every outcome carries the adjustments the solver would make if the
player were following that outcome's input sequence, and each adjustment
carries the plan for the piece after it.  The nesting is fixed at two levels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .exceptions import SolverContractError


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SolverContractError(f"Expected {what} object, got {value!r}")
    return value


def _sequence(data: Mapping[str, Any]) -> str:
    value = data.get("inputSequence")
    if not isinstance(value, str):
        raise SolverContractError(f"Missing inputSequence in {dict(data)!r}")
    return value


def _score(data: Mapping[str, Any]) -> float:
    value = data.get("score", 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SolverContractError(f"Non-numeric score {value!r}")
    return value


@dataclass(frozen=True)
class Plan:
    """A follow-up plan for the next piece."""

    input_sequence: str
    score: float = 0

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Plan":
        return cls(_sequence(data), _score(data))


@dataclass(frozen=True)
class Adjustment:
    """Corrective sequence for one outcome, plus the plan that follows it."""

    input_sequence: str
    score: float = 0
    follow_up: Optional[Plan] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Adjustment":
        follow_up = data.get("followUp")
        return cls(
            _sequence(data),
            _score(data),
            Plan.from_json(_mapping(follow_up, "a followUp")) if follow_up is not None else None,
        )


@dataclass(frozen=True)
class Outcome:
    """A ranked candidate input sequence with its contingency adjustments."""

    input_sequence: str
    score: float = 0
    adjustments: Tuple[Adjustment, ...] = ()

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Outcome":
        adjustments = data.get("adjustments")
        if adjustments is None:
            adjustments = []
        elif not isinstance(adjustments, list):
            raise SolverContractError(f"Expected a list of adjustments, got {adjustments!r}")
        return cls(
            _sequence(data),
            _score(data),
            tuple(Adjustment.from_json(_mapping(item, "an adjustment")) for item in adjustments),
        )


def parse_outcomes(payload: Any) -> List[Outcome]:
    """Decode a solver response body (already JSON-decoded) into outcomes.

    Raises:
        SolverContractError: If ``payload`` is not a list of outcome objects.
    """

    if not isinstance(payload, list):
        raise SolverContractError(f"Expected a list of outcomes, got {type(payload).__name__}")
    outcomes: List[Outcome] = []
    for item in payload:
        outcomes.append(Outcome.from_json(_mapping(item, "an outcome")))
    return outcomes


def find_outcome(outcomes: Sequence[Outcome], input_sequence: str) -> Optional[Outcome]:
    """Return the first outcome whose input sequence equals ``input_sequence``."""

    return next((o for o in outcomes if o.input_sequence == input_sequence), None)

