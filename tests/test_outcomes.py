from __future__ import annotations

import pytest

from tetris_autopilot.exceptions import SolverContractError
from tetris_autopilot.outcomes import Adjustment, Outcome, Plan, find_outcome, parse_outcomes


RESPONSE = [
    {
        "inputSequence": "..L...",
        "score": 12.5,
        "adjustments": [
            {
                "inputSequence": "R..",
                "score": 11,
                "followUp": {"inputSequence": "A.....", "score": 3},
            },
            {"inputSequence": "...", "score": 9, "followUp": None},
        ],
    },
    {"inputSequence": "......", "score": 2, "adjustments": []},
]


def test_parse_nested_outcomes() -> None:
    outcomes = parse_outcomes(RESPONSE)
    assert [o.input_sequence for o in outcomes] == ["..L...", "......"]
    best = outcomes[0]
    assert best.score == pytest.approx(12.5)
    assert best.adjustments[0] == Adjustment("R..", 11, Plan("A.....", 3))
    assert best.adjustments[1].follow_up is None
    assert outcomes[1].adjustments == ()


def test_missing_adjustments_defaults_to_empty() -> None:
    (outcome,) = parse_outcomes([{"inputSequence": "..", "score": 1}])
    assert outcome == Outcome("..", 1, ())


@pytest.mark.parametrize(
    "payload",
    [
        {"inputSequence": ".."},
        [".."],
        [{"score": 1}],
        [{"inputSequence": 5}],
        [{"inputSequence": "..", "score": "high"}],
        [{"inputSequence": "..", "score": True}],
        [{"inputSequence": "..", "adjustments": 5}],
        [{"inputSequence": "..", "adjustments": ["R"]}],
        [{"inputSequence": "..", "adjustments": [{"inputSequence": "R", "followUp": "x"}]}],
        [None],
    ],
)
def test_malformed_payloads_rejected(payload) -> None:
    with pytest.raises(SolverContractError):
        parse_outcomes(payload)


def test_find_outcome_returns_first_exact_match() -> None:
    outcomes = parse_outcomes(RESPONSE)
    assert find_outcome(outcomes, "......") is outcomes[1]
    assert find_outcome(outcomes, "..L..") is None


def test_outcomes_are_immutable() -> None:
    outcome = Outcome("..")
    with pytest.raises(AttributeError):
        outcome.input_sequence = "L"  # type: ignore[misc]
