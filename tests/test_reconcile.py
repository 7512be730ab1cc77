from __future__ import annotations

import logging

import pytest

from tetris_autopilot.exceptions import SolverContractError
from tetris_autopilot.outcomes import Adjustment, Outcome, Plan
from tetris_autopilot.reconcile import ReconciliationController, ReconciliationPhase


PLAN = "AAAAAAAAAAAAAAA...B..."


def _outcome(sequence: str, adjustment: str = "...", follow_up: str = "L.....") -> Outcome:
    return Outcome(sequence, 1, (Adjustment(adjustment, 1, Plan(follow_up)),))


def _controller(reaction_time: int = 15, plan: str = PLAN) -> ReconciliationController:
    controller = ReconciliationController(reaction_time)
    controller.state.planned_sequence = plan
    return controller


def test_first_response_adopts_best_outcome() -> None:
    controller = ReconciliationController(reaction_time=3)
    assert controller.awaiting
    active = controller.reconcile([_outcome("RRR...", "R.", "B...."), _outcome("......")])
    assert active == "RRR" + "R."
    assert controller.state.planned_sequence == "B...."
    assert controller.state.phase is ReconciliationPhase.ON_PLAN
    assert not controller.awaiting


def test_match_splices_adjustment_after_reaction_time() -> None:
    controller = _controller()
    controller.begin_request()
    outcomes = [_outcome("LLLL"), _outcome(PLAN, "CCC", "next")]
    active = controller.reconcile(outcomes)
    assert active == "A" * 15 + "CCC"
    assert active[:15] == PLAN[:15]
    assert controller.state.active_sequence == active
    assert controller.state.planned_sequence == "next"
    assert not controller.state.mispredicted


def test_uses_best_ranked_adjustment() -> None:
    controller = _controller(reaction_time=2, plan="..R")
    outcome = Outcome(
        "..R",
        1,
        (
            Adjustment("L", 5, Plan("first")),
            Adjustment("R", 4, Plan("second")),
        ),
    )
    assert controller.reconcile([outcome]) == "..L"
    assert controller.state.planned_sequence == "first"


def test_mismatch_replays_previous_plan(caplog) -> None:
    controller = _controller()
    controller.begin_request()
    with caplog.at_level(logging.WARNING, logger="tetris_autopilot.reconcile"):
        active = controller.reconcile([_outcome("B....."), _outcome("......")])
    assert active == PLAN
    assert controller.state.mispredicted
    assert controller.state.phase is ReconciliationPhase.MISPREDICTED
    assert controller.state.planned_sequence == "B....."
    assert controller.state.mispredictions == 1
    assert not controller.awaiting
    assert "No outcome matched" in caplog.text


def test_flag_clears_once_back_on_plan() -> None:
    controller = _controller()
    controller.reconcile([_outcome("B.....")])
    assert controller.state.mispredicted
    controller.begin_request()
    controller.reconcile([_outcome("B.....", "R", "L")])
    assert not controller.state.mispredicted
    assert controller.state.mispredictions == 1


def test_empty_adjustments_are_fatal() -> None:
    controller = _controller()
    with pytest.raises(SolverContractError):
        controller.reconcile([Outcome(PLAN, 1, ())])
    assert controller.awaiting


def test_missing_follow_up_is_fatal() -> None:
    controller = _controller()
    with pytest.raises(SolverContractError):
        controller.reconcile([Outcome(PLAN, 1, (Adjustment("CCC", 1, None),))])


def test_empty_outcome_list_is_fatal() -> None:
    with pytest.raises(SolverContractError):
        _controller().reconcile([])


def test_negative_reaction_time_rejected() -> None:
    with pytest.raises(ValueError):
        ReconciliationController(-1)
