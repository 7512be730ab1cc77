from __future__ import annotations

import asyncio
import json
from urllib.parse import parse_qs, urlparse

import pytest

from tetris_autopilot.exceptions import SolverContractError
from tetris_autopilot.game_state import GameState
from tetris_autopilot.rng import NESRandom
from tetris_autopilot.solver import SolverRequest, StackRabbitClient
from tetris_autopilot.tetromino import Tetromino, TetrominoType


def _request() -> SolverRequest:
    game = GameState(rng=NESRandom(5))
    game.active = Tetromino.spawn(TetrominoType.T)
    game.upcoming = TetrominoType.I
    game.board.set_cell(19, 0, 1)
    game.lines = 12
    return SolverRequest.from_game(game, level=19, reaction_time=15, tap_id=6)


def test_request_reflects_game() -> None:
    request = _request()
    assert request.current_piece is TetrominoType.T
    assert request.next_piece is TetrominoType.I
    assert request.lines == 12
    assert len(request.board) == 200
    assert request.board[190] == "1"


def test_query_parameters() -> None:
    params = _request().to_params()
    assert params["currentPiece"] == "T"
    assert params["nextPiece"] == "I"
    assert params["level"] == "19"
    assert params["lines"] == "12"
    assert params["reactionTime"] == "15"
    assert params["tapId"] == "6"


def test_next_piece_omitted_when_unknown() -> None:
    request = SolverRequest("0" * 200, TetrominoType.O, None, 0, 0, 0, 1)
    assert "nextPiece" not in request.to_params()


def test_url_for_joins_base_and_endpoint() -> None:
    client = StackRabbitClient("http://solver:3000/", endpoint="/engine-movelist")
    url = urlparse(client.url_for(_request()))
    assert url.netloc == "solver:3000"
    assert url.path == "/engine-movelist"
    assert parse_qs(url.query)["currentPiece"] == ["T"]


def test_fetch_outcomes_decodes_body(monkeypatch) -> None:
    body = json.dumps(
        [
            {
                "inputSequence": "..L",
                "score": 4,
                "adjustments": [
                    {"inputSequence": "R", "score": 3, "followUp": {"inputSequence": "A", "score": 1}}
                ],
            }
        ]
    ).encode()
    client = StackRabbitClient()
    seen = []

    def fake_get(url: str) -> bytes:
        seen.append(url)
        return body

    monkeypatch.setattr(client, "_get", fake_get)
    outcomes = asyncio.run(client.fetch_outcomes(_request()))
    assert len(seen) == 1
    assert outcomes[0].input_sequence == "..L"
    assert outcomes[0].adjustments[0].follow_up.input_sequence == "A"


def test_invalid_json_is_a_contract_error(monkeypatch) -> None:
    client = StackRabbitClient()
    monkeypatch.setattr(client, "_get", lambda url: b"<html>busy</html>")
    with pytest.raises(SolverContractError):
        asyncio.run(client.fetch_outcomes(_request()))
