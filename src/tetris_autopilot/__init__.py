"""Frame-synchronised Tetris autopilot driven by an external placement solver."""

from .board import Board
from .tetromino import Tetromino, TetrominoType, shape_blocks
from .game_state import GameState
from .utils import can_move, drop_interval_frames, level_for_lines, render_grid
from .scoring import ScoreKeeper
from .inputs import FrameInput, InputCursor, Rotation, Shift, frame_input
from .outcomes import Adjustment, Outcome, Plan, parse_outcomes
from .reconcile import ReconciliationController, ReconciliationPhase, ReconciliationState
from .solver import SolverClient, SolverRequest, StackRabbitClient
from .config import AutopilotConfig
from .autopilot import Autopilot, FrameView
from .exceptions import (
    AutopilotError,
    BoardInvariantError,
    InputContractError,
    SolverContractError,
)

__all__ = [
    "Board",
    "Tetromino",
    "TetrominoType",
    "GameState",
    "ScoreKeeper",
    "FrameInput",
    "InputCursor",
    "Rotation",
    "Shift",
    "Outcome",
    "Adjustment",
    "Plan",
    "ReconciliationController",
    "ReconciliationPhase",
    "ReconciliationState",
    "SolverClient",
    "SolverRequest",
    "StackRabbitClient",
    "AutopilotConfig",
    "Autopilot",
    "FrameView",
    "AutopilotError",
    "BoardInvariantError",
    "InputContractError",
    "SolverContractError",
    "can_move",
    "drop_interval_frames",
    "frame_input",
    "level_for_lines",
    "parse_outcomes",
    "render_grid",
    "shape_blocks",
]
