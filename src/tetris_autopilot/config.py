"""Autopilot configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class AutopilotConfig:
    """Tunable settings for an autopilot game."""

    start_level: int = 19
    reaction_time: int = 15  # frames before the player can react to the next piece
    tap_id: int = 6  # tap-speed identifier understood by the solver
    warmup_frames: int = 90  # frames to idle before the first input is played
    fps: int = 60
    seed: Optional[int] = None
    solver_url: str = "http://localhost:3000"
    solver_endpoint: str = "engine-movelist"
    solver_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.start_level < 0:
            raise ValueError(f"start_level must be non-negative, got {self.start_level}")
        if self.reaction_time < 0:
            raise ValueError(f"reaction_time must be non-negative, got {self.reaction_time}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
