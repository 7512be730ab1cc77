"""Frame characters and the cursor that plays them back.

Solver input sequences use one character per frame:

=====  ==========================
Char   Action
=====  ==========================
``.``  wait
``A``  rotate right
``B``  rotate left
``L``  shift left
``R``  shift right
``E``  shift left + rotate right
``F``  shift left + rotate left
``I``  shift right + rotate right
``G``  shift right + rotate left
=====  ==========================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .exceptions import InputContractError


class Rotation(str, Enum):
    RIGHT = "Right"
    LEFT = "Left"

    @property
    def direction(self) -> int:
        return 1 if self is Rotation.RIGHT else -1


class Shift(str, Enum):
    RIGHT = "Right"
    LEFT = "Left"

    @property
    def dx(self) -> int:
        return 1 if self is Shift.RIGHT else -1


@dataclass(frozen=True)
class FrameInput:
    """At most one rotation and one shift applied during a single frame."""

    rotation: Optional[Rotation] = None
    shift: Optional[Shift] = None


WAIT = "."

FRAME_INPUTS: Dict[str, FrameInput] = {
    WAIT: FrameInput(),
    "A": FrameInput(rotation=Rotation.RIGHT),
    "B": FrameInput(rotation=Rotation.LEFT),
    "L": FrameInput(shift=Shift.LEFT),
    "R": FrameInput(shift=Shift.RIGHT),
    "E": FrameInput(rotation=Rotation.RIGHT, shift=Shift.LEFT),
    "F": FrameInput(rotation=Rotation.LEFT, shift=Shift.LEFT),
    "I": FrameInput(rotation=Rotation.RIGHT, shift=Shift.RIGHT),
    "G": FrameInput(rotation=Rotation.LEFT, shift=Shift.RIGHT),
}


def frame_input(char: str) -> FrameInput:
    """Decode a single frame character.

    Raises:
        InputContractError: If ``char`` is not part of the frame alphabet.
    """

    try:
        return FRAME_INPUTS[char]
    except KeyError:
        raise InputContractError(f"Unknown frame character {char!r}") from None


class InputCursor:
    """Holds the active input sequence and hands it out one frame at a time."""

    def __init__(self, sequence: str = "") -> None:
        self._sequence = sequence

    def load(self, sequence: str) -> None:
        """Replace the active sequence, discarding whatever was left."""

        self._sequence = sequence

    @property
    def remaining(self) -> str:
        return self._sequence

    @property
    def exhausted(self) -> bool:
        return not self._sequence

    def __len__(self) -> int:
        return len(self._sequence)

    def next_char(self) -> str:
        """Remove and return the first character of the sequence.

        Raises:
            InputContractError: If the sequence is already exhausted.
        """

        if not self._sequence:
            raise InputContractError("Input sequence read past its end")
        char, self._sequence = self._sequence[0], self._sequence[1:]
        return char
