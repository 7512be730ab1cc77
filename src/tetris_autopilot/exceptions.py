"""Exceptions raised by the autopilot engine.

All of them are fatal for the current game: the tick loop marks the game as
aborted and lets the error reach its caller.  Mispredictions are not errors and
never show up here.
"""


class AutopilotError(Exception):
    """Base class for fatal autopilot errors."""


class SolverContractError(AutopilotError):
    """The solver returned data the engine cannot act on."""


class InputContractError(AutopilotError):
    """An input sequence held an unknown frame character or was read past its end."""


class BoardInvariantError(AutopilotError):
    """The board reported an impossible state, such as clearing five rows at once."""
