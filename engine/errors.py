"""Fatal conditions raised by the Temple Antics engine."""


class TempleError(Exception):
    """Base class for engine errors that end a session."""


class InvariantViolation(TempleError):
    """The engine reached a state its tables do not cover."""


class UnknownWall(InvariantViolation):
    """A (cell, direction) pair has no registered wall identity."""

    def __init__(self, cell: int, direction) -> None:
        super().__init__(f"No wall registered for cell {cell} ({direction.value})")
        self.cell = cell
        self.direction = direction


class PlayerDied(TempleError):
    """Health reached 0."""

    def __init__(self, cause: str, turn: int) -> None:
        super().__init__(f"Player died on turn {turn}: {cause}")
        self.cause = cause
        self.turn = turn


class SessionEnded(TempleError):
    """Input arrived after a fatal condition ended the session."""
