class LudoError(Exception):
    """Base exception for rules engine errors."""

    pass


class IllegalActionError(LudoError):
    """Raised when a roll or selection is not allowed in the current state."""

    pass


class InvariantViolation(LudoError):
    """Raised when a piece position leaves its legal categories (fatal)."""

    pass
