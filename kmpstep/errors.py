class KMPStepError(Exception):
    """Base class for every error raised by kmpstep."""


class InvalidInputError(KMPStepError, ValueError):
    """A pattern, text or prefix array that kmpstep cannot work with.

    Any ``str`` is a valid pattern or text, including the empty string.
    Non-string inputs and prefix arrays holding values outside
    ``0 <= pi[i] <= i`` are rejected.
    """


class PrecomputationRequiredError(KMPStepError, ValueError):
    """The matcher was given no prefix array, or one of the wrong length."""


class NoHistoryError(KMPStepError):
    """``step_back()`` was called with nothing to undo."""


class StepAfterTerminalError(KMPStepError):
    """``step()`` was called on a finished run while in strict mode."""


class MatchPendingError(KMPStepError):
    """``step()`` was called while a reported match awaits acknowledgement."""
