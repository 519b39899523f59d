"""
Prefix function (pi) construction, in one shot or one transition at a time.

For a pattern ``s``, ``pi[i]`` is the length of the longest proper prefix of
``s[0..i]`` that is also a suffix of it. The stepwise builder walks the same
algorithm as :func:`compute_all` but stops after every comparison, fallback
and assignment so each one can be inspected and undone.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import StepAfterTerminalError
from .history import StepHistory
from .validation import ensure_str

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Which transition the next ``step()`` of the builder executes."""

    IDLE = "idle"
    COMPARING = "comparing"
    FALLING_BACK = "falling_back"
    EXTENDING_MATCH = "extending_match"
    COMMITTED = "committed"
    DONE = "done"


@dataclass(frozen=True)
class BuilderState:
    """Scalar snapshot of the builder.

    ``filled`` counts the pi entries committed so far; the values themselves
    live in the builder's append-only log.
    """

    i: int
    j: int
    phase: Phase
    filled: int

    @property
    def terminal(self) -> bool:
        return self.phase in (Phase.IDLE, Phase.DONE)


@dataclass(frozen=True)
class PrefixStep:
    """Outcome of one builder step.

    Attributes:
        phase: Phase after the step
        i: Index of the pi entry being computed
        j: Candidate border length after the step
        value: pi[i] if it is committed, otherwise None
        written: Whether this step is the one that committed pi[i]
    """

    phase: Phase
    i: int
    j: int
    value: Optional[int]
    written: bool = False


IDLE_STATE = BuilderState(i=0, j=0, phase=Phase.IDLE, filled=0)


def initial_state(pattern: str) -> BuilderState:
    n = len(pattern)
    if n == 0:
        return BuilderState(i=0, j=0, phase=Phase.DONE, filled=0)
    if n == 1:
        return BuilderState(i=0, j=0, phase=Phase.DONE, filled=1)
    return BuilderState(i=1, j=0, phase=Phase.COMPARING, filled=1)


def advance_builder(
    pattern: str, pi: Sequence[int], state: BuilderState
) -> Tuple[BuilderState, Optional[int]]:
    """
    Execute exactly one transition of the prefix function state machine.

    Args:
        pattern: The pattern being processed
        pi: Committed pi values; only ``pi[:state.filled]`` is read
        state: Current builder state

    Returns:
        (next_state, committed) where committed is the value written to
        ``pi[state.i]`` by this transition, or None
    """
    i, j = state.i, state.j
    if state.phase is Phase.COMPARING:
        if pattern[i] == pattern[j]:
            return replace(state, phase=Phase.EXTENDING_MATCH), None
        if j > 0:
            return replace(state, phase=Phase.FALLING_BACK), None
        return replace(state, phase=Phase.COMMITTED, filled=i + 1), 0
    if state.phase is Phase.FALLING_BACK:
        return replace(state, j=pi[j - 1], phase=Phase.COMPARING), None
    if state.phase is Phase.EXTENDING_MATCH:
        return replace(state, j=j + 1, phase=Phase.COMMITTED, filled=i + 1), j + 1
    if state.phase is Phase.COMMITTED:
        if i + 1 < len(pattern):
            return replace(state, i=i + 1, phase=Phase.COMPARING), None
        return replace(state, phase=Phase.DONE), None
    return state, None


def compute_all(pattern: str) -> List[int]:
    """
    Compute the whole prefix function of a pattern.

    Each fallback shortens j, and j grows by at most one per index, so the
    total number of fallbacks is bounded by the pattern length.

    Args:
        pattern: Pattern to analyse (may be empty)

    Returns:
        List of len(pattern) border lengths

    Raises:
        InvalidInputError: If pattern is not a str
    """
    ensure_str(pattern, "pattern")
    pi = [0] * len(pattern)
    j = 0
    for i in range(1, len(pattern)):
        while j > 0 and pattern[i] != pattern[j]:
            j = pi[j - 1]
        if pattern[i] == pattern[j]:
            j += 1
        pi[i] = j
    return pi


def prefix_chain(q: int, pi: Sequence[int]) -> List[int]:
    """
    List the border candidates tried after a mismatch at length q.

    Longest first: ``[q, pi[q-1], pi[pi[q-1]-1], ..., 0]``.
    """
    chain = []
    while q > 0:
        chain.append(q)
        q = pi[q - 1]
    chain.append(0)
    return chain


class PrefixFunctionBuilder:
    """Stepwise prefix function construction with undo.

    Args:
        pattern: Pattern to build pi for; None leaves the builder idle
        strict: Raise StepAfterTerminalError when stepping a finished
            builder instead of ignoring the call (default: False)
    """

    def __init__(self, pattern: Optional[str] = None, strict: Optional[bool] = False) -> None:
        self._strict = bool(strict)
        self._history: StepHistory[BuilderState] = StepHistory()
        self._pattern = ""
        self._log: List[int] = []
        self._state = IDLE_STATE
        if pattern is not None:
            self.reset(pattern)

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def done(self) -> bool:
        return self._state.phase is Phase.DONE

    @property
    def committed(self) -> List[int]:
        """pi values computed so far."""
        return list(self._log)

    @property
    def pi(self) -> List[int]:
        """pi of pattern length, with 0 for entries not yet computed."""
        return self._log + [0] * (len(self._pattern) - len(self._log))

    @property
    def preview(self) -> List[int]:
        """pi row including the value an in-progress match extension would write."""
        row = self.pi
        if self._state.phase is Phase.EXTENDING_MATCH:
            row[self._state.i] = self._state.j + 1
        return row

    @property
    def can_step_back(self) -> bool:
        return bool(self._history)

    @property
    def steps_taken(self) -> int:
        return len(self._history)

    def reset(self, pattern: str) -> PrefixStep:
        """
        Start over on a (possibly new) pattern, discarding pi and history.

        Args:
            pattern: Any string, including the empty one

        Returns:
            The initial step view

        Raises:
            InvalidInputError: If pattern is not a str
        """
        self._pattern = ensure_str(pattern, "pattern")
        self._state = initial_state(self._pattern)
        self._log = [0] if self._pattern else []
        self._history.clear()
        logger.debug(
            "Builder reset: pattern=%r n=%d phase=%s",
            self._pattern,
            len(self._pattern),
            self._state.phase.value,
        )
        return self._view()

    def step(self) -> PrefixStep:
        """
        Advance one transition, recording the current state for step_back().

        Returns:
            The new phase and the pi entry for the current index

        Raises:
            StepAfterTerminalError: In strict mode, if the builder is idle or done
        """
        before = self._state
        if before.terminal:
            if self._strict:
                raise StepAfterTerminalError(
                    f"Builder is {before.phase.value}; reset it before stepping"
                )
            logger.debug("Ignoring step on %s builder", before.phase.value)
            return self._view()

        after, committed = advance_builder(self._pattern, self._log, before)
        self._history.push(before)
        if committed is not None:
            self._log.append(committed)
        self._state = after
        logger.debug(
            "Builder %s -> %s (i=%d, j=%d)",
            before.phase.value,
            after.phase.value,
            after.i,
            after.j,
        )
        return self._view(written=committed is not None)

    def step_back(self) -> PrefixStep:
        """
        Restore the state from before the last step.

        Raises:
            NoHistoryError: If no step has been taken since the last reset
        """
        previous = self._history.pop()
        del self._log[previous.filled:]
        self._state = previous
        logger.debug(
            "Builder stepped back to %s (i=%d, j=%d)",
            previous.phase.value,
            previous.i,
            previous.j,
        )
        return self._view()

    def run(self) -> List[int]:
        """Step until done and return the finished pi."""
        while not self._state.terminal:
            self.step()
        return self.pi

    def preview_at(self, i: int) -> int:
        """
        Read pi[i] as it would look if the pending match extension completed.

        Args:
            i: Pattern index

        Returns:
            j + 1 while extending a match at index i, otherwise the current
            value (0 for entries not computed yet)

        Raises:
            IndexError: If i is outside the pattern
        """
        if not 0 <= i < len(self._pattern):
            raise IndexError(f"index {i} out of range for pattern of length {len(self._pattern)}")
        return self.preview[i]

    def _view(self, written: bool = False) -> PrefixStep:
        state = self._state
        value = self._log[state.i] if state.i < state.filled else None
        return PrefixStep(
            phase=state.phase, i=state.i, j=state.j, value=value, written=written
        )

    def __repr__(self) -> str:
        return (
            f"PrefixFunctionBuilder(pattern={self._pattern!r}, "
            f"phase={self._state.phase.value}, pi={self.pi})"
        )


def new_builder(pattern: str, strict: Optional[bool] = False) -> PrefixFunctionBuilder:
    """Create a builder positioned at the start of ``pattern``."""
    return PrefixFunctionBuilder(pattern, strict=strict)
