"""
Knuth-Morris-Pratt scan driven one primitive step at a time.

Every step either extends the current match by one character, falls back
along the pi-chain, or moves past a character that cannot start a match.
A completed match is reported before the scan resumes, and by default the
matcher waits for the caller to acknowledge it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import MatchPendingError, StepAfterTerminalError
from .history import StepHistory
from .prefix import PrefixFunctionBuilder, compute_all
from .validation import ensure_prefix_array, ensure_str

logger = logging.getLogger(__name__)


class ScanAction(Enum):
    """What a matcher step did."""

    EXTEND = "extend"
    FALLBACK = "fallback"
    ADVANCE = "advance"
    REPORT = "report"
    MATCH = "match"
    RESUME = "resume"
    SUSPENDED = "suspended"
    NOOP = "noop"


@dataclass(frozen=True)
class MatchEvent:
    """An occurrence of the pattern at ``text[start:end]``."""

    start: int
    end: int


@dataclass(frozen=True)
class MatcherState:
    """Scalar snapshot of the scan.

    Attributes:
        t: Index of the next text character to compare
        j2: Number of pattern characters currently matched
        pending: Start of a reported match awaiting acknowledgement
    """

    t: int
    j2: int
    pending: Optional[int] = None


@dataclass(frozen=True)
class ScanStep:
    """Outcome of one matcher step."""

    action: ScanAction
    t: int
    j2: int
    match: Optional[MatchEvent] = None


INITIAL_STATE = MatcherState(t=0, j2=0)


def is_terminal(
    text: str, pattern: str, state: MatcherState, stop_when_unfit: bool = False
) -> bool:
    """
    Tell whether the scan can make no further progress.

    An empty pattern never scans. With ``stop_when_unfit`` the scan also ends
    as soon as the pattern, aligned at ``t - j2``, runs past the end of the text.
    """
    if state.pending is not None:
        return False
    m = len(pattern)
    if m == 0 or state.t >= len(text):
        return True
    return stop_when_unfit and state.t - state.j2 + m > len(text)


def resume_after_match(
    pi: Sequence[int], state: MatcherState, overlapping: bool = True
) -> MatcherState:
    """Drop a completed match back to its longest border (or to 0)."""
    j2 = pi[state.j2 - 1] if overlapping else 0
    return MatcherState(t=state.t, j2=j2)


def advance_matcher(
    text: str,
    pattern: str,
    pi: Sequence[int],
    state: MatcherState,
    overlapping: bool = True,
    pause_on_match: bool = True,
) -> Tuple[MatcherState, ScanAction, Optional[MatchEvent]]:
    """
    Execute one KMP step.

    Args:
        text: Text being scanned
        pattern: Pattern to look for; an empty pattern never advances
        pi: Prefix function of pattern
        state: Current scan state; a finished one is returned unchanged
        overlapping: Resume via pi after a match instead of restarting at 0
        pause_on_match: Stop in a pending state after reporting a match

    Returns:
        (next_state, action, match) where match is set only when this step
        completed an occurrence
    """
    if state.pending is not None:
        return state, ScanAction.SUSPENDED, None
    if not pattern or state.t >= len(text):
        return state, ScanAction.NOOP, None

    t, j2 = state.t, state.j2
    if text[t] == pattern[j2]:
        t, j2 = t + 1, j2 + 1
        if j2 < len(pattern):
            return MatcherState(t=t, j2=j2), ScanAction.EXTEND, None
        event = MatchEvent(start=t - len(pattern), end=t)
        reached = MatcherState(t=t, j2=j2, pending=event.start)
        if pause_on_match:
            return reached, ScanAction.REPORT, event
        return resume_after_match(pi, reached, overlapping), ScanAction.MATCH, event
    if j2 > 0:
        return MatcherState(t=t, j2=pi[j2 - 1]), ScanAction.FALLBACK, None
    return MatcherState(t=t + 1, j2=0), ScanAction.ADVANCE, None


def fold_case(value: str) -> str:
    """Upper-case each character, keeping those whose upper case is longer."""
    return "".join(
        upper if len(upper) == 1 else ch
        for ch, upper in ((ch, ch.upper()) for ch in value)
    )


def find_all(
    text: str,
    pattern: str,
    pi: Optional[Sequence[int]] = None,
    overlapping: Optional[bool] = True,
    case_insensitive: Optional[bool] = False,
) -> List[int]:
    """
    Find every occurrence of pattern in text.

    Args:
        text: Text to search
        pattern: Pattern to search for; an empty pattern matches nowhere
        pi: Prefix function of pattern (default: computed here)
        overlapping: Whether occurrences may overlap (default: True)
        case_insensitive: Compare upper-cased text and pattern, using the
            prefix function of the upper-cased pattern (default: False)

    Returns:
        Ascending list of 0-based start positions

    Raises:
        InvalidInputError: If text or pattern is not a str, or pi is malformed
        PrecomputationRequiredError: If pi does not match the pattern length
    """
    ensure_str(text, "text")
    ensure_str(pattern, "pattern")
    pi = ensure_prefix_array(compute_all(pattern) if pi is None else pi, pattern)
    if case_insensitive:
        text, pattern = fold_case(text), fold_case(pattern)
        pi = compute_all(pattern)
    m = len(pattern)
    if m == 0:
        return []

    starts = []
    j = 0
    for t, ch in enumerate(text):
        while j > 0 and ch != pattern[j]:
            j = pi[j - 1]
        if ch == pattern[j]:
            j += 1
            if j == m:
                starts.append(t - m + 1)
                j = pi[j - 1] if overlapping else 0
    return starts


class KMPMatcher:
    """Stepwise KMP scan with undo.

    Args:
        text: Text to scan
        pattern: Pattern to look for
        pi: Prefix function of pattern; never modified
        overlapping: Whether to find overlapping matches (default: True)
        pause_on_match: Wait for acknowledge() after each reported match
            (default: True)
        stop_when_unfit: End the scan once the pattern no longer fits in the
            rest of the text (default: False)
        case_insensitive: Compare upper-cased text and pattern; pi is then
            recomputed for the upper-cased pattern (default: False)
        strict: Raise instead of ignoring steps on a finished or suspended
            scan (default: False)

    Raises:
        InvalidInputError: If text or pattern is not a str, or pi is malformed
        PrecomputationRequiredError: If pi is missing or has the wrong length
    """

    def __init__(
        self,
        text: str,
        pattern: str,
        pi: Optional[Sequence[int]],
        overlapping: Optional[bool] = True,
        pause_on_match: Optional[bool] = True,
        stop_when_unfit: Optional[bool] = False,
        case_insensitive: Optional[bool] = False,
        strict: Optional[bool] = False,
    ) -> None:
        self._overlapping = bool(overlapping)
        self._pause_on_match = bool(pause_on_match)
        self._stop_when_unfit = bool(stop_when_unfit)
        self._case_insensitive = bool(case_insensitive)
        self._strict = bool(strict)
        self._history: StepHistory[MatcherState] = StepHistory()
        self.reset(text, pattern, pi)

    @classmethod
    def from_builder(cls, builder: PrefixFunctionBuilder, text: str, **options) -> "KMPMatcher":
        """Scan ``text`` for the builder's pattern using its current pi."""
        return cls(text, builder.pattern, builder.pi, **options)

    @property
    def overlapping(self) -> bool:
        return self._overlapping

    @property
    def pause_on_match(self) -> bool:
        return self._pause_on_match

    @property
    def stop_when_unfit(self) -> bool:
        return self._stop_when_unfit

    @property
    def case_insensitive(self) -> bool:
        return self._case_insensitive

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def text(self) -> str:
        return self._text

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def pi(self) -> Tuple[int, ...]:
        """Prefix function the scan falls back with."""
        return self._pi

    @property
    def state(self) -> MatcherState:
        return self._state

    @property
    def alignment(self) -> int:
        """Text offset the pattern is currently aligned with."""
        return self._state.t - self._state.j2

    @property
    def pending_match(self) -> Optional[MatchEvent]:
        start = self._state.pending
        if start is None:
            return None
        return MatchEvent(start=start, end=start + len(self._pattern))

    @property
    def done(self) -> bool:
        return is_terminal(
            self._scan_text, self._scan_pattern, self._state, self._stop_when_unfit
        )

    @property
    def can_step_back(self) -> bool:
        return bool(self._history)

    @property
    def steps_taken(self) -> int:
        return len(self._history)

    def reset(
        self, text: str, pattern: str, pi: Optional[Sequence[int]]
    ) -> ScanStep:
        """
        Start a fresh scan, discarding history.

        Raises:
            InvalidInputError: If text or pattern is not a str, or pi is malformed
            PrecomputationRequiredError: If pi is missing or has the wrong length
        """
        self._text = ensure_str(text, "text")
        self._pattern = ensure_str(pattern, "pattern")
        self._pi = ensure_prefix_array(pi, self._pattern)
        self._scan_text, self._scan_pattern = self._text, self._pattern
        if self._case_insensitive:
            self._scan_text = fold_case(self._text)
            self._scan_pattern = fold_case(self._pattern)
            self._pi = tuple(compute_all(self._scan_pattern))
        self._state = INITIAL_STATE
        self._history.clear()
        logger.debug(
            "Matcher reset: text length %d, pattern=%r",
            len(self._text),
            self._pattern,
        )
        return self._view(ScanAction.NOOP)

    def step(self) -> ScanStep:
        """
        Perform one comparison, fallback or advance.

        Returns:
            What the step did and the resulting position

        Raises:
            MatchPendingError: In strict mode, if a match awaits acknowledge()
            StepAfterTerminalError: In strict mode, if the scan is finished
        """
        before = self._state
        if before.pending is not None:
            if self._strict:
                raise MatchPendingError(
                    f"Match at {before.pending} must be acknowledged first"
                )
            logger.debug("Ignoring step while match at %d is pending", before.pending)
            return self._view(ScanAction.SUSPENDED)
        if self.done:
            if self._strict:
                raise StepAfterTerminalError("Scan is finished; reset it before stepping")
            logger.debug("Ignoring step on finished scan")
            return self._view(ScanAction.NOOP)

        after, action, event = advance_matcher(
            self._scan_text,
            self._scan_pattern,
            self._pi,
            before,
            overlapping=self._overlapping,
            pause_on_match=self._pause_on_match,
        )
        self._history.push(before)
        self._state = after
        if event is not None:
            logger.info("Match found at %d", event.start)
        logger.debug("Matcher %s: t=%d j2=%d", action.value, after.t, after.j2)
        return self._view(action, event)

    def acknowledge(self) -> ScanStep:
        """
        Resume scanning after a reported match by falling back along pi.

        Recorded as its own step so it can be undone. Without a pending
        match this is a no-op.
        """
        before = self._state
        if before.pending is None:
            logger.debug("Nothing to acknowledge")
            return self._view(ScanAction.NOOP)
        self._history.push(before)
        self._state = resume_after_match(self._pi, before, self._overlapping)
        logger.debug("Matcher resumed with j2=%d", self._state.j2)
        return self._view(ScanAction.RESUME)

    def step_back(self) -> ScanStep:
        """
        Restore the state from before the last step or acknowledgement.

        Raises:
            NoHistoryError: If nothing has happened since the last reset
        """
        self._state = self._history.pop()
        logger.debug("Matcher stepped back to t=%d j2=%d", self._state.t, self._state.j2)
        return self._view(ScanAction.NOOP, self.pending_match)

    def run(self) -> List[int]:
        """Scan to the end, acknowledging matches, and return their starts."""
        starts = []
        while not self.done:
            if self._state.pending is not None:
                self.acknowledge()
                continue
            result = self.step()
            if result.match is not None:
                starts.append(result.match.start)
        return starts

    def _view(self, action: ScanAction, match: Optional[MatchEvent] = None) -> ScanStep:
        return ScanStep(action=action, t=self._state.t, j2=self._state.j2, match=match)

    def __repr__(self) -> str:
        return (
            f"KMPMatcher(pattern={self._pattern!r}, t={self._state.t}, "
            f"j2={self._state.j2}, pending={self._state.pending})"
        )


def new_matcher(
    text: str, pattern: str, pi: Optional[Sequence[int]], **options
) -> KMPMatcher:
    """Create a matcher at the start of ``text``; see KMPMatcher for options."""
    return KMPMatcher(text, pattern, pi, **options)
