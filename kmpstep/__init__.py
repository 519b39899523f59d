"""Step-by-step prefix function construction and Knuth-Morris-Pratt search."""

from .debugger import ALGORITHM_LINES, active_lines, watch
from .errors import (
    InvalidInputError,
    KMPStepError,
    MatchPendingError,
    NoHistoryError,
    PrecomputationRequiredError,
    StepAfterTerminalError,
)
from .examples import DEFAULT_PATTERN, DEFAULT_TEXT, PATTERN_EXAMPLES, PatternExample, get_example
from .history import StepHistory
from .matcher import (
    KMPMatcher,
    MatchEvent,
    MatcherState,
    ScanAction,
    ScanStep,
    advance_matcher,
    find_all,
    fold_case,
    new_matcher,
)
from .prefix import (
    BuilderState,
    Phase,
    PrefixFunctionBuilder,
    PrefixStep,
    advance_builder,
    compute_all,
    new_builder,
    prefix_chain,
)
from .session import Session

__version__ = "0.1.0"

__all__ = [
    "ALGORITHM_LINES",
    "BuilderState",
    "DEFAULT_PATTERN",
    "DEFAULT_TEXT",
    "InvalidInputError",
    "KMPMatcher",
    "KMPStepError",
    "MatchEvent",
    "MatchPendingError",
    "MatcherState",
    "NoHistoryError",
    "PATTERN_EXAMPLES",
    "PatternExample",
    "Phase",
    "PrecomputationRequiredError",
    "PrefixFunctionBuilder",
    "PrefixStep",
    "ScanAction",
    "ScanStep",
    "Session",
    "StepAfterTerminalError",
    "StepHistory",
    "active_lines",
    "advance_builder",
    "advance_matcher",
    "compute_all",
    "find_all",
    "fold_case",
    "get_example",
    "new_builder",
    "new_matcher",
    "prefix_chain",
    "watch",
]
