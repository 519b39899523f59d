import logging
from typing import List, Optional

from .matcher import KMPMatcher
from .prefix import PrefixFunctionBuilder, compute_all
from .validation import ensure_str

logger = logging.getLogger(__name__)


class Session:
    """A pattern, a text, and the builder and matcher derived from them.

    Changing the pattern discards pi, both step histories and the scan
    position. Changing the text only restarts the scan.

    Args:
        pattern: Pattern to analyse and search for (default: "")
        text: Text to search (default: "")
        strict: Strict mode for both builder and matcher (default: False)
        **matcher_options: Extra KMPMatcher keyword arguments
    """

    def __init__(
        self,
        pattern: str = "",
        text: str = "",
        strict: Optional[bool] = False,
        **matcher_options,
    ) -> None:
        self._strict = bool(strict)
        self._matcher_options = matcher_options
        self._builder = PrefixFunctionBuilder(pattern, strict=self._strict)
        self._text = ensure_str(text, "text")
        self._pi_cache: Optional[List[int]] = None
        self._matcher: Optional[KMPMatcher] = None

    @property
    def pattern(self) -> str:
        return self._builder.pattern

    @property
    def text(self) -> str:
        return self._text

    @property
    def builder(self) -> PrefixFunctionBuilder:
        return self._builder

    @property
    def pi(self) -> List[int]:
        """Finished pi for the pattern, from the builder once it is done."""
        if self._builder.done:
            return self._builder.pi
        if self._pi_cache is None:
            self._pi_cache = compute_all(self.pattern)
        return list(self._pi_cache)

    @property
    def matcher(self) -> KMPMatcher:
        """The current scan, created on first use."""
        if self._matcher is None:
            self._matcher = KMPMatcher(
                self._text,
                self.pattern,
                self.pi,
                strict=self._strict,
                **self._matcher_options,
            )
        return self._matcher

    def set_pattern(self, pattern: str) -> None:
        self._builder.reset(pattern)
        self._pi_cache = None
        self._matcher = None
        logger.debug("Session pattern set to %r", pattern)

    def set_text(self, text: str) -> None:
        self._text = ensure_str(text, "text")
        self._matcher = None
        logger.debug("Session text set (length %d)", len(text))

    def restart_search(self) -> KMPMatcher:
        """Throw away the scan position and history and return a fresh matcher."""
        self._matcher = None
        return self.matcher

    def find_all(self) -> List[int]:
        return KMPMatcher(
            self._text, self.pattern, self.pi, **self._matcher_options
        ).run()
