from dataclasses import dataclass
from typing import List, Tuple

from .prefix import compute_all

DEFAULT_PATTERN = "ABACABAB"
DEFAULT_TEXT = "ABABABACABAABABA"


@dataclass(frozen=True)
class PatternExample:
    """A ready-made pattern showing one typical shape of pi."""

    label: str
    pattern: str
    description: str

    @property
    def pi(self) -> List[int]:
        return compute_all(self.pattern)


PATTERN_EXAMPLES: Tuple[PatternExample, ...] = (
    PatternExample(
        label="Monotonic",
        pattern="AAAAAA",
        description="pi grows by one at every index; every comparison matches.",
    ),
    PatternExample(
        label="Rise and fall",
        pattern="ABABAAC",
        description="pi climbs to the middle, then drops after a short fallback.",
    ),
    PatternExample(
        label="Long fallbacks",
        pattern="ABABACABABACABA",
        description="Forces repeated fallbacks along the pi-chain before growing again.",
    ),
    PatternExample(
        label="No borders",
        pattern="ABCDEFGH",
        description="All characters differ: pi stays 0 and no fallback ever happens.",
    ),
)


def get_example(label: str) -> PatternExample:
    """
    Look up an example by label, ignoring case.

    Raises:
        KeyError: If no example has that label
    """
    for example in PATTERN_EXAMPLES:
        if example.label.lower() == label.lower():
            return example
    raise KeyError(label)
