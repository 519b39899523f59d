import random
from typing import List

import pytest
import kmpstep


@pytest.fixture
def sample_pattern():
    """Fixture that provides the default demo pattern."""
    return kmpstep.DEFAULT_PATTERN


@pytest.fixture
def sample_text():
    """Fixture that provides the default demo text."""
    return kmpstep.DEFAULT_TEXT


@pytest.fixture
def builder(sample_pattern):
    """Fixture that provides a fresh builder on the demo pattern."""
    return kmpstep.PrefixFunctionBuilder(sample_pattern)


@pytest.fixture
def matcher():
    """Fixture that provides a matcher for 'ABABA' over the demo text."""
    pattern = "ABABA"
    return kmpstep.KMPMatcher(kmpstep.DEFAULT_TEXT, pattern, kmpstep.compute_all(pattern))


@pytest.fixture
def rng():
    """Fixture that provides a seeded random generator for reproducible batteries."""
    return random.Random(20240611)


def brute_force_find(text: str, pattern: str, overlapping: bool = True) -> List[int]:
    """Reference search comparing the pattern at every offset."""
    if not pattern:
        return []
    starts = []
    pos = 0
    while pos + len(pattern) <= len(text):
        if text[pos : pos + len(pattern)] == pattern:
            starts.append(pos)
            pos += 1 if overlapping else len(pattern)
        else:
            pos += 1
    return starts


def brute_force_pi(pattern: str) -> List[int]:
    """Reference prefix function straight from the definition."""
    pi = []
    for i in range(len(pattern)):
        prefix = pattern[: i + 1]
        pi.append(
            max(k for k in range(len(prefix)) if prefix[:k] == prefix[len(prefix) - k :])
        )
    return pi


def random_string(rng: random.Random, max_len: int, alphabet: str = "AB") -> str:
    """Random string over a small alphabet so borders and matches are common."""
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, max_len)))
