import pytest
import kmpstep
from conftest import brute_force_pi, random_string


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("ABACABAB", [0, 0, 1, 0, 1, 2, 3, 2]),
        ("AAAAAA", [0, 1, 2, 3, 4, 5]),
        ("ABCDEFGH", [0, 0, 0, 0, 0, 0, 0, 0]),
        ("ABABA", [0, 0, 1, 2, 3]),
        ("ABABAAC", [0, 0, 1, 2, 3, 1, 0]),
        ("ABABACABABACABA", [0, 0, 1, 2, 3, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9]),
        ("A", [0]),
        ("", []),
    ],
)
def test_known_prefix_functions(pattern, expected):
    """Test compute_all against hand-checked prefix functions."""
    assert kmpstep.compute_all(pattern) == expected


def test_prefix_function_bounds(rng):
    """Test that pi[0] == 0 and 0 <= pi[i] <= i for random patterns."""
    for _ in range(300):
        pattern = random_string(rng, 30, alphabet="ABC")
        pi = kmpstep.compute_all(pattern)
        assert len(pi) == len(pattern)
        if pattern:
            assert pi[0] == 0
        for i, value in enumerate(pi):
            assert 0 <= value <= i


def test_prefix_function_matches_definition(rng):
    """Test compute_all against the longest-border definition."""
    for _ in range(200):
        pattern = random_string(rng, 20)
        assert kmpstep.compute_all(pattern) == brute_force_pi(pattern)


def test_stepwise_agrees_with_compute_all(rng):
    """Test that driving the builder to the end yields the bulk result."""
    for _ in range(200):
        pattern = random_string(rng, 25, alphabet="ABC")
        builder = kmpstep.new_builder(pattern)
        while not builder.done:
            builder.step()
        assert builder.pi == kmpstep.compute_all(pattern)
        assert builder.committed == builder.pi


def test_unicode_pattern():
    """Test patterns made of non-ASCII characters."""
    assert kmpstep.compute_all("안녕안녕") == [0, 0, 1, 2]
    assert kmpstep.compute_all("こんにちはこん") == [0, 0, 0, 0, 0, 1, 2]


def test_prefix_chain():
    """Test that the candidate chain goes longest border first down to 0."""
    pi = kmpstep.compute_all("ABACABAB")
    assert kmpstep.prefix_chain(7, pi) == [7, 3, 1, 0]
    assert kmpstep.prefix_chain(0, pi) == [0]
    assert kmpstep.prefix_chain(5, kmpstep.compute_all("AAAAAA")) == [5, 4, 3, 2, 1, 0]


def test_compute_all_rejects_non_strings():
    """Test that only str patterns are accepted."""
    with pytest.raises(kmpstep.InvalidInputError) as excinfo:
        kmpstep.compute_all(["A", "B"])

    assert "pattern must be a str" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)
