import pytest
import kmpstep


def test_empty_pattern_builder():
    """Test that an empty pattern is accepted and is done immediately."""
    builder = kmpstep.PrefixFunctionBuilder("")

    assert builder.phase is kmpstep.Phase.DONE
    assert builder.pi == []
    assert builder.step().phase is kmpstep.Phase.DONE
    assert not builder.can_step_back


def test_single_character_pattern_builder():
    """Test that a one-character pattern starts done with pi == [0]."""
    builder = kmpstep.PrefixFunctionBuilder("Z")

    assert builder.done
    assert builder.pi == [0]
    assert builder.step().value == 0


def test_empty_pattern_matches_nowhere():
    """Test that an empty pattern produces no match events."""
    assert kmpstep.find_all("ABC", "") == []
    assert kmpstep.find_all("", "", []) == []

    matcher = kmpstep.KMPMatcher("ABC", "", [])
    assert matcher.done
    assert matcher.step().action is kmpstep.ScanAction.NOOP
    assert matcher.run() == []


def test_empty_text():
    """Test that scanning an empty text finishes without steps."""
    matcher = kmpstep.KMPMatcher("", "AB", [0, 0])
    assert matcher.done
    assert matcher.run() == []
    assert kmpstep.find_all("", "AB") == []


def test_pattern_longer_than_text():
    """Test that a pattern longer than the text is never found."""
    assert kmpstep.find_all("AB", "ABAB") == []
    assert kmpstep.KMPMatcher("AB", "ABAB", [0, 0, 1, 2]).run() == []


def test_missing_prefix_array():
    """Test that scanning without a prefix array is rejected."""
    with pytest.raises(kmpstep.PrecomputationRequiredError) as excinfo:
        kmpstep.KMPMatcher("ABC", "AB", None)

    assert "Prefix array is required" in str(excinfo.value)


def test_prefix_array_length_mismatch():
    """Test that a prefix array for another pattern length is rejected."""
    with pytest.raises(kmpstep.PrecomputationRequiredError) as excinfo:
        kmpstep.new_matcher("ABC", "ABC", [0, 0])

    assert "length 2" in str(excinfo.value)

    with pytest.raises(kmpstep.PrecomputationRequiredError):
        kmpstep.find_all("ABC", "AB", [0])


def test_malformed_prefix_array():
    """Test that out-of-range or non-integer entries are rejected."""
    with pytest.raises(kmpstep.InvalidInputError) as excinfo:
        kmpstep.KMPMatcher("ABC", "AB", [0, 2])
    assert "outside 0..1" in str(excinfo.value)

    with pytest.raises(kmpstep.InvalidInputError):
        kmpstep.KMPMatcher("ABC", "AB", [0, "1"])

    with pytest.raises(kmpstep.InvalidInputError):
        kmpstep.KMPMatcher("ABC", "AB", "00")


def test_non_string_text():
    """Test that text must be a str."""
    with pytest.raises(kmpstep.InvalidInputError) as excinfo:
        kmpstep.find_all(b"ABC", "A")

    assert "text must be a str" in str(excinfo.value)


def test_errors_share_a_base_class():
    """Test that every error can be caught as KMPStepError."""
    for error in (
        kmpstep.InvalidInputError,
        kmpstep.PrecomputationRequiredError,
        kmpstep.NoHistoryError,
        kmpstep.StepAfterTerminalError,
        kmpstep.MatchPendingError,
    ):
        assert issubclass(error, kmpstep.KMPStepError)


def test_short_patterns_start_done_with_distinct_fill():
    """Test that empty and one-character patterns differ only in filled."""
    empty = kmpstep.PrefixFunctionBuilder("").state
    single = kmpstep.PrefixFunctionBuilder("A").state

    assert (empty.i, empty.j, empty.phase) == (single.i, single.j, single.phase)
    assert (empty.filled, single.filled) == (0, 1)
