from typing import Any, Optional, Sequence, Tuple

from .errors import InvalidInputError, PrecomputationRequiredError


def ensure_str(value: Any, name: str) -> str:
    """
    Check that a pattern or text is a string.

    Args:
        value: The candidate input
        name: Argument name used in the error message

    Returns:
        The value unchanged

    Raises:
        InvalidInputError: If value is not a ``str``
    """
    if not isinstance(value, str):
        raise InvalidInputError(
            f"{name} must be a str, got {type(value).__name__}"
        )
    return value


def ensure_prefix_array(pi: Optional[Sequence[int]], pattern: str) -> Tuple[int, ...]:
    """
    Check a prefix array handed to the matcher and freeze it.

    Args:
        pi: Prefix array computed for ``pattern``
        pattern: The pattern the array belongs to

    Returns:
        The prefix array as a tuple

    Raises:
        PrecomputationRequiredError: If pi is missing or its length differs from the pattern's
        InvalidInputError: If an entry is not an int in ``0..i``
    """
    if pi is None:
        raise PrecomputationRequiredError(
            "Prefix array is required; build it before scanning"
        )
    if isinstance(pi, (str, bytes)):
        raise InvalidInputError("Prefix array must be a sequence of ints")
    frozen = tuple(pi)
    if len(frozen) != len(pattern):
        raise PrecomputationRequiredError(
            f"Prefix array has length {len(frozen)} but pattern has length {len(pattern)}"
        )
    for i, value in enumerate(frozen):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"pi[{i}] must be an int, got {value!r}")
        if not 0 <= value <= i:
            raise InvalidInputError(f"pi[{i}] = {value} is outside 0..{i}")
    return frozen
