"""
Read-only views of a builder state for a debugger-style display: which line
of the prefix function pseudo-code is executing and the current variables.
"""

from typing import Any, Dict, List, Sequence, Tuple

from .prefix import BuilderState, Phase

ALGORITHM_LINES: Tuple[Tuple[str, str], ...] = (
    ("init_pi", "pi[0] = 0"),
    ("init_j", "j = 0"),
    ("for_loop", "for i in 1..n-1:"),
    ("while_cond", "  while j > 0 and s[i] != s[j]:"),
    ("while_body", "    j = pi[j-1]"),
    ("if_cond", "  if s[i] == s[j]:"),
    ("inc_j", "    j += 1"),
    ("set_pi", "  pi[i] = j"),
)


def _comparing(pattern: str, state: BuilderState) -> bool:
    n = len(pattern)
    return state.phase is Phase.COMPARING and state.i < n and state.j < n


def active_lines(pattern: str, state: BuilderState) -> List[str]:
    """
    Ids of the pseudo-code lines the builder is executing, in listing order.

    During a comparison the branch it is about to take is highlighted too.
    """
    if not pattern:
        return []
    if state.phase is Phase.IDLE:
        return ["init_pi", "init_j"]

    comparing = _comparing(pattern, state)
    equal = comparing and pattern[state.i] == pattern[state.j]
    active = set()
    if len(pattern) > 1:
        active.add("for_loop")
    if (comparing and not equal and state.j > 0) or state.phase is Phase.FALLING_BACK:
        active.add("while_cond")
    if state.phase is Phase.FALLING_BACK:
        active.add("while_body")
    if equal or state.phase is Phase.EXTENDING_MATCH:
        active.add("if_cond")
    if state.phase is Phase.EXTENDING_MATCH:
        active.add("inc_j")
    if (
        state.phase in (Phase.COMMITTED, Phase.DONE)
        or (comparing and not equal and state.j == 0)
    ):
        active.add("set_pi")
    return [line_id for line_id, _ in ALGORITHM_LINES if line_id in active]


def watch(pattern: str, pi: Sequence[int], state: BuilderState) -> Dict[str, Any]:
    """
    Current variables of the prefix function loop.

    Entries that do not apply (an index past the pattern, nothing to compare)
    are None. ``pi[i] (preview)`` is only present while a match extension is
    about to change pi[i].
    """
    n = len(pattern)
    i, j = state.i, state.j
    in_i = 0 <= i < n
    in_j = 0 <= j < n
    compare_ready = in_i and in_j

    entries: Dict[str, Any] = {
        "i": i if n else None,
        "j": j if n else None,
        "s[i]": pattern[i] if in_i else None,
        "s[j]": pattern[j] if compare_ready else None,
        "pi[i]": pi[i] if in_i and i < len(pi) else None,
        "pi[j-1]": pi[j - 1] if j > 0 else 0,
        "comparison": (
            ("equal" if pattern[i] == pattern[j] else "different")
            if compare_ready
            else None
        ),
        "phase": state.phase.value,
    }
    if state.phase is Phase.EXTENDING_MATCH and in_i:
        entries["pi[i] (preview)"] = j + 1
    return entries
