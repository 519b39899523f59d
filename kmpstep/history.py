from typing import Generic, List, Optional, TypeVar

from .errors import NoHistoryError

S = TypeVar("S")


class StepHistory(Generic[S]):
    """Append/pop-only stack of state snapshots used for step-back.

    Snapshots are expected to be small immutable values, so they are stored
    as-is and never copied.
    """

    def __init__(self) -> None:
        self._snapshots: List[S] = []

    def push(self, snapshot: S) -> None:
        self._snapshots.append(snapshot)

    def pop(self) -> S:
        """
        Remove and return the most recent snapshot.

        Raises:
            NoHistoryError: If there is nothing to undo
        """
        if not self._snapshots:
            raise NoHistoryError("No earlier step to go back to")
        return self._snapshots.pop()

    def peek(self) -> Optional[S]:
        return self._snapshots[-1] if self._snapshots else None

    def clear(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)

    def __bool__(self) -> bool:
        return bool(self._snapshots)
