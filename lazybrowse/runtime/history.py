"""Forward-navigation history.

Paths left through "go to parent" are recorded here so "go forward" can
revisit them in reverse order. This module has no service or UI concerns.
"""

from __future__ import annotations

from ..errors import EmptyHistory

MAX_HISTORY = 256


class HistoryStack:
    """Bounded stack of previously visited directory paths.

    Every push appends, so each parent move pairs with exactly one forward
    step.
    """

    def __init__(self, max_entries: int = MAX_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self._paths: list[str] = []

    def __len__(self) -> int:
        return len(self._paths)

    def __bool__(self) -> bool:
        return bool(self._paths)

    def push(self, path: str) -> None:
        """Append ``path``, dropping the oldest entries beyond the bound."""
        self._paths.append(path)
        overflow = len(self._paths) - self.max_entries
        if overflow > 0:
            del self._paths[:overflow]

    def pop(self) -> str:
        """Remove and return the next path to revisit.

        Raises ``EmptyHistory`` when nothing is recorded.
        """
        if not self._paths:
            raise EmptyHistory("no forward history")
        return self._paths.pop()

    def peek(self) -> str | None:
        return self._paths[-1] if self._paths else None

    def clear(self) -> None:
        self._paths.clear()

    def snapshot(self) -> tuple[str, ...]:
        """Immutable copy suitable for publishing in ``DirectoryState``."""
        return tuple(self._paths)


__all__ = ["HistoryStack", "MAX_HISTORY"]
