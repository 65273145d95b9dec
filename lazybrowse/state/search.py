"""Search-result snapshot and its observable store."""

from __future__ import annotations

from dataclasses import dataclass

from ..service.types import FileEntry, SearchQuery
from .observable import ObservableValue


@dataclass(frozen=True)
class SearchResultSet:
    """Results of the most recently applied query, replaced wholesale."""

    results: tuple[FileEntry, ...] = ()
    query: SearchQuery | None = None


class SearchStore(ObservableValue[SearchResultSet]):
    def __init__(self, initial: SearchResultSet | None = None) -> None:
        super().__init__(initial if initial is not None else SearchResultSet())


__all__ = ["SearchResultSet", "SearchStore"]
