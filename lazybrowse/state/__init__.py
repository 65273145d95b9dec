"""Observable state containers read by the rendering layer."""

from __future__ import annotations

from .directory import DirectoryState, DirectoryStore
from .observable import ObservableValue
from .search import SearchResultSet, SearchStore

__all__ = [
    "DirectoryState",
    "DirectoryStore",
    "ObservableValue",
    "SearchResultSet",
    "SearchStore",
]
