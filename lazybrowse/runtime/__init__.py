"""Navigation and search coordination.

This package holds the controllers that sequence filesystem-service requests
and the dispatchers that carry those requests off the UI thread.
"""

from __future__ import annotations

from .dispatch import ImmediateDispatcher, ThreadedDispatcher
from .history import HistoryStack
from .navigation import NavigationController
from .search import SearchCoordinator

__all__ = [
    "HistoryStack",
    "ImmediateDispatcher",
    "NavigationController",
    "SearchCoordinator",
    "ThreadedDispatcher",
]
