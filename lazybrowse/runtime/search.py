"""Find-file coordination with issue-order result application."""

from __future__ import annotations

import logging

from ..errors import BrowseError, ErrorSink, ProtocolViolation, SearchFailed, log_error
from ..service.payloads import decode_file_entries
from ..service.types import SearchQuery
from ..state.search import SearchResultSet, SearchStore
from .dispatch import SEARCH_LANE

logger = logging.getLogger(__name__)


class SearchCoordinator:
    """Sole writer of the search store.

    Each query gets a strictly increasing sequence number. A response is
    applied only if no higher-numbered response was applied before it, so the
    last *issued* query wins regardless of completion order. The previous
    result set stays visible until a newer one arrives.
    """

    def __init__(
        self,
        service: object,
        dispatcher: object,
        store: SearchStore,
        *,
        error_sink: ErrorSink = log_error,
    ) -> None:
        self._service = service
        self._dispatcher = dispatcher
        self.store = store
        self._error_sink = error_sink
        self._issued = 0
        self._applied = 0
        self.last_error: BrowseError | None = None

    @property
    def latest_issued(self) -> int:
        return self._issued

    @property
    def latest_applied(self) -> int:
        return self._applied

    def search(self, query: SearchQuery) -> int:
        """Submit ``query`` and return its sequence number."""
        self._issued += 1
        sequence = self._issued
        self._dispatcher.submit(
            SEARCH_LANE,
            lambda: self._service.find_file(
                name=query.text,
                files=query.include_files,
                folders=query.include_folders,
                links=query.include_links,
                exact=query.exact,
            ),
            lambda payload: self._apply(sequence, query, payload),
            lambda exc: self._failed(sequence, query, exc),
        )
        return sequence

    def _apply(self, sequence: int, query: SearchQuery, payload: object) -> None:
        if sequence <= self._applied:
            logger.debug("discarding stale search %d (applied %d)", sequence, self._applied)
            return
        try:
            results = decode_file_entries(payload)
        except ProtocolViolation as exc:
            self._failed(sequence, query, exc)
            return
        self._applied = sequence
        self.store.set(SearchResultSet(results=results, query=query))
        logger.info("search %d for %r: %d results", sequence, query.text, len(results))

    def _failed(self, sequence: int, query: SearchQuery, cause: Exception) -> None:
        if sequence <= self._applied:
            logger.debug("ignoring failure of stale search %d", sequence)
            return
        error = SearchFailed(f"search for {query.text!r} failed: {cause}")
        error.__cause__ = cause
        self.last_error = error
        self._error_sink(error)

    def clear_results(self) -> None:
        """Empty the result set; responses to earlier queries are dropped."""
        self._applied = self._issued
        self.store.set(SearchResultSet())


__all__ = ["SearchCoordinator"]
