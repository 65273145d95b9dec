"""Directory navigation state machine.

Turns navigation intents (refresh, enter, up, forward) into filesystem-service
requests and publishes their outcome into a ``DirectoryStore``.

Every public operation starts a new generation. Completions carry the
generation that issued them and are dropped once a newer operation has
started, so a slow response can never overwrite the result of a later one.
History effects of a superseded move still apply: the service executed it.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..errors import (
    BrowseError,
    EmptyHistory,
    ErrorSink,
    FetchFailed,
    NavigationFailed,
    ProtocolViolation,
    log_error,
)
from ..service.payloads import decode_folder_data, decode_previous_path
from ..state.directory import DirectoryState, DirectoryStore
from .dispatch import NAVIGATION_LANE
from .history import HistoryStack

logger = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_UNREACHABLE = "unreachable"

DEFAULT_FALLBACK_ATTEMPTS = 1


def _caused_by(error: BrowseError, cause: BaseException) -> BrowseError:
    error.__cause__ = cause
    return error


class NavigationController:
    """Sole writer of the directory store.

    ``service`` is any object exposing ``get_current_folder``,
    ``move_to_folder``, ``move_to_parent_folder``; ``dispatcher`` is an
    ``ImmediateDispatcher``/``ThreadedDispatcher``-like object.
    """

    def __init__(
        self,
        service: object,
        dispatcher: object,
        store: DirectoryStore,
        *,
        history: HistoryStack | None = None,
        fallback_attempts: int = DEFAULT_FALLBACK_ATTEMPTS,
        error_sink: ErrorSink = log_error,
    ) -> None:
        self._service = service
        self._dispatcher = dispatcher
        self.store = store
        if history is None:
            history = HistoryStack()
            for path in store.get().history:
                history.push(path)
        self.history = history
        self.fallback_attempts = max(0, fallback_attempts)
        self._error_sink = error_sink
        self._generation = 0
        self._last_good: DirectoryState = store.get()
        self.status = STATUS_IDLE
        self._resting_status = STATUS_IDLE
        self.last_error: BrowseError | None = None

    @property
    def generation(self) -> int:
        return self._generation

    def _begin(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, generation: int, what: str) -> bool:
        if generation == self._generation:
            return False
        logger.debug("discarding stale %s (generation %d, current %d)", what, generation, self._generation)
        return True

    def _report(self, error: BrowseError) -> None:
        self.last_error = error
        self._error_sink(error)

    def _sync_history(self) -> None:
        history = self.history.snapshot()
        if self.store.get().history != history:
            self.store.update(lambda state: replace(state, history=history))

    def _settle(self) -> None:
        """End the current operation without a new listing.

        A refresh superseded by this operation may have left the store in its
        loading state; put the last good listing back in that case.
        """
        if self.status != STATUS_LOADING:
            self._sync_history()
            return
        self.status = self._resting_status
        self.store.set(replace(self._last_good, history=self.history.snapshot()))

    # -- refresh ---------------------------------------------------------

    def refresh_current_directory(self) -> int:
        """Fetch the current listing; return the operation's generation."""
        generation = self._begin()
        self._refresh(generation, self.fallback_attempts)
        return generation

    def _refresh(self, generation: int, fallbacks_left: int) -> None:
        self.status = STATUS_LOADING
        history = self.history.snapshot()
        self.store.update(lambda state: state.loading(history))
        self._dispatcher.submit(
            NAVIGATION_LANE,
            self._service.get_current_folder,
            lambda payload: self._apply_listing(generation, payload, fallbacks_left),
            lambda exc: self._listing_failed(generation, exc, fallbacks_left),
        )

    def _apply_listing(self, generation: int, payload: object, fallbacks_left: int) -> None:
        if self._is_stale(generation, "listing"):
            return
        try:
            folder = decode_folder_data(payload)
        except ProtocolViolation as exc:
            self._listing_failed(generation, exc, fallbacks_left)
            return
        state = self.store.get().with_folder(folder, self.history.snapshot())
        self._last_good = state
        self.status = self._resting_status = STATUS_IDLE
        self.store.set(state)
        logger.info("showing %r (%d entries)", folder.name, len(folder.children))

    def _listing_failed(self, generation: int, cause: Exception, fallbacks_left: int) -> None:
        if self._is_stale(generation, "listing failure"):
            return
        if fallbacks_left <= 0:
            self._give_up(cause)
            return
        logger.warning("directory listing failed (%s); falling back to parent directory", cause)
        self._dispatcher.submit(
            NAVIGATION_LANE,
            self._service.move_to_parent_folder,
            lambda _previous: self._fallback_moved(generation, fallbacks_left - 1),
            lambda exc: self._fallback_failed(generation, exc),
        )

    def _fallback_moved(self, generation: int, fallbacks_left: int) -> None:
        if self._is_stale(generation, "fallback move"):
            return
        self._refresh(generation, fallbacks_left)

    def _fallback_failed(self, generation: int, cause: Exception) -> None:
        if self._is_stale(generation, "fallback failure"):
            return
        self._give_up(cause)

    def _give_up(self, cause: Exception) -> None:
        self.status = self._resting_status = STATUS_UNREACHABLE
        self.store.set(replace(self._last_good, history=self.history.snapshot()))
        self._report(_caused_by(FetchFailed(f"cannot list current directory: {cause}"), cause))

    # -- moves -----------------------------------------------------------

    def change_directory(self, path: str, to_parent: bool = False) -> int:
        """Move to ``path`` (or its parent) and refresh on success.

        A successful move drops forward history, unless ``path`` is the next
        forward entry, which is consumed instead.
        """
        generation = self._begin()
        self._move(generation, path, to_parent, from_history=False)
        return generation

    def _move(self, generation: int, path: str, to_parent: bool, *, from_history: bool) -> None:
        self._dispatcher.submit(
            NAVIGATION_LANE,
            lambda: self._service.move_to_folder(path, to_parent),
            lambda _result: self._moved(generation, path, to_parent, from_history),
            lambda exc: self._move_failed(generation, path, exc, from_history),
        )

    def _moved(self, generation: int, path: str, to_parent: bool, from_history: bool) -> None:
        if not from_history:
            if not to_parent and self.history.peek() == path:
                self.history.pop()
            else:
                self.history.clear()
        if self._is_stale(generation, "move"):
            self._sync_history()
            return
        self._refresh(generation, self.fallback_attempts)

    def _move_failed(self, generation: int, path: str, cause: Exception, from_history: bool) -> None:
        if from_history:
            self.history.push(path)
        if self._is_stale(generation, "move failure"):
            self._sync_history()
            return
        self._settle()
        self._report(_caused_by(NavigationFailed(f"cannot move to {path!r}: {cause}"), cause))

    def change_to_parent_directory(self) -> int:
        """Move up one level and remember the departed path for forward."""
        generation = self._begin()
        self._dispatcher.submit(
            NAVIGATION_LANE,
            self._service.move_to_parent_folder,
            lambda payload: self._moved_to_parent(generation, payload),
            lambda exc: self._parent_failed(generation, exc),
        )
        return generation

    def _moved_to_parent(self, generation: int, payload: object) -> None:
        try:
            previous = decode_previous_path(payload)
        except ProtocolViolation as exc:
            if self._is_stale(generation, "parent move"):
                return
            # The service did move; show where it is without recording history.
            self._report(_caused_by(NavigationFailed(f"bad parent-move response: {exc}"), exc))
        else:
            self.history.push(previous)
            if self._is_stale(generation, "parent move"):
                self._sync_history()
                return
        self._refresh(generation, self.fallback_attempts)

    def _parent_failed(self, generation: int, cause: Exception) -> None:
        if self._is_stale(generation, "parent move failure"):
            return
        self._settle()
        self._report(_caused_by(NavigationFailed(f"cannot move to parent directory: {cause}"), cause))

    def move_forward_dir(self) -> bool:
        """Revisit the most recently departed directory.

        Returns ``False`` (and reports ``EmptyHistory``) when there is
        nothing to go forward to; the directory state is left untouched.
        """
        try:
            target = self.history.pop()
        except EmptyHistory as exc:
            self._report(exc)
            return False
        generation = self._begin()
        self._move(generation, target, False, from_history=True)
        return True


__all__ = [
    "DEFAULT_FALLBACK_ATTEMPTS",
    "NavigationController",
    "STATUS_IDLE",
    "STATUS_LOADING",
    "STATUS_UNREACHABLE",
]
