"""Error taxonomy shared by the navigation and search controllers.

Service failures never escape a controller; they are wrapped into one of the
``BrowseError`` subclasses below and handed to an error sink.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class BrowseError(Exception):
    """Base class for every error reported to an error sink."""

    log_level = logging.WARNING


class ServiceError(Exception):
    """Raised by filesystem-service adapters.

    ``kind`` names the failure the way the service reports it, for example
    ``"AlreadyAtRoot"`` or ``"CannotMoveToFile"``.
    """

    def __init__(self, kind: str, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind}: {detail}" if detail else kind)


class ProtocolViolation(BrowseError):
    """A service response did not have the documented shape."""


class FetchFailed(BrowseError):
    """The current directory listing could not be produced."""


class NavigationFailed(BrowseError):
    """A requested move could not be completed."""


class SearchFailed(BrowseError):
    """A find-file query could not be completed."""


class EmptyHistory(BrowseError):
    """Forward navigation was requested with no recorded history."""

    log_level = logging.INFO


ErrorSink = Callable[[BrowseError], None]


def log_error(error: BrowseError) -> None:
    """Default error sink: log at the error's level with its cause."""
    cause = error.__cause__
    if cause is None:
        logger.log(error.log_level, "%s: %s", type(error).__name__, error)
    else:
        logger.log(error.log_level, "%s: %s (caused by %r)", type(error).__name__, error, cause)


__all__ = [
    "BrowseError",
    "EmptyHistory",
    "ErrorSink",
    "FetchFailed",
    "NavigationFailed",
    "ProtocolViolation",
    "SearchFailed",
    "ServiceError",
    "log_error",
]
