"""lazybrowse: directory navigation and name search over a filesystem service.

``NavigationController`` and ``SearchCoordinator`` (``lazybrowse.runtime``)
turn browsing intents into service requests and publish results into the
observable stores of ``lazybrowse.state``. ``main`` runs the interactive CLI.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Run the browsing CLI; imported on first call only."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
