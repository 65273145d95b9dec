"""Command-line front door for lazybrowse.

Wires the local filesystem service, a threaded dispatcher and both
controllers together, then reads browsing commands from stdin and prints the
observable state after each one.
"""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .errors import BrowseError, ServiceError, log_error
from .runtime import config
from .runtime.dispatch import ThreadedDispatcher
from .runtime.history import HistoryStack
from .runtime.navigation import STATUS_IDLE, NavigationController
from .runtime.search import SearchCoordinator
from .service.local import LocalFilesystemService
from .service.types import SearchQuery
from .state.directory import DirectoryState, DirectoryStore
from .state.search import SearchResultSet, SearchStore

HELP_TEXT = """commands:
  ls             show the current directory
  cd PATH        enter PATH (a child name or any path; '..' goes up)
  up             go to the parent directory
  fwd            go forward to the directory left with 'up'
  find TEXT      search for names starting with TEXT
  clear          clear search results
  refresh        reload the current directory
  quit           exit
"""

TYPE_MARKERS = {"Folder": "/", "Link": "@"}


@dataclass
class BrowserSession:
    """Everything one interactive session owns."""

    service: LocalFilesystemService
    dispatcher: ThreadedDispatcher
    directories: DirectoryStore
    results: SearchStore
    navigation: NavigationController
    search: SearchCoordinator
    settings: config.BrowserSettings


def build_session(
    start: Path,
    settings: config.BrowserSettings,
    error_sink=log_error,
) -> BrowserSession:
    service = LocalFilesystemService(start)
    dispatcher = ThreadedDispatcher()
    directories = DirectoryStore()
    results = SearchStore()
    navigation = NavigationController(
        service,
        dispatcher,
        directories,
        history=HistoryStack(settings.history_limit),
        fallback_attempts=settings.fallback_attempts,
        error_sink=error_sink,
    )
    search = SearchCoordinator(service, dispatcher, results, error_sink=error_sink)
    return BrowserSession(service, dispatcher, directories, results, navigation, search, settings)


def format_directory(state: DirectoryState, status: str) -> str:
    header = state.current_name or "?"
    if state.is_at_root:
        header += " (root)"
    if status != STATUS_IDLE:
        header += f" [{status}]"
    lines = [header]
    for entry in state.children:
        lines.append(f"  {entry.name}{TYPE_MARKERS.get(entry.file_type, '')}")
    if state.history:
        lines.append(f"  forward: {state.history[-1]}")
    return "\n".join(lines) + "\n"


def format_results(result_set: SearchResultSet) -> str:
    if result_set.query is None:
        return "no search\n"
    lines = [f"{len(result_set.results)} results for {result_set.query.text!r}"]
    for entry in result_set.results:
        lines.append(f"  {entry.path}")
    return "\n".join(lines) + "\n"


def _resolve_target(state: DirectoryState, argument: str) -> str:
    """Map a child name to its full path; anything else passes through."""
    for entry in state.children:
        if entry.name == argument:
            return entry.path
    return argument


def run_commands(session: BrowserSession, lines: Iterable[str], out: TextIO) -> None:
    """Execute browsing commands until input ends or ``quit`` is read."""
    defaults = session.settings.search_defaults
    for raw in lines:
        try:
            words = shlex.split(raw)
        except ValueError as exc:
            out.write(f"! {exc}\n")
            continue
        if not words:
            continue
        command, args = words[0], words[1:]
        shows = "directory"
        if command in {"quit", "exit"}:
            return
        if command == "ls":
            pass
        elif command == "refresh":
            session.navigation.refresh_current_directory()
        elif command == "up" or (command == "cd" and args == [".."]):
            session.navigation.change_to_parent_directory()
        elif command == "cd" and len(args) == 1:
            target = _resolve_target(session.directories.get(), args[0])
            session.navigation.change_directory(target)
        elif command == "fwd":
            session.navigation.move_forward_dir()
        elif command == "find" and args:
            query = SearchQuery(
                text=" ".join(args),
                include_files=defaults.files,
                include_folders=defaults.folders,
                include_links=defaults.links,
            )
            session.search.search(query)
            shows = "results"
        elif command == "clear":
            session.search.clear_results()
            shows = "results"
        else:
            out.write(HELP_TEXT)
            continue

        if not session.dispatcher.run_until_idle():
            out.write("! filesystem service did not answer in time\n")
        if shows == "results":
            out.write(format_results(session.results.get()))
        else:
            out.write(format_directory(session.directories.get(), session.navigation.status))


def _start_path(explicit: str | None, settings: config.BrowserSettings, default_path: Path | None) -> Path:
    if explicit is not None:
        return Path(explicit)
    if settings.start_path is not None and settings.start_path.is_dir():
        return settings.start_path
    return default_path if default_path is not None else Path.cwd()


def main(default_path: Path | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Parse CLI arguments and browse interactively from a directory.

    ``default_path`` is primarily for tests; when omitted the last saved
    directory or the current working directory is used.
    """
    parser = argparse.ArgumentParser(description="Browse directories and search file names.")
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    settings = config.load_settings()
    path = _start_path(args.path, settings, default_path)

    def print_error(error: BrowseError) -> None:
        log_error(error)
        stdout.write(f"! {error}\n")

    try:
        session = build_session(path, settings, error_sink=print_error)
    except ServiceError as exc:
        raise SystemExit(f"Cannot open {path}: {exc}") from exc

    session.navigation.refresh_current_directory()
    session.dispatcher.run_until_idle()
    stdout.write(format_directory(session.directories.get(), session.navigation.status))
    run_commands(session, stdin, stdout)
    config.save_start_path(session.service.current_path)


__all__ = ["BrowserSession", "build_session", "format_directory", "format_results", "main", "run_commands"]
