"""Directory-state snapshot and its observable store."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..service.types import FileEntry, FolderData
from .observable import ObservableValue


@dataclass(frozen=True)
class DirectoryState:
    """What the browsing surface currently shows.

    ``children`` is empty while a listing fetch is in flight. ``is_at_root``
    only comes from a fetched listing. ``history`` is the forward stack,
    last element first to revisit.
    """

    current_name: str = ""
    is_at_root: bool = False
    children: tuple[FileEntry, ...] = ()
    history: tuple[str, ...] = ()

    def loading(self, history: tuple[str, ...]) -> DirectoryState:
        return replace(self, children=(), history=history)

    def with_folder(self, folder: FolderData, history: tuple[str, ...]) -> DirectoryState:
        return DirectoryState(
            current_name=folder.name,
            is_at_root=folder.is_at_root,
            children=folder.children,
            history=history,
        )


class DirectoryStore(ObservableValue[DirectoryState]):
    """Observable holder of the current ``DirectoryState``."""

    def __init__(self, initial: DirectoryState | None = None) -> None:
        super().__init__(initial if initial is not None else DirectoryState())


__all__ = ["DirectoryState", "DirectoryStore"]
