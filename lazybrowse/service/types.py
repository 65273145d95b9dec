"""Domain datatypes exchanged with the filesystem service."""

from __future__ import annotations

from dataclasses import dataclass

FILE_TYPE_FOLDER = "Folder"
FILE_TYPE_FILE = "File"
FILE_TYPE_LINK = "Link"


@dataclass(frozen=True)
class FileEntry:
    """One child of a directory or one search hit."""

    name: str
    path: str
    file_type: str

    @property
    def is_folder(self) -> bool:
        return self.file_type == FILE_TYPE_FOLDER


@dataclass(frozen=True)
class FolderData:
    """Decoded get-current-folder response."""

    name: str
    children: tuple[FileEntry, ...]
    is_at_root: bool


@dataclass(frozen=True)
class SearchQuery:
    """Parameters of one find-file request.

    ``text`` is matched as a name prefix; ``exact`` narrows hits to names
    equal to ``text``.
    """

    text: str
    include_files: bool = True
    include_folders: bool = True
    include_links: bool = True
    exact: bool = False


__all__ = [
    "FILE_TYPE_FILE",
    "FILE_TYPE_FOLDER",
    "FILE_TYPE_LINK",
    "FileEntry",
    "FolderData",
    "SearchQuery",
]
