"""Filesystem service adapter backed by the local disk.

Answers the four service requests (current folder, move to folder, move to
parent, find file) for one process-local "current directory". Responses use
the service's serialized shape so they go through the same decoding as a
remote service would.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from ..errors import ServiceError
from .types import FILE_TYPE_FILE, FILE_TYPE_FOLDER, FILE_TYPE_LINK

DEFAULT_MAX_SEARCH_RESULTS = 2_000


def canonical_path(path: Path) -> Path:
    """Return absolute, symlink-resolved ``path`` or raise ``ServiceError``."""
    try:
        return path.expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise ServiceError("PathCannotBeMadeAbsolute", str(path)) from exc


def _entry_file_type(entry: os.DirEntry) -> str:
    if entry.is_dir(follow_symlinks=False):
        return FILE_TYPE_FOLDER
    if entry.is_symlink():
        return FILE_TYPE_LINK
    return FILE_TYPE_FILE


def _path_file_type(path: str) -> str:
    if os.path.islink(path):
        return FILE_TYPE_LINK
    if os.path.isdir(path):
        return FILE_TYPE_FOLDER
    return FILE_TYPE_FILE


def _file_payload(name: str, path: str, file_type: str) -> dict[str, str]:
    return {"name": name, "path": path, "filetype": file_type}


class LocalFilesystemService:
    """Current-directory cursor over the local filesystem.

    Calls may arrive from dispatcher worker threads, so the cursor is guarded
    by a lock.
    """

    def __init__(
        self,
        start: Path,
        *,
        search_root: Path | None = None,
        max_search_results: int = DEFAULT_MAX_SEARCH_RESULTS,
    ) -> None:
        self._lock = threading.Lock()
        self._path = canonical_path(start)
        self._search_root = canonical_path(search_root) if search_root is not None else self._path
        self.max_search_results = max(1, max_search_results)

    @property
    def current_path(self) -> Path:
        with self._lock:
            return self._path

    def _folder_name(self, path: Path) -> str:
        return path.name or str(path)

    def _children(self, path: Path) -> list[dict[str, str]]:
        children: list[tuple[bool, str, dict[str, str]]] = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    try:
                        file_type = _entry_file_type(entry)
                    except OSError:
                        continue
                    payload = _file_payload(entry.name, entry.path, file_type)
                    children.append((file_type != FILE_TYPE_FOLDER, entry.name.lower(), payload))
        except OSError as exc:
            raise ServiceError("CannotReadDir", f"{path}: {exc}") from exc
        children.sort(key=lambda item: (item[0], item[1]))
        return [payload for _is_file, _key, payload in children]

    def get_current_folder(self) -> dict[str, object]:
        with self._lock:
            path = self._path
        return {
            "name": self._folder_name(path),
            "files": self._children(path),
            "is_at_root": path.parent == path,
        }

    def move_to_folder(self, folder_path: str, to_parent: bool = False) -> None:
        target = canonical_path(Path(folder_path))
        if not target.is_dir():
            raise ServiceError("CannotMoveToFile", str(target))
        if to_parent:
            if target.parent == target:
                raise ServiceError("AlreadyAtRoot", str(target))
            target = target.parent
        with self._lock:
            self._path = target

    def move_to_parent_folder(self) -> str:
        """Move one level up and return the path that was left."""
        with self._lock:
            old_path = self._path
            if old_path.parent == old_path:
                raise ServiceError("AlreadyAtRoot", str(old_path))
            self._path = old_path.parent
        return str(old_path)

    def find_file(
        self,
        name: str,
        files: bool = True,
        folders: bool = True,
        links: bool = True,
        exact: bool = False,
    ) -> list[dict[str, str]]:
        """Return entries under the search root whose name starts with ``name``.

        Matching is case-insensitive; ``exact`` keeps only names equal to
        ``name``. Results stop at ``max_search_results``.
        """
        if not name:
            return []
        wanted = {FILE_TYPE_FILE: files, FILE_TYPE_FOLDER: folders, FILE_TYPE_LINK: links}
        prefix = name.casefold()
        hits: list[dict[str, str]] = []
        for dirpath, dirnames, filenames in os.walk(self._search_root):
            dirnames.sort()
            for candidate in sorted(dirnames + filenames):
                if not candidate.casefold().startswith(prefix):
                    continue
                if exact and candidate != name:
                    continue
                full_path = os.path.join(dirpath, candidate)
                file_type = _path_file_type(full_path)
                if not wanted[file_type]:
                    continue
                hits.append(_file_payload(candidate, full_path, file_type))
                if len(hits) >= self.max_search_results:
                    return hits
        return hits


__all__ = ["LocalFilesystemService", "canonical_path"]
