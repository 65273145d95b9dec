"""Filesystem-service contract: datatypes, payload decoding, local adapter."""

from __future__ import annotations

from .local import LocalFilesystemService
from .payloads import decode_file_entries, decode_file_entry, decode_folder_data, decode_previous_path
from .types import FILE_TYPE_FILE, FILE_TYPE_FOLDER, FILE_TYPE_LINK, FileEntry, FolderData, SearchQuery

__all__ = [
    "FILE_TYPE_FILE",
    "FILE_TYPE_FOLDER",
    "FILE_TYPE_LINK",
    "FileEntry",
    "FolderData",
    "LocalFilesystemService",
    "SearchQuery",
    "decode_file_entries",
    "decode_file_entry",
    "decode_folder_data",
    "decode_previous_path",
]
