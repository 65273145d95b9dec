"""Decoding of raw filesystem-service responses.

Responses arrive as plain mappings/lists (the service's serialized form).
Every decoder validates shapes strictly and raises ``ProtocolViolation``
instead of guessing a default for a missing or mistyped field.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..errors import ProtocolViolation
from .types import FileEntry, FolderData


def _require_str(payload: Mapping, key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise ProtocolViolation(f"expected string field {key!r}, got {type(value).__name__}")
    return value


def decode_file_entry(payload: object) -> FileEntry:
    """Decode one ``{name, path, filetype}`` mapping.

    The type field is accepted under either ``filetype`` or ``file_type``.
    """
    if isinstance(payload, FileEntry):
        return payload
    if not isinstance(payload, Mapping):
        raise ProtocolViolation(f"file entry must be a mapping, got {type(payload).__name__}")
    type_key = "filetype" if "filetype" in payload else "file_type"
    return FileEntry(
        name=_require_str(payload, "name"),
        path=_require_str(payload, "path"),
        file_type=_require_str(payload, type_key),
    )


def decode_file_entries(payload: object) -> tuple[FileEntry, ...]:
    """Decode a list of file mappings into an immutable tuple."""
    if isinstance(payload, (str, bytes, Mapping)) or not hasattr(payload, "__iter__"):
        raise ProtocolViolation(f"expected a list of file entries, got {type(payload).__name__}")
    return tuple(decode_file_entry(item) for item in payload)


def decode_folder_data(payload: object) -> FolderData:
    """Decode a get-current-folder response.

    ``is_at_root`` must be present and boolean; its absence is treated as a
    protocol violation rather than defaulted.
    """
    if not isinstance(payload, Mapping):
        raise ProtocolViolation(f"folder data must be a mapping, got {type(payload).__name__}")
    is_at_root = payload.get("is_at_root")
    if not isinstance(is_at_root, bool):
        raise ProtocolViolation("folder data is missing boolean 'is_at_root'")
    return FolderData(
        name=_require_str(payload, "name"),
        children=decode_file_entries(payload.get("files")),
        is_at_root=is_at_root,
    )


def decode_previous_path(payload: object) -> str:
    """Decode the move-to-parent-folder response (the departed path)."""
    if not isinstance(payload, str) or not payload:
        raise ProtocolViolation(f"previous path must be a non-empty string, got {payload!r}")
    return payload


__all__ = [
    "decode_file_entries",
    "decode_file_entry",
    "decode_folder_data",
    "decode_previous_path",
]
