"""Decoding of filesystem-service responses."""

from __future__ import annotations

import unittest

from lazybrowse.errors import ProtocolViolation
from lazybrowse.service.payloads import (
    decode_file_entries,
    decode_file_entry,
    decode_folder_data,
    decode_previous_path,
)
from lazybrowse.service.types import FileEntry, FolderData


class FolderDataDecodingTests(unittest.TestCase):
    def test_decodes_complete_payload(self) -> None:
        folder = decode_folder_data(
            {
                "name": "docs",
                "files": [{"name": "a.txt", "path": "/docs/a.txt", "filetype": "File"}],
                "is_at_root": False,
            }
        )
        self.assertEqual(
            folder,
            FolderData(name="docs", children=(FileEntry("a.txt", "/docs/a.txt", "File"),), is_at_root=False),
        )

    def test_missing_root_flag_is_rejected(self) -> None:
        with self.assertRaises(ProtocolViolation):
            decode_folder_data({"name": "docs", "files": []})

    def test_non_boolean_root_flag_is_rejected(self) -> None:
        with self.assertRaises(ProtocolViolation):
            decode_folder_data({"name": "docs", "files": [], "is_at_root": 0})

    def test_missing_files_is_rejected(self) -> None:
        with self.assertRaises(ProtocolViolation):
            decode_folder_data({"name": "docs", "is_at_root": True})

    def test_non_mapping_is_rejected(self) -> None:
        with self.assertRaises(ProtocolViolation):
            decode_folder_data(["docs"])


class FileEntryDecodingTests(unittest.TestCase):
    def test_accepts_either_type_key(self) -> None:
        self.assertEqual(
            decode_file_entry({"name": "x", "path": "/x", "file_type": "Link"}),
            FileEntry("x", "/x", "Link"),
        )

    def test_passes_existing_entries_through(self) -> None:
        entry = FileEntry("x", "/x", "File")
        self.assertIs(decode_file_entry(entry), entry)

    def test_rejects_non_string_path(self) -> None:
        with self.assertRaises(ProtocolViolation):
            decode_file_entry({"name": "x", "path": 3, "filetype": "File"})

    def test_entry_lists_become_tuples(self) -> None:
        entries = decode_file_entries([{"name": "x", "path": "/x", "filetype": "Folder"}])
        self.assertEqual(entries, (FileEntry("x", "/x", "Folder"),))
        self.assertTrue(entries[0].is_folder)

    def test_rejects_string_and_mapping_lists(self) -> None:
        for payload in ("abc", {"name": "x"}, None, 5):
            with self.subTest(payload=payload):
                with self.assertRaises(ProtocolViolation):
                    decode_file_entries(payload)


class PreviousPathDecodingTests(unittest.TestCase):
    def test_accepts_non_empty_string(self) -> None:
        self.assertEqual(decode_previous_path("/docs"), "/docs")

    def test_rejects_empty_or_missing(self) -> None:
        for payload in ("", None, 7):
            with self.subTest(payload=payload):
                with self.assertRaises(ProtocolViolation):
                    decode_previous_path(payload)


if __name__ == "__main__":
    unittest.main()
