"""Tests for recursive media discovery."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from simon.scan import find_files, find_files_in, normalize_extensions


class FindFilesTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name).resolve()
        for rel in ("b.mp4", "a.MKV", "notes.txt", "season1/e02.mp4", "season1/e01.mp4", "season1/deep/x.mkv"):
            path = self.root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")

    def test_filters_by_extension_recursively_and_sorts(self) -> None:
        found = find_files(self.root, ["mp4", "mkv"])
        self.assertEqual(
            [p.relative_to(self.root).as_posix() for p in found],
            ["a.MKV", "b.mp4", "season1/deep/x.mkv", "season1/e01.mp4", "season1/e02.mp4"],
        )

    def test_extensions_accept_leading_dot_and_any_case(self) -> None:
        self.assertEqual(normalize_extensions([".MP4", "mkv", "."]), frozenset({"mp4", "mkv"}))
        found = find_files(self.root, [".TXT"])
        self.assertEqual([p.name for p in found], ["notes.txt"])

    def test_missing_root_yields_nothing(self) -> None:
        with self.assertLogs("simon.scan", level="WARNING"):
            self.assertEqual(find_files(self.root / "missing", ["mp4"]), [])

    def test_multiple_roots_keep_root_order(self) -> None:
        found = find_files_in([self.root / "season1", self.root], ["mp4"])
        self.assertEqual(
            [p.relative_to(self.root).as_posix() for p in found],
            ["season1/e01.mp4", "season1/e02.mp4", "b.mp4", "season1/e01.mp4", "season1/e02.mp4"],
        )

    @unittest.skipUnless(hasattr(os, "symlink") and os.name == "posix", "needs symlinks")
    def test_symlinked_directories_are_followed(self) -> None:
        library = self.root / "library"
        real = self.root / "real"
        library.mkdir()
        real.mkdir()
        (real / "a.mp4").write_bytes(b"")
        (library / "linked").symlink_to(real, target_is_directory=True)

        found = find_files(library, ["mp4"])
        self.assertEqual([p.relative_to(library).as_posix() for p in found], ["linked/a.mp4"])

    @unittest.skipUnless(hasattr(os, "symlink") and os.name == "posix", "needs symlinks")
    def test_symlink_loops_are_entered_once(self) -> None:
        show = self.root / "season1"
        (show / "back").symlink_to(self.root, target_is_directory=True)
        (show / "deep" / "again").symlink_to(show, target_is_directory=True)

        found = find_files(self.root, ["mp4"])
        self.assertEqual(
            [p.relative_to(self.root).as_posix() for p in found],
            ["b.mp4", "season1/e01.mp4", "season1/e02.mp4"],
        )

    @unittest.skipIf(os.name != "posix" or os.geteuid() == 0, "permission bits are not enforced")
    def test_unreadable_directory_is_skipped(self) -> None:
        locked = self.root / "locked"
        locked.mkdir()
        (locked / "hidden.mp4").write_bytes(b"")
        locked.chmod(0)
        self.addCleanup(locked.chmod, 0o755)

        with self.assertLogs("simon.scan", level="WARNING"):
            found = find_files(self.root, ["mp4"])
        self.assertNotIn(locked / "hidden.mp4", found)
        self.assertIn(self.root / "b.mp4", found)


if __name__ == "__main__":
    unittest.main()
