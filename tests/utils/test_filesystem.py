# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for filesystem utilities: atomic package writes and checked reads.

Atomic writes are tested by verifying that the target file either has the full
new content or doesn't exist at all.
"""

from pathlib import Path
from unittest import mock

import pytest

from nupack.utils.filesystem import atomic_write_bytes, safe_read_bytes


class TestAtomicWriteBytes:
    def test_writes_binary_content(self, tmp_path: Path) -> None:
        target = tmp_path / "foo.1.0.0.nupkg"
        atomic_write_bytes(target, b"PK\x03\x04payload")
        assert target.read_bytes() == b"PK\x03\x04payload"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "deep" / "foo.nupkg"
        atomic_write_bytes(target, b"data")
        assert target.read_bytes() == b"data"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "foo.nupkg"
        atomic_write_bytes(target, b"first")
        atomic_write_bytes(target, b"second")
        assert target.read_bytes() == b"second"

    def test_no_leftover_temp_files_on_success(self, tmp_path: Path) -> None:
        atomic_write_bytes(tmp_path / "clean.nupkg", b"clean")
        assert list(tmp_path.glob(".nupack_tmp_*")) == []

    def test_failed_rename_leaves_no_partial_file(self, tmp_path: Path) -> None:
        target = tmp_path / "foo.nupkg"
        with mock.patch.object(Path, "replace", side_effect=OSError("rename failed")):
            with pytest.raises(OSError, match="rename failed"):
                atomic_write_bytes(target, b"never lands")

        assert not target.exists()
        assert list(tmp_path.glob(".nupack_tmp_*")) == []


class TestSafeReadBytes:
    def test_reads_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "foo.nuspec"
        target.write_bytes(b"<package/>")
        assert safe_read_bytes(target) == b"<package/>"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            safe_read_bytes(tmp_path / "missing.nuspec")

    def test_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(IsADirectoryError):
            safe_read_bytes(tmp_path)
