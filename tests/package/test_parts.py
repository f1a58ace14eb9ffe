# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for part name normalization: host paths in, forward-slash archive names out.
"""

from pathlib import PurePosixPath, PureWindowsPath

import pytest

from nupack.package.parts import InvalidPartNameError, normalize_part_name, part_extension


class TestNormalizePartName:
    def test_plain_name_is_unchanged(self) -> None:
        assert normalize_part_name("foo.nuspec") == "foo.nuspec"

    def test_backslashes_become_forward_slashes(self) -> None:
        assert normalize_part_name("runtimes\\win-x64\\native\\foo.dll") == (
            "runtimes/win-x64/native/foo.dll"
        )

    def test_accepts_path_objects(self) -> None:
        assert normalize_part_name(PureWindowsPath("runtimes", "win-x64", "foo.dll")) == (
            "runtimes/win-x64/foo.dll"
        )
        assert normalize_part_name(PurePosixPath("_rels/.rels")) == "_rels/.rels"

    def test_dot_segments_are_dropped(self) -> None:
        assert normalize_part_name("./runtimes/./foo.so") == "runtimes/foo.so"

    @pytest.mark.parametrize(
        "bad",
        ["", "/foo.nuspec", "\\foo.nuspec", "runtimes/", "a//b", "../foo", "a/../b", "C:/foo", ".", "a\x01b"],
    )
    def test_rejects_invalid_names(self, bad: str) -> None:
        with pytest.raises(InvalidPartNameError):
            normalize_part_name(bad)

    def test_invalid_part_name_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            normalize_part_name("/abs")


class TestPartExtension:
    @pytest.mark.parametrize(
        ("name", "ext"),
        [
            ("foo.nuspec", "nuspec"),
            ("_rels/.rels", "rels"),
            ("runtimes/linux-x64/native/foo.so", "so"),
            ("runtimes/linux-x64/native/foo", ""),
            ("a.b/foo", ""),
        ],
    )
    def test_extension(self, name: str, ext: str) -> None:
        assert part_extension(name) == ext
