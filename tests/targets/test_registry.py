# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the target registry.

We verify:
  - every supported target maps to its runtime identifier
  - UNKNOWN has no identifier and is never packageable
  - canonical ordering ignores the order targets were supplied in
  - host detection maps known system/machine pairs and falls back to UNKNOWN
"""

import pytest

from nupack.targets.registry import Target, _detect


class TestRuntimeIdentifiers:
    @pytest.mark.parametrize(
        ("target", "rid"),
        [
            (Target.WINDOWS_X86, "win-x86"),
            (Target.WINDOWS_X64, "win-x64"),
            (Target.LINUX_X86, "linux-x86"),
            (Target.LINUX_X64, "linux-x64"),
            (Target.MACOS_X86, "osx-x86"),
            (Target.MACOS_X64, "osx-x64"),
        ],
    )
    def test_supported_target_rid(self, target: Target, rid: str) -> None:
        assert target.rid() == rid
        assert target.is_packageable()

    def test_unknown_has_no_rid(self) -> None:
        assert Target.UNKNOWN.rid() is None
        assert not Target.UNKNOWN.is_packageable()

    def test_from_rid_round_trips_known_identifiers(self) -> None:
        assert Target.from_rid("linux-x64") is Target.LINUX_X64
        assert Target.from_rid(" WIN-X64 ") is Target.WINDOWS_X64

    def test_from_rid_rejects_unknown_identifier(self) -> None:
        with pytest.raises(ValueError, match="Unknown runtime identifier"):
            Target.from_rid("freebsd-arm64")


class TestOrdering:
    def test_ordered_follows_declaration_order(self) -> None:
        supplied = [Target.UNKNOWN, Target.LINUX_X64, Target.MACOS_X86, Target.WINDOWS_X64]
        assert Target.ordered(supplied) == [
            Target.WINDOWS_X64,
            Target.LINUX_X64,
            Target.MACOS_X86,
            Target.UNKNOWN,
        ]

    def test_ordered_accepts_mapping_keys(self) -> None:
        libs = {Target.LINUX_X64: "a", Target.WINDOWS_X64: "b"}
        assert Target.ordered(libs) == [Target.WINDOWS_X64, Target.LINUX_X64]


class TestHostDetection:
    @pytest.mark.parametrize(
        ("system", "machine", "expected"),
        [
            ("Windows", "AMD64", Target.WINDOWS_X64),
            ("Windows", "x86", Target.WINDOWS_X86),
            ("Linux", "x86_64", Target.LINUX_X64),
            ("Linux", "i686", Target.LINUX_X86),
            ("Darwin", "x86_64", Target.MACOS_X64),
            ("Linux", "aarch64", Target.UNKNOWN),
            ("SunOS", "x86_64", Target.UNKNOWN),
        ],
    )
    def test_detect(self, system: str, machine: str, expected: Target) -> None:
        assert _detect(system, machine) is expected

    def test_local_returns_a_target(self) -> None:
        assert isinstance(Target.local(), Target)
