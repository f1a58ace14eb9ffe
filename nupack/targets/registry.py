# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Target registry: the closed set of platforms a package can carry binaries for.

Each supported target maps to a runtime identifier (RID), the short string
the package manager uses as a path segment under `runtimes/`. UNKNOWN is the
sentinel for "we couldn't tell what platform this is"; it has no RID and is
never packaged. Callers filter it out, they don't treat it as an error.

Declaration order is the canonical order. Anything that iterates targets
(the assembler in particular) goes through `Target.ordered()` so output is
stable regardless of how a caller built its mapping.
"""

import platform
from enum import Enum
from typing import Iterable, Optional


class Target(str, Enum):
    """A platform/architecture pair. The value is the runtime identifier."""

    WINDOWS_X86 = "win-x86"
    WINDOWS_X64 = "win-x64"
    LINUX_X86 = "linux-x86"
    LINUX_X64 = "linux-x64"
    MACOS_X86 = "osx-x86"
    MACOS_X64 = "osx-x64"
    UNKNOWN = "unknown"

    def rid(self) -> Optional[str]:
        """The runtime identifier, or None for UNKNOWN."""
        if self is Target.UNKNOWN:
            return None
        return self.value

    def is_packageable(self) -> bool:
        return self is not Target.UNKNOWN

    @classmethod
    def from_rid(cls, rid: str) -> "Target":
        """
        Look up a target by runtime identifier.

        Raises:
            ValueError: If the identifier isn't one we know about.
        """
        try:
            return cls(rid.strip().lower())
        except ValueError:
            known = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown runtime identifier '{rid}'. Must be one of: {known}") from None

    @classmethod
    def ordered(cls, targets: Iterable["Target"]) -> list["Target"]:
        """Sort targets into canonical declaration order."""
        rank = {target: index for index, target in enumerate(cls)}
        return sorted(set(targets), key=rank.__getitem__)

    @classmethod
    def local(cls) -> "Target":
        """Best guess at the target for the machine we're running on."""
        return _detect(platform.system(), platform.machine())


_SYSTEMS: dict[str, str] = {
    "windows": "windows",
    "linux": "linux",
    "darwin": "macos",
}

_ARCHES: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
}

_HOST_TARGETS: dict[tuple[str, str], Target] = {
    ("windows", "x86"): Target.WINDOWS_X86,
    ("windows", "x64"): Target.WINDOWS_X64,
    ("linux", "x86"): Target.LINUX_X86,
    ("linux", "x64"): Target.LINUX_X64,
    ("macos", "x86"): Target.MACOS_X86,
    ("macos", "x64"): Target.MACOS_X64,
}


def _detect(system: str, machine: str) -> Target:
    os_name = _SYSTEMS.get(system.lower())
    arch = _ARCHES.get(machine.lower())
    if os_name is None or arch is None:
        return Target.UNKNOWN
    return _HOST_TARGETS[(os_name, arch)]
