# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Input and output records for package assembly.

Both are frozen: a request is built once by the caller and consumed in one
`pack` call, a package is produced once and handed back.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Union

from nupack.targets.registry import Target

LibPath = Union[str, os.PathLike]

# One built native library per target. The dict enforces key uniqueness.
NativeLibrarySet = Mapping[Target, LibPath]

PACKAGE_EXTENSION = "nupkg"
MANIFEST_EXTENSION = "nuspec"


@dataclass(frozen=True)
class PackageRequest:
    """
    Everything needed to build one package.

    The manifest is an already rendered `.nuspec` document. It is embedded
    verbatim and never parsed here.
    """

    id: str
    version: str
    manifest: bytes
    libs: NativeLibrarySet = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Package id must not be empty")
        if not self.version:
            raise ValueError("Package version must not be empty")


@dataclass(frozen=True)
class Package:
    """A finished `.nupkg`: its file name, the RIDs it carries, and the archive bytes."""

    name: str
    rids: tuple[str, ...]
    buf: bytes

    def __post_init__(self) -> None:
        if not self.rids:
            raise ValueError("A package must carry at least one runtime identifier")


def package_file_name(package_id: str, version: str) -> str:
    return f"{package_id}.{version}.{PACKAGE_EXTENSION}"


def manifest_part_name(package_id: str) -> str:
    return f"{package_id}.{MANIFEST_EXTENSION}"
