# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Package assembly for nupack.

Lays out a `.nupkg` archive: the relationships and content-types descriptors,
the manifest, and one native binary per supported target under
`runtimes/{rid}/native/`. `pack` is the single entry point.
"""

from nupack.package.assembler import pack
from nupack.package.errors import (
    ArchiveFaultError,
    DescriptorFaultError,
    NoValidTargetsError,
    PackError,
    WriteLibError,
)
from nupack.package.models import Package, PackageRequest

__all__ = [
    "ArchiveFaultError",
    "DescriptorFaultError",
    "NoValidTargetsError",
    "Package",
    "PackageRequest",
    "PackError",
    "WriteLibError",
    "pack",
]
