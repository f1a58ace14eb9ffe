# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exceptions raised while assembling a package.

Everything `pack` raises derives from PackError, so callers can catch the
whole family in one place. The underlying cause (an OSError, an
ArchiveWriterError, ...) is always chained via `raise ... from`.
"""

from pathlib import Path
from typing import Union


class PackError(Exception):
    """Base for all packaging errors."""


class NoValidTargetsError(PackError):
    """
    Raised when no packageable target is left after filtering out UNKNOWN.

    This one is on the caller: supply at least one supported platform.
    """

    def __init__(self) -> None:
        super().__init__(
            "No valid platform targets were supplied. "
            "This probably means you're running on an unsupported platform."
        )


class WriteLibError(PackError):
    """Raised when one target's native library can't be embedded in the archive."""

    def __init__(self, rid: str, lib_path: Union[str, Path], cause: BaseException) -> None:
        self.rid = rid
        self.lib_path = str(lib_path)
        self.cause = cause
        super().__init__(f"Error reading lib {rid} at path {self.lib_path}: {cause}")


class ArchiveFaultError(PackError):
    """Raised when the archive writer fails on a descriptor or manifest entry, or on finalize."""


class DescriptorFaultError(PackError):
    """Raised when the manifest path can't be expressed as a relative part reference."""
