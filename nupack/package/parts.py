# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Part name normalization.

Paths inside the archive are always forward-slash separated and relative to
the archive root, no matter what separator the host uses. Both the archive
writer and the descriptor generator go through `normalize_part_name` so the
entry names and the references to them can never disagree.
"""

import os
from typing import Union


class InvalidPartNameError(ValueError):
    """Raised when a path can't be used as a part name inside the archive."""


def normalize_part_name(path: Union[str, os.PathLike]) -> str:
    """
    Turn a host path into an archive part name.

    Backslashes become forward slashes and `.` segments are dropped. The
    result is a relative reference: no leading slash, no `..`, no empty
    segments, no drive letters.

    Raises:
        InvalidPartNameError: If the path can't be represented that way.
    """
    raw = os.fspath(path)
    if not isinstance(raw, str):
        raise InvalidPartNameError(f"Part name must be text, got {type(raw).__name__}")

    text = raw.replace("\\", "/")
    if not text:
        raise InvalidPartNameError("Part name must not be empty")
    if text.startswith("/"):
        raise InvalidPartNameError(f"Part name must be relative: '{raw}'")
    if text.endswith("/"):
        raise InvalidPartNameError(f"Part name must not end with a separator: '{raw}'")

    segments = [segment for segment in text.split("/") if segment != "."]
    if not segments:
        raise InvalidPartNameError(f"Part name has no segments: '{raw}'")

    for segment in segments:
        if segment == "":
            raise InvalidPartNameError(f"Part name has an empty segment: '{raw}'")
        if segment == "..":
            raise InvalidPartNameError(f"Part name must not step outside the archive: '{raw}'")
        if ":" in segment:
            raise InvalidPartNameError(f"Part name must not contain a drive or scheme: '{raw}'")
        if any(ord(ch) < 0x20 for ch in segment):
            raise InvalidPartNameError(f"Part name contains control characters: {raw!r}")

    return "/".join(segments)


def part_extension(part_name: str) -> str:
    """Extension of the last segment without the dot, or '' if there is none."""
    last = part_name.rsplit("/", 1)[-1]
    _, dot, ext = last.rpartition(".")
    if not dot:
        return ""
    return ext
