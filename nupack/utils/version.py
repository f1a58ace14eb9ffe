# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Development build versions.

Local builds get a pre-release tag derived from the current UTC timestamp so
each one sorts after the last and before the real release:

    0.0.1            -> 0.0.1-dev.1760000000
    0.0.1-carrots1   -> 0.0.1-carrots1.1760000000
    0.0.1-carrots+1  -> 0.0.1-carrots.1760000000   (build metadata dropped)
"""

import re
import time
from typing import Optional

DEV_TAG = "dev"

_SEMVER = re.compile(
    r"^(?P<core>(?:0|[1-9]\d*)\.(?:0|[1-9]\d*)\.(?:0|[1-9]\d*))"
    r"(?:-(?P<pre>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


class VersionError(ValueError):
    """Raised when a dev version can't be derived."""


def dev_version(version: str, timestamp: Optional[int] = None) -> str:
    """
    Append a timestamp pre-release component to a semantic version.

    Args:
        version: A semantic version string, e.g. "1.2.3" or "1.2.3-beta".
        timestamp: Unix seconds to use instead of the current time.

    Returns:
        The dev version string.

    Raises:
        VersionError: If `version` isn't a semantic version, or the timestamp
            is before the epoch.
    """
    match = _SEMVER.match(version.strip())
    if match is None:
        raise VersionError(f"Error adding dev pretag: '{version}' is not a semantic version")

    build = int(time.time()) if timestamp is None else timestamp
    if build < 0:
        raise VersionError(
            "Current timestamp is before the epoch. "
            "You are either a time traveller or there's an error with your clock."
        )

    pre = match.group("pre") or DEV_TAG
    return f"{match.group('core')}-{pre}.{build}"
