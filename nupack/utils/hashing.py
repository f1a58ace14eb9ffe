# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Hashing helpers.

SHA-256 is used for stable identifiers inside generated documents and for
the digest the CLI reports after writing a package. Nothing is embedded in
the archive as a checksum.
"""

import hashlib


def compute_sha256_bytes(data: bytes) -> str:
    """
    Compute the SHA256 hex digest of raw bytes.

    Args:
        data: The bytes to hash.

    Returns:
        Lowercase hex string of the SHA256 digest.
    """
    return hashlib.sha256(data).hexdigest()
