"""Core hashing primitive shared by the Merkle accumulator."""
from __future__ import annotations

import hashlib

DIGEST_SIZE = 32


def sha256(*parts: bytes) -> bytes:
    """Compute the SHA-256 digest of the concatenation of ``parts``.

    Parts are fed to the hasher one by one, so callers never build the
    concatenated buffer themselves.

    Args:
        *parts: Bytes-like chunks, hashed in the given order

    Returns:
        32-byte digest
    """
    hasher = hashlib.sha256()
    for part in parts:
        hasher.update(part)
    return hasher.digest()


__all__ = [
    "DIGEST_SIZE",
    "sha256",
]
