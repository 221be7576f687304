"""Incremental, memory-bounded Merkle root over ordered record streams.

Streams of records are folded through a per-level accumulator so that only
O(log n) digests are held at any time.
"""

from fastmerkle.core import DIGEST_SIZE, sha256
from fastmerkle.merkle import (
    LevelAccumulator,
    finalize_peaks,
    fold_right,
    leaf_digest,
    merkle_root,
    merkle_root_hex,
    parent_digest,
)

__version__ = "0.1.0"

__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "leaf_digest",
    "parent_digest",
    "fold_right",
    "finalize_peaks",
    "LevelAccumulator",
    "merkle_root",
    "merkle_root_hex",
]
