"""Memory-bounded incremental Merkle root.

Leaves are folded into a table of pending subtree digests ("peaks"), one
slot per tree level, with binary-counter carry propagation:
- LeafDigest(data) = SHA256(data)
- ParentDigest(left, right) = SHA256(left || right)

Level k of the table holds the digest of 2^k consecutive leaves and is
occupied iff bit k of the leaf count is set, so n leaves need at most
ceil(log2(n + 1)) digests of working state. Finalization folds the peaks
from the lowest level upward, each higher peak becoming the left sibling
of everything that came after it.

No domain separation byte is used for leaves or internal nodes.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .core import DIGEST_SIZE, sha256

logger = logging.getLogger(__name__)


def leaf_digest(data: bytes) -> bytes:
    """Hash a single record: SHA256(data).

    Args:
        data: Raw record bytes

    Returns:
        32-byte leaf digest
    """
    return sha256(data)


def parent_digest(left: bytes, right: bytes) -> bytes:
    """Hash two child digests: SHA256(left || right).

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte parent digest
    """
    return sha256(left, right)


def fold_right(combine: Callable[[bytes, bytes], bytes], items: Sequence[bytes]) -> bytes:
    """Right fold seeded with the last item.

    ``fold_right(f, [a, b, c]) == f(a, f(b, c))``.

    Args:
        combine: Binary function called as ``combine(item, running)``
        items: Values to fold

    Returns:
        Folded value, or ``b""`` when ``items`` is empty
    """
    if not items:
        return b""
    result = items[-1]
    for item in reversed(items[:-1]):
        result = combine(item, result)
    return result


def finalize_peaks(peaks: Mapping[int, bytes]) -> bytes:
    """Combine accumulator peaks into a single root digest.

    Peaks are ordered highest level first and right-folded with
    ``parent_digest``, so the lowest peak seeds the fold. A single peak is
    returned unchanged.

    Args:
        peaks: Mapping of tree level to pending digest

    Returns:
        Root digest, or ``b""`` when there are no peaks
    """
    ordered = [peaks[level] for level in sorted(peaks, reverse=True)]
    return fold_right(parent_digest, ordered)


class LevelAccumulator:
    """Pending subtree digests, at most one per tree level.

    The accumulator is consumed by :meth:`finalize`; it cannot be extended
    or finalized again afterwards.
    """

    def __init__(self) -> None:
        self._slots: List[Optional[bytes]] = []
        self._leaf_count = 0
        self._finalized = False

    @property
    def leaf_count(self) -> int:
        """Number of leaves summarized so far."""
        return self._leaf_count

    @property
    def peak_count(self) -> int:
        """Number of occupied levels."""
        return sum(1 for slot in self._slots if slot is not None)

    def peaks(self) -> Dict[int, bytes]:
        """Snapshot of the occupied levels as ``{level: digest}``."""
        return {level: slot for level, slot in enumerate(self._slots) if slot is not None}

    def insert(self, digest: bytes, level: int = 0) -> None:
        """Insert a digest at ``level`` and propagate carries upward.

        While the target level is occupied, its digest is removed and
        combined with the incoming one (stored value on the left) and the
        result moves one level up.

        Args:
            digest: Digest summarizing 2^level leaves
            level: Tree level to insert at

        Raises:
            ValueError: If level is negative or digest is not 32 bytes
            RuntimeError: If the accumulator was already finalized
        """
        self._check_open()
        if level < 0:
            raise ValueError(f"Level must be non-negative, got {level}")
        if len(digest) != DIGEST_SIZE:
            raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")

        self._leaf_count += 1 << level
        slots = self._slots
        while level < len(slots) and slots[level] is not None:
            digest = parent_digest(slots[level], digest)
            slots[level] = None
            level += 1
        if level >= len(slots):
            slots.extend([None] * (level + 1 - len(slots)))
        slots[level] = bytes(digest)

    def add_leaf(self, data: bytes) -> None:
        """Hash a record and insert its leaf digest at level 0."""
        self.insert(leaf_digest(data))

    def finalize(self) -> bytes:
        """Fold the peaks into the root and consume the accumulator.

        Returns:
            Root digest, or ``b""`` if nothing was inserted

        Raises:
            RuntimeError: If the accumulator was already finalized
        """
        self._check_open()
        self._finalized = True
        return finalize_peaks(self.peaks())

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("Accumulator already finalized")


def merkle_root(records: Iterable[bytes]) -> bytes:
    """Compute the Merkle root of an ordered stream of records.

    Args:
        records: Finite iterable of bytes-like records, in commit order

    Returns:
        32-byte root digest, or ``b""`` for an empty stream
    """
    acc = LevelAccumulator()
    for record in records:
        acc.add_leaf(record)
    root = acc.finalize()
    logger.debug("Merkle root over %d leaves from %d peaks", acc.leaf_count, acc.peak_count)
    return root


def merkle_root_hex(records: Iterable[bytes]) -> str:
    """Hex-encoded :func:`merkle_root` (empty string for an empty stream)."""
    return merkle_root(records).hex()


__all__ = [
    "leaf_digest",
    "parent_digest",
    "fold_right",
    "finalize_peaks",
    "LevelAccumulator",
    "merkle_root",
    "merkle_root_hex",
]
