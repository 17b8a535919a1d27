"""
Tree Node Type for Equihash Verification

A TreeNode is one subtree of a solution's merge tree: the XOR of its leaf
hashes (leading collision bytes already trimmed) and the leaf indices it
covers, in encoded order.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class TreeNode:
    """Immutable subtree of the merge tree. Merging builds a new node."""
    hash: bytes
    indices: Tuple[int, ...]

    @classmethod
    def from_children(cls, a: TreeNode, b: TreeNode, trim: int) -> TreeNode:
        """
        Merge two sibling subtrees.

        The hashes are XORed after dropping their first trim bytes; the
        indices are a's followed by b's. Callers check ordering first.
        """
        merged = bytes(x ^ y for x, y in zip(a.hash[trim:], b.hash[trim:]))
        return cls(merged, a.indices + b.indices)

    def indices_before(self, other: TreeNode) -> bool:
        # Indices are decoded big-endian, so integer comparison is equivalent
        # to comparing the encoded arrays
        return self.indices[0] < other.indices[0]

    def is_zero(self, length: int) -> bool:
        """True if the first length bytes of the hash are all zero."""
        return not any(self.hash[:length])

    def __len__(self) -> int:
        return len(self.indices)
