"""
Merge-Tree Validation

A solution's 2^k indices are the leaves of a complete binary tree. Every
pair of siblings must:
1. Collide on their leading collision_byte_length bytes
2. Be ordered by leading index (left before right)
3. Share no index

and merges into a parent whose hash is the XOR of the children with the
collided bytes dropped. After k merges only collision_byte_length bytes
remain, and a valid solution leaves them all zero.

Two equivalent formulations are provided: tree_validator (recursive,
depth-first) and iterative_validator (bottom-up, level by level).
"""

import hashlib
from typing import List, Sequence

from .errors import ErrorKind, InvalidSolution
from .hashing import leaf_node
from .params import EquihashParams
from .types import TreeNode


def has_collision(a: TreeNode, b: TreeNode, length: int) -> bool:
    return a.hash[:length] == b.hash[:length]


def distinct_indices(a: TreeNode, b: TreeNode) -> bool:
    return set(a.indices).isdisjoint(b.indices)


def validate_subtrees(params: EquihashParams, a: TreeNode, b: TreeNode) -> None:
    """
    Check that a (left) and b (right) may be merged.

    Raises:
        InvalidSolution: COLLISION, OUT_OF_ORDER or DUPLICATE_IDXS, checked
            in that order
    """
    if not has_collision(a, b, params.collision_byte_length):
        raise InvalidSolution(ErrorKind.COLLISION)
    if b.indices_before(a):
        raise InvalidSolution(ErrorKind.OUT_OF_ORDER)
    if not distinct_indices(a, b):
        raise InvalidSolution(ErrorKind.DUPLICATE_IDXS)


def _check_leaf_count(indices: Sequence[int]) -> None:
    count = len(indices)
    if count == 0 or count & (count - 1):
        raise InvalidSolution(ErrorKind.INVALID_PARAMS)


def _validate_range(
    params: EquihashParams,
    base_state: hashlib.blake2b,
    indices: Sequence[int]
) -> TreeNode:
    if len(indices) == 1:
        return leaf_node(params, base_state, indices[0])

    mid = len(indices) // 2
    a = _validate_range(params, base_state, indices[:mid])
    b = _validate_range(params, base_state, indices[mid:])
    validate_subtrees(params, a, b)
    return TreeNode.from_children(a, b, params.collision_byte_length)


def tree_validator(
    params: EquihashParams,
    base_state: hashlib.blake2b,
    indices: Sequence[int]
) -> TreeNode:
    """
    Recursively validate and merge the tree over indices.

    Args:
        params: Equihash parameters
        base_state: BLAKE2b state already bound to input and nonce
        indices: Leaf indices in encoded order (power-of-two count)

    Returns:
        Root node; its remaining hash is collision_byte_length bytes
    """
    _check_leaf_count(indices)
    return _validate_range(params, base_state, indices)


def iterative_validator(
    params: EquihashParams,
    base_state: hashlib.blake2b,
    indices: Sequence[int]
) -> TreeNode:
    """Bottom-up variant of tree_validator with identical accept/reject decisions."""
    _check_leaf_count(indices)

    rows: List[TreeNode] = [leaf_node(params, base_state, i) for i in indices]

    while len(rows) > 1:
        merged = []
        for a, b in zip(rows[0::2], rows[1::2]):
            validate_subtrees(params, a, b)
            merged.append(TreeNode.from_children(a, b, params.collision_byte_length))
        rows = merged

    return rows[0]
