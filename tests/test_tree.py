"""
Tests for merge-tree validation on hand-built nodes.
"""

import pytest

from equihash.errors import ErrorKind, InvalidSolution
from equihash.hashing import initialise_state, bind
from equihash.params import TEST
from equihash.tree import (
    has_collision,
    distinct_indices,
    validate_subtrees,
    tree_validator,
    iterative_validator,
)
from equihash.types import TreeNode


def _kind(a, b):
    with pytest.raises(InvalidSolution) as exc:
        validate_subtrees(TEST, a, b)
    return exc.value.kind


class TestTreeNode:

    def test_merge_xors_after_trim(self):
        a = TreeNode(b'\x12\x34\xaa\xbb', (1,))
        b = TreeNode(b'\x12\x34\x0f\x0f', (2,))
        merged = TreeNode.from_children(a, b, 2)
        assert merged.hash == b'\xa5\xb4'
        assert merged.indices == (1, 2)

    def test_merge_concatenates_left_then_right(self):
        """Indices keep sibling order; ordering is validate_subtrees' job."""
        a = TreeNode(b'\x00\x00\x01', (9, 11))
        b = TreeNode(b'\x00\x00\x01', (3, 4))
        merged = TreeNode.from_children(a, b, 2)
        assert merged.indices == (9, 11, 3, 4)
        assert merged.hash == b'\x00'

    def test_is_zero(self):
        node = TreeNode(b'\x00\x00\x01', (0,))
        assert node.is_zero(2)
        assert not node.is_zero(3)

    def test_len(self):
        assert len(TreeNode(b'', (1, 2, 3, 4))) == 4


class TestValidateSubtrees:

    def test_accepts(self):
        a = TreeNode(b'\x12\x34\xaa', (1, 7))
        b = TreeNode(b'\x12\x34\xbb', (2, 9))
        validate_subtrees(TEST, a, b)

    def test_collision(self):
        a = TreeNode(b'\x12\x34\xaa', (1,))
        b = TreeNode(b'\x12\x35\xaa', (2,))
        assert not has_collision(a, b, 2)
        assert _kind(a, b) is ErrorKind.COLLISION

    def test_only_leading_bytes_collide(self):
        a = TreeNode(b'\x12\x34\xaa', (1,))
        b = TreeNode(b'\x12\x34\xbb', (2,))
        assert has_collision(a, b, 2)

    def test_out_of_order(self):
        a = TreeNode(b'\x12\x34', (5,))
        b = TreeNode(b'\x12\x34', (2,))
        assert _kind(a, b) is ErrorKind.OUT_OF_ORDER

    def test_duplicate(self):
        a = TreeNode(b'\x12\x34', (1, 3))
        b = TreeNode(b'\x12\x34', (3, 8))
        assert not distinct_indices(a, b)
        assert _kind(a, b) is ErrorKind.DUPLICATE_IDXS

    def test_equal_leaders_are_duplicates(self):
        a = TreeNode(b'\x12\x34', (4,))
        assert _kind(a, a) is ErrorKind.DUPLICATE_IDXS

    def test_collision_checked_first(self):
        a = TreeNode(b'\x12\x34', (5,))
        b = TreeNode(b'\xff\x34', (5,))
        assert _kind(a, b) is ErrorKind.COLLISION


class TestLeafCount:

    @pytest.fixture
    def state(self):
        return bind(initialise_state(96, 5, TEST.hash_output_length), b'x', b'')

    @pytest.mark.parametrize("validator", [tree_validator, iterative_validator])
    @pytest.mark.parametrize("indices", [[], [1, 2, 3], [0, 1, 2, 3, 4, 5]])
    def test_rejects_non_power_of_two(self, validator, state, indices):
        with pytest.raises(InvalidSolution) as exc:
            validator(TEST, state, indices)
        assert exc.value.kind is ErrorKind.INVALID_PARAMS

    @pytest.mark.parametrize("validator", [tree_validator, iterative_validator])
    def test_single_leaf_is_leaf(self, validator, state):
        node = validator(TEST, state, [7])
        assert node.indices == (7,)
        assert len(node.hash) == TEST.hash_length
