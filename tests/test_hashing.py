"""
Tests for personalized BLAKE2b leaf hashing.
"""

import hashlib
import struct

from equihash.hashing import (
    personalization,
    initialise_state,
    bind,
    generate_hash,
    leaf_node,
)
from equihash.params import ZCASH, TEST
from vectors import INPUT_96_5, NONCE_96_5


def _base_state(params, input_data=INPUT_96_5, nonce=NONCE_96_5):
    state = initialise_state(params.n, params.k, params.hash_output_length)
    return bind(state, input_data, nonce)


def _reference_digest(params, data, block_index):
    return hashlib.blake2b(
        data + struct.pack('<I', block_index),
        digest_size=params.hash_output_length,
        person=personalization(params.n, params.k),
    ).digest()


class TestPersonalization:

    def test_layout(self):
        assert personalization(200, 9) == b'ZcashPoW' + bytes([200, 0, 0, 0, 9, 0, 0, 0])

    def test_length(self):
        assert len(personalization(96, 5)) == 16

    def test_parameters_separate_domains(self):
        a = generate_hash(_base_state(TEST), 0)
        b = initialise_state(96, 3, TEST.hash_output_length)
        assert a != generate_hash(bind(b, INPUT_96_5, NONCE_96_5), 0)


class TestGenerateHash:

    def test_matches_one_shot_hash(self):
        state = _base_state(TEST)
        for block in (0, 1, 7, 0xffff):
            assert generate_hash(state, block) == _reference_digest(
                TEST, INPUT_96_5 + NONCE_96_5, block
            )

    def test_digest_length(self):
        assert len(generate_hash(_base_state(ZCASH), 3)) == 50

    def test_base_state_untouched(self):
        state = _base_state(TEST)
        first = generate_hash(state, 4)
        generate_hash(state, 5)
        assert generate_hash(state, 4) == first

    def test_bind_order_matters(self):
        a = generate_hash(_base_state(TEST, b'ab', b'cd'), 0)
        b = generate_hash(_base_state(TEST, b'cd', b'ab'), 0)
        assert a != b

    def test_split_point_irrelevant(self):
        """Only the concatenation input || nonce is hashed."""
        a = generate_hash(_base_state(TEST, b'abc', b'd'), 0)
        b = generate_hash(_base_state(TEST, b'a', b'bcd'), 0)
        assert a == b


class TestLeafNode:

    def test_slot_of_digest(self):
        """For n=96 the 16-bit words need no expansion."""
        state = _base_state(TEST)
        for index in (0, 4, 5, 13, 131071):
            digest = _reference_digest(TEST, INPUT_96_5 + NONCE_96_5, index // 5)
            start = (index % 5) * 12
            node = leaf_node(TEST, state, index)
            assert node.hash == digest[start:start + 12]
            assert node.indices == (index,)

    def test_expanded_length(self):
        node = leaf_node(ZCASH, _base_state(ZCASH), 12345)
        assert len(node.hash) == ZCASH.hash_length

    def test_zcash_words_padded(self):
        """20-bit words occupy 3 bytes with the top nibble clear."""
        node = leaf_node(ZCASH, _base_state(ZCASH), 99)
        assert all(b < 0x10 for b in node.hash[0::3])
