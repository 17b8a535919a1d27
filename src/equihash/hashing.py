"""
Personalized BLAKE2b Hashing

Leaf hashes come from a BLAKE2b state personalized with the parameters,
seeded with the input and nonce, then extended with a 4-byte block index:

    H(ZcashPoW || n || k ; input || nonce || block_index)

Each digest holds indices_per_hash_output n-bit words; leaf index i reads
word i % indices_per_hash_output of block i // indices_per_hash_output.
"""

import hashlib
import struct

from .bits import expand_array
from .params import EquihashParams
from .types import TreeNode


PERSONALIZATION_PREFIX = b'ZcashPoW'


def personalization(n: int, k: int) -> bytes:
    """16-byte personalization: ZcashPoW || n (u32 LE) || k (u32 LE)."""
    return PERSONALIZATION_PREFIX + struct.pack('<II', n, k)


def initialise_state(n: int, k: int, digest_length: int) -> hashlib.blake2b:
    """Fresh BLAKE2b state personalized for (n, k)."""
    return hashlib.blake2b(digest_size=digest_length, person=personalization(n, k))


def bind(state: hashlib.blake2b, input_data: bytes, nonce: bytes) -> hashlib.blake2b:
    """Absorb input then nonce, giving the base state for every leaf."""
    state.update(input_data)
    state.update(nonce)
    return state


def generate_hash(base_state: hashlib.blake2b, block_index: int) -> bytes:
    """Digest of the base state extended with block_index (u32 LE)."""
    state = base_state.copy()
    state.update(struct.pack('<I', block_index))
    return state.digest()


def leaf_node(params: EquihashParams, base_state: hashlib.blake2b, index: int) -> TreeNode:
    """Build the leaf for one solution index."""
    digest = generate_hash(base_state, index // params.indices_per_hash_output)
    word_bytes = params.n // 8
    start = (index % params.indices_per_hash_output) * word_bytes
    return TreeNode(
        hash=expand_array(digest[start:start + word_bytes], params.collision_bit_length),
        indices=(index,),
    )
