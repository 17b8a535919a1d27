"""
Compact Solution Encoding

A solution is 2^k indices, each collision_bit_length + 1 bits wide, packed
big-endian with no gaps. In block serializations the packed solution is
prefixed with a CompactSize length.
"""

import struct
from typing import List, Sequence, Tuple

from .bits import expand_array, compress_array
from .errors import ErrorKind, InvalidSolution
from .params import EquihashParams


INDEX_BYTES = struct.calcsize('>I')


def _index_byte_pad(params: EquihashParams) -> int:
    return INDEX_BYTES - (params.solution_width + 7) // 8


def indices_from_minimal(params: EquihashParams, minimal: bytes) -> List[int]:
    """
    Decode a compact solution into its indices, in encoded order.

    Raises:
        InvalidSolution: INVALID_PARAMS if the length does not match (n, k)
    """
    if len(minimal) != params.solution_size:
        raise InvalidSolution(ErrorKind.INVALID_PARAMS)
    params.check_supported()

    expanded = expand_array(minimal, params.solution_width, _index_byte_pad(params))

    # Big-endian so that lexicographic array comparison is integer comparison
    count = len(expanded) // INDEX_BYTES
    return list(struct.unpack(f'>{count}I', expanded))


def minimal_from_indices(params: EquihashParams, indices: Sequence[int]) -> bytes:
    """Encode 2^k indices into the compact form."""
    if len(indices) != params.solution_length:
        raise InvalidSolution(ErrorKind.INVALID_PARAMS)
    params.check_supported()

    limit = 1 << params.solution_width
    if any(i < 0 or i >= limit for i in indices):
        raise InvalidSolution(ErrorKind.INVALID_PARAMS)

    expanded = struct.pack(f'>{len(indices)}I', *indices)
    return compress_array(expanded, params.solution_width, _index_byte_pad(params))


# =============================================================================
# Solution Field (CompactSize || solution)
# =============================================================================

# prefix byte -> (struct format, prefix + size bytes)
_COMPACT_SIZE_FORMATS = {
    0xfd: ('<H', 3),
    0xfe: ('<I', 5),
    0xff: ('<Q', 9),
}


def read_compact_size(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """Parse a CompactSize integer, return (value, next_offset)."""
    if offset >= len(data):
        raise InvalidSolution(ErrorKind.INVALID_PARAMS)

    prefix = data[offset]
    if prefix < 0xfd:
        return prefix, offset + 1

    fmt, header_len = _COMPACT_SIZE_FORMATS[prefix]
    if offset + header_len > len(data):
        raise InvalidSolution(ErrorKind.INVALID_PARAMS)
    value = struct.unpack(fmt, data[offset + 1:offset + header_len])[0]
    return value, offset + header_len


def write_compact_size(value: int) -> bytes:
    """Serialize a CompactSize integer in its shortest form."""
    if value < 0:
        raise ValueError(f"CompactSize cannot encode negative value {value}")
    if value < 0xfd:
        return bytes([value])
    if value <= 0xffff:
        return b'\xfd' + struct.pack('<H', value)
    if value <= 0xffffffff:
        return b'\xfe' + struct.pack('<I', value)
    return b'\xff' + struct.pack('<Q', value)


def read_solution_field(data: bytes, offset: int = 0) -> Tuple[bytes, int]:
    """
    Read a length-prefixed solution from a serialized block.

    Returns:
        (solution, offset just past the solution)
    """
    length, start = read_compact_size(data, offset)
    end = start + length
    if end > len(data):
        raise InvalidSolution(ErrorKind.INVALID_PARAMS)
    return bytes(data[start:end]), end


def write_solution_field(solution: bytes) -> bytes:
    """Serialize a solution with its CompactSize prefix."""
    return write_compact_size(len(solution)) + bytes(solution)
