"""
Big-Endian Bit Packing

Equihash stores indices and hash words as densely packed big-endian integers
whose width is not a multiple of 8. These helpers convert between the dense
bitstream and one integer per fixed-width, zero-padded byte group.

Big-endian order is kept throughout, so comparing two expanded elements
byte-wise is the same as comparing the integers they hold.
"""

from .params import MIN_EXPAND_BITS, MAX_EXPAND_BITS


# Accumulator width; must hold MAX_EXPAND_BITS plus 7 bits of slack.
_ACC_MASK = 0xFFFFFFFF


def _check_width(bit_len: int, byte_pad: int) -> None:
    if not MIN_EXPAND_BITS <= bit_len <= MAX_EXPAND_BITS:
        raise ValueError(
            f"Bit length {bit_len} outside [{MIN_EXPAND_BITS}, {MAX_EXPAND_BITS}]"
        )
    if byte_pad < 0:
        raise ValueError(f"Negative byte padding: {byte_pad}")


def expand_array(data: bytes, bit_len: int, byte_pad: int = 0) -> bytes:
    """
    Unpack a bitstream of bit_len-wide integers.

    Each integer is written right-aligned into (bit_len + 7) // 8 bytes,
    preceded by byte_pad zero bytes.

    Args:
        data: Densely packed big-endian bitstream
        bit_len: Width of each packed integer, 8..25
        byte_pad: Extra leading zero bytes per output element

    Returns:
        Expanded bytes, 8 * out_width * len(data) // bit_len long
    """
    _check_width(bit_len, byte_pad)

    out_width = (bit_len + 7) // 8 + byte_pad
    out_len = 8 * out_width * len(data) // bit_len

    # Packing already matches the target width
    if out_len == len(data):
        return bytes(data)

    out = bytearray(out_len)
    bit_len_mask = (1 << bit_len) - 1

    # The low acc_bits bits of acc_value are pending input, big-endian
    acc_bits = 0
    acc_value = 0

    j = 0
    for b in data:
        acc_value = ((acc_value << 8) | b) & _ACC_MASK
        acc_bits += 8

        # Emit an element whenever a full one is buffered
        if acc_bits >= bit_len:
            acc_bits -= bit_len
            for x in range(byte_pad, out_width):
                shift = 8 * (out_width - x - 1)
                out[j + x] = (
                    (acc_value >> (acc_bits + shift))
                    & ((bit_len_mask >> shift) & 0xFF)
                )
            j += out_width

    return bytes(out)


def compress_array(data: bytes, bit_len: int, byte_pad: int = 0) -> bytes:
    """
    Pack fixed-width elements back into a dense bitstream.

    Inverse of expand_array: reads (bit_len + 7) // 8 + byte_pad bytes per
    element and keeps the low bit_len bits of each.
    """
    _check_width(bit_len, byte_pad)

    in_width = (bit_len + 7) // 8 + byte_pad
    if len(data) % in_width != 0:
        raise ValueError(
            f"Input length {len(data)} is not a multiple of element width {in_width}"
        )
    if (len(data) // in_width * bit_len) % 8 != 0:
        raise ValueError("Packed output would not fill a whole number of bytes")

    bit_len_mask = (1 << bit_len) - 1
    out = bytearray()

    acc_bits = 0
    acc_value = 0

    for j in range(0, len(data), in_width):
        value = int.from_bytes(data[j:j + in_width], 'big') & bit_len_mask
        acc_value = (acc_value << bit_len) | value
        acc_bits += bit_len

        while acc_bits >= 8:
            acc_bits -= 8
            out.append((acc_value >> acc_bits) & 0xFF)
        acc_value &= (1 << acc_bits) - 1

    return bytes(out)
