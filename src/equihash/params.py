"""
Equihash Parameters

EquihashParams fixes (n, k) and derives every width the verifier needs.
A parameter set that breaks the algorithm's requirements is never constructed.
"""

from dataclasses import dataclass
from typing import Dict

from .errors import ErrorKind, InvalidSolution


# BLAKE2b emits at most 512 bits per digest.
HASH_BITS = 512

# Bounds imposed by the bit unpacking accumulator.
MIN_EXPAND_BITS = 8
MAX_EXPAND_BITS = 25


@dataclass(frozen=True)
class EquihashParams:
    """
    Public parameters (n, k) of an Equihash instance.

    Requirements:
    - n is a multiple of 8, so the hash output has an exact byte length.
    - k >= 3, so encoded solutions have an exact byte length.
    - k < n, so the collision bit length is at least 1.
    - n is a multiple of k + 1, so the collision bit length is an integer.
    """

    n: int
    k: int

    def __post_init__(self):
        if not (
            self.n % 8 == 0
            and self.k >= 3
            and self.k < self.n
            and self.n % (self.k + 1) == 0
        ):
            raise InvalidSolution(ErrorKind.INVALID_PARAMS)

    @classmethod
    def validate(cls, n: int, k: int) -> 'EquihashParams':
        """Build parameters, raising INVALID_PARAMS if (n, k) is unusable."""
        return cls(n, k)

    # ==========================================================================
    # Derived widths
    # ==========================================================================

    @property
    def indices_per_hash_output(self) -> int:
        """Number of n-bit words cut from a single digest."""
        return HASH_BITS // self.n

    @property
    def hash_output_length(self) -> int:
        """BLAKE2b digest length in bytes."""
        return self.indices_per_hash_output * self.n // 8

    @property
    def collision_bit_length(self) -> int:
        return self.n // (self.k + 1)

    @property
    def collision_byte_length(self) -> int:
        return (self.collision_bit_length + 7) // 8

    @property
    def hash_length(self) -> int:
        """Length of an expanded leaf hash."""
        return (self.k + 1) * self.collision_byte_length

    @property
    def solution_width(self) -> int:
        """Bits per index in the compact encoding."""
        return self.collision_bit_length + 1

    @property
    def solution_length(self) -> int:
        """Number of indices in a solution."""
        return 1 << self.k

    @property
    def solution_size(self) -> int:
        """Byte length of a compact solution."""
        # Exact because k >= 3
        return self.solution_length * self.solution_width // 8

    def check_supported(self) -> None:
        """
        Reject parameter sets the hashing and unpacking steps cannot serve.

        Valid (n, k) pairs can still ask for a digest wider than BLAKE2b
        provides or for bit widths outside the unpacking accumulator.
        """
        if (
            self.n > HASH_BITS
            or self.collision_bit_length < MIN_EXPAND_BITS
            or self.solution_width > MAX_EXPAND_BITS
        ):
            raise InvalidSolution(ErrorKind.INVALID_PARAMS)


# =============================================================================
# Preset Configurations
# =============================================================================

# Zcash mainnet
ZCASH = EquihashParams(200, 9)

# Bitcoin Gold
BTG = EquihashParams(144, 5)

# Zero
ZERO = EquihashParams(192, 7)

# Small: for testing
TEST = EquihashParams(96, 5)

PRESETS: Dict[str, EquihashParams] = {
    'zcash': ZCASH,
    'btg': BTG,
    'zero': ZERO,
    'test': TEST,
}


def get_preset(name: str) -> EquihashParams:
    """Look up a named parameter set (case-insensitive)."""
    return PRESETS[name.lower()]
