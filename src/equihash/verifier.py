"""
Equihash Solution Verification: Main API

    verify(n, k, input, nonce, solution) -> VerifyResult

Pipeline:
1. Validate (n, k)
2. Decode the compact solution into 2^k indices
3. Bind a personalized BLAKE2b state to input || nonce
4. Validate and merge the index tree
5. Require an all-zero root hash

Example:
    >>> from equihash import verify
    >>> result = verify(96, 5, header, nonce, solution)
    >>> if not result:
    ...     print(result.error)
"""

from dataclasses import dataclass
from typing import Optional
import logging

from .errors import ErrorKind, InvalidSolution
from .hashing import initialise_state, bind
from .params import EquihashParams
from .solution import indices_from_minimal
from .tree import tree_validator, iterative_validator


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifyResult:
    """
    Outcome of verifying one solution.

    Truthy when the solution is valid; otherwise error names the reason.
    """
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


def _prepare(n: int, k: int, input_data: bytes, nonce: bytes, solution: bytes):
    params = EquihashParams.validate(n, k)
    params.check_supported()
    indices = indices_from_minimal(params, solution)

    state = initialise_state(n, k, params.hash_output_length)
    bind(state, input_data, nonce)
    return params, state, indices


def check_indices(params: EquihashParams, base_state, indices, validator=tree_validator) -> None:
    """
    Validate the merge tree over indices and check its root.

    Args:
        params: Equihash parameters
        base_state: BLAKE2b state already bound to input and nonce
        indices: Decoded leaf indices
        validator: tree_validator or iterative_validator

    Raises:
        InvalidSolution: INVALID_PARAMS if the root does not cover 2^k
            indices, NON_ZERO_ROOT_HASH if its remaining hash is non-zero,
            or the kind raised by the validator
    """
    root = validator(params, base_state, indices)
    if len(root) != params.solution_length:
        raise InvalidSolution(ErrorKind.INVALID_PARAMS)

    # Hashes were trimmed at every merge, only the remainder is left
    if not root.is_zero(params.collision_byte_length):
        raise InvalidSolution(ErrorKind.NON_ZERO_ROOT_HASH)


def is_valid_solution(
    n: int,
    k: int,
    input_data: bytes,
    nonce: bytes,
    solution: bytes
) -> None:
    """
    Check that solution solves (input, nonce) for parameters (n, k).

    Raises:
        InvalidSolution: With the kind of the first failed check
    """
    params, state, indices = _prepare(n, k, input_data, nonce, solution)
    check_indices(params, state, indices, tree_validator)


def is_valid_solution_iterative(
    n: int,
    k: int,
    input_data: bytes,
    nonce: bytes,
    solution: bytes
) -> None:
    """Same as is_valid_solution, merging the tree level by level."""
    params, state, indices = _prepare(n, k, input_data, nonce, solution)
    check_indices(params, state, indices, iterative_validator)


def verify(
    n: int,
    k: int,
    input_data: bytes,
    nonce: bytes,
    solution: bytes
) -> VerifyResult:
    """
    Verify a solution, reporting failure as a value.

    Args:
        n, k: Equihash parameters
        input_data: Block header (or other message) bytes
        nonce: Nonce bytes, appended to input_data before hashing
        solution: Compact solution bytes

    Returns:
        VerifyResult, truthy iff the solution is valid
    """
    try:
        is_valid_solution(n, k, input_data, nonce, solution)
    except InvalidSolution as e:
        logger.debug(f"Rejected solution for n={n} k={k}: {e.kind}")
        return VerifyResult(e.kind)

    logger.debug(f"Accepted solution for n={n} k={k}")
    return VerifyResult()


# =============================================================================
# Adaptation Layer
# =============================================================================

def verify_hex(
    n: int,
    k: int,
    input_hex: str,
    solution_hex: str,
    nonce_hex: str = ''
) -> VerifyResult:
    """Verify hex-encoded input, solution and nonce. Malformed hex is INVALID_PARAMS."""
    try:
        input_data = bytes.fromhex(input_hex)
        solution = bytes.fromhex(solution_hex)
        nonce = bytes.fromhex(nonce_hex)
    except ValueError:
        logger.debug("Rejected solution: malformed hex")
        return VerifyResult(ErrorKind.INVALID_PARAMS)

    return verify(n, k, input_data, nonce, solution)


def is_valid(
    n: int,
    k: int,
    input_data: bytes,
    nonce: bytes,
    solution: bytes
) -> bool:
    """Yes/no verification."""
    return verify(n, k, input_data, nonce, solution).ok
