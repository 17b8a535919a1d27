"""
Equihash: Proof-of-Work Solution Verification

Checks that a compact Equihash solution answers the generalized birthday
problem defined by (n, k), an input message and a nonce, without repeating
the search that produced it.

Usage:
    from equihash import verify, ErrorKind

    result = verify(200, 9, header, nonce, solution)
    if result:
        ...
    elif result.error is ErrorKind.COLLISION:
        ...

    # Raising interface
    from equihash import is_valid_solution, InvalidSolution
    try:
        is_valid_solution(200, 9, header, nonce, solution)
    except InvalidSolution as e:
        print(e.kind)
"""

# Errors
from .errors import ErrorKind, InvalidSolution

# Parameters
from .params import EquihashParams, PRESETS, get_preset, ZCASH, BTG, ZERO, TEST

# Bit packing
from .bits import expand_array, compress_array

# Solution encoding
from .solution import (
    indices_from_minimal,
    minimal_from_indices,
    read_solution_field,
    write_solution_field,
)

# Hashing
from .hashing import personalization, initialise_state, bind, generate_hash, leaf_node

# Tree validation
from .types import TreeNode
from .tree import validate_subtrees, tree_validator, iterative_validator

# Main API
from .verifier import (
    VerifyResult,
    verify,
    verify_hex,
    is_valid,
    is_valid_solution,
    is_valid_solution_iterative,
    check_indices,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Errors
    "ErrorKind",
    "InvalidSolution",
    # Parameters
    "EquihashParams",
    "PRESETS",
    "get_preset",
    "ZCASH",
    "BTG",
    "ZERO",
    "TEST",
    # Bit packing
    "expand_array",
    "compress_array",
    # Solution encoding
    "indices_from_minimal",
    "minimal_from_indices",
    "read_solution_field",
    "write_solution_field",
    # Hashing
    "personalization",
    "initialise_state",
    "bind",
    "generate_hash",
    "leaf_node",
    # Tree validation
    "TreeNode",
    "validate_subtrees",
    "tree_validator",
    "iterative_validator",
    # Main API
    "VerifyResult",
    "verify",
    "verify_hex",
    "is_valid",
    "is_valid_solution",
    "is_valid_solution_iterative",
    "check_indices",
]
