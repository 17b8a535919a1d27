"""
Error Taxonomy for Equihash Verification

Every rejection carries exactly one kind and nothing else.
"""

from enum import Enum


class ErrorKind(Enum):
    """Why a solution was rejected."""
    INVALID_PARAMS = "invalid parameters"
    COLLISION = "invalid collision length between StepRows"
    OUT_OF_ORDER = "Index tree incorrectly ordered"
    DUPLICATE_IDXS = "duplicate indices"
    NON_ZERO_ROOT_HASH = "root hash of tree is non-zero"

    def __str__(self) -> str:
        return self.value


class InvalidSolution(ValueError):
    """An Equihash solution failed to verify."""

    def __init__(self, kind: ErrorKind):
        super().__init__(f"Invalid solution: {kind}")
        self.kind = kind
