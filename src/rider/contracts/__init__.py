"""Descriptor contracts: typed rejection and fail-fast stage invariants.

Key principle:
- Pydantic validates config correctness
- DescriptorError reports layouts the FFT library cannot execute
- Contracts validate pipeline correctness
"""

from rider.contracts.failure import (
    ContractViolation,
    DescriptorError,
    ErrorKind,
    IncompatibleArrayTypePair,
    InPlaceContiguityViolation,
    InPlaceStrideMismatch,
    InPlaceTypeMismatch,
    InvalidArrayType,
    InvalidTransformKind,
    ScalingStrideMismatch,
    StrideLengthMismatch,
)
from rider.contracts.base import reject, require
from rider.contracts.descriptor import assert_descriptor_resolved

__all__ = [
    "ContractViolation",
    "DescriptorError",
    "ErrorKind",
    "IncompatibleArrayTypePair",
    "InPlaceContiguityViolation",
    "InPlaceStrideMismatch",
    "InPlaceTypeMismatch",
    "InvalidArrayType",
    "InvalidTransformKind",
    "ScalingStrideMismatch",
    "StrideLengthMismatch",
    "reject",
    "require",
    "assert_descriptor_resolved",
]
