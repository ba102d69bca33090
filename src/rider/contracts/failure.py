"""Centralized failure taxonomy for descriptor resolution.

Resolution fails fast, loud, and once. User-input problems raise a
``DescriptorError`` subclass whose ``kind`` is one member of the closed
``ErrorKind`` set, so callers branch on the kind rather than parse text.
Pipeline bugs raise ``ContractViolation``.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of reasons a descriptor can be rejected."""
    INVALID_TRANSFORM_KIND = "InvalidTransformKind"
    INVALID_ARRAY_TYPE = "InvalidArrayType"
    INCOMPATIBLE_ARRAY_TYPE_PAIR = "IncompatibleArrayTypePair"
    INPLACE_TYPE_MISMATCH = "InPlaceTypeMismatch"
    STRIDE_LENGTH_MISMATCH = "StrideLengthMismatch"
    INPLACE_STRIDE_MISMATCH = "InPlaceStrideMismatch"
    INPLACE_CONTIGUITY_VIOLATION = "InPlaceContiguityViolation"
    SCALING_STRIDE_MISMATCH = "ScalingStrideMismatch"


class DescriptorError(ValueError):
    """Raised when a transform descriptor is rejected.

    This is bad user input (a layout the library cannot execute), not a
    pipeline bug. Subclasses fix ``kind``; catch the base class and inspect
    ``kind`` to handle every case uniformly.
    """
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTransformKind(DescriptorError):
    kind = ErrorKind.INVALID_TRANSFORM_KIND


class InvalidArrayType(DescriptorError):
    kind = ErrorKind.INVALID_ARRAY_TYPE


class IncompatibleArrayTypePair(DescriptorError):
    kind = ErrorKind.INCOMPATIBLE_ARRAY_TYPE_PAIR


class InPlaceTypeMismatch(DescriptorError):
    kind = ErrorKind.INPLACE_TYPE_MISMATCH


class StrideLengthMismatch(DescriptorError):
    kind = ErrorKind.STRIDE_LENGTH_MISMATCH


class InPlaceStrideMismatch(DescriptorError):
    kind = ErrorKind.INPLACE_STRIDE_MISMATCH


class InPlaceContiguityViolation(DescriptorError):
    kind = ErrorKind.INPLACE_CONTIGUITY_VIOLATION


class ScalingStrideMismatch(DescriptorError):
    kind = ErrorKind.SCALING_STRIDE_MISMATCH


ERROR_TYPES = {
    cls.kind: cls
    for cls in (
        InvalidTransformKind,
        InvalidArrayType,
        IncompatibleArrayTypePair,
        InPlaceTypeMismatch,
        StrideLengthMismatch,
        InPlaceStrideMismatch,
        InPlaceContiguityViolation,
        ScalingStrideMismatch,
    )
}


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in resolution logic, not bad user input. It means a
    stage did not produce the invariants it promised.

    Key distinction:
    - DescriptorError: user asked for an illegal layout
    - ValidationError: malformed config (handled by Pydantic)
    - ContractViolation: pipeline bug (programmer error)
    """

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.kind = kind
