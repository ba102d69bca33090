"""Array storage type resolution and validation.

Fills unset input/output storage types from the transform kind and checks
that the pair is legal for the requested placement.
"""

import logging

from rider.contracts.base import reject
from rider.contracts.failure import ErrorKind
from rider.schemas.enums import ArrayType, Placement, TransformKind


logger = logging.getLogger(__name__)

# transform kind -> (default input type, default output type)
DEFAULT_ARRAY_TYPES = {
    TransformKind.COMPLEX_FORWARD: (ArrayType.COMPLEX_INTERLEAVED, ArrayType.COMPLEX_INTERLEAVED),
    TransformKind.COMPLEX_INVERSE: (ArrayType.COMPLEX_INTERLEAVED, ArrayType.COMPLEX_INTERLEAVED),
    TransformKind.REAL_FORWARD: (ArrayType.REAL, ArrayType.HERMITIAN_INTERLEAVED),
    TransformKind.REAL_INVERSE: (ArrayType.HERMITIAN_INTERLEAVED, ArrayType.REAL),
}

_COMPLEX_TYPES = frozenset({ArrayType.COMPLEX_INTERLEAVED, ArrayType.COMPLEX_PLANAR})
_HERMITIAN_TYPES = frozenset({ArrayType.HERMITIAN_INTERLEAVED, ArrayType.HERMITIAN_PLANAR})

# input type -> output types it can be paired with
COMPATIBLE_OUTPUT_TYPES = {
    ArrayType.COMPLEX_INTERLEAVED: _COMPLEX_TYPES,
    ArrayType.COMPLEX_PLANAR: _COMPLEX_TYPES,
    ArrayType.HERMITIAN_INTERLEAVED: frozenset({ArrayType.REAL}),
    ArrayType.HERMITIAN_PLANAR: frozenset({ArrayType.REAL}),
    ArrayType.REAL: _HERMITIAN_TYPES,
}


def coerce_transform_kind(value) -> TransformKind:
    """Convert a name or library code to a ``TransformKind``.

    Raises
    ------
    InvalidTransformKind
        If ``value`` names none of the four transform kinds.
    """
    kind = TransformKind.from_code(value)
    if kind is None:
        reject(ErrorKind.INVALID_TRANSFORM_KIND, f"Invalid transform type: {value!r}")
    return kind


def coerce_placement(value) -> Placement:
    placement = Placement.from_code(value)
    if placement is None:
        raise ValueError(f"Invalid result placement: {value!r}")
    return placement


def coerce_array_type(value, allow_unset: bool = True) -> ArrayType:
    """Convert a name or library code to an ``ArrayType``.

    ``None`` is read as unset. With ``allow_unset=False`` only the five
    concrete storage types are accepted.

    Raises
    ------
    InvalidArrayType
        If ``value`` is not a recognized storage type.
    """
    array_type = ArrayType.UNSET if value is None else ArrayType.from_code(value)
    if array_type is None or (array_type == ArrayType.UNSET and not allow_unset):
        reject(ErrorKind.INVALID_ARRAY_TYPE, f"Invalid array type format: {value!r}")
    return array_type


def resolve_array_types(transform_kind, itype, otype) -> tuple:
    """Fill unset storage types with the defaults for ``transform_kind``.

    Already-set types are returned unchanged, so the call is idempotent.

    Parameters
    ----------
    transform_kind : TransformKind or str or int
        Requested transform kind.
    itype, otype : ArrayType or str or int or None
        Input and output storage types; ``ArrayType.UNSET`` or None to derive.

    Returns
    -------
    tuple of ArrayType
        ``(itype, otype)`` with no ``UNSET`` member.

    Raises
    ------
    InvalidTransformKind
        If the transform kind is not recognized.
    InvalidArrayType
        If a supplied storage type is not recognized.

    Examples
    --------
    >>> resolve_array_types(TransformKind.REAL_FORWARD, ArrayType.UNSET, ArrayType.UNSET)
    (<ArrayType.REAL: 'real'>, <ArrayType.HERMITIAN_INTERLEAVED: 'hermitian_interleaved'>)
    """
    kind = coerce_transform_kind(transform_kind)
    itype = coerce_array_type(itype)
    otype = coerce_array_type(otype)

    default_itype, default_otype = DEFAULT_ARRAY_TYPES[kind]
    if itype == ArrayType.UNSET:
        itype = default_itype
    if otype == ArrayType.UNSET:
        otype = default_otype

    logger.debug("Array types for %s: itype=%s, otype=%s", kind.value, itype.value, otype.value)
    return itype, otype


def validate_array_types(placement, transform_kind, itype, otype) -> None:
    """Check that the storage types are legal and compatible.

    Rules, in order:

    1. both types are one of the five concrete storage types;
    2. in-place complex-to-complex transforms use the same type on both sides;
    3. complex pairs with complex, hermitian with real, real with hermitian.

    Raises
    ------
    InvalidArrayType, InPlaceTypeMismatch, IncompatibleArrayTypePair
        For the first rule that fails.
    """
    itype = coerce_array_type(itype, allow_unset=False)
    otype = coerce_array_type(otype, allow_unset=False)
    kind = coerce_transform_kind(transform_kind)
    placement = coerce_placement(placement)

    if kind.is_complex and placement == Placement.INPLACE and itype != otype:
        reject(
            ErrorKind.INPLACE_TYPE_MISMATCH,
            f"In-place transforms must have identical input and output types "
            f"(got {itype.value} -> {otype.value})",
        )

    if otype not in COMPATIBLE_OUTPUT_TYPES[itype]:
        reject(
            ErrorKind.INCOMPATIBLE_ARRAY_TYPE_PAIR,
            f"Invalid combination of input/output array type formats: "
            f"{itype.value} -> {otype.value}",
        )
