"""Stride and batch-distance resolution for transform descriptors.

Strides are element distances per dimension, fastest dimension first. An
in-place real/complex transform shares one buffer between a real array and
its hermitian half-spectrum, so the real side reserves ``2 * (n0 // 2 + 1)``
elements along dimension 0; that padding is expressed through the
``leading_distance`` override of :func:`default_stride`.
"""

import logging
from typing import Optional, Sequence

from rider.contracts.base import reject, require
from rider.contracts.failure import ErrorKind
from rider.layout.array_types import coerce_array_type, coerce_placement, coerce_transform_kind
from rider.schemas.descriptor import complex_length
from rider.schemas.enums import ArrayType, Placement


logger = logging.getLogger(__name__)


def default_stride(extents: Sequence[int], leading_distance: Optional[int] = None) -> tuple:
    """Contiguous strides over ``extents``, fastest index first.

    Parameters
    ----------
    extents : sequence of int
        Array extents, fastest-varying dimension first.
    leading_distance : int, optional
        Element distance reserved along dimension 0 instead of ``extents[0]``.

    Returns
    -------
    tuple of int
        ``strides[0] == 1`` and ``strides[i] == strides[i-1] * extent(i-1)``.

    Examples
    --------
    >>> default_stride([8, 4])
    (1, 8)
    >>> default_stride([8, 4], leading_distance=10)
    (1, 10)
    """
    strides = [1]
    for i in range(1, len(extents)):
        extent = leading_distance if (i == 1 and leading_distance) else extents[i - 1]
        strides.append(strides[-1] * extent)
    return tuple(strides)


def default_distance(
    extents: Sequence[int],
    strides: Sequence[int],
    leading_distance: Optional[int] = None,
) -> int:
    """Element distance between consecutive transforms of a batch.

    The largest ``extent * stride`` product over all dimensions, with the
    same leading-distance override as :func:`default_stride`.
    """
    spans = [
        (leading_distance if (i == 0 and leading_distance) else extent) * stride
        for i, (extent, stride) in enumerate(zip(extents, strides))
    ]
    return max(spans)


def _padded_leading_distance(lengths, inplace: bool) -> Optional[int]:
    return complex_length(lengths)[0] * 2 if inplace else None


def _check_rank(lengths, istride, ostride) -> None:
    if istride and len(istride) != len(lengths):
        reject(
            ErrorKind.STRIDE_LENGTH_MISMATCH,
            f"Transform dimension ({len(lengths)}) doesn't match input stride length ({len(istride)})",
        )
    if ostride and len(ostride) != len(lengths):
        reject(
            ErrorKind.STRIDE_LENGTH_MISMATCH,
            f"Transform dimension ({len(lengths)}) doesn't match output stride length ({len(ostride)})",
        )


def _check_inplace_real(forward: bool, istride, ostride) -> None:
    # Each side is checked whenever it is supplied, even if the other is not.
    if istride and istride[0] != 1:
        reject(
            ErrorKind.INPLACE_CONTIGUITY_VIOLATION,
            f"In-place real/complex transforms require contiguous input data (istride[0]={istride[0]})",
        )
    if ostride and ostride[0] != 1:
        reject(
            ErrorKind.INPLACE_CONTIGUITY_VIOLATION,
            f"In-place real/complex transforms require contiguous output data (ostride[0]={ostride[0]})",
        )
    if not (istride and ostride):
        return

    for i in range(1, len(istride)):
        if forward and istride[i] != 2 * ostride[i]:
            reject(
                ErrorKind.SCALING_STRIDE_MISMATCH,
                f"In-place real-to-complex transform strides are inconsistent: "
                f"istride[{i}]={istride[i]} != 2 * ostride[{i}]={ostride[i]}",
            )
        if not forward and 2 * istride[i] != ostride[i]:
            reject(
                ErrorKind.SCALING_STRIDE_MISMATCH,
                f"In-place complex-to-real transform strides are inconsistent: "
                f"2 * istride[{i}]={istride[i]} != ostride[{i}]={ostride[i]}",
            )


def validate_strides(placement, transform_kind, lengths, itype, istride=(), ostride=()) -> None:
    """Check supplied strides without deriving any defaults.

    Empty strides are skipped, so this also accepts a partially specified
    descriptor. For in-place complex-to-complex transforms the strides must
    match; for in-place real/complex transforms the fastest dimension must be
    contiguous and the real side must be twice the complex side in every
    higher dimension.

    Raises
    ------
    StrideLengthMismatch, InPlaceStrideMismatch,
    InPlaceContiguityViolation, ScalingStrideMismatch
        For the first rule that fails.
    """
    kind = coerce_transform_kind(transform_kind)
    inplace = coerce_placement(placement) == Placement.INPLACE
    istride = tuple(istride or ())
    ostride = tuple(ostride or ())

    _check_rank(lengths, istride, ostride)

    if not inplace:
        return
    if kind.is_complex:
        if istride and ostride and istride != ostride:
            reject(
                ErrorKind.INPLACE_STRIDE_MISMATCH,
                f"In-place transforms require istride == ostride (got {list(istride)} and {list(ostride)})",
            )
    else:
        forward = coerce_array_type(itype) == ArrayType.REAL
        _check_inplace_real(forward, istride, ostride)


def resolve_strides(placement, transform_kind, lengths, itype, otype, istride=(), ostride=()) -> tuple:
    """Validate supplied strides and fill empty ones with defaults.

    Parameters
    ----------
    placement : Placement
        In-place or out-of-place.
    transform_kind : TransformKind
        Requested transform kind.
    lengths : sequence of int
        Transform lengths, fastest dimension first.
    itype, otype : ArrayType
        Resolved storage types. The direction of a real/complex transform is
        read from ``itype`` (real input means forward); ``otype`` is accepted
        for symmetry with :func:`validate_array_types`.
    istride, ostride : sequence of int
        Supplied strides, or empty to derive the default.

    Returns
    -------
    tuple
        ``(istride, ostride)`` as tuples of length ``len(lengths)``.

    Raises
    ------
    DescriptorError
        If a supplied stride breaks a layout rule (see :func:`validate_strides`).
    ContractViolation
        If the resolved strides do not match the transform rank.

    Examples
    --------
    >>> resolve_strides(Placement.INPLACE, TransformKind.REAL_FORWARD, [8, 4],
    ...                 ArrayType.REAL, ArrayType.HERMITIAN_INTERLEAVED)
    ((1, 10), (1, 5))
    """
    kind = coerce_transform_kind(transform_kind)
    inplace = coerce_placement(placement) == Placement.INPLACE
    lengths = tuple(lengths)
    istride = tuple(istride or ())
    ostride = tuple(ostride or ())

    validate_strides(placement, kind, lengths, itype, istride, ostride)

    if kind.is_complex:
        if inplace and istride and not ostride:
            ostride = istride
        if inplace and ostride and not istride and ostride != default_stride(lengths):
            reject(
                ErrorKind.INPLACE_STRIDE_MISMATCH,
                f"In-place transforms require istride == ostride (got default {list(default_stride(lengths))} "
                f"and {list(ostride)})",
            )
        if not istride:
            istride = default_stride(lengths)
        if not ostride:
            ostride = default_stride(lengths)
    else:
        forward = coerce_array_type(itype) == ArrayType.REAL
        real_stride = default_stride(lengths, _padded_leading_distance(lengths, inplace))
        hermitian_stride = default_stride(complex_length(lengths))
        if not istride:
            istride = real_stride if forward else hermitian_stride
        if not ostride:
            ostride = hermitian_stride if forward else real_stride

    require(
        len(istride) == len(lengths),
        "Setup failed; inconsistent istride and length.",
        ErrorKind.STRIDE_LENGTH_MISMATCH,
    )
    require(
        len(ostride) == len(lengths),
        "Setup failed; inconsistent ostride and length.",
        ErrorKind.STRIDE_LENGTH_MISMATCH,
    )

    logger.debug("Strides for %s %s: istride=%s, ostride=%s", kind.value, list(lengths), istride, ostride)
    return istride, ostride


def array_extents(array_type: ArrayType, lengths, inplace_real: bool) -> tuple:
    """Extents and leading distance addressed by one side of the transform."""
    if array_type.is_hermitian:
        return complex_length(lengths), None
    if array_type == ArrayType.REAL:
        return tuple(lengths), _padded_leading_distance(lengths, inplace_real)
    return tuple(lengths), None


def resolve_distances(
    placement,
    transform_kind,
    lengths,
    itype,
    otype,
    istride,
    ostride,
    idist: Optional[int] = None,
    odist: Optional[int] = None,
) -> tuple:
    """Fill unset batch distances from the resolved strides.

    Supplied distances are returned unchanged.

    Returns
    -------
    tuple of int
        ``(idist, odist)``.
    """
    kind = coerce_transform_kind(transform_kind)
    inplace_real = coerce_placement(placement) == Placement.INPLACE and not kind.is_complex

    if idist is None:
        extents, leading = array_extents(coerce_array_type(itype, allow_unset=False), lengths, inplace_real)
        idist = default_distance(extents, istride, leading)
    if odist is None:
        extents, leading = array_extents(coerce_array_type(otype, allow_unset=False), lengths, inplace_real)
        odist = default_distance(extents, ostride, leading)

    return idist, odist
