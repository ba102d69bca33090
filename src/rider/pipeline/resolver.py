"""Transform descriptor resolution pipeline.

Runs the four layout stages in order:

1. array types are defaulted from the transform kind,
2. the type pair is validated against the placement,
3. supplied strides are validated and missing ones defaulted,
4. batch distances are defaulted from the strides,

then enforces the resolved-descriptor contract. The caller's descriptor is
never modified; a new frozen ``ResolvedDescriptor`` is returned, or the first
failing rule raises.
"""

import logging
from typing import Mapping, Optional, Union

from rider.contracts.descriptor import assert_descriptor_resolved
from rider.contracts.base import reject
from rider.contracts.failure import DescriptorError, ErrorKind
from rider.layout.array_types import (
    coerce_array_type,
    coerce_transform_kind,
    resolve_array_types,
    validate_array_types,
)
from rider.layout.strides import resolve_distances, resolve_strides, validate_strides
from rider.schemas.base import RiderBaseModel
from rider.schemas.descriptor import ResolvedDescriptor, TransformDescriptor


logger = logging.getLogger(__name__)

DescriptorLike = Union[TransformDescriptor, ResolvedDescriptor, Mapping]


class ResolutionOutcome(RiderBaseModel):
    """Result value of :func:`try_resolve_descriptor`.

    Exactly one of ``descriptor`` and ``error_kind`` is set.
    """
    descriptor: Optional[ResolvedDescriptor] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None


def as_transform_descriptor(descriptor: DescriptorLike) -> TransformDescriptor:
    """Build a ``TransformDescriptor`` from a model or a plain mapping.

    Mapping values for the transform kind and array types are checked
    before model validation so that unknown values surface as
    ``InvalidTransformKind`` / ``InvalidArrayType`` rather than a generic
    validation error.
    """
    if isinstance(descriptor, TransformDescriptor):
        return descriptor
    if isinstance(descriptor, ResolvedDescriptor):
        return TransformDescriptor.model_validate(descriptor.model_dump())

    fields = dict(descriptor)
    if "transform_kind" in fields:
        fields["transform_kind"] = coerce_transform_kind(fields["transform_kind"])
    for key in ("input_array_type", "output_array_type"):
        if key in fields:
            fields[key] = coerce_array_type(fields[key])
    return TransformDescriptor.model_validate(fields)


def _run_stages(request: TransformDescriptor, defaulting: bool) -> ResolvedDescriptor:
    kind = request.transform_kind
    placement = request.placement
    lengths = request.lengths

    if defaulting:
        itype, otype = resolve_array_types(kind, request.input_array_type, request.output_array_type)
    else:
        itype, otype = request.input_array_type, request.output_array_type
    validate_array_types(placement, kind, itype, otype)

    if defaulting:
        # Supplied strides are validated before defaults are derived; the
        # scaling rule only binds strides the caller supplied.
        istride, ostride = resolve_strides(
            placement, kind, lengths, itype, otype, request.input_stride, request.output_stride
        )
    else:
        istride, ostride = request.input_stride, request.output_stride
        for name, stride in (("input", istride), ("output", ostride)):
            if not stride:
                reject(
                    ErrorKind.STRIDE_LENGTH_MISMATCH,
                    f"Transform dimension ({len(lengths)}) doesn't match {name} stride length (0)",
                )
        validate_strides(placement, kind, lengths, itype, istride, ostride)

    idist, odist = resolve_distances(
        placement, kind, lengths, itype, otype, istride, ostride,
        request.input_distance, request.output_distance,
    )

    resolved = ResolvedDescriptor(
        lengths=lengths,
        placement=placement,
        transform_kind=kind,
        batch_count=request.batch_count,
        precision=request.precision,
        input_array_type=itype,
        output_array_type=otype,
        input_stride=istride,
        output_stride=ostride,
        input_distance=idist,
        output_distance=odist,
    )
    assert_descriptor_resolved(resolved)
    return resolved


def resolve_descriptor(descriptor: DescriptorLike) -> ResolvedDescriptor:
    """Resolve a transform descriptor into one ready for execution.

    This is the SINGLE ENTRYPOINT for descriptor resolution. Unset array
    types, strides and batch distances are derived; everything supplied is
    validated and kept.

    Parameters
    ----------
    descriptor : TransformDescriptor, ResolvedDescriptor or mapping
        The request. A ``ResolvedDescriptor`` resolves to an equal value.

    Returns
    -------
    ResolvedDescriptor
        Frozen, fully specified descriptor.

    Raises
    ------
    DescriptorError
        If the request describes a layout the library cannot execute.
        ``err.kind`` names the violated rule.
    ValidationError
        If a field is malformed (non-positive lengths, more than 3 dims, ...).
    ContractViolation
        If resolution produced an inconsistent descriptor (a bug).

    Examples
    --------
    >>> resolved = resolve_descriptor({
    ...     "lengths": [8, 4],
    ...     "placement": "inplace",
    ...     "transform_kind": "real_forward",
    ... })
    >>> resolved.input_stride, resolved.output_stride
    ((1, 10), (1, 5))
    """
    request = as_transform_descriptor(descriptor)
    try:
        resolved = _run_stages(request, defaulting=True)
    except DescriptorError as e:
        logger.warning("Descriptor rejected (%s): %s", e.kind.value, e)
        raise

    logger.debug("Resolved descriptor: %s", resolved.model_dump(mode="json"))
    return resolved


def validate_descriptor(descriptor: DescriptorLike) -> ResolvedDescriptor:
    """Re-validate a descriptor whose array types and strides are all supplied.

    No type or stride defaulting happens; an unset array type fails with
    ``InvalidArrayType`` and a missing stride with ``StrideLengthMismatch``.
    Unset batch distances are still derived.

    Returns
    -------
    ResolvedDescriptor
        The validated descriptor.
    """
    request = as_transform_descriptor(descriptor)
    try:
        return _run_stages(request, defaulting=False)
    except DescriptorError as e:
        logger.warning("Descriptor rejected (%s): %s", e.kind.value, e)
        raise


def try_resolve_descriptor(descriptor: DescriptorLike) -> ResolutionOutcome:
    """Like :func:`resolve_descriptor`, but returns failures as a value.

    Only ``DescriptorError`` is turned into an outcome; malformed input and
    contract violations still raise.
    """
    try:
        resolved = resolve_descriptor(descriptor)
    except DescriptorError as e:
        return ResolutionOutcome(error_kind=e.kind, message=e.message)
    return ResolutionOutcome(descriptor=resolved)


__all__ = [
    "ResolutionOutcome",
    "as_transform_descriptor",
    "resolve_descriptor",
    "try_resolve_descriptor",
    "validate_descriptor",
]
