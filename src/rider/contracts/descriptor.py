"""Resolved descriptor contract.

Enforces the guarantee that a descriptor leaving the resolution pipeline is
complete and safe to hand to the transform setup call.
"""

from rider.contracts.base import require
from rider.contracts.failure import ErrorKind
from rider.schemas.descriptor import MAX_DIMENSIONALITY, ResolvedDescriptor
from rider.schemas.enums import ArrayType


def assert_descriptor_resolved(descriptor: ResolvedDescriptor) -> None:
    """Enforce the resolved-descriptor contract.

    Called at the end of the pipeline. Verifies that every field the
    execution engine depends on is set and mutually consistent.

    Parameters
    ----------
    descriptor : ResolvedDescriptor
        Output of the resolution pipeline

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    lengths = descriptor.lengths
    require(
        1 <= len(lengths) <= MAX_DIMENSIONALITY,
        f"Descriptor contract violated: {len(lengths)} dimensions, expected 1..{MAX_DIMENSIONALITY}"
    )
    require(
        all(n > 0 for n in lengths),
        f"Descriptor contract violated: non-positive length in {list(lengths)}"
    )
    require(
        descriptor.input_array_type != ArrayType.UNSET,
        "Descriptor contract violated: input array type is unset"
    )
    require(
        descriptor.output_array_type != ArrayType.UNSET,
        "Descriptor contract violated: output array type is unset"
    )
    require(
        len(descriptor.input_stride) == len(lengths),
        f"Descriptor contract violated: istride has {len(descriptor.input_stride)} entries, expected {len(lengths)}",
        ErrorKind.STRIDE_LENGTH_MISMATCH,
    )
    require(
        len(descriptor.output_stride) == len(lengths),
        f"Descriptor contract violated: ostride has {len(descriptor.output_stride)} entries, expected {len(lengths)}",
        ErrorKind.STRIDE_LENGTH_MISMATCH,
    )

    if not descriptor.inplace:
        return

    if descriptor.transform_kind.is_complex:
        require(
            descriptor.input_array_type == descriptor.output_array_type,
            "Descriptor contract violated: in-place complex transform with differing array types",
            ErrorKind.INPLACE_TYPE_MISMATCH,
        )
        require(
            descriptor.input_stride == descriptor.output_stride,
            "Descriptor contract violated: in-place complex transform with differing strides",
            ErrorKind.INPLACE_STRIDE_MISMATCH,
        )
    else:
        require(
            descriptor.input_stride[0] == 1 and descriptor.output_stride[0] == 1,
            "Descriptor contract violated: in-place real/complex transform is not contiguous in dimension 0",
            ErrorKind.INPLACE_CONTIGUITY_VIOLATION,
        )
