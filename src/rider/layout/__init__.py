"""Memory layout rules: storage types, strides, batch distances, buffer sizes.

Each function is pure and works on plain values, so the stages can be used
and tested one at a time.
"""

from rider.layout.array_types import (
    coerce_array_type,
    coerce_transform_kind,
    resolve_array_types,
    validate_array_types,
)
from rider.layout.strides import (
    default_distance,
    default_stride,
    resolve_distances,
    resolve_strides,
    validate_strides,
)
from rider.layout.buffers import (
    allocate_host_buffers,
    array_type_dtype,
    buffer_element_counts,
    buffer_span,
)

__all__ = [
    "coerce_array_type",
    "coerce_transform_kind",
    "resolve_array_types",
    "validate_array_types",
    "default_distance",
    "default_stride",
    "resolve_distances",
    "resolve_strides",
    "validate_strides",
    "allocate_host_buffers",
    "array_type_dtype",
    "buffer_element_counts",
    "buffer_span",
]
