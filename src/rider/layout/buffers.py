"""Host staging buffer sizing for resolved descriptors.

Only sizes and host-side numpy arrays live here; device allocation and
transfers belong to the execution backend.
"""

import math

import numpy as np

from rider.layout.strides import array_extents
from rider.schemas.descriptor import ResolvedDescriptor
from rider.schemas.enums import ArrayType, Precision


_REAL_DTYPES = {
    Precision.SINGLE: np.dtype(np.float32),
    Precision.DOUBLE: np.dtype(np.float64),
}

_COMPLEX_DTYPES = {
    Precision.SINGLE: np.dtype(np.complex64),
    Precision.DOUBLE: np.dtype(np.complex128),
}


def array_type_dtype(array_type: ArrayType, precision: Precision) -> np.dtype:
    """Element dtype of one buffer of ``array_type``.

    Planar types are stored as two real arrays (real and imaginary parts), so
    their element dtype is real.
    """
    array_type = ArrayType(array_type)
    precision = Precision(precision)
    if array_type == ArrayType.UNSET:
        raise ValueError("Cannot size a buffer with an unset array type")
    if array_type == ArrayType.REAL or array_type.is_planar:
        return _REAL_DTYPES[precision]
    return _COMPLEX_DTYPES[precision]


def buffer_span(extents, strides) -> int:
    """Number of elements addressed by one transform: ``1 + sum((n-1)*s)``."""
    return 1 + sum((n - 1) * s for n, s in zip(extents, strides))


def buffer_element_counts(descriptor: ResolvedDescriptor) -> tuple:
    """Elements needed for the input and output of the whole batch.

    Returns
    -------
    tuple of int
        ``(input_count, output_count)``, per component for planar types.
    """
    inplace_real = descriptor.inplace and not descriptor.transform_kind.is_complex
    in_extents, _ = array_extents(descriptor.input_array_type, descriptor.lengths, inplace_real)
    out_extents, _ = array_extents(descriptor.output_array_type, descriptor.lengths, inplace_real)

    batch_offset = descriptor.batch_count - 1
    input_count = batch_offset * descriptor.input_distance + buffer_span(in_extents, descriptor.input_stride)
    output_count = batch_offset * descriptor.output_distance + buffer_span(out_extents, descriptor.output_stride)
    return input_count, output_count


def _components(array_type: ArrayType) -> int:
    return 2 if array_type.is_planar else 1


def allocate_host_buffers(descriptor: ResolvedDescriptor) -> dict:
    """Zero-filled host buffers for a resolved descriptor.

    Returns a dict with ``"input"`` and ``"output"`` lists of arrays. Planar
    types get two arrays each. In-place transforms only get input buffers,
    large enough to hold the output reinterpretation too.
    """
    input_count, output_count = buffer_element_counts(descriptor)
    in_dtype = array_type_dtype(descriptor.input_array_type, descriptor.precision)
    out_dtype = array_type_dtype(descriptor.output_array_type, descriptor.precision)

    if descriptor.inplace:
        needed_bytes = max(input_count * in_dtype.itemsize, output_count * out_dtype.itemsize)
        input_count = math.ceil(needed_bytes / in_dtype.itemsize)

    buffers = {
        "input": [np.zeros(input_count, dtype=in_dtype) for _ in range(_components(descriptor.input_array_type))],
        "output": [],
    }
    if not descriptor.inplace:
        buffers["output"] = [
            np.zeros(output_count, dtype=out_dtype) for _ in range(_components(descriptor.output_array_type))
        ]
    return buffers
