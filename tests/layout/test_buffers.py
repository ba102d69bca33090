"""Tests for host buffer sizing."""

import numpy as np
import pytest

pytestmark = pytest.mark.unit

from rider.layout.buffers import (
    allocate_host_buffers,
    array_type_dtype,
    buffer_element_counts,
    buffer_span,
)
from rider.schemas.enums import ArrayType, Precision


class TestDtypes:

    @pytest.mark.parametrize("array_type,precision,expected", [
        (ArrayType.COMPLEX_INTERLEAVED, Precision.SINGLE, np.complex64),
        (ArrayType.HERMITIAN_INTERLEAVED, Precision.DOUBLE, np.complex128),
        (ArrayType.REAL, Precision.SINGLE, np.float32),
        (ArrayType.COMPLEX_PLANAR, Precision.DOUBLE, np.float64),
        (ArrayType.HERMITIAN_PLANAR, "single", np.float32),
    ])
    def test_dtype(self, array_type, precision, expected):
        assert array_type_dtype(array_type, precision) == np.dtype(expected)

    def test_unset_rejected(self):
        with pytest.raises(ValueError, match="unset"):
            array_type_dtype(ArrayType.UNSET, Precision.SINGLE)


class TestElementCounts:

    def test_span(self):
        assert buffer_span([8, 4], [1, 8]) == 32
        assert buffer_span([8, 4], [1, 10]) == 38
        assert buffer_span([8], [2]) == 15

    def test_out_of_place_real_forward(self, resolve):
        descriptor = resolve([8, 4], "real_forward", "notinplace")
        assert buffer_element_counts(descriptor) == (32, 20)

    def test_batch_uses_distance(self, resolve):
        descriptor = resolve([8, 4], "complex_forward", "notinplace", batch_count=3)
        assert descriptor.input_distance == 32
        assert buffer_element_counts(descriptor) == (2 * 32 + 32, 2 * 32 + 32)

    def test_supplied_distance(self, resolve):
        descriptor = resolve([8], "complex_forward", "notinplace", batch_count=2, input_distance=16)
        assert buffer_element_counts(descriptor) == (16 + 8, 8 + 8)


class TestAllocation:

    def test_out_of_place_interleaved(self, resolve):
        buffers = allocate_host_buffers(resolve([8, 4], "complex_forward", "notinplace"))
        assert len(buffers["input"]) == 1 and len(buffers["output"]) == 1
        assert buffers["input"][0].dtype == np.complex64
        assert buffers["input"][0].shape == (32,)
        assert not buffers["input"][0].any()

    def test_planar_gets_two_arrays(self, resolve):
        buffers = allocate_host_buffers(resolve(
            [8], "complex_inverse", "notinplace",
            input_array_type="complex_planar", output_array_type="complex_planar",
            precision="double",
        ))
        assert len(buffers["input"]) == 2 and len(buffers["output"]) == 2
        assert all(b.dtype == np.float64 for b in buffers["input"] + buffers["output"])

    def test_inplace_real_forward_holds_complex_output(self, resolve):
        """In-place real buffer is sized for the padded hermitian reinterpretation."""
        buffers = allocate_host_buffers(resolve([8, 4], "real_forward"))
        assert buffers["output"] == []
        (real,) = buffers["input"]
        assert real.dtype == np.float32
        # 5 x 4 complex values = 40 floats
        assert real.size == 40
        assert real.nbytes >= 20 * np.dtype(np.complex64).itemsize

    def test_inplace_complex(self, resolve):
        buffers = allocate_host_buffers(resolve([16], "complex_forward"))
        assert [b.size for b in buffers["input"]] == [16]
        assert buffers["output"] == []
