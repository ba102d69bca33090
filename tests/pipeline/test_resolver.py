"""Tests for the descriptor resolution pipeline."""

import itertools

import pytest
from pydantic import ValidationError

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]

from rider.contracts import (
    DescriptorError,
    ErrorKind,
    IncompatibleArrayTypePair,
    InPlaceContiguityViolation,
    InPlaceStrideMismatch,
    InPlaceTypeMismatch,
    InvalidArrayType,
    InvalidTransformKind,
    StrideLengthMismatch,
)
from rider.pipeline import (
    ResolutionOutcome,
    resolve_descriptor,
    try_resolve_descriptor,
    validate_descriptor,
)
from rider.schemas import ArrayType, Placement, ResolvedDescriptor, TransformDescriptor, TransformKind


class TestScenarios:
    """End-to-end resolution of representative requests."""

    def test_real_forward_1d_out_of_place(self, resolve):
        d = resolve([8], "real_forward", "notinplace")
        assert d.input_array_type == ArrayType.REAL
        assert d.output_array_type == ArrayType.HERMITIAN_INTERLEAVED
        assert d.input_stride == (1,)
        assert d.output_stride == (1,)
        assert d.complex_length == (5,)

    def test_real_forward_2d_out_of_place(self, resolve):
        d = resolve([8, 4], "real_forward", "notinplace")
        assert d.complex_length == (5, 4)
        assert d.input_stride == (1, 8)
        assert d.output_stride == (1, 5)

    def test_real_forward_2d_inplace_pads_leading_dimension(self, resolve):
        d = resolve([8, 4], "real_forward", "inplace")
        assert d.input_stride == (1, 10)
        assert d.output_stride == (1, 5)
        assert d.input_stride[1] == 2 * d.output_stride[1]

    def test_complex_inplace_copies_istride(self, resolve):
        d = resolve([16], "complex_forward", "inplace", input_stride=[1])
        assert d.output_stride == (1,)

    def test_complex_inplace_stride_mismatch(self, resolve):
        with pytest.raises(InPlaceStrideMismatch):
            resolve([16], "complex_forward", "inplace", input_stride=[1], output_stride=[2])

    def test_complex_inplace_only_ostride_off_default(self):
        with pytest.raises(InPlaceStrideMismatch):
            resolve_descriptor({
                "lengths": [16],
                "placement": "inplace",
                "transform_kind": "complex_forward",
                "output_stride": [2],
            })

    def test_complex_inplace_only_ostride_at_default(self, resolve):
        d = resolve([16, 4], "complex_inverse", "inplace", output_stride=[1, 16])
        assert d.input_stride == d.output_stride == (1, 16)

    @pytest.mark.parametrize("kind,placement", itertools.product(list(TransformKind), list(Placement)))
    def test_hermitian_to_complex_always_rejected(self, resolve, kind, placement):
        with pytest.raises(DescriptorError) as exc:
            resolve(
                [8], kind, placement,
                input_array_type="hermitian_interleaved",
                output_array_type="complex_interleaved",
            )
        if kind.is_complex and placement == Placement.INPLACE:
            # the in-place type rule is checked first
            assert exc.value.kind == ErrorKind.INPLACE_TYPE_MISMATCH
        else:
            assert exc.value.kind == ErrorKind.INCOMPATIBLE_ARRAY_TYPE_PAIR
            assert isinstance(exc.value, IncompatibleArrayTypePair)


class TestProperties:
    """Invariants over a grid of requests."""

    LENGTHS = [(8,), (7,), (8, 4), (5, 6), (4, 3, 2), (9, 2, 3)]

    def _all_defaults(self):
        for lengths, kind, placement in itertools.product(self.LENGTHS, TransformKind, Placement):
            yield TransformDescriptor(lengths=lengths, transform_kind=kind, placement=placement)

    def test_resolved_descriptors_are_complete(self):
        for request in self._all_defaults():
            d = resolve_descriptor(request)
            assert d.input_array_type != ArrayType.UNSET
            assert d.output_array_type != ArrayType.UNSET
            assert len(d.input_stride) == d.dimensionality == len(d.output_stride)

    def test_determinism(self):
        for request in self._all_defaults():
            assert resolve_descriptor(request) == resolve_descriptor(request)

    def test_idempotence(self):
        for request in self._all_defaults():
            d = resolve_descriptor(request)
            assert resolve_descriptor(d) == d

    def test_inplace_complex_invariant(self):
        for request in self._all_defaults():
            if request.inplace and request.transform_kind.is_complex:
                d = resolve_descriptor(request)
                assert d.input_array_type == d.output_array_type
                assert d.input_stride == d.output_stride

    def test_inplace_real_scaling_invariant(self):
        for request in self._all_defaults():
            if not request.inplace or request.transform_kind.is_complex:
                continue
            d = resolve_descriptor(request)
            assert d.input_stride[0] == 1 and d.output_stride[0] == 1
            for i in range(1, d.dimensionality):
                if d.transform_kind == TransformKind.REAL_FORWARD:
                    assert d.input_stride[i] == 2 * d.output_stride[i]
                else:
                    assert 2 * d.input_stride[i] == d.output_stride[i]


class TestPipelineBehaviour:
    """Ordering, immutability and input forms."""

    def test_request_not_mutated(self, make_request):
        request = make_request([8, 4], "real_forward")
        before = request.model_dump()
        resolve_descriptor(request)
        assert request.model_dump() == before
        assert request.input_stride == ()
        assert request.input_array_type == ArrayType.UNSET

    def test_result_is_frozen(self, resolve):
        d = resolve([8], "complex_forward")
        with pytest.raises(ValidationError):
            d.input_stride = (2,)

    def test_returns_new_resolved_type(self, make_request):
        d = resolve_descriptor(make_request([8], "complex_inverse"))
        assert isinstance(d, ResolvedDescriptor)

    def test_mapping_input(self):
        d = resolve_descriptor({"lengths": [8, 4], "placement": 0, "transform_kind": 2})
        assert d.input_stride == (1, 10)
        assert d.placement == Placement.INPLACE

    def test_mapping_with_unknown_transform_kind(self):
        with pytest.raises(InvalidTransformKind):
            resolve_descriptor({"lengths": [8], "placement": "inplace", "transform_kind": 7})

    def test_mapping_with_unknown_array_type(self):
        with pytest.raises(InvalidArrayType):
            resolve_descriptor({
                "lengths": [8],
                "placement": "inplace",
                "transform_kind": "complex_forward",
                "input_array_type": "complex_split",
            })

    def test_type_errors_reported_before_stride_errors(self, resolve):
        with pytest.raises(InPlaceTypeMismatch):
            resolve(
                [16], "complex_forward", "inplace",
                input_array_type="complex_interleaved", output_array_type="complex_planar",
                input_stride=[1], output_stride=[2],
            )

    def test_malformed_lengths_are_validation_errors(self, make_request):
        with pytest.raises(ValidationError):
            make_request([0], "complex_forward")
        with pytest.raises(ValidationError):
            make_request([2, 2, 2, 2], "complex_forward")
        with pytest.raises(ValidationError):
            make_request([], "complex_forward")

    def test_rejection_is_logged(self, resolve, caplog):
        with caplog.at_level("WARNING", logger="rider.pipeline.resolver"):
            with pytest.raises(InPlaceStrideMismatch):
                resolve([16], "complex_forward", input_stride=[1], output_stride=[2])
        assert "InPlaceStrideMismatch" in caplog.text

    def test_distances_resolved(self, resolve):
        d = resolve([8, 4], "real_forward", batch_count=4)
        assert (d.input_distance, d.output_distance) == (40, 20)


class TestValidateDescriptor:
    """Validation of fully specified descriptors, no defaulting."""

    def test_valid_descriptor_passes(self, make_request):
        request = make_request(
            [8, 4], "real_forward",
            input_array_type="real", output_array_type="hermitian_interleaved",
            input_stride=[1, 10], output_stride=[1, 5],
        )
        d = validate_descriptor(request)
        assert d.input_stride == (1, 10)

    def test_resolved_descriptor_revalidates(self, resolve):
        d = resolve([4, 4, 4], "real_inverse")
        assert validate_descriptor(d) == d

    def test_unset_type_rejected(self, make_request):
        request = make_request([8], "complex_forward", input_stride=[1], output_stride=[1])
        with pytest.raises(InvalidArrayType):
            validate_descriptor(request)

    def test_missing_stride_rejected(self, make_request):
        request = make_request(
            [8], "complex_forward",
            input_array_type="complex_interleaved", output_array_type="complex_interleaved",
            input_stride=[1],
        )
        with pytest.raises(StrideLengthMismatch):
            validate_descriptor(request)

    def test_contiguity_rejected(self, make_request):
        request = make_request(
            [8, 4], "real_inverse",
            input_array_type="hermitian_interleaved", output_array_type="real",
            input_stride=[1, 5], output_stride=[2, 10],
        )
        with pytest.raises(InPlaceContiguityViolation):
            validate_descriptor(request)


class TestOutcome:
    """try_resolve_descriptor returns failures as values."""

    def test_success(self, make_request):
        outcome = try_resolve_descriptor(make_request([8], "real_forward", "notinplace"))
        assert isinstance(outcome, ResolutionOutcome)
        assert outcome.ok
        assert outcome.descriptor.output_array_type == ArrayType.HERMITIAN_INTERLEAVED
        assert outcome.error_kind is None

    def test_failure(self, make_request):
        outcome = try_resolve_descriptor(
            make_request([16], "complex_forward", input_stride=[1], output_stride=[2])
        )
        assert not outcome.ok
        assert outcome.descriptor is None
        assert outcome.error_kind == ErrorKind.INPLACE_STRIDE_MISMATCH
        assert "istride == ostride" in outcome.message

    def test_failure_with_only_ostride(self, make_request):
        outcome = try_resolve_descriptor(make_request([16], "complex_forward", output_stride=[2]))
        assert not outcome.ok
        assert outcome.error_kind == ErrorKind.INPLACE_STRIDE_MISMATCH

    def test_validation_errors_still_raise(self):
        with pytest.raises(ValidationError):
            try_resolve_descriptor({"lengths": [-1], "placement": "inplace", "transform_kind": 0})
