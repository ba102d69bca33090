"""Transform descriptor models.

``TransformDescriptor`` is the request: lengths, placement and transform kind
are fixed, array types and strides may be left unset. ``ResolvedDescriptor``
is what the execution engine receives; it is frozen and every field is set.

Descriptors keep enum members (not raw values) so the resolver can compare
them directly.
"""

from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from rider.schemas.base import RiderBaseModel
from rider.schemas.enums import ArrayType, Placement, Precision, TransformKind


MAX_DIMENSIONALITY = 3

_DESCRIPTOR_CONFIG = ConfigDict(
    extra='forbid',
    validate_assignment=True,
    use_enum_values=False,
)


def complex_length(lengths) -> tuple:
    """Extents of the hermitian half-spectrum of a real array of ``lengths``."""
    lengths = tuple(lengths)
    return (lengths[0] // 2 + 1,) + lengths[1:]


class _DescriptorFields(RiderBaseModel):
    lengths: tuple[int, ...] = Field(min_length=1, max_length=MAX_DIMENSIONALITY)
    placement: Placement
    transform_kind: TransformKind
    batch_count: int = Field(1, ge=1)
    precision: Precision = Precision.SINGLE

    model_config = _DESCRIPTOR_CONFIG

    @field_validator("lengths")
    @classmethod
    def lengths_positive(cls, v):
        if any(n <= 0 for n in v):
            raise ValueError(f"Transform lengths must be positive, got {list(v)}")
        return v

    @field_validator("placement", mode="before")
    @classmethod
    def coerce_placement(cls, v):
        return Placement.from_code(v) or v

    @field_validator("transform_kind", mode="before")
    @classmethod
    def coerce_transform_kind(cls, v):
        return TransformKind.from_code(v) or v

    @property
    def dimensionality(self) -> int:
        return len(self.lengths)

    @property
    def complex_length(self) -> tuple:
        return complex_length(self.lengths)

    @property
    def inplace(self) -> bool:
        return self.placement == Placement.INPLACE


class TransformDescriptor(_DescriptorFields):
    """Unresolved transform request.

    Empty strides and ``ArrayType.UNSET`` mean "derive the default". Unset
    distances are derived from the resolved strides.
    """
    input_array_type: ArrayType = ArrayType.UNSET
    output_array_type: ArrayType = ArrayType.UNSET
    input_stride: tuple[int, ...] = ()
    output_stride: tuple[int, ...] = ()
    input_distance: Optional[int] = Field(None, gt=0)
    output_distance: Optional[int] = Field(None, gt=0)

    @field_validator("input_array_type", "output_array_type", mode="before")
    @classmethod
    def coerce_array_type(cls, v):
        if v is None:
            return ArrayType.UNSET
        return ArrayType.from_code(v) or v

    @field_validator("input_stride", "output_stride", mode="before")
    @classmethod
    def coerce_stride(cls, v):
        return () if v is None else v

    @field_validator("input_stride", "output_stride")
    @classmethod
    def strides_positive(cls, v):
        if any(s <= 0 for s in v):
            raise ValueError(f"Strides must be positive, got {list(v)}")
        return v


class ResolvedDescriptor(_DescriptorFields):
    """Fully resolved descriptor handed to the transform setup call."""
    input_array_type: ArrayType
    output_array_type: ArrayType
    input_stride: tuple[int, ...]
    output_stride: tuple[int, ...]
    input_distance: int = Field(gt=0)
    output_distance: int = Field(gt=0)

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=False,
        frozen=True,  # Immutable after construction
    )
