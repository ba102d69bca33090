"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.
"""

from typing import Literal, Optional
from pydantic import ConfigDict, Field, field_validator
from rider.schemas.base import RiderBaseModel
from rider.schemas.param import Label, normalize_label


class InternalTransformConfig(RiderBaseModel):
    """Runtime transform request."""
    lengths: tuple[int, ...] = Field(min_length=1, max_length=3)
    transform_type: Label
    placement: Label
    itype: Label
    otype: Label
    istride: tuple[int, ...]
    ostride: tuple[int, ...]
    batch_count: int = Field(ge=1)
    idist: Optional[int] = Field(gt=0)
    odist: Optional[int] = Field(gt=0)
    precision: Literal["single", "double"]

    @field_validator("lengths")
    @classmethod
    def lengths_positive(cls, v):
        if any(n <= 0 for n in v):
            raise ValueError(f"Transform lengths must be positive, got {list(v)}")
        return v

    @field_validator("transform_type", "placement", "itype", "otype", mode="before")
    @classmethod
    def normalize_labels(cls, v):
        return normalize_label(v)


class InternalBenchmarkConfig(RiderBaseModel):
    """Runtime benchmark settings."""
    ntrial: int = Field(ge=1)
    device_id: int = Field(ge=0)


class InternalLoggingConfig(RiderBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    log_file: Optional[str]


class InternalConfig(RiderBaseModel):
    """Authoritative runtime configuration.

    Usage
    -----
    Runtime code receives InternalConfig and accesses fields directly:

        descriptor = resolve_descriptor(config.descriptor_fields())
        ntrial = config.benchmark.ntrial  # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation in runtime code
    """

    transform: InternalTransformConfig
    benchmark: InternalBenchmarkConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )

    def descriptor_fields(self) -> dict:
        """Fields of the transform descriptor this config requests.

        Returns
        -------
        dict
            Keyword arguments for ``TransformDescriptor`` (labels not yet
            converted to enum members).
        """
        t = self.transform
        return {
            "lengths": t.lengths,
            "placement": t.placement,
            "transform_kind": t.transform_type,
            "input_array_type": t.itype,
            "output_array_type": t.otype,
            "input_stride": t.istride,
            "output_stride": t.ostride,
            "input_distance": t.idist,
            "output_distance": t.odist,
            "batch_count": t.batch_count,
            "precision": t.precision,
        }
