"""ParamConfig: Expert defaults for the rider benchmark client.

This module defines the complete default configuration. ALL client parameters
must have defaults here. No runtime code should define fallback values - this
is the single source of truth for defaults.

Transform kind, placement and array types are kept as the raw labels the user
gave (a name such as ``"real_forward"`` or a library code such as ``2``).
They are turned into enum members by the descriptor pipeline, which reports
unknown labels as typed descriptor errors.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional, Union
from pydantic import Field, field_validator
from rider.schemas.base import RiderBaseModel


# Name or library code
Label = Union[int, str]


def normalize_label(v):
    """Lowercase string labels; leave integer codes alone."""
    if isinstance(v, str):
        return v.strip().lower().replace("-", "_")
    return v


# =============================================================================
# Nested Configuration Models
# =============================================================================

class TransformConfig(RiderBaseModel):
    """Transform request configuration."""
    lengths: Optional[tuple[int, ...]] = Field(None, description="Transform lengths, fastest dimension first")
    transform_type: Label = "complex_forward"
    placement: Label = "inplace"
    itype: Label = "unset"
    otype: Label = "unset"
    istride: tuple[int, ...] = ()
    ostride: tuple[int, ...] = ()
    batch_count: int = Field(1, ge=1)
    idist: Optional[int] = Field(None, gt=0)
    odist: Optional[int] = Field(None, gt=0)
    precision: Literal["single", "double"] = "single"

    @field_validator("transform_type", "placement", "itype", "otype", mode="before")
    @classmethod
    def normalize_labels(cls, v):
        return normalize_label(v)


class BenchmarkConfig(RiderBaseModel):
    """Timing loop configuration passed through to the execution backend."""
    ntrial: int = Field(1, ge=1, description="Number of timed trials")
    device_id: int = Field(0, ge=0)


class LoggingConfig(RiderBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(RiderBaseModel):
    """Expert defaults for the benchmark client.

    Every parameter has a default except ``transform.lengths``, which must
    come from the user config or the command line.
    """
    transform: TransformConfig = Field(default_factory=TransformConfig)
    benchmark: BenchmarkConfig = Field(default_factory=BenchmarkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
