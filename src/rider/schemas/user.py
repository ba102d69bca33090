"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases for the
benchmark client's option names (e.g., LENGTH → lengths, TRANSFORM_TYPE →
transform_type, BATCH → batch_count).

UserConfig is intentionally minimal - users only specify what they want to
override from the expert defaults.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator, model_validator
from rider.schemas.base import RiderBaseModel
from rider.schemas.param import Label, normalize_label


def _as_tuple(v):
    """Accept a bare integer where a per-dimension sequence is expected."""
    if isinstance(v, int) and not isinstance(v, bool):
        return (v,)
    return v


class UserTransformConfig(RiderBaseModel):
    """User-facing transform config (nested form)."""
    lengths: Optional[tuple[int, ...]] = None
    transform_type: Optional[Label] = None
    placement: Optional[Label] = None
    itype: Optional[Label] = None
    otype: Optional[Label] = None
    istride: Optional[tuple[int, ...]] = None
    ostride: Optional[tuple[int, ...]] = None
    batch_count: Optional[int] = None
    idist: Optional[int] = None
    odist: Optional[int] = None
    precision: Optional[Literal["single", "double"]] = None

    @field_validator("lengths", "istride", "ostride", mode="before")
    @classmethod
    def coerce_sequences(cls, v):
        return _as_tuple(v)

    @field_validator("transform_type", "placement", "itype", "otype", mode="before")
    @classmethod
    def normalize_labels(cls, v):
        return normalize_label(v)


class UserBenchmarkConfig(RiderBaseModel):
    """User-facing benchmark config."""
    ntrial: Optional[int] = None
    device_id: Optional[int] = None


class UserLoggingConfig(RiderBaseModel):
    """User-facing logging config."""
    level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    log_file: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def uppercase_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class UserConfig(RiderBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses the client's option names as aliases. Users
    only specify what they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(
            LENGTH=[64, 64],
            TRANSFORM_TYPE="real_forward",
            OUTOFPLACE=True,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Transform settings (flat aliases)
    lengths: Optional[tuple[int, ...]] = Field(None, alias="LENGTH")
    transform_type: Optional[Label] = Field(None, alias="TRANSFORM_TYPE")
    placement: Optional[Label] = Field(None, alias="PLACEMENT")
    outofplace: Optional[bool] = Field(None, alias="OUTOFPLACE")
    itype: Optional[Label] = Field(None, alias="ITYPE")
    otype: Optional[Label] = Field(None, alias="OTYPE")
    istride: Optional[tuple[int, ...]] = Field(None, alias="ISTRIDE")
    ostride: Optional[tuple[int, ...]] = Field(None, alias="OSTRIDE")
    batch_count: Optional[int] = Field(None, alias="BATCH")
    idist: Optional[int] = Field(None, alias="IDIST")
    odist: Optional[int] = Field(None, alias="ODIST")
    precision: Optional[Literal["single", "double"]] = Field(None, alias="PRECISION")

    # Benchmark settings (flat aliases)
    ntrial: Optional[int] = Field(None, alias="NTRIAL")
    device_id: Optional[int] = Field(None, alias="DEVICE")

    # Logging (flat alias)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")

    # Nested overrides (advanced users)
    transform: Optional[UserTransformConfig] = None
    benchmark: Optional[UserBenchmarkConfig] = None
    logging: Optional[UserLoggingConfig] = None

    model_config = RiderBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("lengths", "istride", "ostride", mode="before")
    @classmethod
    def coerce_sequences(cls, v):
        return _as_tuple(v)

    @field_validator("transform_type", "placement", "itype", "otype", "precision", mode="before")
    @classmethod
    def normalize_labels(cls, v):
        return normalize_label(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @model_validator(mode="after")
    def infer_placement_from_flag(self):
        """OUTOFPLACE=True means out-of-place unless PLACEMENT says otherwise."""
        if self.placement is None and self.outofplace is not None:
            self.placement = "notinplace" if self.outofplace else "inplace"
        return self

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        transform = {}
        for key in (
            "lengths", "transform_type", "placement", "itype", "otype",
            "istride", "ostride", "batch_count", "idist", "odist", "precision",
        ):
            value = getattr(self, key)
            if value is not None:
                transform[key] = value
        if self.transform is not None:
            transform.update(self.transform.model_dump(exclude_none=True))
        if transform:
            overrides["transform"] = transform

        benchmark = {}
        if self.ntrial is not None:
            benchmark["ntrial"] = self.ntrial
        if self.device_id is not None:
            benchmark["device_id"] = self.device_id
        if self.benchmark is not None:
            benchmark.update(self.benchmark.model_dump(exclude_none=True))
        if benchmark:
            overrides["benchmark"] = benchmark

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.logging is not None:
            logging_cfg.update(self.logging.model_dump(exclude_none=True))
        if logging_cfg:
            overrides["logging"] = logging_cfg

        return overrides
