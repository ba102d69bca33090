"""CLIConfig: Command-line overrides.

Holds the benchmark client's command-line options after argparse has parsed
them. Highest priority in config resolution.
"""

from typing import Literal, Optional
from pydantic import field_validator, model_validator
from rider.schemas.base import RiderBaseModel
from rider.schemas.param import Label, normalize_label


class CLIConfig(RiderBaseModel):
    """Command-line configuration overrides.

    Notes
    -----
    ``outofplace=True`` (the ``-o`` flag) sets placement to out-of-place when
    no explicit placement is given (schema responsibility, not runtime).

    Usage
    -----
        cli_cfg = CLIConfig(
            lengths=[8, 4],
            transform_type=2,
            outofplace=True,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    lengths: Optional[tuple[int, ...]] = None
    transform_type: Optional[Label] = None
    placement: Optional[Label] = None
    outofplace: Optional[bool] = None
    itype: Optional[Label] = None
    otype: Optional[Label] = None
    istride: Optional[tuple[int, ...]] = None
    ostride: Optional[tuple[int, ...]] = None
    batch_count: Optional[int] = None
    idist: Optional[int] = None
    odist: Optional[int] = None
    precision: Optional[Literal["single", "double"]] = None
    ntrial: Optional[int] = None
    device_id: Optional[int] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    log_file: Optional[str] = None

    @field_validator("transform_type", "placement", "itype", "otype", mode="before")
    @classmethod
    def normalize_labels(cls, v):
        return normalize_label(v)

    @model_validator(mode="after")
    def infer_placement_from_flag(self):
        """If -o was given but no placement, the transform is out-of-place."""
        if self.placement is None and self.outofplace:
            self.placement = "notinplace"
        return self

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

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
        if transform:
            overrides["transform"] = transform

        benchmark = {}
        if self.ntrial is not None:
            benchmark["ntrial"] = self.ntrial
        if self.device_id is not None:
            benchmark["device_id"] = self.device_id
        if benchmark:
            overrides["benchmark"] = benchmark

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.log_file is not None:
            logging_cfg["log_file"] = self.log_file
        if logging_cfg:
            overrides["logging"] = logging_cfg

        return overrides
