"""Core rider execution logic.

Resolves the configuration, runs the descriptor pipeline and prepares the
plan that the execution backend consumes. Scripts are thin wrappers; this is
the real implementation.
"""

import sys
import json
import logging
import argparse
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any

from pydantic import ValidationError

from rider.contracts.failure import ContractViolation, DescriptorError, ErrorKind
from rider.layout.buffers import buffer_element_counts
from rider.pipeline.resolver import resolve_descriptor
from rider.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig, InternalConfig
from rider.schemas.base import RiderBaseModel
from rider.schemas.descriptor import ResolvedDescriptor


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_CONTRACT_VIOLATION = 3

# One exit status per rejection reason
EXIT_CODES = {
    ErrorKind.INVALID_TRANSFORM_KIND: 10,
    ErrorKind.INVALID_ARRAY_TYPE: 11,
    ErrorKind.INCOMPATIBLE_ARRAY_TYPE_PAIR: 12,
    ErrorKind.INPLACE_TYPE_MISMATCH: 13,
    ErrorKind.STRIDE_LENGTH_MISMATCH: 14,
    ErrorKind.INPLACE_STRIDE_MISMATCH: 15,
    ErrorKind.INPLACE_CONTIGUITY_VIOLATION: 16,
    ErrorKind.SCALING_STRIDE_MISMATCH: 17,
}


class RiderPlan(RiderBaseModel):
    """What the execution backend needs to set up and time one transform."""
    descriptor: ResolvedDescriptor
    input_elements: int
    output_elements: int
    ntrial: int
    device_id: int


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the root logger with a console and an optional file handler."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.debug("Logging: level=%s, file=%s", logging.getLevelName(log_level), log_file)


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing a CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("rider_user_config", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def build_config(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> InternalConfig:
    """Resolve the runtime config (Param < User < CLI)."""
    param_cfg = ParamConfig()

    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))
    else:
        user_cfg = UserConfig()

    cli_args = dict(cli_args or {})
    if verbose and cli_args.get("log_level") is None:
        cli_args["log_level"] = "DEBUG"

    # Filter None values
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    return resolve_config(param_cfg, user_cfg, cli_cfg)


def run_rider(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
    configure_logging: bool = True,
) -> RiderPlan:
    """Resolve a transform request into an execution plan.

    This is the core client logic. It:
    1. Loads and resolves configuration (Param < User < CLI)
    2. Configures logging from the resolved config
    3. Resolves and validates the transform descriptor
    4. Sizes the input/output buffers for the whole batch

    **No device allocation, no kernel launch, no timing.** The returned plan
    is handed to the execution backend.

    Parameters
    ----------
    user_config_path : str, optional
        Path to a user config file (Python file with a CONFIG dict).
    cli_args : dict, optional
        CLI overrides, keyed like ``CLIConfig`` fields. None values are ignored.
    verbose : bool, optional
        If True, enable DEBUG logging and print the full resolved descriptor.
    configure_logging : bool, optional
        If False, leave the root logger untouched (for embedding and tests).

    Returns
    -------
    RiderPlan
        Resolved descriptor, buffer element counts and benchmark settings.

    Raises
    ------
    DescriptorError
        If the requested layout cannot be executed.
    ValidationError
        If configuration validation fails.

    Examples
    --------
    >>> plan = run_rider(cli_args={"lengths": [8, 4], "transform_type": 2, "outofplace": True})
    >>> plan.descriptor.output_stride
    (1, 5)
    """
    config = build_config(user_config_path, cli_args, verbose)
    if configure_logging:
        setup_logging(config.logging.level, config.logging.log_file)

    descriptor = resolve_descriptor(config.descriptor_fields())
    input_elements, output_elements = buffer_element_counts(descriptor)

    plan = RiderPlan(
        descriptor=descriptor,
        input_elements=input_elements,
        output_elements=output_elements,
        ntrial=config.benchmark.ntrial,
        device_id=config.benchmark.device_id,
    )

    print(f"\n{'='*60}")
    print("rider transform plan")
    print('='*60)
    print(f"Lengths:   {list(descriptor.lengths)}")
    print(f"Transform: {descriptor.transform_kind.value} ({descriptor.placement.value})")
    print(f"Types:     {descriptor.input_array_type.value} -> {descriptor.output_array_type.value}")
    print(f"Strides:   {list(descriptor.input_stride)} -> {list(descriptor.output_stride)}")
    print(f"Batch:     {descriptor.batch_count} (dist {descriptor.input_distance} -> {descriptor.output_distance})")
    print(f"Elements:  {input_elements} -> {output_elements}")
    print('='*60)

    if verbose:
        print("\nFull Resolved Descriptor:")
        print(json.dumps(descriptor.model_dump(mode="json"), indent=2))
        print('='*60)

    return plan


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve and validate an FFT transform descriptor")
    parser.add_argument("--config", help="Path to user config file (Python file with CONFIG dict)")
    parser.add_argument("--length", type=int, nargs="+", help="Transform lengths, fastest dimension first")
    parser.add_argument("-t", "--transformType", dest="transform_type",
                        help="0/complex_forward, 1/complex_inverse, 2/real_forward, 3/real_inverse")
    parser.add_argument("-o", "--outofplace", action="store_true", help="Out-of-place transform")
    parser.add_argument("--itype", help="Input array type (name or code 0-5)")
    parser.add_argument("--otype", help="Output array type (name or code 0-5)")
    parser.add_argument("--istride", type=int, nargs="+", help="Input strides")
    parser.add_argument("--ostride", type=int, nargs="+", help="Output strides")
    parser.add_argument("--idist", type=int, help="Input batch distance")
    parser.add_argument("--odist", type=int, help="Output batch distance")
    parser.add_argument("-b", "--batchSize", dest="batch_count", type=int, help="Number of transforms")
    parser.add_argument("--double", action="store_true", help="Double precision")
    parser.add_argument("-N", "--ntrial", type=int, help="Number of timed trials")
    parser.add_argument("--device", dest="device_id", type=int, help="Device ID")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    """Command-line entrypoint. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    cli_args = {
        "lengths": args.length,
        "transform_type": args.transform_type,
        "outofplace": True if args.outofplace else None,
        "itype": args.itype,
        "otype": args.otype,
        "istride": args.istride,
        "ostride": args.ostride,
        "idist": args.idist,
        "odist": args.odist,
        "batch_count": args.batch_count,
        "precision": "double" if args.double else None,
        "ntrial": args.ntrial,
        "device_id": args.device_id,
        "log_file": args.log_file,
    }

    try:
        run_rider(args.config, cli_args, verbose=args.verbose)
    except DescriptorError as e:
        print(f"Invalid transform ({e.kind.value}): {e}", file=sys.stderr)
        return EXIT_CODES[e.kind]
    except (ValidationError, FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except ContractViolation as e:
        logger.error("Contract violation: %s", e, exc_info=True)
        return EXIT_CONTRACT_VIOLATION

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
