"""Pydantic schemas for the rider benchmark client.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line overrides
TransformDescriptor, ResolvedDescriptor : class
    Unresolved request and execution-ready transform descriptor
"""

from rider.schemas.enums import ArrayType, Placement, Precision, TransformKind
from rider.schemas.descriptor import ResolvedDescriptor, TransformDescriptor, complex_length
from rider.schemas.resolve import resolve_config
from rider.schemas.internal import InternalConfig
from rider.schemas.param import ParamConfig
from rider.schemas.user import UserConfig
from rider.schemas.cli import CLIConfig

__all__ = [
    'ArrayType',
    'Placement',
    'Precision',
    'TransformKind',
    'ResolvedDescriptor',
    'TransformDescriptor',
    'complex_length',
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
