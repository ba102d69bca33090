"""Descriptor resolution pipeline."""

from rider.pipeline.resolver import (
    ResolutionOutcome,
    as_transform_descriptor,
    resolve_descriptor,
    try_resolve_descriptor,
    validate_descriptor,
)

__all__ = [
    "ResolutionOutcome",
    "as_transform_descriptor",
    "resolve_descriptor",
    "try_resolve_descriptor",
    "validate_descriptor",
]
