"""Formal pipeline invariants.

This file documents what each stage MUST produce. This is architecture, not code.
Use this file as a reviewer anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "array_types": [
        "Neither input nor output array type is unset",
        "Unset types take the transform kind's defaults; set types are untouched",
        "In-place complex transforms use one array type on both sides",
        "complex -> complex, hermitian -> real, real -> hermitian",
    ],

    "strides": [
        "Both strides have one entry per transform dimension",
        "Defaults are contiguous, fastest dimension first, strides[0] == 1",
        "In-place complex transforms: istride == ostride",
        "In-place real/complex transforms: istride[0] == ostride[0] == 1",
        "In-place real-forward: istride[i] == 2 * ostride[i] for i >= 1",
        "In-place real-inverse: 2 * istride[i] == ostride[i] for i >= 1",
    ],

    "distances": [
        "Unset batch distances cover the full extent of one transform",
        "Supplied batch distances are kept as given",
    ],

    "descriptor": [
        "ResolvedDescriptor is frozen",
        "The caller's TransformDescriptor is never mutated",
        "Resolution is deterministic and idempotent",
    ],
}

# Every stage runs for every descriptor
STAGE_REQUIREMENTS = {
    "array_types": "REQUIRED",
    "strides": "REQUIRED",
    "distances": "REQUIRED",
    "descriptor": "REQUIRED",
}
