"""rider User Configuration.

This is the user-facing configuration file. Modify settings here to describe
the transform to benchmark. Defaults live in src/rider/schemas/param.py

Usage:
    python scripts/run_rider.py --config scripts/user_config.py
    python scripts/run_rider.py --config scripts/user_config.py --length 64 64
    python scripts/run_rider.py --config scripts/user_config.py -o -v
"""

CONFIG = {
    # ========================================================================
    # TRANSFORM
    # ========================================================================
    "LENGTH": [8, 4],                 # Fastest dimension first, 1 to 3 entries
    "TRANSFORM_TYPE": "real_forward", # or 0-3: complex_forward, complex_inverse, real_forward, real_inverse
    "OUTOFPLACE": False,              # True for separate input/output buffers

    # ========================================================================
    # LAYOUT (None = derive default)
    # ========================================================================
    "ITYPE": None,                    # complex_interleaved, complex_planar, real, hermitian_interleaved, hermitian_planar
    "OTYPE": None,
    "ISTRIDE": None,                  # e.g. [1, 10] for an in-place real input padded to 10
    "OSTRIDE": None,

    # ========================================================================
    # BATCH & PRECISION
    # ========================================================================
    "BATCH": 1,
    "IDIST": None,                    # None = one transform's full extent
    "ODIST": None,
    "PRECISION": "single",            # "single" or "double"

    # ========================================================================
    # BENCHMARK
    # ========================================================================
    "NTRIAL": 10,
    "DEVICE": 0,
    "LOG_LEVEL": "INFO",
}
