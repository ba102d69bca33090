"""`rider` - transform descriptor resolution for FFT benchmarks.

Subpackages:
- schemas: Descriptor models, enums, layered configuration
- layout: Array type, stride, distance and buffer rules
- pipeline: Descriptor resolution entrypoints
- contracts: Error taxonomy and stage invariants
- cli: Command-line client
"""

__version__ = "0.1.0"
