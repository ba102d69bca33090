"""Command-line interface modules for rider.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from rider.cli.run_rider import run_rider, main

__all__ = ['run_rider', 'main']
