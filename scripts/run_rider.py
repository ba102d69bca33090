#!/usr/bin/env python3
"""rider transform descriptor resolver.

Usage:
    python scripts/run_rider.py --length 8 4 -t real_forward
    python scripts/run_rider.py --length 16 -t 0 --istride 1
    python scripts/run_rider.py --config scripts/user_config.py -o -v
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from rider.cli.run_rider import main


if __name__ == "__main__":
    sys.exit(main())
