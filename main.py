#!/usr/bin/env python3
"""
modeshell - demo shell launcher for development checkouts.
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from modeshell.main import main


if __name__ == "__main__":
    sys.exit(main())
