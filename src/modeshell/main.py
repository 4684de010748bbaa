"""
Main entry point for the modeshell demo shell.

Called from the installed ``modeshell`` console script or with
``python -m modeshell.main``.
"""

import sys
from typing import List, Optional

from .cli import parse_args, handle_cli_command


def main(argv: Optional[List[str]] = None) -> int:
    """Run the demo shell; returns the process exit code."""
    try:
        args = parse_args(argv)
        return handle_cli_command(args)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 0


if __name__ == "__main__":
    sys.exit(main())
