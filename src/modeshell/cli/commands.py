"""
Command-line argument parser for the modeshell demo shell.
"""

import argparse
from typing import List, Optional

from .. import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="modeshell",
        description="modeshell - demo of a mode-based interactive command shell",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  modeshell                               # interactive shell
  modeshell --history-dir ~/.modeshell    # keep per-mode history files
  echo 'echo hello' | modeshell --stdin   # read commands from a pipe
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"modeshell {__version__}"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--history-dir",
        type=str,
        metavar="DIR",
        help="Directory for per-mode history files (overrides configuration)"
    )

    parser.add_argument(
        "--no-variables",
        action="store_true",
        help="Disable $variable substitution"
    )

    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read commands from standard input without line editing"
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return create_parser().parse_args(argv)
