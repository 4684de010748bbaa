"""
CLI module for the modeshell demo shell.
"""

from .commands import create_parser, parse_args
from .handlers import build_demo_shell, handle_cli_command

__all__ = ["create_parser", "parse_args", "build_demo_shell", "handle_cli_command"]
