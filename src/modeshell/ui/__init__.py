"""
Terminal presentation helpers for modeshell.
"""

from .color import Colors, colorize, resolve_color

__all__ = ["Colors", "colorize", "resolve_color"]
