"""
ANSI color support for prompts and console output.

Colors are plain escape sequences so they can be concatenated into prompt
strings and log lines alike.
"""

from typing import Optional


class Colors:
    """ANSI color codes for console output."""
    RESET = '\033[0m'
    RESET_ENDL = '\033[0m\n'
    BOLD = '\033[1m'

    # Standard colors
    BLACK = '\033[30m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    # Bold colors
    BOLD_BLACK = BOLD + BLACK
    BOLD_RED = BOLD + RED
    BOLD_GREEN = BOLD + GREEN
    BOLD_YELLOW = BOLD + YELLOW
    BOLD_BLUE = BOLD + BLUE
    BOLD_MAGENTA = BOLD + MAGENTA
    BOLD_CYAN = BOLD + CYAN
    BOLD_WHITE = BOLD + WHITE

    # Bright colors
    BRIGHT_BLACK = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


def resolve_color(color: Optional[str]) -> Optional[str]:
    """Turn a color name such as ``"bold_green"`` into its escape sequence.

    Escape sequences are returned unchanged, unknown names raise ValueError.
    """
    if not color:
        return None
    if color.startswith('\033'):
        return color
    code = getattr(Colors, color.upper(), None)
    if not isinstance(code, str):
        raise ValueError(f"Unknown color: {color}")
    return code


def colorize(text: str, color: Optional[str]) -> str:
    """Wrap text in the given color, or return it untouched without one."""
    code = resolve_color(color)
    if code is None:
        return text
    return f"{code}{text}{Colors.RESET}"
