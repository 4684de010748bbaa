"""
Shell variables as an input preprocessor.

The engine keeps a table of string variables and rewrites every line that
passes through it:

    >>> engine = VariablesEngine({"host": "localhost"})
    >>> engine("connect $host:${port}")
    'connect localhost:'
    >>> engine("port=8080")
    ''
    >>> engine("connect $host:${port}")
    'connect localhost:8080'

A line of the form ``name=value`` binds ``name`` and produces no output, so
the dispatcher treats it as handled. ``\\$`` keeps a dollar sign from
starting a reference; the backslash stays in the output.
"""

import re
from enum import Enum
from typing import Dict, Mapping, Optional

from ..utils.error_handling import VariableSyntaxError
from ..utils.logging import get_logger


_ASSIGNMENT = re.compile(r"([A-Za-z0-9_]+)=(.*)", re.DOTALL)


def is_name_char(c: str) -> bool:
    """Valid variable name characters are ASCII alphanumerics and underscore."""
    return c.isascii() and (c.isalnum() or c == "_")


class ScanState(Enum):
    """States of the substitution scanner."""

    TRAVERSE = "traverse"
    AFTER_DOLLAR = "after_dollar"
    READING_BARE_NAME = "reading_bare_name"
    READING_BRACED_NAME = "reading_braced_name"


class VariablesEngine:
    """Variable substitution preprocessor with a persistent variable table."""

    def __init__(self, variables: Optional[Mapping[str, str]] = None):
        self._variables: Dict[str, str] = dict(variables or {})
        self.logger = get_logger(__name__)

    @property
    def variables(self) -> Dict[str, str]:
        """A copy of the variable table."""
        return dict(self._variables)

    def set(self, name: str, value: str) -> None:
        self._variables[name] = value

    def unset(self, name: str) -> None:
        self._variables.pop(name, None)

    def get(self, name: str, default: str = "") -> str:
        return self._variables.get(name, default)

    def __call__(self, line: str) -> str:
        return self.parse(line)

    def parse(self, line: str, nested: bool = False) -> str:
        """Substitute all variable references in line.

        At the top level a line starting with ``name=`` is an assignment: the
        rest of the line is substituted as a nested parse and bound to name,
        and the result is the empty string. Nested parses never treat ``=``
        specially.

        Raises:
            VariableSyntaxError: Malformed reference; nothing is bound. In an
                assignment the position counts from the start of the value.
        """
        if not nested:
            match = _ASSIGNMENT.fullmatch(line)
            if match:
                name = match.group(1)
                value = self.parse(match.group(2), nested=True)
                self._variables[name] = value
                self.logger.debug(f"Assigned variable {name!r}")
                return ""
        return self._substitute(line)

    def _substitute(self, text: str) -> str:
        """Run the scanner over text; error positions are offsets into text."""
        out = []
        state = ScanState.TRAVERSE
        name_start = 0
        prev = ""
        i = 0
        end = len(text)

        while i < end:
            c = text[i]

            if state is ScanState.TRAVERSE:
                if c == "$" and prev != "\\":
                    state = ScanState.AFTER_DOLLAR
                else:
                    out.append(c)

            elif state is ScanState.AFTER_DOLLAR:
                if c == "{":
                    state = ScanState.READING_BRACED_NAME
                    name_start = i + 1
                elif is_name_char(c):
                    state = ScanState.READING_BARE_NAME
                    name_start = i
                elif c == "$":
                    raise self._syntax_error(i, "$$ is not a valid expression")
                else:
                    raise self._syntax_error(i, f"unexpected character '{c}' after $")

            elif state is ScanState.READING_BARE_NAME:
                if not is_name_char(c):
                    out.append(self.get(text[name_start:i]))
                    state = ScanState.TRAVERSE
                    # the terminator is scanned again in TRAVERSE
                    continue

            elif state is ScanState.READING_BRACED_NAME:
                if c == "}":
                    out.append(self.get(text[name_start:i]))
                    state = ScanState.TRAVERSE
                elif not is_name_char(c):
                    raise self._syntax_error(i, f"'{c}' is an invalid character inside ${{...}}")

            prev = c
            i += 1

        if state is ScanState.AFTER_DOLLAR:
            raise self._syntax_error(end, "$ at end of line")
        if state is ScanState.READING_BRACED_NAME:
            raise VariableSyntaxError("syntax error: missing '}' at end of line", end)
        if state is ScanState.READING_BARE_NAME:
            out.append(self.get(text[name_start:]))

        return "".join(out)

    def _syntax_error(self, position: int, detail: str) -> VariableSyntaxError:
        self.logger.debug(f"Variable syntax error at {position}: {detail}")
        return VariableSyntaxError(f"syntax error at position {position}: {detail}", position)
