"""
Backend reading from a plain text stream.

Used when input is piped into a shell and by the test-suite. There is no
line editing; completion is only available through :meth:`Backend.complete`.
"""

import sys
from typing import Optional, TextIO

from .base import Backend


class StreamBackend(Backend):
    """Reads lines from ``stream`` and optionally writes prompts to ``output``."""

    def __init__(self, stream: Optional[TextIO] = None, output: Optional[TextIO] = None, **kwargs):
        super().__init__(**kwargs)
        self._stream = stream if stream is not None else sys.stdin
        self._output = output

    def read_line(self) -> Optional[str]:
        if self._output is not None:
            self._output.write(self.prompt)
            self._output.flush()
        line = self._stream.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def read_char(self) -> Optional[str]:
        c = self._stream.read(1)
        return c or None

    def reset(self) -> None:
        if self._output is not None:
            self._output.flush()
