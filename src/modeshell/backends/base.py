"""
Line-editing backend contract.

A backend owns everything terminal-related for one mode: reading input,
the prompt, completion key handling and the command history. The dispatch
engine only talks to backends through the interface defined here.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple

from ..commands.completion import CompletionRegistry
from ..commands.types import CompletionResult
from .history import ShellHistoryMixin, open_history
from ..ui.color import colorize
from ..utils.logging import get_logger


class Backend(ABC):
    """Base class for line-editing backends.

    History handling is shared by all backends: entries live in a
    prompt_toolkit history store bounded by ``history_size``, backed by
    ``history_file`` in prompt_toolkit's file format when one is given.
    """

    def __init__(self,
                 shell_name: str = "modeshell",
                 history_file: Optional[str] = None,
                 history_size: int = 1000,
                 unique_history: bool = True,
                 completion_key: str = "tab",
                 completer: Optional[CompletionRegistry] = None):
        self.shell_name = shell_name
        self.history_file = Path(history_file).expanduser() if history_file else None
        self.history_size = history_size
        self.unique_history = unique_history
        self.completion_key = completion_key
        self.logger = get_logger(__name__)

        self._completer = completer if completer is not None else CompletionRegistry()
        self._prompt_text = "> "
        self._prompt_color: Optional[str] = None
        self._history = open_history(self.history_file, history_size, unique_history)

    @abstractmethod
    def read_line(self) -> Optional[str]:
        """Block until a full line is read.

        Returns:
            The line without its trailing newline, or None on end of input
        """

    @abstractmethod
    def read_char(self) -> Optional[str]:
        """Block until a single character is read; None on end of input."""

    def reset(self) -> None:
        """Re-synchronize terminal state before a read, e.g. after a mode switch."""

    @property
    def completer(self) -> CompletionRegistry:
        return self._completer

    def complete(self, text: str) -> Optional[str]:
        """Complete text as the completion key would.

        Returns:
            The replacement text, or None when nothing could be completed
        """
        result, completion = self._completer.complete(text)
        if result is not CompletionResult.COMPLETED:
            return None
        return completion

    @property
    def prompt(self) -> str:
        """The prompt as displayed, including color escapes."""
        return colorize(self._prompt_text, self._prompt_color)

    @property
    def prompt_text(self) -> str:
        return self._prompt_text

    @property
    def prompt_color(self) -> Optional[str]:
        return self._prompt_color

    def set_prompt(self, text: str, color: Optional[str] = None) -> None:
        self._prompt_text = text
        self._prompt_color = color

    @property
    def history_store(self) -> ShellHistoryMixin:
        """The prompt_toolkit history holding this backend's entries."""
        return self._history

    @property
    def history(self) -> Tuple[str, ...]:
        """History entries, oldest first."""
        return self._history.entries

    def history_enter(self, entry: str) -> bool:
        """Append an entry to the history.

        Returns:
            False if the entry was dropped (empty, or a repeat of the previous
            entry with unique history)
        """
        return self._history.enter(entry)

    def history_save(self) -> bool:
        """Write the history to the history file.

        Returns:
            False if there is no history file or it could not be written
        """
        return self._history.save()
