"""
Per-mode command history on top of prompt_toolkit's history stores.

Entries are recorded explicitly through :meth:`ShellHistoryMixin.enter`;
lines accepted by a prompt session are not added automatically, so the
dispatcher decides what ends up in the history. File-backed histories use
prompt_toolkit's ``FileHistory`` format and can be shared with any other
prompt_toolkit application.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from prompt_toolkit.history import FileHistory, InMemoryHistory

from ..utils.logging import get_logger


logger = get_logger(__name__)


class ShellHistoryMixin:
    """Size bound and duplicate suppression for a prompt_toolkit ``History``."""

    size: int
    unique: bool

    def _load_now(self) -> None:
        try:
            strings = list(self.load_history_strings())
        except OSError as e:
            logger.warning(f"Could not load history: {e}")
            strings = []
        # newest first, as prompt_toolkit keeps them
        self._loaded_strings = [s for s in strings if s][:self.size]
        self._loaded = True

    @property
    def entries(self) -> Tuple[str, ...]:
        """History entries, oldest first."""
        return tuple(self.get_strings())

    def enter(self, entry: str) -> bool:
        """Record an entry.

        Returns:
            False if the entry was dropped (empty, or a repeat of the previous
            entry with unique history)
        """
        entry = entry.replace("\n", " ")
        if not entry:
            return False
        strings = self.get_strings()
        if self.unique and strings and strings[-1] == entry:
            return False
        super().append_string(entry)
        del self._loaded_strings[self.size:]
        return True

    def append_string(self, string: str) -> None:
        # accepted lines are recorded through enter()
        pass

    def save(self) -> bool:
        """Persist the bounded history; False when there is nowhere to save it."""
        return False


class MemoryShellHistory(ShellHistoryMixin, InMemoryHistory):
    """History kept for the lifetime of the backend only."""

    def __init__(self, size: int = 1000, unique: bool = True):
        super().__init__()
        self.size = size
        self.unique = unique
        self._load_now()


class FileShellHistory(ShellHistoryMixin, FileHistory):
    """History stored in a prompt_toolkit history file.

    Entries are appended to the file as they are entered; :meth:`save`
    rewrites the file with only the entries within the size bound.
    """

    def __init__(self, filename: Union[str, Path], size: int = 1000, unique: bool = True):
        super().__init__(str(filename))
        self.size = size
        self.unique = unique
        self._load_now()
        logger.debug(f"Loaded {len(self._loaded_strings)} history entries from {self.filename}")

    @property
    def path(self) -> Path:
        return Path(self.filename)

    def store_string(self, string: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            super().store_string(string)
        except OSError as e:
            logger.warning(f"Could not append to history file {self.filename}: {e}")

    def save(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(b"")
        except OSError as e:
            logger.warning(f"Could not save history to {self.filename}: {e}")
            return False
        for entry in self.entries:
            super().store_string(entry)
        return True


def open_history(history_file: Optional[Union[str, Path]] = None,
                 size: int = 1000,
                 unique: bool = True) -> ShellHistoryMixin:
    """File-backed history when a file is given, in-memory history otherwise."""
    if history_file is None:
        return MemoryShellHistory(size, unique)
    return FileShellHistory(Path(history_file).expanduser(), size, unique)
