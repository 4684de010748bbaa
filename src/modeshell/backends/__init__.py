"""
Line-editing backends.

- Backend: the capability contract every backend implements
- PromptToolkitBackend: interactive terminals
- StreamBackend: piped input and tests
- FileShellHistory / MemoryShellHistory: per-mode history stores
"""

from .base import Backend
from .history import FileShellHistory, MemoryShellHistory, ShellHistoryMixin, open_history
from .stream import StreamBackend
from .prompt_toolkit_backend import PromptToolkitBackend, RegistryCompleter

__all__ = [
    "Backend",
    "FileShellHistory",
    "MemoryShellHistory",
    "ShellHistoryMixin",
    "open_history",
    "StreamBackend",
    "PromptToolkitBackend",
    "RegistryCompleter",
]
