"""
Modes and the dispatcher that switches between them.
"""

from .mode import Mode, BackendFactory, CommandClause
from .dispatcher import Dispatcher, ErrorCallback

__all__ = [
    "Mode",
    "BackendFactory",
    "CommandClause",
    "Dispatcher",
    "ErrorCallback",
]
