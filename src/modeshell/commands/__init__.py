"""
Command tree and completion registry.

Usage:
    from modeshell.commands import CommandNode, CommandResult

    root = CommandNode("main")
    show = root.add("show", "display things")
    show.add("version", "print the version", lambda args: print("1.0"))
    root.execute("show version")     # (CommandResult.EXECUTED, "")
"""

from .types import (
    CommandResult,
    CompletionResult,
    CommandHandler,
    CompletionCallback,
    ExecutionOutcome,
)

from .completion import (
    CompletionRegistry,
    longest_common_prefix,
)

from .node import CommandNode

__all__ = [
    "CommandResult",
    "CompletionResult",
    "CommandHandler",
    "CompletionCallback",
    "ExecutionOutcome",
    "CompletionRegistry",
    "longest_common_prefix",
    "CommandNode",
]
