"""
Shared types for command dispatch and completion.
"""

from enum import Enum
from typing import Callable, List, Optional, Tuple


class CommandResult(Enum):
    """Outcome of dispatching one input line.

    Each invocation either runs a handler, does nothing because there was no
    input, or fails because no handler was found.
    """

    EXECUTED = "executed"
    NOP = "nop"
    NO_COMMAND = "no_command"


class CompletionResult(Enum):
    """Outcome of a completion request."""

    COMPLETED = "completed"
    NOT_FOUND = "not_found"
    NO_HANDLER = "no_handler"


# handler(args) -> result; returning None counts as EXECUTED
CommandHandler = Callable[[str], Optional[CommandResult]]

# callback(prefix, matches) -> text to put back onto the command line
CompletionCallback = Callable[[str, List[str]], str]

# (result, error message); the message is empty unless the result is NO_COMMAND
ExecutionOutcome = Tuple[CommandResult, str]
