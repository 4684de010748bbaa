"""
modeshell - mode-based interactive command shells.

A shell is a Dispatcher holding named modes. Each mode is an independent
command tree with its own prompt, history and completions; pushing and
popping modes switches between them. Input lines can be rewritten by
preprocessors, such as the variable engine, before they are dispatched.

Usage:
    from modeshell import Dispatcher, VariablesEngine

    shell = Dispatcher()
    main = shell.mode_add("main", "> ")
    main.add("quit", "leave the shell", lambda args: shell.stop())
    shell.add_preprocessor(VariablesEngine())
    shell.mode_push("main")
    shell.run()
"""

__version__ = "0.1.0"

from .commands import (
    CommandNode,
    CommandResult,
    CompletionRegistry,
    CompletionResult,
    longest_common_prefix,
)
from .preprocessing import PreprocessorPipeline, VariablesEngine
from .backends import Backend, PromptToolkitBackend, StreamBackend
from .shell import Dispatcher, Mode
from .config import ShellConfig, load_config
from .utils import (
    ModeshellError,
    CommandError,
    ConfigurationError,
    ModeStackError,
    PreprocessorError,
    VariableSyntaxError,
    handle_command_execution,
    get_logger,
    setup_logging,
)
from .ui import Colors

__all__ = [
    "__version__",
    "CommandNode",
    "CommandResult",
    "CompletionRegistry",
    "CompletionResult",
    "longest_common_prefix",
    "PreprocessorPipeline",
    "VariablesEngine",
    "Backend",
    "PromptToolkitBackend",
    "StreamBackend",
    "Dispatcher",
    "Mode",
    "ShellConfig",
    "load_config",
    "ModeshellError",
    "CommandError",
    "ConfigurationError",
    "ModeStackError",
    "PreprocessorError",
    "VariableSyntaxError",
    "handle_command_execution",
    "get_logger",
    "setup_logging",
    "Colors",
]
