"""
modeshell Utilities

This module provides the logging setup and the exception hierarchy used
throughout modeshell.
"""

from .logging import (
    setup_logging,
    get_logger,
    is_logging_initialized,
    log_startup,
    log_shutdown,
)

from .error_handling import (
    ModeshellError,
    ConfigurationError,
    CommandError,
    ModeStackError,
    PreprocessorError,
    VariableSyntaxError,
    handle_command_execution,
)

__all__ = [
    # Logging utilities
    "setup_logging",
    "get_logger",
    "is_logging_initialized",
    "log_startup",
    "log_shutdown",

    # Error handling utilities
    "ModeshellError",
    "ConfigurationError",
    "CommandError",
    "ModeStackError",
    "PreprocessorError",
    "VariableSyntaxError",
    "handle_command_execution",
]
