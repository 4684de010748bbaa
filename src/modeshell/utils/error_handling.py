"""
Unified error handling utilities for modeshell.

The dispatch engine reports registration and lookup failures through return
values. Exceptions are reserved for configuration problems, broken
preconditions and handler failures; they all derive from ModeshellError.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional

from .logging import get_logger


class ModeshellError(Exception):
    """Base exception for all modeshell errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ModeshellError):
    """Configuration-related error."""
    pass


class CommandError(ModeshellError):
    """Raised by a command handler to reject its arguments.

    The command tree turns it into a ``NO_COMMAND`` result carrying the
    exception message.
    """
    pass


class ModeStackError(ModeshellError):
    """Operation requires an active mode but the mode stack is empty."""
    pass


class PreprocessorError(ModeshellError):
    """A preprocessor stage rejected the input line."""
    pass


class VariableSyntaxError(PreprocessorError):
    """Malformed variable reference in an input line."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message, details={"position": position})
        self.position = position


def handle_command_execution(command_name: str, logger: Optional[logging.Logger] = None):
    """
    Decorator to standardize command handler error handling.

    ``CommandError`` passes through untouched. ``ValueError``/``TypeError``
    and anything else unexpected become a ``CommandError`` so that a single
    failing handler cannot take down the read/dispatch loop.

    Args:
        command_name: Human-readable name of the command
        logger: Optional logger instance (defaults to a command-specific logger)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            _logger = logger or get_logger(f"modeshell.commands.{command_name}")

            try:
                _logger.debug(f"Starting {command_name}")
                result = func(*args, **kwargs)
                _logger.debug(f"{command_name} completed")
                return result

            except CommandError:
                raise

            except (ValueError, TypeError) as e:
                _logger.error(f"{command_name} failed - invalid arguments: {e}")
                raise CommandError(
                    f"{command_name}: {e}",
                    details={"error_type": "validation", "original_error": str(e)}
                ) from e

            except Exception as e:
                _logger.error(f"{command_name} failed - unexpected error: {e}", exc_info=True)
                raise CommandError(
                    f"{command_name}: {e}",
                    details={"error_type": "unexpected", "original_error": str(e)}
                ) from e

        return wrapper

    return decorator
