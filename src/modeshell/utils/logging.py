"""
Logging system for modeshell.

Library modules obtain loggers through :func:`get_logger` and only ever log;
applications embedding a shell call :func:`setup_logging` once with a
:class:`~modeshell.config.ShellConfig` to attach console and file handlers.
"""

import os
import sys
import json
import logging
import logging.handlers
from pathlib import Path
from typing import Dict, Optional
from datetime import datetime

from ..ui.color import Colors


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that adds colors to console output based on log level."""

    # Color mapping for different log levels
    LEVEL_COLORS = {
        'DEBUG': Colors.BRIGHT_BLACK,
        'INFO': Colors.BRIGHT_BLUE,
        'WARNING': Colors.BRIGHT_YELLOW,
        'ERROR': Colors.BRIGHT_RED,
        'CRITICAL': Colors.BRIGHT_MAGENTA + Colors.BOLD,
    }

    def __init__(self, use_colors=True, stream=None):
        """Initialize the formatter.

        Args:
            use_colors: Whether to use colors in output
            stream: Stream the handler writes to, checked for tty support
        """
        self.use_colors = use_colors and self._supports_color(stream or sys.stderr)

        # Console format: timestamp | level | module | message
        fmt = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        super().__init__(fmt, datefmt='%Y-%m-%d %H:%M:%S')

    def _supports_color(self, stream):
        """Check if the terminal supports color output."""
        if not hasattr(stream, 'isatty') or not stream.isatty():
            return False

        if os.getenv('NO_COLOR'):
            return False

        if os.getenv('FORCE_COLOR'):
            return True

        term = os.getenv('TERM', '').lower()
        return 'color' in term or term in ('xterm', 'xterm-256color', 'screen', 'linux')

    def format(self, record):
        """Format the log record with colors if enabled."""
        formatted = super().format(record)

        if not self.use_colors:
            return formatted

        color = self.LEVEL_COLORS.get(record.levelname, '')
        if color:
            formatted = f"{color}{formatted}{Colors.RESET}"

        return formatted


class JSONFileFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs for file storage."""

    def format(self, record):
        """Format the log record as JSON."""
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.name,
            'message': record.getMessage(),
            'extra': {
                'filename': record.filename,
                'lineno': record.lineno,
                'funcName': record.funcName,
            }
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class LoggingManager:
    """Central logging manager for modeshell."""

    # Module loggers that get their own level regardless of the root level
    DEFAULT_MODULE_LEVELS = {
        "modeshell.commands": "INFO",
        "modeshell.shell": "INFO",
        "modeshell.preprocessing": "INFO",
        "modeshell.backends": "WARNING",
        "modeshell.config": "INFO",
    }

    def __init__(self):
        """Initialize the logging manager."""
        self._initialized = False
        self._loggers: Dict[str, logging.Logger] = {}
        self._log_file: Optional[Path] = None

    def setup_logging(self, config, verbose: bool = False, force_reinit: bool = False):
        """Setup logging based on configuration.

        Args:
            config: ShellConfig instance
            verbose: Enable verbose logging (overrides config)
            force_reinit: Force reinitialization even if already setup
        """
        if self._initialized and not force_reinit:
            return

        if verbose or config.app.verbose_logging:
            log_level = logging.DEBUG
        else:
            log_level = getattr(logging, config.app.log_level.value.upper(), logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # Remove existing handlers to avoid duplicates
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        self._setup_console_handler(root_logger, log_level)

        if config.app.log_file:
            self._setup_file_handler(root_logger, config, log_level)

        self._setup_module_loggers(verbose or config.app.verbose_logging)

        self._initialized = True

        logger = self.get_logger('modeshell.logging')
        logger.debug("Logging system initialized")
        logger.debug(f"Log level: {logging.getLevelName(log_level)}")
        if self._log_file:
            logger.debug(f"Log file: {self._log_file}")

    def _setup_console_handler(self, root_logger: logging.Logger, log_level: int):
        """Setup console logging handler.

        Logs go to stderr so they never interleave with command output.
        """
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ColoredConsoleFormatter(use_colors=True, stream=sys.stderr))
        root_logger.addHandler(console_handler)

    def _setup_file_handler(self, root_logger: logging.Logger, config, log_level: int):
        """Setup file logging handler with rotation."""
        try:
            log_file = Path(config.app.log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=config.app.max_log_size_mb * 1024 * 1024,
                backupCount=config.app.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(JSONFileFormatter())

            root_logger.addHandler(file_handler)
            self._log_file = log_file

        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    def _setup_module_loggers(self, verbose: bool):
        """Setup module-specific loggers."""
        for module_name, level_name in self.DEFAULT_MODULE_LEVELS.items():
            logger = logging.getLogger(module_name)
            if verbose:
                logger.setLevel(logging.DEBUG)
            else:
                logger.setLevel(getattr(logging, level_name, logging.INFO))

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance for the given name.

        Args:
            name: Logger name (typically __name__)

        Returns:
            Logger instance
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)

        return self._loggers[name]

    def is_initialized(self) -> bool:
        """Check if logging has been initialized."""
        return self._initialized


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config, verbose: bool = False, force_reinit: bool = False):
    """Setup logging based on configuration.

    Args:
        config: ShellConfig instance
        verbose: Enable verbose logging
        force_reinit: Force reinitialization
    """
    _logging_manager.setup_logging(config, verbose, force_reinit)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name."""
    return _logging_manager.get_logger(name)


def is_logging_initialized() -> bool:
    """Check if logging has been initialized."""
    return _logging_manager.is_initialized()


def log_startup(config_path: Optional[str] = None):
    """Log shell startup information."""
    logger = get_logger('modeshell.startup')
    logger.info("modeshell starting up")

    if config_path:
        logger.info(f"Configuration loaded from: {config_path}")
    else:
        logger.info("Using default configuration")


def log_shutdown():
    """Log shell shutdown."""
    logger = get_logger('modeshell.shutdown')
    logger.info("modeshell shutting down")
