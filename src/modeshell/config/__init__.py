"""
modeshell Configuration System

    from modeshell.config import load_config

    config = load_config("shell.yaml")
    print(config.history.size)      # 1000
    print(config.prompt.text)       # "> "
"""

from .loader import (
    ConfigLoader,
    load_config,
    get_config,
    reload_config,
    validate_config_file,
    ConfigurationError,
)

from .models import (
    ShellConfig,
    AppConfig,
    HistoryConfig,
    CompletionConfig,
    PromptConfig,
    LogLevel,
)

__all__ = [
    # Main functions
    "ConfigLoader",
    "get_config",
    "load_config",
    "reload_config",
    "validate_config_file",

    # Exception
    "ConfigurationError",

    # Configuration models
    "ShellConfig",
    "AppConfig",
    "HistoryConfig",
    "CompletionConfig",
    "PromptConfig",
    "LogLevel",
]
