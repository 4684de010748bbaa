"""
Pydantic models for modeshell configuration validation.
"""

from typing import Optional
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum

from ..ui.color import resolve_color


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppConfig(BaseModel):
    """Application-level configuration settings."""

    name: str = Field(default="modeshell", description="Shell name passed to the line editor")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    verbose_logging: bool = Field(default=False, description="Enable verbose debug logging")

    log_file: Optional[str] = Field(default=None, description="JSON log file location, disabled when unset")
    max_log_size_mb: int = Field(default=10, ge=1, le=1000, description="Maximum log file size")
    backup_count: int = Field(default=5, ge=1, le=100, description="Number of backup log files")

    @field_validator('log_file')
    @classmethod
    def expand_path(cls, v):
        """Expand user home directory in paths."""
        if v is None:
            return v
        return str(Path(v).expanduser())


class HistoryConfig(BaseModel):
    """Per-mode command history settings."""

    model_config = ConfigDict(validate_assignment=True)

    size: int = Field(default=1000, ge=1, le=100000, description="Maximum entries kept per mode")
    unique: bool = Field(default=True, description="Drop an entry equal to the previous one")
    directory: Optional[str] = Field(
        default=None,
        description="Directory for mode history files named <mode>.history; in-memory history when unset"
    )

    @field_validator('directory')
    @classmethod
    def expand_directory(cls, v):
        """Expand user home directory in the history directory."""
        if v is None:
            return v
        return str(Path(v).expanduser())

    def file_for(self, mode_name: str) -> Optional[str]:
        """History file path for a mode, or None when history is not persisted."""
        if self.directory is None:
            return None
        return str(Path(self.directory) / f"{mode_name}.history")


class CompletionConfig(BaseModel):
    """Completion settings."""

    enabled: bool = Field(default=True, description="Enable completion")
    key: str = Field(default="tab", description="Key that triggers completion")


class PromptConfig(BaseModel):
    """Default prompt settings for new modes."""

    text: str = Field(default="> ", description="Default prompt text")
    color: Optional[str] = Field(default=None, description="Default prompt color name, e.g. bold_green")

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        """Reject color names the terminal layer does not know."""
        resolve_color(v)
        return v


class ShellConfig(BaseModel):
    """Main configuration model."""

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    app: AppConfig = Field(default_factory=AppConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    completion: CompletionConfig = Field(default_factory=CompletionConfig)
    prompt: PromptConfig = Field(default_factory=PromptConfig)
