"""
Logging configuration for csv-ddl.

Standard output carries the generated SQL, so every console handler
configured here writes to standard error.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .environment import get_environment

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def normalize_log_level(value: str) -> str:
    """Upper-case a level name and require one of the standard levels."""
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}")
    return level


class LoggingConfig(BaseModel):
    """Logging configuration model."""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="INFO", description="Root logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date format for log messages"
    )

    # File logging
    enable_file_logging: bool = Field(default=False)
    log_file_path: str = Field(default="logs/csv_ddl.log")
    max_file_size_mb: int = Field(default=10, ge=1, le=1000)
    backup_count: int = Field(default=3, ge=1, le=50)

    # Console logging
    enable_console_logging: bool = Field(default=True)

    # Structured logging
    enable_json_logging: bool = Field(default=False)

    # Component-specific logging levels
    component_levels: Dict[str, str] = Field(default_factory=dict)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        return normalize_log_level(v)

    @field_validator('component_levels')
    @classmethod
    def validate_component_levels(cls, v: Dict[str, str]) -> Dict[str, str]:
        return {name: normalize_log_level(level) for name, level in v.items()}


class StructuredFormatter(logging.Formatter):
    """Formatter for structured JSON logging."""

    _RESERVED = {
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
        'filename', 'module', 'lineno', 'funcName', 'created',
        'msecs', 'relativeCreated', 'thread', 'threadName',
        'processName', 'process', 'exc_info', 'exc_text',
        'stack_info', 'taskName', 'message',
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Extra fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in self._RESERVED and not key.startswith('_'):
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Setup centralized logging configuration.

    Args:
        config: Optional logging configuration. If not provided, will use
                environment-appropriate defaults.

    Returns:
        Root logger instance
    """
    if config is None:
        config = get_default_logging_config()

    root_logger = logging.getLogger()

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, config.level.upper()))

    if config.enable_file_logging:
        _setup_file_logging(root_logger, config)

    if config.enable_console_logging:
        _setup_console_logging(root_logger, config)

    for logger_name, level in config.component_levels.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))

    root_logger.debug(f"Logging configured for environment: {get_environment().value}")
    return root_logger


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.enable_json_logging:
        return StructuredFormatter()
    return logging.Formatter(fmt=config.format, datefmt=config.date_format)


def _setup_file_logging(logger: logging.Logger, config: LoggingConfig) -> None:
    """Setup file logging with rotation."""
    log_path = Path(config.log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=config.log_file_path,
        maxBytes=config.max_file_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
        encoding='utf-8'
    )
    file_handler.setFormatter(_build_formatter(config))
    file_handler.setLevel(getattr(logging, config.level.upper()))

    logger.addHandler(file_handler)


def _setup_console_logging(logger: logging.Logger, config: LoggingConfig) -> None:
    """Setup console logging on stderr."""
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_build_formatter(config))
    console_handler.setLevel(getattr(logging, config.level.upper()))

    logger.addHandler(console_handler)


def get_default_logging_config(level: Optional[str] = None) -> LoggingConfig:
    """Get default logging configuration based on environment."""
    env = get_environment()

    config_dict: Dict[str, Any] = {
        'level': level or env.log_level,
        'enable_console_logging': True,
    }

    if env.is_production:
        config_dict.update({
            'enable_json_logging': True,
            'enable_file_logging': True,
        })

    return LoggingConfig(**config_dict)
