"""
Shared configuration for csv-ddl.

Environment detection and logging setup used by the command line tool.
"""

from .logging_config import (
    LOG_LEVELS,
    LoggingConfig,
    get_default_logging_config,
    normalize_log_level,
    setup_logging,
)
from .environment import Environment, get_environment, override_environment, reset_environment

__all__ = [
    'LOG_LEVELS',
    'LoggingConfig',
    'get_default_logging_config',
    'normalize_log_level',
    'setup_logging',
    'Environment',
    'get_environment',
    'override_environment',
    'reset_environment',
]

__version__ = '1.0.0'
