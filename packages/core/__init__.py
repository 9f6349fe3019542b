"""Shared configuration, logging and error types."""

from .config import Settings, get_settings
from .errors import AppError, ConfigurationError, RuleValidationError, ValidationError
from .logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "AppError",
    "ConfigurationError",
    "RuleValidationError",
    "ValidationError",
    "setup_logging",
]
