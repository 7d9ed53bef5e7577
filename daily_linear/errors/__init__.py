"""
Error handling framework for daily-linear.

This module provides the exception hierarchy raised by model construction,
per-call tensor validation and host materialization.
"""

from daily_linear.errors.error_codes import ErrorCodes
from daily_linear.errors.exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    DailyLinearError,
    DataError,
    InvalidConfigurationError,
    MaterializationError,
    ShapeMismatchError,
    ValidationError,
)

__all__ = [
    # Base exception
    "DailyLinearError",
    # Exception hierarchy
    "ConfigurationError",
    "InvalidConfigurationError",
    "ConfigurationFileError",
    "ValidationError",
    "ShapeMismatchError",
    "DataError",
    "MaterializationError",
    # Error codes
    "ErrorCodes",
]
