"""
Logging configuration for daily-linear.

This module handles the centralized logging configuration including:
- Console and file output handlers
- Log rotation with configurable parameters
- Global debug flag mechanism
- Logger retrieval with component-specific levels
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Global debug flag
_DEBUG_MODE = False

# Component-specific log levels, set through set_component_log_level()
_COMPONENT_LOG_LEVELS: Dict[str, int] = {}

# Default log format with detailed context
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s"

# Simplified format for console in normal mode
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Color formatting for console output
_LOG_COLORS = {
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[92m",  # Green
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[91m\033[1m",  # Bold Red
    "RESET": "\033[0m",
}

_PACKAGE_LOGGER = "daily_linear"
_LOG_FILE_NAME = "daily_linear.log"


class ColorFormatter(logging.Formatter):
    """Formatter that adds colors to log levels for console output."""

    def format(self, record):
        levelname = record.levelname
        if levelname in _LOG_COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = (
                f"{_LOG_COLORS[levelname]}{levelname}{_LOG_COLORS['RESET']}"
            )
        return super().format(record)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name and apply component-specific levels.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(name)

    for component, level in _COMPONENT_LOG_LEVELS.items():
        if component in name:
            logger.setLevel(level)
            break

    return logger


def set_debug_mode(enabled: bool) -> None:
    """
    Set the global debug mode flag.

    Args:
        enabled: True to enable debug mode, False to disable
    """
    global _DEBUG_MODE
    old_value = _DEBUG_MODE
    _DEBUG_MODE = enabled

    # Only log on change to avoid spam during initialization
    if old_value != _DEBUG_MODE:
        root_logger = logging.getLogger(_PACKAGE_LOGGER)
        if enabled:
            root_logger.setLevel(logging.DEBUG)
            root_logger.info("Debug mode enabled")
        else:
            root_logger.info("Debug mode disabled")
            root_logger.setLevel(logging.INFO)


def is_debug_mode() -> bool:
    """Check if debug mode is currently enabled."""
    return _DEBUG_MODE


def configure_logging(
    log_dir: Optional[Union[str, Path]] = None,
    console_level: Union[int, str] = logging.INFO,
    file_level: Union[int, str] = logging.DEBUG,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    config: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Configure the package logger with console and optional file outputs.

    Handlers are attached to the ``daily_linear`` logger only; the root
    logger is left to the host application.

    Args:
        log_dir: Directory to store log files; console only when None
        console_level: Logging level (or level name) for console output
        file_level: Logging level for file output
        max_file_size_mb: Maximum size of each log file in MB before rotation
        backup_count: Number of backup log files to keep
        config: Additional options (console_format, file_format, debug_mode)
    """
    if config is None:
        config = {}

    if isinstance(console_level, str):
        console_level = logging.getLevelName(console_level.upper())
    if isinstance(file_level, str):
        file_level = logging.getLevelName(file_level.upper())

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if is_debug_mode() else logging.INFO)

    # Clear any existing handlers to avoid duplicates if reconfigured
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        ColorFormatter(config.get("console_format", _CONSOLE_FORMAT))
    )
    package_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(exist_ok=True, parents=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / _LOG_FILE_NAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter(config.get("file_format", _DEFAULT_FORMAT))
        )
        package_logger.addHandler(file_handler)

    if log_dir:
        package_logger.debug(
            f"daily-linear logging initialized (console: {logging.getLevelName(console_level)}, files: {log_dir})"
        )
    else:
        package_logger.debug(
            f"daily-linear logging initialized (console only: {logging.getLevelName(console_level)})"
        )

    set_debug_mode(config.get("debug_mode", is_debug_mode()))


def set_component_log_level(component: str, level: int) -> None:
    """
    Set log level for a specific component.

    Args:
        component: Component name (e.g., 'neural.steps')
        level: Log level to set
    """
    _COMPONENT_LOG_LEVELS[component] = level

    for logger_name in list(logging.Logger.manager.loggerDict):
        if component in logger_name:
            logging.getLogger(logger_name).setLevel(level)


def get_component_log_levels() -> Dict[str, int]:
    """Get current component log levels."""
    return _COMPONENT_LOG_LEVELS.copy()
