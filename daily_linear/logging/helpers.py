"""
Helper decorators for common logging patterns.

This module provides decorators for entry/exit logging and performance
tracking. Both re-raise every exception they observe.
"""

import functools
import inspect
import logging
import time
from typing import Any, Callable, List, Optional, TypeVar, cast

from daily_linear.logging.config import get_logger

# Type variables for function decorators
F = TypeVar("F", bound=Callable[..., Any])


def _format_value(value: Any) -> Any:
    return value if isinstance(value, (int, float, str, bool)) else repr(value)


def log_entry_exit(
    logger: Optional[logging.Logger] = None,
    log_args: bool = False,
    log_result: bool = False,
    entry_level: int = logging.DEBUG,
    exit_level: int = logging.DEBUG,
    error_level: int = logging.DEBUG,
) -> Callable[[F], F]:
    """
    Decorator to log function entry and exit.

    Args:
        logger: Logger to use (if None, get logger based on module name)
        log_args: Whether to log function arguments
        log_result: Whether to log function return value
        entry_level: Log level for entry messages
        exit_level: Log level for exit messages
        error_level: Log level for error messages

    Returns:
        Decorated function with entry/exit logging
    """

    def decorator(func: F) -> F:
        log = logger or get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            func_name = func.__qualname__

            entry_msg = f"Entering {func_name}"
            if log_args and (args or kwargs):
                arg_strs: List[str] = []
                param_names = list(inspect.signature(func).parameters.keys())

                for i, arg in enumerate(args):
                    if i < len(param_names):
                        arg_strs.append(f"{param_names[i]}={_format_value(arg)}")
                    else:
                        arg_strs.append(f"{_format_value(arg)}")

                for name, value in kwargs.items():
                    arg_strs.append(f"{name}={_format_value(value)}")

                entry_msg += f" with args: {', '.join(arg_strs)}"

            log.log(entry_level, entry_msg)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.time() - start_time
                log.log(error_level, f"Error in {func_name} after {elapsed:.3f}s: {e}")
                raise

            elapsed = time.time() - start_time
            exit_msg = f"Exiting {func_name} after {elapsed:.3f}s"
            if log_result:
                result_str = _format_value(result)
                # Truncate very long result strings
                if isinstance(result_str, str) and len(result_str) > 1000:
                    result_str = result_str[:997] + "..."
                exit_msg += f" with result: {result_str}"

            log.log(exit_level, exit_msg)
            return result

        return cast(F, wrapper)

    return decorator


def log_performance(
    logger: Optional[logging.Logger] = None,
    threshold_ms: float = 0,  # 0 means log all calls
    log_level: int = logging.DEBUG,
) -> Callable[[F], F]:
    """
    Decorator to log function performance.

    Args:
        logger: Logger to use (if None, get logger based on module name)
        threshold_ms: Only log if execution time exceeds threshold (milliseconds)
        log_level: Log level for performance messages

    Returns:
        Decorated function with performance logging
    """

    def decorator(func: F) -> F:
        log = logger or get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.time()
            result = func(*args, **kwargs)
            elapsed_ms = (time.time() - start_time) * 1000

            if elapsed_ms >= threshold_ms:
                log.log(
                    log_level,
                    f"Performance: {func.__qualname__} took {elapsed_ms:.2f}ms",
                )

            return result

        return cast(F, wrapper)

    return decorator
