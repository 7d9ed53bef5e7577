"""
daily-linear Configuration Package.

This package provides the validated model configuration, production presets,
the YAML loader and environment-backed runtime settings.
"""

from .loader import ModelConfigLoader
from .models import ModelConfig, TaskKind
from .presets import (
    CLASSIFIER_PRESET,
    REGRESSION_PRESET,
    available_presets,
    classifier_config,
    get_preset,
    regression_config,
)
from .settings import (
    LoggingSettings,
    ModelSettings,
    clear_settings_cache,
    get_logging_settings,
    get_model_settings,
)

__all__ = [
    "ModelConfig",
    "TaskKind",
    "ModelConfigLoader",
    "CLASSIFIER_PRESET",
    "REGRESSION_PRESET",
    "available_presets",
    "get_preset",
    "classifier_config",
    "regression_config",
    "LoggingSettings",
    "ModelSettings",
    "get_logging_settings",
    "get_model_settings",
    "clear_settings_cache",
]
