"""Constructors for the daily models."""

from typing import Any, Optional, Union

from daily_linear.config.models import ModelConfig
from daily_linear.config.presets import classifier_config, regression_config
from daily_linear.neural.backend import Backend
from daily_linear.neural.models.base_model import DailyLinearModel


def build_model(
    config: Union[ModelConfig, dict[str, Any]], backend: Optional[Backend] = None
) -> DailyLinearModel:
    """Build a model from a ModelConfig or a plain mapping."""
    if not isinstance(config, ModelConfig):
        config = ModelConfig.from_dict(config)
    return DailyLinearModel(config, backend)


def build_classifier(backend: Optional[Backend] = None) -> DailyLinearModel:
    """Binary classifier: 23 features -> [64, 128, 128, 256] -> 2 logits."""
    return DailyLinearModel(classifier_config(), backend)


def build_regressor(backend: Optional[Backend] = None) -> DailyLinearModel:
    """Scalar regressor: 47 features -> [64, 64, 128, 128] -> 1, layer norm after the first layer."""
    return DailyLinearModel(regression_config(), backend)
