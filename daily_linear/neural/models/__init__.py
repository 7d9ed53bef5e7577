"""Neural network model implementations."""

from .base_model import DailyLinearModel, default_backend
from .factory import build_classifier, build_model, build_regressor
from .mlp import FeatureEncoder

__all__ = [
    "DailyLinearModel",
    "FeatureEncoder",
    "build_model",
    "build_classifier",
    "build_regressor",
    "default_backend",
]
