"""Neural network models over daily feature vectors."""

from .backend import (
    AutodiffBackend,
    Backend,
    TorchAutodiffBackend,
    TorchBackend,
    seed_everything,
)
from .heads import ClassificationHead, RegressionHead, TaskHead, build_head
from .models import (
    DailyLinearModel,
    FeatureEncoder,
    build_classifier,
    build_model,
    build_regressor,
)
from .parameters import ParameterStore
from .steps import InferStep, TrainStep, ValidStep
from .types import Batch, InferBatch, Mode, StepOutput, TrainOutput

__all__ = [
    "Backend",
    "AutodiffBackend",
    "TorchBackend",
    "TorchAutodiffBackend",
    "seed_everything",
    "ParameterStore",
    "TaskHead",
    "ClassificationHead",
    "RegressionHead",
    "build_head",
    "FeatureEncoder",
    "DailyLinearModel",
    "build_model",
    "build_classifier",
    "build_regressor",
    "TrainStep",
    "ValidStep",
    "InferStep",
    "Mode",
    "Batch",
    "InferBatch",
    "StepOutput",
    "TrainOutput",
]
