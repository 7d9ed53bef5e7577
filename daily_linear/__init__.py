"""
daily-linear - Feed-forward classifier and regressor over daily feature vectors.
"""

from dotenv import load_dotenv

from daily_linear.config.settings import get_logging_settings
from daily_linear.logging import (
    configure_logging,
    get_logger,
    is_debug_mode,
    log_entry_exit,
    log_performance,
    set_debug_mode,
)
from daily_linear.version import __version__

# Load environment variables from .env file
load_dotenv()

_logging_settings = get_logging_settings()
configure_logging(
    log_dir=_logging_settings.log_dir,
    console_level=_logging_settings.level,
    config={"debug_mode": _logging_settings.debug},
)

from daily_linear.config import ModelConfig, TaskKind  # noqa: E402
from daily_linear.neural import (  # noqa: E402
    Batch,
    DailyLinearModel,
    InferBatch,
    InferStep,
    Mode,
    StepOutput,
    TorchAutodiffBackend,
    TorchBackend,
    TrainOutput,
    TrainStep,
    ValidStep,
    build_classifier,
    build_model,
    build_regressor,
)

__all__ = [
    "__version__",
    "configure_logging",
    "get_logger",
    "is_debug_mode",
    "set_debug_mode",
    "log_entry_exit",
    "log_performance",
    "ModelConfig",
    "TaskKind",
    "DailyLinearModel",
    "build_model",
    "build_classifier",
    "build_regressor",
    "TorchBackend",
    "TorchAutodiffBackend",
    "TrainStep",
    "ValidStep",
    "InferStep",
    "Mode",
    "Batch",
    "InferBatch",
    "StepOutput",
    "TrainOutput",
]
