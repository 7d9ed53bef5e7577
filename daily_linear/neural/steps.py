"""
Step adapters handed to an external training-loop driver.

TrainStep evaluates with dropout active and returns gradients for every
parameter; it never applies updates. ValidStep and InferStep run
deterministically without building a graph.
"""

import logging

import torch

from daily_linear.errors import ConfigurationError, ErrorCodes
from daily_linear.logging import get_logger, log_performance
from daily_linear.neural.backend import AutodiffBackend
from daily_linear.neural.models.base_model import DailyLinearModel
from daily_linear.neural.types import Batch, InferBatch, Mode, StepOutput, TrainOutput

logger = get_logger(__name__)


class TrainStep:
    """Forward, loss and backward for one training batch."""

    def __init__(self, model: DailyLinearModel):
        if not isinstance(model.backend, AutodiffBackend):
            raise ConfigurationError(
                message=f"TrainStep needs an autodiff backend, model uses {model.backend!r}",
                error_code=ErrorCodes.CONFIG_BACKEND_NOT_TRAINABLE,
                context={"model": model.config.name},
                suggestion="Build the model with TorchAutodiffBackend",
            )
        self.model = model

    @log_performance(logger=logger)
    def step(self, batch: Batch) -> TrainOutput:
        item = self.model.evaluate(batch, Mode.TRAINING)
        gradients = self.model.backend.gradients(
            item.loss, self.model.named_parameters()
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Train step loss={item.loss.item():.6f} batch={len(batch)}")

        item = StepOutput(
            loss=item.loss.detach(), output=item.output.detach(), targets=item.targets
        )
        return TrainOutput(item=item, gradients=gradients)

    __call__ = step


class ValidStep:
    """Deterministic forward and loss for one held-out batch."""

    def __init__(self, model: DailyLinearModel):
        self.model = model

    def step(self, batch: Batch) -> StepOutput:
        with torch.no_grad():
            return self.model.evaluate(batch, Mode.EVALUATION)

    __call__ = step


class InferStep:
    """Prediction for one batch without targets."""

    def __init__(self, model: DailyLinearModel):
        self.model = model

    def step(self, batch: InferBatch):
        return self.model.infer(batch)

    __call__ = step
