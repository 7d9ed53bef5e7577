"""
Task heads: output width, target validation, loss and inference result.

The encoder's final projection has ``head.output_size`` units and always emits
raw values. Heads never reshape mismatched targets to make them fit; the only
reshaping is the documented [B] -> [B, 1] lift of regression targets.
"""

from abc import ABC, abstractmethod
from typing import Any

import torch
import torch.nn.functional as F

from daily_linear.config.models import TaskKind
from daily_linear.errors import ErrorCodes, ShapeMismatchError, ValidationError
from daily_linear.neural.backend import Backend


class TaskHead(ABC):
    """Strategy object supplying the task-specific half of a model."""

    kind: TaskKind

    @property
    def output_size(self) -> int:
        return self.kind.output_size

    def _check_target_shape(self, targets: torch.Tensor, batch_size: int) -> None:
        if targets.dim() != 1:
            raise ShapeMismatchError(
                message=f"Targets must be 1-D [batch_size], got shape {tuple(targets.shape)}",
                expected=[batch_size],
                actual=list(targets.shape),
                error_code=ErrorCodes.SHAPE_TARGET_RANK,
            )
        if targets.shape[0] != batch_size:
            raise ShapeMismatchError(
                message=f"Got {targets.shape[0]} targets for a batch of {batch_size} inputs",
                expected=[batch_size],
                actual=list(targets.shape),
                error_code=ErrorCodes.SHAPE_TARGET_LENGTH,
            )

    @abstractmethod
    def prepare_targets(
        self, targets: torch.Tensor, batch_size: int, backend: Backend
    ) -> torch.Tensor:
        """Validate targets and convert them to the form the loss consumes."""

    @abstractmethod
    def loss(self, output: torch.Tensor, targets: torch.Tensor) -> torch.Tensor:
        """Mean-reduced scalar loss."""

    @abstractmethod
    def inference_result(self, output: torch.Tensor, backend: Backend) -> Any:
        """Convert raw output to what infer() returns."""


class ClassificationHead(TaskHead):
    """Two logits per example scored with cross-entropy."""

    kind = TaskKind.CLASSIFICATION

    def prepare_targets(
        self, targets: torch.Tensor, batch_size: int, backend: Backend
    ) -> torch.Tensor:
        targets = torch.as_tensor(targets)
        self._check_target_shape(targets, batch_size)

        if targets.is_floating_point() or targets.is_complex() or targets.dtype == torch.bool:
            raise ValidationError(
                message=f"Classification targets must be integer class ids, got {targets.dtype}",
                error_code=ErrorCodes.SHAPE_TARGET_VALUES,
                details={"dtype": str(targets.dtype)},
            )
        if targets.numel() and ((targets < 0) | (targets >= self.output_size)).any():
            raise ValidationError(
                message=f"Classification targets must be in [0, {self.output_size})",
                error_code=ErrorCodes.SHAPE_TARGET_VALUES,
                details={
                    "min": int(targets.min()),
                    "max": int(targets.max()),
                },
            )
        return backend.place(targets, dtype=torch.long)

    def loss(self, output: torch.Tensor, targets: torch.Tensor) -> torch.Tensor:
        # cross_entropy applies log-softmax to the logits internally
        return F.cross_entropy(output, targets, reduction="mean")

    def inference_result(self, output: torch.Tensor, backend: Backend) -> torch.Tensor:
        return output


class RegressionHead(TaskHead):
    """One unbounded scalar per example scored with mean squared error."""

    kind = TaskKind.REGRESSION

    def prepare_targets(
        self, targets: torch.Tensor, batch_size: int, backend: Backend
    ) -> torch.Tensor:
        targets = torch.as_tensor(targets)
        self._check_target_shape(targets, batch_size)
        return backend.place(targets, dtype=backend.dtype).unsqueeze(1)

    def loss(self, output: torch.Tensor, targets: torch.Tensor) -> torch.Tensor:
        return F.mse_loss(output, targets, reduction="mean")

    def inference_result(self, output: torch.Tensor, backend: Backend) -> list[float]:
        return backend.to_host(output)


_HEADS = {
    TaskKind.CLASSIFICATION: ClassificationHead,
    TaskKind.REGRESSION: RegressionHead,
}


def build_head(kind: TaskKind) -> TaskHead:
    return _HEADS[TaskKind(kind)]()
