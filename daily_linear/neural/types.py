"""Batch, mode and step result types exchanged with the training-loop driver."""

from dataclasses import dataclass, field
from enum import Enum

import torch


class Mode(str, Enum):
    """Forward-pass mode; dropout is active only in TRAINING."""

    TRAINING = "training"
    EVALUATION = "evaluation"


@dataclass(frozen=True, eq=False)
class Batch:
    """Train/valid batch: inputs [B, input_size] and targets [B]."""

    inputs: torch.Tensor
    targets: torch.Tensor

    def __len__(self) -> int:
        return int(self.inputs.shape[0]) if self.inputs.dim() > 0 else 0


@dataclass(frozen=True, eq=False)
class InferBatch:
    """Inference batch: inputs [B, input_size] only."""

    inputs: torch.Tensor

    def __len__(self) -> int:
        return int(self.inputs.shape[0]) if self.inputs.dim() > 0 else 0


@dataclass
class StepOutput:
    """
    Result of a train or valid step.

    Attributes:
        loss: Scalar loss tensor
        output: Raw head output [B, output_size] (logits or scalar)
        targets: Targets as used by the loss ([B] class ids or [B, 1] values)
    """

    loss: torch.Tensor
    output: torch.Tensor
    targets: torch.Tensor


@dataclass
class TrainOutput:
    """StepOutput plus the gradient of the loss for every named parameter."""

    item: StepOutput
    gradients: dict[str, torch.Tensor] = field(default_factory=dict)
