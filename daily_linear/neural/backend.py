"""
Numeric backends the daily models are written against.

A Backend provides tensor creation, device placement and host
materialization. An AutodiffBackend additionally computes gradients, and only
models built over one can be driven by a TrainStep. Parameters created by a
plain Backend are frozen (``requires_grad=False``).
"""

import random
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Union

import numpy as np
import torch

from daily_linear.errors import ErrorCodes, MaterializationError
from daily_linear.logging import get_logger

logger = get_logger(__name__)


class Backend(ABC):
    """Tensor algebra and device placement capability."""

    trainable = False

    @property
    @abstractmethod
    def device(self) -> torch.device:
        """Device holding every tensor this backend creates."""

    @property
    @abstractmethod
    def dtype(self) -> torch.dtype:
        """Floating point dtype for parameters and inputs."""

    @abstractmethod
    def parameter(self, tensor: torch.Tensor) -> torch.Tensor:
        """Turn an initial value into a model parameter on this backend."""

    @abstractmethod
    def place(
        self, tensor: torch.Tensor, dtype: Optional[torch.dtype] = None
    ) -> torch.Tensor:
        """Move a tensor onto this backend's device (and dtype)."""

    @abstractmethod
    def to_host(self, tensor: torch.Tensor) -> list[float]:
        """
        Materialize a tensor as a flat list of Python floats.

        Raises:
            MaterializationError: If the data buffer cannot be read back
        """


class AutodiffBackend(Backend):
    """Backend that can also run reverse-mode differentiation."""

    trainable = True

    @abstractmethod
    def gradients(
        self, loss: torch.Tensor, named_parameters: Iterable[tuple[str, torch.Tensor]]
    ) -> dict[str, torch.Tensor]:
        """Gradients of a scalar loss with respect to each named parameter."""


class TorchBackend(Backend):
    """PyTorch backend with frozen parameters (forward only)."""

    def __init__(
        self,
        device: Union[str, torch.device, None] = None,
        dtype: torch.dtype = torch.float32,
    ):
        self._device = torch.device(device) if device is not None else torch.device("cpu")
        self._dtype = dtype

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(device={self._device}, dtype={self._dtype})"

    @property
    def device(self) -> torch.device:
        return self._device

    @property
    def dtype(self) -> torch.dtype:
        return self._dtype

    def parameter(self, tensor: torch.Tensor) -> torch.Tensor:
        value = tensor.detach().to(device=self._device, dtype=self._dtype).clone()
        return value.requires_grad_(self.trainable)

    def place(
        self, tensor: torch.Tensor, dtype: Optional[torch.dtype] = None
    ) -> torch.Tensor:
        if not isinstance(tensor, torch.Tensor):
            tensor = torch.as_tensor(tensor)
        return tensor.to(device=self._device, dtype=dtype or tensor.dtype)

    def to_host(self, tensor: torch.Tensor) -> list[float]:
        try:
            array = tensor.detach().cpu().numpy()
            return array.reshape(-1).astype(np.float64).tolist()
        except (RuntimeError, TypeError, ValueError) as e:
            raise MaterializationError(
                message=f"Failed to read tensor data back from {self._device}: {e}",
                error_code=ErrorCodes.MODEL_MATERIALIZATION_FAILED,
                details={
                    "device": str(self._device),
                    "shape": list(tensor.shape),
                    "dtype": str(tensor.dtype),
                },
            ) from e


class TorchAutodiffBackend(TorchBackend, AutodiffBackend):
    """PyTorch backend with trainable parameters."""

    def gradients(
        self, loss: torch.Tensor, named_parameters: Iterable[tuple[str, torch.Tensor]]
    ) -> dict[str, torch.Tensor]:
        names, params = zip(*named_parameters)
        grads = torch.autograd.grad(loss, params, allow_unused=True)
        # Parameters outside the loss graph have a zero gradient
        return {
            name: grad if grad is not None else torch.zeros_like(param)
            for name, param, grad in zip(names, params, grads)
        }


def seed_everything(seed: int) -> None:
    """Seed Python, NumPy and torch RNGs so dropout sampling is reproducible."""
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    logger.debug(f"Seeded RNGs with {seed}")
