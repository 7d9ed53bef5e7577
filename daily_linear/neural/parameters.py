"""Explicit container for the trainable tensors owned by a model."""

from collections import OrderedDict
from typing import Iterator, Mapping

import torch

from daily_linear.errors import ConfigurationError, ErrorCodes, ShapeMismatchError
from daily_linear.neural.backend import Backend


class ParameterStore:
    """
    Ordered registry of named parameter tensors.

    Every parameter is created through the owning model's backend, so it is
    trainable exactly when the backend is an AutodiffBackend. Registration
    order is the enumeration order handed to optimizers.
    """

    def __init__(self, backend: Backend):
        self.backend = backend
        self._params: "OrderedDict[str, torch.Tensor]" = OrderedDict()

    def create(self, name: str, initial: torch.Tensor) -> torch.Tensor:
        if name in self._params:
            raise ConfigurationError(
                message=f"Parameter '{name}' is already registered",
                error_code=ErrorCodes.CONFIG_VALIDATION_FAILED,
                details={"name": name},
            )
        param = self.backend.parameter(initial)
        self._params[name] = param
        return param

    def __getitem__(self, name: str) -> torch.Tensor:
        return self._params[name]

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def named_parameters(self) -> list[tuple[str, torch.Tensor]]:
        return list(self._params.items())

    def parameters(self) -> list[torch.Tensor]:
        return list(self._params.values())

    def num_parameters(self) -> int:
        return sum(p.numel() for p in self._params.values())

    def state_dict(self) -> "OrderedDict[str, torch.Tensor]":
        """Detached copies of every parameter, keyed by name."""
        return OrderedDict(
            (name, param.detach().clone()) for name, param in self._params.items()
        )

    def load_state_dict(self, state: Mapping[str, torch.Tensor]) -> None:
        """
        Copy values into the existing parameters in place.

        Raises:
            ConfigurationError: If keys are missing or unexpected
            ShapeMismatchError: If a tensor shape differs from the parameter's
        """
        missing = [name for name in self._params if name not in state]
        unexpected = [name for name in state if name not in self._params]
        if missing or unexpected:
            raise ConfigurationError(
                message="State does not match the model parameters",
                error_code=ErrorCodes.MODEL_STATE_MISMATCH,
                details={"missing": missing, "unexpected": unexpected},
            )

        for name, param in self._params.items():
            value = torch.as_tensor(state[name])
            if tuple(value.shape) != tuple(param.shape):
                raise ShapeMismatchError(
                    message=f"Parameter '{name}' has shape {tuple(param.shape)}, got {tuple(value.shape)}",
                    expected=list(param.shape),
                    actual=list(value.shape),
                    error_code=ErrorCodes.SHAPE_PARAMETER,
                    details={"name": name},
                )

        with torch.no_grad():
            for name, param in self._params.items():
                param.copy_(self.backend.place(state[name], dtype=param.dtype))

    def assign_gradients(self, gradients: Mapping[str, torch.Tensor]) -> None:
        """Store gradients on ``.grad`` so torch.optim optimizers can step."""
        for name, grad in gradients.items():
            self._params[name].grad = grad
