"""Parameterized layers backed by a ParameterStore."""

import math
from typing import Optional

import torch
import torch.nn.functional as F

from daily_linear.errors import ErrorCodes, ShapeMismatchError
from daily_linear.neural.parameters import ParameterStore


class LinearLayer:
    """Fully-connected layer computing ``x @ weight + bias``.

    ``weight`` has shape [in_features, out_features] and ``bias`` [out_features].
    Both are drawn from U(-1/sqrt(in), 1/sqrt(in)), using ``generator`` when
    one is given and the global torch RNG otherwise.
    """

    def __init__(
        self,
        store: ParameterStore,
        name: str,
        in_features: int,
        out_features: int,
        generator: Optional[torch.Generator] = None,
    ):
        self.name = name
        self.in_features = in_features
        self.out_features = out_features

        bound = 1.0 / math.sqrt(in_features)
        self.weight = store.create(
            f"{name}.weight",
            torch.empty(in_features, out_features).uniform_(
                -bound, bound, generator=generator
            ),
        )
        self.bias = store.create(
            f"{name}.bias", torch.empty(out_features).uniform_(-bound, bound, generator=generator)
        )

    def __repr__(self) -> str:
        return f"LinearLayer({self.name}: {self.in_features} -> {self.out_features})"

    def __call__(self, x: torch.Tensor) -> torch.Tensor:
        if x.shape[-1] != self.in_features:
            raise ShapeMismatchError(
                message=(
                    f"Layer '{self.name}' expects {self.in_features} features, "
                    f"got {x.shape[-1]}"
                ),
                expected=self.in_features,
                actual=int(x.shape[-1]),
                error_code=ErrorCodes.SHAPE_INPUT_WIDTH,
            )
        return x @ self.weight + self.bias


class LayerNormLayer:
    """Per-example feature normalization with learnable scale and shift."""

    def __init__(self, store: ParameterStore, name: str, width: int, eps: float = 1e-5):
        self.name = name
        self.width = width
        self.eps = eps
        self.weight = store.create(f"{name}.weight", torch.ones(width))
        self.bias = store.create(f"{name}.bias", torch.zeros(width))

    def __repr__(self) -> str:
        return f"LayerNormLayer({self.name}: {self.width})"

    def __call__(self, x: torch.Tensor) -> torch.Tensor:
        return F.layer_norm(x, (self.width,), self.weight, self.bias, self.eps)
