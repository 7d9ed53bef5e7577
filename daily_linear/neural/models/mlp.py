"""Multi-Layer Perceptron body shared by the daily classifier and regressor."""

from typing import Optional

import torch
import torch.nn.functional as F

from daily_linear.config.models import ModelConfig
from daily_linear.errors import ErrorCodes, ShapeMismatchError
from daily_linear.neural.layers import LayerNormLayer, LinearLayer
from daily_linear.neural.parameters import ParameterStore
from daily_linear.neural.types import Mode


class FeatureEncoder:
    """
    Stack of fully-connected layers ending in a raw linear projection.

    Each hidden layer applies linear -> (layer norm, first layer only when
    configured) -> ReLU -> dropout. The output projection applies none of
    those, so it emits logits for classification and an unbounded scalar for
    regression.
    """

    def __init__(
        self,
        config: ModelConfig,
        store: ParameterStore,
        generator: Optional[torch.Generator] = None,
    ):
        """
        Build layers for every (in, out) width pair of the config.

        Args:
            config: Validated model configuration
            store: Parameter container receiving every layer's tensors
            generator: RNG for weight initialization; global torch RNG when None
        """
        self.input_size = config.input_size
        self.output_size = config.output_size
        self.dropout_rate = config.dropout_rate

        widths = config.layer_widths()
        self.hidden_layers = [
            LinearLayer(store, f"layers.{i}", in_features, out_features, generator)
            for i, (in_features, out_features) in enumerate(widths[:-1])
        ]
        self.output_layer = LinearLayer(store, "output_layer", *widths[-1], generator=generator)

        self.layer_norm = (
            LayerNormLayer(store, "layer_norm", config.hidden_sizes[0])
            if config.layer_norm
            else None
        )

    def __repr__(self) -> str:
        widths = [self.input_size] + [layer.out_features for layer in self.hidden_layers]
        return (
            f"FeatureEncoder({' -> '.join(map(str, widths))} -> {self.output_size}, "
            f"dropout={self.dropout_rate}, layer_norm={self.layer_norm is not None})"
        )

    def validate_inputs(self, inputs: torch.Tensor) -> None:
        """Raise ShapeMismatchError unless inputs is [B, input_size]."""
        if inputs.dim() != 2:
            raise ShapeMismatchError(
                message=f"Inputs must be 2-D [batch_size, {self.input_size}], got shape {tuple(inputs.shape)}",
                expected=["batch_size", self.input_size],
                actual=list(inputs.shape),
                error_code=ErrorCodes.SHAPE_INPUT_RANK,
            )
        if inputs.shape[1] != self.input_size:
            raise ShapeMismatchError(
                message=f"Inputs have {inputs.shape[1]} features, model expects {self.input_size}",
                expected=["batch_size", self.input_size],
                actual=list(inputs.shape),
                error_code=ErrorCodes.SHAPE_INPUT_WIDTH,
            )

    def forward(self, inputs: torch.Tensor, mode: Mode) -> torch.Tensor:
        """
        Map [B, input_size] inputs to [B, output_size] raw outputs.

        Args:
            inputs: Feature batch, already placed on the model's device
            mode: TRAINING enables inverted dropout; EVALUATION disables it

        Returns:
            Raw head output
        """
        self.validate_inputs(inputs)
        training = Mode(mode) is Mode.TRAINING

        # Entry point: never backpropagate into whatever produced the batch
        x = inputs.detach()
        for i, layer in enumerate(self.hidden_layers):
            x = layer(x)
            if i == 0 and self.layer_norm is not None:
                x = self.layer_norm(x)
            x = F.relu(x)
            x = F.dropout(x, p=self.dropout_rate, training=training)

        return self.output_layer(x)

    __call__ = forward
