"""Daily MLP model: feature encoder plus a pluggable task head."""

import json
from pathlib import Path
from typing import Any, Optional, Union

import torch

from daily_linear.config.models import ModelConfig, TaskKind
from daily_linear.config.settings import get_model_settings
from daily_linear.errors import ConfigurationFileError, ErrorCodes
from daily_linear.logging import get_logger
from daily_linear.neural.backend import Backend, TorchAutodiffBackend
from daily_linear.neural.heads import TaskHead, build_head
from daily_linear.neural.models.mlp import FeatureEncoder
from daily_linear.neural.parameters import ParameterStore
from daily_linear.neural.types import Batch, InferBatch, Mode, StepOutput
from daily_linear.version import __version__

logger = get_logger(__name__)


def default_backend() -> Backend:
    """Trainable torch backend on the device named by DAILY_LINEAR_MODEL_DEVICE."""
    return TorchAutodiffBackend(get_model_settings().device)


class DailyLinearModel:
    """
    Feed-forward model over a fixed-width daily feature vector.

    The model owns every parameter through its ParameterStore. It keeps no
    training-mode state: callers pass a Mode to forward() and evaluate().
    """

    def __init__(self, config: ModelConfig, backend: Optional[Backend] = None):
        """
        Build encoder and head from a validated configuration.

        Args:
            config: Model architecture
            backend: Numeric backend; defaults to a trainable torch backend
        """
        self.config = config
        self.backend = backend if backend is not None else default_backend()

        # A configured seed only fixes initial weights; global RNGs are untouched
        seed = get_model_settings().seed
        generator = torch.Generator().manual_seed(seed) if seed is not None else None

        self.store = ParameterStore(self.backend)
        self.encoder = FeatureEncoder(config, self.store, generator)
        self.head: TaskHead = build_head(self.task_kind)

        logger.info(
            f"Built {config.name}: {config.input_size} -> {config.hidden_sizes} -> "
            f"{config.output_size} ({config.task_kind.value}, dropout={config.dropout_rate}, "
            f"layer_norm={config.layer_norm}) on {self.backend}"
        )
        logger.debug(f"Model architecture: {self.encoder}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.config.name}, {self.encoder!r})"

    @property
    def task_kind(self) -> TaskKind:
        return self.config.task_kind

    # --- Parameters ---

    def parameters(self) -> list[torch.Tensor]:
        """All trainable tensors, in a stable order, for an optimizer."""
        return self.store.parameters()

    def named_parameters(self) -> list[tuple[str, torch.Tensor]]:
        return self.store.named_parameters()

    def num_parameters(self) -> int:
        return self.store.num_parameters()

    def state_dict(self):
        return self.store.state_dict()

    def load_state_dict(self, state) -> None:
        self.store.load_state_dict(state)

    def assign_gradients(self, gradients: dict[str, torch.Tensor]) -> None:
        """Copy a TrainOutput's gradients onto ``.grad`` for torch.optim."""
        self.store.assign_gradients(gradients)

    # --- Forward / evaluate / infer ---

    def forward(
        self, inputs: torch.Tensor, mode: Mode = Mode.EVALUATION
    ) -> torch.Tensor:
        """Raw output [B, output_size] for inputs [B, input_size]."""
        inputs = torch.as_tensor(inputs)
        self.encoder.validate_inputs(inputs)
        return self.encoder(self.backend.place(inputs, dtype=self.backend.dtype), mode)

    __call__ = forward

    def evaluate(self, batch: Batch, mode: Mode = Mode.EVALUATION) -> StepOutput:
        """
        Forward pass plus the head's loss against the batch targets.

        Args:
            batch: Inputs and targets; left unmodified
            mode: TRAINING for a train step, EVALUATION for a valid step

        Returns:
            StepOutput with loss, raw output and the targets used by the loss
        """
        output = self.forward(batch.inputs, mode)
        targets = self.head.prepare_targets(batch.targets, output.shape[0], self.backend)
        loss = self.head.loss(output, targets)
        return StepOutput(loss=loss, output=output, targets=targets)

    def infer(self, batch: Union[InferBatch, torch.Tensor]) -> Any:
        """
        Deterministic prediction without targets or loss.

        Returns:
            Classification: raw [B, 2] logits tensor.
            Regression: list of B floats.

        Raises:
            MaterializationError: If regression output cannot be read back
        """
        inputs = batch.inputs if isinstance(batch, InferBatch) else batch
        with torch.no_grad():
            output = self.forward(inputs, Mode.EVALUATION)

        logger.debug(
            f"{self.config.name} inference on {output.shape[0]} example(s), "
            f"output shape {tuple(output.shape)}"
        )
        return self.head.inference_result(output, self.backend)

    # --- Persistence ---

    def save_model(self, path: Union[str, Path]) -> None:
        """
        Write parameters, configuration and metadata to a directory.

        Args:
            path: Directory path to save model files
        """
        save_dir = Path(path)
        save_dir.mkdir(parents=True, exist_ok=True)

        torch.save(self.state_dict(), save_dir / "model.pt")

        with open(save_dir / "config.json", "w") as f:
            json.dump(self.config.model_dump(mode="json"), f, indent=2)

        metadata = {
            "model_type": self.__class__.__name__,
            "task_kind": self.task_kind.value,
            "num_parameters": self.num_parameters(),
            "version": __version__,
        }
        with open(save_dir / "metadata.json", "w") as f:
            json.dump(metadata, f, indent=2)

        logger.info(f"Saved {self.config.name} to {save_dir}")

    @classmethod
    def load_model(
        cls, path: Union[str, Path], backend: Optional[Backend] = None
    ) -> "DailyLinearModel":
        """
        Rebuild a model written by save_model().

        Args:
            path: Directory containing model.pt and config.json
            backend: Backend for the restored model

        Raises:
            ConfigurationFileError: If a required file is missing
        """
        load_dir = Path(path)
        for file_name in ("config.json", "model.pt"):
            if not (load_dir / file_name).is_file():
                raise ConfigurationFileError(
                    message=f"Missing {file_name} in {load_dir}",
                    error_code=ErrorCodes.MODEL_LOAD_FAILED,
                    context={"file": str(load_dir / file_name)},
                )

        with open(load_dir / "config.json") as f:
            config = ModelConfig.from_dict(json.load(f))

        model = cls(config, backend)
        state = torch.load(
            load_dir / "model.pt", map_location=model.backend.device, weights_only=True
        )
        model.load_state_dict(state)
        logger.info(f"Loaded {config.name} from {load_dir}")
        return model
