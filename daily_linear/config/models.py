"""
Pydantic models for model configuration validation.

This module defines the structure and validation rules for the daily MLP
models. Every validation failure surfaces as a ConfigurationError so callers
never need to catch pydantic exceptions.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from daily_linear.errors import ErrorCodes, InvalidConfigurationError


class TaskKind(str, Enum):
    """Task head variants."""

    CLASSIFICATION = "classification"
    REGRESSION = "regression"

    @property
    def output_size(self) -> int:
        """Width of the final projection for this task."""
        return 2 if self is TaskKind.CLASSIFICATION else 1


class ModelConfig(BaseModel):
    """Architecture of a daily MLP model."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field("daily_linear", description="Model name used in logs")
    input_size: int = Field(..., gt=0, description="Number of input features")
    hidden_sizes: List[int] = Field(
        ..., min_length=1, description="Hidden layer widths in order"
    )
    output_size: Optional[int] = Field(
        None, description="Output width; derived from task_kind when omitted"
    )
    dropout_rate: float = Field(0.0, description="Dropout probability in [0, 1)")
    task_kind: TaskKind = Field(..., description="classification or regression")
    layer_norm: Optional[bool] = Field(
        None,
        description="Normalize after the first hidden layer (regression only)",
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise InvalidConfigurationError(
                message=f"Model configuration validation failed: {e.error_count()} error(s)",
                error_code=ErrorCodes.CONFIG_VALIDATION_FAILED,
                context={"model": data.get("name", "daily_linear")},
                details={"validation_errors": e.errors(include_url=False)},
                suggestion="Check field types and required fields of the model configuration",
            ) from e

    @field_validator("hidden_sizes")
    @classmethod
    def validate_hidden_sizes(cls, v: List[int]) -> List[int]:
        """Every hidden layer needs at least one unit."""
        bad = [width for width in v if width <= 0]
        if bad:
            raise InvalidConfigurationError(
                message=f"Hidden layer widths must be positive, got {v}",
                error_code=ErrorCodes.CONFIG_INVALID_WIDTHS,
                context={"field": "hidden_sizes"},
                details={"provided": list(v), "invalid": bad},
                suggestion="Use positive integer widths, e.g. [64, 128, 256]",
            )
        return v

    @field_validator("dropout_rate")
    @classmethod
    def validate_dropout_rate(cls, v: float) -> float:
        """Dropout must lie in [0, 1)."""
        if not 0.0 <= v < 1.0:
            raise InvalidConfigurationError(
                message=f"Dropout rate must be in [0, 1), got {v}",
                error_code=ErrorCodes.CONFIG_INVALID_DROPOUT,
                context={"field": "dropout_rate"},
                details={"provided": v, "min": 0.0, "max_exclusive": 1.0},
                suggestion="Use a dropout rate such as 0.33 or 0.5",
            )
        return v

    @model_validator(mode="after")
    def validate_head(self) -> "ModelConfig":
        """Fill derived fields and check them against the task kind."""
        expected = self.task_kind.output_size
        if self.output_size is None:
            self.output_size = expected
        elif self.output_size != expected:
            raise InvalidConfigurationError(
                message=(
                    f"{self.task_kind.value} head has {expected} output unit(s), "
                    f"got output_size={self.output_size}"
                ),
                error_code=ErrorCodes.CONFIG_OUTPUT_SIZE_MISMATCH,
                context={"field": "output_size", "model": self.name},
                details={"expected": expected, "provided": self.output_size},
                suggestion=f"Set output_size to {expected} or omit it",
            )

        if self.layer_norm is None:
            self.layer_norm = self.task_kind is TaskKind.REGRESSION
        elif self.layer_norm and self.task_kind is TaskKind.CLASSIFICATION:
            raise InvalidConfigurationError(
                message="Layer normalization is only supported by the regression head",
                error_code=ErrorCodes.CONFIG_VALIDATION_FAILED,
                context={"field": "layer_norm", "model": self.name},
                details={"task_kind": self.task_kind.value},
                suggestion="Remove layer_norm from classification configs",
            )
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModelConfig":
        """Build a config from a plain mapping (e.g. parsed YAML)."""
        return cls(**data)

    def layer_widths(self) -> List[tuple[int, int]]:
        """(in, out) widths of every linear layer, output projection last."""
        widths = [self.input_size, *self.hidden_sizes, self.output_size]
        return list(zip(widths[:-1], widths[1:]))
