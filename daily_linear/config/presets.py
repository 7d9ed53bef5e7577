"""Production architectures for the daily models."""

from daily_linear.config.models import ModelConfig, TaskKind
from daily_linear.errors import ErrorCodes, InvalidConfigurationError

CLASSIFIER_PRESET = "daily_linear_classifier"
REGRESSION_PRESET = "daily_linear_regression"

_PRESETS = {
    CLASSIFIER_PRESET: {
        "name": CLASSIFIER_PRESET,
        "input_size": 23,
        "hidden_sizes": [64, 128, 128, 256],
        "output_size": 2,
        "dropout_rate": 0.5,
        "task_kind": TaskKind.CLASSIFICATION,
        "layer_norm": False,
    },
    REGRESSION_PRESET: {
        "name": REGRESSION_PRESET,
        "input_size": 47,
        "hidden_sizes": [64, 64, 128, 128],
        "output_size": 1,
        "dropout_rate": 0.33,
        "task_kind": TaskKind.REGRESSION,
        "layer_norm": True,
    },
}


def available_presets() -> list[str]:
    """Names accepted by get_preset()."""
    return sorted(_PRESETS)


def get_preset(name: str) -> ModelConfig:
    """
    Return a fresh config for a named production architecture.

    Raises:
        InvalidConfigurationError: If the preset name is unknown
    """
    try:
        data = _PRESETS[name]
    except KeyError:
        raise InvalidConfigurationError(
            message=f"Unknown model preset '{name}'",
            error_code=ErrorCodes.CONFIG_UNKNOWN_PRESET,
            details={"provided": name, "valid_options": available_presets()},
        ) from None
    return ModelConfig(**data)


def classifier_config() -> ModelConfig:
    return get_preset(CLASSIFIER_PRESET)


def regression_config() -> ModelConfig:
    return get_preset(REGRESSION_PRESET)
