"""
Configuration loader for YAML model definitions.

This module loads model architectures from YAML files and validates them
against ModelConfig.
"""

from pathlib import Path
from typing import Optional, Union

import yaml  # type: ignore[import-untyped]

from daily_linear.config.models import ModelConfig
from daily_linear.errors import (
    ConfigurationFileError,
    ErrorCodes,
    InvalidConfigurationError,
)
from daily_linear.logging import get_logger, log_entry_exit

logger = get_logger(__name__)

# Preset YAML definitions ship inside the package
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent / "definitions"


class ModelConfigLoader:
    """Loads and validates model configurations from YAML files."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the loader.

        Args:
            config_dir: Directory searched by load_named(); defaults to the shipped preset definitions
        """
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR

    @log_entry_exit(logger=logger)
    def load(self, config_path: Union[str, Path]) -> ModelConfig:
        """
        Load a YAML file and validate it as a ModelConfig.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            A validated ModelConfig

        Raises:
            ConfigurationFileError: If the file cannot be found or read
            InvalidConfigurationError: If the YAML is malformed or fails validation
        """
        config_path = Path(config_path)
        if not config_path.is_absolute():
            config_path = Path.cwd() / config_path

        if not config_path.is_file():
            raise ConfigurationFileError(
                message=f"Configuration file not found: {config_path}",
                error_code=ErrorCodes.CONFIG_FILE_NOT_FOUND,
                context={"file": str(config_path)},
                details={"path": str(config_path)},
            )

        try:
            with open(config_path) as file:
                config_dict = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise InvalidConfigurationError(
                message=f"Invalid YAML format in {config_path}: {e}",
                error_code=ErrorCodes.CONFIG_INVALID_YAML,
                context={"file": str(config_path)},
                details={"yaml_error": str(e)},
            ) from e
        except OSError as e:
            raise ConfigurationFileError(
                message=f"Cannot read configuration file {config_path}: {e}",
                error_code=ErrorCodes.CONFIG_FILE_NOT_FOUND,
                context={"file": str(config_path)},
            ) from e

        if config_dict is None:
            logger.warning(f"Empty configuration file: {config_path}")
            config_dict = {}

        if not isinstance(config_dict, dict):
            raise InvalidConfigurationError(
                message=f"Configuration in {config_path} must be a mapping",
                error_code=ErrorCodes.CONFIG_INVALID_YAML,
                context={"file": str(config_path)},
                details={"type": type(config_dict).__name__},
            )

        # Allow the architecture to sit under a top-level "model" key
        config_dict = config_dict.get("model", config_dict)

        try:
            config = ModelConfig.from_dict(config_dict)
        except InvalidConfigurationError as e:
            e.context.setdefault("file", str(config_path))
            raise

        logger.info(f"Loaded model configuration '{config.name}' from {config_path}")
        return config

    def load_named(self, name: str) -> ModelConfig:
        """Load ``<config_dir>/<name>.yaml``."""
        return self.load(self.config_dir / f"{name}.yaml")
