"""
Global test fixtures for daily-linear.

This module contains fixtures shared across the test modules.
"""

import pytest
import torch

from daily_linear.config import ModelConfig, TaskKind, clear_settings_cache
from daily_linear.neural import (
    DailyLinearModel,
    TorchAutodiffBackend,
    TorchBackend,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so env var changes in one test never leak."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def seeded():
    """Seed torch so parameter init and dropout masks are reproducible."""
    torch.manual_seed(1234)


@pytest.fixture
def classifier_config():
    """Small classifier: 23 features, one hidden layer of 4 units."""
    return ModelConfig(
        name="test_classifier",
        input_size=23,
        hidden_sizes=[4],
        output_size=2,
        dropout_rate=0.0,
        task_kind=TaskKind.CLASSIFICATION,
    )


@pytest.fixture
def regression_config():
    """Small regressor: 47 features, two hidden layers of 4 units, layer norm."""
    return ModelConfig(
        name="test_regressor",
        input_size=47,
        hidden_sizes=[4, 4],
        output_size=1,
        dropout_rate=0.0,
        task_kind=TaskKind.REGRESSION,
    )


@pytest.fixture
def trainable_backend():
    return TorchAutodiffBackend("cpu")


@pytest.fixture
def frozen_backend():
    return TorchBackend("cpu")


@pytest.fixture
def classifier(classifier_config, trainable_backend, seeded):
    return DailyLinearModel(classifier_config, trainable_backend)


@pytest.fixture
def regressor(regression_config, trainable_backend, seeded):
    return DailyLinearModel(regression_config, trainable_backend)
