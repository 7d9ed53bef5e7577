"""Tests for the train/valid/infer step adapters."""

import pytest
import torch

from daily_linear.errors import ConfigurationError, ErrorCodes
from daily_linear.neural import (
    Batch,
    DailyLinearModel,
    InferBatch,
    InferStep,
    StepOutput,
    TrainOutput,
    TrainStep,
    ValidStep,
)


class TestTrainStep:
    """Test TrainStep."""

    def test_requires_autodiff_backend(self, classifier_config, frozen_backend):
        model = DailyLinearModel(classifier_config, frozen_backend)
        with pytest.raises(ConfigurationError) as exc_info:
            TrainStep(model)
        assert exc_info.value.error_code == ErrorCodes.CONFIG_BACKEND_NOT_TRAINABLE

    def test_gradients_cover_every_parameter(self, classifier):
        batch = Batch(inputs=torch.randn(6, 23), targets=torch.tensor([0, 1, 0, 1, 1, 0]))

        result = TrainStep(classifier)(batch)

        assert isinstance(result, TrainOutput)
        names = [name for name, _ in classifier.named_parameters()]
        assert list(result.gradients) == names
        for name, param in classifier.named_parameters():
            assert result.gradients[name].shape == param.shape
            assert torch.isfinite(result.gradients[name]).all()

    def test_outputs_are_detached(self, classifier):
        batch = Batch(inputs=torch.randn(2, 23), targets=torch.tensor([1, 0]))

        item = TrainStep(classifier).step(batch).item

        assert item.loss.requires_grad is False
        assert item.output.requires_grad is False
        assert tuple(item.output.shape) == (2, 2)

    def test_does_not_update_parameters(self, classifier):
        before = classifier.state_dict()
        TrainStep(classifier).step(
            Batch(inputs=torch.randn(4, 23), targets=torch.tensor([0, 1, 1, 0]))
        )
        for name, value in classifier.state_dict().items():
            assert torch.equal(value, before[name])
        assert all(p.grad is None for p in classifier.parameters())

    def test_regression_output_bias_gradient(self, regressor):
        """d/db of mean((y - t)^2) is 2 * mean(y - t) for the output bias."""
        batch = Batch(inputs=torch.randn(5, 47), targets=torch.randn(5))

        result = TrainStep(regressor).step(batch)

        residual = result.item.output - result.item.targets
        expected = 2.0 * residual.mean()
        assert torch.allclose(
            result.gradients["output_layer.bias"], expected.reshape(1), atol=1e-6
        )

    def test_optimizer_step_with_assigned_gradients(self, regressor):
        optimizer = torch.optim.SGD(regressor.parameters(), lr=0.1)
        batch = Batch(inputs=torch.randn(8, 47), targets=torch.full((8,), 10.0))
        before = regressor.state_dict()["output_layer.bias"]

        result = TrainStep(regressor).step(batch)
        regressor.assign_gradients(result.gradients)
        optimizer.step()

        after = regressor.state_dict()["output_layer.bias"]
        # Targets sit far above the initial outputs, so the bias moves up
        assert after.item() > before.item()

    def test_repeated_steps_reduce_loss(self, regressor):
        optimizer = torch.optim.SGD(regressor.parameters(), lr=0.05)
        batch = Batch(inputs=torch.randn(16, 47), targets=torch.full((16,), 3.0))
        train_step = TrainStep(regressor)

        first = train_step(batch).item.loss.item()
        for _ in range(30):
            result = train_step(batch)
            regressor.assign_gradients(result.gradients)
            optimizer.step()
        last = train_step(batch).item.loss.item()

        assert last < first


class TestValidStep:
    """Test ValidStep."""

    def test_deterministic_with_dropout(self, classifier_config, trainable_backend):
        config = classifier_config.model_copy(update={"dropout_rate": 0.5})
        model = DailyLinearModel(config, trainable_backend)
        batch = Batch(inputs=torch.randn(4, 23), targets=torch.tensor([0, 1, 1, 0]))
        valid_step = ValidStep(model)

        first = valid_step(batch)
        second = valid_step(batch)

        assert isinstance(first, StepOutput)
        assert torch.equal(first.output, second.output)
        assert torch.equal(first.loss, second.loss)

    def test_builds_no_graph(self, regressor):
        item = ValidStep(regressor).step(
            Batch(inputs=torch.randn(3, 47), targets=torch.tensor([1.0, 2.0, 3.0]))
        )
        assert item.output.requires_grad is False
        assert item.loss.requires_grad is False

    def test_works_with_frozen_backend(self, regression_config, frozen_backend):
        model = DailyLinearModel(regression_config, frozen_backend)
        item = ValidStep(model)(Batch(inputs=torch.randn(2, 47), targets=torch.zeros(2)))
        assert item.loss.item() >= 0.0


class TestInferStep:
    """Test InferStep."""

    def test_classification(self, classifier):
        inputs = torch.randn(3, 23)
        logits = InferStep(classifier)(InferBatch(inputs=inputs))
        assert torch.equal(logits, classifier.infer(inputs))

    def test_regression(self, regressor):
        inputs = torch.randn(3, 47)
        values = InferStep(regressor).step(InferBatch(inputs=inputs))
        assert values == pytest.approx(regressor.forward(inputs).squeeze(1).tolist())
