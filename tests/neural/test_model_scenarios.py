"""
End-to-end behaviour of the daily classifier and regressor.

These tests exercise the public model API the way a training driver would:
shape contracts across batch sizes, determinism by mode, loss properties
and fixed-parameter scenarios with known results.
"""

import pytest
import torch

from daily_linear.config import ModelConfig, TaskKind
from daily_linear.errors import ShapeMismatchError
from daily_linear.neural import Batch, DailyLinearModel, InferBatch, Mode


def _zero_state(model):
    return {name: torch.zeros_like(value) for name, value in model.state_dict().items()}


class TestShapes:
    """Output shape is [B, output_size] for every batch size."""

    @pytest.mark.parametrize("batch_size", [0, 1, 5])
    def test_classifier(self, classifier, batch_size):
        for mode in (Mode.TRAINING, Mode.EVALUATION):
            out = classifier.forward(torch.randn(batch_size, 23), mode)
            assert tuple(out.shape) == (batch_size, 2)

    @pytest.mark.parametrize("batch_size", [0, 1, 5])
    def test_regressor(self, regressor, batch_size):
        for mode in (Mode.TRAINING, Mode.EVALUATION):
            out = regressor.forward(torch.randn(batch_size, 47), mode)
            assert tuple(out.shape) == (batch_size, 1)

    def test_narrow_input_rejected(self, classifier):
        with pytest.raises(ShapeMismatchError):
            classifier.forward(torch.randn(3, 10))


class TestDeterminism:
    """Dropout only in training mode."""

    @pytest.fixture
    def dropout_model(self, trainable_backend, seeded):
        config = ModelConfig(
            input_size=23,
            hidden_sizes=[64, 64],
            dropout_rate=0.5,
            task_kind=TaskKind.CLASSIFICATION,
        )
        return DailyLinearModel(config, trainable_backend)

    def test_evaluation_is_deterministic(self, dropout_model):
        inputs = torch.randn(8, 23)
        assert torch.equal(
            dropout_model.forward(inputs, Mode.EVALUATION),
            dropout_model.forward(inputs, Mode.EVALUATION),
        )

    def test_training_is_stochastic(self, dropout_model):
        inputs = torch.randn(8, 23)
        outputs = [dropout_model.forward(inputs, Mode.TRAINING) for _ in range(5)]
        assert any(not torch.equal(outputs[0], other) for other in outputs[1:])

    def test_training_without_dropout_matches_evaluation(self, classifier):
        inputs = torch.randn(4, 23)
        assert torch.allclose(
            classifier.forward(inputs, Mode.TRAINING),
            classifier.forward(inputs, Mode.EVALUATION),
        )


class TestLosses:
    """Loss properties over random batches."""

    def test_classification_loss_non_negative(self, classifier):
        for _ in range(10):
            batch = Batch(inputs=torch.randn(6, 23) * 5, targets=torch.randint(0, 2, (6,)))
            assert classifier.evaluate(batch, Mode.TRAINING).loss.item() >= 0.0

    def test_regression_loss_is_mean_squared_difference(self, regressor):
        batch = Batch(inputs=torch.randn(6, 47), targets=torch.randn(6))
        item = regressor.evaluate(batch)
        expected = ((item.output.squeeze(1) - batch.targets) ** 2).mean()
        assert item.loss.item() == pytest.approx(expected.item(), rel=1e-5)


class TestScenarios:
    """Fixed inputs with known outcomes."""

    def test_single_classification_example(self, classifier):
        """23 features, one hidden layer of 4, target class 1."""
        batch = Batch(inputs=torch.randn(1, 23), targets=torch.tensor([1]))

        item = classifier.evaluate(batch)

        assert tuple(item.output.shape) == (1, 2)
        assert torch.isfinite(item.loss)
        assert item.loss.item() >= 0.0

    def test_regression_with_constant_output(self, regressor):
        """Zero weights and an output bias of 2.5 predict 2.5 exactly."""
        state = _zero_state(regressor)
        state["output_layer.bias"] = torch.tensor([2.5])
        regressor.load_state_dict(state)

        batch = Batch(inputs=torch.randn(3, 47), targets=torch.tensor([2.5, 2.5, 2.5]))
        item = regressor.evaluate(batch)

        assert item.loss.item() == 0.0
        assert regressor.infer(InferBatch(inputs=batch.inputs)) == [2.5, 2.5, 2.5]

    def test_evaluate_matches_infer(self, classifier, regressor):
        class_inputs = torch.randn(4, 23)
        class_item = classifier.evaluate(
            Batch(inputs=class_inputs, targets=torch.tensor([0, 1, 0, 1]))
        )
        assert torch.allclose(class_item.output, classifier.infer(class_inputs))

        reg_inputs = torch.randn(4, 47)
        reg_item = regressor.evaluate(Batch(inputs=reg_inputs, targets=torch.zeros(4)))
        assert regressor.infer(reg_inputs) == pytest.approx(
            reg_item.output.squeeze(1).tolist()
        )

    def test_empty_batch(self, classifier, regressor):
        empty = Batch(inputs=torch.empty(0, 23), targets=torch.empty(0, dtype=torch.long))
        item = classifier.evaluate(empty)
        assert tuple(item.output.shape) == (0, 2)

        assert regressor.infer(torch.empty(0, 47)) == []
