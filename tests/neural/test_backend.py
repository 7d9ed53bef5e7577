"""Tests for torch backends and the parameter store."""

from unittest.mock import MagicMock

import numpy as np
import pytest
import torch

from daily_linear.errors import (
    ConfigurationError,
    ErrorCodes,
    MaterializationError,
    ShapeMismatchError,
)
from daily_linear.neural import (
    AutodiffBackend,
    ParameterStore,
    TorchAutodiffBackend,
    TorchBackend,
    seed_everything,
)


class TestTorchBackend:
    """Test frozen and trainable torch backends."""

    def test_capabilities(self, frozen_backend, trainable_backend):
        assert not isinstance(frozen_backend, AutodiffBackend)
        assert isinstance(trainable_backend, AutodiffBackend)
        assert frozen_backend.trainable is False
        assert trainable_backend.trainable is True

    def test_defaults(self):
        backend = TorchBackend()
        assert backend.device == torch.device("cpu")
        assert backend.dtype == torch.float32

    def test_parameter_requires_grad_follows_backend(self, frozen_backend, trainable_backend):
        initial = torch.zeros(3, dtype=torch.float64)
        frozen = frozen_backend.parameter(initial)
        trainable = trainable_backend.parameter(initial)

        assert frozen.requires_grad is False
        assert trainable.requires_grad is True
        assert trainable.dtype == torch.float32

    def test_parameter_is_a_copy(self, trainable_backend):
        """Parameters never alias the initial value."""
        initial = torch.zeros(3)
        param = trainable_backend.parameter(initial)
        with torch.no_grad():
            param.add_(1.0)
        assert torch.equal(initial, torch.zeros(3))

    def test_place_keeps_dtype_unless_given(self, frozen_backend):
        ids = frozen_backend.place(torch.tensor([0, 1]))
        assert ids.dtype == torch.int64
        values = frozen_backend.place([1, 2], dtype=torch.float32)
        assert values.dtype == torch.float32

    def test_to_host(self, frozen_backend):
        values = frozen_backend.to_host(torch.tensor([[1.5], [-2.0]]))
        assert values == [1.5, -2.0]
        assert all(isinstance(v, float) for v in values)

    def test_to_host_failure_raises(self, frozen_backend):
        """A buffer that cannot be read back raises MaterializationError."""
        tensor = MagicMock()
        tensor.shape = (2, 1)
        tensor.dtype = torch.float32
        tensor.detach.return_value.cpu.return_value.numpy.side_effect = RuntimeError(
            "device sync failed"
        )

        with pytest.raises(MaterializationError) as exc_info:
            frozen_backend.to_host(tensor)

        assert exc_info.value.error_code == ErrorCodes.MODEL_MATERIALIZATION_FAILED
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.details["shape"] == [2, 1]

    def test_gradients(self, trainable_backend):
        a = trainable_backend.parameter(torch.tensor([2.0, 3.0]))
        b = trainable_backend.parameter(torch.tensor([1.0]))
        unused = trainable_backend.parameter(torch.tensor([5.0]))
        loss = (a * a).sum() + 4 * b.sum()

        grads = trainable_backend.gradients(loss, [("a", a), ("b", b), ("unused", unused)])

        assert torch.allclose(grads["a"], torch.tensor([4.0, 6.0]))
        assert torch.allclose(grads["b"], torch.tensor([4.0]))
        assert torch.equal(grads["unused"], torch.zeros(1))


class TestSeedEverything:
    """Test RNG seeding."""

    def test_reproducible(self):
        seed_everything(42)
        first = (torch.rand(3), np.random.rand(3))
        seed_everything(42)
        second = (torch.rand(3), np.random.rand(3))

        assert torch.equal(first[0], second[0])
        assert np.array_equal(first[1], second[1])


class TestParameterStore:
    """Test the explicit parameter container."""

    @pytest.fixture
    def store(self, trainable_backend):
        store = ParameterStore(trainable_backend)
        store.create("w", torch.ones(2, 3))
        store.create("b", torch.zeros(3))
        return store

    def test_enumeration_order(self, store):
        assert list(store) == ["w", "b"]
        assert [name for name, _ in store.named_parameters()] == ["w", "b"]
        assert len(store.parameters()) == 2
        assert len(store) == 2
        assert "w" in store
        assert store.num_parameters() == 9

    def test_duplicate_name_rejected(self, store):
        with pytest.raises(ConfigurationError):
            store.create("w", torch.ones(1))

    def test_state_dict_is_detached_copy(self, store):
        state = store.state_dict()
        state["w"].fill_(7.0)
        assert torch.equal(store["w"], torch.ones(2, 3))
        assert state["w"].requires_grad is False

    def test_load_state_dict_in_place(self, store):
        param = store["w"]
        store.load_state_dict({"w": torch.full((2, 3), 2.0), "b": torch.ones(3)})

        assert store["w"] is param
        assert torch.equal(param, torch.full((2, 3), 2.0))
        assert param.requires_grad is True

    def test_load_state_dict_shape_mismatch(self, store):
        with pytest.raises(ShapeMismatchError) as exc_info:
            store.load_state_dict({"w": torch.ones(3, 2), "b": torch.ones(3)})
        assert exc_info.value.expected == [2, 3]
        assert exc_info.value.actual == [3, 2]
        # Nothing was copied
        assert torch.equal(store["b"], torch.zeros(3))

    def test_load_state_dict_key_mismatch(self, store):
        with pytest.raises(ConfigurationError) as exc_info:
            store.load_state_dict({"w": torch.ones(2, 3), "extra": torch.ones(1)})
        assert exc_info.value.details == {"missing": ["b"], "unexpected": ["extra"]}

    def test_assign_gradients(self, store):
        store.assign_gradients({"b": torch.ones(3)})
        assert torch.equal(store["b"].grad, torch.ones(3))
        assert store["w"].grad is None
