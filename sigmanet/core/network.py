"""Fully-connected sigmoid network state and its propagation numerics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, MutableSequence, Sequence

import numpy as np

from ..errors import InvalidInputShape
from .activations import sigmoid, sigmoid_derivative
from .types import Array, Sample

_INIT_RANGE = 0.2


def _as_vector(values: object, size: int, what: str) -> Array:
    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputShape(f"{what} is not a numeric vector: {values!r}") from exc
    if vector.ndim != 1 or vector.shape[0] != size:
        raise InvalidInputShape(
            f"{what} has shape {vector.shape}, expected a vector of length {size}"
        )
    return vector


@dataclass
class FeedForwardNetwork:
    """Feed-forward network with sigmoid units and a persistent momentum buffer.

    ``weights[idx]`` connects layer ``idx`` to layer ``idx + 1`` and has shape
    ``(sizes[idx + 1], sizes[idx])``.  ``deltas[idx]``, ``errors[idx]`` and the
    two change buffers share that indexing; ``outputs`` holds one activation
    vector per layer, the input layer included.
    """

    sizes: Sequence[int]
    seed: int | None = None
    weights: MutableSequence[Array] = field(init=False, repr=False)
    biases: MutableSequence[Array] = field(init=False, repr=False)
    changes: MutableSequence[Array] = field(init=False, repr=False)
    bias_changes: MutableSequence[Array] = field(init=False, repr=False)
    outputs: MutableSequence[Array] = field(init=False, repr=False)
    deltas: MutableSequence[Array] = field(init=False, repr=False)
    errors: MutableSequence[Array] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        sizes = [int(size) for size in self.sizes]
        if len(sizes) < 2 or any(size < 1 for size in sizes):
            raise InvalidInputShape(
                f"layer sizes must hold at least two positive integers, got {list(self.sizes)}"
            )
        self.sizes = sizes
        self.reset(self.seed)

    @property
    def input_size(self) -> int:
        return self.sizes[0]

    @property
    def output_size(self) -> int:
        return self.sizes[-1]

    def reset(self, seed: int | None = None) -> None:
        """Draw fresh weights and zero the change buffers."""

        self.seed = seed
        rng = np.random.default_rng(seed)
        dims = list(self.sizes)
        self.weights = []
        self.biases = []
        self.changes = []
        self.bias_changes = []
        for in_dim, out_dim in zip(dims[:-1], dims[1:]):
            self.weights.append(rng.uniform(-_INIT_RANGE, _INIT_RANGE, size=(out_dim, in_dim)))
            self.biases.append(rng.uniform(-_INIT_RANGE, _INIT_RANGE, size=out_dim))
            self.changes.append(np.zeros((out_dim, in_dim)))
            self.bias_changes.append(np.zeros(out_dim))
        self.outputs = [np.zeros(size) for size in dims]
        self.deltas = [np.zeros(size) for size in dims[1:]]
        self.errors = [np.zeros(size) for size in dims[1:]]

    def forward(self, inputs: object) -> Array:
        """Propagate ``inputs`` layer by layer and return the output activations."""

        x = _as_vector(inputs, self.input_size, "input")
        self.outputs[0] = x
        for idx, (W, b) in enumerate(zip(self.weights, self.biases)):
            x = sigmoid(W @ x + b)
            self.outputs[idx + 1] = x
        return x

    def backward(self, target: object) -> float:
        """Populate deltas for ``target`` and return the mean squared output error.

        Relies on the activations left behind by the preceding :meth:`forward`.
        """

        target = _as_vector(target, self.output_size, "target")
        last_idx = len(self.weights) - 1
        output = self.outputs[-1]
        error = target - output
        self.errors[last_idx] = error
        self.deltas[last_idx] = error * sigmoid_derivative(output)
        for idx in reversed(range(last_idx)):
            error = self.weights[idx + 1].T @ self.deltas[idx + 1]
            self.errors[idx] = error
            self.deltas[idx] = error * sigmoid_derivative(self.outputs[idx + 1])
        return float(np.mean(np.square(self.errors[last_idx])))

    def adjust_weights(self, learning_rate: float, momentum: float) -> None:
        """Apply one momentum-augmented gradient step from the current deltas."""

        for idx, delta in enumerate(self.deltas):
            incoming = self.outputs[idx]
            change = learning_rate * np.outer(delta, incoming) + momentum * self.changes[idx]
            self.weights[idx] += change
            self.changes[idx] = change

            bias_change = learning_rate * delta + momentum * self.bias_changes[idx]
            self.biases[idx] += bias_change
            self.bias_changes[idx] = bias_change

    def train_sample(self, sample: Sample, learning_rate: float, momentum: float) -> float:
        """Run forward, backward and update for one sample; return its error."""

        self.forward(sample.input)
        error = self.backward(sample.output)
        self.adjust_weights(learning_rate, momentum)
        return error

    def state_dict(self) -> Mapping[str, Array]:
        state: dict[str, Array] = {}
        for idx in range(len(self.weights)):
            state[f"W{idx}"] = self.weights[idx].copy()
            state[f"b{idx}"] = self.biases[idx].copy()
            state[f"dW{idx}"] = self.changes[idx].copy()
            state[f"db{idx}"] = self.bias_changes[idx].copy()
        return state

    def load_state_dict(self, state: Mapping[str, Array]) -> None:
        """Copy weights and biases from ``state``; missing change buffers become zero."""

        for idx in range(len(self.weights)):
            for key, target in ((f"W{idx}", self.weights), (f"b{idx}", self.biases)):
                if key not in state:
                    raise KeyError(f"Missing parameter {key} in state dict")
                value = np.array(state[key], dtype=np.float64)
                if value.shape != target[idx].shape:
                    raise InvalidInputShape(
                        f"{key} has shape {value.shape}, expected {target[idx].shape}"
                    )
                target[idx] = value
            self.changes[idx] = np.array(
                state.get(f"dW{idx}", np.zeros_like(self.weights[idx])), dtype=np.float64
            )
            self.bias_changes[idx] = np.array(
                state.get(f"db{idx}", np.zeros_like(self.biases[idx])), dtype=np.float64
            )

    def parameter_count(self) -> int:
        return int(sum(w.size + b.size for w, b in zip(self.weights, self.biases)))


__all__ = ["FeedForwardNetwork"]
