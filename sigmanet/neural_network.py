"""Public facade tying network state, option validation and training together."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence

from .core.lookup import Lookup, format_data, to_array, to_hash
from .core.network import FeedForwardNetwork
from .core.types import Array, Sample, TrainingResult, TrainingState
from .errors import InvalidInputShape, NetworkNotInitialized, TrainingFailed
from .training.metrics import EvaluationReport, evaluate
from .training.options import TrainingOptions, validate_training_options
from .training.trainer import Trainer


class NeuralNetwork:
    """Sigmoid feed-forward network trained with online gradient descent.

    Parameters
    ----------
    sizes:
        Full list of layer sizes ``[input, *hidden, output]``.  When omitted
        the sizes are inferred from the first training sample.
    hidden_layers:
        Hidden layer sizes used when ``sizes`` is inferred.  Defaults to a
        single layer of ``max(3, input_size // 2)`` neurons.
    learning_rate, momentum:
        Per-network overrides of the training defaults.
    binary_thresh:
        Decision threshold used by :meth:`test` for single-output networks.
    seed:
        Seed for the initial weights; ``None`` draws fresh entropy.
    """

    def __init__(
        self,
        sizes: Sequence[int] | None = None,
        *,
        hidden_layers: Sequence[int] | None = None,
        learning_rate: float | None = None,
        momentum: float | None = None,
        binary_thresh: float = 0.5,
        seed: int | None = None,
    ) -> None:
        overrides: Dict[str, object] = {}
        if learning_rate is not None:
            overrides["learning_rate"] = learning_rate
        if momentum is not None:
            overrides["momentum"] = momentum
        self.train_defaults = validate_training_options(overrides)
        self.train_opts = self.train_defaults
        self.hidden_layers = list(hidden_layers) if hidden_layers is not None else None
        self.binary_thresh = float(binary_thresh)
        self.seed = seed
        self.invalid_train_opts_should_throw = True
        self.input_lookup: Lookup | None = None
        self.output_lookup: Lookup | None = None
        self.network: FeedForwardNetwork | None = None
        self._trainer: Trainer | None = None
        self._training = False
        if sizes is not None:
            self.initialize(sizes)

    @property
    def sizes(self) -> List[int] | None:
        return list(self.network.sizes) if self.network is not None else None

    @property
    def training_state(self) -> TrainingState:
        """State of the most recent training run."""

        return self._trainer.state if self._trainer is not None else TrainingState.IDLE

    @property
    def is_initialized(self) -> bool:
        return self.network is not None

    def initialize(self, sizes: Sequence[int]) -> None:
        """Create fresh network state (weights, biases, zeroed changes) for ``sizes``."""

        self.network = FeedForwardNetwork(sizes=sizes, seed=self.seed)

    def reset(self, seed: int | None = None) -> None:
        network = self._require_network()
        network.reset(self.seed if seed is None else seed)

    def update_training_options(
        self, options: Mapping[str, object] | None = None, **kwargs: object
    ) -> TrainingOptions:
        """Validate ``options`` over this network's defaults and keep the result."""

        merged = {**(options or {}), **kwargs}
        self.train_opts = validate_training_options(
            merged,
            defaults=self.train_defaults,
            strict=self.invalid_train_opts_should_throw,
        )
        return self.train_opts

    def train(
        self, data: Iterable[object], options: Mapping[str, object] | None = None, **kwargs: object
    ) -> TrainingResult:
        """Train to a terminal state on the calling thread."""

        with self._exclusive():
            trainer, samples = self._prepare(data, options, kwargs)
            return trainer.run(samples)

    async def train_async(
        self, data: Iterable[object], options: Mapping[str, object] | None = None, **kwargs: object
    ) -> TrainingResult:
        """Coroutine counterpart of :meth:`train`.

        Validation happens when the coroutine starts, so every failure is
        delivered through the awaited result.
        """

        with self._exclusive():
            trainer, samples = self._prepare(data, options, kwargs)
            return await trainer.run_async(samples)

    def run(self, inputs: object) -> Array | Dict[str, float]:
        """Forward-only inference."""

        network = self._require_network()
        if self.input_lookup is not None and isinstance(inputs, Mapping):
            inputs = to_array(self.input_lookup, inputs)
        output = network.forward(inputs).copy()
        if self.output_lookup is not None:
            return to_hash(self.output_lookup, output)
        return output

    def test(self, data: Iterable[object]) -> EvaluationReport:
        network = self._require_network()
        samples, _, _ = format_data(data, self.input_lookup, self.output_lookup)
        self._check_shapes(samples, network.sizes)
        return evaluate(network, samples, binary_thresh=self.binary_thresh)

    # ------------------------------------------------------------------
    # Internal helpers

    def _prepare(
        self,
        data: Iterable[object],
        options: Mapping[str, object] | None,
        kwargs: Mapping[str, object],
    ) -> tuple[Trainer, List[Sample]]:
        opts = self.update_training_options(options, **kwargs)
        samples, input_lookup, output_lookup = format_data(
            data, self.input_lookup, self.output_lookup
        )
        if not samples:
            raise InvalidInputShape("training data is empty")
        sizes = self.sizes or self._infer_sizes(samples[0])
        self._check_shapes(samples, sizes)
        if self.network is None:
            self.initialize(sizes)
        self.input_lookup = input_lookup
        self.output_lookup = output_lookup
        self._trainer = Trainer(self.network, opts)
        return self._trainer, samples

    def _infer_sizes(self, sample: Sample) -> List[int]:
        input_size = int(sample.input.size)
        hidden = self.hidden_layers
        if hidden is None:
            hidden = [max(3, input_size // 2)]
        return [input_size, *hidden, int(sample.output.size)]

    @staticmethod
    def _check_shapes(samples: Sequence[Sample], sizes: Sequence[int]) -> None:
        expected_in, expected_out = sizes[0], sizes[-1]
        for idx, sample in enumerate(samples):
            if sample.input.shape != (expected_in,):
                raise InvalidInputShape(
                    f"sample {idx}: input shape {sample.input.shape}, expected ({expected_in},)"
                )
            if sample.output.shape != (expected_out,):
                raise InvalidInputShape(
                    f"sample {idx}: output shape {sample.output.shape}, expected ({expected_out},)"
                )

    def _require_network(self) -> FeedForwardNetwork:
        if self.network is None:
            raise NetworkNotInitialized("network has no layer sizes yet; train it or pass sizes")
        return self.network

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        if self._training:
            raise TrainingFailed("this network is already training")
        self._training = True
        try:
            yield
        finally:
            self._training = False


__all__ = ["NeuralNetwork"]
