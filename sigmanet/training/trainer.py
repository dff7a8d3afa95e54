"""Training loop with blocking and cooperative (asyncio) execution modes."""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Iterator, Sequence

from ..core.network import FeedForwardNetwork
from ..core.types import Sample, TrainingResult, TrainingState, TrainingStatus
from ..errors import InvalidInputShape, SigmanetError, TrainingFailed
from .options import TrainingOptions


class Trainer:
    """Drive online gradient descent over a training set until a stop condition fires.

    A trainer owns one run: it moves from ``IDLE`` through ``RUNNING`` into
    exactly one of ``CONVERGED``, ``MAX_ITERATIONS_REACHED`` or ``TIMED_OUT``.
    A run that fails or is abandoned before that leaves the trainer ``IDLE``.
    :meth:`run` and :meth:`run_async` both consume :meth:`epochs`, so the two
    modes perform the same arithmetic in the same order.
    """

    def __init__(
        self,
        network: FeedForwardNetwork,
        options: TrainingOptions,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.network = network
        self.options = options
        self.state = TrainingState.IDLE
        self.iterations = 0
        self.error = float("inf")
        self._clock = clock

    def epochs(self, samples: Sequence[Sample]) -> Iterator[TrainingStatus]:
        """Yield a status after every epoch until the run reaches a terminal state."""

        if self.state is not TrainingState.IDLE:
            raise TrainingFailed(f"trainer already used (state={self.state.value})")
        if not samples:
            raise InvalidInputShape("training data is empty")

        opts = self.options
        log = opts.log_fn
        started = self._clock()
        self.iterations = 0
        self.error = float("inf")
        self.state = TrainingState.RUNNING
        try:
            while True:
                error_sum = 0.0
                for sample in samples:
                    error_sum += self.network.train_sample(
                        sample, opts.learning_rate, opts.momentum
                    )
                self.error = error_sum / len(samples)
                self.iterations += 1
                status = TrainingStatus(iterations=self.iterations, error=self.error)

                if opts.callback is not None and self.iterations % opts.callback_period == 0:
                    opts.callback(status)
                if log is not None and self.iterations % opts.log_period == 0:
                    log(f"iterations: {status.iterations}, training error: {status.error}")

                self.state = self._next_state(started)
                yield status
                if self.state.terminal:
                    return
        finally:
            # a run that stops short of a terminal state goes back to IDLE
            if self.state is TrainingState.RUNNING:
                self.state = TrainingState.IDLE

    def run(self, samples: Sequence[Sample]) -> TrainingResult:
        """Train on the calling thread and return the result."""

        for _ in self._guarded(samples):
            pass
        return self.result()

    async def run_async(self, samples: Sequence[Sample]) -> TrainingResult:
        """Train cooperatively, yielding to the event loop after every epoch.

        Cancelling the awaiting task stops the run at the next epoch boundary
        and returns the trainer to ``IDLE``.
        """

        steps = self._guarded(samples)
        try:
            for _ in steps:
                await asyncio.sleep(0)
        finally:
            steps.close()
        return self.result()

    def result(self) -> TrainingResult:
        if not self.state.terminal:
            raise TrainingFailed(f"training has not finished (state={self.state.value})")
        return TrainingResult(error=self.error, iterations=self.iterations)

    # ------------------------------------------------------------------
    # Internal helpers

    def _next_state(self, started: float) -> TrainingState:
        opts = self.options
        if self.error <= opts.error_thresh:
            return TrainingState.CONVERGED
        if self.iterations >= opts.iterations:
            return TrainingState.MAX_ITERATIONS_REACHED
        if self._clock() - started >= opts.timeout:
            return TrainingState.TIMED_OUT
        return TrainingState.RUNNING

    def _guarded(self, samples: Sequence[Sample]) -> Iterator[TrainingStatus]:
        try:
            yield from self.epochs(samples)
        except SigmanetError:
            raise
        except Exception as exc:
            raise TrainingFailed(
                f"training failed after {self.iterations} iterations: {exc}"
            ) from exc


__all__ = ["Trainer"]
