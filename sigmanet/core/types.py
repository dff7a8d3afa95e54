"""Core typing contracts for sigmanet."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class Sample:
    """A single training pair of dense input and target vectors."""

    input: Array
    output: Array


@dataclass(frozen=True)
class TrainingStatus:
    """Read-only progress snapshot handed to callbacks after an epoch."""

    iterations: int
    error: float


@dataclass(frozen=True)
class TrainingResult:
    """Summary returned by :meth:`sigmanet.NeuralNetwork.train`."""

    error: float
    iterations: int


class TrainingState(enum.Enum):
    """Lifecycle of a single training run."""

    IDLE = "idle"
    RUNNING = "running"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"
    TIMED_OUT = "timed_out"

    @property
    def terminal(self) -> bool:
        return self not in (TrainingState.IDLE, TrainingState.RUNNING)


__all__ = ["Array", "Sample", "TrainingStatus", "TrainingResult", "TrainingState"]
