"""sigmanet public API."""

from .config import load_training_options
from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.network import FeedForwardNetwork
from .core.types import Sample, TrainingResult, TrainingState, TrainingStatus
from .errors import (
    InvalidInputShape,
    InvalidOption,
    NetworkNotInitialized,
    SigmanetError,
    TrainingFailed,
    TrainingOptionWarning,
)
from .neural_network import NeuralNetwork
from .training.metrics import EvaluationReport
from .training.options import TrainingOptions, validate_training_options
from .training.trainer import Trainer

__all__ = [
    "NeuralNetwork",
    "FeedForwardNetwork",
    "Trainer",
    "TrainingOptions",
    "validate_training_options",
    "load_training_options",
    "Sample",
    "TrainingResult",
    "TrainingState",
    "TrainingStatus",
    "EvaluationReport",
    "SigmanetError",
    "InvalidOption",
    "InvalidInputShape",
    "TrainingFailed",
    "NetworkNotInitialized",
    "TrainingOptionWarning",
    "activations",
    "types",
]
