"""Training loop, option validation and evaluation."""

from .metrics import EvaluationReport, Misclass, evaluate
from .options import TrainingOptions, validate_training_options
from .trainer import Trainer

__all__ = [
    "EvaluationReport",
    "Misclass",
    "evaluate",
    "TrainingOptions",
    "validate_training_options",
    "Trainer",
]
