"""Evaluation of a trained network against labelled samples."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from ..core.network import FeedForwardNetwork
from ..core.types import Array, Sample


@dataclass(frozen=True)
class Misclass:
    input: Array
    output: Array
    actual: int
    expected: int


@dataclass(frozen=True)
class EvaluationReport:
    """Aggregate error plus classification counts.

    The confusion counts and the derived ratios are only populated for
    networks with a single output neuron, where the class is decided by
    ``binary_thresh``.
    """

    error: float
    total: int
    misclasses: List[Misclass] = field(default_factory=list)
    true_pos: int | None = None
    true_neg: int | None = None
    false_pos: int | None = None
    false_neg: int | None = None
    precision: float | None = None
    recall: float | None = None
    accuracy: float | None = None
    f1: float | None = None

    @property
    def binary(self) -> bool:
        return self.true_pos is not None


def _ratio(num: float, denom: float) -> float:
    return float(num / denom) if denom else 0.0


def evaluate(
    network: FeedForwardNetwork,
    samples: Sequence[Sample],
    *,
    binary_thresh: float = 0.5,
) -> EvaluationReport:
    binary = network.output_size == 1
    error_sum = 0.0
    misclasses: List[Misclass] = []
    tp = tn = fp = fn = 0
    for sample in samples:
        prediction = network.forward(sample.input).copy()
        error_sum += float(np.mean(np.square(sample.output - prediction)))
        if binary:
            actual = int(prediction[0] > binary_thresh)
            expected = int(sample.output[0] > binary_thresh)
            if actual and expected:
                tp += 1
            elif actual:
                fp += 1
            elif expected:
                fn += 1
            else:
                tn += 1
        else:
            actual = int(np.argmax(prediction))
            expected = int(np.argmax(sample.output))
        if actual != expected:
            misclasses.append(
                Misclass(input=sample.input, output=sample.output, actual=actual, expected=expected)
            )

    total = len(samples)
    error = error_sum / total if total else 0.0
    if not binary:
        return EvaluationReport(error=error, total=total, misclasses=misclasses)

    precision = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)
    return EvaluationReport(
        error=error,
        total=total,
        misclasses=misclasses,
        true_pos=tp,
        true_neg=tn,
        false_pos=fp,
        false_neg=fn,
        precision=precision,
        recall=recall,
        accuracy=_ratio(tp + tn, total),
        f1=_ratio(2 * precision * recall, precision + recall),
    )


__all__ = ["Misclass", "EvaluationReport", "evaluate"]
