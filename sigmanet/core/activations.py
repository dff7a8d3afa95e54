"""Activation utilities for sigmanet."""

from __future__ import annotations

import numpy as np

from .types import Array


def sigmoid(x: Array) -> Array:
    """Return the logistic activation ``1 / (1 + exp(-x))``."""

    # clipping keeps exp finite; the output is saturated long before 500
    return 1.0 / (1.0 + np.exp(-np.clip(x, -500.0, 500.0)))


def sigmoid_derivative(activation: Array) -> Array:
    """Derivative of the sigmoid expressed through its own output."""

    return activation * (1.0 - activation)


__all__ = ["sigmoid", "sigmoid_derivative"]
