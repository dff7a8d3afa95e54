"""Exception taxonomy for sigmanet."""

from __future__ import annotations


class SigmanetError(Exception):
    """Base class for every error raised by sigmanet."""


class InvalidOption(SigmanetError, ValueError):
    """A training option has the wrong type or is out of range."""

    def __init__(self, name: str, reason: str, value: object = None) -> None:
        self.name = name
        self.reason = reason
        self.value = value
        super().__init__(f"[{name}, {value!r}] {reason}")


class InvalidInputShape(SigmanetError, ValueError):
    """A sample or input vector does not match the network's layer sizes."""


class TrainingFailed(SigmanetError, RuntimeError):
    """Training could not run to a terminal state."""


class NetworkNotInitialized(SigmanetError, RuntimeError):
    """The network has no layer sizes yet, so it cannot be run."""


class TrainingOptionWarning(UserWarning):
    """Issued instead of :class:`InvalidOption` when leniency is enabled."""


__all__ = [
    "SigmanetError",
    "InvalidOption",
    "InvalidInputShape",
    "TrainingFailed",
    "NetworkNotInitialized",
    "TrainingOptionWarning",
]
