"""Core numerical primitives for sigmanet."""

from . import activations, lookup, network, types

__all__ = ["activations", "lookup", "network", "types"]
