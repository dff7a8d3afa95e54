"""Conversion of raw training data into dense :class:`Sample` records.

Both sides of a sample may be given as a sequence of numbers or as a mapping
of feature name to value.  Mappings are densified through a lookup table
(name to index) that is built once, in order of first appearance, and then
reused for inference so that :meth:`NeuralNetwork.run` can accept and return
mappings as well.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from ..errors import InvalidInputShape
from .types import Array, Sample

Lookup = Dict[str, int]


def build_lookup(hashes: Iterable[Mapping[str, float]]) -> Lookup:
    """Assign an index to every key seen across ``hashes``."""

    lookup: Lookup = {}
    for item in hashes:
        for key in item:
            if key not in lookup:
                lookup[key] = len(lookup)
    return lookup


def to_array(lookup: Lookup, values: Mapping[str, float]) -> Array:
    """Densify ``values``; names absent from the mapping become zero."""

    array = np.zeros(len(lookup), dtype=np.float64)
    for key, value in values.items():
        if key not in lookup:
            raise InvalidInputShape(f"unknown feature name {key!r}")
        array[lookup[key]] = float(value)
    return array


def to_hash(lookup: Lookup, array: Sequence[float]) -> Dict[str, float]:
    return {key: float(array[idx]) for key, idx in lookup.items()}


def _split_pair(item: object) -> Tuple[object, object]:
    if isinstance(item, Sample):
        return item.input, item.output
    if isinstance(item, Mapping):
        try:
            return item["input"], item["output"]
        except KeyError as exc:
            raise InvalidInputShape(
                f"training sample is missing the {exc.args[0]!r} key"
            ) from exc
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return item[0], item[1]
    raise InvalidInputShape(f"cannot interpret {item!r} as an (input, output) pair")


def _densify(value: object, lookup: Lookup | None) -> object:
    if isinstance(value, Mapping):
        return to_array(lookup or {}, value)
    return value


def format_data(
    data: Iterable[object],
    input_lookup: Lookup | None = None,
    output_lookup: Lookup | None = None,
) -> Tuple[List[Sample], Lookup | None, Lookup | None]:
    """Normalise ``data`` into samples, returning the lookups that were used.

    Existing lookups are reused; missing ones are built only when at least
    one sample carries a mapping on that side.  Vector lengths are validated
    later, against the network sizes.
    """

    try:
        items = list(data)
    except TypeError as exc:
        raise InvalidInputShape(
            f"training data must be an iterable of samples, got {type(data).__name__}"
        ) from exc
    pairs = [_split_pair(item) for item in items]
    if input_lookup is None:
        hashes = [inp for inp, _ in pairs if isinstance(inp, Mapping)]
        input_lookup = build_lookup(hashes) if hashes else None
    if output_lookup is None:
        hashes = [out for _, out in pairs if isinstance(out, Mapping)]
        output_lookup = build_lookup(hashes) if hashes else None

    samples: List[Sample] = []
    for raw_input, raw_output in pairs:
        inp = _densify(raw_input, input_lookup)
        out = _densify(raw_output, output_lookup)
        try:
            samples.append(
                Sample(
                    input=np.asarray(inp, dtype=np.float64),
                    output=np.asarray(out, dtype=np.float64),
                )
            )
        except (TypeError, ValueError) as exc:
            raise InvalidInputShape(
                f"sample ({raw_input!r}, {raw_output!r}) is not numeric"
            ) from exc
    return samples, input_lookup, output_lookup


__all__ = ["Lookup", "build_lookup", "to_array", "to_hash", "format_data"]
