"""Loading training options from JSON or YAML files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Mapping


def _decode_yaml(text: str) -> object:
    try:
        import yaml  # type: ignore
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("PyYAML is required to load option files in YAML format") from exc
    return yaml.safe_load(text)


def _decode_json(text: str) -> object:
    return json.loads(text) if text.strip() else None


_DECODERS: Dict[str, Callable[[str], object]] = {
    ".json": _decode_json,
    ".yaml": _decode_yaml,
    ".yml": _decode_yaml,
}


def load_training_options(path: str | Path, section: str | None = None) -> Dict[str, object]:
    """Read a mapping of training options from ``path``.

    ``section`` selects a nested mapping, e.g. ``"train"`` for files that
    keep several configuration blocks side by side; dotted names such as
    ``"stages.finetune"`` walk deeper.  Values are returned unvalidated; pass
    them to :meth:`NeuralNetwork.train` or :func:`validate_training_options`.
    An empty file yields an empty mapping.
    """

    path = Path(path)
    decode = _DECODERS.get(path.suffix.lower())
    if decode is None:
        raise ValueError(f"Unsupported option file type: {path.suffix!r}")
    data = decode(path.read_text())
    if data is None:
        data = {}

    where = path.name
    for key in section.split(".") if section else ():
        if not isinstance(data, Mapping):
            break
        if key not in data:
            raise KeyError(f"{where} has no {key!r} section")
        data = data[key]
        where = f"{where}:{key}"
    if not isinstance(data, Mapping):
        raise TypeError(f"{where} must hold a mapping of options, got {type(data).__name__}")
    return dict(data)


__all__ = ["load_training_options"]
