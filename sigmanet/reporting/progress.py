"""Progress sinks usable as the ``callback`` training option."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Callable, List

from ..core.types import TrainingStatus


class JsonlSink:
    """Append-only JSONL writer for training progress."""

    def __init__(self, path: str | Path, *, label: str | None = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.label = label

    def on_status(self, status: TrainingStatus) -> None:
        record: dict[str, object] = {
            "iterations": int(status.iterations),
            "error": float(status.error),
        }
        if self.label is not None:
            record["label"] = self.label
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    __call__ = on_status


class CsvSink:
    """Write progress rows to CSV with a stable schema."""

    fieldnames = ("iterations", "error")

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def on_status(self, status: TrainingStatus) -> None:
        row = {"iterations": int(status.iterations), "error": float(status.error)}
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=self.fieldnames)
            if handle.tell() == 0:
                writer.writeheader()
            writer.writerow(row)

    __call__ = on_status


class CallbackList:
    """Fan a single progress callback out to several sinks, in order."""

    def __init__(self, *callbacks: Callable[[TrainingStatus], object]) -> None:
        self.callbacks: List[Callable[[TrainingStatus], object]] = list(callbacks)

    def __call__(self, status: TrainingStatus) -> None:
        for callback in self.callbacks:
            callback(status)


__all__ = ["JsonlSink", "CsvSink", "CallbackList"]
