"""Reporting utilities for sigmanet."""

from .plots import PlotAdapter
from .progress import CallbackList, CsvSink, JsonlSink

__all__ = ["CallbackList", "CsvSink", "JsonlSink", "PlotAdapter"]
