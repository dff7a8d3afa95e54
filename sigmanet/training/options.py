"""Training option defaults and the rule table that validates them."""

from __future__ import annotations

import math
import numbers
import warnings
from dataclasses import dataclass, fields, replace
from typing import Callable, Dict, Mapping, Tuple

from ..core.types import TrainingStatus
from ..errors import InvalidOption, TrainingOptionWarning

LogFn = Callable[[str], object]
ProgressCallback = Callable[[TrainingStatus], object]


@dataclass(frozen=True)
class TrainingOptions:
    """Fully populated, validated options for one training run."""

    iterations: int = 20000
    error_thresh: float = 0.005
    log: bool | LogFn = False
    log_period: int = 10
    learning_rate: float = 0.3
    momentum: float = 0.1
    callback: ProgressCallback | None = None
    callback_period: int = 10
    timeout: float = math.inf

    @property
    def log_fn(self) -> LogFn | None:
        """Resolve ``log`` into a one-argument sink, or ``None`` when disabled."""

        if callable(self.log):
            return self.log
        return print if self.log else None

    def as_dict(self) -> Dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class OptionRule:
    """Predicate and coercion applied to one named option."""

    name: str
    predicate: Callable[[object], bool]
    coerce: Callable[[object], object]
    reason: str

    def check(self, value: object) -> object:
        if not self.predicate(value):
            raise InvalidOption(self.name, self.reason, value)
        return self.coerce(value)


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _positive_integer(value: object) -> bool:
    return _is_number(value) and value > 0 and float(value).is_integer()


def _unit_interval(value: object) -> bool:
    return _is_number(value) and 0 < value < 1


def _positive_number(value: object) -> bool:
    return _is_number(value) and value > 0


def _identity(value: object) -> object:
    return value


RULES: Tuple[OptionRule, ...] = (
    OptionRule("iterations", _positive_integer, int, "must be an integer greater than 0"),
    OptionRule("error_thresh", _unit_interval, float, "must be a number strictly between 0 and 1"),
    OptionRule(
        "log",
        lambda value: isinstance(value, bool) or callable(value),
        _identity,
        "must be a boolean or a callable",
    ),
    OptionRule("log_period", _positive_integer, int, "must be an integer greater than 0"),
    OptionRule("learning_rate", _unit_interval, float, "must be a number strictly between 0 and 1"),
    OptionRule("momentum", _unit_interval, float, "must be a number strictly between 0 and 1"),
    OptionRule(
        "callback",
        lambda value: value is None or callable(value),
        _identity,
        "must be a callable or None",
    ),
    OptionRule("callback_period", _positive_integer, int, "must be an integer greater than 0"),
    OptionRule("timeout", _positive_number, float, "must be a number of seconds greater than 0"),
)

# camelCase spellings used by option files written for other trainers
ALIASES: Mapping[str, str] = {
    "errorThresh": "error_thresh",
    "logPeriod": "log_period",
    "learningRate": "learning_rate",
    "callbackPeriod": "callback_period",
}


def _resolve_names(options: Mapping[str, object]) -> Dict[str, object]:
    resolved = {key: value for key, value in options.items() if key not in ALIASES}
    for alias, name in ALIASES.items():
        if alias in options:
            resolved.setdefault(name, options[alias])
    return resolved


def validate_training_options(
    options: Mapping[str, object] | None = None,
    *,
    defaults: TrainingOptions | None = None,
    strict: bool = True,
) -> TrainingOptions:
    """Merge ``options`` over ``defaults`` and check every recognised value.

    Unknown names are dropped.  With ``strict`` a rejected value raises
    :class:`InvalidOption`; otherwise it is reported as a
    :class:`TrainingOptionWarning` and the default is kept.
    """

    base = defaults or TrainingOptions()
    supplied = _resolve_names(options or {})
    accepted: Dict[str, object] = {}
    for rule in RULES:
        if rule.name not in supplied:
            continue
        try:
            accepted[rule.name] = rule.check(supplied[rule.name])
        except InvalidOption as exc:
            if strict:
                raise
            fallback = getattr(base, rule.name)
            warnings.warn(
                f"{exc}; using {fallback!r} instead",
                TrainingOptionWarning,
                stacklevel=2,
            )
    return replace(base, **accepted)


__all__ = [
    "TrainingOptions",
    "OptionRule",
    "RULES",
    "ALIASES",
    "validate_training_options",
]
