import math
import warnings

import numpy as np
import pytest

from sigmanet import NeuralNetwork
from sigmanet.errors import InvalidOption, TrainingOptionWarning
from sigmanet.training.options import TrainingOptions, validate_training_options


def _noop(*_args):
    return None


INVALID = {
    "iterations": ["should be a string", _noop, False, -1, 0, 2.5, math.inf],
    "error_thresh": ["no strings", _noop, 5, -1, False, 0, 1],
    "log": ["no strings", 4, None],
    "log_period": ["no strings", -50, _noop, False],
    "learning_rate": ["no strings", -50, 50, _noop, False],
    "momentum": ["no strings", -50, 50, _noop, False],
    "callback": ["no strings", 4, False],
    "callback_period": ["no strings", -50, _noop, False],
    "timeout": ["no strings", -50, _noop, False, math.nan],
}

VALID = {
    "iterations": [5000, 5000.0, np.int64(12)],
    "error_thresh": [0.008, np.float64(0.2)],
    "log": [False, True, _noop],
    "log_period": [40],
    "learning_rate": [0.5],
    "momentum": [0.8],
    "callback": [None, _noop],
    "callback_period": [40],
    "timeout": [40, 0.25, math.inf],
}


@pytest.mark.parametrize(
    "name,value", [(name, value) for name, values in INVALID.items() for value in values]
)
def test_invalid_values_raise(name, value):
    net = NeuralNetwork()
    with pytest.raises(InvalidOption) as excinfo:
        net.update_training_options({name: value})
    assert excinfo.value.name == name


@pytest.mark.parametrize(
    "name,value", [(name, value) for name, values in VALID.items() for value in values]
)
def test_valid_values_accepted(name, value):
    net = NeuralNetwork()
    opts = net.update_training_options({name: value})
    assert getattr(opts, name) == value


def test_defaults():
    opts = validate_training_options()
    assert opts == TrainingOptions()
    assert opts.iterations == 20000
    assert opts.error_thresh == 0.005
    assert opts.log is False
    assert opts.log_period == 10
    assert opts.learning_rate == 0.3
    assert opts.momentum == 0.1
    assert opts.callback is None
    assert opts.callback_period == 10
    assert opts.timeout == math.inf


def test_integral_values_are_coerced_to_int():
    opts = validate_training_options({"iterations": 25.0, "log_period": np.int32(5)})
    assert opts.iterations == 25 and type(opts.iterations) is int
    assert type(opts.log_period) is int


def test_unknown_options_are_ignored():
    net = NeuralNetwork()
    opts = net.update_training_options({"fakeProperty": "should be handled fine"})
    assert opts == net.train_defaults


def test_camel_case_aliases():
    opts = validate_training_options(
        {"errorThresh": 0.01, "learningRate": 0.4, "logPeriod": 3, "callbackPeriod": 7}
    )
    assert (opts.error_thresh, opts.learning_rate, opts.log_period, opts.callback_period) == (
        0.01,
        0.4,
        3,
        7,
    )
    # the snake_case spelling wins when both are present
    assert validate_training_options({"errorThresh": 0.01, "error_thresh": 0.02}).error_thresh == 0.02
    with pytest.raises(InvalidOption):
        validate_training_options({"learningRate": 2})


def test_network_overrides_become_defaults():
    net = NeuralNetwork(momentum=0.5, learning_rate=0.6)
    opts = net.update_training_options({"iterations": 10})
    assert opts.momentum == 0.5
    assert opts.learning_rate == 0.6
    assert net.update_training_options({"momentum": 0.2}).momentum == 0.2
    # options never leak from one call into the next
    assert net.update_training_options().momentum == 0.5
    with pytest.raises(InvalidOption):
        NeuralNetwork(momentum=1.5)


def test_keyword_options_merge_over_mapping():
    net = NeuralNetwork()
    opts = net.update_training_options({"iterations": 10}, iterations=20, timeout=5)
    assert opts.iterations == 20
    assert opts.timeout == 5.0


def test_invalid_train_opts_should_throw_flag():
    net = NeuralNetwork()
    with pytest.raises(InvalidOption):
        net.update_training_options({"timeout": "no strings"})

    net.invalid_train_opts_should_throw = False
    with pytest.warns(TrainingOptionWarning, match="timeout"):
        opts = net.update_training_options({"timeout": "no strings", "iterations": 30})
    assert opts.timeout == math.inf
    assert opts.iterations == 30


def test_lenient_mode_keeps_network_default():
    net = NeuralNetwork(momentum=0.4)
    net.invalid_train_opts_should_throw = False
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        opts = net.update_training_options({"momentum": 50})
    assert opts.momentum == 0.4
    assert any(issubclass(w.category, TrainingOptionWarning) for w in caught)


def test_log_fn_resolution():
    assert TrainingOptions(log=False).log_fn is None
    assert TrainingOptions(log=True).log_fn is print
    assert TrainingOptions(log=_noop).log_fn is _noop
