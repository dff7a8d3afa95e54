import json

import numpy as np
import pytest

from sigmanet.config import load_training_options
from sigmanet.core.lookup import build_lookup, format_data, to_array, to_hash
from sigmanet.core.types import Sample
from sigmanet.errors import InvalidInputShape
from sigmanet.training.options import validate_training_options


def test_build_lookup_uses_first_appearance_order():
    lookup = build_lookup([{"r": 1, "g": 0}, {"b": 1, "r": 0.5}])
    assert lookup == {"r": 0, "g": 1, "b": 2}


def test_to_array_and_back():
    lookup = {"r": 0, "g": 1, "b": 2}
    array = to_array(lookup, {"b": 0.25, "r": 1})
    assert np.array_equal(array, np.array([1.0, 0.0, 0.25]))
    assert to_hash(lookup, array) == {"r": 1.0, "g": 0.0, "b": 0.25}
    with pytest.raises(InvalidInputShape):
        to_array(lookup, {"alpha": 1.0})


def test_format_data_accepts_several_sample_forms():
    data = [
        {"input": [0, 1], "output": [1]},
        ([1, 0], [1]),
        Sample(input=np.array([1.0, 1.0]), output=np.array([0.0])),
    ]
    samples, input_lookup, output_lookup = format_data(data)
    assert input_lookup is None and output_lookup is None
    assert [s.input.tolist() for s in samples] == [[0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    assert all(s.output.dtype == np.float64 for s in samples)


def test_format_data_builds_and_reuses_lookups():
    data = [
        {"input": {"r": 0.03, "g": 0.7}, "output": {"black": 1}},
        {"input": {"r": 0.16, "b": 0.2}, "output": {"white": 1}},
    ]
    samples, input_lookup, output_lookup = format_data(data)
    assert input_lookup == {"r": 0, "g": 1, "b": 2}
    assert output_lookup == {"black": 0, "white": 1}
    assert samples[1].input.tolist() == [0.16, 0.0, 0.2]
    assert samples[1].output.tolist() == [0.0, 1.0]

    again, reused_in, reused_out = format_data(
        [{"input": {"g": 1}, "output": {"white": 1}}], input_lookup, output_lookup
    )
    assert reused_in is input_lookup and reused_out is output_lookup
    assert again[0].input.tolist() == [0.0, 1.0, 0.0]


@pytest.mark.parametrize(
    "item",
    [{"input": [0, 1]}, [1, 2, 3], 5, {"input": ["x", "y"], "output": [1]}],
)
def test_format_data_rejects_malformed_samples(item):
    with pytest.raises(InvalidInputShape):
        format_data([item])


def test_load_training_options_json(tmp_path):
    path = tmp_path / "options.json"
    path.write_text(json.dumps({"iterations": 50, "errorThresh": 0.01, "unknown": True}))
    options = load_training_options(path)
    assert options["iterations"] == 50
    opts = validate_training_options(options)
    assert opts.iterations == 50
    assert opts.error_thresh == 0.01


def test_load_training_options_yaml_section(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "run.yaml"
    path.write_text("model:\n  hidden: [3]\ntrain:\n  iterations: 40\n  learning_rate: 0.5\n")
    assert load_training_options(path, section="train") == {"iterations": 40, "learning_rate": 0.5}
    with pytest.raises(KeyError):
        load_training_options(path, section="missing")


def test_load_training_options_rejects_bad_files(tmp_path):
    listing = tmp_path / "options.json"
    listing.write_text("[1, 2]")
    with pytest.raises(TypeError):
        load_training_options(listing)

    other = tmp_path / "options.toml"
    other.write_text("iterations = 5")
    with pytest.raises(ValueError):
        load_training_options(other)


@pytest.mark.parametrize("data", [5, None, 3.5])
def test_format_data_rejects_non_iterable_data(data):
    with pytest.raises(InvalidInputShape):
        format_data(data)


def test_load_training_options_dotted_section_and_empty_file(tmp_path):
    path = tmp_path / "stages.json"
    path.write_text(json.dumps({"stages": {"finetune": {"iterations": 7}, "warmup": 3}}))
    assert load_training_options(path, section="stages.finetune") == {"iterations": 7}
    with pytest.raises(KeyError):
        load_training_options(path, section="stages.missing")
    with pytest.raises(TypeError):
        load_training_options(path, section="stages.warmup")

    empty = tmp_path / "empty.json"
    empty.write_text("")
    assert load_training_options(empty) == {}
