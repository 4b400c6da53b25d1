import itertools

import numpy as np
import pytest
from numpy.random import default_rng

from bktreex import config as bx_config
from bktreex.core.metrics import (
    Metric,
    MetricRegistry,
    available_metrics,
    get_metric,
    register_metric,
    resolve_metric,
)
from bktreex.metrics import edit_distance, indel_distance
from tests.utils.datasets import random_words


@pytest.fixture(autouse=True)
def reset_runtime_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("BKTREEX_METRIC", raising=False)
    bx_config.reset_runtime_config_cache()
    yield
    bx_config.reset_runtime_config_cache()


@pytest.mark.parametrize(
    ("lhs", "rhs", "expected"),
    [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("intention", "execution", 5),
        ("", "abc", 3),
        ("abc", "", 3),
        ("", "", 0),
        ("abc", "abc", 0),
        ("abc", "acb", 2),
        ("cat", "bad", 2),
        ("cat", "cats", 1),
    ],
)
def test_edit_distance_known_values(lhs: str, rhs: str, expected: int):
    assert edit_distance(lhs, rhs) == expected


@pytest.mark.parametrize(
    ("lhs", "rhs", "expected"),
    [
        ("kitten", "sitting", 5),
        ("abc", "acb", 2),
        ("cat", "bat", 2),
        ("", "ab", 2),
        ("same", "same", 0),
    ],
)
def test_indel_distance_known_values(lhs: str, rhs: str, expected: int):
    assert indel_distance(lhs, rhs) == expected


def test_edit_distance_handles_unicode():
    assert edit_distance("café", "cafe") == 1
    assert edit_distance("日本語", "日本") == 1


@pytest.mark.parametrize("kernel", [edit_distance, indel_distance])
def test_metric_axioms_hold_on_random_words(kernel):
    rng = default_rng(1234)
    words = random_words(rng, 18, min_length=0, max_length=6, alphabet="abc")

    for a in words:
        assert kernel(a, a) == 0
    for a, b in itertools.product(words, repeat=2):
        d = kernel(a, b)
        assert d >= 0
        assert d == kernel(b, a)
        assert (d == 0) == (a == b)
    for a, b, c in itertools.product(words, repeat=3):
        assert kernel(a, c) <= kernel(a, b) + kernel(b, c)


def test_pairwise_matches_pointwise():
    metric = get_metric("levenshtein")
    lhs = ["cat", "dog", ""]
    rhs = ["cats", "bat", "dig", "do"]

    distances = metric.pairwise(lhs, rhs)
    manual = np.asarray([[edit_distance(a, b) for b in rhs] for a in lhs])

    assert distances.shape == (3, 4)
    assert distances.dtype == np.int64
    assert np.array_equal(distances, manual)


def test_pairwise_with_empty_side_returns_empty_matrix():
    metric = get_metric("levenshtein")
    assert metric.pairwise([], ["a", "b"]).shape == (0, 2)
    assert metric.pairwise(["a"], []).shape == (1, 0)


def test_registry_rejects_duplicates_unless_overwrite():
    registry = MetricRegistry()
    metric = Metric(name="Levenshtein", kernel=edit_distance)
    registry.register(metric)

    with pytest.raises(ValueError):
        registry.register(Metric(name="levenshtein", kernel=indel_distance))

    registry.register(Metric(name="levenshtein", kernel=indel_distance), overwrite=True)
    assert registry.get("LEVENSHTEIN").kernel is indel_distance
    assert registry.names() == ("levenshtein",)


def test_registry_unknown_metric_raises_key_error():
    with pytest.raises(KeyError):
        get_metric("hamming-ish")


def test_builtin_metrics_registered():
    names = available_metrics()
    assert "levenshtein" in names
    assert "indel" in names


def test_default_metric_follows_runtime_config(monkeypatch: pytest.MonkeyPatch):
    assert get_metric().name == "levenshtein"

    monkeypatch.setenv("BKTREEX_METRIC", "INDEL")
    bx_config.reset_runtime_config_cache()

    assert get_metric().name == "indel"


def test_register_metric_makes_it_resolvable():
    discrete = Metric(name="discrete-test", kernel=lambda a, b: 0 if a == b else 1)
    register_metric(discrete, overwrite=True)

    assert "discrete-test" in available_metrics()
    assert resolve_metric("discrete-test") is discrete
    assert resolve_metric(discrete) is discrete
