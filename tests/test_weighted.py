"""Tests for the weighted random set."""

import math

import pytest

from conftest import ScriptedRandomSource
from passforge.services.weighted import WeightedEntry, WeightedRandomSet, WeightError

TRIANGLE = [1.0, 2.0, 3.0, 4.0, 5.0, 4.0, 3.0, 2.0, 1.0]


def _frequencies(weighted_set, samples):
    counts = {}
    for _ in range(samples):
        value = weighted_set.next()
        counts[value] = counts.get(value, 0) + 1
    return {k: v / samples for k, v in counts.items()}


def test_triangular_distribution():
    entries = [WeightedEntry(i, w) for i, w in enumerate(TRIANGLE)]
    weighted_set = WeightedRandomSet(entries)

    frequencies = _frequencies(weighted_set, 10_000)

    expected = [0.04, 0.08, 0.12, 0.16, 0.2, 0.16, 0.12, 0.08, 0.04]
    for value, probability in enumerate(expected):
        assert abs(frequencies.get(value, 0.0) - probability) < 0.02


def test_seeded_source_is_reproducible(seeded_source):
    entries = [WeightedEntry(i, w) for i, w in enumerate(TRIANGLE)]
    first = WeightedRandomSet(entries, seeded_source)
    draws = [first.next() for _ in range(50)]

    seeded_source.seed(20200101)
    second = WeightedRandomSet(entries, seeded_source)
    assert [second.next() for _ in range(50)] == draws


def test_total_weight_and_length():
    weighted_set = WeightedRandomSet([WeightedEntry("a", 0.25), WeightedEntry("b", 0.75)])
    assert weighted_set.total_weight == 1.0
    assert len(weighted_set) == 2


def test_intervals_are_contiguous():
    # Draws at each boundary land in the interval starting there.
    source = ScriptedRandomSource([0.0, 0.1, 0.1 + 1e-12, 0.3, 0.6, 0.9999])
    weighted_set = WeightedRandomSet(
        [WeightedEntry("a", 1.0), WeightedEntry("b", 2.0), WeightedEntry("c", 3.0), WeightedEntry("d", 4.0)],
        source,
    )
    assert [weighted_set.next() for _ in range(6)] == ["a", "b", "b", "c", "d", "d"]


def test_zero_weight_entry_is_unreachable():
    # 0.5 * 2.0 == 1.0 sits exactly on the zero width interval of "b".
    source = ScriptedRandomSource([0.0, 0.4999, 0.5, 0.9])
    weighted_set = WeightedRandomSet(
        [WeightedEntry("a", 1.0), WeightedEntry("b", 0.0), WeightedEntry("c", 1.0)], source
    )
    assert [weighted_set.next() for _ in range(4)] == ["a", "a", "c", "c"]
    assert weighted_set.probability("b") == 0.0


def test_draw_at_total_weight_uses_last_reachable_interval():
    source = ScriptedRandomSource([1.0])
    weighted_set = WeightedRandomSet(
        [WeightedEntry("a", 1.0), WeightedEntry("b", 1.0), WeightedEntry("c", 0.0)], source
    )
    assert weighted_set.next() == "b"


def test_each_draw_consumes_one_uniform_value():
    source = ScriptedRandomSource([0.3, 0.7])
    weighted_set = WeightedRandomSet([WeightedEntry("x", 1.0), WeightedEntry("y", 1.0)], source)
    for _ in range(7):
        weighted_set.next()
    assert source.draws == 7


def test_shared_values_accumulate_weight():
    weighted_set = WeightedRandomSet(
        [WeightedEntry("a", 1.0), WeightedEntry("b", 2.0), WeightedEntry("a", 1.0)]
    )
    assert weighted_set.probability("a") == pytest.approx(0.5)
    assert weighted_set.probability("b") == pytest.approx(0.5)
    assert weighted_set.probability("zzz") == 0.0


def test_insertion_order_does_not_change_distribution():
    entries = [WeightedEntry(chr(ord("a") + i), w) for i, w in enumerate(TRIANGLE)]
    forward = WeightedRandomSet(entries)
    backward = WeightedRandomSet(list(reversed(entries)))
    for entry in entries:
        assert forward.probability(entry.value) == pytest.approx(backward.probability(entry.value))


def test_iteration_streams_samples():
    weighted_set = WeightedRandomSet([WeightedEntry("q", 1.0)])
    stream = iter(weighted_set)
    assert [next(stream) for _ in range(3)] == ["q", "q", "q"]


@pytest.mark.parametrize("entries", [
    [],
    [WeightedEntry("a", 0.0), WeightedEntry("b", 0.0)],
    [WeightedEntry("a", 1.0), WeightedEntry("b", -0.5)],
    [WeightedEntry("a", math.nan)],
    [WeightedEntry("a", math.inf)],
])
def test_invalid_weights_fail_at_construction(entries):
    with pytest.raises(WeightError):
        WeightedRandomSet(entries)
