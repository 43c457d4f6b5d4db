from __future__ import annotations

import pytest

from lottogen.services.analytics_service import (
    analyze_number_set,
    cold_numbers,
    frequency_distribution,
    hot_numbers,
    number_pairs,
    odd_even_ratio,
    range_distribution,
)
from lottogen.services.history_service import HistoricalDraw

CORPUS = [
    [1, 2, 3, 4, 5, 6],
    [7, 8, 9, 10, 11, 12],
    [1, 2, 3, 13, 14, 15],
    [1, 2, 16, 17, 18, 19],
    [20, 21, 22, 23, 24, 25],
]


def test_frequency_distribution_scenario():
    distribution = {f.number: f for f in frequency_distribution(CORPUS, max_number=25)}

    assert len(distribution) == 25
    assert distribution[1].count == 3
    assert distribution[2].count == 3
    assert distribution[3].count == 2
    assert distribution[1].percentage == pytest.approx(10.0)


def test_distribution_accepts_historical_draws():
    draws = [HistoricalDraw(date=None, numbers=tuple(n)) for n in CORPUS]
    assert frequency_distribution(draws, 25) == frequency_distribution(CORPUS, 25)


def test_distribution_of_nothing():
    distribution = frequency_distribution([], max_number=3)
    assert [(f.number, f.count, f.percentage) for f in distribution] == [(1, 0, 0.0), (2, 0, 0.0), (3, 0, 0.0)]


def test_hot_and_cold():
    distribution = frequency_distribution(CORPUS, max_number=26)

    assert [f.number for f in hot_numbers(distribution, 3)] == [1, 2, 3]
    assert [f.number for f in cold_numbers(distribution, 1)] == [26]


def test_odd_even_ratio():
    stats = odd_even_ratio([[1, 2, 3, 4], [5, 7]])

    assert (stats.odd, stats.even) == (4, 2)
    assert stats.odd_percentage == pytest.approx(66.666, rel=1e-3)
    assert odd_even_ratio([]).odd_percentage == 0.0


def test_range_distribution():
    buckets = range_distribution([[1, 10, 11, 49], [45]], max_number=49)

    assert [b.range for b in buckets] == ["1-10", "11-20", "21-30", "31-40", "41-49"]
    assert [b.count for b in buckets] == [2, 1, 0, 0, 2]
    assert buckets[0].percentage == pytest.approx(40.0)


def test_analyze_number_set():
    stats = analyze_number_set([12, 3, 4, 5, 20, 21])

    assert stats.odd_count == 3
    assert stats.even_count == 3
    assert stats.sum == 65
    assert stats.average == pytest.approx(65 / 6)
    assert stats.range_spread == 18
    assert stats.consecutive_count == 3
    assert analyze_number_set([]).sum == 0


def test_number_pairs():
    pairs = number_pairs(CORPUS, min_occurrences=2)

    assert [(p.pair, p.count) for p in pairs] == [((1, 2), 3), ((1, 3), 2), ((2, 3), 2)]
    assert number_pairs(CORPUS, min_occurrences=4) == []
