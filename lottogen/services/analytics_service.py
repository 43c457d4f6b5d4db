"""Chart data over historical draws: distributions, hot/cold, pairs."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import combinations

from lottogen.services.history_service import HistoricalDraw


DEFAULT_TOP_COUNT = 10
DEFAULT_RANGE_SIZE = 10
DEFAULT_MIN_PAIR_OCCURRENCES = 5

DrawLike = HistoricalDraw | Sequence[int]


@dataclass(frozen=True)
class NumberFrequency:
    number: int
    count: int
    percentage: float


@dataclass(frozen=True)
class OddEvenStats:
    odd: int
    even: int
    odd_percentage: float
    even_percentage: float


@dataclass(frozen=True)
class RangeBucket:
    range: str
    count: int
    percentage: float


@dataclass(frozen=True)
class NumberSetStats:
    odd_count: int
    even_count: int
    sum: int
    average: float
    range_spread: int
    consecutive_count: int


@dataclass(frozen=True)
class NumberPair:
    pair: tuple[int, int]
    count: int


def _numbers(draw: DrawLike) -> Sequence[int]:
    return draw.numbers if isinstance(draw, HistoricalDraw) else draw


def _pct(part: int, total: int) -> float:
    return (part / total) * 100 if total > 0 else 0.0


def frequency_distribution(draws: Sequence[DrawLike], max_number: int) -> list[NumberFrequency]:
    """Counts for every number 1..max_number, including those never drawn."""

    counts = {n: 0 for n in range(1, max_number + 1)}
    total = 0
    for draw in draws:
        for n in _numbers(draw):
            if 1 <= n <= max_number:
                counts[n] += 1
                total += 1

    return [NumberFrequency(number=n, count=c, percentage=_pct(c, total)) for n, c in counts.items()]


def hot_numbers(distribution: Sequence[NumberFrequency], count: int = DEFAULT_TOP_COUNT) -> list[NumberFrequency]:
    return sorted(distribution, key=lambda f: (-f.count, f.number))[:count]


def cold_numbers(distribution: Sequence[NumberFrequency], count: int = DEFAULT_TOP_COUNT) -> list[NumberFrequency]:
    return sorted(distribution, key=lambda f: (f.count, f.number))[:count]


def odd_even_ratio(draws: Sequence[DrawLike]) -> OddEvenStats:
    odd = even = 0
    for draw in draws:
        for n in _numbers(draw):
            if n % 2 == 0:
                even += 1
            else:
                odd += 1
    total = odd + even
    return OddEvenStats(odd=odd, even=even, odd_percentage=_pct(odd, total), even_percentage=_pct(even, total))


def range_distribution(
    draws: Sequence[DrawLike],
    max_number: int,
    range_size: int = DEFAULT_RANGE_SIZE,
) -> list[RangeBucket]:
    """Bucket drawn numbers into 1-10, 11-20, ... (last bucket capped at max_number)."""

    buckets: dict[str, int] = {}
    for start in range(1, max_number + 1, range_size):
        buckets[f"{start}-{min(start + range_size - 1, max_number)}"] = 0

    total = 0
    for draw in draws:
        for n in _numbers(draw):
            if not 1 <= n <= max_number:
                continue
            start = ((n - 1) // range_size) * range_size + 1
            buckets[f"{start}-{min(start + range_size - 1, max_number)}"] += 1
            total += 1

    return [RangeBucket(range=key, count=c, percentage=_pct(c, total)) for key, c in buckets.items()]


def analyze_number_set(numbers: Sequence[int]) -> NumberSetStats:
    if not numbers:
        return NumberSetStats(0, 0, 0, 0.0, 0, 0)

    ordered = sorted(numbers)
    odd = sum(1 for n in ordered if n % 2 != 0)
    total = sum(ordered)
    consecutive = sum(1 for a, b in zip(ordered, ordered[1:]) if b - a == 1)
    return NumberSetStats(
        odd_count=odd,
        even_count=len(ordered) - odd,
        sum=total,
        average=total / len(ordered),
        range_spread=ordered[-1] - ordered[0],
        consecutive_count=consecutive,
    )


def number_pairs(draws: Sequence[DrawLike], min_occurrences: int = DEFAULT_MIN_PAIR_OCCURRENCES) -> list[NumberPair]:
    """Pairs drawn together at least ``min_occurrences`` times, most common first."""

    counter: Counter[tuple[int, int]] = Counter()
    for draw in draws:
        counter.update(combinations(sorted(_numbers(draw)), 2))

    pairs = [NumberPair(pair=p, count=c) for p, c in counter.items() if c >= min_occurrences]
    return sorted(pairs, key=lambda p: (-p.count, p.pair))
