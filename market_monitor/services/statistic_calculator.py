"""Calculation of daily breadth statistics from instrument price histories."""
from collections import Counter, defaultdict
from itertools import accumulate
from typing import Dict, Iterable, List, Optional, Sequence
import datetime as dt

from market_monitor.domain.entities import (
    HistoricalData,
    InstrumentType,
    Statistic,
    StatisticScope,
)

SMA_50 = 50
SMA_200 = 200
VOLUME_SMA = 30


def _moving_average(prefix_sums: Sequence[float], index: int, period: int) -> Optional[float]:
    """Average of the period values ending at index, None if not enough values exist."""
    if index + 1 < period:
        return None
    return (prefix_sums[index + 1] - prefix_sums[index + 1 - period]) / period


def ritter_market_trend(
    close: float, previous_close: float, volume: int, average_volume: Optional[float]
) -> int:
    """Vote of a single instrument for the Ritter Market Trend.

    Rising prices on above-average volume and falling prices on below-average
    volume count as +1, the opposite combinations as -1.
    """
    if not average_volume:
        return 0
    if close > previous_close:
        return 1 if volume >= average_volume else -1
    if close < previous_close:
        return -1 if volume >= average_volume else 1
    return 0


def count_instrument(history: List[HistoricalData]) -> Dict[dt.date, Counter]:
    """Per-day contribution of one instrument to the statistic counts.

    The first day of a history has no previous close and contributes nothing.
    """
    quotes = sorted(history, key=lambda quote: quote.date)
    close_sums = list(accumulate((quote.close for quote in quotes), initial=0.0))
    volume_sums = list(accumulate((quote.volume for quote in quotes), initial=0))
    counts: Dict[dt.date, Counter] = {}

    for index in range(1, len(quotes)):
        current, previous = quotes[index], quotes[index - 1]
        day = Counter(number_of_instruments=1)

        if current.close > previous.close:
            day["number_advance"] += 1
        elif current.close < previous.close:
            day["number_decline"] += 1

        sma50 = _moving_average(close_sums, index, SMA_50)
        if sma50 is not None:
            day["number_above_sma50" if current.close > sma50 else "number_at_or_below_sma50"] += 1

        sma200 = _moving_average(close_sums, index, SMA_200)
        if sma200 is not None:
            day["number_above_sma200" if current.close > sma200 else "number_at_or_below_sma200"] += 1

        day["number_ritter_market_trend"] += ritter_market_trend(
            current.close,
            previous.close,
            current.volume,
            _moving_average(volume_sums, index, VOLUME_SMA),
        )
        counts[current.date] = day
    return counts


def calculate_statistics(
    instrument_type: InstrumentType,
    histories: Iterable[List[HistoricalData]],
    scope: StatisticScope = None,
) -> List[Statistic]:
    """Aggregate the histories of all instruments into one statistic per day, oldest first."""
    totals: Dict[dt.date, Counter] = defaultdict(Counter)
    for history in histories:
        for day, counts in count_instrument(history).items():
            totals[day].update(counts)

    return [
        Statistic.for_scope(day, instrument_type, scope, **totals[day])
        for day in sorted(totals)
    ]
