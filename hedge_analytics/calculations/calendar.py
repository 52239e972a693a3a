"""
Calendar bucketing - month-of-year buckets across all years.
"""

from datetime import date
from typing import Iterable, List, Optional

from hedge_analytics.records import Record
from hedge_analytics.calculations.statistics import sequential_sum

MONTH_LABELS = [
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
]


def month_index(value: Optional[date]) -> Optional[int]:
    """Zero-based month index (Jan = 0), or None for an invalid date."""
    if value is None:
        return None
    return value.month - 1


def monthly_average_returns(records: Iterable[Record]) -> List[float]:
    """
    Average return per calendar month, pooled across years.

    January 2022 and January 2023 land in the same bucket. An empty bucket
    averages to 0 (count guarded to 1).

    Args:
        records: Records of one strategy

    Returns:
        Twelve fractional averages, Jan..Dec
    """
    buckets: List[List[float]] = [[] for _ in MONTH_LABELS]

    for record in records:
        idx = month_index(record.date)
        if idx is not None:
            buckets[idx].append(record.period_return)

    return [sequential_sum(bucket) / (len(bucket) or 1) for bucket in buckets]
