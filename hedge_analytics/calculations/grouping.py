"""
Grouping and ordering utilities.
Pure functions - inputs are never mutated.
"""

from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Tuple, TypeVar, Union

from hedge_analytics.records import Record

T = TypeVar('T')


def group_by(
    items: Iterable[T],
    key: Union[str, Callable[[T], Any]]
) -> Dict[Any, List[T]]:
    """
    Partition items by a categorical key.

    Distinct keys appear in first-seen order; each group keeps the relative
    order of its items. No filtering or deduplication.

    Args:
        items: Sequence to partition
        key: Attribute name or key selector

    Returns:
        Insertion-ordered mapping from key value to items
    """
    selector = key if callable(key) else (lambda item: getattr(item, key))

    groups: Dict[Any, List[T]] = {}
    for item in items:
        groups.setdefault(selector(item), []).append(item)

    return groups


def _chronological_key(record: Record) -> Tuple[int, date]:
    # Invalid dates sort after every valid one
    if record.date is None:
        return (1, date.max)
    return (0, record.date)


def sort_chronologically(records: Iterable[Record]) -> List[Record]:
    """
    Return a new list sorted ascending by date.

    The sort is stable: records sharing a date keep their input order, and
    records with invalid dates go last in input order.
    """
    return sorted(records, key=_chronological_key)


def group_chronologically(records: Iterable[Record]) -> Dict[str, List[Record]]:
    """Group records by strategy, each group sorted ascending by date."""
    return {
        strategy: sort_chronologically(rows)
        for strategy, rows in group_by(records, 'strategy').items()
    }
