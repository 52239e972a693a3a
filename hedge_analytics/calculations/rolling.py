"""
Rolling window utilities.
Trailing fixed-count averages over chronologically ordered values.
"""

from typing import List, Sequence

from hedge_analytics.calculations.statistics import sequential_sum

DEFAULT_WINDOW = 5


class RollingWindowError(Exception):
    """Raised when a rolling window is misconfigured."""
    pass


def window_count(length: int, window: int) -> int:
    """Number of full trailing windows in a series of `length` points."""
    if window < 1:
        raise RollingWindowError(f"Window must be >= 1, got {window}")
    return max(0, length - window + 1)


def trailing_means(values: Sequence[float], window: int = DEFAULT_WINDOW) -> List[float]:
    """
    Calculate the trailing mean at every position with a full window.

    The first `window - 1` positions are skipped, not padded.

    Args:
        values: Values in chronological order
        window: Number of points per window

    Returns:
        List of length max(0, len(values) - window + 1)

    Example:
        values = [1, 2, 3, 4] with window=3:
        - mean(1, 2, 3) = 2.0
        - mean(2, 3, 4) = 3.0
        Returns: [2.0, 3.0]

    Raises:
        RollingWindowError: If window < 1
    """
    if window_count(len(values), window) == 0:
        return []

    means = []
    for i in range(window - 1, len(values)):
        window_values = values[i - window + 1:i + 1]
        means.append(sequential_sum(window_values) / window)

    return means
