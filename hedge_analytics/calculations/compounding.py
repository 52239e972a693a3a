"""
Compounding utilities.
Turns periodic returns into a cumulative index level.
"""

from typing import List, Sequence

BASE_INDEX_LEVEL = 100.0


def compound_index(returns: Sequence[float], base: float = BASE_INDEX_LEVEL) -> List[float]:
    """
    Compound returns into an index starting from `base`.

    Formula: e_0 = base × (1 + r_0), e_t = e_{t-1} × (1 + r_t)

    The base level itself is not emitted: the first point already carries
    one period of compounding. The chain is kept unrounded.

    Args:
        returns: Fractional returns in chronological order
        base: Reference level treated as the value before the first period

    Returns:
        Index levels, same length as `returns`

    Example:
        returns = [0.002, 0.005]:
        - 100 × 1.002 = 100.2
        - 100.2 × 1.005 = 100.701
        Returns: [100.2, 100.701]
    """
    levels = []
    previous = base

    for r in returns:
        previous = previous * (1 + r)
        levels.append(previous)

    return levels
