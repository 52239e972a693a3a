"""
Aggregate statistics and rounding primitives.
Pure functions for per-strategy return summaries.
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Iterable, List, NamedTuple, Sequence

TRADING_DAYS_PER_YEAR = 252

# Fixed-point output stops here; larger magnitudes use exponent form
FIXED_NOTATION_LIMIT = 1e21
FIXED_NOTATION_DIGITS = 22


class ReturnSummary(NamedTuple):
    """Scalar summary of one return sequence."""
    mean: float
    volatility: float
    worst: float
    count: int


def sequential_sum(values: Iterable[float]) -> float:
    """
    Sum floats strictly left to right.

    Builtin sum() compensates rounding error on recent interpreters, which
    would shift results against plain accumulation.
    """
    total = 0.0
    for value in values:
        total += value
    return total


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round to `places` decimals with ties going toward +infinity.

    Formula: floor(value * 10^places + 0.5) / 10^places

    The half is compared against the exact fractional part instead of being
    added, so 0.49999999999999994 rounds down and odd integers above 2^52
    stay put.

    Args:
        value: Number to round
        places: Decimal places

    Returns:
        Rounded float. Non-finite values, and values too large to scale,
        are returned unchanged.
    """
    scale = 10 ** places
    scaled = value * scale
    if not math.isfinite(scaled):
        return value

    rounded = math.floor(scaled)
    if scaled - rounded >= 0.5:
        rounded += 1
    return rounded / scale


def format_fixed(value: float, places: int = 2) -> str:
    """
    Format with a fixed number of decimals.

    Rounds the exact binary value of `value`, ties away from zero, so
    0.125 -> "0.13" and -0.125 -> "-0.13". Magnitudes of 1e21 and above
    print in shortest exponent form ("1e+26"), as toFixed does.

    Args:
        value: Number to format
        places: Decimal places

    Returns:
        Formatted string ("Infinity"/"-Infinity"/"NaN" for non-finite input)
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if abs(value) >= FIXED_NOTATION_LIMIT:
        return repr(float(value))

    # Negative zero prints unsigned
    if value == 0:
        value = 0.0

    quantum = Decimal(1).scaleb(-places)
    context = Context(prec=FIXED_NOTATION_DIGITS + places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=context))


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; an empty sequence averages to 0."""
    return sequential_sum(values) / (len(values) or 1)


def population_std(values: Sequence[float]) -> float:
    """
    Population standard deviation (divide by n, not n - 1).

    Formula: σ = sqrt(mean((r - μ)^2))
    """
    mu = mean(values)
    squared = sequential_sum((v - mu) ** 2 for v in values)
    return math.sqrt(squared / (len(values) or 1))


def summarize_returns(returns: Sequence[float]) -> ReturnSummary:
    """
    Summarize one return sequence.

    Args:
        returns: Fractional returns

    Returns:
        ReturnSummary with mean, population volatility and worst single
        return. An empty sequence yields zeros.
    """
    values: List[float] = list(returns)

    return ReturnSummary(
        mean=mean(values),
        volatility=population_std(values),
        worst=min(values) if values else 0.0,
        count=len(values),
    )


def annualize_mean(mu: float, periods_per_year: int = TRADING_DAYS_PER_YEAR) -> float:
    """Naive annualization: μ × periods (no compounding)."""
    return mu * periods_per_year


def annualize_volatility(sigma: float, periods_per_year: int = TRADING_DAYS_PER_YEAR) -> float:
    """Square-root-of-time scaling: σ × √periods."""
    return sigma * math.sqrt(periods_per_year)
