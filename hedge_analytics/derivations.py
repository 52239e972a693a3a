"""
Derivation functions - one per analytical view of the hedge story.
Pure functions: each takes the raw records and returns fresh labeled data.
"""

from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from hedge_analytics.records import Record
from hedge_analytics.calculations.grouping import (
    group_by,
    group_chronologically,
    sort_chronologically,
)
from hedge_analytics.calculations.calendar import MONTH_LABELS, monthly_average_returns
from hedge_analytics.calculations.rolling import DEFAULT_WINDOW, trailing_means
from hedge_analytics.calculations.compounding import BASE_INDEX_LEVEL, compound_index
from hedge_analytics.calculations.statistics import (
    TRADING_DAYS_PER_YEAR,
    annualize_mean,
    annualize_volatility,
    format_fixed,
    round_half_up,
    summarize_returns,
)

DEFAULT_PALETTE = ['#1e88e5', '#f27f3d', '#43a047', '#8e24aa', '#3949ab', '#00897b']

HISTOGRAM_BINS = 11
HISTOGRAM_BIN_WIDTH = 0.1
HISTOGRAM_OFFSET = 0.05


def series_color(index: int, palette: Optional[Sequence[str]] = None) -> str:
    """Color for the group at first-seen `index`, cycling through the palette."""
    palette = palette or DEFAULT_PALETTE
    return palette[index % len(palette)]


def monthly_grid(
    records: Sequence[Record],
    palette: Optional[Sequence[str]] = None
) -> Dict[str, Any]:
    """
    Average monthly return per strategy, as percentages.

    Args:
        records: Raw records
        palette: Series colors

    Returns:
        {'months': [...12], 'datasets': [{'label', 'data', 'color'}, ...]}
        where each value is round(avg × 100, 2) percent
    """
    datasets = []
    for index, (strategy, rows) in enumerate(group_by(records, 'strategy').items()):
        averages = monthly_average_returns(rows)
        datasets.append({
            'label': strategy,
            'data': [round_half_up(avg * 10000, 0) / 100 for avg in averages],
            'color': series_color(index, palette),
        })

    return {'months': list(MONTH_LABELS), 'datasets': datasets}


def histogram_bin_indices(values: Sequence[float]) -> np.ndarray:
    """
    Bin for each return: floor((value + 0.05) × 10) clamped to [0, 10].

    Out-of-range returns fold into the edge bins instead of being dropped.
    """
    raw = np.floor((np.asarray(values, dtype=float) + HISTOGRAM_OFFSET) * 10)
    return np.clip(raw, 0, HISTOGRAM_BINS - 1).astype(int)


def histogram_labels() -> List[str]:
    """Lower edge of each bin: (i / 10 - 0.05) with two decimals."""
    return [format_fixed(i / 10 - HISTOGRAM_OFFSET) for i in range(HISTOGRAM_BINS)]


def return_histogram(records: Sequence[Record]) -> Dict[str, List]:
    """
    Fixed 11-bin histogram of returns.

    Args:
        records: Raw records

    Returns:
        {'labels': [...11], 'bins': [...11]}; bins sum to len(records)
    """
    indices = histogram_bin_indices([r.period_return for r in records])
    counts = np.bincount(indices, minlength=HISTOGRAM_BINS)

    return {
        'labels': histogram_labels(),
        'bins': [int(c) for c in counts],
    }


def rolling_correlation(
    records: Sequence[Record],
    window: int = DEFAULT_WINDOW
) -> Dict[str, List]:
    """
    Trailing mean of correlation over the whole (ungrouped) series.

    Args:
        records: Raw records; sorted ascending by date here
        window: Points per window

    Returns:
        {'labels', 'values'}, shorter than the input by window - 1
    """
    ordered = sort_chronologically(records)
    means = trailing_means([r.correlation for r in ordered], window)

    return {
        'labels': [r.date_label for r in ordered[window - 1:]],
        'values': [round_half_up(m) for m in means],
    }


def equity_curves(
    records: Sequence[Record],
    palette: Optional[Sequence[str]] = None
) -> List[Dict[str, Any]]:
    """
    Compounded equity index per strategy, starting from 100.

    Args:
        records: Raw records
        palette: Series colors

    Returns:
        One {'label', 'labels', 'data', 'color'} per strategy, first-seen order
    """
    curves = []
    for index, (strategy, rows) in enumerate(group_chronologically(records).items()):
        levels = compound_index([r.period_return for r in rows], base=BASE_INDEX_LEVEL)
        curves.append({
            'label': strategy,
            'labels': [r.date_label for r in rows],
            'data': [round_half_up(level) for level in levels],
            'color': series_color(index, palette),
        })

    return curves


def beta_series(records: Sequence[Record]) -> Dict[str, List]:
    """Beta per record in input order. No smoothing despite the chart name."""
    return {
        'labels': [r.date_label for r in records],
        'values': [r.beta for r in records],
    }


def strategy_kpis(
    records: Sequence[Record],
    periods_per_year: int = TRADING_DAYS_PER_YEAR
) -> List[Dict[str, str]]:
    """
    Per-strategy KPI strings.

    - cagr: mean × 252 (not compounded, not ×100)
    - vol: population std × √252
    - max_drawdown: worst single return × 100 (not peak-to-trough)

    Args:
        records: Raw records
        periods_per_year: Annualization factor

    Returns:
        List of {'strategy', 'cagr', 'vol', 'max_drawdown'} in first-seen order
    """
    kpis = []
    for strategy, rows in group_by(records, 'strategy').items():
        summary = summarize_returns([r.period_return for r in rows])
        kpis.append({
            'strategy': strategy,
            'cagr': format_fixed(annualize_mean(summary.mean, periods_per_year)),
            'vol': format_fixed(annualize_volatility(summary.volatility, periods_per_year)),
            'max_drawdown': format_fixed(summary.worst * 100),
        })

    return kpis


def _equity_level(record: Record) -> float:
    # Zero or missing equity reads as the 100 base level
    return record.equity or BASE_INDEX_LEVEL


def sensitivity_curves(
    records: Sequence[Record],
    palette: Optional[Sequence[str]] = None
) -> List[Dict[str, Any]]:
    """Raw equity level per strategy in date order (no compounding)."""
    return stress_curves(records, '', palette)


def stress_curves(
    records: Sequence[Record],
    label_suffix: str,
    palette: Optional[Sequence[str]] = None
) -> List[Dict[str, Any]]:
    """
    Raw equity paths with a scenario suffix on every series label.

    Scenario data differences come from the caller's records; the
    transformation is the same as sensitivity_curves.

    Args:
        records: Raw records
        label_suffix: Scenario tag, e.g. 'A'
        palette: Series colors

    Returns:
        One {'label', 'labels', 'data', 'color'} per strategy
    """
    curves = []
    for index, (strategy, rows) in enumerate(group_chronologically(records).items()):
        curves.append({
            'label': f"{strategy} {label_suffix}".strip(),
            'labels': [r.date_label for r in rows],
            'data': [_equity_level(r) for r in rows],
            'color': series_color(index, palette),
        })

    return curves


def drawdown_series(records: Sequence[Record]) -> Dict[str, List]:
    """Raw return per record in input order; no peak-to-trough computation."""
    return {
        'labels': [r.date_label for r in records],
        'values': [r.period_return for r in records],
    }
