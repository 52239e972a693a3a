"""
Story composer - runs every derivation over one record set.
Pure function that bundles all views consumed by the chart and KPI adapters.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from hedge_analytics.records import Record
from hedge_analytics.derivations import (
    beta_series,
    drawdown_series,
    equity_curves,
    monthly_grid,
    return_histogram,
    rolling_correlation,
    sensitivity_curves,
    strategy_kpis,
    stress_curves,
)
from hedge_analytics.calculations.rolling import DEFAULT_WINDOW
from hedge_analytics.calculations.statistics import TRADING_DAYS_PER_YEAR

logger = logging.getLogger(__name__)


def build_story(
    records: Sequence[Record],
    palette: Optional[Sequence[str]] = None,
    rolling_window: int = DEFAULT_WINDOW,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
    stress_suffixes: Sequence[str] = ('A', 'B')
) -> Dict[str, Any]:
    """
    Compose every analytical view of the hedge story.

    Each derivation sees the same input independently; none mutates it.

    Args:
        records: Raw records
        palette: Series colors
        rolling_window: Window for the rolling correlation
        periods_per_year: Annualization factor for KPIs
        stress_suffixes: One stress scenario per suffix

    Returns:
        Dictionary with monthly, histogram, correlation, equity_curves, beta,
        kpis, sensitivity, stress (suffix -> curves), drawdown, record_count
    """
    records = tuple(records)

    story = {
        'record_count': len(records),
        'monthly': monthly_grid(records, palette),
        'histogram': return_histogram(records),
        'correlation': rolling_correlation(records, rolling_window),
        'equity_curves': equity_curves(records, palette),
        'beta': beta_series(records),
        'kpis': strategy_kpis(records, periods_per_year),
        'sensitivity': sensitivity_curves(records, palette),
        'stress': {
            suffix: stress_curves(records, suffix, palette)
            for suffix in stress_suffixes
        },
        'drawdown': drawdown_series(records),
    }

    logger.debug(
        f"Built story: {len(records)} records, "
        f"{len(story['equity_curves'])} strategies, "
        f"{len(story['correlation']['values'])} rolling points"
    )

    return story


def build_story_from_config(records: Sequence[Record], config: Dict[str, Any]) -> Dict[str, Any]:
    """Build the story with settings from load_story_config()."""
    return build_story(
        records,
        palette=config['palette'],
        rolling_window=config['rolling_window'],
        periods_per_year=config['periods_per_year'],
        stress_suffixes=config['stress_suffixes'],
    )
