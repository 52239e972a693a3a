"""
Hedge Analytics Module

Derives the analytical views of a hedging-strategy story from raw records:
- Monthly seasonality grid and return histogram
- Rolling correlation and beta series
- Compounded equity curves, sensitivity and stress paths
- Per-strategy KPIs (CAGR proxy, volatility, worst period)
"""

__version__ = "0.1.0"
