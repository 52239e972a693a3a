"""
Display formatters for the story summary and KPI cards.
Deterministic string formatting for KPI values and index levels.
"""

from typing import Optional, Union


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


def format_kpi_value(value: Union[str, float, None]) -> str:
    """
    Append a percent sign to a pre-formatted KPI string.

    KPI strings are already rounded; they are shown as-is, e.g. "0.76" -> "0.76%".
    """
    if value is None or value == '':
        return "Not available"

    if not isinstance(value, (str, int, float)):
        raise FormatterError(f"KPI value must be string or numeric, got {type(value)}")

    return f"{value}%"


def format_index_level(value: Optional[float]) -> str:
    """Format an equity index level with two decimals (e.g., "100.70")."""
    if value is None:
        return "Not available"

    if not isinstance(value, (int, float)):
        raise FormatterError(f"Index level must be numeric, got {type(value)}")

    return f"{value:.2f}"
