"""
Record model for hedging strategy observations.
Single coercion boundary - every derivation reads already-coerced records.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd
from dateutil import parser as date_parser

logger = logging.getLogger(__name__)


class RecordError(Exception):
    """Raised when a row cannot be turned into a record at all."""
    pass


# Source column -> lower-case alias accepted from already-normalized rows
FIELD_ALIASES = {
    'Date': 'date',
    'Hedge': 'strategy',
    'Return': 'return',
    'Beta': 'beta',
    'Correlation': 'correlation',
    'Equity': 'equity',
}

# Two fill-in dates that differ in year, month and day; day 1 is kept
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 2, 2))


@dataclass(frozen=True)
class Record:
    """One observation of a hedging strategy."""
    date: Optional[date]
    date_label: str
    strategy: str
    period_return: float = 0.0
    beta: float = 0.0
    correlation: float = 0.0
    equity: float = 0.0

    @property
    def has_valid_date(self) -> bool:
        return self.date is not None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'Record':
        """
        Build a record from a parsed row.

        Args:
            row: Mapping keyed by source columns (Date, Hedge, Return, Beta,
                Correlation, Equity) or their lower-case aliases

        Returns:
            Immutable Record with numeric fields coerced (missing -> 0)

        Raises:
            RecordError: If row is not a mapping
        """
        if not isinstance(row, Mapping):
            raise RecordError(f"Row must be a mapping, got {type(row)}")

        raw_date = _field(row, 'Date')
        label = _date_label(raw_date)

        return cls(
            date=parse_date(raw_date),
            date_label=label,
            strategy=str(_field(row, 'Hedge') or '').strip(),
            period_return=coerce_number(_field(row, 'Return')),
            beta=coerce_number(_field(row, 'Beta')),
            correlation=coerce_number(_field(row, 'Correlation')),
            equity=coerce_number(_field(row, 'Equity')),
        )


def coerce_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce a raw cell to float.

    None, empty text, non-numeric text and NaN all become `default`.
    Infinite values are numeric and pass through unchanged.

    Args:
        value: Raw cell value
        default: Value used when the cell is absent or non-numeric

    Returns:
        Float value
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            logger.warning(f"Non-numeric value {value!r} coerced to {default}")
            return default
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            logger.warning(f"Non-numeric value {value!r} coerced to {default}")
            return default

    if math.isnan(number):
        return default

    return number


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a date cell.

    ISO dates are parsed directly; anything else goes through the lenient
    dateutil parser. A missing day defaults to the 1st ("March 2023" ->
    2023-03-01). Text without both a year and a month is invalid, so the
    result never depends on the current date.

    Args:
        value: Date text, date or datetime

    Returns:
        Parsed date or None for an invalid date
    """
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        parsed = date_parser.parse(text, default=_FILL_DEFAULTS[0])
        # Parts taken from the fill-in default differ between the two parses
        shifted = date_parser.parse(text, default=_FILL_DEFAULTS[1])
    except (ValueError, OverflowError):
        logger.warning(f"Invalid date {text!r}; record sorts last and joins no month bucket")
        return None

    if (parsed.year, parsed.month) != (shifted.year, shifted.month):
        logger.warning(f"Incomplete date {text!r}; record sorts last and joins no month bucket")
        return None

    return parsed.date()


def records_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[Record]:
    """Convert parsed rows to records, preserving order."""
    return [Record.from_row(row) for row in rows]


def records_from_frame(df: pd.DataFrame) -> List[Record]:
    """
    Convert a DataFrame with source columns to records.

    Args:
        df: DataFrame with Date/Hedge/Return/Beta/Correlation/Equity columns

    Returns:
        Records in row order
    """
    if df.empty:
        return []

    # NaN cells become None so they coerce like absent fields
    cleaned = df.astype(object).where(pd.notnull(df), None)
    return records_from_rows(cleaned.to_dict('records'))


def _field(row: Mapping[str, Any], column: str) -> Any:
    if column in row:
        return row[column]
    return row.get(FIELD_ALIASES[column])


def _date_label(raw_date: Any) -> str:
    if raw_date is None:
        return ''
    if isinstance(raw_date, datetime):
        return raw_date.date().isoformat()
    if isinstance(raw_date, date):
        return raw_date.isoformat()
    return str(raw_date).strip()
