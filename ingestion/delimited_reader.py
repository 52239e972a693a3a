"""
Delimited text reader for uploaded strategy files.
Thin IO layer: text -> trimmed string rows -> records.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from hedge_analytics.records import Record, records_from_rows

logger = logging.getLogger(__name__)


class DelimitedReadError(Exception):
    """Raised when a delimited file cannot be read."""
    pass


def delimiter_for(filename: Union[str, Path]) -> str:
    """Tab for .tsv files, comma for everything else."""
    return '\t' if str(filename).lower().endswith('.tsv') else ','


def parse_delimited(text: str, delimiter: str = ',') -> List[Dict[str, str]]:
    """
    Parse delimited text into rows of trimmed strings.

    The first line is the header. Missing trailing cells become '' and
    extra cells are ignored. A blank line inside the body is kept as a row
    of empty cells. No type conversion happens here.

    Args:
        text: Raw file contents
        delimiter: Cell separator

    Returns:
        List of dictionaries keyed by header name
    """
    text = text.strip()
    if not text:
        return []

    lines = text.splitlines()
    headers = [h.strip() for h in lines[0].split(delimiter)]

    # Name every position up front so ragged rows never shift columns
    max_width = max(len(line.split(delimiter)) for line in lines)

    df = pd.read_csv(
        io.StringIO(text),
        sep=delimiter,
        header=None,
        names=list(range(max_width)),
        dtype=str,
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
        skip_blank_lines=False,
    )

    body = df.iloc[1:, :len(headers)].fillna('')
    body.columns = headers

    rows = []
    for raw in body.to_dict('records'):
        rows.append({key: str(value).strip() for key, value in raw.items()})

    return rows


def read_records(path: Union[str, Path]) -> List[Record]:
    """
    Read a CSV/TSV file into records.

    Args:
        path: File path; a .tsv suffix selects the tab delimiter

    Returns:
        Records in file order

    Raises:
        DelimitedReadError: If the file cannot be read or parsed
    """
    file_path = Path(path)
    if not file_path.exists():
        raise DelimitedReadError(f"Data file not found: {file_path}")

    try:
        text = file_path.read_text(encoding='utf-8')
        rows = parse_delimited(text, delimiter_for(file_path))
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise DelimitedReadError(f"Failed to read {file_path}: {e}")

    records = records_from_rows(rows)
    logger.info(f"Read {len(records)} records from {file_path}")

    invalid = sum(1 for r in records if not r.has_valid_date)
    if invalid:
        logger.warning(f"{invalid} records in {file_path} have unparseable dates")

    return records
