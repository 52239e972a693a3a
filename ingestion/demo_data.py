"""
Built-in demo observations so the story renders without an upload.
"""

from typing import List

from hedge_analytics.records import Record, records_from_rows

DEMO_ROWS = [
    {'Date': '2023-01-02', 'Hedge': 'Dynamic', 'Return': 0.002, 'Beta': 1.2, 'Correlation': 0.8, 'Equity': 100},
    {'Date': '2023-01-03', 'Hedge': 'Static', 'Return': -0.001, 'Beta': 0.9, 'Correlation': 0.82, 'Equity': 101},
    {'Date': '2023-01-04', 'Hedge': 'Unhedged', 'Return': 0.004, 'Beta': 1.4, 'Correlation': 0.78, 'Equity': 103},
    {'Date': '2023-02-02', 'Hedge': 'Dynamic', 'Return': 0.005, 'Beta': 0.8, 'Correlation': 0.76, 'Equity': 104},
    {'Date': '2023-02-03', 'Hedge': 'Static', 'Return': 0.002, 'Beta': 1.1, 'Correlation': 0.74, 'Equity': 106},
    {'Date': '2023-03-03', 'Hedge': 'Unhedged', 'Return': -0.003, 'Beta': 1.3, 'Correlation': 0.7, 'Equity': 105},
    {'Date': '2023-03-04', 'Hedge': 'Dynamic', 'Return': 0.006, 'Beta': 0.7, 'Correlation': 0.68, 'Equity': 108},
    {'Date': '2023-04-05', 'Hedge': 'Static', 'Return': -0.002, 'Beta': 1.05, 'Correlation': 0.69, 'Equity': 107},
    {'Date': '2023-04-06', 'Hedge': 'Unhedged', 'Return': 0.003, 'Beta': 1.2, 'Correlation': 0.67, 'Equity': 109},
]


def demo_records() -> List[Record]:
    """Demo rows as records."""
    return records_from_rows(DEMO_ROWS)
