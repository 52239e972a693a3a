"""
Data Ingestion Module

Turns uploaded strategy files into records:
- CSV/TSV parsing with trimmed cells
- Built-in demo observations when no file is supplied
"""

__version__ = "0.1.0"
