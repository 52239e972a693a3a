"""
Test Suite for the hedge story dashboard

Includes:
- CLI tests against fixture files
- Fixture CSV/TSV uploads shared with package tests
"""
