"""
Reports Module

Renders a built story for display and storage:
- Library-neutral chart payloads, one per chart target
- Markdown KPI cards
- Atomic JSON / Markdown output
"""

__version__ = "0.1.0"
