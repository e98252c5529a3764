"""
Budget Planner - Source Package

A single-page personal budgeting engine: income and expense entries,
a monthly budget goal, derived totals and an expense breakdown chart.

DESIGN PRINCIPLES:
1. Invalid input is ignored, never half-applied
2. Every mutation is written through to storage before it is visible
3. Aggregates are recomputed from scratch, never patched
4. Storage and chart rendering are swappable
"""

__version__ = "1.0.0"
__author__ = "Budget Planner Team"
