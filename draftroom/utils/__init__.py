"""
Utility functions for draft order and roster calculations.

This package provides the snake schedule builder and the per-team
roster need evaluator used by autodraft.
"""

from .snake_draft import SnakeDraftCalculator, build_snake_order
from .roster_needs import RosterNeedCounts, evaluate_roster_needs, empty_roster_counts

__all__ = [
    "SnakeDraftCalculator",
    "build_snake_order",
    "RosterNeedCounts",
    "evaluate_roster_needs",
    "empty_roster_counts",
]
