"""Pure analysis package for rangeStats.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
database I/O.
"""

from .engine import analyze_chart_stats

__all__ = ["analyze_chart_stats"]
