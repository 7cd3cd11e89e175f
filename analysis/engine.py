"""Orchestration entry point for chart usage statistics.

The engine is a pure, non-Django module that accepts in-memory snapshots and
returns DTOs. It must not import Django or perform any I/O.
"""

from __future__ import annotations

from .dto import Catalog, Chart, ChartStatsResult, UsageTable
from .ranking import TOP_STATS_LIMIT, rank_stats
from .references import collect_range_references
from .resolver import resolve_references


def analyze_chart_stats(
    chart: Chart,
    *,
    catalog: Catalog,
    usage: UsageTable,
    limit: int = TOP_STATS_LIMIT,
) -> ChartStatsResult:
    """Rank the most used ranges referenced by a chart.

    Args:
        chart: Chart to analyze.
        catalog: Catalog snapshot used to resolve display names.
        usage: Usage counts keyed by range id.
        limit: Maximum number of ranked entries.

    Returns:
        ChartStatsResult with at most `limit` stats in descending count order.

    Raises:
        ChartShapeError: When `chart` is not a Chart.
    """

    range_ids = collect_range_references(chart)
    resolved = resolve_references(range_ids, catalog=catalog, usage=usage)
    return ChartStatsResult(
        chart_name=chart.name,
        reference_count=len(range_ids),
        stats=rank_stats(resolved, limit=limit),
    )
