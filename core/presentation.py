"""Presentation helpers for the chart statistics view.

The presentation layer receives ranked statistics and never re-sorts or
re-resolves them. It owns display labels, empty states and the zero-count
display filter.
"""

from __future__ import annotations

from dataclasses import dataclass

from analysis.dto import ChartStatsResult, ResolvedStat
from analysis.ranking import TOP_STATS_LIMIT

NO_REFERENCES_MESSAGE = "No linked ranges to show statistics for."
NO_REFERENCES_HINT = "Add buttons to the chart that link to ranges."
NO_USAGE_MESSAGE = "No range usage recorded for this chart yet."


@dataclass(frozen=True, slots=True)
class StatRow:
    """A single display row.

    Attributes:
        rank: 1-based position in the displayed list.
        label: "<folder> - <range>" label.
        count_label: Pluralized usage label.
        stat: Underlying ResolvedStat.
    """

    rank: int
    label: str
    count_label: str
    stat: ResolvedStat


@dataclass(frozen=True, slots=True)
class ChartStatsView:
    """Everything the chart statistics template needs.

    Attributes:
        title: Dialog title.
        description: Subtitle describing the list.
        rows: Visible rows (zero counts hidden).
        empty_message: Message shown when no rows are visible, else None.
        empty_hint: Optional secondary hint for the empty state.
    """

    title: str
    description: str
    rows: tuple[StatRow, ...]
    empty_message: str | None
    empty_hint: str | None = None


def visible_stats(stats: tuple[ResolvedStat, ...]) -> tuple[ResolvedStat, ...]:
    """Hide zero-count entries while keeping the ranked order."""

    return tuple(stat for stat in stats if stat.count > 0)


def format_count(count: int) -> str:
    """Return a pluralized usage label (e.g. "1 hit", "5 hits")."""

    return f"{count} hit" if count == 1 else f"{count} hits"


def build_chart_stats_view(result: ChartStatsResult) -> ChartStatsView:
    """Build the display model for a ranked result.

    Args:
        result: Ranked statistics from the analysis engine.

    Returns:
        ChartStatsView with rows and the matching empty state.
    """

    shown = visible_stats(result.stats)
    rows = tuple(
        StatRow(
            rank=position,
            label=f"{stat.folder_name} - {stat.range_name}",
            count_label=format_count(stat.count),
            stat=stat,
        )
        for position, stat in enumerate(shown, start=1)
    )

    empty_message: str | None = None
    empty_hint: str | None = None
    if not result.stats:
        empty_message = NO_REFERENCES_MESSAGE
        empty_hint = NO_REFERENCES_HINT
    elif not rows:
        empty_message = NO_USAGE_MESSAGE

    return ChartStatsView(
        title=f'Statistics for "{result.chart_name}"',
        description=f"Top {TOP_STATS_LIMIT} most used ranges in this chart.",
        rows=rows,
        empty_message=empty_message,
        empty_hint=empty_hint,
    )


def stat_to_dict(stat: ResolvedStat) -> dict[str, object]:
    """Serialize a ResolvedStat for JSON responses."""

    return {
        "range_id": stat.range_id,
        "folder_name": stat.folder_name,
        "range_name": stat.range_name,
        "count": stat.count,
        "is_orphan": stat.is_orphan,
    }
