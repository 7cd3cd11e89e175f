"""Ranking helpers for resolved range statistics."""

from __future__ import annotations

from collections.abc import Iterable

from .dto import ResolvedStat

TOP_STATS_LIMIT = 10


def rank_stats(stats: Iterable[ResolvedStat], *, limit: int = TOP_STATS_LIMIT) -> tuple[ResolvedStat, ...]:
    """Order statistics by usage count and keep the top entries.

    Args:
        stats: Resolved statistics in reference order.
        limit: Maximum number of entries to keep.

    Returns:
        At most `limit` entries sorted by descending count. Equal counts keep
        their input order; zero counts are not dropped.
    """

    ranked = sorted(stats, key=lambda stat: stat.count, reverse=True)
    return tuple(ranked[: max(limit, 0)])
