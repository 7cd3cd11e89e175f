"""Service-layer functions for the core app.

Services in `core` coordinate Django persistence concerns (ORM, transactions)
with the pure analysis modules.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F

from analysis.dto import Chart, ChartStatsResult
from analysis.engine import analyze_chart_stats
from core.models import RangeUsage
from core.providers import (
    CatalogProvider,
    OrmCatalogProvider,
    OrmUsageProvider,
    UsageProvider,
    chart_from_model,
    load_stored_chart,
)

logger = logging.getLogger(__name__)


def chart_stats_from_providers(
    chart: Chart,
    *,
    catalog_provider: CatalogProvider,
    usage_provider: UsageProvider,
) -> ChartStatsResult:
    """Load both snapshots once and rank the chart's range usage.

    Args:
        chart: Chart to analyze.
        catalog_provider: Source of the catalog snapshot.
        usage_provider: Source of the usage snapshot.

    Returns:
        ChartStatsResult from the analysis engine.
    """

    catalog = catalog_provider.load_catalog()
    usage = usage_provider.load_usage()
    result = analyze_chart_stats(chart, catalog=catalog, usage=usage)
    logger.debug(
        "Ranked chart %r: %d references, %d shown.",
        result.chart_name,
        result.reference_count,
        len(result.stats),
    )
    return result


def chart_stats_for_user(chart_id: int, *, owner) -> ChartStatsResult | None:
    """Rank range usage for one of the user's stored charts.

    Args:
        chart_id: StoredChart primary key.
        owner: User who owns the chart, catalog and usage counts.

    Returns:
        ChartStatsResult, or None when the chart is not found for this user.
    """

    stored = load_stored_chart(chart_id, owner=owner)
    if stored is None:
        logger.info("Chart %s not found for user %s.", chart_id, getattr(owner, "pk", None))
        return None
    return chart_stats_from_providers(
        chart_from_model(stored),
        catalog_provider=OrmCatalogProvider(owner),
        usage_provider=OrmUsageProvider(owner),
    )


def record_range_usage(range_id: str, *, owner, amount: int = 1) -> int:
    """Increment the usage count for a range.

    Args:
        range_id: Range identifier that was opened.
        owner: User who opened the range.
        amount: Positive increment.

    Returns:
        The count after the increment.

    Raises:
        ValueError: When `range_id` is empty or `amount` is not positive.
    """

    if not range_id:
        raise ValueError("range_id must be a non-empty string.")
    if amount <= 0:
        raise ValueError("amount must be positive.")

    with transaction.atomic():
        usage, _created = RangeUsage.objects.select_for_update().get_or_create(owner=owner, range_id=range_id)
        RangeUsage.objects.filter(pk=usage.pk).update(count=F("count") + amount)
        usage.refresh_from_db(fields=["count"])
    return usage.count
