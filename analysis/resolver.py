"""Resolve referenced range identifiers to display names and usage counts.

Resolution never fails on data-quality issues: malformed counts become 0 and
identifiers missing from the catalog resolve to orphan placeholders.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .dto import Catalog, ResolvedStat, UsageTable

ORPHAN_FOLDER_NAME = "Deleted folder"
ORPHAN_RANGE_NAME = "(Range not found)"


def build_range_index(catalog: Catalog) -> dict[str, tuple[str, str]]:
    """Build a lookup of range id -> (folder name, range name).

    Args:
        catalog: Catalog snapshot.

    Returns:
        Mapping for every range in the catalog. When a range id appears more
        than once, the last occurrence wins.
    """

    index: dict[str, tuple[str, str]] = {}
    for folder in catalog.folders:
        for range_ in folder.ranges:
            index[range_.id] = (folder.name, range_.name)
    return index


def coerce_usage_count(value: object) -> int:
    """Coerce a raw usage value into a non-negative integer count.

    Args:
        value: Raw value from the usage table.

    Returns:
        The count, or 0 when the value is missing, non-numeric, non-finite or
        negative. Fractional values are truncated toward zero.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if not isinstance(value, float):
        return 0
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(value)


def resolve_references(
    range_ids: Iterable[str],
    *,
    catalog: Catalog,
    usage: UsageTable,
) -> tuple[ResolvedStat, ...]:
    """Resolve range identifiers into ResolvedStat values.

    Args:
        range_ids: Distinct range identifiers, typically from
            `collect_range_references`.
        catalog: Catalog snapshot used for display names.
        usage: Raw usage counts keyed by range id.

    Returns:
        One ResolvedStat per identifier, in input order.
    """

    index = build_range_index(catalog)
    resolved: list[ResolvedStat] = []
    for range_id in range_ids:
        count = coerce_usage_count(usage.get(range_id))
        names = index.get(range_id)
        if names is None:
            resolved.append(
                ResolvedStat(
                    range_id=range_id,
                    folder_name=ORPHAN_FOLDER_NAME,
                    range_name=ORPHAN_RANGE_NAME,
                    count=count,
                    is_orphan=True,
                )
            )
            continue

        folder_name, range_name = names
        resolved.append(
            ResolvedStat(range_id=range_id, folder_name=folder_name, range_name=range_name, count=count)
        )
    return tuple(resolved)
