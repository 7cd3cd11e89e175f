"""Storage collaborators that supply snapshots to the chart statistics engine.

Providers never raise on missing or malformed data: an unavailable source
yields an empty snapshot and the reason is logged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from django.db.models import Prefetch

from analysis.dto import ActionButton, Button, ButtonKind, Catalog, Chart, Folder, LinkButton, NormalButton, Range
from analysis.snapshot import CATALOG_STORAGE_KEY, USAGE_STORAGE_KEY, parse_catalog, parse_usage
from core.models import ChartButton, ChartLinkButton, RangeFolder, RangeUsage, StoredChart, StoredRange

logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """Source of the range catalog snapshot."""

    def load_catalog(self) -> Catalog:
        """Return the current catalog, or an empty one when unavailable."""


class UsageProvider(Protocol):
    """Source of the usage-count snapshot."""

    def load_usage(self) -> Mapping[str, object]:
        """Return usage counts keyed by range id, or `{}` when unavailable."""


class OrmCatalogProvider:
    """Catalog provider backed by the user's RangeFolder rows."""

    def __init__(self, owner) -> None:
        """Initialize the provider.

        Args:
            owner: User whose catalog is loaded.
        """

        self.owner = owner

    def load_catalog(self) -> Catalog:
        """Load every folder and range owned by the user."""

        folders = (
            RangeFolder.objects.filter(owner=self.owner)
            .order_by("position", "id")
            .prefetch_related(Prefetch("ranges", queryset=StoredRange.objects.order_by("position", "id")))
        )
        return Catalog(
            folders=tuple(
                Folder(
                    id=str(folder.pk),
                    name=folder.name,
                    ranges=tuple(Range(id=range_.range_id, name=range_.name) for range_ in folder.ranges.all()),
                )
                for folder in folders
            )
        )


class OrmUsageProvider:
    """Usage provider backed by the user's RangeUsage rows."""

    def __init__(self, owner) -> None:
        """Initialize the provider.

        Args:
            owner: User whose usage counts are loaded.
        """

        self.owner = owner

    def load_usage(self) -> dict[str, object]:
        """Load usage counts keyed by range id."""

        return dict(RangeUsage.objects.filter(owner=self.owner).values_list("range_id", "count"))


class SnapshotCatalogProvider:
    """Catalog provider reading the serialized browser-storage format."""

    def __init__(self, storage: Mapping[str, object]) -> None:
        """Initialize the provider.

        Args:
            storage: Mapping of storage key -> serialized value.
        """

        self.storage = storage

    def load_catalog(self) -> Catalog:
        """Parse the folder list stored under the catalog key."""

        parsed = parse_catalog(self.storage.get(CATALOG_STORAGE_KEY))
        for warning in parsed.warnings:
            logger.warning("Catalog snapshot: %s", warning)
        return parsed.value


class SnapshotUsageProvider:
    """Usage provider reading the serialized browser-storage format."""

    def __init__(self, storage: Mapping[str, object]) -> None:
        """Initialize the provider.

        Args:
            storage: Mapping of storage key -> serialized value.
        """

        self.storage = storage

    def load_usage(self) -> dict[str, object]:
        """Parse the usage table stored under the usage key."""

        parsed = parse_usage(self.storage.get(USAGE_STORAGE_KEY))
        for warning in parsed.warnings:
            logger.warning("Usage snapshot: %s", warning)
        return parsed.value


def load_stored_chart(chart_id: int, *, owner) -> StoredChart | None:
    """Load a chart with its buttons and links prefetched.

    Args:
        chart_id: StoredChart primary key.
        owner: User who must own the chart.

    Returns:
        The chart, or None when it does not exist or belongs to another user.
    """

    return (
        StoredChart.objects.filter(pk=chart_id, owner=owner)
        .prefetch_related(
            Prefetch(
                "buttons",
                queryset=ChartButton.objects.order_by("position", "id").prefetch_related(
                    Prefetch("link_buttons", queryset=ChartLinkButton.objects.order_by("position", "id"))
                ),
            )
        )
        .first()
    )


def chart_from_model(chart: StoredChart) -> Chart:
    """Convert a stored chart into the analysis Chart DTO.

    Args:
        chart: StoredChart row, ideally loaded via `load_stored_chart`.

    Returns:
        Chart DTO with buttons in layout order.
    """

    return Chart(name=chart.name, buttons=tuple(_button_from_model(button) for button in chart.buttons.all()))


def _button_from_model(button: ChartButton) -> Button:
    """Convert a stored button into its tagged DTO variant."""

    link_buttons = tuple(
        LinkButton(enabled=link.enabled, target_range_id=link.target_range_id or None)
        for link in button.link_buttons.all()
    )
    try:
        kind = ButtonKind(button.kind)
    except ValueError:
        # Unknown kinds cannot carry a linked item; only their links count.
        logger.warning("ChartButton %s has unknown kind %r; treating it as a label.", button.pk, button.kind)
        kind = ButtonKind.label
    if kind is ButtonKind.normal:
        return NormalButton(linked_item=button.linked_item or None, link_buttons=link_buttons)
    return ActionButton(kind=kind, link_buttons=link_buttons)
