"""Database models for the core app.

The core app persists the range catalog (folders and their ranges), per-user
usage counts and the charts whose buttons link to ranges. Range identifiers are
stored as strings so usage rows can outlive the range they count (orphans).
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from analysis.dto import ButtonKind

BUTTON_KIND_CHOICES: tuple[tuple[str, str], ...] = tuple(
    (kind.value, kind.value.title()) for kind in ButtonKind
)


class RangeFolder(models.Model):
    """A user-owned folder of ranges.

    Attributes:
        owner: Owning user.
        name: Display name.
        position: Display order within the owner's catalog.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="range_folders"
    )
    name = models.CharField(max_length=120)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ("position", "id")

    def __str__(self) -> str:
        """Return the folder name for display contexts."""

        return self.name


class StoredRange(models.Model):
    """A named range inside a folder.

    Attributes:
        folder: Owning folder.
        range_id: Stable string identifier referenced by charts and usage rows.
        name: Display name.
        position: Display order within the folder.
    """

    folder = models.ForeignKey(RangeFolder, on_delete=models.CASCADE, related_name="ranges")
    range_id = models.CharField(max_length=64, db_index=True)
    name = models.CharField(max_length=120)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ("position", "id")
        verbose_name = "Range"

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"{self.name} ({self.range_id})"


class RangeUsage(models.Model):
    """How often a user opened a range.

    Attributes:
        owner: Owning user.
        range_id: Range identifier; may no longer exist in the catalog.
        count: Number of recorded uses.
        updated_at: Timestamp of the last increment.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="range_usage"
    )
    range_id = models.CharField(max_length=64)
    count = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["owner", "range_id"], name="uniq_owner_range_usage")
        ]
        verbose_name_plural = "Range usage"

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"RangeUsage(range_id={self.range_id}, count={self.count})"


class StoredChart(models.Model):
    """A user-owned chart whose buttons may link to ranges.

    Attributes:
        owner: Owning user.
        name: Display name.
        created_at: Creation timestamp.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="charts"
    )
    name = models.CharField(max_length=120)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Chart"

    def __str__(self) -> str:
        """Return the chart name for display contexts."""

        return self.name


class ChartButton(models.Model):
    """A button on a chart.

    Attributes:
        chart: Owning chart.
        position: Layout order on the chart.
        kind: Button kind (normal, label or exit).
        linked_item: Range id or sentinel opened by a normal button.
    """

    chart = models.ForeignKey(StoredChart, on_delete=models.CASCADE, related_name="buttons")
    position = models.PositiveIntegerField(default=0)
    kind = models.CharField(max_length=16, choices=BUTTON_KIND_CHOICES, default=ButtonKind.normal.value)
    linked_item = models.CharField(max_length=64, blank=True)

    class Meta:
        ordering = ("position", "id")

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"ChartButton(kind={self.kind}, linked_item={self.linked_item or None})"


class ChartLinkButton(models.Model):
    """A secondary link attached to a chart button.

    Attributes:
        button: Owning button.
        position: Order within the button's links.
        enabled: Whether the link is active.
        target_range_id: Range id opened by the link.
    """

    button = models.ForeignKey(ChartButton, on_delete=models.CASCADE, related_name="link_buttons")
    position = models.PositiveIntegerField(default=0)
    enabled = models.BooleanField(default=True)
    target_range_id = models.CharField(max_length=64, blank=True)

    class Meta:
        ordering = ("position", "id")

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"ChartLinkButton(enabled={self.enabled}, target={self.target_range_id or None})"
