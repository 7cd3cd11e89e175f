"""Admin registrations for the core app."""

from __future__ import annotations

from django.contrib import admin

from core.models import ChartButton, ChartLinkButton, RangeFolder, RangeUsage, StoredChart, StoredRange


class StoredRangeInline(admin.TabularInline):
    """Inline editor for ranges inside a folder."""

    model = StoredRange
    extra = 0


@admin.register(RangeFolder)
class RangeFolderAdmin(admin.ModelAdmin):
    """Admin configuration for RangeFolder."""

    list_display = ("name", "owner", "position")
    list_filter = ("owner",)
    search_fields = ("name",)
    inlines = (StoredRangeInline,)


@admin.register(StoredRange)
class StoredRangeAdmin(admin.ModelAdmin):
    """Admin configuration for StoredRange."""

    list_display = ("name", "range_id", "folder", "position")
    search_fields = ("name", "range_id")


@admin.register(RangeUsage)
class RangeUsageAdmin(admin.ModelAdmin):
    """Admin configuration for RangeUsage."""

    list_display = ("range_id", "owner", "count", "updated_at")
    list_filter = ("owner",)
    search_fields = ("range_id",)


class ChartButtonInline(admin.TabularInline):
    """Inline editor for buttons on a chart."""

    model = ChartButton
    extra = 0


@admin.register(StoredChart)
class StoredChartAdmin(admin.ModelAdmin):
    """Admin configuration for StoredChart."""

    list_display = ("name", "owner", "created_at")
    list_filter = ("owner",)
    search_fields = ("name",)
    inlines = (ChartButtonInline,)


class ChartLinkButtonInline(admin.TabularInline):
    """Inline editor for link buttons on a chart button."""

    model = ChartLinkButton
    extra = 0


@admin.register(ChartButton)
class ChartButtonAdmin(admin.ModelAdmin):
    """Admin configuration for ChartButton."""

    list_display = ("chart", "position", "kind", "linked_item")
    list_filter = ("kind",)
    inlines = (ChartLinkButtonInline,)
