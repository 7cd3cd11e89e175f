"""DTO types consumed and returned by the chart statistics engine.

DTOs are plain data containers shared between the storage collaborators, the
engine and the presentation layer. They intentionally avoid any Django/ORM
dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

LABEL_ONLY_ITEM = "label-only"
EXIT_ITEM = "exit"

# `linked_item` values on a normal button that are not range identifiers.
LINKED_ITEM_SENTINELS: frozenset[str] = frozenset({LABEL_ONLY_ITEM, EXIT_ITEM})


class ButtonKind(StrEnum):
    """Kind of a chart button.

    Values match the `type` field used by the serialized chart format.
    """

    normal = "normal"
    label = "label"
    exit = "exit"


@dataclass(frozen=True, slots=True)
class Range:
    """A named range held by the catalog.

    Attributes:
        id: Stable range identifier.
        name: Display name.
    """

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class Folder:
    """A named folder owning an ordered collection of ranges.

    Attributes:
        id: Folder identifier.
        name: Display name.
        ranges: Ranges in display order.
    """

    id: str
    name: str
    ranges: tuple[Range, ...] = ()


@dataclass(frozen=True, slots=True)
class Catalog:
    """Read-only snapshot of every folder and range.

    Attributes:
        folders: Folders in display order.
    """

    folders: tuple[Folder, ...] = ()


# Raw usage counts keyed by range id. Values are coerced at resolution time.
UsageTable: TypeAlias = Mapping[str, object]


@dataclass(frozen=True, slots=True)
class LinkButton:
    """A secondary link attached to a chart button.

    Attributes:
        enabled: Whether the link is active.
        target_range_id: Range identifier the link opens, if any.
    """

    enabled: bool
    target_range_id: str | None = None


@dataclass(frozen=True, slots=True)
class NormalButton:
    """A normal chart button that may open a range directly.

    Attributes:
        linked_item: Range identifier, a sentinel, or None.
        link_buttons: Secondary links attached to the button.
    """

    linked_item: str | None = None
    link_buttons: tuple[LinkButton, ...] = ()

    @property
    def kind(self) -> ButtonKind:
        """Return the button kind."""

        return ButtonKind.normal


@dataclass(frozen=True, slots=True)
class ActionButton:
    """A non-normal chart button (label or exit).

    Action buttons never carry a `linked_item`; only their link buttons can
    reference ranges.

    Attributes:
        kind: Button kind other than `ButtonKind.normal`.
        link_buttons: Secondary links attached to the button.
    """

    kind: ButtonKind
    link_buttons: tuple[LinkButton, ...] = ()


Button: TypeAlias = NormalButton | ActionButton


@dataclass(frozen=True, slots=True)
class Chart:
    """A chart composed of buttons.

    Attributes:
        name: Chart display name.
        buttons: Buttons in layout order.
    """

    name: str
    buttons: tuple[Button, ...] = ()


@dataclass(frozen=True, slots=True)
class ResolvedStat:
    """A usage count resolved to display names.

    Attributes:
        range_id: Referenced range identifier.
        folder_name: Owning folder name, or the orphan placeholder.
        range_name: Range name, or the orphan placeholder.
        count: Non-negative usage count.
        is_orphan: True when the range is missing from the catalog.
    """

    range_id: str
    folder_name: str
    range_name: str
    count: int
    is_orphan: bool = False


@dataclass(frozen=True)
class ChartStatsResult:
    """Ranked statistics for one chart.

    Attributes:
        chart_name: Name of the analyzed chart.
        reference_count: Number of distinct ranges the chart references.
        stats: Ranked, truncated statistics (zero counts included).
    """

    chart_name: str
    reference_count: int
    stats: tuple[ResolvedStat, ...] = ()
