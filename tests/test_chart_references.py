"""Tests for collecting range references from chart buttons."""

from __future__ import annotations

import pytest

from analysis.dto import ActionButton, ButtonKind, Chart, LinkButton, NormalButton
from analysis.references import ChartShapeError, collect_range_references

pytestmark = pytest.mark.unit


def test_collects_linked_items_and_enabled_link_buttons() -> None:
    """Both reference sources contribute, in button order."""

    chart = Chart(
        name="SB vs BB",
        buttons=(
            NormalButton(linked_item="r1"),
            ActionButton(kind=ButtonKind.label, link_buttons=(LinkButton(enabled=True, target_range_id="r2"),)),
        ),
    )

    assert collect_range_references(chart) == ("r1", "r2")


@pytest.mark.parametrize("sentinel", ["label-only", "exit"])
def test_sentinel_linked_items_are_not_references(sentinel: str) -> None:
    """Sentinel values on normal buttons never become range identifiers."""

    chart = Chart(name="c", buttons=(NormalButton(linked_item=sentinel), NormalButton(linked_item=sentinel)))

    assert collect_range_references(chart) == ()


def test_disabled_link_buttons_are_ignored() -> None:
    """Disabled links contribute nothing even with a valid target."""

    chart = Chart(
        name="c",
        buttons=(
            NormalButton(
                link_buttons=(
                    LinkButton(enabled=False, target_range_id="r1"),
                    LinkButton(enabled=True, target_range_id=None),
                    LinkButton(enabled=True, target_range_id=""),
                    LinkButton(enabled=True, target_range_id="r2"),
                )
            ),
        ),
    )

    assert collect_range_references(chart) == ("r2",)


def test_duplicate_references_collapse_to_first_occurrence() -> None:
    """A range referenced several times appears once at its first position."""

    chart = Chart(
        name="c",
        buttons=(
            NormalButton(linked_item="r2", link_buttons=(LinkButton(enabled=True, target_range_id="r1"),)),
            NormalButton(linked_item="r1"),
            ActionButton(kind=ButtonKind.exit, link_buttons=(LinkButton(enabled=True, target_range_id="r2"),)),
        ),
    )

    assert collect_range_references(chart) == ("r2", "r1")


def test_missing_fields_mean_no_reference() -> None:
    """Buttons without a linked item or links contribute nothing."""

    chart = Chart(name="c", buttons=(NormalButton(), ActionButton(kind=ButtonKind.label)))

    assert collect_range_references(chart) == ()


def test_empty_chart_has_no_references() -> None:
    """A chart without buttons references no ranges."""

    assert collect_range_references(Chart(name="empty")) == ()


def test_rejects_values_that_are_not_charts() -> None:
    """Passing something other than a Chart fails fast."""

    with pytest.raises(ChartShapeError):
        collect_range_references({"buttons": []})  # type: ignore[arg-type]

    with pytest.raises(ChartShapeError):
        collect_range_references(Chart(name="c", buttons=("r1",)))  # type: ignore[arg-type]
