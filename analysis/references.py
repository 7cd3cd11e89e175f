"""Collect the range identifiers referenced by a chart.

A chart references ranges through two independent sources per button:

- the `linked_item` of a normal button (unless it is a sentinel),
- every enabled link button with a target range.
"""

from __future__ import annotations

from collections.abc import Iterable

from .dto import LINKED_ITEM_SENTINELS, ActionButton, Button, Chart, LinkButton, NormalButton


class ChartShapeError(TypeError):
    """Raised when a value passed as a chart does not have the chart shape."""

    def __init__(self, *, value: object, reason: str) -> None:
        """Initialize the error.

        Args:
            value: Offending value.
            reason: Short description of what is wrong.
        """

        super().__init__(f"Invalid chart ({type(value).__name__}): {reason}")
        self.value = value
        self.reason = reason


def collect_range_references(chart: Chart) -> tuple[str, ...]:
    """Return the distinct range identifiers referenced by a chart.

    Args:
        chart: Chart to inspect.

    Returns:
        Unique range identifiers in first-seen order (button order; a button's
        linked item precedes its link buttons).

    Raises:
        ChartShapeError: When `chart` is not a Chart or holds a non-button.
    """

    if not isinstance(chart, Chart):
        raise ChartShapeError(value=chart, reason="expected a Chart")

    seen: dict[str, None] = {}
    for button in chart.buttons:
        for range_id in _button_references(button):
            seen.setdefault(range_id, None)
    return tuple(seen)


def _button_references(button: Button) -> Iterable[str]:
    """Yield range identifiers referenced by a single button."""

    if isinstance(button, NormalButton):
        linked_item = button.linked_item
        if linked_item and linked_item not in LINKED_ITEM_SENTINELS:
            yield linked_item
    elif not isinstance(button, ActionButton):
        raise ChartShapeError(value=button, reason="expected a NormalButton or ActionButton")

    yield from _link_references(button.link_buttons)


def _link_references(link_buttons: Iterable[LinkButton]) -> Iterable[str]:
    """Yield target range identifiers of enabled link buttons."""

    for link in link_buttons:
        if link.enabled is True and link.target_range_id:
            yield link.target_range_id
