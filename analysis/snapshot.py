"""Parse serialized storage payloads into analysis DTOs.

The browser storage format keeps folders under `poker-ranges-folders` and
usage counts under `training-statistics`, both as JSON strings. Catalog and
usage payloads are parsed leniently: anything malformed is skipped and
reported through `SnapshotParseResult.warnings`. Chart payloads are parsed
strictly because a chart of the wrong shape is a caller error.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from .dto import ActionButton, Button, ButtonKind, Catalog, Chart, Folder, LinkButton, NormalButton, Range
from .references import ChartShapeError

CATALOG_STORAGE_KEY = "poker-ranges-folders"
USAGE_STORAGE_KEY = "training-statistics"

T = TypeVar("T")


@dataclass(frozen=True)
class SnapshotParseResult(Generic[T]):
    """A parsed snapshot with non-fatal warnings.

    Attributes:
        value: Parsed value (empty when the payload was unusable).
        warnings: Human-readable notes about skipped data.
    """

    value: T
    warnings: tuple[str, ...] = ()


def _decode(payload: object) -> object:
    """Decode a JSON string payload; other values pass through unchanged."""

    if isinstance(payload, (str, bytes, bytearray)):
        return json.loads(payload)
    return payload


def parse_catalog(payload: object) -> SnapshotParseResult[Catalog]:
    """Parse a serialized folder list into a Catalog.

    Args:
        payload: JSON string or already-decoded list of folder objects. None
            means the key is absent from storage.

    Returns:
        SnapshotParseResult holding the Catalog. Folders or ranges without an
        id are skipped; an unusable payload yields an empty Catalog.
    """

    if payload is None:
        return SnapshotParseResult(value=Catalog())
    try:
        data = _decode(payload)
    except ValueError as exc:
        return SnapshotParseResult(value=Catalog(), warnings=(f"Catalog is not valid JSON: {exc}",))
    if not isinstance(data, list):
        return SnapshotParseResult(
            value=Catalog(), warnings=(f"Catalog must be a list, got {type(data).__name__}.",)
        )

    warnings: list[str] = []
    folders: list[Folder] = []
    for position, raw_folder in enumerate(data):
        if not isinstance(raw_folder, Mapping):
            warnings.append(f"Skipped folder #{position}: not an object.")
            continue
        folder_id = _text(raw_folder.get("id"))
        if folder_id is None:
            warnings.append(f"Skipped folder #{position}: missing id.")
            continue

        raw_ranges = raw_folder.get("ranges")
        if not isinstance(raw_ranges, list):
            warnings.append(f"Folder {folder_id!r} has no range list.")
            raw_ranges = []

        ranges: list[Range] = []
        for raw_range in raw_ranges:
            range_id = _text(raw_range.get("id")) if isinstance(raw_range, Mapping) else None
            if range_id is None:
                warnings.append(f"Skipped a range without an id in folder {folder_id!r}.")
                continue
            ranges.append(Range(id=range_id, name=_text(raw_range.get("name")) or ""))

        folders.append(
            Folder(id=folder_id, name=_text(raw_folder.get("name")) or "", ranges=tuple(ranges))
        )

    return SnapshotParseResult(value=Catalog(folders=tuple(folders)), warnings=tuple(warnings))


def parse_usage(payload: object) -> SnapshotParseResult[dict[str, object]]:
    """Parse a serialized usage-count object.

    Args:
        payload: JSON string or already-decoded mapping. None means the key is
            absent from storage.

    Returns:
        SnapshotParseResult holding the raw usage mapping. Values are left as
        stored; the resolver coerces them.
    """

    if payload is None:
        return SnapshotParseResult(value={})
    try:
        data = _decode(payload)
    except ValueError as exc:
        return SnapshotParseResult(value={}, warnings=(f"Usage table is not valid JSON: {exc}",))
    if not isinstance(data, Mapping):
        return SnapshotParseResult(
            value={}, warnings=(f"Usage table must be an object, got {type(data).__name__}.",)
        )
    return SnapshotParseResult(value={str(key): value for key, value in data.items()})


def parse_chart(payload: object) -> Chart:
    """Parse a serialized chart.

    Args:
        payload: JSON string or already-decoded chart object.

    Returns:
        Chart DTO. Missing optional fields are treated as "no reference".

    Raises:
        ChartShapeError: When the payload is not a chart object with a list of
            button objects.
    """

    try:
        data = _decode(payload)
    except ValueError as exc:
        raise ChartShapeError(value=payload, reason=f"not valid JSON ({exc})") from exc
    if not isinstance(data, Mapping):
        raise ChartShapeError(value=data, reason="expected an object")
    raw_buttons = data.get("buttons")
    if not isinstance(raw_buttons, list):
        raise ChartShapeError(value=data, reason="`buttons` must be a list")

    buttons = tuple(_parse_button(raw_button) for raw_button in raw_buttons)
    return Chart(name=_text(data.get("name")) or "", buttons=buttons)


def _parse_button(raw: object) -> Button:
    """Parse a serialized chart button."""

    if not isinstance(raw, Mapping):
        raise ChartShapeError(value=raw, reason="each button must be an object")

    raw_links = raw.get("linkButtons")
    link_buttons = tuple(
        LinkButton(enabled=link.get("enabled") is True, target_range_id=_text(link.get("targetRangeId")))
        for link in (raw_links if isinstance(raw_links, list) else [])
        if isinstance(link, Mapping)
    )

    try:
        kind = ButtonKind(raw.get("type", ButtonKind.normal))
    except ValueError as exc:
        raise ChartShapeError(value=raw, reason=f"unknown button type {raw.get('type')!r}") from exc

    if kind is ButtonKind.normal:
        return NormalButton(linked_item=_text(raw.get("linkedItem")), link_buttons=link_buttons)
    return ActionButton(kind=kind, link_buttons=link_buttons)


def _text(value: object) -> str | None:
    """Return a non-empty string for identifiers and names, or None."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, str)):
        text = str(value)
        return text if text else None
    return None
