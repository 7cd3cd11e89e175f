"""Tests for resolving range identifiers to names and usage counts."""

from __future__ import annotations

import math

import pytest

from analysis.dto import Catalog, Folder, Range
from analysis.resolver import (
    ORPHAN_FOLDER_NAME,
    ORPHAN_RANGE_NAME,
    build_range_index,
    coerce_usage_count,
    resolve_references,
)

pytestmark = pytest.mark.unit


def test_build_range_index_maps_every_range_to_folder_and_name(catalog: Catalog) -> None:
    """Every range in every folder is indexed."""

    assert build_range_index(catalog) == {
        "r1": ("F", "A"),
        "r2": ("F", "B"),
        "r4": ("BTN", "Open"),
    }


def test_build_range_index_last_duplicate_wins() -> None:
    """A range id repeated across folders resolves to the last occurrence."""

    catalog = Catalog(
        folders=(
            Folder(id="f1", name="Old", ranges=(Range(id="r1", name="First"),)),
            Folder(id="f2", name="New", ranges=(Range(id="r1", name="Second"),)),
        )
    )

    assert build_range_index(catalog) == {"r1": ("New", "Second")}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (5, 5),
        ("7", 7),
        (" 12 ", 12),
        (2.9, 2),
        ("3.5", 3),
        (None, 0),
        ("abc", 0),
        ("", 0),
        (-3, 0),
        ("-4", 0),
        (True, 0),
        (math.nan, 0),
        (math.inf, 0),
        ([1], 0),
        ({"count": 1}, 0),
    ],
)
def test_coerce_usage_count(raw: object, expected: int) -> None:
    """Malformed counts degrade to 0 instead of failing."""

    assert coerce_usage_count(raw) == expected


def test_resolve_references_uses_catalog_names_and_counts(catalog: Catalog) -> None:
    """Known ranges resolve to folder/range names with their counts."""

    resolved = resolve_references(("r1", "r2"), catalog=catalog, usage={"r1": 5, "r2": "9"})

    assert [(s.range_id, s.folder_name, s.range_name, s.count, s.is_orphan) for s in resolved] == [
        ("r1", "F", "A", 5, False),
        ("r2", "F", "B", 9, False),
    ]


def test_resolve_references_keeps_orphans_with_their_counts(catalog: Catalog) -> None:
    """Ranges missing from the catalog get placeholders but keep usage."""

    (stat,) = resolve_references(("r3",), catalog=catalog, usage={"r3": 2})

    assert stat.folder_name == ORPHAN_FOLDER_NAME
    assert stat.range_name == ORPHAN_RANGE_NAME
    assert stat.count == 2
    assert stat.is_orphan is True


def test_resolve_references_defaults_missing_usage_to_zero(catalog: Catalog) -> None:
    """Catalog ranges without a usage entry have an implicit count of 0."""

    (stat,) = resolve_references(("r4",), catalog=catalog, usage={})

    assert stat.count == 0
    assert stat.range_name == "Open"


def test_resolve_references_does_not_mutate_inputs(catalog: Catalog) -> None:
    """The usage table is read, never written."""

    usage = {"r1": "5", "orphan": "x"}
    resolve_references(("r1", "missing"), catalog=catalog, usage=usage)

    assert usage == {"r1": "5", "orphan": "x"}
