"""Pytest fixtures shared across analysis and Django integration tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest
from django.contrib.auth import get_user_model

from analysis.dto import Catalog, Folder, Range


@pytest.fixture
def user(db):
    """Return a User owning the test catalog and charts."""

    user_model = get_user_model()
    return user_model.objects.create_user(username="alice", password="password")


@pytest.fixture
def other_user(db):
    """Return a second User for ownership isolation checks."""

    user_model = get_user_model()
    return user_model.objects.create_user(username="bob", password="password")


@pytest.fixture
def auth_client(client, user):
    """Return a Django test client authenticated as the default test user."""

    client.force_login(user)
    return client


@pytest.fixture
def catalog() -> Catalog:
    """Return a small two-folder catalog."""

    return Catalog(
        folders=(
            Folder(id="f1", name="F", ranges=(Range(id="r1", name="A"), Range(id="r2", name="B"))),
            Folder(id="f2", name="BTN", ranges=(Range(id="r4", name="Open"),)),
        )
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, database, views, commands, or IO.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
