"""Integration tests for the chart statistics page and JSON endpoint."""

from __future__ import annotations

import pytest
from django.urls import reverse

from core.models import ChartButton, ChartLinkButton, RangeFolder, RangeUsage, StoredChart, StoredRange

pytestmark = pytest.mark.integration


@pytest.fixture
def stored_chart(user) -> StoredChart:
    """Return a chart linking to two catalog ranges and one orphan."""

    folder = RangeFolder.objects.create(owner=user, name="F")
    StoredRange.objects.create(folder=folder, range_id="r1", name="A", position=0)
    StoredRange.objects.create(folder=folder, range_id="r2", name="B", position=1)

    chart = StoredChart.objects.create(owner=user, name="SB vs BB")
    ChartButton.objects.create(chart=chart, position=0, kind="normal", linked_item="r1")
    button = ChartButton.objects.create(chart=chart, position=1, kind="normal", linked_item="label-only")
    ChartLinkButton.objects.create(button=button, enabled=True, target_range_id="r2")
    ChartButton.objects.create(chart=chart, position=2, kind="normal", linked_item="gone")

    RangeUsage.objects.create(owner=user, range_id="r1", count=5)
    RangeUsage.objects.create(owner=user, range_id="r2", count=9)
    return chart


@pytest.mark.django_db
def test_chart_stats_page_lists_ranked_rows(auth_client, stored_chart) -> None:
    """The page renders non-zero rows in ranked order."""

    response = auth_client.get(reverse("core:chart_stats", args=[stored_chart.pk]))

    assert response.status_code == 200
    body = response.content.decode()
    assert "Statistics for &quot;SB vs BB&quot;" in body
    assert body.index("F - B:") < body.index("F - A:")
    assert "9 hits" in body
    assert "(Range not found)" not in body
    assert [row.label for row in response.context["view"].rows] == ["F - B", "F - A"]


@pytest.mark.django_db
def test_chart_stats_page_shows_empty_state_for_unlinked_chart(auth_client, user) -> None:
    """A chart without range links explains how to add them."""

    chart = StoredChart.objects.create(owner=user, name="Empty")
    ChartButton.objects.create(chart=chart, kind="exit")

    response = auth_client.get(reverse("core:chart_stats", args=[chart.pk]))

    assert response.status_code == 200
    assert "No linked ranges to show statistics for." in response.content.decode()


@pytest.mark.django_db
def test_chart_stats_api_returns_ranked_and_visible_stats(auth_client, stored_chart) -> None:
    """The JSON endpoint includes zero counts in `stats` but not in `visible`."""

    response = auth_client.get(reverse("core:chart_stats_api", args=[stored_chart.pk]))

    assert response.status_code == 200
    payload = response.json()
    assert payload["chart"] == "SB vs BB"
    assert payload["reference_count"] == 3
    assert [(s["range_id"], s["count"]) for s in payload["stats"]] == [("r2", 9), ("r1", 5), ("gone", 0)]
    assert payload["stats"][2]["is_orphan"] is True
    assert [s["range_id"] for s in payload["visible"]] == ["r2", "r1"]


@pytest.mark.django_db
def test_chart_stats_requires_login(client, stored_chart) -> None:
    """Anonymous users are redirected to the login page."""

    response = client.get(reverse("core:chart_stats_api", args=[stored_chart.pk]))

    assert response.status_code == 302
    assert response["Location"].startswith("/accounts/login/")


@pytest.mark.django_db
def test_chart_stats_hides_other_users_charts(client, other_user, stored_chart) -> None:
    """Another user's chart is a 404."""

    client.force_login(other_user)

    assert client.get(reverse("core:chart_stats", args=[stored_chart.pk])).status_code == 404
    assert client.get(reverse("core:chart_stats_api", args=[stored_chart.pk])).status_code == 404


@pytest.mark.django_db
def test_login_redirect_renders_sign_in_page(client, stored_chart) -> None:
    """Following the login redirect shows the sign-in form with `next`."""

    response = client.get(reverse("core:chart_stats", args=[stored_chart.pk]), follow=True)

    assert response.status_code == 200
    assert response.redirect_chain[0][0].startswith("/accounts/login/")
    body = response.content.decode()
    assert 'name="password"' in body
    assert f'value="/charts/{stored_chart.pk}/stats/"' in body


@pytest.mark.django_db
def test_login_post_redirects_to_next(client, user, stored_chart) -> None:
    """Valid credentials log the user in and return them to `next`."""

    next_url = reverse("core:chart_stats", args=[stored_chart.pk])

    response = client.post(
        reverse("login"),
        {"username": "alice", "password": "password", "next": next_url},
    )

    assert response.status_code == 302
    assert response["Location"] == next_url
    assert client.get(next_url).status_code == 200


@pytest.mark.django_db
def test_login_post_ignores_offsite_next(client, user) -> None:
    """An external `next` falls back to the chart list."""

    response = client.post(
        reverse("login"),
        {"username": "alice", "password": "password", "next": "https://evil.example/"},
    )

    assert response.status_code == 302
    assert response["Location"] == "/"


@pytest.mark.django_db
def test_login_rejects_bad_credentials(client, user) -> None:
    """Wrong passwords re-render the form instead of logging in."""

    response = client.post(reverse("login"), {"username": "alice", "password": "wrong"})

    assert response.status_code == 200
    assert "_auth_user_id" not in client.session


@pytest.mark.django_db
def test_chart_list_links_to_owned_charts_only(auth_client, other_user, stored_chart) -> None:
    """The chart list shows the user's charts with stats links."""

    StoredChart.objects.create(owner=other_user, name="Not mine")

    response = auth_client.get(reverse("core:chart_list"))

    assert response.status_code == 200
    body = response.content.decode()
    assert reverse("core:chart_stats", args=[stored_chart.pk]) in body
    assert "Not mine" not in body


@pytest.mark.django_db
def test_chart_stats_api_tolerates_unknown_stored_button_kind(auth_client, stored_chart) -> None:
    """A button with an unknown kind contributes only its link buttons."""

    button = ChartButton.objects.create(chart=stored_chart, position=3, kind="dropdown", linked_item="r1")
    ChartLinkButton.objects.create(button=button, enabled=True, target_range_id="extra")

    response = auth_client.get(reverse("core:chart_stats_api", args=[stored_chart.pk]))

    assert response.status_code == 200
    assert [s["range_id"] for s in response.json()["stats"]] == ["r2", "r1", "gone", "extra"]
