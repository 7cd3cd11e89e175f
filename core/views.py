"""Views for sign-in and chart range-usage statistics."""

from __future__ import annotations

from django.conf import settings
from django.contrib.auth import login as auth_login
from django.contrib.auth.decorators import login_required
from django.contrib.auth.forms import AuthenticationForm
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme

from analysis.dto import ChartStatsResult
from core.models import StoredChart
from core.presentation import build_chart_stats_view, stat_to_dict, visible_stats
from core.services import chart_stats_for_user


def _safe_next_url(request: HttpRequest, candidate: str | None) -> str:
    """Return `candidate` when it points at this site, else LOGIN_REDIRECT_URL."""

    if candidate and url_has_allowed_host_and_scheme(
        candidate,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return candidate
    return settings.LOGIN_REDIRECT_URL


def login_view(request: HttpRequest) -> HttpResponse:
    """Render the sign-in page and log the user in on a valid POST.

    This view replaces Django's default LoginView so sign-in uses the app's
    own template.
    """

    if request.user.is_authenticated:
        return redirect(settings.LOGIN_REDIRECT_URL)

    next_url = request.GET.get("next", "")
    form = AuthenticationForm(request)

    if request.method == "POST":
        next_url = request.POST.get("next", next_url)
        form = AuthenticationForm(request, data=request.POST)
        if form.is_valid():
            auth_login(request, form.get_user())
            return redirect(_safe_next_url(request, next_url))

    return render(request, "registration/login.html", {"form": form, "next": next_url})


@login_required
def chart_list(request: HttpRequest) -> HttpResponse:
    """List the user's charts with links to their statistics."""

    charts = StoredChart.objects.filter(owner=request.user).order_by("name", "id")
    return render(request, "core/chart_list.html", {"charts": charts})


def _owned_chart_stats(request: HttpRequest, chart_id: int) -> ChartStatsResult:
    """Return ranked stats for a chart owned by the requesting user, or 404."""

    result = chart_stats_for_user(chart_id, owner=request.user)
    if result is None:
        raise Http404("Chart not found.")
    return result


@login_required
def chart_stats(request: HttpRequest, chart_id: int) -> HttpResponse:
    """Render the top used ranges for a chart."""

    result = _owned_chart_stats(request, chart_id)
    return render(
        request,
        "core/chart_stats.html",
        {"chart_id": chart_id, "result": result, "view": build_chart_stats_view(result)},
    )


@login_required
def chart_stats_api(request: HttpRequest, chart_id: int) -> JsonResponse:
    """Return ranked stats for a chart as JSON.

    `stats` holds the ranked list including zero counts; `visible` holds the
    entries a UI should display.
    """

    result = _owned_chart_stats(request, chart_id)
    return JsonResponse(
        {
            "chart": result.chart_name,
            "reference_count": result.reference_count,
            "stats": [stat_to_dict(stat) for stat in result.stats],
            "visible": [stat_to_dict(stat) for stat in visible_stats(result.stats)],
        }
    )
