"""Print the most used ranges for a chart."""

from __future__ import annotations

import json
from pathlib import Path

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from analysis.dto import ChartStatsResult
from analysis.references import ChartShapeError
from analysis.snapshot import parse_chart
from core.presentation import build_chart_stats_view, stat_to_dict, visible_stats
from core.providers import SnapshotCatalogProvider, SnapshotUsageProvider
from core.services import chart_stats_for_user, chart_stats_from_providers


class Command(BaseCommand):
    """Rank range usage for a stored chart or a chart in a JSON export."""

    help = "Print the top 10 most used ranges for a chart (database or JSON snapshot)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("--chart-id", type=int, default=None, help="StoredChart primary key.")
        parser.add_argument("--user", default=None, help="Username owning the chart (with --chart-id).")
        parser.add_argument(
            "--snapshot",
            type=Path,
            default=None,
            help="JSON export holding the storage keys and a `charts` list.",
        )
        parser.add_argument("--chart-name", default=None, help="Chart name to pick from the snapshot.")
        parser.add_argument("--json", action="store_true", help="Emit JSON instead of text.")
        parser.add_argument(
            "--include-zero",
            action="store_true",
            help="Also list ranked ranges with no recorded usage.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        chart_id: int | None = options["chart_id"]
        snapshot: Path | None = options["snapshot"]

        if (chart_id is None) == (snapshot is None):
            raise CommandError("Pass exactly one of --chart-id or --snapshot.")

        if chart_id is not None:
            result = self._from_database(chart_id, username=options["user"])
        else:
            result = self._from_snapshot(snapshot, chart_name=options["chart_name"])

        stats = result.stats if options["include_zero"] else visible_stats(result.stats)
        if options["json"]:
            payload = {"chart": result.chart_name, "stats": [stat_to_dict(stat) for stat in stats]}
            self.stdout.write(json.dumps(payload, ensure_ascii=False))
            return None

        view = build_chart_stats_view(result)
        self.stdout.write(view.title)
        if not stats:
            self.stdout.write(view.empty_message or "")
            if view.empty_hint:
                self.stdout.write(view.empty_hint)
            return None
        for position, stat in enumerate(stats, start=1):
            self.stdout.write(f"{position}. {stat.folder_name} - {stat.range_name}: {stat.count}")
        return None

    def _from_database(self, chart_id: int, *, username: str | None) -> ChartStatsResult:
        """Rank a stored chart for its owner."""

        if not username:
            raise CommandError("--user is required with --chart-id.")
        user_model = get_user_model()
        try:
            owner = user_model.objects.get(username=username)
        except user_model.DoesNotExist as exc:
            raise CommandError(f"Unknown user {username!r}.") from exc

        result = chart_stats_for_user(chart_id, owner=owner)
        if result is None:
            raise CommandError(f"Chart {chart_id} not found for user {username!r}.")
        return result

    def _from_snapshot(self, path: Path, *, chart_name: str | None) -> ChartStatsResult:
        """Rank a chart from a JSON export file."""

        try:
            storage = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CommandError(f"Could not read snapshot {path}: {exc}") from exc
        if not isinstance(storage, dict):
            raise CommandError("Snapshot must be a JSON object.")

        charts = storage.get("charts")
        if not isinstance(charts, list) or not charts:
            raise CommandError("Snapshot has no `charts` list.")

        try:
            parsed = [parse_chart(raw_chart) for raw_chart in charts]
        except ChartShapeError as exc:
            raise CommandError(str(exc)) from exc

        if chart_name is None:
            if len(parsed) > 1:
                raise CommandError("Snapshot holds several charts; pass --chart-name.")
            chart = parsed[0]
        else:
            matches = [candidate for candidate in parsed if candidate.name == chart_name]
            if not matches:
                raise CommandError(f"Chart {chart_name!r} not found in snapshot.")
            chart = matches[0]

        return chart_stats_from_providers(
            chart,
            catalog_provider=SnapshotCatalogProvider(storage),
            usage_provider=SnapshotUsageProvider(storage),
        )
