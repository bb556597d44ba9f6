"""
Export the transactions of one or more collectives to CSV or Excel.

Usage:
    python manage.py export_transactions --collective open-source-co --out ledger.csv
    python manage.py export_transactions --collective a --collective b --start 2024-01-01 --end 2025-01-01 --format xlsx --out ledger.xlsx
"""
from datetime import datetime, time, timezone as dt_timezone

from django.core.management.base import BaseCommand, CommandError

from collectives.models import Collective
from transactions.exports import ExportFormat, export_transactions
from transactions.queries import DEFAULT_START_DATE, get_transactions


def _parse_day(value: str) -> datetime:
    try:
        day = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise CommandError(f"Invalid date '{value}', expected YYYY-MM-DD")
    return datetime.combine(day, time.min, tzinfo=dt_timezone.utc)


class Command(BaseCommand):
    help = "Export the transactions of collectives to CSV or Excel"

    def add_arguments(self, parser):
        parser.add_argument(
            "--collective",
            action="append",
            required=True,
            dest="collectives",
            help="Collective slug (repeatable)",
        )
        parser.add_argument("--start", type=str, help="First day included (YYYY-MM-DD)")
        parser.add_argument("--end", type=str, help="First day excluded (YYYY-MM-DD)")
        parser.add_argument("--limit", type=int, default=None, help="Maximum number of rows")
        parser.add_argument(
            "--format",
            choices=ExportFormat.CHOICES,
            default=ExportFormat.CSV,
            dest="fmt",
        )
        parser.add_argument("--out", type=str, required=True, help="Output file path")

    def handle(self, *args, **options):
        slugs = options["collectives"]
        collective_ids = list(
            Collective.objects.filter(slug__in=slugs).values_list("id", flat=True)
        )
        if len(collective_ids) != len(set(slugs)):
            found = set(Collective.objects.filter(id__in=collective_ids).values_list("slug", flat=True))
            missing = ", ".join(sorted(set(slugs) - found))
            raise CommandError(f"Collective not found: {missing}")

        start = _parse_day(options["start"]) if options["start"] else DEFAULT_START_DATE
        end = _parse_day(options["end"]) if options["end"] else None

        transactions = get_transactions(
            collective_ids,
            start,
            end,
            limit=options["limit"],
        )
        content = export_transactions(transactions, fmt=options["fmt"])

        mode = "wb" if isinstance(content, bytes) else "w"
        encoding = None if mode == "wb" else "utf-8"
        with open(options["out"], mode, encoding=encoding, newline=None if mode == "wb" else "") as f:
            f.write(content)

        self.stdout.write(
            self.style.SUCCESS(f"Exported {len(transactions)} transactions to {options['out']}")
        )
