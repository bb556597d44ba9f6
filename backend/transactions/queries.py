# transactions/queries.py
"""Read helpers for listing ledger transactions."""

from datetime import datetime, timezone as dt_timezone
from typing import Iterable, Optional

from django.utils import timezone

from transactions.models import Transaction

DEFAULT_START_DATE = datetime(2015, 1, 1, tzinfo=dt_timezone.utc)


def get_transactions(
    collective_ids: Iterable[int],
    start_date: datetime = DEFAULT_START_DATE,
    end_date: Optional[datetime] = None,
    *,
    where: Optional[dict] = None,
    limit: Optional[int] = None,
    select_related: Optional[Iterable[str]] = None,
):
    """
    Transactions of the given collectives created in [start_date, end_date), newest first.

    Args:
        collective_ids: Collectives whose transactions to list
        start_date: Inclusive lower bound on created_at
        end_date: Exclusive upper bound on created_at, defaults to now
        where: Extra field lookups passed to filter()
        limit: Maximum number of rows
        select_related: Relations to load in the same query
    """
    if end_date is None:
        end_date = timezone.now()

    queryset = Transaction.objects.filter(
        **(where or {}),
        collective_id__in=list(collective_ids),
        created_at__gte=start_date,
        created_at__lt=end_date,
    ).order_by("-created_at", "-id")

    if select_related:
        queryset = queryset.select_related(*select_related)
    if limit:
        queryset = queryset[:limit]
    return queryset
