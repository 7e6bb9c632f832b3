from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from typing import Protocol

from ledgerdash.domain.period import Metric
from ledgerdash.domain.transaction import Transaction, TransactionKind


@dataclass(frozen=True)
class ItemTotal:
    item_id: str
    total: Decimal


class TransactionStore(Protocol):
    """
    Read side of the transaction store.

    Every range argument is inclusive on both ends (from <= created_at <= to).
    Implementations raise StoreFailure when the backend cannot answer.
    """

    def sum_total(self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime) -> Decimal:
        ...

    def count(self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime) -> int:
        ...

    def daily_totals(
        self,
        *,
        kind: TransactionKind,
        date_from: dt.datetime,
        date_to: dt.datetime,
        tz: dt.tzinfo,
        metric: Metric,
    ) -> dict[dt.date, Decimal | int]:
        """Sparse map calendar day (in ``tz``) -> summed amount or count."""
        ...

    def totals_by_item(
        self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime
    ) -> list[ItemTotal]:
        """Groups in first-appearance order (earliest created_at, then item_id)."""
        ...

    def latest(self, *, kind: TransactionKind, limit: int) -> list[Transaction]:
        ...

    def list_between(
        self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime
    ) -> list[Transaction]:
        ...
