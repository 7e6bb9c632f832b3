from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
import datetime as dt
from decimal import Decimal

from ledgerdash.domain.money import ZERO
from ledgerdash.domain.period import Metric
from ledgerdash.domain.transaction import Transaction, TransactionKind
from ledgerdash.repositories.transaction_store import ItemTotal


@dataclass
class InMemoryTransactionStore:
    """
    In-memory store.
    - Deterministic
    - Easy to test
    - Enough to wire the API and the engine
    """
    _items: list[Transaction] = field(default_factory=list)

    def add(self, tx: Transaction) -> None:
        if any(t.id == tx.id for t in self._items):
            raise ValueError(f"Transaction with id {tx.id} already exists")
        self._items.append(tx)

    def _in_range(self, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime) -> list[Transaction]:
        if date_from > date_to:
            raise ValueError("date_from must be <= date_to")
        return [t for t in self._items if t.kind == kind and date_from <= t.created_at <= date_to]

    def sum_total(self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime) -> Decimal:
        return sum((t.total_amount for t in self._in_range(kind, date_from, date_to)), ZERO)

    def count(self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime) -> int:
        return len(self._in_range(kind, date_from, date_to))

    def daily_totals(
        self,
        *,
        kind: TransactionKind,
        date_from: dt.datetime,
        date_to: dt.datetime,
        tz: dt.tzinfo,
        metric: Metric,
    ) -> dict[dt.date, Decimal | int]:
        acc: dict[dt.date, Decimal | int] = {}
        for t in self._in_range(kind, date_from, date_to):
            day = t.created_at.astimezone(tz).date()
            if metric == Metric.COUNT:
                acc[day] = acc.get(day, 0) + 1
            else:
                acc[day] = acc.get(day, ZERO) + t.total_amount
        return acc

    def totals_by_item(
        self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime
    ) -> list[ItemTotal]:
        txs = sorted(self._in_range(kind, date_from, date_to), key=lambda t: (t.created_at, t.item_id))

        acc: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for t in txs:
            acc[t.item_id] += t.total_amount

        return [ItemTotal(item_id=k, total=v) for k, v in acc.items()]

    def latest(self, *, kind: TransactionKind, limit: int) -> list[Transaction]:
        txs = [t for t in self._items if t.kind == kind]
        txs.sort(key=lambda t: (t.created_at, str(t.id)), reverse=True)
        return txs[:limit]

    def list_between(
        self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime
    ) -> list[Transaction]:
        return sorted(self._in_range(kind, date_from, date_to), key=lambda t: (t.created_at, str(t.id)))
