from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal

from ledgerdash.domain.period import MonthRange
from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.engine.period_calculator import month_window
from ledgerdash.errors import InvalidArgument
from ledgerdash.repositories.item_catalog import ItemCatalog
from ledgerdash.repositories.transaction_store import TransactionStore


@dataclass(frozen=True)
class ExportRow:
    no: int
    item_name: str
    quantity: int
    amount: Decimal
    total_amount: Decimal
    counterparty: str
    contact: str | None
    owner_id: str
    created_at: dt.datetime


@dataclass(frozen=True)
class MonthlyExport:
    kind: TransactionKind
    month: MonthRange
    date_from: dt.datetime
    date_to: dt.datetime
    rows: list[ExportRow]

    @property
    def sheet_title(self) -> str:
        return f"{self.kind.value.capitalize()}_{self.month.value}"

    @property
    def filename(self) -> str:
        return f"{self.kind.token}-{self.month.value}.xlsx"


def export_rows(
    store: TransactionStore,
    catalog: ItemCatalog,
    kind: TransactionKind,
    month: MonthRange,
    now: dt.datetime,
) -> MonthlyExport:
    """Every transaction of ``kind`` in the calendar month, oldest first, numbered from 1."""
    if not isinstance(kind, TransactionKind):
        raise InvalidArgument("Invalid type. Use income or outcome")

    rng = month_window(month, now)
    txs = store.list_between(kind=kind, date_from=rng.date_from, date_to=rng.date_to)
    names = {item.id: item.name for item in catalog.list_items(kind)}

    rows = [
        ExportRow(
            no=idx,
            item_name=names.get(t.item_id, ""),
            quantity=t.quantity,
            amount=t.amount,
            total_amount=t.total_amount,
            counterparty=t.counterparty,
            contact=t.contact,
            owner_id=t.owner_id,
            created_at=t.created_at,
        )
        for idx, t in enumerate(txs, start=1)
    ]
    return MonthlyExport(kind=kind, month=month, date_from=rng.date_from, date_to=rng.date_to, rows=rows)
