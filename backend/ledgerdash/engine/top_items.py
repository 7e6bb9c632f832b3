from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal

from ledgerdash.domain.catalog_item import UNKNOWN_ITEM_NAME
from ledgerdash.domain.money import ZERO
from ledgerdash.domain.period import DateRange
from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.errors import InvalidArgument
from ledgerdash.repositories.item_catalog import ItemCatalog
from ledgerdash.repositories.transaction_store import TransactionStore

TOP_ITEMS_LIMIT = 6


@dataclass(frozen=True)
class RankedItemSummary:
    item_name: str
    total: Decimal
    from_date: dt.datetime
    to_date: dt.datetime


def top_items(
    store: TransactionStore,
    catalog: ItemCatalog,
    kind: TransactionKind,
    window: DateRange,
    limit: int = TOP_ITEMS_LIMIT,
) -> list[RankedItemSummary]:
    """
    Best items of ``kind`` by summed total over ``window``.

    Ranked groups come first (descending total, ties keep the store's
    first-appearance order). If fewer than ``limit`` items had activity, the
    list is padded with catalog items that had none, in catalog order, with a
    zero total. Items deleted from the catalog are reported as "Unknown Item".
    """
    if not isinstance(kind, TransactionKind):
        raise InvalidArgument(f"unsupported transaction kind {kind!r}")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgument("limit must be a positive integer")

    groups = store.totals_by_item(kind=kind, date_from=window.date_from, date_to=window.date_to)
    # sorted() is stable, reverse included
    ranked = sorted(groups, key=lambda g: g.total, reverse=True)[:limit]

    catalog_items = catalog.list_items(kind)
    names = {item.id: item.name for item in catalog_items}

    out = [
        RankedItemSummary(
            item_name=names.get(g.item_id, UNKNOWN_ITEM_NAME),
            total=g.total,
            from_date=window.date_from,
            to_date=window.date_to,
        )
        for g in ranked
    ]

    used = {g.item_id for g in ranked}
    unused = [item for item in catalog_items if item.id not in used][: limit - len(out)]
    out.extend(
        RankedItemSummary(item_name=item.name, total=ZERO, from_date=window.date_from, to_date=window.date_to)
        for item in unused
    )
    return out
