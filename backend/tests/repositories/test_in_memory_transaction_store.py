import datetime as dt
from decimal import Decimal

import pytest

from ledgerdash.domain.period import Metric
from ledgerdash.domain.transaction import Transaction, TransactionKind
from ledgerdash.repositories.in_memory_transaction_store import InMemoryTransactionStore

UTC = dt.timezone.utc
TZ = dt.timezone(dt.timedelta(hours=7))
FROM = dt.datetime(2025, 8, 1, tzinfo=UTC)
TO = dt.datetime(2025, 8, 31, 23, 59, 59, tzinfo=UTC)


def make_tx(*, at: dt.datetime, total: str = "10", item_id: str = "a", kind=TransactionKind.INCOME) -> Transaction:
    return Transaction.create(
        kind=kind,
        amount=Decimal(total),
        quantity=1,
        item_id=item_id,
        counterparty="Eka",
        owner_id="u1",
        created_at=at,
    )


def test_add_duplicate_id_raises():
    store = InMemoryTransactionStore()
    tx = make_tx(at=FROM)
    store.add(tx)
    with pytest.raises(ValueError):
        store.add(tx)


def test_sum_and_count_are_inclusive_and_filtered_by_kind():
    store = InMemoryTransactionStore()
    store.add(make_tx(at=FROM, total="10"))
    store.add(make_tx(at=TO, total="20"))
    store.add(make_tx(at=TO + dt.timedelta(seconds=1), total="40"))
    store.add(make_tx(at=FROM, total="80", kind=TransactionKind.OUTCOME))

    assert store.sum_total(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO) == Decimal("30.00")
    assert store.count(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO) == 2
    assert store.count(kind=TransactionKind.OUTCOME, date_from=FROM, date_to=TO) == 1


def test_inverted_range_raises():
    with pytest.raises(ValueError):
        InMemoryTransactionStore().count(kind=TransactionKind.INCOME, date_from=TO, date_to=FROM)


def test_daily_totals_by_timezone():
    store = InMemoryTransactionStore()
    store.add(make_tx(at=dt.datetime(2025, 8, 10, 20, 0, tzinfo=UTC), total="5"))
    store.add(make_tx(at=dt.datetime(2025, 8, 10, 8, 0, tzinfo=UTC), total="7"))

    local = store.daily_totals(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO, tz=TZ, metric=Metric.COUNT)
    utc = store.daily_totals(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO, tz=UTC, metric=Metric.AMOUNT)

    assert local == {dt.date(2025, 8, 10): 1, dt.date(2025, 8, 11): 1}
    assert utc == {dt.date(2025, 8, 10): Decimal("12.00")}


def test_totals_by_item_first_appearance_order():
    store = InMemoryTransactionStore()
    store.add(make_tx(at=dt.datetime(2025, 8, 5, tzinfo=UTC), item_id="b"))
    store.add(make_tx(at=dt.datetime(2025, 8, 3, tzinfo=UTC), item_id="c", total="3"))
    store.add(make_tx(at=dt.datetime(2025, 8, 4, tzinfo=UTC), item_id="b", total="1"))

    out = store.totals_by_item(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO)
    assert [(g.item_id, g.total) for g in out] == [("c", Decimal("3.00")), ("b", Decimal("11.00"))]


def test_latest_and_list_between_ordering():
    store = InMemoryTransactionStore()
    txs = [make_tx(at=FROM + dt.timedelta(days=i)) for i in range(5)]
    for t in reversed(txs):
        store.add(t)

    assert store.latest(kind=TransactionKind.INCOME, limit=2) == [txs[4], txs[3]]
    assert store.list_between(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO) == txs
