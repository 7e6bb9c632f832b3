from dataclasses import replace
import datetime as dt
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

from ledgerdash.db import build_engine, init_db
from ledgerdash.domain.period import Metric
from ledgerdash.domain.transaction import Transaction, TransactionKind
from ledgerdash.errors import StoreFailure
from ledgerdash.repositories.sql_transaction_store import SqlTransactionStore

UTC = dt.timezone.utc
TZ = dt.timezone(dt.timedelta(hours=7))
FROM = dt.datetime(2025, 8, 1, tzinfo=TZ)
TO = dt.datetime(2025, 8, 31, 23, 59, 59, 999000, tzinfo=TZ)


@pytest.fixture
def store() -> SqlTransactionStore:
    engine = build_engine("sqlite://")
    init_db(engine)
    return SqlTransactionStore(session_factory=sessionmaker(bind=engine, future=True))


def make_tx(*, at: dt.datetime, total: str = "10", item_id: str = "a", kind=TransactionKind.INCOME, **kw) -> Transaction:
    return Transaction.create(
        kind=kind,
        amount=Decimal(total),
        quantity=1,
        item_id=item_id,
        counterparty="Fajar",
        owner_id="u1",
        created_at=at,
        **kw,
    )


def test_roundtrip_keeps_fields_and_timezone(store):
    tx = make_tx(at=dt.datetime(2025, 8, 10, 9, 0, tzinfo=TZ), total="12.5", contact="081298765432", receipt="r.png")
    store.add(tx)

    [back] = store.list_between(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO)
    assert back == tx
    assert back.created_at.tzinfo is not None


def test_add_duplicate_id_raises(store):
    tx = make_tx(at=FROM)
    store.add(tx)
    with pytest.raises(ValueError):
        store.add(tx)


def test_range_bounds_are_inclusive_across_timezones(store):
    store.add(make_tx(at=FROM, total="10"))
    store.add(make_tx(at=TO, total="20"))
    store.add(make_tx(at=FROM - dt.timedelta(seconds=1), total="40"))
    store.add(make_tx(at=TO + dt.timedelta(seconds=1), total="80"))
    store.add(make_tx(at=FROM, total="160", kind=TransactionKind.OUTCOME))

    assert store.sum_total(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO) == Decimal("30.00")
    assert store.count(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO) == 2
    assert store.sum_total(kind=TransactionKind.OUTCOME, date_from=TO, date_to=TO) == Decimal("0.00")


def test_daily_totals(store):
    # 01:30 local on the 11th
    store.add(make_tx(at=dt.datetime(2025, 8, 10, 18, 30, tzinfo=UTC), total="5"))
    store.add(make_tx(at=dt.datetime(2025, 8, 10, 8, 0, tzinfo=UTC), total="7"))

    local = store.daily_totals(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO, tz=TZ, metric=Metric.COUNT)
    utc = store.daily_totals(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO, tz=UTC, metric=Metric.AMOUNT)

    assert local == {dt.date(2025, 8, 10): 1, dt.date(2025, 8, 11): 1}
    assert utc == {dt.date(2025, 8, 10): Decimal("12.00")}


def test_totals_by_item_first_appearance_order(store):
    store.add(make_tx(at=dt.datetime(2025, 8, 5, tzinfo=TZ), item_id="b"))
    store.add(make_tx(at=dt.datetime(2025, 8, 3, tzinfo=TZ), item_id="c", total="3"))
    store.add(make_tx(at=dt.datetime(2025, 8, 4, tzinfo=TZ), item_id="b", total="1"))

    out = store.totals_by_item(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO)
    assert [(g.item_id, g.total) for g in out] == [("c", Decimal("3.00")), ("b", Decimal("11.00"))]


def test_latest_is_newest_first(store):
    txs = [make_tx(at=FROM + dt.timedelta(hours=i)) for i in range(4)]
    for t in txs:
        store.add(t)
    store.add(make_tx(at=TO, kind=TransactionKind.OUTCOME))

    assert [t.id for t in store.latest(kind=TransactionKind.INCOME, limit=3)] == [txs[3].id, txs[2].id, txs[1].id]


def test_missing_tables_raise_store_failure():
    engine = build_engine("sqlite://")
    broken = SqlTransactionStore(session_factory=sessionmaker(bind=engine, future=True))

    with pytest.raises(StoreFailure, match="sum_total failed"):
        broken.sum_total(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO)


def test_stored_timestamps_keep_millisecond_precision(store):
    # bypass Transaction.create to hand the store a finer timestamp
    tx = replace(make_tx(at=FROM), created_at=dt.datetime(2025, 8, 31, 16, 59, 59, 999500, tzinfo=UTC))
    store.add(tx)

    assert store.count(kind=TransactionKind.INCOME, date_from=FROM, date_to=TO) == 1
    [back] = store.latest(kind=TransactionKind.INCOME, limit=1)
    assert back.created_at.microsecond == 999000
