import datetime as dt
from decimal import Decimal
from uuid import UUID

import pytest

from ledgerdash.domain.catalog_item import CatalogItem
from ledgerdash.domain.money import format_money
from ledgerdash.domain.transaction import Transaction, TransactionKind, parse_kind
from ledgerdash.errors import InvalidArgument

TZ = dt.timezone(dt.timedelta(hours=7))


def make_tx(**overrides) -> Transaction:
    kwargs = dict(
        kind=TransactionKind.INCOME,
        amount=Decimal("15000"),
        quantity=2,
        item_id=" ganci ",
        counterparty=" Dewi ",
        owner_id=" u1 ",
        created_at=dt.datetime(2025, 8, 23, 9, 0, tzinfo=TZ),
    )
    kwargs.update(overrides)
    return Transaction.create(**kwargs)


def test_transaction_create_ok():
    tx = make_tx(contact=" 081234567890 ")

    assert isinstance(tx.id, UUID)
    assert tx.kind == TransactionKind.INCOME
    assert tx.amount == Decimal("15000.00")
    assert tx.total_amount == Decimal("30000.00")
    assert tx.item_id == "ganci"
    assert tx.counterparty == "Dewi"
    assert tx.owner_id == "u1"
    assert tx.contact == "081234567890"
    assert tx.receipt is None


def test_created_at_is_normalized_to_utc():
    tx = make_tx()
    assert tx.created_at == dt.datetime(2025, 8, 23, 2, 0, tzinfo=dt.timezone.utc)
    assert tx.created_at.utcoffset() == dt.timedelta(0)


def test_created_at_is_truncated_to_milliseconds():
    tx = make_tx(created_at=dt.datetime(2025, 8, 23, 23, 59, 59, 999500, tzinfo=TZ))
    assert tx.created_at.microsecond == 999000
    assert make_tx(created_at=None).created_at.microsecond % 1000 == 0


def test_created_at_defaults_to_now():
    tx = make_tx(created_at=None)
    assert tx.created_at.tzinfo is not None


def test_naive_created_at_rejected():
    with pytest.raises(ValueError):
        make_tx(created_at=dt.datetime(2025, 8, 23, 9, 0))


def test_explicit_total_amount_is_kept():
    tx = make_tx(total_amount=Decimal("29999.5"))
    assert tx.total_amount == Decimal("29999.50")


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": Decimal("0")},
        {"amount": Decimal("-1")},
        {"amount": 10},
        {"quantity": 0},
        {"quantity": True},
        {"item_id": "  "},
        {"counterparty": ""},
        {"owner_id": ""},
        {"kind": "INCOME"},
        {"total_amount": 10},
    ],
)
def test_invalid_fields_rejected(overrides):
    with pytest.raises(ValueError):
        make_tx(**overrides)


@pytest.mark.parametrize("contact", ["0812345", "6281234567890", "08123456789012", "08abc45678"])
def test_contact_must_look_like_whatsapp_number(contact):
    with pytest.raises(ValueError, match="WhatsApp"):
        make_tx(contact=contact)


def test_blank_contact_is_none():
    assert make_tx(contact="  ").contact is None


@pytest.mark.parametrize("token,expected", [
    ("income", TransactionKind.INCOME),
    ("OUTCOME", TransactionKind.OUTCOME),
    (" Income ", TransactionKind.INCOME),
])
def test_parse_kind(token, expected):
    assert parse_kind(token) is expected
    assert expected.token == expected.value.lower()


@pytest.mark.parametrize("token", ["", "expense", None])
def test_parse_kind_rejects_unknown(token):
    with pytest.raises(InvalidArgument, match="Use income or outcome"):
        parse_kind(token)


def test_money_helpers():
    assert format_money(Decimal("600")) == "600.00"
    assert format_money(Decimal("12.345")) == "12.35"


def test_catalog_item_create():
    item = CatalogItem.create(id=" ganci ", name=" Ganci Akrilik ", kind=TransactionKind.INCOME)
    assert (item.id, item.name) == ("ganci", "Ganci Akrilik")
    with pytest.raises(ValueError):
        CatalogItem.create(id="x", name=" ", kind=TransactionKind.INCOME)
