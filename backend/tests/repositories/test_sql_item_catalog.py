import pytest
from sqlalchemy.orm import sessionmaker

from ledgerdash.db import build_engine, init_db
from ledgerdash.domain.catalog_item import CatalogItem
from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.errors import StoreFailure
from ledgerdash.repositories.in_memory_item_catalog import InMemoryItemCatalog
from ledgerdash.repositories.sql_item_catalog import SqlItemCatalog


@pytest.fixture
def sql_catalog() -> SqlItemCatalog:
    engine = build_engine("sqlite://")
    init_db(engine)
    return SqlItemCatalog(session_factory=sessionmaker(bind=engine, future=True))


@pytest.fixture(params=["memory", "sql"])
def catalog(request, sql_catalog):
    if request.param == "memory":
        return InMemoryItemCatalog()
    return sql_catalog


def _item(item_id: str, name: str, kind=TransactionKind.INCOME) -> CatalogItem:
    return CatalogItem.create(id=item_id, name=name, kind=kind)


def test_list_items_in_insertion_order_per_kind(catalog):
    catalog.add(_item("z", "Zeta"))
    catalog.add(_item("a", "Alpha"))
    catalog.add(_item("t", "Tinta", kind=TransactionKind.OUTCOME))

    assert [i.name for i in catalog.list_items(TransactionKind.INCOME)] == ["Zeta", "Alpha"]
    assert [i.name for i in catalog.list_items(TransactionKind.OUTCOME)] == ["Tinta"]


def test_get_item(catalog):
    catalog.add(_item("a", "Alpha"))

    assert catalog.get_item(TransactionKind.INCOME, "a") == _item("a", "Alpha")
    assert catalog.get_item(TransactionKind.OUTCOME, "a") is None
    assert catalog.get_item(TransactionKind.INCOME, "missing") is None


def test_same_id_allowed_across_kinds_but_not_within(catalog):
    catalog.add(_item("a", "Alpha"))
    catalog.add(_item("a", "Alpha Out", kind=TransactionKind.OUTCOME))

    with pytest.raises(ValueError):
        catalog.add(_item("a", "Again"))


def test_sql_catalog_without_tables_raises_store_failure():
    broken = SqlItemCatalog(session_factory=sessionmaker(bind=build_engine("sqlite://"), future=True))
    with pytest.raises(StoreFailure):
        broken.list_items(TransactionKind.INCOME)
