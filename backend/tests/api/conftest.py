import datetime as dt

import pytest
from fastapi.testclient import TestClient

from ledgerdash.api.deps import get_item_catalog, get_now, get_report_tz, get_transaction_store
from ledgerdash.api.main import app
from ledgerdash.domain.catalog_item import CatalogItem
from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.repositories.in_memory_item_catalog import InMemoryItemCatalog
from ledgerdash.repositories.in_memory_transaction_store import InMemoryTransactionStore

TZ = dt.timezone(dt.timedelta(hours=7))
NOW = dt.datetime(2025, 8, 23, 10, 0, tzinfo=TZ)


@pytest.fixture
def store() -> InMemoryTransactionStore:
    return InMemoryTransactionStore()


@pytest.fixture
def catalog() -> InMemoryItemCatalog:
    c = InMemoryItemCatalog()
    c.add(CatalogItem.create(id="ganci", name="Ganci", kind=TransactionKind.INCOME))
    c.add(CatalogItem.create(id="brosur", name="Brosur", kind=TransactionKind.INCOME))
    c.add(CatalogItem.create(id="tinta", name="Tinta", kind=TransactionKind.OUTCOME))
    return c


@pytest.fixture
def client(store, catalog):
    app.dependency_overrides[get_transaction_store] = lambda: store
    app.dependency_overrides[get_item_catalog] = lambda: catalog
    app.dependency_overrides[get_now] = lambda: NOW
    app.dependency_overrides[get_report_tz] = lambda: TZ
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
