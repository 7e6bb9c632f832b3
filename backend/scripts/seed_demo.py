from __future__ import annotations

import datetime as dt
import logging
import random
from decimal import Decimal

from ledgerdash.domain.catalog_item import CatalogItem
from ledgerdash.domain.transaction import Transaction, TransactionKind
from ledgerdash.repositories.sql_item_catalog import SqlItemCatalog
from ledgerdash.repositories.sql_transaction_store import SqlTransactionStore
from ledgerdash.settings import configure_logging, get_settings

log = logging.getLogger(__name__)

INCOME_ITEMS = ["ganci", "brosur", "banner", "sablon", "poster"]
OUTCOME_ITEMS = ["tinta", "perbaikan", "logistik", "kertas", "bahan sablon", "akrilik"]
CUSTOMERS = ["Andi", "Budi", "Citra", "Dewi", "Eko", "Fajar"]
VENDORS = ["Toko Sinar", "CV Maju", "Pak Joko", "UD Berkah"]
OWNER_ID = "seed-superadmin"
SEED_DAYS = 60


def _random_contact(rng: random.Random) -> str:
    return "08" + "".join(str(rng.randint(0, 9)) for _ in range(rng.randint(8, 11)))


def _upsert_items(catalog: SqlItemCatalog, kind: TransactionKind, names: list[str]) -> list[CatalogItem]:
    existing = {i.name: i for i in catalog.list_items(kind)}
    out = []
    for name in names:
        item = existing.get(name)
        if item is None:
            item = CatalogItem.create(id=f"{kind.token}-{name.replace(' ', '-')}", name=name, kind=kind)
            catalog.add(item)
        out.append(item)
    return out


def _random_tx(
    rng: random.Random,
    kind: TransactionKind,
    items: list[CatalogItem],
    day: dt.datetime,
) -> Transaction:
    at = day + dt.timedelta(seconds=rng.randint(0, 86399))
    return Transaction.create(
        kind=kind,
        amount=Decimal(rng.randint(5, 300) * 1000),
        quantity=rng.randint(1, 10),
        item_id=rng.choice(items).id,
        counterparty=rng.choice(CUSTOMERS if kind == TransactionKind.INCOME else VENDORS),
        contact=_random_contact(rng),
        owner_id=OWNER_ID,
        created_at=at,
    )


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    rng = random.Random(42)

    catalog = SqlItemCatalog()
    store = SqlTransactionStore()

    income_items = _upsert_items(catalog, TransactionKind.INCOME, INCOME_ITEMS)
    outcome_items = _upsert_items(catalog, TransactionKind.OUTCOME, OUTCOME_ITEMS)

    today = dt.datetime.now(settings.report_tz).replace(hour=0, minute=0, second=0, microsecond=0)
    created = 0
    for offset in range(SEED_DAYS, -1, -1):
        day = today - dt.timedelta(days=offset)
        for _ in range(rng.randint(1, 5)):
            store.add(_random_tx(rng, TransactionKind.INCOME, income_items, day))
            created += 1
        for _ in range(rng.randint(0, 3)):
            store.add(_random_tx(rng, TransactionKind.OUTCOME, outcome_items, day))
            created += 1

    log.info("seeded %d transactions over %d days", created, SEED_DAYS + 1)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
