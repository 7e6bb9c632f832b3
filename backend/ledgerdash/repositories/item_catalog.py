from __future__ import annotations

from typing import Protocol

from ledgerdash.domain.catalog_item import CatalogItem
from ledgerdash.domain.transaction import TransactionKind


class ItemCatalog(Protocol):
    def list_items(self, kind: TransactionKind) -> list[CatalogItem]:
        """All items of ``kind`` in load order."""
        ...

    def get_item(self, kind: TransactionKind, item_id: str) -> CatalogItem | None:
        ...
