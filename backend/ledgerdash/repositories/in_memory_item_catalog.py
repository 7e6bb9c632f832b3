from __future__ import annotations

from dataclasses import dataclass, field

from ledgerdash.domain.catalog_item import CatalogItem
from ledgerdash.domain.transaction import TransactionKind


@dataclass
class InMemoryItemCatalog:
    _items: list[CatalogItem] = field(default_factory=list)

    def add(self, item: CatalogItem) -> None:
        if self.get_item(item.kind, item.id) is not None:
            raise ValueError(f"item id '{item.id}' already exists")
        self._items.append(item)

    def remove(self, kind: TransactionKind, item_id: str) -> bool:
        before = len(self._items)
        self._items = [i for i in self._items if not (i.kind == kind and i.id == item_id)]
        return len(self._items) != before

    def list_items(self, kind: TransactionKind) -> list[CatalogItem]:
        return [i for i in self._items if i.kind == kind]

    def get_item(self, kind: TransactionKind, item_id: str) -> CatalogItem | None:
        for i in self._items:
            if i.kind == kind and i.id == item_id:
                return i
        return None
