from __future__ import annotations

from dataclasses import dataclass

from ledgerdash.domain.transaction import TransactionKind

UNKNOWN_ITEM_NAME = "Unknown Item"


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str
    kind: TransactionKind

    @staticmethod
    def create(*, id: str, name: str, kind: TransactionKind) -> "CatalogItem":
        if not isinstance(id, str) or id.strip() == "":
            raise ValueError("item id cannot be empty")
        if not isinstance(name, str) or name.strip() == "":
            raise ValueError("item name cannot be empty")
        if not isinstance(kind, TransactionKind):
            raise ValueError("kind must be a TransactionKind")
        return CatalogItem(id=id.strip(), name=name.strip(), kind=kind)
