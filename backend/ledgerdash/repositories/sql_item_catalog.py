from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from sqlalchemy import Integer, String, UniqueConstraint, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, Session, mapped_column

from ledgerdash.db import init_db, new_session
from ledgerdash.db_base import Base
from ledgerdash.domain.catalog_item import CatalogItem
from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.errors import StoreFailure
from ledgerdash.repositories.item_catalog import ItemCatalog


class CatalogItemRow(Base):
    __tablename__ = "catalog_items"
    __table_args__ = (UniqueConstraint("kind", "item_id", name="uq_catalog_items_kind_item_id"),)

    # insertion order == catalog load order
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[str] = mapped_column(String(64), nullable=False)
    kind: Mapped[str] = mapped_column(String(16), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(256), nullable=False)


class SqlItemCatalog(ItemCatalog):
    """
    SQL implementation aligned with InMemoryItemCatalog behavior:
    - list_items(): items of one kind in insertion order
    - get_item(): None if unknown
    - add(): raises ValueError if (kind, id) exists
    """

    def __init__(self, *, session_factory: Callable[[], Session] | None = None) -> None:
        self._new_session = session_factory or new_session
        if session_factory is None:
            init_db()

    @contextmanager
    def _session(self, op: str) -> Iterator[Session]:
        try:
            with self._new_session() as s:
                yield s
        except SQLAlchemyError as exc:
            raise StoreFailure(f"catalog {op} failed: {exc}") from exc

    def add(self, item: CatalogItem) -> None:
        with self._session("add") as s:
            if self._find(s, item.kind, item.id) is not None:
                raise ValueError(f"item id '{item.id}' already exists")
            s.add(CatalogItemRow(item_id=item.id, kind=item.kind.value, name=item.name))
            s.commit()

    def list_items(self, kind: TransactionKind) -> list[CatalogItem]:
        stmt = select(CatalogItemRow).where(CatalogItemRow.kind == kind.value).order_by(CatalogItemRow.seq)
        with self._session("list_items") as s:
            rows = s.execute(stmt).scalars().all()
            return [self._to_domain(r) for r in rows]

    def get_item(self, kind: TransactionKind, item_id: str) -> CatalogItem | None:
        with self._session("get_item") as s:
            row = self._find(s, kind, item_id)
            return self._to_domain(row) if row else None

    @staticmethod
    def _find(s: Session, kind: TransactionKind, item_id: str) -> CatalogItemRow | None:
        stmt = (
            select(CatalogItemRow)
            .where(CatalogItemRow.kind == kind.value)
            .where(CatalogItemRow.item_id == item_id)
        )
        return s.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _to_domain(row: CatalogItemRow) -> CatalogItem:
        return CatalogItem(id=row.item_id, name=row.name, kind=TransactionKind(row.kind))
