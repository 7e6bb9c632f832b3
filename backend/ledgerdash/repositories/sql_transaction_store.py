from __future__ import annotations

from contextlib import contextmanager
import datetime as dt
from decimal import Decimal
import logging
from typing import Callable, Iterator
from uuid import UUID

from sqlalchemy import DateTime, Integer, Numeric, String, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, Session, mapped_column

from ledgerdash.db import init_db, new_session
from ledgerdash.db_base import Base
from ledgerdash.domain.money import ZERO, quantize_money
from ledgerdash.domain.period import Metric
from ledgerdash.domain.transaction import Transaction, TransactionKind, truncate_to_millis
from ledgerdash.errors import StoreFailure
from ledgerdash.repositories.transaction_store import ItemTotal, TransactionStore

logger = logging.getLogger(__name__)


class TransactionRow(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    kind: Mapped[str] = mapped_column(String(16), index=True, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False)
    item_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    counterparty: Mapped[str] = mapped_column(String(256), nullable=False)
    contact: Mapped[str | None] = mapped_column(String(32), nullable=True)
    receipt: Mapped[str | None] = mapped_column(String(512), nullable=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)


def _utc(at: dt.datetime) -> dt.datetime:
    # sqlite drops tzinfo on write, so every bound is compared in UTC
    return at.astimezone(dt.timezone.utc)


def _aware(at: dt.datetime) -> dt.datetime:
    if at.tzinfo is None:
        return at.replace(tzinfo=dt.timezone.utc)
    return at.astimezone(dt.timezone.utc)


class SqlTransactionStore(TransactionStore):

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
            raise StoreFailure(f"{op} failed: {exc}") from exc

    def add(self, tx: Transaction) -> None:
        with self._session("add") as s:
            existing = s.get(TransactionRow, str(tx.id))
            if existing is not None:
                raise ValueError(f"Transaction with id {tx.id} already exists")

            s.add(self._to_row(tx))
            s.commit()

    @staticmethod
    def _range(stmt, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime):
        if date_from > date_to:
            raise ValueError("date_from must be <= date_to")
        return (
            stmt.where(TransactionRow.kind == kind.value)
            .where(TransactionRow.created_at >= _utc(date_from))
            .where(TransactionRow.created_at <= _utc(date_to))
        )

    def sum_total(self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime) -> Decimal:
        stmt = self._range(select(func.sum(TransactionRow.total_amount)), kind, date_from, date_to)
        with self._session("sum_total") as s:
            value = s.execute(stmt).scalar_one_or_none()
        return quantize_money(Decimal(str(value))) if value is not None else ZERO

    def count(self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime) -> int:
        stmt = self._range(select(func.count(TransactionRow.id)), kind, date_from, date_to)
        with self._session("count") as s:
            return int(s.execute(stmt).scalar_one() or 0)

    def daily_totals(
        self,
        *,
        kind: TransactionKind,
        date_from: dt.datetime,
        date_to: dt.datetime,
        tz: dt.tzinfo,
        metric: Metric,
    ) -> dict[dt.date, Decimal | int]:
        # Day formatting in SQL is dialect specific: fetch the two columns we
        # need and bucket here.
        stmt = self._range(
            select(TransactionRow.created_at, TransactionRow.total_amount), kind, date_from, date_to
        )
        with self._session("daily_totals") as s:
            rows = s.execute(stmt).all()

        acc: dict[dt.date, Decimal | int] = {}
        for created_at, total_amount in rows:
            day = _aware(created_at).astimezone(tz).date()
            if metric == Metric.COUNT:
                acc[day] = acc.get(day, 0) + 1
            else:
                acc[day] = acc.get(day, ZERO) + Decimal(str(total_amount))
        logger.debug("daily_totals kind=%s metric=%s -> %d sparse days", kind.value, metric.value, len(acc))
        return acc

    def totals_by_item(
        self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime
    ) -> list[ItemTotal]:
        first_seen = func.min(TransactionRow.created_at)
        stmt = (
            self._range(
                select(TransactionRow.item_id, func.sum(TransactionRow.total_amount)),
                kind,
                date_from,
                date_to,
            )
            .group_by(TransactionRow.item_id)
            .order_by(first_seen, TransactionRow.item_id)
        )
        with self._session("totals_by_item") as s:
            rows = s.execute(stmt).all()

        return [ItemTotal(item_id=item_id, total=quantize_money(Decimal(str(total)))) for item_id, total in rows]

    def latest(self, *, kind: TransactionKind, limit: int) -> list[Transaction]:
        stmt = (
            select(TransactionRow)
            .where(TransactionRow.kind == kind.value)
            .order_by(TransactionRow.created_at.desc(), TransactionRow.id.desc())
            .limit(limit)
        )
        with self._session("latest") as s:
            rows = s.execute(stmt).scalars().all()
            return [self._to_domain(r) for r in rows]

    def list_between(
        self, *, kind: TransactionKind, date_from: dt.datetime, date_to: dt.datetime
    ) -> list[Transaction]:
        stmt = self._range(select(TransactionRow), kind, date_from, date_to).order_by(
            TransactionRow.created_at, TransactionRow.id
        )
        with self._session("list_between") as s:
            rows = s.execute(stmt).scalars().all()
            return [self._to_domain(r) for r in rows]

    @staticmethod
    def _to_row(tx: Transaction) -> TransactionRow:
        return TransactionRow(
            id=str(tx.id),
            kind=tx.kind.value,
            amount=tx.amount,
            quantity=tx.quantity,
            total_amount=tx.total_amount,
            item_id=tx.item_id,
            counterparty=tx.counterparty,
            contact=tx.contact,
            receipt=tx.receipt,
            owner_id=tx.owner_id,
            created_at=truncate_to_millis(_utc(tx.created_at)),
        )

    @staticmethod
    def _to_domain(row: TransactionRow) -> Transaction:
        return Transaction.create(
            id=UUID(row.id),
            kind=TransactionKind(row.kind),
            amount=Decimal(str(row.amount)),
            quantity=row.quantity,
            total_amount=Decimal(str(row.total_amount)),
            item_id=row.item_id,
            counterparty=row.counterparty,
            contact=row.contact,
            receipt=row.receipt,
            owner_id=row.owner_id,
            created_at=_aware(row.created_at),
        )
