from __future__ import annotations

from dataclasses import dataclass
import datetime as dt

from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.errors import InvalidArgument
from ledgerdash.repositories.transaction_store import TransactionStore

LATEST_ACTIVITY_LIMIT = 10


@dataclass(frozen=True)
class ActivityRow:
    counterparty: str
    contact: str | None
    quantity: int
    created_at: dt.datetime


def latest_income_activity(store: TransactionStore, limit: int = LATEST_ACTIVITY_LIMIT) -> list[ActivityRow]:
    """Most recent income transactions first, projected for the activity feed."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgument("limit must be a positive integer")

    return [
        ActivityRow(
            counterparty=t.counterparty,
            contact=t.contact,
            quantity=t.quantity,
            created_at=t.created_at,
        )
        for t in store.latest(kind=TransactionKind.INCOME, limit=limit)
    ]
