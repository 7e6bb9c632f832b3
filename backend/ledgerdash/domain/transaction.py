from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from enum import Enum
import re
from typing import Optional
from uuid import UUID, uuid4

from ledgerdash.domain.money import quantize_money
from ledgerdash.errors import InvalidArgument

_CONTACT_RE = re.compile(r"^08\d{8,11}$")


def truncate_to_millis(at: dt.datetime) -> dt.datetime:
    # millisecond precision, matching end_of_day()
    return at.replace(microsecond=at.microsecond // 1000 * 1000)


class TransactionKind(str, Enum):
    INCOME = "INCOME"
    OUTCOME = "OUTCOME"

    @property
    def token(self) -> str:
        # URL form: "income" / "outcome"
        return self.value.lower()


@dataclass(frozen=True)
class Transaction:
    id: UUID
    kind: TransactionKind
    amount: Decimal
    quantity: int
    total_amount: Decimal
    item_id: str
    counterparty: str
    contact: Optional[str]
    receipt: Optional[str]
    owner_id: str
    created_at: dt.datetime

    @staticmethod
    def create(
        *,
        kind: TransactionKind,
        amount: Decimal,
        quantity: int,
        item_id: str,
        counterparty: str,
        owner_id: str,
        total_amount: Optional[Decimal] = None,
        contact: Optional[str] = None,
        receipt: Optional[str] = None,
        id: Optional[UUID] = None,
        created_at: Optional[dt.datetime] = None,
    ) -> "Transaction":
        if not isinstance(kind, TransactionKind):
            raise ValueError("kind must be a TransactionKind")

        if not isinstance(amount, Decimal):
            raise ValueError("amount must be a Decimal")
        if amount <= 0:
            raise ValueError("amount must be positive")

        # bool is an int subclass
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError("quantity must be an integer >= 1")

        if not isinstance(item_id, str) or item_id.strip() == "":
            raise ValueError("item_id cannot be empty")

        if not isinstance(counterparty, str) or counterparty.strip() == "":
            raise ValueError("counterparty cannot be empty")

        if not isinstance(owner_id, str) or owner_id.strip() == "":
            raise ValueError("owner_id cannot be empty")

        if contact is None or contact.strip() == "":
            norm_contact = None
        else:
            norm_contact = contact.strip()
            if not _CONTACT_RE.match(norm_contact):
                raise ValueError("Invalid WhatsApp number format")

        norm_receipt = receipt.strip() if receipt and receipt.strip() else None

        # stored redundantly, trusted as given
        if total_amount is None:
            final_total = quantize_money(amount * quantity)
        else:
            if not isinstance(total_amount, Decimal):
                raise ValueError("total_amount must be a Decimal")
            final_total = quantize_money(total_amount)

        if created_at is None:
            final_created_at = dt.datetime.now(dt.timezone.utc)
        else:
            if not isinstance(created_at, dt.datetime):
                raise ValueError("created_at must be a datetime")
            if created_at.tzinfo is None:
                raise ValueError("created_at must be timezone-aware (UTC recommended)")
            final_created_at = created_at.astimezone(dt.timezone.utc)

        return Transaction(
            id=id or uuid4(),
            kind=kind,
            amount=quantize_money(amount),
            quantity=quantity,
            total_amount=final_total,
            item_id=item_id.strip(),
            counterparty=counterparty.strip(),
            contact=norm_contact,
            receipt=norm_receipt,
            owner_id=owner_id.strip(),
            created_at=truncate_to_millis(final_created_at),
        )


def parse_kind(token: str) -> TransactionKind:
    """'income' / 'outcome' (case-insensitive) -> TransactionKind."""
    if isinstance(token, TransactionKind):
        return token
    try:
        return TransactionKind((token or "").strip().upper())
    except ValueError:
        raise InvalidArgument("Invalid type. Use income or outcome") from None
