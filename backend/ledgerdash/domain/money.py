from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

_QUANT = Decimal("0.01")
ZERO = Decimal("0.00")


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(_QUANT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    return f"{quantize_money(amount):.2f}"
