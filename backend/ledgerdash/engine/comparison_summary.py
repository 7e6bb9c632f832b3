from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal

from ledgerdash.domain.period import DateRange, Metric, PeriodWindow
from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.errors import InvalidArgument
from ledgerdash.repositories.transaction_store import TransactionStore


@dataclass(frozen=True)
class PeriodTotal:
    from_date: dt.datetime
    to_date: dt.datetime
    total: Decimal | int


@dataclass(frozen=True)
class ComparisonSummary:
    current: PeriodTotal
    previous: PeriodTotal


def _check_kind(kind: TransactionKind) -> None:
    if not isinstance(kind, TransactionKind):
        raise InvalidArgument(f"unsupported transaction kind {kind!r}")


def aggregate_range(store: TransactionStore, kind: TransactionKind, metric: Metric, rng: DateRange) -> PeriodTotal:
    if metric == Metric.COUNT:
        total: Decimal | int = store.count(kind=kind, date_from=rng.date_from, date_to=rng.date_to)
    elif metric == Metric.AMOUNT:
        total = store.sum_total(kind=kind, date_from=rng.date_from, date_to=rng.date_to)
    else:
        raise InvalidArgument(f"unsupported metric {metric!r}")
    return PeriodTotal(from_date=rng.date_from, to_date=rng.date_to, total=total)


def summarize_totals(
    store: TransactionStore,
    kind: TransactionKind,
    metric: Metric,
    window: PeriodWindow,
) -> ComparisonSummary:
    """
    Current vs previous window, summed amount or transaction count.

    The two aggregations do not depend on each other. An empty window yields
    a zero total; a store failure aborts the whole summary.
    """
    _check_kind(kind)
    if not isinstance(metric, Metric):
        raise InvalidArgument(f"unsupported metric {metric!r}")

    current = aggregate_range(store, kind, metric, window.current)
    previous = aggregate_range(store, kind, metric, window.previous)
    return ComparisonSummary(current=current, previous=previous)
