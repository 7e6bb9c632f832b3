from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from typing import Mapping

from ledgerdash.domain.money import ZERO
from ledgerdash.domain.period import Metric, PeriodWindow
from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.engine.comparison_summary import PeriodTotal, summarize_totals
from ledgerdash.engine.period_calculator import ONE_DAY, day_range
from ledgerdash.errors import InvalidArgument
from ledgerdash.repositories.transaction_store import TransactionStore

CHART_DAY_OPTIONS = (7, 14, 30)


@dataclass(frozen=True)
class DailyBucket:
    date: dt.datetime  # start of the bucket day
    total: Decimal | int


@dataclass(frozen=True)
class CountSummary:
    current: PeriodTotal
    previous: PeriodTotal
    detail: list[DailyBucket]


@dataclass(frozen=True)
class DailyChart:
    kind: TransactionKind
    num_days: int
    datas: list[DailyBucket]


def fill_daily_buckets(
    start: dt.datetime,
    num_days: int,
    sparse: Mapping[dt.date, Decimal | int],
    zero: Decimal | int,
) -> list[DailyBucket]:
    """
    Dense, ascending series of ``num_days`` buckets from ``start``.

    Each bucket looks up its own calendar date (in ``start``'s timezone) in
    ``sparse``; days with no entry get ``zero``.
    """
    out: list[DailyBucket] = []
    for i in range(num_days):
        day_start = start + i * ONE_DAY
        out.append(DailyBucket(date=day_start, total=sparse.get(day_start.date(), zero)))
    return out


def summarize_counts_with_detail(
    store: TransactionStore,
    kind: TransactionKind,
    window: PeriodWindow,
    range_days: int,
    tz: dt.tzinfo,
) -> CountSummary:
    """
    Current vs previous counts plus a dense per-day count over the current window.

    Days are calendar days in ``tz``; the buckets start at ``current_from``
    expressed in ``tz``, so the detail lines up with the sparse counts even
    when the window was computed in another timezone.
    """
    if isinstance(range_days, bool) or not isinstance(range_days, int) or range_days < 1:
        raise InvalidArgument("range_days must be a positive integer")

    counts = summarize_totals(store, kind, Metric.COUNT, window)

    # must be complete before the gap-fill
    sparse = store.daily_totals(
        kind=kind,
        date_from=window.current_from,
        date_to=window.current_to,
        tz=tz,
        metric=Metric.COUNT,
    )

    return CountSummary(
        current=counts.current,
        previous=counts.previous,
        detail=fill_daily_buckets(window.current_from.astimezone(tz), range_days, sparse, 0),
    )


def build_daily_chart(store: TransactionStore, kind: TransactionKind, num_days: int, now: dt.datetime) -> DailyChart:
    """
    Summed ``total_amount`` per day over the last ``num_days`` days.

    Transactions are grouped by their UTC calendar date, while the buckets
    walk local days from the window start. Around midnight local time the two
    disagree; count summaries group in the reporting timezone instead.
    """
    if not isinstance(kind, TransactionKind):
        raise InvalidArgument("Invalid type. Use income or outcome")
    if num_days not in CHART_DAY_OPTIONS:
        raise InvalidArgument("Invalid typeDate. Use 7, 14, or 30")

    rng = day_range(num_days, now)
    sparse = store.daily_totals(
        kind=kind,
        date_from=rng.date_from,
        date_to=rng.date_to,
        tz=dt.timezone.utc,
        metric=Metric.AMOUNT,
    )

    return DailyChart(kind=kind, num_days=num_days, datas=fill_daily_buckets(rng.date_from, num_days, sparse, ZERO))
