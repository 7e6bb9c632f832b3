from __future__ import annotations

from contextlib import contextmanager
import datetime as dt
import logging
import re
from typing import Iterator

from fastapi import APIRouter, Depends, Query

from ledgerdash.api.deps import get_item_catalog, get_now, get_report_tz, get_transaction_store
from ledgerdash.api.envelope import EnvelopeError, failure_result
from ledgerdash.api.mappers.summary_mapper import (
    activity_to_response,
    amount_summary_to_response,
    count_summary_to_response,
    daily_chart_to_response,
    top_items_to_response,
)
from ledgerdash.api.schemas.dashboard import (
    AmountSummaryResponse,
    CountSummaryResponse,
    DailyChartResponse,
    Envelope,
    LatestClient,
    TopItemsResponse,
)
from ledgerdash.domain.period import Metric
from ledgerdash.domain.transaction import TransactionKind, parse_kind
from ledgerdash.engine.comparison_summary import summarize_totals
from ledgerdash.engine.daily_series import build_daily_chart, summarize_counts_with_detail
from ledgerdash.engine.latest_activity import latest_income_activity
from ledgerdash.engine.period_calculator import (
    compute_window,
    parse_comparison_period,
    parse_count_period,
    range_days,
)
from ledgerdash.engine.top_items import top_items
from ledgerdash.errors import InvalidArgument
from ledgerdash.repositories.item_catalog import ItemCatalog
from ledgerdash.repositories.transaction_store import TransactionStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

DEFAULT_CHART_DAYS = 7
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


@contextmanager
def _envelope_errors(failure_message: str) -> Iterator[None]:
    """Failures other than InvalidArgument (a 400) become a 500 carrying the cause."""
    try:
        yield
    except InvalidArgument:
        raise
    except Exception as e:
        logger.exception("%s: %s", failure_message, e)
        raise EnvelopeError(500, failure_message, failure_result(e)) from e


def _parse_chart_days(raw: str | None) -> int:
    # leading integer ("14.5" -> 14, "10abc" -> 10); none or 0 -> default,
    # anything else is validated by the engine
    m = _LEADING_INT.match(raw or "")
    if m is None:
        return DEFAULT_CHART_DAYS
    return int(m.group()) or DEFAULT_CHART_DAYS


@router.get("/{kind}/summary/{period}", response_model=Envelope[AmountSummaryResponse])
def get_amount_summary(
    kind: str,
    period: str,
    store: TransactionStore = Depends(get_transaction_store),
    now: dt.datetime = Depends(get_now),
) -> Envelope[AmountSummaryResponse]:
    with _envelope_errors(f"Failed to get {kind} summary"):
        tx_kind = parse_kind(kind)
        p = parse_comparison_period(period)
        summary = summarize_totals(store, tx_kind, Metric.AMOUNT, compute_window(p, now))

    return Envelope(
        message=f"{tx_kind.value.capitalize()} summary retrieved",
        result=amount_summary_to_response(p.value, summary),
    )


@router.get("/{kind}/count-summary/{period}", response_model=Envelope[CountSummaryResponse])
def get_count_summary(
    kind: str,
    period: str,
    store: TransactionStore = Depends(get_transaction_store),
    now: dt.datetime = Depends(get_now),
    tz: dt.tzinfo = Depends(get_report_tz),
) -> Envelope[CountSummaryResponse]:
    with _envelope_errors(f"Failed to get {kind} count summary"):
        tx_kind = parse_kind(kind)
        p = parse_count_period(period)
        summary = summarize_counts_with_detail(store, tx_kind, compute_window(p, now), range_days(p), tz)

    return Envelope(
        message=f"{tx_kind.value.capitalize()} count summary retrieved",
        result=count_summary_to_response(p.value, summary),
    )


@router.get("/daily/{kind}", response_model=Envelope[DailyChartResponse])
def get_daily_summary_chart(
    kind: str,
    type_date: str | None = Query(default=None, alias="typeDate"),
    store: TransactionStore = Depends(get_transaction_store),
    now: dt.datetime = Depends(get_now),
) -> Envelope[DailyChartResponse]:
    with _envelope_errors("Failed to get daily summary"):
        chart = build_daily_chart(store, parse_kind(kind), _parse_chart_days(type_date), now)

    return Envelope(message="Daily summary retrieved", result=daily_chart_to_response(chart))


@router.get("/{kind}/top-items/{period}", response_model=Envelope[TopItemsResponse])
def get_top_items_summary(
    kind: str,
    period: str,
    store: TransactionStore = Depends(get_transaction_store),
    catalog: ItemCatalog = Depends(get_item_catalog),
    now: dt.datetime = Depends(get_now),
) -> Envelope[TopItemsResponse]:
    failure = "Failed to get top items summary" if kind == "income" else f"Failed to get top {kind} items summary"
    with _envelope_errors(failure):
        tx_kind = parse_kind(kind)
        p = parse_comparison_period(period)
        items = top_items(store, catalog, tx_kind, compute_window(p, now).current)

    message = "Top items summary retrieved" if tx_kind == TransactionKind.INCOME else "Top outcome items summary retrieved"
    return Envelope(message=message, result=top_items_to_response(p.value, items))


@router.get("/income/latest-clients", response_model=Envelope[list[LatestClient]])
def get_latest_client_income(
    store: TransactionStore = Depends(get_transaction_store),
) -> Envelope[list[LatestClient]]:
    with _envelope_errors("Failed to retrieve latest income clients"):
        rows = latest_income_activity(store)

    return Envelope(message="Latest income clients retrieved", result=activity_to_response(rows))
