from __future__ import annotations

from ledgerdash.api.schemas.dashboard import (
    AmountPeriod,
    AmountSummaryResponse,
    CountPeriod,
    CountSummaryResponse,
    DailyAmount,
    DailyChartResponse,
    DailyCount,
    LatestClient,
    RankedItem,
    TopItemsResponse,
)
from ledgerdash.domain.money import format_money
from ledgerdash.engine.comparison_summary import ComparisonSummary, PeriodTotal
from ledgerdash.engine.daily_series import CountSummary, DailyChart
from ledgerdash.engine.latest_activity import ActivityRow
from ledgerdash.engine.top_items import RankedItemSummary


def _amount_period(p: PeriodTotal) -> AmountPeriod:
    return AmountPeriod(from_date=p.from_date, to_date=p.to_date, total=format_money(p.total))


def _count_period(p: PeriodTotal) -> CountPeriod:
    return CountPeriod(from_date=p.from_date, to_date=p.to_date, total=int(p.total))


def amount_summary_to_response(period: str, s: ComparisonSummary) -> AmountSummaryResponse:
    return AmountSummaryResponse(type=period, current=_amount_period(s.current), previous=_amount_period(s.previous))


def count_summary_to_response(period: str, s: CountSummary) -> CountSummaryResponse:
    return CountSummaryResponse(
        type=period,
        current=_count_period(s.current),
        previous=_count_period(s.previous),
        detail=[DailyCount(date=b.date, total=int(b.total)) for b in s.detail],
    )


def daily_chart_to_response(chart: DailyChart) -> DailyChartResponse:
    return DailyChartResponse(
        type=chart.kind.token,
        type_date=chart.num_days,
        datas=[DailyAmount(date=b.date, total=format_money(b.total)) for b in chart.datas],
    )


def top_items_to_response(period: str, items: list[RankedItemSummary]) -> TopItemsResponse:
    return TopItemsResponse(
        type=period,
        datas=[
            RankedItem(item_name=i.item_name, total=format_money(i.total), from_date=i.from_date, to_date=i.to_date)
            for i in items
        ],
    )


def activity_to_response(rows: list[ActivityRow]) -> list[LatestClient]:
    return [
        LatestClient(customer_name=r.counterparty, whatsapp=r.contact, qty=r.quantity, created_at=r.created_at)
        for r in rows
    ]
