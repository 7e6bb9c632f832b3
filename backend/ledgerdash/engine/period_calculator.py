from __future__ import annotations

import datetime as dt

from ledgerdash.domain.period import ComparisonPeriod, CountPeriod, MonthRange, PeriodWindow, DateRange
from ledgerdash.errors import InvalidArgument

PeriodType = ComparisonPeriod | CountPeriod

ONE_DAY = dt.timedelta(days=1)
ONE_SECOND = dt.timedelta(seconds=1)

# current window = today plus this many previous days, keyed by token
_LOOKBACK_DAYS: dict[str, int] = {
    "today": 0,
    "3days": 2,
    "7days": 6,
    "30days": 29,
}


def parse_comparison_period(token: str) -> ComparisonPeriod:
    try:
        return ComparisonPeriod(token)
    except ValueError:
        raise InvalidArgument("Invalid type. Use today, 7days, or 30days") from None


def parse_count_period(token: str) -> CountPeriod:
    try:
        return CountPeriod(token)
    except ValueError:
        raise InvalidArgument("Invalid type. Use 3days, 7days, or 30days") from None


def parse_month_range(token: str) -> MonthRange:
    try:
        return MonthRange(token)
    except ValueError:
        raise InvalidArgument("Invalid type. Use currMonth or prevMonth.") from None


def start_of_day(at: dt.datetime) -> dt.datetime:
    return at.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(at: dt.datetime) -> dt.datetime:
    # millisecond precision, like the stored timestamps
    return at.replace(hour=23, minute=59, second=59, microsecond=999000)


def _require_aware(now: dt.datetime) -> None:
    if not isinstance(now, dt.datetime) or now.tzinfo is None:
        raise InvalidArgument("reference time must be a timezone-aware datetime")


def range_days(period: PeriodType) -> int:
    """Calendar days covered by the current window of ``period``."""
    if not isinstance(period, (ComparisonPeriod, CountPeriod)):
        raise InvalidArgument(f"unsupported period type {period!r}")
    return _LOOKBACK_DAYS[period.value] + 1


def day_range(num_days: int, now: dt.datetime) -> DateRange:
    """[start of (today - (num_days - 1)), end of today] in ``now``'s timezone."""
    _require_aware(now)
    if num_days < 1:
        raise InvalidArgument("num_days must be >= 1")
    return DateRange(
        date_from=start_of_day(now - (num_days - 1) * ONE_DAY),
        date_to=end_of_day(now),
    )


def compute_window(period_type: PeriodType, now: dt.datetime) -> PeriodWindow:
    """
    Current and previous windows for ``period_type``.

    Day boundaries are taken in ``now``'s timezone. For ``today`` the previous
    window is the same span shifted by exactly one day; for the multi-day
    periods it is the same number of days, ending one second before
    ``current_from``.
    """
    days = range_days(period_type)
    _require_aware(now)
    current = day_range(days, now)

    if period_type is ComparisonPeriod.TODAY:
        return PeriodWindow(
            current_from=current.date_from,
            current_to=current.date_to,
            previous_from=current.date_from - ONE_DAY,
            previous_to=current.date_to - ONE_DAY,
        )

    return PeriodWindow(
        current_from=current.date_from,
        current_to=current.date_to,
        previous_from=current.date_from - days * ONE_DAY,
        previous_to=current.date_from - ONE_SECOND,
    )


def month_window(month: MonthRange, now: dt.datetime) -> DateRange:
    """[start of month, end of month] for the current or previous calendar month."""
    _require_aware(now)
    first = start_of_day(now.replace(day=1))
    if month == MonthRange.PREVIOUS_MONTH:
        first = start_of_day((first - ONE_DAY).replace(day=1))
    elif month != MonthRange.CURRENT_MONTH:
        raise InvalidArgument(f"unsupported month range {month!r}")

    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return DateRange(date_from=first, date_to=end_of_day(next_first - ONE_DAY))
