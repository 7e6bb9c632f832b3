from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from enum import Enum


class ComparisonPeriod(str, Enum):
    """Windows offered by the totals comparison and the top-items ranking."""
    TODAY = "today"
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"


class CountPeriod(str, Enum):
    """Windows offered by the count summary with daily detail."""
    LAST_3_DAYS = "3days"
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"


class MonthRange(str, Enum):
    CURRENT_MONTH = "currMonth"
    PREVIOUS_MONTH = "prevMonth"


class Metric(str, Enum):
    AMOUNT = "amount"  # sum of total_amount
    COUNT = "count"    # number of transactions


@dataclass(frozen=True)
class DateRange:
    date_from: dt.datetime
    date_to: dt.datetime  # inclusive


@dataclass(frozen=True)
class PeriodWindow:
    current_from: dt.datetime
    current_to: dt.datetime
    previous_from: dt.datetime
    previous_to: dt.datetime

    def __post_init__(self) -> None:
        if self.current_from > self.current_to:
            raise ValueError("current_from must be <= current_to")
        if self.previous_from > self.previous_to:
            raise ValueError("previous_from must be <= previous_to")

    @property
    def current(self) -> DateRange:
        return DateRange(self.current_from, self.current_to)

    @property
    def previous(self) -> DateRange:
        return DateRange(self.previous_from, self.previous_to)
