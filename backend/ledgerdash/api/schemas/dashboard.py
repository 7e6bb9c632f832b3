from __future__ import annotations

import datetime as dt
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    message: str
    result: T | None = None


class _WireModel(BaseModel):
    # snake_case in python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AmountPeriod(_WireModel):
    from_date: dt.datetime
    to_date: dt.datetime
    total: str


class CountPeriod(_WireModel):
    from_date: dt.datetime
    to_date: dt.datetime
    total: int


class AmountSummaryResponse(_WireModel):
    type: str
    current: AmountPeriod
    previous: AmountPeriod


class DailyCount(_WireModel):
    date: dt.datetime
    total: int


class CountSummaryResponse(_WireModel):
    type: str
    current: CountPeriod
    previous: CountPeriod
    detail: list[DailyCount]


class DailyAmount(_WireModel):
    date: dt.datetime
    total: str


class DailyChartResponse(_WireModel):
    type: str
    type_date: int
    datas: list[DailyAmount]


class RankedItem(_WireModel):
    item_name: str
    total: str
    from_date: dt.datetime
    to_date: dt.datetime


class TopItemsResponse(_WireModel):
    type: str
    datas: list[RankedItem]


class LatestClient(_WireModel):
    customer_name: str
    whatsapp: str | None
    qty: int
    created_at: dt.datetime
