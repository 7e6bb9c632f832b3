from __future__ import annotations

import datetime as dt
from functools import lru_cache

from ledgerdash.repositories.item_catalog import ItemCatalog
from ledgerdash.repositories.sql_item_catalog import SqlItemCatalog
from ledgerdash.repositories.sql_transaction_store import SqlTransactionStore
from ledgerdash.repositories.transaction_store import TransactionStore
from ledgerdash.settings import get_settings


@lru_cache
def get_transaction_store() -> TransactionStore:
    return SqlTransactionStore()


@lru_cache
def get_item_catalog() -> ItemCatalog:
    return SqlItemCatalog()


@lru_cache
def get_report_tz() -> dt.tzinfo:
    return get_settings().report_tz


def get_now() -> dt.datetime:
    # reference instant, in the reporting timezone so day boundaries are local
    return dt.datetime.now(get_report_tz())
