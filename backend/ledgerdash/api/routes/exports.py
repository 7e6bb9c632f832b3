from __future__ import annotations

import datetime as dt
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ledgerdash.api.deps import get_item_catalog, get_now, get_report_tz, get_transaction_store
from ledgerdash.api.envelope import EnvelopeError, failure_result
from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.engine.period_calculator import parse_month_range
from ledgerdash.errors import InvalidArgument
from ledgerdash.exporters.xlsx_exporter import XLSX_MEDIA_TYPE, XlsxExporter
from ledgerdash.repositories.item_catalog import ItemCatalog
from ledgerdash.repositories.transaction_store import TransactionStore
from ledgerdash.services.export_service import export_rows

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["exports"])


def _export(
    kind: TransactionKind,
    month: str,
    store: TransactionStore,
    catalog: ItemCatalog,
    now: dt.datetime,
    tz: dt.tzinfo,
) -> Response:
    failure = f"Failed to export {kind.token} data"
    try:
        export = export_rows(store, catalog, kind, parse_month_range(month), now)
        content = XlsxExporter(tz=tz).render(export)
    except InvalidArgument:
        raise
    except Exception as e:
        logger.exception("%s: %s", failure, e)
        raise EnvelopeError(500, failure, failure_result(e)) from e

    logger.info("exported %d %s rows for %s", len(export.rows), kind.token, month)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={export.filename}"},
    )


@router.get("/incomes/export/{month}")
def export_income_excel(
    month: str,
    store: TransactionStore = Depends(get_transaction_store),
    catalog: ItemCatalog = Depends(get_item_catalog),
    now: dt.datetime = Depends(get_now),
    tz: dt.tzinfo = Depends(get_report_tz),
) -> Response:
    return _export(TransactionKind.INCOME, month, store, catalog, now, tz)


@router.get("/outcomes/export/{month}")
def export_outcome_excel(
    month: str,
    store: TransactionStore = Depends(get_transaction_store),
    catalog: ItemCatalog = Depends(get_item_catalog),
    now: dt.datetime = Depends(get_now),
    tz: dt.tzinfo = Depends(get_report_tz),
) -> Response:
    return _export(TransactionKind.OUTCOME, month, store, catalog, now, tz)
