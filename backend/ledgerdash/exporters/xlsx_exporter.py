"""Excel export of a monthly transaction log."""

from __future__ import annotations

import datetime as dt
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ledgerdash.domain.transaction import TransactionKind
from ledgerdash.services.export_service import MonthlyExport

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FONT = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="1E3A5F", end_color="1E3A5F", fill_type="solid")
CENTER = Alignment(horizontal="center", vertical="center")
MONEY_FORMAT = "#,##0.00"


class XlsxExporter:
    """Renders a MonthlyExport as a single-sheet workbook."""

    def __init__(self, tz: dt.tzinfo = dt.timezone.utc) -> None:
        self._tz = tz

    @staticmethod
    def columns(kind: TransactionKind) -> list[tuple[str, int]]:
        counterparty = "Customer Name" if kind == TransactionKind.INCOME else "Person"
        return [
            ("No", 5),
            ("Item", 20),
            ("Quantity", 10),
            ("Price", 15),
            ("Total Price", 15),
            (counterparty, 20),
            ("Whatsapp", 18),
            ("Created By", 20),
            ("Date", 20),
        ]

    def render(self, export: MonthlyExport) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = export.sheet_title

        for col, (header, width) in enumerate(self.columns(export.kind), start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = CENTER
            ws.column_dimensions[get_column_letter(col)].width = width

        for r in export.rows:
            ws.append(
                [
                    r.no,
                    r.item_name,
                    r.quantity,
                    float(r.amount),
                    float(r.total_amount),
                    r.counterparty,
                    r.contact or "",
                    r.owner_id,
                    r.created_at.astimezone(self._tz).strftime("%Y-%m-%d %H:%M"),
                ]
            )

        for row in ws.iter_rows(min_row=2, min_col=4, max_col=5):
            for cell in row:
                cell.number_format = MONEY_FORMAT

        ws.freeze_panes = "A2"

        output = BytesIO()
        wb.save(output)
        return output.getvalue()
