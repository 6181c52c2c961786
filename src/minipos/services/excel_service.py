from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from minipos.domain.models import Sale

log = logging.getLogger(__name__)

SALES_HEADERS = ["sale_id", "created_at", "total", "paid", "change", "items"]
ITEMS_HEADERS = ["sale_id", "sku", "name", "quantity", "price", "line_total"]


class ExcelService:
    def export_sales(self, path: str | Path, sales: Iterable[Sale]) -> int:
        """Write the loaded recent sales to an xlsx file. Returns rows written."""
        sales = list(sales)
        wb = Workbook()

        def money(cell):
            cell.number_format = "#,##0.00"

        def header(ws, headers: list[str]):
            ws.append(headers)
            for c in ws[1]:
                c.font = Font(bold=True)

        def set_widths(ws, widths: list[int]):
            for i, w in enumerate(widths, start=1):
                ws.column_dimensions[get_column_letter(i)].width = w

        ws = wb.active
        ws.title = "Sales"
        header(ws, SALES_HEADERS)
        for s in sales:
            created = s.created_at.replace(tzinfo=None).isoformat(sep=" ", timespec="seconds") if s.created_at else ""
            ws.append([s.id, created, s.total, s.paid, s.change, s.items_summary()])
            for col in (3, 4, 5):
                money(ws.cell(row=ws.max_row, column=col))
        set_widths(ws, [28, 22, 12, 12, 12, 60])

        items_ws = wb.create_sheet("Items")
        header(items_ws, ITEMS_HEADERS)
        for s in sales:
            for it in s.items:
                items_ws.append([s.id, it.sku, it.name, it.quantity, it.price, it.price * it.quantity])
                for col in (5, 6):
                    money(items_ws.cell(row=items_ws.max_row, column=col))
        set_widths(items_ws, [28, 16, 36, 10, 12, 12])

        wb.save(str(path))
        log.info("sales_exported path=%s sales=%s", path, len(sales))
        return len(sales)
