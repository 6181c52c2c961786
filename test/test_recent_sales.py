from datetime import timezone

from openpyxl import load_workbook

from minipos.application.dispatch import ImmediateDispatcher
from minipos.application.recent_sales import RecentSalesState
from minipos.domain.models import Sale
from minipos.services.excel_service import ExcelService
from minipos.services.sales_service import SalesService

SALES = [
    {
        "_id": "s2",
        "items": [
            {"product_id": "p1", "name": "Apple", "sku": "A-1", "price": 0.5, "quantity": 2},
            {"product_id": "p2", "name": "Milk", "sku": "M-1", "price": 1.25, "quantity": 1},
        ],
        "total": 2.25,
        "paid": 5,
        "change": 2.75,
        "created_at": "2026-10-17T09:30:00Z",
    },
    {"_id": "s1", "items": [], "total": 0, "paid": 0, "change": 0, "created_at": None},
]


def _state(repo):
    return RecentSalesState(SalesService(repo), ImmediateDispatcher(), ExcelService())


def test_sales_are_fetched_once(repo, fake_http):
    fake_http.add("GET", "/api/sales", body=SALES)
    state = _state(repo)

    assert state.load() is True
    assert state.load() is False

    assert len(fake_http.calls_to("GET", "/api/sales")) == 1
    assert [s.id for s in state.sales] == ["s2", "s1"]
    assert state.sales[0].items_summary() == "2x Apple, 1x Milk"
    assert state.loading is False


def test_load_failure_sets_message(repo, fake_http):
    fake_http.add("GET", "/api/sales", status=503, body={"detail": "Database unavailable"})
    state = _state(repo)

    state.load()

    assert state.is_empty
    assert state.message == "Database unavailable"


def test_sale_parses_utc_timestamp():
    sale = Sale.from_api(SALES[0])

    assert sale.created_at.tzinfo is not None
    assert sale.created_at.astimezone(timezone.utc).hour == 9
    assert Sale.from_api(SALES[1]).created_at is None


def test_export_writes_sales_and_items(repo, fake_http, tmp_path):
    fake_http.add("GET", "/api/sales", body=SALES)
    state = _state(repo)
    state.load()
    path = tmp_path / "sales.xlsx"

    assert state.export_excel(path) == 2

    wb = load_workbook(path)
    sales_ws = wb["Sales"]
    assert [c.value for c in sales_ws[1]] == ["sale_id", "created_at", "total", "paid", "change", "items"]
    assert sales_ws["A2"].value == "s2"
    assert sales_ws["B2"].value == "2026-10-17 09:30:00"
    assert sales_ws["C2"].value == 2.25
    assert sales_ws["F2"].value == "2x Apple, 1x Milk"
    assert sales_ws.max_row == 3

    items_ws = wb["Items"]
    assert items_ws.max_row == 3
    assert [c.value for c in items_ws[2]] == ["s2", "A-1", "Apple", 2, 0.5, 1.0]
