from __future__ import annotations

from pathlib import Path

from minipos.application.dispatch import Dispatcher
from minipos.application.events import Observable
from minipos.application.session import UNEXPECTED_ERROR_MESSAGE
from minipos.domain.models import Sale
from minipos.domain.results import ApiResult


class RecentSalesState(Observable):
    """Sales list fetched once when the view is mounted."""

    def __init__(self, sales_service, dispatcher: Dispatcher, excel_service=None):
        super().__init__()
        self.sales_service = sales_service
        self.dispatcher = dispatcher
        self.excel = excel_service
        self.sales: list[Sale] = []
        self.message = ""
        self.loading = False
        self._requested = False

    @property
    def is_empty(self) -> bool:
        return not self.sales

    def load(self) -> bool:
        if self._requested:
            return False
        self._requested = True
        self.loading = True
        self._notify()
        self.dispatcher.submit(
            self.sales_service.list_recent_sales,
            self._on_loaded,
            on_error=self._on_unexpected_error,
        )
        return True

    def _on_loaded(self, result: ApiResult[list[Sale]]) -> None:
        self.loading = False
        if result.ok:
            self.sales = list(result.value or [])
        else:
            self.message = result.message
        self._notify()

    def _on_unexpected_error(self, _err: BaseException) -> None:
        self.loading = False
        self.message = UNEXPECTED_ERROR_MESSAGE
        self._notify()

    def export_excel(self, path: str | Path) -> int:
        if self.excel is None:
            raise RuntimeError("Excel export is not configured.")
        return self.excel.export_sales(path, self.sales)
