from __future__ import annotations

from dataclasses import dataclass

import requests

from minipos.application.dispatch import Dispatcher, ImmediateDispatcher
from minipos.config import Settings
from minipos.repositories.backend_repo import BackendRepository
from minipos.services.catalog_service import CatalogService
from minipos.services.excel_service import ExcelService
from minipos.services.sales_service import SalesService


@dataclass(frozen=True)
class AppContainer:
    settings: Settings
    repo: BackendRepository
    catalog: CatalogService
    sales: SalesService
    excel: ExcelService
    dispatcher: Dispatcher


def build_container(
    settings: Settings,
    dispatcher: Dispatcher | None = None,
    session: requests.Session | None = None,
) -> AppContainer:
    repo = BackendRepository(settings.backend_url, timeout=settings.request_timeout, session=session)

    return AppContainer(
        settings=settings,
        repo=repo,
        catalog=CatalogService(repo),
        sales=SalesService(repo),
        excel=ExcelService(),
        dispatcher=dispatcher or ImmediateDispatcher(),
    )
