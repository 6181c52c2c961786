from .catalog_service import CatalogService
from .sales_service import SalesService
from .excel_service import ExcelService

__all__ = [
    "CatalogService",
    "SalesService",
    "ExcelService",
]
