from .session_view import SessionView
from .add_product_view import AddProductView
from .recent_sales_view import RecentSalesView

__all__ = ["SessionView", "AddProductView", "RecentSalesView"]
