from .models import Product, CartLine, Sale, SaleItem, ProductDraft
from .cart import Cart
from .errors import AppError, ConfigError, ApiError, NetworkError, HttpStatusError, MalformedResponseError
from .results import ApiResult, ErrorKind

__all__ = [
    "Product",
    "CartLine",
    "Sale",
    "SaleItem",
    "ProductDraft",
    "Cart",
    "AppError",
    "ConfigError",
    "ApiError",
    "NetworkError",
    "HttpStatusError",
    "MalformedResponseError",
    "ApiResult",
    "ErrorKind",
]
