from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

import requests

from minipos.domain.errors import HttpStatusError, MalformedResponseError, NetworkError
from minipos.domain.models import Product, Sale

T = TypeVar("T")

log = logging.getLogger("minipos.api")


def extract_detail(data: Any) -> Optional[str]:
    """Pull a human readable message out of an error body.

    Plain services answer ``{"detail": "Out of stock"}``; FastAPI validation
    errors answer ``{"detail": [{"loc": [...], "msg": "..."}, ...]}``.
    """
    if not isinstance(data, dict):
        return None
    detail = data.get("detail")
    if isinstance(detail, str):
        return detail or None
    if isinstance(detail, list):
        parts = []
        for item in detail:
            if isinstance(item, dict) and item.get("msg"):
                loc = item.get("loc") or []
                field = loc[-1] if loc else None
                parts.append(f"{field}: {item['msg']}" if field else str(item["msg"]))
            elif isinstance(item, str):
                parts.append(item)
        return "; ".join(parts) or None
    if detail is not None:
        return str(detail)
    return None


class BackendRepository:
    def __init__(self, base_url: str, timeout: float = 10.0, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, params: dict | None = None, payload: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, params=params, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            log.warning("backend_request_failed method=%s path=%s error=%s", method, path, e)
            raise NetworkError(f"Could not reach the backend ({e.__class__.__name__}).") from e

        if not (200 <= r.status_code < 300):
            try:
                body = r.json()
            except ValueError:
                log.warning("backend_http_error method=%s path=%s status=%s body=non-json", method, path, r.status_code)
                raise HttpStatusError(r.status_code, None, body_is_json=False)
            detail = extract_detail(body)
            log.warning("backend_http_error method=%s path=%s status=%s detail=%s", method, path, r.status_code, detail)
            raise HttpStatusError(r.status_code, detail)

        try:
            data = r.json()
        except ValueError as e:
            log.warning("backend_malformed_body method=%s path=%s status=%s", method, path, r.status_code)
            raise MalformedResponseError("Backend returned an unreadable response.") from e

        log.info("backend_request method=%s path=%s status=%s", method, path, r.status_code)
        return data

    def _expect_list(self, data: Any, path: str) -> list[dict]:
        if not isinstance(data, list):
            raise MalformedResponseError(f"Expected a list from {path}.")
        return [row for row in data if isinstance(row, dict)]

    def _expect_dict(self, data: Any, path: str) -> dict:
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected an object from {path}.")
        return data

    def _parse(self, parse: Callable[[dict], T], row: dict, path: str) -> T:
        try:
            return parse(row)
        except (TypeError, ValueError, OverflowError) as e:
            log.warning("backend_unreadable_row path=%s error=%s", path, e)
            raise MalformedResponseError(f"Backend sent unreadable data from {path}.") from e

    # ---------- products ----------
    def list_products(self, query: str = "") -> list[Product]:
        params = {"q": query} if query else None
        rows = self._expect_list(self._request("GET", "/api/products", params=params), "/api/products")
        return [self._parse(Product.from_api, row, "/api/products") for row in rows]

    def create_product(self, payload: dict) -> Product:
        data = self._expect_dict(self._request("POST", "/api/products", payload=payload), "/api/products")
        return self._parse(Product.from_api, data, "/api/products")

    # ---------- sales ----------
    def create_sale(self, items: list[dict], paid: float) -> dict:
        data = self._request("POST", "/api/sales", payload={"items": items, "paid": paid})
        return self._expect_dict(data, "/api/sales")

    def list_sales(self) -> list[Sale]:
        rows = self._expect_list(self._request("GET", "/api/sales"), "/api/sales")
        return [self._parse(Sale.from_api, row, "/api/sales") for row in rows]
